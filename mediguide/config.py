from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="MEDIGUIDE_LLM__",
        env_file=".env",
        extra="ignore",
    )

    api_key: str = Field(
        "",
        validation_alias=AliasChoices("MEDIGUIDE_LLM__API_KEY", "GEMINI_API_KEY"),
    )
    base_url: str = "https://generativelanguage.googleapis.com/v1beta/openai/"
    model: str = "gemini-2.5-flash"
    analysis_temperature: float = 0.1


class SessionConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="MEDIGUIDE_SESSIONS__",
        env_file=".env",
        extra="ignore",
    )

    max_sessions: int = 500
    idle_timeout_s: int = 3600


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    llm: LLMConfig = LLMConfig()
    sessions: SessionConfig = SessionConfig()


settings = Settings()
