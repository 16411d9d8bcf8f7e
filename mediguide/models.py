import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ParameterStatus(str, Enum):
    NORMAL = "Normal"
    ABNORMAL = "Abnormal"
    CRITICAL = "Critical"
    UNKNOWN = "Unknown"


class View(str, Enum):
    HOME = "HOME"
    UPLOAD = "UPLOAD"
    ANALYZING = "ANALYZING"
    RESULTS = "RESULTS"


# ── Analysis record (decoded model output) ──


class Parameter(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    value: str
    unit: str = ""
    status: ParameterStatus
    reference_range: str = Field("", alias="referenceRange")
    explanation: str
    implication: str


class AnalysisRecord(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    report_type: str = Field(alias="reportType")
    summary: str
    parameters: list[Parameter]
    red_flags: list[str] = Field(alias="redFlags")
    lifestyle_recommendations: list[str] = Field(alias="lifestyleRecommendations")
    disclaimer: str


class QuickStats(BaseModel):
    total: int = 0
    normal: int = 0
    abnormal: int = 0
    critical: int = 0


def quick_stats(parameters: list[Parameter]) -> QuickStats:
    """Count parameters per status for the overview tiles."""
    counts = {status: 0 for status in ParameterStatus}
    for p in parameters:
        counts[p.status] += 1
    return QuickStats(
        total=len(parameters),
        normal=counts[ParameterStatus.NORMAL],
        abnormal=counts[ParameterStatus.ABNORMAL],
        critical=counts[ParameterStatus.CRITICAL],
    )


# ── Chat ──


ChatRole = Literal["user", "model"]


class ChatMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    role: ChatRole
    text: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ChatRequest(BaseModel):
    message: str


# ── API payloads ──


class SessionState(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    view: View
    error: str | None = None
    analysis: AnalysisRecord | None = None
    quick_stats: QuickStats | None = Field(None, alias="quickStats")
    messages: list[ChatMessage] = []
    chat_pending: bool = Field(False, alias="chatPending")


class SetModelRequest(BaseModel):
    model: str
