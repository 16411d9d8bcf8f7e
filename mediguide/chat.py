import logging
from collections.abc import Sequence
from typing import Any

from mediguide import llm
from mediguide.models import AnalysisRecord, ChatMessage
from mediguide.prompts import build_chat_system_prompt

log = logging.getLogger(__name__)

EMPTY_ANSWER_TEXT = "I'm sorry, I couldn't process that question right now."
FAILURE_TEXT = "I'm sorry, I'm having trouble connecting right now. Please try again."

# Transcript roles -> chat-completions roles
_ROLE_MAP = {"user": "user", "model": "assistant"}


def build_messages(
    record: AnalysisRecord,
    history: Sequence[ChatMessage],
    question: str,
) -> list[dict[str, Any]]:
    messages: list[dict[str, Any]] = [
        {"role": "system", "content": build_chat_system_prompt(record)},
    ]
    for msg in history:
        messages.append({"role": _ROLE_MAP[msg.role], "content": msg.text})
    messages.append({"role": "user", "content": question})
    return messages


async def ask_follow_up(
    record: AnalysisRecord,
    history: Sequence[ChatMessage],
    question: str,
) -> str:
    """Answer a question about the analyzed report. Never raises."""
    try:
        answer = await llm.complete(build_messages(record, history, question))
    except Exception:
        log.exception("Chat failed")
        return FAILURE_TEXT
    return answer or EMPTY_ANSWER_TEXT
