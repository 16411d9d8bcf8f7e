"""Report analysis: one multimodal, schema-constrained model call per upload."""

import json
import logging
import re
from typing import Any

from pydantic import ValidationError

from mediguide import llm
from mediguide.config import settings
from mediguide.models import AnalysisRecord
from mediguide.prompts import ANALYSIS_INSTRUCTIONS, RESPONSE_FORMAT

log = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "image/jpeg"


class AnalysisError(Exception):
    """The report could not be analyzed (request, parse or schema failure)."""


def _parse_llm_json(text: str) -> dict[str, Any]:
    """Leniently parse a JSON object from LLM output."""
    text = text.strip()
    # Try raw JSON
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass
    # Try extracting from code fences
    m = re.search(r"```(?:json)?\s*\n?(.*?)\n?```", text, re.DOTALL)
    if m:
        try:
            return json.loads(m.group(1).strip())
        except json.JSONDecodeError:
            pass
    # Try finding first { ... }
    m = re.search(r"\{.*\}", text, re.DOTALL)
    if m:
        try:
            return json.loads(m.group())
        except json.JSONDecodeError:
            pass
    raise ValueError(f"Could not parse JSON from LLM output: {text[:200]}")


def resolve_mime_type(content_type: str | None) -> str:
    """Use the upload's declared type when it is an image type."""
    ct = (content_type or "").split(";")[0].strip().lower()
    return ct if ct.startswith("image/") else DEFAULT_MIME_TYPE


def decode_analysis(text: str) -> AnalysisRecord:
    """Turn the raw model reply into an AnalysisRecord or raise AnalysisError."""
    if not text or not text.strip():
        raise AnalysisError("No response text generated")
    try:
        data = _parse_llm_json(text)
    except ValueError as e:
        raise AnalysisError(str(e)) from e
    if not isinstance(data, dict):
        raise AnalysisError(f"Expected a JSON object, got {type(data).__name__}")
    try:
        return AnalysisRecord.model_validate(data)
    except ValidationError as e:
        raise AnalysisError(f"Response does not match the analysis schema: {e}") from e


def build_messages(base64_image: str, mime_type: str) -> list[dict[str, Any]]:
    return [
        {
            "role": "user",
            "content": [
                {
                    "type": "image_url",
                    "image_url": {"url": f"data:{mime_type};base64,{base64_image}"},
                },
                {"type": "text", "text": ANALYSIS_INSTRUCTIONS},
            ],
        }
    ]


async def analyze_report(base64_image: str, mime_type: str = DEFAULT_MIME_TYPE) -> AnalysisRecord:
    """Send a base64 report image to the model and decode the structured reply.

    Raises AnalysisError on any request, parse or schema failure. No retry.
    """
    try:
        raw = await llm.complete(
            build_messages(base64_image, mime_type),
            temperature=settings.llm.analysis_temperature,
            response_format=RESPONSE_FORMAT,
        )
    except Exception as e:
        log.exception("Analysis request failed")
        raise AnalysisError(f"LLM error: {e}") from e

    try:
        record = decode_analysis(raw)
    except AnalysisError:
        log.exception("Analysis response could not be decoded")
        raise

    log.info(
        "Analyzed report: %s (%d parameters, %d red flags)",
        record.report_type,
        len(record.parameters),
        len(record.red_flags),
    )
    return record
