# scope_intake/models/upstream.py
"""
Schema and validation for the question generator's structured reply.

The reply must carry an `action` and a `sufficiency_evaluation` object.
Anything else is rejected with InvalidUpstreamResponseError; a reply
is never partially accepted.
"""

import json
import logging
import re
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from scope_intake.errors import InvalidUpstreamResponseError

logger = logging.getLogger(__name__)

UpstreamAction = Literal["ask_question", "validate_understanding", "recommend_features", "complete"]

REQUIRED_KEYS = ("action", "sufficiency_evaluation")


def _to_str_list(value: Any) -> Any:
    if isinstance(value, str):
        return [value] if value.strip() else []
    return value


class SufficiencyEvaluation(BaseModel):
    """The generator's judgement of whether the current scope section is covered."""

    model_config = ConfigDict(extra="ignore")

    scope_section: str | None = Field(default=None, description="Section being evaluated")
    section_requirements: list[str] = Field(default_factory=list)
    current_information: list[str] = Field(default_factory=list)
    required_for_scope: list[str] = Field(default_factory=list)
    is_sufficient: bool = Field(default=False)
    reason: str = Field(default="")
    implementation_impact: str | None = None
    questions_in_section: int | None = Field(default=None, ge=0)
    within_depth_limit: bool | None = None
    decision: str | None = None
    next_section: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _normalize_lists(cls, data: Any) -> Any:
        """Accept single strings where lists are expected."""
        if not isinstance(data, dict):
            return data
        for name in ("section_requirements", "current_information", "required_for_scope"):
            if name in data:
                data[name] = _to_str_list(data[name])
        return data


class QuestionOption(BaseModel):
    model_config = ConfigDict(extra="ignore")

    value: str
    label: str
    description: str | None = None


class QuestionPayload(BaseModel):
    """The next question to show the client."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(description="Question id, used as source_question_id for facts")
    text: str = Field(description="Question text shown to the client")
    input_type: str = Field(default="text", description="text, select, multiselect, ...")
    options: list[QuestionOption] = Field(default_factory=list)
    category: str = Field(default="general", description="Extractor dispatch category")
    scope_section: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _normalize_field_names(cls, data: Any) -> Any:
        """Handle camelCase and alternate names from the generator."""
        if not isinstance(data, dict):
            return data
        if "inputType" in data and "input_type" not in data:
            data["input_type"] = data.pop("inputType")
        if "scopeSection" in data and "scope_section" not in data:
            data["scope_section"] = data.pop("scopeSection")
        if "question" in data and "text" not in data:
            data["text"] = data.pop("question")
        return data


class ResponseContent(BaseModel):
    model_config = ConfigDict(extra="ignore")

    question: QuestionPayload | None = None
    summary: str | None = None
    features: list[str] = Field(default_factory=list)
    completion: dict[str, Any] | None = None


class UpstreamResponse(BaseModel):
    """Validated reply from the question generator."""

    model_config = ConfigDict(extra="ignore")

    action: UpstreamAction
    reasoning: str = ""
    sufficiency_evaluation: SufficiencyEvaluation
    content: ResponseContent = Field(default_factory=ResponseContent)
    intelligence: dict[str, Any] = Field(default_factory=dict)
    progress: dict[str, Any] = Field(default_factory=dict)


def extract_json(raw_output: str) -> dict[str, Any]:
    """
    Extract a JSON object from generator output.

    Tries multiple extraction strategies:
    1. Direct JSON parse (if output is pure JSON)
    2. Code fence extraction (```json ... ```)
    3. Bare object extraction (first { to last })

    Truncated output is not repaired.

    Raises:
        ValueError: If no JSON object found
    """
    candidates: list[str] = [raw_output.strip()]

    fence_match = re.search(
        r"```(?:json)?\s*\n(.*?)\n```", raw_output, re.DOTALL | re.IGNORECASE
    )
    if fence_match:
        candidates.append(fence_match.group(1).strip())

    object_match = re.search(r"\{.*\}", raw_output, re.DOTALL)
    if object_match:
        candidates.append(object_match.group(0))

    for candidate in candidates:
        try:
            parsed = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(parsed, dict):
            return parsed

    preview = raw_output[:200].replace("\n", "\\n")
    raise ValueError(
        f"Could not extract a JSON object from output ({len(raw_output)} chars). "
        f"Preview: {preview}"
    )


def parse_upstream_response(raw_output: str) -> UpstreamResponse:
    """
    Parse and validate a question generator reply.

    Raises:
        InvalidUpstreamResponseError: On non-JSON output, missing top-level
            keys, or fields that fail schema validation
    """
    try:
        data = extract_json(raw_output)
    except ValueError as e:
        logger.warning(f"Rejected upstream response: {e}")
        raise InvalidUpstreamResponseError(str(e), raw_output=raw_output) from e

    missing = [key for key in REQUIRED_KEYS if key not in data]
    if missing:
        logger.warning(f"Rejected upstream response: missing {missing}")
        raise InvalidUpstreamResponseError(
            f"Invalid response structure: missing {', '.join(missing)}",
            raw_output=raw_output,
        )
    if not isinstance(data["sufficiency_evaluation"], dict):
        raise InvalidUpstreamResponseError(
            "Invalid response structure: sufficiency_evaluation must be an object",
            raw_output=raw_output,
        )

    try:
        return UpstreamResponse.model_validate(data)
    except ValidationError as e:
        logger.warning(f"Rejected upstream response: {e.error_count()} validation errors")
        raise InvalidUpstreamResponseError(
            f"Invalid response structure: {e}", raw_output=raw_output
        ) from e
