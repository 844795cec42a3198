# scope_intake/models/__init__.py
"""Data models shared by the conversation engine, resolver and synthesizer."""

from .facts import Fact, FactCategory, FactStore
from .intelligence import FACT_FIELD_MAP, IntelligenceRecord
from .upstream import (
    QuestionOption,
    QuestionPayload,
    ResponseContent,
    SufficiencyEvaluation,
    UpstreamResponse,
    extract_json,
    parse_upstream_response,
)

__all__ = [
    "Fact",
    "FactCategory",
    "FactStore",
    "IntelligenceRecord",
    "FACT_FIELD_MAP",
    "QuestionOption",
    "QuestionPayload",
    "ResponseContent",
    "SufficiencyEvaluation",
    "UpstreamResponse",
    "extract_json",
    "parse_upstream_response",
]
