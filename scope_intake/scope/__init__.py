# scope_intake/scope/__init__.py
"""Scope document synthesis, validation and rendering."""

from .classification import (
    complexity_score,
    determine_complexity,
    determine_hosting_tier,
    determine_package,
)
from .client_summary import ClientSummary, build_client_summary, render_client_summary_html
from .markdown import ScopeRenderer, render_markdown
from .schemas import SECTION_TITLES, ScopeDocument
from .synthesizer import ScopeSynthesizer, check_completeness, synthesize
from .validator import ValidationIssue, ValidationResult, validate_document

__all__ = [
    "complexity_score",
    "determine_complexity",
    "determine_hosting_tier",
    "determine_package",
    "ClientSummary",
    "build_client_summary",
    "render_client_summary_html",
    "ScopeRenderer",
    "render_markdown",
    "SECTION_TITLES",
    "ScopeDocument",
    "ScopeSynthesizer",
    "check_completeness",
    "synthesize",
    "ValidationIssue",
    "ValidationResult",
    "validate_document",
]
