# scope_intake/conversation/progress.py
"""
Progress metrics.

Two views are provided:
- progress_from_question_count: the percentage shown while interviewing
- calculate_section_progress: per-section status of the 14 scope sections
"""

import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from scope_intake.models.intelligence import IntelligenceRecord

SECTION_COUNT = 14
LINEAR_QUESTIONS = 10
TAIL_FILL_RATIO = 0.06
TAIL_CEILING = 99.0
TAIL_MIN_REMAINING = 6.0

SectionStatus = Literal["not_started", "in_progress", "complete"]


def progress_from_question_count(question_count: int, is_complete: bool = False) -> float:
    """
    Completion percentage for the number of answered questions.

    The first 10 questions each fill 1/14 of the bar. After that every
    question fills 6% of the remaining distance, stopping short of 99%
    (or once 6 points or less remain) so the final jump to 100 is left
    for the completion event.
    """
    if is_complete:
        return 100.0

    per_question = 100 / SECTION_COUNT
    if question_count <= LINEAR_QUESTIONS:
        return round(min(100.0, max(0, question_count) * per_question), 2)

    current = LINEAR_QUESTIONS * per_question
    for _ in range(question_count - LINEAR_QUESTIONS):
        remaining = 100 - current
        next_value = current + remaining * TAIL_FILL_RATIO
        if next_value >= TAIL_CEILING or remaining <= TAIL_MIN_REMAINING:
            break
        current = next_value

    return round(min(100.0, current), 2)


@dataclass(frozen=True)
class SectionMetadata:
    key: str
    number: int
    name: str
    min_questions: int
    max_questions: int


SECTION_METADATA: tuple[SectionMetadata, ...] = (
    SectionMetadata("section1_executive_summary", 1, "Executive Summary", 0, 1),
    SectionMetadata("section2_project_classification", 2, "Project Classification", 6, 6),
    SectionMetadata("section3_client_information", 3, "Client Information", 6, 6),
    SectionMetadata("section4_business_context", 4, "Business Context", 3, 6),
    SectionMetadata("section5_brand_assets", 5, "Brand Assets & Identity", 2, 4),
    SectionMetadata("section6_content_strategy", 6, "Content Strategy", 3, 5),
    SectionMetadata("section7_technical_specs", 7, "Technical Specifications", 5, 15),
    SectionMetadata("section8_media_elements", 8, "Media & Interactive", 1, 3),
    SectionMetadata("section9_design_direction", 9, "Design Direction", 2, 4),
    SectionMetadata("section10_features_breakdown", 10, "Features & Functionality", 1, 1),
    SectionMetadata("section11_support_plan", 11, "Post-Launch Support", 2, 3),
    SectionMetadata("section12_timeline", 12, "Project Timeline", 2, 3),
    SectionMetadata("section13_investment_summary", 13, "Investment Summary", 0, 2),
    SectionMetadata("section14_validation_outcomes", 14, "Validation & Confirmation", 0, 3),
)


class ScopeProgress(BaseModel):
    """Per-section status snapshot plus question-count progress."""

    model_config = ConfigDict(extra="ignore")

    sections: dict[str, SectionStatus] = Field(description="Status keyed by section key")
    overall_completeness: int = Field(ge=0, le=100)
    sections_complete: int
    sections_in_progress: int
    sections_remaining: int
    current_section: str | None = None
    estimated_questions_remaining: int = Field(ge=0)
    percent: float = Field(ge=0.0, le=100.0, description="Question-count progress")


def _status(complete: bool, started: bool) -> SectionStatus:
    if complete:
        return "complete"
    if started:
        return "in_progress"
    return "not_started"


def _has_brand_assets(r: IntelligenceRecord) -> bool:
    flags = (r.has_logo, r.has_color_palette, r.has_fonts, r.has_style_guide, r.has_imagery)
    return any(flags) or bool(r.existing_branding)


def _has_type_specific(r: IntelligenceRecord) -> bool:
    hints = {
        "ecommerce": ("ecommerce", "product", "shopping", "payment"),
        "portfolio": ("portfolio", "gallery"),
        "blog": ("blog", "cms"),
        "service": ("booking", "appointment"),
    }
    website_type = (r.website_type or "").lower()
    if website_type not in hints:
        return True
    return any(h in f.lower() for f in r.selected_features for h in hints[website_type])


def _section1(r: IntelligenceRecord) -> SectionStatus:
    basics = bool(r.user_name and r.website_type)
    return _status(basics and bool(r.primary_goal and r.target_audience), basics)


def _section2(r: IntelligenceRecord) -> SectionStatus:
    return _status(bool(r.website_type and r.industry), bool(r.website_type or r.industry))


def _section3(r: IntelligenceRecord) -> SectionStatus:
    complete = all((r.user_name, r.user_email, r.user_phone, r.company_name))
    return _status(complete, bool(r.user_name or r.user_email))


def _section4(r: IntelligenceRecord) -> SectionStatus:
    items = [
        r.target_audience,
        r.primary_goal,
        r.success_metrics,
        r.value_proposition or r.services_offered,
    ]
    done = sum(1 for item in items if item)
    return _status(done >= 3, done >= 2)


def _section5(r: IntelligenceRecord) -> SectionStatus:
    style = bool(r.design_style or r.brand_style)
    assets = _has_brand_assets(r)
    return _status(style and assets, style or assets)


def _section6(r: IntelligenceRecord) -> SectionStatus:
    complete = all((r.content_provider, r.content_readiness, r.content_update_frequency))
    return _status(complete, bool(r.content_provider or r.content_readiness))


def _section7(r: IntelligenceRecord) -> SectionStatus:
    decisions = [
        r.needs_user_accounts is not None,
        r.needs_cms is not None,
        _has_type_specific(r),
    ]
    done = sum(decisions)
    return _status(done >= 2, done >= 1)


def _section8(r: IntelligenceRecord) -> SectionStatus:
    media = (r.needs_video, r.needs_galleries, r.needs_animations, r.needs_audio, r.needs_maps)
    decided = any(flag is not None for flag in media) or bool(r.has_imagery)
    visual_type = (r.website_type or "").lower() in ("portfolio", "blog")
    return _status(decided, visual_type)


def _section9(r: IntelligenceRecord) -> SectionStatus:
    return _status(bool(r.design_style), _has_brand_assets(r))


def _section10(r: IntelligenceRecord) -> SectionStatus:
    return _status(bool(r.selected_features), False)


def _section11(r: IntelligenceRecord) -> SectionStatus:
    training = r.needs_training is not None
    maintenance = bool(r.content_update_frequency)
    return _status(training and maintenance, training or maintenance)


def _section12(r: IntelligenceRecord) -> SectionStatus:
    return _status(bool(r.desired_timeline or r.desired_launch_date), False)


def _section13(r: IntelligenceRecord) -> SectionStatus:
    return _status(bool(r.selected_features), False)


_EVALUATORS: dict[str, Callable[[IntelligenceRecord], SectionStatus]] = {
    "section1_executive_summary": _section1,
    "section2_project_classification": _section2,
    "section3_client_information": _section3,
    "section4_business_context": _section4,
    "section5_brand_assets": _section5,
    "section6_content_strategy": _section6,
    "section7_technical_specs": _section7,
    "section8_media_elements": _section8,
    "section9_design_direction": _section9,
    "section10_features_breakdown": _section10,
    "section11_support_plan": _section11,
    "section12_timeline": _section12,
    "section13_investment_summary": _section13,
}


def _interview_complexity(r: IntelligenceRecord) -> str:
    """Coarse complexity used only to pick min/max question estimates."""
    website_type = (r.website_type or "").lower()
    if website_type in ("ecommerce", "membership"):
        return "complex"
    if website_type in ("portfolio", "blog"):
        return "simple"
    if len(r.selected_features) > 10:
        return "complex"
    return "standard"


def calculate_section_progress(
    record: IntelligenceRecord,
    questions_asked: int = 0,
    is_complete: bool = False,
) -> ScopeProgress:
    """Evaluate all 14 sections against the intelligence gathered so far."""
    sections: dict[str, SectionStatus] = {}
    for meta in SECTION_METADATA:
        evaluator = _EVALUATORS.get(meta.key)
        if evaluator is None:
            # Validation outcomes close with the conversation itself
            sections[meta.key] = "complete" if is_complete else "not_started"
        else:
            sections[meta.key] = evaluator(record)

    statuses = list(sections.values())
    complete = statuses.count("complete")
    in_progress = statuses.count("in_progress")

    current_section = next((k for k, s in sections.items() if s == "in_progress"), None)
    if current_section is None:
        current_section = next((k for k, s in sections.items() if s == "not_started"), None)

    complexity = _interview_complexity(record)
    remaining_questions = 0
    for meta in SECTION_METADATA:
        status = sections[meta.key]
        if status == "complete":
            continue
        if complexity == "simple":
            estimate = meta.min_questions
        elif complexity == "complex":
            estimate = meta.max_questions
        else:
            estimate = math.floor((meta.min_questions + meta.max_questions) / 2 + 0.5)
        remaining_questions += math.ceil(estimate / 2) if status == "in_progress" else estimate

    return ScopeProgress(
        sections=sections,
        overall_completeness=round(complete / SECTION_COUNT * 100),
        sections_complete=complete,
        sections_in_progress=in_progress,
        sections_remaining=statuses.count("not_started"),
        current_section=current_section,
        estimated_questions_remaining=remaining_questions,
        percent=progress_from_question_count(questions_asked, is_complete),
    )
