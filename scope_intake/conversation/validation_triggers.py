# scope_intake/conversation/validation_triggers.py
"""
Moments in the interview where the client should confirm our understanding.

Checks run in a fixed order and the first applicable prompt wins:
business context, technical specs, feature conflicts, then assumptions.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from scope_intake.features.resolver import FeatureResolver
from scope_intake.models.intelligence import IntelligenceRecord


class ValidationDetail(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    value: str
    editable: bool = True


class ValidationOption(BaseModel):
    model_config = ConfigDict(frozen=True)

    value: str
    label: str
    description: str = ""


class ValidationPrompt(BaseModel):
    """A confirmation step to show the client."""

    model_config = ConfigDict(frozen=True)

    type: Literal["understanding", "conflict", "assumption"]
    category: str
    summary: str
    details: tuple[ValidationDetail, ...] = ()
    options: tuple[ValidationOption, ...] = ()
    allow_edit: bool = Field(default=False, description="Whether details may be corrected inline")


def _business_context(record: IntelligenceRecord, last_category: str) -> ValidationPrompt | None:
    if last_category != "business_context":
        return None
    if not (record.target_audience and record.primary_goal and record.success_metrics):
        return None
    metrics = ", ".join(record.success_metrics)
    return ValidationPrompt(
        type="understanding",
        category="business_context",
        summary=(
            f"You're building a {record.website_type} website for {record.target_audience} "
            f"with the primary goal of {record.primary_goal}. Success will be measured by {metrics}."
        ),
        details=(
            ValidationDetail(label="Target Audience", value=record.target_audience),
            ValidationDetail(label="Primary Goal", value=record.primary_goal),
            ValidationDetail(label="Success Metrics", value=metrics),
        ),
        allow_edit=True,
    )


def _technical_specs(record: IntelligenceRecord, last_category: str) -> ValidationPrompt | None:
    if last_category != "technical_requirements":
        return None
    if record.needs_user_accounts is None or record.needs_cms is None:
        return None

    if record.needs_user_accounts:
        auth_text = f"with user authentication ({record.authentication_method or 'standard'})"
    else:
        auth_text = "without user accounts"
    if record.needs_cms:
        cms_text = (
            f"and a content management system for "
            f"{record.content_update_frequency or 'regular'} updates"
        )
    else:
        cms_text = "and no CMS (static content)"

    details = [
        ValidationDetail(
            label="User Accounts", value="Yes" if record.needs_user_accounts else "No", editable=False
        )
    ]
    if record.needs_user_accounts:
        details.append(ValidationDetail(
            label="Authentication Method", value=record.authentication_method or "Standard"
        ))
    details.append(ValidationDetail(
        label="Content Management", value="Yes" if record.needs_cms else "No", editable=False
    ))

    return ValidationPrompt(
        type="understanding",
        category="technical_specs",
        summary=f"Your website will be built {auth_text} {cms_text}.",
        details=tuple(details),
        allow_edit=True,
    )


def _feature_conflict(record: IntelligenceRecord, resolver: FeatureResolver) -> ValidationPrompt | None:
    conflicts = resolver.detect_conflicts(record.selected_features)
    if not conflicts:
        return None
    conflict = conflicts[0]
    a, b = conflict.feature_a, conflict.feature_b
    return ValidationPrompt(
        type="conflict",
        category="features",
        summary=f'You\'ve selected both "{a}" and "{b}", but these features conflict: {conflict.reason}',
        options=(
            ValidationOption(value=a, label=f"Keep {a}", description=f"Remove {b}"),
            ValidationOption(value=b, label=f"Keep {b}", description=f"Remove {a}"),
        ),
    )


def _assumption(record: IntelligenceRecord) -> ValidationPrompt | None:
    if (
        record.website_type == "ecommerce"
        and record.has_feature("shopping_cart")
        and record.needs_inventory_management is None
    ):
        return ValidationPrompt(
            type="assumption",
            category="technical_specs",
            summary=(
                "Since you're building an e-commerce site, I'm assuming you'll need "
                "inventory management to track stock levels."
            ),
        )
    return None


def should_trigger_validation(
    record: IntelligenceRecord,
    last_category: str,
    resolver: FeatureResolver,
) -> ValidationPrompt | None:
    """Return the first applicable validation prompt, or None."""
    return (
        _business_context(record, last_category)
        or _technical_specs(record, last_category)
        or _feature_conflict(record, resolver)
        or _assumption(record)
    )
