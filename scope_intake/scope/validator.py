# scope_intake/scope/validator.py
"""
Cross-field validation of a synthesized ScopeDocument.

Issues are returned as values, never raised. Only critical issues lower
the completeness score; error and warning issues are informational for
scoring but errors still make the document invalid.
"""

import re
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .schemas import ScopeDocument

Severity = Literal["critical", "error", "warning"]

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

# Number of critical fields the completeness score is measured against
CRITICAL_FIELD_COUNT = 45
PAYMENT_TOLERANCE = 0.1


class ValidationIssue(BaseModel):
    model_config = ConfigDict(frozen=True)

    section: str
    field: str
    message: str
    severity: Severity
    recommendation: str | None = None


class ValidationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_valid: bool
    errors: tuple[ValidationIssue, ...] = ()
    warnings: tuple[ValidationIssue, ...] = ()
    completeness: int = Field(ge=0, le=100)

    @property
    def critical_count(self) -> int:
        return sum(1 for issue in self.errors if issue.severity == "critical")


def validate_document(doc: ScopeDocument) -> ValidationResult:
    """Check every section rule and score completeness."""
    issues: list[ValidationIssue] = []

    def flag(section: int, field: str, message: str, severity: Severity,
             recommendation: str | None = None) -> None:
        issues.append(ValidationIssue(
            section=f"Section {section}",
            field=field,
            message=message,
            severity=severity,
            recommendation=recommendation,
        ))

    summary = doc.executive_summary
    if len(summary.project_name) < 2:
        flag(1, "project_name", "Project name is required", "critical")
    if len(summary.summary_text) < 50:
        flag(1, "summary_text", "Executive summary must be at least 2-3 sentences", "error")
    if len(summary.summary_text) > 500:
        flag(1, "summary_text", "Executive summary is quite long", "warning",
             "Consider condensing to 2-3 concise sentences")

    classification = doc.project_classification
    if not classification.website_type:
        flag(2, "website_type", "Website type is required", "critical")
    if not classification.recommended_package:
        flag(2, "recommended_package", "Package recommendation is required", "critical")
    if not classification.complexity_rationale:
        flag(2, "complexity_rationale", "No complexity rationale provided", "warning",
             "Add explanation for complexity classification")

    client = doc.client_information
    if not client.full_name:
        flag(3, "full_name", "Client name is required", "critical")
    if not EMAIL_PATTERN.match(client.email):
        flag(3, "email", "Valid email address is required", "critical")
    if not client.phone:
        flag(3, "phone", "No phone number provided", "warning",
             "Phone contact recommended for urgent communication")

    business = doc.business_context
    if len(business.company_overview) < 20:
        flag(4, "company_overview", "Company overview is too brief", "error")
    if not business.primary_goal:
        flag(4, "primary_goal", "Primary goal is required", "error")
    if not business.success_metrics:
        flag(4, "success_metrics", "No success metrics defined", "warning",
             "Define measurable success criteria")

    technical = doc.technical_specifications
    if technical.authentication.required and not technical.authentication.method:
        flag(7, "authentication.method", "Authentication method required when auth is needed", "error")
    if technical.content_management.required and not technical.content_management.type:
        flag(7, "content_management.type", "CMS type required when CMS is needed", "error")

    if doc.features_breakdown.base_package.price <= 0:
        flag(10, "base_package", "Base package and price required", "critical")

    investment = doc.investment_summary
    if investment.total_project_investment <= 0:
        flag(13, "total_project_investment", "Total investment required", "critical")
    if not investment.payment_schedule:
        flag(13, "payment_schedule", "Payment schedule required", "error")
    else:
        total_percentage = sum(p.percentage for p in investment.payment_schedule)
        if abs(total_percentage - 100) > PAYMENT_TOLERANCE:
            flag(13, "payment_schedule",
                 f"Payment schedule must total 100% (currently {total_percentage:g}%)", "error")

    errors = tuple(issue for issue in issues if issue.severity != "warning")
    warnings = tuple(issue for issue in issues if issue.severity == "warning")
    criticals = sum(1 for issue in errors if issue.severity == "critical")
    completeness = round((CRITICAL_FIELD_COUNT - criticals) / CRITICAL_FIELD_COUNT * 100)

    return ValidationResult(
        is_valid=not errors,
        errors=errors,
        warnings=warnings,
        completeness=completeness,
    )
