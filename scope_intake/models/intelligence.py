# scope_intake/models/intelligence.py
"""
Intelligence record: everything known about the client's project.

The record is a flat projection of extracted facts plus fields set
explicitly by foundation-form handlers and feature selection. The
document synthesizer and feature resolver only read it.
"""

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Fact keys that project onto a typed record field.
FACT_FIELD_MAP: dict[str, str] = {
    "contact_name": "user_name",
    "contact_email": "user_email",
    "contact_phone": "user_phone",
    "website_type": "website_type",
    "business_name": "company_name",
    "target_audience": "target_audience",
    "services_offered": "services_offered",
    "project_purpose": "primary_goal",
    "project_timeline": "desired_timeline",
    "budget_indication": "budget_indication",
    "auth_method": "authentication_method",
    "platform": "platform",
    "cms_type": "cms_type",
    "payment_provider": "payment_processor",
    "existing_branding": "existing_branding",
    "design_style": "design_style",
}


def normalize_website_type(value: str | None) -> str | None:
    """Slug form used by the catalogs: "E-Commerce" and "ecommerce" both become "ecommerce"."""
    if value is None:
        return None
    slug = re.sub(r"[^a-z0-9]", "", value.lower())
    return slug or None


# Normalizers applied when a fact is projected onto the record
_FIELD_NORMALIZERS = {"website_type": normalize_website_type}


class IntelligenceRecord(BaseModel):
    """Accumulated project intelligence for one conversation."""

    model_config = ConfigDict(extra="ignore")

    # Foundation
    user_name: str | None = None
    user_email: str | None = None
    user_phone: str | None = None
    company_name: str | None = None
    website_type: str | None = None

    # Business context
    industry: str | None = None
    business_model: str | None = None
    company_description: str | None = None
    services_offered: str | None = None
    target_audience: str | None = None
    primary_goal: str | None = None
    value_proposition: str | None = None
    success_metrics: list[str] = Field(default_factory=list)
    success_metric_targets: dict[str, str] = Field(default_factory=dict)
    pain_points: list[str] = Field(default_factory=list)
    decision_maker_role: str | None = None
    preferred_contact_method: str | None = None

    # Brand assets
    has_logo: bool | None = None
    has_color_palette: bool | None = None
    has_fonts: bool | None = None
    has_style_guide: bool | None = None
    has_imagery: bool | None = None
    existing_branding: str | None = None
    brand_style: str | None = None
    inspiration_references: list[str] = Field(default_factory=list)

    # Content
    content_provider: str | None = None
    content_readiness: str | None = None
    content_update_frequency: str | None = None
    content_types: list[str] = Field(default_factory=list)
    needs_copywriting: bool | None = None
    needs_photography: bool | None = None

    # Technical
    platform: str | None = None
    needs_user_accounts: bool | None = None
    authentication_method: str | None = None
    user_roles: list[str] = Field(default_factory=list)
    needs_cms: bool | None = None
    cms_type: str | None = None
    needs_search: bool | None = None
    needs_payment_processing: bool | None = None
    payment_processor: str | None = None
    needs_inventory_management: bool | None = None
    integrations: list[str] = Field(default_factory=list)
    compliance_requirements: list[str] = Field(default_factory=list)
    security_requirements: list[str] = Field(default_factory=list)
    expected_traffic: str | None = None

    # Media
    needs_video: bool | None = None
    needs_galleries: bool | None = None
    needs_animations: bool | None = None
    needs_audio: bool | None = None
    needs_maps: bool | None = None
    interactive_elements: list[str] = Field(default_factory=list)

    # Design
    design_style: str | None = None
    design_references: list[str] = Field(default_factory=list)

    # Features, timeline, budget, support
    selected_features: list[str] = Field(default_factory=list)
    desired_timeline: str | None = None
    desired_launch_date: str | None = None
    budget_range: str | None = None
    budget_indication: str | None = None
    needs_training: bool | None = None
    future_phases: list[str] = Field(default_factory=list)

    # ROI inputs
    expected_leads_per_month: int | None = None
    avg_lead_value: float | None = None
    lead_conversion_rate: float | None = None
    expected_monthly_revenue: float | None = None

    # Validation loop outcomes
    understanding_validations: list[str] = Field(default_factory=list)
    conflicts_resolved: list[str] = Field(default_factory=list)
    assumptions_clarified: list[str] = Field(default_factory=list)

    # Flat projection of every extracted fact (key -> value)
    facts: dict[str, str] = Field(default_factory=dict)

    @field_validator("website_type", mode="before")
    @classmethod
    def _slug_website_type(cls, value):
        return normalize_website_type(value) if isinstance(value, str) else value

    def apply_fact(self, key: str, value: str) -> None:
        """Project one extracted fact onto the record."""
        self.facts[key] = value
        field_name = FACT_FIELD_MAP.get(key)
        if field_name is None:
            return
        normalize = _FIELD_NORMALIZERS.get(field_name)
        setattr(self, field_name, normalize(value) if normalize else value)

    def has_feature(self, feature_id: str) -> bool:
        return feature_id in self.selected_features
