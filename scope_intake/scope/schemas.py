# scope_intake/scope/schemas.py
"""
Pydantic schemas for the 14-section scope document.

All models are frozen: a generated document is never edited in place,
regeneration replaces it.
"""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

Complexity = Literal["simple", "standard", "complex"]
PackageTier = Literal["starter", "professional", "custom"]


class ScopeModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


# Section 1
class ExecutiveSummary(ScopeModel):
    project_name: str
    website_type: str = Field(description="Display form, e.g. 'E-commerce'")
    primary_goal: str
    target_audience: str
    key_differentiator: str
    summary_text: str


# Section 2
class ProjectClassification(ScopeModel):
    website_type: str
    industry: str
    business_model: str | None = None
    project_complexity: Complexity
    complexity_score: int = Field(ge=0)
    recommended_package: PackageTier
    package_price: int = Field(ge=0)
    complexity_rationale: str


# Section 3
class ClientInformation(ScopeModel):
    full_name: str
    email: str
    phone: str = ""
    company_name: str = ""
    decision_maker_role: str | None = None
    preferred_contact_method: str | None = None


# Section 4
class AudienceProfile(ScopeModel):
    description: str
    technical_level: str
    primary_needs: tuple[str, ...] = ()


class SuccessMetric(ScopeModel):
    metric: str
    target: str | None = None
    measurement: str


class BusinessContext(ScopeModel):
    company_overview: str
    target_audience: AudienceProfile
    primary_goal: str
    success_metrics: tuple[SuccessMetric, ...] = ()
    value_proposition: str
    pain_points: tuple[str, ...] = ()


# Section 5
class ExistingAssets(ScopeModel):
    logo: bool = False
    color_palette: bool = False
    fonts: bool = False
    style_guide: bool = False
    imagery: bool = False


class BrandAssets(ScopeModel):
    existing_assets: ExistingAssets
    brand_style: str
    what_needs_creation: tuple[str, ...] = ()
    inspiration_references: tuple[str, ...] = ()


# Section 6
class ContentStrategy(ScopeModel):
    content_provider: str
    content_readiness: str
    update_frequency: str
    maintenance_plan: str
    content_types: tuple[str, ...] = ()
    copywriting_needed: bool = True
    photography_needed: bool = False


# Section 7
class AuthenticationSpec(ScopeModel):
    required: bool
    method: str | None = None
    user_roles: tuple[str, ...] = ()


class ContentManagementSpec(ScopeModel):
    required: bool
    type: str | None = None
    update_frequency: str | None = None


class ComplianceSpec(ScopeModel):
    required: tuple[str, ...] = ()


class SecuritySpec(ScopeModel):
    ssl_required: bool = True
    additional_requirements: tuple[str, ...] = ()


class PerformanceSpec(ScopeModel):
    expected_traffic: str
    critical_metrics: tuple[str, ...] = ()
    caching_strategy: str


class TechnicalSpecifications(ScopeModel):
    authentication: AuthenticationSpec
    content_management: ContentManagementSpec
    search_required: bool = False
    website_type_features: dict[str, Any] = Field(default_factory=dict)
    integrations: tuple[str, ...] = ()
    compliance: ComplianceSpec = Field(default_factory=ComplianceSpec)
    security: SecuritySpec = Field(default_factory=SecuritySpec)
    performance: PerformanceSpec


# Section 8
class MediaRequirement(ScopeModel):
    required: bool = False
    details: dict[str, Any] = Field(default_factory=dict)


class MediaElements(ScopeModel):
    video: MediaRequirement = Field(default_factory=MediaRequirement)
    galleries: MediaRequirement = Field(default_factory=MediaRequirement)
    animations: MediaRequirement = Field(default_factory=MediaRequirement)
    audio: MediaRequirement = Field(default_factory=MediaRequirement)
    maps: MediaRequirement = Field(default_factory=MediaRequirement)
    interactive_elements: tuple[str, ...] = ()


# Section 9
class DesignDirection(ScopeModel):
    overall_style: str
    color_direction: str
    typography_readability: str
    whitespace: str
    references: tuple[str, ...] = ()
    design_priorities: tuple[str, ...] = ()


# Section 10
class BasePackage(ScopeModel):
    name: str
    price: int = Field(ge=0)
    included_features: tuple[str, ...] = ()


class AddOnFeature(ScopeModel):
    id: str
    name: str
    description: str
    category: str
    price: int = Field(ge=0)
    rationale: str


class BundleSummary(ScopeModel):
    name: str
    features: tuple[str, ...]
    original_price: int
    discounted_price: int
    savings: int


class ConflictSummary(ScopeModel):
    feature_a: str
    feature_b: str
    resolution: str


class DependencySummary(ScopeModel):
    feature: str
    requires: tuple[str, ...]
    reason: str


class FeaturesBreakdown(ScopeModel):
    base_package: BasePackage
    add_on_features: tuple[AddOnFeature, ...] = ()
    feature_bundles: tuple[BundleSummary, ...] = ()
    conflicts: tuple[ConflictSummary, ...] = ()
    dependencies: tuple[DependencySummary, ...] = ()


# Section 11
class TrainingPlan(ScopeModel):
    required: bool
    topics: tuple[str, ...] = ()
    format: str
    duration: str


class MaintenancePlan(ScopeModel):
    provider: str
    includes: tuple[str, ...] = ()
    frequency: str


class HostingPlan(ScopeModel):
    tier: PackageTier
    monthly_price: int = Field(ge=0)
    includes: tuple[str, ...] = ()


class SupportPlan(ScopeModel):
    support_duration: str
    training: TrainingPlan
    maintenance_plan: MaintenancePlan
    future_phases: tuple[str, ...] = ()
    hosting: HostingPlan


# Section 12
class Milestone(ScopeModel):
    name: str
    description: str
    duration: str
    dependencies: tuple[str, ...] = ()
    client_responsibility: str | None = None


class Risk(ScopeModel):
    risk: str
    mitigation: str


class Timeline(ScopeModel):
    desired_launch_date: str | None = None
    desired_timeline: str | None = None
    estimated_duration: str
    milestones: tuple[Milestone, ...] = ()
    critical_path: tuple[str, ...] = ()
    risks: tuple[Risk, ...] = ()


# Section 13
class LineItem(ScopeModel):
    name: str
    price: int


class BundleDiscount(ScopeModel):
    name: str
    discount: int


class HostingCost(ScopeModel):
    tier: str
    monthly_price: int
    annual_price: int


class RoiEstimate(ScopeModel):
    calculable: bool
    revenue_increase: float | None = None
    estimated_roi: str | None = None
    payback_period: str | None = None


class PaymentMilestone(ScopeModel):
    milestone: str
    percentage: float = Field(ge=0.0, le=100.0)
    amount: float = Field(ge=0.0)


class InvestmentSummary(ScopeModel):
    base_package: LineItem
    add_on_features: tuple[LineItem, ...] = ()
    bundle_discounts: tuple[BundleDiscount, ...] = ()
    subtotal: int
    hosting: HostingCost
    total_project_investment: int
    total_first_year_investment: int
    roi: RoiEstimate
    payment_schedule: tuple[PaymentMilestone, ...] = ()


# Section 14
class KeyDecision(ScopeModel):
    decision: str
    rationale: str


class ValidationOutcomes(ScopeModel):
    understanding_validations: tuple[str, ...] = ()
    conflicts_resolved: tuple[str, ...] = ()
    assumptions_clarified: tuple[str, ...] = ()
    key_decisions: tuple[KeyDecision, ...] = ()


SECTION_TITLES: tuple[tuple[str, str], ...] = (
    ("executive_summary", "Executive Summary"),
    ("project_classification", "Project Classification"),
    ("client_information", "Client Information"),
    ("business_context", "Business Context"),
    ("brand_assets", "Brand Assets & Identity"),
    ("content_strategy", "Content Strategy"),
    ("technical_specifications", "Technical Specifications"),
    ("media_elements", "Media & Interactive Elements"),
    ("design_direction", "Design Direction"),
    ("features_breakdown", "Features & Functionality"),
    ("support_plan", "Post-Launch Support Plan"),
    ("timeline", "Project Timeline"),
    ("investment_summary", "Investment Summary"),
    ("validation_outcomes", "Validation Outcomes"),
)


class ScopeDocument(ScopeModel):
    """The complete synthesized scope document."""

    conversation_id: str
    generated_at: datetime
    version: str = "1.0"

    executive_summary: ExecutiveSummary
    project_classification: ProjectClassification
    client_information: ClientInformation
    business_context: BusinessContext
    brand_assets: BrandAssets
    content_strategy: ContentStrategy
    technical_specifications: TechnicalSpecifications
    media_elements: MediaElements
    design_direction: DesignDirection
    features_breakdown: FeaturesBreakdown
    support_plan: SupportPlan
    timeline: Timeline
    investment_summary: InvestmentSummary
    validation_outcomes: ValidationOutcomes

    def sections(self) -> list[tuple[int, str, ScopeModel]]:
        """(number, title, section) for all 14 sections, in order."""
        return [
            (number, title, getattr(self, field_name))
            for number, (field_name, title) in enumerate(SECTION_TITLES, start=1)
        ]
