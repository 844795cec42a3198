# scope_intake/scope/synthesizer.py
"""
Deterministic scope document synthesis.

Turns an IntelligenceRecord into the 14-section ScopeDocument. Narrative
fields are template interpolations with fixed filler phrases; no model
is called. Apart from generated_at (injectable via `now`) the output is a
pure function of (record, conversation_id).
"""

import logging
import math
from datetime import datetime, timezone

from scope_intake.config.schema import PricingConfig
from scope_intake.errors import ScopeCompletenessError
from scope_intake.features.catalog import Feature, FeatureCatalog, build_default_catalog
from scope_intake.features.resolver import FeatureResolver, PricingResult
from scope_intake.models.intelligence import IntelligenceRecord

from .classification import (
    complexity_score,
    determine_complexity,
    determine_hosting_tier,
    determine_package,
    effective_record,
    hosting_price,
    package_price,
)
from .schemas import (
    AddOnFeature,
    AudienceProfile,
    AuthenticationSpec,
    BasePackage,
    BrandAssets,
    BundleDiscount,
    BundleSummary,
    BusinessContext,
    ClientInformation,
    Complexity,
    ComplianceSpec,
    ConflictSummary,
    ContentManagementSpec,
    ContentStrategy,
    DependencySummary,
    DesignDirection,
    ExecutiveSummary,
    ExistingAssets,
    FeaturesBreakdown,
    HostingCost,
    HostingPlan,
    InvestmentSummary,
    KeyDecision,
    LineItem,
    MaintenancePlan,
    MediaElements,
    MediaRequirement,
    Milestone,
    PackageTier,
    PaymentMilestone,
    PerformanceSpec,
    ProjectClassification,
    Risk,
    RoiEstimate,
    ScopeDocument,
    SecuritySpec,
    SuccessMetric,
    SupportPlan,
    TechnicalSpecifications,
    Timeline,
    TrainingPlan,
    ValidationOutcomes,
)

logger = logging.getLogger(__name__)

REQUIRED_FIELDS: tuple[tuple[str, str], ...] = (
    ("user_name", "Full name"),
    ("user_email", "Email"),
    ("website_type", "Website type"),
)

WEBSITE_TYPE_DISPLAY: dict[str, str] = {
    "ecommerce": "E-commerce",
    "portfolio": "Portfolio",
    "blog": "Blog",
    "service": "Service-based",
    "corporate": "Corporate",
    "landing": "Landing Page",
    "saas": "SaaS Platform",
    "marketplace": "Marketplace",
    "business": "Business",
    "personal": "Personal",
    "project": "Project",
    "nonprofit": "Nonprofit",
}

METRIC_MEASUREMENTS: dict[str, str] = {
    "lead_generation": "Contact form submissions and inquiry volume",
    "sales": "Transaction volume and revenue",
    "engagement": "Time on site, pages per session, return visits",
    "brand_awareness": "Traffic volume, social shares, backlinks",
    "customer_satisfaction": "NPS score, support tickets, reviews",
}
DEFAULT_MEASUREMENT = "To be tracked via analytics platform"

BASE_PACKAGE_FEATURES: dict[str, tuple[str, ...]] = {
    "starter": (
        "Up to 5 pages",
        "Mobile-responsive design",
        "Basic SEO optimization",
        "Contact form",
        "Analytics setup",
        "30 days post-launch support",
    ),
    "professional": (
        "Up to 10 pages",
        "Mobile-responsive design",
        "Advanced SEO optimization",
        "Custom forms",
        "Analytics & conversion tracking",
        "CMS integration",
        "Social media integration",
        "60 days post-launch support",
    ),
    "custom": (
        "Unlimited pages",
        "Mobile-responsive design",
        "Enterprise SEO",
        "Custom functionality",
        "Advanced analytics",
        "Full CMS",
        "API integrations",
        "90 days post-launch support",
        "Priority support",
    ),
}

SUPPORT_DURATIONS: dict[str, str] = {
    "starter": "30 days post-launch",
    "professional": "60 days post-launch",
    "custom": "90 days post-launch",
}

BASE_DURATION_WEEKS: dict[str, int] = {"simple": 4, "standard": 6, "complex": 10}

# (milestone, percentage of the project investment)
PAYMENT_SCHEDULE: tuple[tuple[str, int], ...] = (
    ("Contract Signing", 50),
    ("Design Approval", 25),
    ("Launch", 25),
)

# ROI assumptions when the record does not state its own
DEFAULT_LEADS_PER_MONTH = 20
DEFAULT_LEAD_VALUE = 500.0
DEFAULT_CONVERSION_RATE = 0.2
DEFAULT_MONTHLY_REVENUE = 10000.0


def _capitalize(value: str) -> str:
    return value[:1].upper() + value[1:]


def _round_half_away(value: float) -> int:
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)


def check_completeness(record: IntelligenceRecord) -> None:
    """Raise ScopeCompletenessError naming every missing required field."""
    missing = [label for field_name, label in REQUIRED_FIELDS if not getattr(record, field_name)]
    if missing:
        raise ScopeCompletenessError(missing)


class ScopeSynthesizer:
    """
    Builds ScopeDocuments from intelligence records.

    The feature catalog and pricing are injected; the synthesizer keeps no
    per-call state, so one instance can serve many sessions.
    """

    def __init__(
        self,
        catalog: FeatureCatalog | None = None,
        pricing: PricingConfig | None = None,
    ) -> None:
        self.catalog = catalog or build_default_catalog()
        self.resolver = FeatureResolver(self.catalog)
        self.pricing = pricing or PricingConfig()

    def synthesize(
        self,
        record: IntelligenceRecord,
        conversation_id: str,
        now: datetime | None = None,
    ) -> ScopeDocument:
        """
        Synthesize the full document.

        Raises:
            ScopeCompletenessError: If name, email or website type is missing.
        """
        check_completeness(record)
        record = effective_record(record)

        complexity = determine_complexity(record)
        package = determine_package(record, complexity)
        hosting_tier = determine_hosting_tier(record, complexity)
        pricing = self.resolver.calculate_pricing(record.selected_features, package)

        document = ScopeDocument(
            conversation_id=conversation_id,
            generated_at=now or datetime.now(timezone.utc),
            executive_summary=self._executive_summary(record),
            project_classification=self._classification(record, complexity, package),
            client_information=self._client_information(record),
            business_context=self._business_context(record),
            brand_assets=self._brand_assets(record),
            content_strategy=self._content_strategy(record),
            technical_specifications=self._technical_specifications(record),
            media_elements=self._media_elements(record),
            design_direction=self._design_direction(record),
            features_breakdown=self._features_breakdown(record, package, pricing),
            support_plan=self._support_plan(record, package, hosting_tier),
            timeline=self._timeline(record, complexity),
            investment_summary=self._investment_summary(record, package, hosting_tier, pricing),
            validation_outcomes=self._validation_outcomes(record, package),
        )
        logger.info(
            f"Synthesized scope document for {conversation_id}: "
            f"{complexity}/{package}, total ${document.investment_summary.total_project_investment}"
        )
        return document

    # Section 1

    def _executive_summary(self, record: IntelligenceRecord) -> ExecutiveSummary:
        project_name = record.company_name or record.user_name or "Unnamed Project"
        website_type = WEBSITE_TYPE_DISPLAY.get(record.website_type, record.website_type)
        primary_goal = record.primary_goal or "establish online presence"
        target_audience = record.target_audience or "general audience"
        differentiator = self._key_differentiator(record)
        summary = (
            f"{project_name} is a {website_type} website designed to {primary_goal} "
            f"for {target_audience}. {differentiator}. The project emphasizes professional "
            f"execution, conversion optimization, and seamless user experience."
        )
        return ExecutiveSummary(
            project_name=project_name,
            website_type=website_type,
            primary_goal=primary_goal,
            target_audience=target_audience,
            key_differentiator=differentiator,
            summary_text=summary,
        )

    def _key_differentiator(self, record: IntelligenceRecord) -> str:
        if record.value_proposition:
            return record.value_proposition
        names = [f.name for f in self._features(record.selected_features[:2])]
        if names:
            return f"Key differentiators include {' and '.join(names)}"
        return "The project focuses on delivering exceptional value through thoughtful design and implementation"

    # Section 2

    def _classification(
        self, record: IntelligenceRecord, complexity: Complexity, package: PackageTier
    ) -> ProjectClassification:
        return ProjectClassification(
            website_type=record.website_type or "general",
            industry=record.industry or "General",
            business_model=record.business_model,
            project_complexity=complexity,
            complexity_score=complexity_score(record),
            recommended_package=package,
            package_price=package_price(package, self.pricing),
            complexity_rationale=self._complexity_rationale(record, complexity),
        )

    @staticmethod
    def _complexity_rationale(record: IntelligenceRecord, complexity: Complexity) -> str:
        factors: list[str] = []
        if record.website_type in ("ecommerce", "marketplace"):
            factors.append("e-commerce functionality requires robust product management")
        if record.needs_user_accounts:
            factors.append("user authentication system needed")
        if record.needs_payment_processing:
            factors.append("payment processing integration required")
        feature_count = len(record.selected_features)
        if feature_count > 5:
            factors.append(f"extensive feature set ({feature_count} custom features)")
        if record.compliance_requirements:
            factors.append(f"compliance requirements ({', '.join(record.compliance_requirements)})")
        return f"Classified as {complexity} based on: {'; '.join(factors)}."

    # Section 3

    @staticmethod
    def _client_information(record: IntelligenceRecord) -> ClientInformation:
        return ClientInformation(
            full_name=record.user_name or "Name not provided",
            email=record.user_email or "",
            phone=record.user_phone or "",
            company_name=record.company_name or record.user_name or "",
            decision_maker_role=record.decision_maker_role,
            preferred_contact_method=record.preferred_contact_method,
        )

    # Section 4

    def _business_context(self, record: IntelligenceRecord) -> BusinessContext:
        company = record.company_name or "The organization"
        industry = record.industry or "their industry"
        description = (
            record.company_description
            or f"operates in {industry}, focusing on delivering value to their target market"
        )
        value_proposition = record.value_proposition or (
            f"Professional {record.website_type or 'website'} designed to "
            f"{record.primary_goal or 'serve customers'} with emphasis on user experience "
            f"and conversion optimization."
        )
        return BusinessContext(
            company_overview=f"{company} {description}.",
            target_audience=AudienceProfile(
                description=record.target_audience or "General audience",
                technical_level="Mixed technical proficiency",
            ),
            primary_goal=record.primary_goal or "Establish online presence",
            success_metrics=self._success_metrics(record),
            value_proposition=value_proposition,
            pain_points=tuple(record.pain_points),
        )

    @staticmethod
    def _success_metrics(record: IntelligenceRecord) -> tuple[SuccessMetric, ...]:
        if not record.success_metrics:
            return (
                SuccessMetric(metric="User engagement", measurement="Time on site and pages per session"),
                SuccessMetric(metric="Conversion rate", measurement="Goal completions and form submissions"),
            )
        return tuple(
            SuccessMetric(
                metric=metric,
                target=record.success_metric_targets.get(metric),
                measurement=METRIC_MEASUREMENTS.get(
                    "_".join(metric.lower().split()), DEFAULT_MEASUREMENT
                ),
            )
            for metric in record.success_metrics
        )

    # Section 5

    @staticmethod
    def _brand_assets(record: IntelligenceRecord) -> BrandAssets:
        assets = ExistingAssets(
            logo=bool(record.has_logo),
            color_palette=bool(record.has_color_palette),
            fonts=bool(record.has_fonts),
            style_guide=bool(record.has_style_guide),
            imagery=bool(record.has_imagery),
        )
        needs = [
            label
            for present, label in (
                (assets.logo, "Logo design"),
                (assets.color_palette, "Color palette"),
                (assets.fonts, "Typography system"),
                (assets.style_guide, "Brand style guide"),
                (assets.imagery, "Photography/imagery"),
            )
            if not present
        ]
        return BrandAssets(
            existing_assets=assets,
            brand_style=record.brand_style or "Modern and professional",
            what_needs_creation=tuple(needs),
            inspiration_references=tuple(record.inspiration_references),
        )

    # Section 6

    def _content_strategy(self, record: IntelligenceRecord) -> ContentStrategy:
        provider = record.content_provider or "mixed"
        frequency = record.content_update_frequency or "monthly"
        agency = self.pricing.agency_name
        if provider == "client":
            plan = f"Client will maintain content with {frequency} updates using provided CMS training."
        elif provider in ("agency", agency.lower()):
            plan = f"{agency} will manage content updates on a {frequency} basis as part of maintenance agreement."
        else:
            plan = (
                f"Mixed maintenance model: client manages routine updates {frequency}, "
                f"{agency} handles technical changes."
            )
        return ContentStrategy(
            content_provider=provider,
            content_readiness=record.content_readiness or "needs_creation",
            update_frequency=frequency,
            maintenance_plan=plan,
            content_types=tuple(record.content_types or ("text", "images")),
            copywriting_needed=True if record.needs_copywriting is None else record.needs_copywriting,
            photography_needed=bool(record.needs_photography),
        )

    # Section 7

    def _technical_specifications(self, record: IntelligenceRecord) -> TechnicalSpecifications:
        if record.needs_user_accounts:
            auth = AuthenticationSpec(
                required=True,
                method=record.authentication_method or "email_password",
                user_roles=tuple(record.user_roles),
            )
        else:
            auth = AuthenticationSpec(required=False)

        traffic = (record.expected_traffic or "standard").lower()
        if "high" in traffic or "enterprise" in traffic:
            caching = "CDN + edge caching with invalidation strategy"
        elif record.needs_cms:
            caching = "Page-level caching with smart invalidation"
        else:
            caching = "Static generation with CDN delivery"

        return TechnicalSpecifications(
            authentication=auth,
            content_management=ContentManagementSpec(
                required=bool(record.needs_cms),
                type=record.cms_type,
                update_frequency=record.content_update_frequency,
            ),
            search_required=bool(record.needs_search),
            website_type_features=self._type_specific_features(record),
            integrations=tuple(record.integrations),
            compliance=ComplianceSpec(required=tuple(record.compliance_requirements)),
            security=SecuritySpec(
                ssl_required=True,
                additional_requirements=tuple(record.security_requirements),
            ),
            performance=PerformanceSpec(
                expected_traffic=record.expected_traffic or "Standard (< 10k visits/month)",
                critical_metrics=("Load time < 2s", "Mobile-responsive"),
                caching_strategy=caching,
            ),
        )

    @staticmethod
    def _type_specific_features(record: IntelligenceRecord) -> dict:
        website_type = record.website_type
        if website_type == "ecommerce":
            return {
                "product_catalog": {
                    "size": "To be determined",
                    "variants": False,
                    "inventory": bool(record.needs_inventory_management),
                },
                "checkout": {"guest_checkout": True, "saved_carts": False},
                "payments": {
                    "processor": record.payment_processor or "Stripe",
                    "methods": ["card", "digital_wallet"],
                },
            }
        if website_type == "portfolio":
            return {"project_organization": "grid", "case_study_format": "detailed", "filtering": True}
        if website_type == "blog":
            return {"category_system": True, "comments": False, "subscriptions": False, "rss": True}
        if website_type == "service":
            return {
                "booking_system": record.has_feature("booking_system"),
                "quote_requests": True,
                "service_areas": [],
            }
        return {}

    # Section 8

    @staticmethod
    def _media_elements(record: IntelligenceRecord) -> MediaElements:
        def requirement(needed: bool | None, **details) -> MediaRequirement:
            if not needed:
                return MediaRequirement(required=False)
            return MediaRequirement(required=True, details=details)

        return MediaElements(
            video=requirement(record.needs_video, hosting="YouTube/Vimeo embed", autoplay=False),
            galleries=requirement(record.needs_galleries, type=["grid"]),
            animations=requirement(record.needs_animations, type=["scroll", "hover"], complexity="moderate"),
            audio=requirement(record.needs_audio),
            maps=requirement(record.needs_maps, provider="Google Maps", features=["location_pins"]),
            interactive_elements=tuple(record.interactive_elements),
        )

    # Section 9

    @staticmethod
    def _design_direction(record: IntelligenceRecord) -> DesignDirection:
        return DesignDirection(
            overall_style=record.design_style or "Modern and clean",
            color_direction="To be determined with client",
            typography_readability="High priority",
            whitespace="Generous (70%)",
            references=tuple(record.design_references),
            design_priorities=(
                "Visual hierarchy",
                "Conversion optimization",
                "Mobile-first design",
                "Accessibility",
            ),
        )

    # Section 10

    def _features_breakdown(
        self, record: IntelligenceRecord, package: PackageTier, pricing: PricingResult
    ) -> FeaturesBreakdown:
        add_ons = tuple(
            AddOnFeature(
                id=feature.id,
                name=feature.name,
                description=feature.description,
                category=feature.category,
                price=feature.pricing.addon_price or 0,
                rationale=self._feature_rationale(feature, record),
            )
            for feature in pricing.addon_features
        )

        bundles = []
        for bundle in pricing.applied_bundles:
            members = self._features(bundle.features)
            original = sum(f.pricing.addon_price or 0 for f in members)
            bundles.append(BundleSummary(
                name=bundle.name,
                features=tuple(f.name for f in members),
                original_price=original,
                discounted_price=max(0, original - bundle.discount),
                savings=bundle.discount,
            ))

        conflicts = tuple(
            ConflictSummary(feature_a=c.feature_a, feature_b=c.feature_b, resolution=c.resolution)
            for c in self.resolver.detect_conflicts(record.selected_features)
        )
        dependencies = tuple(
            DependencySummary(
                feature=missing.feature.name,
                requires=tuple(dep.name for dep in missing.missing_deps),
                reason="Required dependency for this feature",
            )
            for missing in self.resolver.validate_dependencies(record.selected_features).missing_dependencies
        )

        return FeaturesBreakdown(
            base_package=BasePackage(
                name=_capitalize(package),
                price=package_price(package, self.pricing),
                included_features=BASE_PACKAGE_FEATURES[package],
            ),
            add_on_features=add_ons,
            feature_bundles=tuple(bundles),
            conflicts=conflicts,
            dependencies=dependencies,
        )

    @staticmethod
    def _feature_rationale(feature: Feature, record: IntelligenceRecord) -> str:
        if feature.category == "ecommerce" and record.website_type == "ecommerce":
            return "Essential for e-commerce functionality and customer experience"
        if feature.category == "marketing" and "lead" in (record.primary_goal or ""):
            return "Supports lead generation goal through enhanced visitor engagement"
        if feature.category == "performance" and "high" in (record.expected_traffic or ""):
            return "Critical for handling expected high traffic volumes"
        return "Selected to meet project requirements and enhance user experience"

    # Section 11

    def _support_plan(
        self, record: IntelligenceRecord, package: PackageTier, hosting_tier: PackageTier
    ) -> SupportPlan:
        if record.needs_training is not None:
            training_required = record.needs_training
        else:
            training_required = bool(record.needs_cms)
        return SupportPlan(
            support_duration=SUPPORT_DURATIONS[package],
            training=TrainingPlan(
                required=training_required,
                topics=("Content management", "Basic updates"),
                format="Video recordings + live session",
                duration="2 hours",
            ),
            maintenance_plan=MaintenancePlan(
                provider=self.pricing.agency_name,
                includes=(
                    "Security updates",
                    "Performance monitoring",
                    "Backup management",
                    "Technical support",
                ),
                frequency="Ongoing",
            ),
            future_phases=tuple(record.future_phases),
            hosting=HostingPlan(
                tier=hosting_tier,
                monthly_price=hosting_price(hosting_tier, self.pricing),
                includes=self._hosting_includes(hosting_tier),
            ),
        )

    @staticmethod
    def _hosting_includes(tier: PackageTier) -> tuple[str, ...]:
        includes = ["SSL certificate", "Daily backups", "Security monitoring", "Email support"]
        if tier in ("professional", "custom"):
            includes.extend(["CDN", "Advanced caching", "Priority support"])
        if tier == "custom":
            includes.extend(["Dedicated resources", "SLA guarantee", "24/7 monitoring"])
        return tuple(includes)

    # Section 12

    def _timeline(self, record: IntelligenceRecord, complexity: Complexity) -> Timeline:
        weeks = BASE_DURATION_WEEKS[complexity]
        if (record.content_readiness or "needs_creation") == "needs_creation":
            weeks += 2
        if not record.has_logo or not record.has_color_palette:
            weeks += 1

        milestones = (
            Milestone(
                name="Project Kickoff",
                description="Contract signed, initial deposit received, project requirements finalized",
                duration="1 week",
                client_responsibility="Sign contract, provide deposit",
            ),
            Milestone(
                name="Content Delivery",
                description="All content, images, and copy provided by client",
                duration="1-2 weeks",
                dependencies=("Project Kickoff",),
                client_responsibility="Provide all content, images, and copy",
            ),
            Milestone(
                name="Design Phase",
                description="Visual design mockups created and approved",
                duration="2-3 weeks",
                dependencies=("Content Delivery",),
            ),
            Milestone(
                name="Development Phase",
                description="Website built based on approved designs",
                duration="4-5 weeks" if complexity == "complex" else "2-3 weeks",
                dependencies=("Design Phase",),
            ),
            Milestone(
                name="Testing & QA",
                description="Comprehensive testing across devices and browsers",
                duration="1 week",
                dependencies=("Development Phase",),
            ),
            Milestone(
                name="Client Review",
                description="Client reviews and provides feedback",
                duration="1 week",
                dependencies=("Testing & QA",),
                client_responsibility="Review site and provide consolidated feedback",
            ),
            Milestone(
                name="Launch",
                description="Final deployment to production",
                duration="1 week",
                dependencies=("Client Review",),
            ),
        )

        risks: list[Risk] = []
        if (record.content_readiness or "needs_creation") == "needs_creation":
            risks.append(Risk(
                risk="Content delays may extend timeline",
                mitigation="Early content submission deadline with progress check-ins",
            ))
        if record.integrations:
            risks.append(Risk(
                risk="Third-party integration dependencies",
                mitigation="Early integration testing and fallback plans",
            ))
        if not record.desired_launch_date:
            risks.append(Risk(
                risk="No fixed launch deadline",
                mitigation="Establish milestone dates to maintain momentum",
            ))

        return Timeline(
            desired_launch_date=record.desired_launch_date,
            desired_timeline=record.desired_timeline,
            estimated_duration=f"{weeks}-{weeks + 2} weeks",
            milestones=milestones,
            critical_path=(
                "Content Delivery",
                "Design Approval",
                "Development Completion",
                "Client Final Review",
                "Launch",
            ),
            risks=tuple(risks),
        )

    # Section 13

    def _investment_summary(
        self,
        record: IntelligenceRecord,
        package: PackageTier,
        hosting_tier: PackageTier,
        pricing: PricingResult,
    ) -> InvestmentSummary:
        base_price = package_price(package, self.pricing)
        subtotal = base_price + pricing.subtotal - pricing.bundle_discount
        monthly_hosting = hosting_price(hosting_tier, self.pricing)
        first_year = subtotal + monthly_hosting * 12

        return InvestmentSummary(
            base_package=LineItem(name=_capitalize(package), price=base_price),
            add_on_features=tuple(
                LineItem(name=f.name, price=f.pricing.addon_price or 0)
                for f in pricing.addon_features
            ),
            bundle_discounts=tuple(
                BundleDiscount(name=b.name, discount=b.discount) for b in pricing.applied_bundles
            ),
            subtotal=subtotal,
            hosting=HostingCost(
                tier=_capitalize(hosting_tier),
                monthly_price=monthly_hosting,
                annual_price=monthly_hosting * 12,
            ),
            total_project_investment=subtotal,
            total_first_year_investment=first_year,
            roi=self._roi(record, first_year),
            payment_schedule=tuple(
                PaymentMilestone(milestone=name, percentage=pct, amount=subtotal * pct / 100)
                for name, pct in PAYMENT_SCHEDULE
            ),
        )

    @staticmethod
    def _roi(record: IntelligenceRecord, investment: int) -> RoiEstimate:
        """Annual value estimate from the primary goal; sales wins over leads."""
        if not record.success_metrics or investment <= 0:
            return RoiEstimate(calculable=False)

        goal = record.primary_goal or ""
        annual_value = 0.0
        if "lead" in goal or "inquiry" in goal:
            leads = record.expected_leads_per_month or DEFAULT_LEADS_PER_MONTH
            value = record.avg_lead_value or DEFAULT_LEAD_VALUE
            rate = record.lead_conversion_rate or DEFAULT_CONVERSION_RATE
            annual_value = leads * value * rate * 12
        if "sales" in goal or "revenue" in goal:
            annual_value = (record.expected_monthly_revenue or DEFAULT_MONTHLY_REVENUE) * 12

        if annual_value <= 0:
            return RoiEstimate(calculable=False)

        roi_percent = _round_half_away((annual_value - investment) / investment * 100)
        payback_months = math.ceil(investment / (annual_value / 12))
        return RoiEstimate(
            calculable=True,
            revenue_increase=annual_value,
            estimated_roi=f"{roi_percent}%",
            payback_period=f"{payback_months} months",
        )

    # Section 14

    @staticmethod
    def _validation_outcomes(record: IntelligenceRecord, package: PackageTier) -> ValidationOutcomes:
        decisions = [
            KeyDecision(
                decision=f"Selected {package} package",
                rationale="Based on project complexity and feature requirements",
            )
        ]
        if record.selected_features:
            decisions.append(KeyDecision(
                decision=f"Selected {len(record.selected_features)} custom features",
                rationale="Features chosen to meet business goals and user needs",
            ))
        return ValidationOutcomes(
            understanding_validations=tuple(record.understanding_validations),
            conflicts_resolved=tuple(record.conflicts_resolved),
            assumptions_clarified=tuple(record.assumptions_clarified),
            key_decisions=tuple(decisions),
        )

    def _features(self, feature_ids) -> list[Feature]:
        """Catalog features for the ids, skipping unknown ones."""
        return [f for f in (self.catalog.get(fid) for fid in feature_ids) if f is not None]


def synthesize(
    record: IntelligenceRecord,
    conversation_id: str,
    now: datetime | None = None,
) -> ScopeDocument:
    """Synthesize with the default catalog and prices."""
    return ScopeSynthesizer().synthesize(record, conversation_id, now=now)
