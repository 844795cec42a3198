# scope_intake/features/catalog.py
"""
Feature catalog: sellable website features with pricing, dependency,
conflict and bundle metadata.

The catalog is an immutable value built once and injected into the
resolver. Authoring defects (dangling or self-referencing edges) never
raise: offending edges are dropped and reported on `catalog.issues`.
"""

import logging
from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from scope_intake.models.intelligence import normalize_website_type

logger = logging.getLogger(__name__)

FeatureCategoryName = Literal[
    "core",
    "ecommerce",
    "marketing",
    "content",
    "integration",
    "media",
    "booking",
    "membership",
    "compliance",
    "performance",
]
ConflictResolution = Literal["choose_one", "upgrade_required", "mutually_exclusive"]
IssueKind = Literal[
    "missing_dependency",
    "self_dependency",
    "missing_conflict_target",
    "self_conflict",
    "missing_bundle_member",
]

ALL_TYPES = "all"


class FeaturePricing(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    type: Literal["included", "addon"]
    tiers: tuple[str, ...] = Field(default=(), description="Package tiers that include it")
    addon_price: int | None = Field(default=None, ge=0, description="Add-on price (USD)")
    bundle_eligible: bool = False

    def included_in(self, tier_name: str) -> bool:
        tier = tier_name.lower()
        return self.type == "included" and any(t.lower() == tier for t in self.tiers)


class Feature(BaseModel):
    """A sellable website feature."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str
    name: str
    description: str = ""
    category: FeatureCategoryName
    pricing: FeaturePricing
    website_types: tuple[str, ...] = (ALL_TYPES,)
    dependencies: tuple[str, ...] = ()
    conflicts: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()

    def applies_to(self, website_type: str) -> bool:
        return ALL_TYPES in self.website_types or (
            normalize_website_type(website_type) in self.website_types
        )


class FeatureConflict(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    feature_a: str
    feature_b: str
    reason: str
    resolution: ConflictResolution = "mutually_exclusive"

    def pair(self) -> frozenset[str]:
        return frozenset((self.feature_a, self.feature_b))


class FeatureBundle(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str
    name: str
    category: FeatureCategoryName
    features: tuple[str, ...]
    discount: int = Field(ge=0, description="Dollar discount when the bundle applies")
    min_selection: int = Field(ge=1)


class CatalogIssue(BaseModel):
    """An authoring defect found while building the catalog."""

    model_config = ConfigDict(frozen=True)

    kind: IssueKind
    feature_id: str
    target_id: str
    message: str


def check_catalog_integrity(
    features: list[Feature],
    conflicts: list[FeatureConflict],
    bundles: list[FeatureBundle] | None = None,
) -> list[CatalogIssue]:
    """Report every dangling or self-referencing edge. Never raises."""
    known = {feature.id for feature in features}
    issues: list[CatalogIssue] = []

    for feature in features:
        for dep in feature.dependencies:
            if dep == feature.id:
                issues.append(CatalogIssue(
                    kind="self_dependency", feature_id=feature.id, target_id=dep,
                    message=f"{feature.id} lists itself as a dependency",
                ))
            elif dep not in known:
                issues.append(CatalogIssue(
                    kind="missing_dependency", feature_id=feature.id, target_id=dep,
                    message=f"{feature.id} depends on unknown feature {dep}",
                ))
        for other in feature.conflicts:
            if other == feature.id:
                issues.append(CatalogIssue(
                    kind="self_conflict", feature_id=feature.id, target_id=other,
                    message=f"{feature.id} lists itself as a conflict",
                ))
            elif other not in known:
                issues.append(CatalogIssue(
                    kind="missing_conflict_target", feature_id=feature.id, target_id=other,
                    message=f"{feature.id} conflicts with unknown feature {other}",
                ))

    for conflict in conflicts:
        if conflict.feature_a == conflict.feature_b:
            issues.append(CatalogIssue(
                kind="self_conflict", feature_id=conflict.feature_a,
                target_id=conflict.feature_b,
                message=f"Conflict entry pairs {conflict.feature_a} with itself",
            ))
            continue
        for fid in (conflict.feature_a, conflict.feature_b):
            if fid not in known:
                other = conflict.feature_b if fid == conflict.feature_a else conflict.feature_a
                issues.append(CatalogIssue(
                    kind="missing_conflict_target", feature_id=other, target_id=fid,
                    message=f"Conflict entry references unknown feature {fid}",
                ))

    for bundle in bundles or []:
        for member in bundle.features:
            if member not in known:
                issues.append(CatalogIssue(
                    kind="missing_bundle_member", feature_id=bundle.id, target_id=member,
                    message=f"Bundle {bundle.id} references unknown feature {member}",
                ))

    return issues


class FeatureCatalog:
    """
    Immutable feature graph.

    Conflicts are stored once per pair and checked in both directions;
    a conflict declared only on a feature's `conflicts` list gets a
    generic entry.
    """

    def __init__(
        self,
        features: list[Feature],
        conflicts: list[FeatureConflict] | None = None,
        bundles: list[FeatureBundle] | None = None,
    ) -> None:
        conflicts = conflicts or []
        bundles = bundles or []
        self.issues: tuple[CatalogIssue, ...] = tuple(
            check_catalog_integrity(features, conflicts, bundles)
        )
        for issue in self.issues:
            logger.warning(f"Feature catalog issue ({issue.kind}): {issue.message}")

        known = {feature.id for feature in features}
        self._features: dict[str, Feature] = {}
        for feature in features:
            clean_deps = tuple(d for d in feature.dependencies if d in known and d != feature.id)
            clean_conflicts = tuple(c for c in feature.conflicts if c in known and c != feature.id)
            if clean_deps != feature.dependencies or clean_conflicts != feature.conflicts:
                feature = feature.model_copy(
                    update={"dependencies": clean_deps, "conflicts": clean_conflicts}
                )
            self._features[feature.id] = feature

        pairs: dict[frozenset[str], FeatureConflict] = {}
        for conflict in conflicts:
            pair = conflict.pair()
            if len(pair) == 2 and pair <= known and pair not in pairs:
                pairs[pair] = conflict
        for feature in self._features.values():
            for other in feature.conflicts:
                pair = frozenset((feature.id, other))
                if pair not in pairs:
                    pairs[pair] = FeatureConflict(
                        feature_a=feature.id,
                        feature_b=other,
                        reason=f"{feature.name} cannot be combined with {self._features[other].name}",
                        resolution="mutually_exclusive",
                    )
        self._conflicts: tuple[FeatureConflict, ...] = tuple(pairs.values())

        self._bundles: tuple[FeatureBundle, ...] = tuple(
            bundle.model_copy(update={"features": tuple(m for m in bundle.features if m in known)})
            for bundle in bundles
        )

    @property
    def features(self) -> tuple[Feature, ...]:
        return tuple(self._features.values())

    @property
    def conflicts(self) -> tuple[FeatureConflict, ...]:
        return self._conflicts

    @property
    def bundles(self) -> tuple[FeatureBundle, ...]:
        return self._bundles

    def get(self, feature_id: str) -> Feature | None:
        return self._features.get(feature_id)

    def __contains__(self, feature_id: object) -> bool:
        return feature_id in self._features

    def __len__(self) -> int:
        return len(self._features)


def _addon(price: int, bundle_eligible: bool = False) -> FeaturePricing:
    return FeaturePricing(type="addon", addon_price=price, bundle_eligible=bundle_eligible)


def _included(*tiers: str) -> FeaturePricing:
    return FeaturePricing(type="included", tiers=tiers)


DEFAULT_FEATURES: tuple[Feature, ...] = (
    Feature(
        id="contact_form",
        name="Contact Form",
        description="Customizable contact form with spam protection",
        category="core",
        pricing=_included("starter", "professional", "custom"),
        tags=("forms", "contact"),
    ),
    Feature(
        id="user_authentication",
        name="User Authentication",
        description="Secure user login and account management",
        category="core",
        pricing=_addon(800),
        website_types=("ecommerce", "membership", "service"),
        tags=("security", "accounts", "login"),
    ),
    Feature(
        id="shopping_cart",
        name="Shopping Cart",
        description="Full shopping cart with checkout flow",
        category="ecommerce",
        pricing=_addon(1200, bundle_eligible=True),
        website_types=("ecommerce",),
        tags=("cart", "checkout", "ecommerce"),
    ),
    Feature(
        id="payment_processing",
        name="Payment Processing",
        description="Integrated payment gateway (Stripe/PayPal)",
        category="ecommerce",
        pricing=_addon(600, bundle_eligible=True),
        website_types=("ecommerce", "booking", "membership"),
        dependencies=("shopping_cart",),
        tags=("payments", "stripe", "paypal"),
    ),
    Feature(
        id="product_catalog",
        name="Product Catalog",
        description="Comprehensive product display with variants and inventory",
        category="ecommerce",
        pricing=_included("professional", "custom"),
        website_types=("ecommerce",),
        dependencies=("shopping_cart",),
        tags=("products", "catalog", "ecommerce"),
    ),
    Feature(
        id="booking_system",
        name="Booking System",
        description="Comprehensive online booking system for reservations, appointments, or rentals",
        category="booking",
        pricing=_addon(800, bundle_eligible=True),
        website_types=("booking", "service"),
        tags=("booking", "reservations", "appointments"),
    ),
    Feature(
        id="appointment_scheduling",
        name="Appointment Scheduling",
        description="Allow customers to book appointments online with calendar integration",
        category="booking",
        pricing=_addon(800),
        website_types=("service", "booking"),
        conflicts=("booking_system",),
        tags=("scheduling", "calendar"),
    ),
    Feature(
        id="blog_system",
        name="Blog System",
        description="Fully-featured blog with categories, tags, comments, and RSS feed",
        category="content",
        pricing=_included("professional", "custom"),
        website_types=("blog", "business", "portfolio"),
        tags=("blog", "content", "cms"),
    ),
    Feature(
        id="cms",
        name="Content Management System",
        description="Easy-to-use CMS for updating content without technical knowledge",
        category="content",
        pricing=_included("professional", "custom"),
        tags=("cms", "content", "editing"),
    ),
    Feature(
        id="email_marketing",
        name="Email Marketing Integration",
        description="Connect with Mailchimp, Constant Contact, or other email platforms",
        category="marketing",
        pricing=_addon(400, bundle_eligible=True),
        tags=("email", "marketing", "newsletter"),
    ),
    Feature(
        id="seo_optimization",
        name="Advanced SEO Optimization",
        description="Comprehensive SEO including keyword research, schema markup, and technical SEO",
        category="marketing",
        pricing=_addon(600),
        tags=("seo", "search", "optimization"),
    ),
    Feature(
        id="api_integration",
        name="API Integration",
        description="Connect your website to third-party services via API (CRM, payment processors, etc.)",
        category="integration",
        pricing=_addon(800),
        tags=("api", "integration", "third-party"),
    ),
    Feature(
        id="gallery",
        name="Photo Gallery",
        description="Beautiful image galleries with lightbox and filtering",
        category="media",
        pricing=_addon(300, bundle_eligible=True),
        website_types=("portfolio", "business"),
        tags=("gallery", "images", "photos"),
    ),
    Feature(
        id="membership_portal",
        name="Membership Portal",
        description="Secure area for members with content restriction and account management",
        category="membership",
        pricing=_addon(1200),
        website_types=("membership",),
        dependencies=("user_authentication",),
        tags=("membership", "portal", "access"),
    ),
    Feature(
        id="hipaa_compliance",
        name="HIPAA Compliance",
        description="HIPAA-compliant forms and data handling for healthcare",
        category="compliance",
        pricing=_addon(1000),
        website_types=("healthcare", "service"),
        tags=("hipaa", "compliance", "healthcare"),
    ),
    Feature(
        id="analytics_dashboard",
        name="Advanced Analytics Dashboard",
        description="Custom analytics dashboard showing key business metrics in real-time",
        category="performance",
        pricing=_addon(700),
        tags=("analytics", "dashboard", "metrics"),
    ),
)

DEFAULT_BUNDLES: tuple[FeatureBundle, ...] = (
    FeatureBundle(
        id="ecommerce_essentials",
        name="E-commerce Essentials Bundle",
        category="ecommerce",
        features=("shopping_cart", "payment_processing", "product_catalog"),
        discount=300,
        min_selection=3,
    ),
)

DEFAULT_CONFLICTS: tuple[FeatureConflict, ...] = (
    FeatureConflict(
        feature_a="booking_system",
        feature_b="appointment_scheduling",
        reason="Cannot have both booking system and appointment scheduling - they serve the same purpose",
        resolution="choose_one",
    ),
)


@lru_cache(maxsize=1)
def build_default_catalog() -> FeatureCatalog:
    """Build the standard catalog once per process."""
    return FeatureCatalog(list(DEFAULT_FEATURES), list(DEFAULT_CONFLICTS), list(DEFAULT_BUNDLES))
