# scope_intake/features/resolver.py
"""
Pure functions over a FeatureCatalog: filtering, conflict detection,
dependency validation and pricing.

The resolver keeps no state of its own; every call recomputes from the
catalog so a tier change is always reflected.
"""

import logging

from pydantic import BaseModel, ConfigDict, Field

from scope_intake.models.intelligence import normalize_website_type

from .catalog import Feature, FeatureBundle, FeatureCatalog, FeatureConflict
from .recommendations import BASE_RECOMMENDATIONS

logger = logging.getLogger(__name__)


class MissingDependency(BaseModel):
    """Prerequisites missing for one selected feature."""

    model_config = ConfigDict(frozen=True)

    feature: Feature
    missing_deps: tuple[Feature, ...]


class DependencyValidation(BaseModel):
    model_config = ConfigDict(frozen=True)

    valid: bool
    missing_dependencies: tuple[MissingDependency, ...] = ()


class SelectionReport(BaseModel):
    """Everything wrong with a selection, in one place."""

    model_config = ConfigDict(frozen=True)

    unknown_ids: tuple[str, ...] = ()
    conflicts: tuple[FeatureConflict, ...] = ()
    dependencies: DependencyValidation

    @property
    def ok(self) -> bool:
        return not self.unknown_ids and not self.conflicts and self.dependencies.valid


class PricingResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    subtotal: int = Field(ge=0, description="Sum of add-on prices")
    bundle_discount: int = Field(default=0, ge=0)
    total: int = Field(ge=0, description="max(0, subtotal - bundle_discount)")
    included_features: tuple[Feature, ...] = ()
    addon_features: tuple[Feature, ...] = ()
    applied_bundles: tuple[FeatureBundle, ...] = ()


def _dedupe(ids: list[str]) -> list[str]:
    return list(dict.fromkeys(ids))


class FeatureResolver:
    """Stateless operations over an injected catalog."""

    def __init__(self, catalog: FeatureCatalog) -> None:
        self.catalog = catalog

    def get_features_by_type(self, website_type: str) -> list[Feature]:
        """Features whose website_types contain the type or 'all'."""
        return [f for f in self.catalog.features if f.applies_to(website_type)]

    def get_features_by_category(self, website_type: str) -> dict[str, list[Feature]]:
        grouped: dict[str, list[Feature]] = {}
        for feature in self.get_features_by_type(website_type):
            grouped.setdefault(feature.category, []).append(feature)
        return grouped

    def get_recommended_features(
        self,
        website_type: str,
        needs_user_accounts: bool = False,
        needs_booking: bool = False,
    ) -> list[str]:
        """Starter selection for a website type, from the recommender's base table."""
        website_type = normalize_website_type(website_type) or ""
        recommended = list(BASE_RECOMMENDATIONS.get(website_type, []))
        if website_type == "ecommerce" and needs_user_accounts:
            recommended.append("user_authentication")
        if website_type == "service" and needs_booking:
            recommended.append("booking_system")
        return [fid for fid in dict.fromkeys(recommended) if fid in self.catalog]

    def detect_conflicts(self, selected_ids: list[str]) -> list[FeatureConflict]:
        """Every catalog conflict whose two features are both selected."""
        selected = set(selected_ids)
        return [c for c in self.catalog.conflicts if c.pair() <= selected]

    def validate_dependencies(self, selected_ids: list[str]) -> DependencyValidation:
        """One entry per selected feature with unmet prerequisites, in selection order."""
        selected = set(selected_ids)
        missing: list[MissingDependency] = []
        for feature_id in _dedupe(selected_ids):
            feature = self.catalog.get(feature_id)
            if feature is None or not feature.dependencies:
                continue
            absent = [dep for dep in feature.dependencies if dep not in selected]
            if absent:
                missing.append(MissingDependency(
                    feature=feature,
                    missing_deps=tuple(self.catalog.get(dep) for dep in absent),
                ))
        return DependencyValidation(valid=not missing, missing_dependencies=tuple(missing))

    def validate_selection(self, selected_ids: list[str]) -> SelectionReport:
        unknown = tuple(fid for fid in _dedupe(selected_ids) if fid not in self.catalog)
        if unknown:
            logger.warning(f"Selection contains unknown feature ids: {list(unknown)}")
        return SelectionReport(
            unknown_ids=unknown,
            conflicts=tuple(self.detect_conflicts(selected_ids)),
            dependencies=self.validate_dependencies(selected_ids),
        )

    def calculate_pricing(self, selected_ids: list[str], tier_name: str) -> PricingResult:
        """
        Price a selection under a package tier.

        A feature is included only when its pricing type is 'included' and the
        tier is listed; add-on features add their price; anything else
        (including unknown ids) is left out of both buckets.
        """
        ids = _dedupe(selected_ids)
        included: list[Feature] = []
        addons: list[Feature] = []
        subtotal = 0

        for feature_id in ids:
            feature = self.catalog.get(feature_id)
            if feature is None:
                continue
            if feature.pricing.included_in(tier_name):
                included.append(feature)
            elif feature.pricing.type == "addon":
                addons.append(feature)
                subtotal += feature.pricing.addon_price or 0

        selected = set(ids)
        applied: list[FeatureBundle] = []
        bundle_discount = 0
        for bundle in self.catalog.bundles:
            if sum(1 for member in bundle.features if member in selected) >= bundle.min_selection:
                applied.append(bundle)
                bundle_discount += bundle.discount

        return PricingResult(
            subtotal=subtotal,
            bundle_discount=bundle_discount,
            total=max(0, subtotal - bundle_discount),
            included_features=tuple(included),
            addon_features=tuple(addons),
            applied_bundles=tuple(applied),
        )
