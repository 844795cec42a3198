# scope_intake/features/__init__.py
"""Feature catalog, resolver and recommendations."""

from .catalog import (
    CatalogIssue,
    Feature,
    FeatureBundle,
    FeatureCatalog,
    FeatureConflict,
    FeaturePricing,
    build_default_catalog,
    check_catalog_integrity,
)
from .recommendations import FeatureRecommender
from .resolver import (
    DependencyValidation,
    FeatureResolver,
    MissingDependency,
    PricingResult,
    SelectionReport,
)

__all__ = [
    "CatalogIssue",
    "Feature",
    "FeatureBundle",
    "FeatureCatalog",
    "FeatureConflict",
    "FeaturePricing",
    "build_default_catalog",
    "check_catalog_integrity",
    "FeatureRecommender",
    "DependencyValidation",
    "FeatureResolver",
    "MissingDependency",
    "PricingResult",
    "SelectionReport",
]
