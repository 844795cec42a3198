# tests/unit/test_features.py
"""Tests for the feature catalog, resolver and pricing."""

import pytest

from scope_intake.features.catalog import (
    Feature,
    FeatureCatalog,
    FeatureConflict,
    FeaturePricing,
    build_default_catalog,
)
from scope_intake.features.recommendations import BASE_RECOMMENDATIONS
from scope_intake.features.resolver import FeatureResolver


def _feature(fid, price=100, **kwargs):
    return Feature(
        id=fid,
        name=fid.title(),
        category="core",
        pricing=FeaturePricing(type="addon", addon_price=price),
        **kwargs,
    )


@pytest.fixture
def resolver():
    return FeatureResolver(build_default_catalog())


class TestCatalogIntegrity:
    def test_default_catalog_is_clean(self):
        """The shipped catalog has no dangling or self edges."""
        assert build_default_catalog().issues == ()

    def test_dangling_and_self_edges_dropped(self):
        """Bad edges are reported and removed, never raised."""
        catalog = FeatureCatalog([
            _feature("a", dependencies=("ghost", "a")),
            _feature("b", conflicts=("b", "nowhere")),
        ])
        kinds = sorted(issue.kind for issue in catalog.issues)
        assert kinds == [
            "missing_conflict_target",
            "missing_dependency",
            "self_conflict",
            "self_dependency",
        ]
        assert catalog.get("a").dependencies == ()
        assert catalog.get("b").conflicts == ()

    def test_feature_level_conflict_stored_once(self):
        """A conflict declared on both features becomes one catalog entry."""
        catalog = FeatureCatalog(
            [_feature("a", conflicts=("b",)), _feature("b", conflicts=("a",))],
        )
        assert len(catalog.conflicts) == 1
        assert catalog.conflicts[0].resolution == "mutually_exclusive"

    def test_explicit_conflict_preferred(self):
        """An explicit conflict entry wins over the generic one."""
        catalog = FeatureCatalog(
            [_feature("a", conflicts=("b",)), _feature("b")],
            [FeatureConflict(feature_a="b", feature_b="a", reason="same job", resolution="choose_one")],
        )
        assert [c.reason for c in catalog.conflicts] == ["same job"]


class TestLookup:
    def test_features_by_type_includes_all(self, resolver):
        """Type filtering keeps type-specific and 'all' features."""
        ids = {f.id for f in resolver.get_features_by_type("ecommerce")}
        assert {"shopping_cart", "payment_processing", "contact_form", "cms"} <= ids
        assert "gallery" not in ids
        assert {f.id for f in resolver.get_features_by_type("E-Commerce")} == ids

    def test_features_by_category(self, resolver):
        grouped = resolver.get_features_by_category("portfolio")
        assert [f.id for f in grouped["media"]] == ["gallery"]

    def test_recommended_for_ecommerce(self, resolver):
        """E-commerce gets the cart trio, plus auth when accounts are needed."""
        assert resolver.get_recommended_features("ecommerce") == [
            "shopping_cart",
            "payment_processing",
            "product_catalog",
        ]
        assert "user_authentication" in resolver.get_recommended_features(
            "ecommerce", needs_user_accounts=True
        )

    def test_recommended_for_service_booking(self, resolver):
        assert resolver.get_recommended_features("service", needs_booking=True) == [
            "contact_form",
            "booking_system",
        ]

    def test_recommended_matches_recommender_base(self, resolver):
        """Every type the recommender knows starts from the same base list here."""
        for website_type, base in BASE_RECOMMENDATIONS.items():
            assert resolver.get_recommended_features(website_type) == base
        assert resolver.get_recommended_features("Membership") == [
            "user_authentication",
            "membership_portal",
        ]
        assert resolver.get_recommended_features("unknown") == []


class TestConflictsAndDependencies:
    def test_conflict_iff_both_selected(self, resolver):
        """A conflict is reported exactly when both sides are selected."""
        assert resolver.detect_conflicts(["booking_system"]) == []
        conflicts = resolver.detect_conflicts(["appointment_scheduling", "booking_system"])
        assert len(conflicts) == 1
        assert conflicts[0].pair() == {"booking_system", "appointment_scheduling"}

    def test_missing_dependency_reported(self, resolver):
        """payment_processing without shopping_cart is invalid."""
        result = resolver.validate_dependencies(["payment_processing"])
        assert result.valid is False
        missing = result.missing_dependencies[0]
        assert missing.feature.id == "payment_processing"
        assert [d.id for d in missing.missing_deps] == ["shopping_cart"]

    def test_dependencies_satisfied(self, resolver):
        assert resolver.validate_dependencies(["shopping_cart", "payment_processing"]).valid

    def test_validate_selection_reports_unknown(self, resolver):
        """Unknown ids are reported by validate_selection."""
        report = resolver.validate_selection(["contact_form", "teleporter"])
        assert report.unknown_ids == ("teleporter",)
        assert report.ok is False


class TestPricing:
    def test_included_vs_addon(self, resolver):
        """cms is included in professional but not listed under starter."""
        result = resolver.calculate_pricing(["cms", "email_marketing"], "professional")
        assert [f.id for f in result.included_features] == ["cms"]
        assert [f.id for f in result.addon_features] == ["email_marketing"]
        assert result.subtotal == 400

        starter = resolver.calculate_pricing(["cms"], "starter")
        assert starter.included_features == ()
        assert starter.addon_features == ()
        assert starter.subtotal == 0

    def test_tier_is_case_insensitive(self, resolver):
        result = resolver.calculate_pricing(["cms"], "Professional")
        assert [f.id for f in result.included_features] == ["cms"]

    def test_bundle_discount_applied(self, resolver):
        """The e-commerce bundle discounts 300 once all three members are selected."""
        ids = ["shopping_cart", "payment_processing", "product_catalog"]
        result = resolver.calculate_pricing(ids, "custom")
        assert result.subtotal == 1800
        assert result.bundle_discount == 300
        assert result.total == 1500
        assert [b.id for b in result.applied_bundles] == ["ecommerce_essentials"]

    def test_pricing_sum_identity(self, resolver):
        """subtotal equals the sum of add-on prices and total = subtotal - discount."""
        ids = ["user_authentication", "seo_optimization", "gallery", "contact_form", "unknown"]
        result = resolver.calculate_pricing(ids, "starter")
        assert result.subtotal == sum(f.pricing.addon_price for f in result.addon_features)
        assert result.total == max(0, result.subtotal - result.bundle_discount)
        assert result.subtotal == 800 + 600 + 300

    def test_duplicates_counted_once(self, resolver):
        result = resolver.calculate_pricing(["gallery", "gallery"], "starter")
        assert result.subtotal == 300
