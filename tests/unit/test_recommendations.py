# tests/unit/test_recommendations.py
"""Tests for FeatureRecommender scoring and ordering."""

from scope_intake.features.catalog import build_default_catalog
from scope_intake.features.recommendations import FeatureRecommender
from scope_intake.models.intelligence import IntelligenceRecord


def _recommend(**fields):
    return FeatureRecommender(build_default_catalog()).recommend(IntelligenceRecord(**fields))


class TestRecommendations:
    def test_unknown_type_defaults_to_contact_form(self):
        assert _recommend() == ["contact_form"]

    def test_included_features_rank_first(self):
        """Included features (+2) outrank bundle-eligible add-ons (+1)."""
        result = _recommend(website_type="ecommerce")
        assert result[0] == "product_catalog"
        assert set(result) == {"shopping_cart", "payment_processing", "product_catalog"}

    def test_goal_boost(self):
        """Features serving the primary goal get +3."""
        result = _recommend(website_type="service", primary_goal="lead_generation")
        assert result[:2] == ["contact_form", "email_marketing"]

    def test_flags_add_candidates(self):
        """Needs flags and the healthcare industry add their features."""
        result = _recommend(
            website_type="service", needs_user_accounts=True, needs_cms=True, industry="Healthcare"
        )
        assert {"user_authentication", "cms", "hipaa_compliance"} <= set(result)

    def test_no_duplicates(self):
        result = _recommend(
            website_type="ecommerce", primary_goal="ecommerce", target_audience="mobile shoppers"
        )
        assert len(result) == len(set(result))
