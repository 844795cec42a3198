# scope_intake/features/recommendations.py
"""Feature recommendations from gathered intelligence."""

import logging

from scope_intake.models.intelligence import IntelligenceRecord

from .catalog import Feature, FeatureCatalog

logger = logging.getLogger(__name__)

MAX_RECOMMENDATIONS = 15

BASE_RECOMMENDATIONS: dict[str, list[str]] = {
    "ecommerce": ["shopping_cart", "payment_processing", "product_catalog"],
    "portfolio": ["gallery", "contact_form"],
    "blog": ["blog_system", "cms"],
    "service": ["contact_form"],
    "corporate": ["contact_form", "cms"],
    "membership": ["user_authentication", "membership_portal"],
    "booking": ["booking_system", "payment_processing"],
}
DEFAULT_RECOMMENDATIONS = ["contact_form"]

GOAL_FEATURES: dict[str, list[str]] = {
    "lead_generation": ["contact_form", "email_marketing"],
    "ecommerce": ["shopping_cart", "payment_processing", "product_catalog"],
    "brand_awareness": ["seo_optimization", "blog_system"],
    "customer_service": ["contact_form"],
}


class FeatureRecommender:
    """
    Ranks catalog features for a project.

    Scoring: 1 base, +2 when included in packages, +1 when bundle-eligible,
    +3 when the feature serves the stated primary goal. Ties keep the
    order in which the feature was first suggested.
    """

    def __init__(self, catalog: FeatureCatalog) -> None:
        self.catalog = catalog

    def recommend(self, record: IntelligenceRecord) -> list[str]:
        website_type = (record.website_type or "website").lower()
        candidates = list(BASE_RECOMMENDATIONS.get(website_type, DEFAULT_RECOMMENDATIONS))

        if record.needs_user_accounts:
            candidates.append("user_authentication")
        if record.needs_cms:
            candidates.append("cms")
        if record.needs_search:
            candidates.append("seo_optimization")
        goal = record.primary_goal
        if goal == "lead_generation":
            candidates.extend(["contact_form", "email_marketing"])
        elif goal == "ecommerce":
            candidates.extend(["shopping_cart", "payment_processing", "product_catalog"])
        if record.target_audience and "mobile" in record.target_audience.lower():
            candidates.append("contact_form")
        if (record.industry or "").lower() == "healthcare":
            candidates.append("hipaa_compliance")

        unique = list(dict.fromkeys(candidates))
        scored = [(fid, self._score(self.catalog.get(fid), goal)) for fid in unique]
        # sorted() is stable, so equal scores keep suggestion order
        scored.sort(key=lambda item: item[1], reverse=True)
        result = [fid for fid, score in scored if score > 0][:MAX_RECOMMENDATIONS]
        logger.debug(f"Recommended for {website_type}: {result}")
        return result

    @staticmethod
    def _score(feature: Feature | None, goal: str | None) -> int:
        if feature is None:
            return 0
        score = 1
        if feature.pricing.type == "included":
            score += 2
        if feature.pricing.bundle_eligible:
            score += 1
        if goal and feature.id in GOAL_FEATURES.get(goal, []):
            score += 3
        return score
