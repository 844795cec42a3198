# scope_intake/scope/classification.py
"""
Project classification: complexity score, package tier and hosting tier.

Every function here is pure over the intelligence record. Prices come
from PricingConfig so an agency can override them in config.yaml.
"""

from scope_intake.config.schema import PricingConfig
from scope_intake.models.intelligence import IntelligenceRecord

from .schemas import Complexity, PackageTier

TYPE_WEIGHTS: dict[str, int] = {
    "portfolio": 1,
    "blog": 1,
    "landing": 1,
    "service": 2,
    "corporate": 2,
    "ecommerce": 3,
    "marketplace": 3,
    "saas": 3,
}
DEFAULT_TYPE_WEIGHT = 2

STARTER_BUDGETS = {"under_3k", "under_5000"}
PROFESSIONAL_BUDGETS = {"3k_to_5k", "5000_to_10000"}

COMPLEXITY_TO_PACKAGE: dict[Complexity, PackageTier] = {
    "simple": "starter",
    "standard": "professional",
    "complex": "custom",
}


def effective_record(record: IntelligenceRecord) -> IntelligenceRecord:
    """
    Copy of the record with flags implied by the feature selection.

    Selecting user_authentication implies user accounts; selecting
    payment_processing implies payment processing.
    """
    updates: dict[str, bool] = {}
    if record.has_feature("user_authentication") and not record.needs_user_accounts:
        updates["needs_user_accounts"] = True
    if record.has_feature("payment_processing") and not record.needs_payment_processing:
        updates["needs_payment_processing"] = True
    if not updates:
        return record
    return record.model_copy(update=updates, deep=True)


def complexity_score(record: IntelligenceRecord) -> int:
    score = TYPE_WEIGHTS.get((record.website_type or "").lower(), DEFAULT_TYPE_WEIGHT)

    feature_count = len(record.selected_features)
    if feature_count >= 6:
        score += 2
    elif feature_count >= 3:
        score += 1

    if record.needs_user_accounts:
        score += 1
    if record.needs_cms:
        score += 1
    if record.needs_payment_processing:
        score += 1
    if len(record.integrations) > 2:
        score += 1
    if record.compliance_requirements:
        score += 1
    return score


def determine_complexity(record: IntelligenceRecord) -> Complexity:
    score = complexity_score(record)
    if score <= 3:
        return "simple"
    if score <= 6:
        return "standard"
    return "complex"


def determine_package(record: IntelligenceRecord, complexity: Complexity) -> PackageTier:
    """Stated budget wins; otherwise the package follows complexity."""
    if record.budget_range:
        if record.budget_range in STARTER_BUDGETS:
            return "starter"
        if record.budget_range in PROFESSIONAL_BUDGETS:
            return "professional"
        return "custom"
    return COMPLEXITY_TO_PACKAGE[complexity]


def determine_hosting_tier(record: IntelligenceRecord, complexity: Complexity) -> PackageTier:
    traffic = (record.expected_traffic or "standard").lower()
    if "high" in traffic or "enterprise" in traffic or complexity == "complex":
        return "custom"
    if complexity == "standard" or record.needs_cms:
        return "professional"
    return "starter"


def package_price(tier: PackageTier, pricing: PricingConfig) -> int:
    return pricing.package_prices[tier]


def hosting_price(tier: PackageTier, pricing: PricingConfig) -> int:
    return pricing.hosting_prices[tier]
