# tests/unit/conftest.py
"""Shared fixtures: a fully specified e-commerce project and its document."""

from datetime import datetime, timezone

import pytest

from scope_intake.models.intelligence import IntelligenceRecord
from scope_intake.scope.synthesizer import ScopeSynthesizer

GENERATED_AT = datetime(2026, 3, 5, 9, 30, tzinfo=timezone.utc)

ECOMMERCE_FEATURES = [
    "shopping_cart",
    "payment_processing",
    "product_catalog",
    "user_authentication",
    "email_marketing",
    "seo_optimization",
    "analytics_dashboard",
]


@pytest.fixture
def ecommerce_record() -> IntelligenceRecord:
    return IntelligenceRecord(
        user_name="Jane Doe",
        user_email="jane@wickandco.example",
        user_phone="555-0100",
        company_name="Wick & Co",
        website_type="ecommerce",
        industry="Retail",
        primary_goal="increase online sales",
        target_audience="candle lovers",
        success_metrics=["sales"],
        content_readiness="ready",
        has_logo=True,
        has_color_palette=True,
        selected_features=list(ECOMMERCE_FEATURES),
    )


@pytest.fixture
def scope_document(ecommerce_record):
    return ScopeSynthesizer().synthesize(ecommerce_record, "conv-123", now=GENERATED_AT)
