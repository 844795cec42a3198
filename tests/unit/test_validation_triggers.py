# tests/unit/test_validation_triggers.py
"""Tests for understanding, conflict and assumption confirmation prompts."""

import pytest

from scope_intake.conversation.validation_triggers import should_trigger_validation
from scope_intake.features.catalog import build_default_catalog
from scope_intake.features.resolver import FeatureResolver
from scope_intake.models.intelligence import IntelligenceRecord


@pytest.fixture
def resolver():
    return FeatureResolver(build_default_catalog())


class TestBusinessContext:
    def test_triggers_after_business_answer(self, resolver):
        record = IntelligenceRecord(
            website_type="service",
            target_audience="homeowners",
            primary_goal="lead generation",
            success_metrics=["inquiries", "calls"],
        )
        prompt = should_trigger_validation(record, "business_context", resolver)
        assert prompt.type == "understanding"
        assert prompt.category == "business_context"
        assert "Success will be measured by inquiries, calls." in prompt.summary
        assert prompt.allow_edit is True

    def test_incomplete_context_does_not_trigger(self, resolver):
        record = IntelligenceRecord(target_audience="homeowners")
        assert should_trigger_validation(record, "business_context", resolver) is None


class TestTechnicalSpecs:
    def test_triggers_when_both_decided(self, resolver):
        record = IntelligenceRecord(needs_user_accounts=False, needs_cms=True)
        prompt = should_trigger_validation(record, "technical_requirements", resolver)
        assert prompt.category == "technical_specs"
        assert "without user accounts" in prompt.summary
        assert "regular updates" in prompt.summary

    def test_auth_method_detail(self, resolver):
        record = IntelligenceRecord(
            needs_user_accounts=True, authentication_method="Google SSO", needs_cms=False
        )
        prompt = should_trigger_validation(record, "technical_requirements", resolver)
        assert [d.label for d in prompt.details] == [
            "User Accounts",
            "Authentication Method",
            "Content Management",
        ]


class TestConflictsAndAssumptions:
    def test_conflict_prompt_offers_both(self, resolver):
        record = IntelligenceRecord(selected_features=["booking_system", "appointment_scheduling"])
        prompt = should_trigger_validation(record, "features", resolver)
        assert prompt.type == "conflict"
        assert {o.value for o in prompt.options} == {"booking_system", "appointment_scheduling"}

    def test_inventory_assumption(self, resolver):
        record = IntelligenceRecord(website_type="ecommerce", selected_features=["shopping_cart"])
        prompt = should_trigger_validation(record, "features", resolver)
        assert prompt.type == "assumption"
        assert "inventory management" in prompt.summary

    def test_answered_assumption_is_quiet(self, resolver):
        record = IntelligenceRecord(
            website_type="ecommerce",
            selected_features=["shopping_cart"],
            needs_inventory_management=False,
        )
        assert should_trigger_validation(record, "features", resolver) is None

    def test_first_match_wins(self, resolver):
        """Business context outranks a conflict in the same record."""
        record = IntelligenceRecord(
            website_type="service",
            target_audience="homeowners",
            primary_goal="leads",
            success_metrics=["calls"],
            selected_features=["booking_system", "appointment_scheduling"],
        )
        assert should_trigger_validation(record, "business_context", resolver).type == "understanding"
        assert should_trigger_validation(record, "design", resolver).type == "conflict"
