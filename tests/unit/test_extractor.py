# tests/unit/test_extractor.py
"""Tests for FactExtractor rule dispatch, fallbacks and the fact store."""

from datetime import datetime, timezone

from scope_intake.conversation.extractor import (
    FactExtractor,
    QuestionMetadata,
    slugify_question,
)
from scope_intake.models.facts import FactStore
from scope_intake.models.intelligence import IntelligenceRecord

NOW = datetime(2026, 3, 5, 12, 0, tzinfo=timezone.utc)


def _extract(question_id, question, answer, category):
    return FactExtractor().extract(question_id, question, answer, {"category": category}, now=NOW)


class TestFoundationRules:
    def test_foundation_ids_map_to_contact_keys(self):
        """Foundation question ids emit the matching contact fact at full confidence."""
        facts = _extract("foundation_email", "What is your email?", " jane@example.com ", "foundation")
        assert len(facts) == 1
        assert facts[0].key == "contact_email"
        assert facts[0].value == "jane@example.com"
        assert facts[0].confidence == 1.0
        assert facts[0].category == "business"

    def test_foundation_business_name_by_question_text(self):
        """A foundation question asking for the company name yields business_name."""
        facts = _extract("q7", "What is your company name?", "Acme Bakery", "foundation")
        assert [f.key for f in facts] == ["business_name"]

    def test_unmatched_foundation_answer_falls_back(self):
        """A foundation answer no rule matches still produces a fact."""
        facts = _extract("q8", "Anything else?", "Nope, that's all", "foundation")
        assert len(facts) == 1
        assert facts[0].key == "answer_anything_else"
        assert facts[0].confidence == 0.8


class TestBusinessRules:
    def test_multiple_keyword_rules_fire(self):
        """Every matching keyword rule emits its own fact with the full answer."""
        facts = _extract(
            "q2",
            "Who are your customers and what is your main goal?",
            "Local families; we want more bookings",
            "business_context",
        )
        keys = [f.key for f in facts]
        assert "target_audience" in keys
        assert "project_purpose" in keys
        assert all(f.value == "Local families; we want more bookings" for f in facts)

    def test_timeline_keeps_first_matching_pattern(self):
        """Only the first timeline pattern that matches is recorded."""
        facts = _extract(
            "q3",
            "Tell us about the project",
            "We need it in 3 months, ideally within 8 weeks",
            "business_context",
        )
        timeline = [f for f in facts if f.key == "project_timeline"]
        assert len(timeline) == 1
        assert timeline[0].value == "in 3 months"
        assert timeline[0].category == "timeline"

    def test_budget_dollar_amount(self):
        """A dollar figure becomes the budget indication."""
        facts = _extract("q4", "Tell us about the project", "Roughly $8,000 total", "business_context")
        budget = [f for f in facts if f.key == "budget_indication"]
        assert budget[0].value == "$8,000"
        assert budget[0].confidence == 0.7

    def test_timeline_patterns_ignore_other_categories(self):
        """Timeline and budget patterns only run for business answers."""
        facts = _extract("q5", "Which platform?", "Web, launching in 2 months", "technical")
        assert "project_timeline" not in [f.key for f in facts]


class TestOtherCategories:
    def test_feature_selection_uses_question_id(self):
        """Feature answers are stored under selected_<question_id>."""
        facts = _extract("features_1", "Pick features", "shopping_cart, gallery", "feature_selection")
        assert facts[0].key == "selected_features_1"
        assert facts[0].category == "feature"

    def test_technical_payment_rule(self):
        """A payment question maps to payment_provider."""
        facts = _extract("q6", "Which payment provider do you prefer?", "Stripe", "technical")
        assert [f.key for f in facts] == ["payment_provider"]

    def test_design_branding_rule(self):
        """Brand material questions map to existing_branding."""
        facts = _extract("q9", "Do you have brand materials like a logo?", "Yes, a logo", "design")
        assert "existing_branding" in [f.key for f in facts]

    def test_unknown_category_technical_fallback(self):
        """An answer in the technical category with no rule falls back as technical."""
        facts = _extract("q10", "Any hard requirements?", "Must run on Linux", "technical")
        assert facts[0].key.startswith("answer_")
        assert facts[0].category == "technical"

    def test_metadata_dataclass_accepted(self):
        """QuestionMetadata works as well as a plain dict."""
        facts = FactExtractor().extract(
            "q11", "What is your goal?", "Sell more", QuestionMetadata(category="business"), now=NOW
        )
        assert facts[0].key == "project_purpose"


class TestDeterminism:
    def test_blank_answer_yields_nothing(self):
        """Whitespace-only answers produce no facts."""
        assert _extract("q1", "What is your goal?", "   ", "business") == []

    def test_ids_are_stable(self):
        """Repeating an extraction produces identical keys and ids."""
        first = _extract("q1", "What is your goal?", "Sell more", "business")
        second = _extract("q1", "What is your goal?", "Sell more", "business")
        assert [(f.id, f.key) for f in first] == [(f.id, f.key) for f in second]
        assert first[0].id == "fact_q1_project_purpose"

    def test_slug_is_truncated(self):
        """Fallback slugs are lower-case, underscore separated and capped at 50 chars."""
        slug = slugify_question("What's the ONE thing " + "really " * 20 + "?")
        assert slug.startswith("what_s_the_one_thing")
        assert len(slug) <= 50


class TestFactStore:
    def test_last_write_wins(self):
        """Re-answering replaces the earlier fact for the same key."""
        store = FactStore()
        for fact in _extract("q1", "What is your goal?", "Sell more", "business"):
            store.upsert(fact)
        for fact in _extract("q2", "What is your goal now?", "Get leads", "business"):
            store.upsert(fact)
        assert len(store) == 1
        assert store.get("project_purpose").value == "Get leads"
        assert store.get("project_purpose").source_question_id == "q2"

    def test_by_category_groups(self):
        """Facts are grouped by category in insertion order."""
        store = FactStore(_extract("q3", "Tell us", "in 6 months for $5,000", "business"))
        grouped = store.by_category()
        assert set(grouped) == {"timeline", "budget"}


class TestIntelligenceProjection:
    def test_apply_fact_sets_typed_field(self):
        """Mapped fact keys set the typed record field and the flat facts dict."""
        record = IntelligenceRecord()
        record.apply_fact("website_type", " Ecommerce ")
        record.apply_fact("project_purpose", "sell candles")
        record.apply_fact("answer_misc", "extra")
        assert record.website_type == "ecommerce"
        assert record.primary_goal == "sell candles"
        assert record.facts["answer_misc"] == "extra"

    def test_website_type_slugged(self):
        """Hyphens, spaces and case are dropped so catalog lookups match."""
        record = IntelligenceRecord()
        record.apply_fact("website_type", "E-Commerce")
        assert record.website_type == "ecommerce"
        assert IntelligenceRecord(website_type=" - ").website_type is None
