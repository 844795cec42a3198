# tests/unit/test_context.py
"""Tests for compressed question-context assembly."""

from datetime import datetime, timezone

from scope_intake.conversation.closure import TopicClosureTracker
from scope_intake.conversation.context import (
    FACT_SUMMARY_HEADER,
    NO_CLOSED_TOPICS_TEXT,
    Exchange,
    TokenMetrics,
    build_question_context,
    format_fact_key,
    render_fact_summary,
    render_recent_exchanges,
)
from scope_intake.conversation.topics import build_default_topic_catalog
from scope_intake.models.facts import Fact, FactStore

NOW = datetime(2026, 3, 5, tzinfo=timezone.utc)


def _fact(key, value, category="business"):
    return Fact(
        id=f"fact_q_{key}",
        category=category,
        key=key,
        value=value,
        confidence=0.9,
        source_question_id="q",
        extracted_at=NOW,
    )


def _exchange(n):
    return Exchange(question_id=f"q{n}", question=f"Question {n}?", answer=f"Answer {n}", timestamp=NOW)


class TestFactSummary:
    def test_empty_store(self):
        """No facts renders the beginning-of-conversation placeholder."""
        summary = render_fact_summary(FactStore())
        assert summary.startswith(FACT_SUMMARY_HEADER)
        assert "None yet" in summary

    def test_grouped_by_upper_category(self):
        """Facts are grouped under upper-cased category headings."""
        store = FactStore([
            _fact("project_purpose", "Sell candles"),
            _fact("project_timeline", "in 3 months", category="timeline"),
        ])
        summary = render_fact_summary(store)
        assert "  BUSINESS:" in summary
        assert "  TIMELINE:" in summary
        assert "✓ Project Purpose: Sell candles" in summary

    def test_long_values_truncated(self):
        """Values over 60 chars are cut to 57 plus an ellipsis."""
        store = FactStore([_fact("services_offered", "x" * 80)])
        summary = render_fact_summary(store)
        assert "x" * 57 + "..." in summary
        assert "x" * 58 not in summary

    def test_value_at_limit_kept(self):
        """A value of exactly 60 chars is not truncated."""
        store = FactStore([_fact("services_offered", "y" * 60)])
        assert "y" * 60 in render_fact_summary(store)

    def test_format_fact_key(self):
        assert format_fact_key("project_purpose") == "Project Purpose"


class TestRecentExchanges:
    def test_only_last_two(self):
        """Only the last two exchanges are replayed, renumbered from 1."""
        text = render_recent_exchanges([_exchange(1), _exchange(2), _exchange(3)])
        assert "Question 1?" not in text
        assert "Q1: Question 2?" in text
        assert "A2: Answer 3" in text

    def test_no_history(self):
        assert "No previous exchanges" in render_recent_exchanges([])


class TestBuildContext:
    def test_closed_topic_placeholder(self):
        """With nothing closed the context carries the None-yet block."""
        tracker = TopicClosureTracker(build_default_topic_catalog())
        context = build_question_context(FactStore(), [], tracker)
        assert context.topic_closure_section == NO_CLOSED_TOPICS_TEXT
        assert context.recent_topics_section == ""

    def test_closure_refreshed_from_facts(self):
        """Building the context closes topics the stored facts satisfy."""
        tracker = TopicClosureTracker(build_default_topic_catalog())
        store = FactStore([_fact("auth_method", "Google login", category="technical")])
        context = build_question_context(store, [], tracker, current_question="Next?")
        assert "User authentication and login" in context.topic_closure_section
        prompt = context.to_prompt()
        assert prompt.endswith("CURRENT QUESTION:\nNext?")

    def test_metrics_are_estimated(self):
        """Token metrics use a 4 chars per token estimate."""
        tracker = TopicClosureTracker(build_default_topic_catalog())
        history = [_exchange(n) for n in range(1, 30)]
        context = build_question_context(FactStore(), history, tracker)
        assert context.metrics is not None
        assert context.metrics.compressed_tokens > 0
        assert context.metrics.full_history_tokens > 0

    def test_reduction_percent(self):
        metrics = TokenMetrics(compressed_tokens=250, full_history_tokens=1000)
        assert metrics.saved_tokens == 750
        assert metrics.reduction_percent == 75.0
        assert TokenMetrics(0, 0).reduction_percent == 0.0
