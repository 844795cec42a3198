# tests/unit/test_topics_closure.py
"""Tests for the topic catalog and TopicClosureTracker."""

import pytest

from scope_intake.conversation.closure import (
    CLOSED_TOPICS_HEADER,
    TopicClosureTracker,
)
from scope_intake.conversation.topics import (
    GENERAL_TOPIC,
    TopicCatalog,
    TopicMapping,
    build_default_topic_catalog,
)
from scope_intake.errors import UnknownTopicError


@pytest.fixture
def tracker():
    return TopicClosureTracker(build_default_topic_catalog(), recent_window=3)


class TestTopicCatalog:
    def test_default_catalog_has_twenty_topics(self):
        """The standard catalog covers 20 topics with unique names."""
        catalog = build_default_topic_catalog()
        assert len(catalog) == 20
        assert len({m.topic for m in catalog}) == 20

    def test_min_facts_bounds_enforced(self):
        """A closure threshold larger than the required facts is rejected."""
        with pytest.raises(ValueError, match="min_facts_for_closure"):
            TopicMapping("x", "X", ("a",), ("x",), 2)

    def test_duplicate_topics_rejected(self):
        """Two mappings with the same topic name are rejected."""
        mapping = TopicMapping("x", "X", ("a",), ("x",), 1)
        with pytest.raises(ValueError, match="Duplicate"):
            TopicCatalog([mapping, mapping])

    def test_first_keyword_match_wins(self):
        """Questions are labelled with the first topic whose keyword they contain."""
        catalog = build_default_topic_catalog()
        assert catalog.topic_for_question("What payment methods?") == "payment_processing"
        assert catalog.topic_for_question("Which hosting provider?") == "hosting_infrastructure"

    def test_unmatched_question_is_general(self):
        """No keyword match yields the general label."""
        catalog = build_default_topic_catalog()
        assert catalog.topic_for_question("Anything else?") == GENERAL_TOPIC


class TestClosure:
    def test_topic_closes_at_threshold(self, tracker):
        """project_goals closes once 2 of its 3 required facts are present."""
        tracker.update_closure({"project_purpose"})
        assert "project_goals" not in tracker.state.closed_topics
        tracker.update_closure({"project_purpose", "target_audience"})
        assert "project_goals" in tracker.state.closed_topics

    def test_closure_is_monotone(self, tracker):
        """Closed topics stay closed when facts are no longer supplied."""
        tracker.update_closure({"auth_method"})
        tracker.update_closure(set())
        assert "authentication" in tracker.state.closed_topics

    def test_admin_override(self, tracker):
        """Topics can be closed and reopened manually."""
        tracker.mark_topic_closed("notifications")
        assert "notifications" in tracker.state.closed_topics
        tracker.unmark_topic("notifications")
        assert "notifications" not in tracker.state.closed_topics

    def test_unknown_topic_override_raises(self, tracker):
        """Overrides on unknown topics raise UnknownTopicError."""
        with pytest.raises(UnknownTopicError):
            tracker.mark_topic_closed("time_travel")
        with pytest.raises(UnknownTopicError):
            tracker.unmark_topic("time_travel")

    def test_restore_drops_unknown_topics(self, tracker):
        """Snapshot restore keeps only topics the catalog knows."""
        tracker.restore(["authentication", "bogus"], ["payment_processing"])
        assert tracker.state.closed_topics == {"authentication"}
        assert list(tracker.state.recent_topics) == ["payment_processing"]


class TestRecency:
    def test_recent_window_is_bounded(self, tracker):
        """Only the last `recent_window` labels are kept."""
        for question in ["Payment?", "Hosting?", "Database?", "Search?"]:
            tracker.record_asked_question(question)
        assert list(tracker.state.recent_topics) == [
            "hosting_infrastructure",
            "database_storage",
            "search_discovery",
        ]

    def test_recency_independent_of_closure(self, tracker):
        """A topic can be both recent and closed; both blocks render it."""
        tracker.record_asked_question("What payment provider?")
        tracker.update_closure({"payment_provider"})
        closed = tracker.render_closed_topics()
        recent = tracker.render_recent_topics()
        assert "Payment processing and billing" in closed
        assert "Payment processing and billing" in recent
        assert "last 3 questions" in recent


class TestRendering:
    def test_empty_blocks_render_empty(self, tracker):
        """Nothing closed and nothing recent renders as empty strings."""
        assert tracker.render_closed_topics() == ""
        assert tracker.render_recent_topics() == ""
        assert tracker.render_closure_context() == ""

    def test_general_label_not_rendered(self, tracker):
        """The general label is never listed as a recent topic."""
        tracker.record_asked_question("Anything else?")
        assert tracker.render_recent_topics() == ""

    def test_closed_block_in_catalog_order(self, tracker):
        """Closed topics render in catalog order under the hard header."""
        tracker.mark_topic_closed("payment_processing")
        tracker.mark_topic_closed("authentication")
        block = tracker.render_closed_topics()
        assert block.startswith(CLOSED_TOPICS_HEADER)
        assert block.index("User authentication") < block.index("Payment processing")

    def test_reset_clears_state(self, tracker):
        """reset() forgets closed and recent topics."""
        tracker.mark_topic_closed("authentication")
        tracker.record_asked_question("Payment?")
        tracker.reset()
        assert not tracker.state.closed_topics
        assert not tracker.state.recent_topics
