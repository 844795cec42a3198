# scope_intake/conversation/closure.py
"""
Topic closure tracking.

Two independent signals are kept:
- closed topics: evidence-based, permanent unless an admin un-marks them
- recent topics: keyword labels of the last few asked questions

Both are rendered for the question generator; a topic may appear in both.
"""

import logging
from collections import deque
from collections.abc import Container
from dataclasses import dataclass, field

from scope_intake.errors import UnknownTopicError

from .topics import GENERAL_TOPIC, TopicCatalog

logger = logging.getLogger(__name__)

DEFAULT_RECENT_WINDOW = 5

CLOSED_TOPICS_HEADER = "TOPICS ALREADY COVERED - DO NOT ASK ABOUT THESE AGAIN:"
CLOSED_TOPICS_INSTRUCTION = (
    "⚠️ CRITICAL INSTRUCTION: The user has already provided information about the topics listed above.\n"
    "Do NOT ask questions that revisit these topics, even if phrased differently or from a different angle.\n"
    "Move to NEW topics that haven't been covered yet."
)
RECENT_TOPICS_HEADER = "RECENTLY ASKED ABOUT (last {window} questions - avoid similar questions):"
RECENT_TOPICS_INSTRUCTION = (
    "Avoid asking questions too similar to recent questions, even if technically different."
)


@dataclass
class ClosureState:
    """Closed topics plus a bounded queue of recently asked topic labels."""

    closed_topics: set[str] = field(default_factory=set)
    recent_topics: deque[str] = field(
        default_factory=lambda: deque(maxlen=DEFAULT_RECENT_WINDOW)
    )


class TopicClosureTracker:
    """Maintains ClosureState for one conversation against a topic catalog."""

    def __init__(self, catalog: TopicCatalog, recent_window: int = DEFAULT_RECENT_WINDOW) -> None:
        self.catalog = catalog
        self.recent_window = recent_window
        self.state = ClosureState(recent_topics=deque(maxlen=recent_window))

    def update_closure(self, fact_keys: Container[str]) -> ClosureState:
        """
        Close every topic with enough of its required facts present.

        Args:
            fact_keys: Anything supporting `key in fact_keys` (a FactStore works)

        Returns:
            The updated state. Topics are only ever added here.
        """
        for mapping in self.catalog:
            if mapping.topic in self.state.closed_topics:
                continue
            present = sum(1 for key in mapping.required_facts if key in fact_keys)
            if present >= mapping.min_facts_for_closure:
                self.state.closed_topics.add(mapping.topic)
                logger.info(
                    f"Topic closed: {mapping.topic} ({present}/{len(mapping.required_facts)} facts)"
                )
        return self.state

    def record_asked_question(self, question_text: str) -> str:
        """Label a newly asked question and push the label onto the recency queue."""
        topic = self.catalog.topic_for_question(question_text)
        self.state.recent_topics.append(topic)
        return topic

    def mark_topic_closed(self, topic: str) -> None:
        """Administrative override: close a topic regardless of facts."""
        if topic not in self.catalog:
            raise UnknownTopicError(topic)
        self.state.closed_topics.add(topic)
        logger.info(f"Topic manually closed: {topic}")

    def unmark_topic(self, topic: str) -> None:
        """Administrative override: reopen a closed topic."""
        if topic not in self.catalog:
            raise UnknownTopicError(topic)
        self.state.closed_topics.discard(topic)
        logger.info(f"Topic manually reopened: {topic}")

    def reset(self) -> None:
        self.state = ClosureState(recent_topics=deque(maxlen=self.recent_window))

    def restore(self, closed_topics: list[str], recent_topics: list[str]) -> None:
        """Rehydrate from an exported snapshot. Unknown closed topics are dropped."""
        known = {topic for topic in closed_topics if topic in self.catalog}
        dropped = set(closed_topics) - known
        if dropped:
            logger.warning(f"Ignoring unknown closed topics in snapshot: {sorted(dropped)}")
        self.state = ClosureState(
            closed_topics=known,
            recent_topics=deque(recent_topics, maxlen=self.recent_window),
        )

    def render_closed_topics(self) -> str:
        """Hard 'do not ask again' block; empty when nothing is closed."""
        closed = [m for m in self.catalog if m.topic in self.state.closed_topics]
        if not closed:
            return ""
        lines = [CLOSED_TOPICS_HEADER]
        lines.extend(f"  ❌ {mapping.display_name}" for mapping in closed)
        lines.append("")
        lines.append(CLOSED_TOPICS_INSTRUCTION)
        return "\n".join(lines)

    def render_recent_topics(self) -> str:
        """Soft 'avoid repeating' block; deduplicated, without the general label."""
        labels: list[str] = []
        for topic in self.state.recent_topics:
            if topic != GENERAL_TOPIC and topic not in labels:
                labels.append(topic)
        if not labels:
            return ""
        lines = [RECENT_TOPICS_HEADER.format(window=self.recent_window)]
        lines.extend(f"  • {self.catalog.display_name(topic)}" for topic in labels)
        lines.append("")
        lines.append(RECENT_TOPICS_INSTRUCTION)
        return "\n".join(lines)

    def render_closure_context(self) -> str:
        """Both blocks, separated by a blank line, omitting empty ones."""
        blocks = [self.render_closed_topics(), self.render_recent_topics()]
        return "\n\n".join(block for block in blocks if block)
