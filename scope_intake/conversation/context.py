# scope_intake/conversation/context.py
"""
Compressed input context for the external question generator.

Instead of replaying the whole transcript, the generator receives a fact
summary, the last few exchanges, and the two topic blocks produced by the
closure tracker.
"""

from dataclasses import dataclass, field
from datetime import datetime

from scope_intake.models.facts import FactStore
from scope_intake.prompts import load_prompt

from .closure import TopicClosureTracker

FACT_SUMMARY_HEADER = "INFORMATION ALREADY GATHERED:"
NO_FACTS_TEXT = "None yet (this is the beginning of the conversation)"
NO_CLOSED_TOPICS_TEXT = (
    "TOPICS ALREADY COVERED:\nNone yet (this is the beginning of the conversation)"
)


@dataclass
class Exchange:
    """One answered question."""

    question_id: str
    question: str
    answer: str
    timestamp: datetime
    topic: str = "general"


@dataclass
class TokenMetrics:
    """Rough token estimates (4 characters per token)."""

    compressed_tokens: int
    full_history_tokens: int

    @property
    def saved_tokens(self) -> int:
        return max(0, self.full_history_tokens - self.compressed_tokens)

    @property
    def reduction_percent(self) -> float:
        if self.full_history_tokens == 0:
            return 0.0
        return round(self.saved_tokens / self.full_history_tokens * 100, 1)


@dataclass
class QuestionContext:
    """Everything the question generator sees for one turn."""

    system_context: str
    fact_summary: str
    recent_exchanges: str
    topic_closure_section: str
    recent_topics_section: str
    current_question: str = ""
    metrics: TokenMetrics | None = field(default=None, compare=False)

    def to_prompt(self) -> str:
        """Join the non-empty blocks into a single user prompt."""
        blocks = [
            self.fact_summary,
            self.recent_exchanges,
            self.topic_closure_section,
            self.recent_topics_section,
        ]
        if self.current_question:
            blocks.append(f"CURRENT QUESTION:\n{self.current_question}")
        return "\n\n".join(block for block in blocks if block)


def estimate_tokens(text: str) -> int:
    return len(text) // 4


def format_fact_key(key: str) -> str:
    """project_purpose -> Project Purpose"""
    return " ".join(word[:1].upper() + word[1:] for word in key.split("_"))


def render_fact_summary(fact_store: FactStore, preview_length: int = 60) -> str:
    """Facts grouped by category, long values truncated."""
    if not len(fact_store):
        return f"{FACT_SUMMARY_HEADER}\n{NO_FACTS_TEXT}"

    sections = []
    for category, facts in fact_store.by_category().items():
        lines = [f"  {category.upper()}:"]
        for fact in facts:
            value = fact.value
            if len(value) > preview_length:
                value = value[: preview_length - 3] + "..."
            lines.append(f"    ✓ {format_fact_key(fact.key)}: {value}")
        sections.append("\n".join(lines))
    return f"{FACT_SUMMARY_HEADER}\n" + "\n\n".join(sections)


def render_recent_exchanges(history: list[Exchange], count: int = 2) -> str:
    recent = history[-count:] if count > 0 else []
    if not recent:
        return "RECENT CONVERSATION:\nNo previous exchanges."
    exchanges = "\n\n".join(
        f"Q{i}: {exchange.question}\nA{i}: {exchange.answer}"
        for i, exchange in enumerate(recent, start=1)
    )
    return f"RECENT CONVERSATION (last {len(recent)} exchanges):\n{exchanges}"


def build_question_context(
    fact_store: FactStore,
    history: list[Exchange],
    tracker: TopicClosureTracker,
    current_question: str = "",
    recent_exchange_count: int = 2,
    fact_value_preview: int = 60,
) -> QuestionContext:
    """
    Assemble the generator's input context from current session state.

    Closure is refreshed first so the closed-topic block reflects every
    fact stored so far.
    """
    tracker.update_closure(fact_store)

    context = QuestionContext(
        system_context=load_prompt("system_context"),
        fact_summary=render_fact_summary(fact_store, fact_value_preview),
        recent_exchanges=render_recent_exchanges(history, recent_exchange_count),
        topic_closure_section=tracker.render_closed_topics() or NO_CLOSED_TOPICS_TEXT,
        recent_topics_section=tracker.render_recent_topics(),
        current_question=current_question,
    )

    full_history = "\n\n".join(
        f"Q: {exchange.question}\nA: {exchange.answer}" for exchange in history
    )
    context.metrics = TokenMetrics(
        compressed_tokens=estimate_tokens(context.system_context + context.to_prompt()),
        full_history_tokens=estimate_tokens(context.system_context + full_history),
    )
    return context
