# scope_intake/models/facts.py
"""
Typed facts extracted from interview answers, and the keyed store that holds them.

A fact is keyed by its `key`; storing a fact whose key already exists
replaces the earlier one.
"""

import logging
from collections.abc import Iterator
from datetime import datetime, timezone
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

FactCategory = Literal["business", "technical", "timeline", "budget", "feature", "design"]


class Fact(BaseModel):
    """A single typed key/value datum extracted from one answer."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str = Field(description="Deterministic id: fact_{question_id}_{key}")
    category: FactCategory = Field(description="Fact category")
    key: str = Field(description="Fact key, unique within a conversation")
    value: str = Field(description="Extracted value (trimmed answer or matched text)")
    confidence: float = Field(ge=0.0, le=1.0, description="Extraction confidence")
    source_question_id: str = Field(description="Question that produced this fact")
    extracted_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the fact was extracted",
    )


class FactStore:
    """
    Last-write-wins fact storage keyed by fact key.

    Insertion order is preserved; an overwrite keeps the key's original slot.
    """

    def __init__(self, facts: list[Fact] | None = None) -> None:
        self._facts: dict[str, Fact] = {}
        for fact in facts or []:
            self.upsert(fact)

    def upsert(self, fact: Fact) -> None:
        """Store a fact, replacing any earlier fact with the same key."""
        if fact.key in self._facts:
            logger.debug(f"Overwriting fact '{fact.key}' from {fact.source_question_id}")
        self._facts[fact.key] = fact

    def get(self, key: str) -> Fact | None:
        return self._facts.get(key)

    def keys(self) -> list[str]:
        return list(self._facts)

    def values(self) -> list[Fact]:
        return list(self._facts.values())

    def by_category(self) -> dict[str, list[Fact]]:
        """Group facts by category, preserving insertion order within each group."""
        grouped: dict[str, list[Fact]] = {}
        for fact in self._facts.values():
            grouped.setdefault(fact.category, []).append(fact)
        return grouped

    def clear(self) -> None:
        self._facts.clear()

    def to_list(self) -> list[dict[str, Any]]:
        """JSON-safe dump used by session export."""
        return [fact.model_dump(mode="json") for fact in self._facts.values()]

    def __contains__(self, key: object) -> bool:
        return key in self._facts

    def __iter__(self) -> Iterator[Fact]:
        return iter(list(self._facts.values()))

    def __len__(self) -> int:
        return len(self._facts)
