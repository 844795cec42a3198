# scope_intake/conversation/session.py
"""
Conversation session: the owner of one interview's state.

The session wires the extractor, fact store, closure tracker and
intelligence record together, guards question generation so at most one
request is outstanding, and exports/imports a JSON-safe snapshot.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Protocol

from scope_intake.config.schema import ScopeIntakeConfig
from scope_intake.errors import (
    InvalidUpstreamResponseError,
    QuestionGenerationError,
    QuestionGenerationInFlightError,
    StateImportError,
)
from scope_intake.features.catalog import FeatureCatalog, build_default_catalog
from scope_intake.features.resolver import FeatureResolver, SelectionReport
from scope_intake.models.facts import Fact, FactStore
from scope_intake.models.intelligence import IntelligenceRecord
from scope_intake.models.upstream import UpstreamResponse, parse_upstream_response
from scope_intake.scope.schemas import ScopeDocument
from scope_intake.scope.synthesizer import ScopeSynthesizer

from .closure import TopicClosureTracker
from .context import Exchange, QuestionContext, build_question_context
from .extractor import FactExtractor, QuestionMetadata
from .progress import ScopeProgress, calculate_section_progress, progress_from_question_count
from .topics import TopicCatalog, build_default_topic_catalog
from .validation_triggers import ValidationPrompt, should_trigger_validation

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = 1


class QuestionGenerator(Protocol):
    """Anything that can turn a QuestionContext into a raw upstream reply."""

    async def generate(self, context: QuestionContext) -> str: ...


class ConversationSession:
    """
    State for one intake conversation.

    The intelligence record is mutated only through submit_answer,
    set_foundation, select_features and update_intelligence.
    """

    def __init__(
        self,
        conversation_id: str,
        topic_catalog: TopicCatalog | None = None,
        feature_catalog: FeatureCatalog | None = None,
        generator: QuestionGenerator | None = None,
        config: ScopeIntakeConfig | None = None,
    ) -> None:
        self.conversation_id = conversation_id
        self.config = config or ScopeIntakeConfig()
        self.topic_catalog = topic_catalog or build_default_topic_catalog()
        self.feature_catalog = feature_catalog or build_default_catalog()
        self.resolver = FeatureResolver(self.feature_catalog)
        self.generator = generator

        self.extractor = FactExtractor()
        self.fact_store = FactStore()
        self.history: list[Exchange] = []
        self.intelligence = IntelligenceRecord()
        self.tracker = TopicClosureTracker(
            self.topic_catalog, recent_window=self.config.conversation.recent_topic_window
        )
        self.is_complete = False
        self.last_category: str | None = None
        self._generation_lock = asyncio.Lock()

        logger.info(f"Session created: {conversation_id}")

    # Answers and record updates

    def submit_answer(
        self,
        question_id: str,
        question_text: str,
        answer_text: str,
        metadata: QuestionMetadata | dict,
        now: datetime | None = None,
    ) -> list[Fact]:
        """
        Record one answered question.

        Extracted facts are stored (last write wins), projected onto the
        intelligence record, and topic closure is refreshed.

        Returns:
            The facts extracted from this answer
        """
        facts = self._store_facts(question_id, question_text, answer_text, metadata, now)
        topic = self.tracker.record_asked_question(question_text)
        self.history.append(Exchange(
            question_id=question_id,
            question=question_text,
            answer=answer_text,
            timestamp=now or datetime.now(timezone.utc),
            topic=topic,
        ))
        self.tracker.update_closure(self.fact_store)

        if isinstance(metadata, dict):
            self.last_category = metadata.get("category")
        else:
            self.last_category = metadata.category
        return facts

    def set_foundation(
        self,
        name: str,
        email: str,
        phone: str | None = None,
        company_name: str | None = None,
        website_type: str | None = None,
    ) -> None:
        """
        Foundation form handler.

        Each field goes through the extractor like an answer would, but the
        form is not an interview question: history and recency are untouched.
        """
        fields = [
            ("foundation_name", "What is your full name?", name),
            ("foundation_email", "What is your email address?", email),
            ("foundation_phone", "What is your phone number?", phone),
            ("foundation_company", "What is your business or company name?", company_name),
            ("foundation_website_type", "What type of website do you need?", website_type),
        ]
        for question_id, question, value in fields:
            if value:
                self._store_facts(question_id, question, value, {"category": "foundation"}, None)
        self.tracker.update_closure(self.fact_store)

    def _store_facts(self, question_id, question_text, answer_text, metadata, now) -> list[Fact]:
        facts = self.extractor.extract(question_id, question_text, answer_text, metadata, now=now)
        for fact in facts:
            self.fact_store.upsert(fact)
            self.intelligence.apply_fact(fact.key, fact.value)
        return facts

    def select_features(self, feature_ids: list[str]) -> SelectionReport:
        """Replace the feature selection and report what is wrong with it."""
        self.intelligence.selected_features = list(dict.fromkeys(feature_ids))
        report = self.resolver.validate_selection(self.intelligence.selected_features)
        logger.info(
            f"{self.conversation_id}: {len(self.intelligence.selected_features)} features selected"
            f" ({len(report.conflicts)} conflicts)"
        )
        return report

    def update_intelligence(self, **fields: Any) -> None:
        """Set typed record fields directly (validated by pydantic)."""
        unknown = set(fields) - set(IntelligenceRecord.model_fields)
        if unknown:
            raise ValueError(f"Unknown intelligence fields: {sorted(unknown)}")
        merged = self.intelligence.model_dump()
        merged.update(fields)
        self.intelligence = IntelligenceRecord.model_validate(merged)

    def check_validation(self) -> ValidationPrompt | None:
        """Confirmation prompt due after the last answer, if any."""
        return should_trigger_validation(
            self.intelligence, self.last_category or "", self.resolver
        )

    # Progress

    @property
    def question_count(self) -> int:
        return len(self.history)

    def progress(self) -> float:
        return progress_from_question_count(self.question_count, self.is_complete)

    def section_progress(self) -> ScopeProgress:
        return calculate_section_progress(
            self.intelligence, questions_asked=self.question_count, is_complete=self.is_complete
        )

    # Question generation

    def build_context(self, current_question: str = "") -> QuestionContext:
        settings = self.config.conversation
        return build_question_context(
            self.fact_store,
            self.history,
            self.tracker,
            current_question=current_question,
            recent_exchange_count=settings.recent_exchange_count,
            fact_value_preview=settings.fact_value_preview,
        )

    async def next_question(self, current_question: str = "") -> UpstreamResponse:
        """
        Ask the generator for the next step and validate its reply.

        At most one request may be outstanding; a concurrent call fails
        immediately instead of queueing.

        Raises:
            QuestionGenerationInFlightError: Another request is outstanding
            QuestionGenerationError: No generator, or the generator failed
            InvalidUpstreamResponseError: The reply is malformed
        """
        if self._generation_lock.locked():
            raise QuestionGenerationInFlightError(
                f"Question generation already in progress for {self.conversation_id}"
            )
        if self.generator is None:
            raise QuestionGenerationError("No question generator configured")

        async with self._generation_lock:
            context = self.build_context(current_question)
            if context.metrics:
                logger.debug(
                    f"Context {context.metrics.compressed_tokens} tokens "
                    f"({context.metrics.reduction_percent}% smaller than full history)"
                )
            try:
                raw = await self.generator.generate(context)
            except Exception as e:
                raise QuestionGenerationError(f"Question generator failed: {e}") from e

            try:
                response = parse_upstream_response(raw)
            except InvalidUpstreamResponseError as e:
                logger.warning(f"Rejected upstream response for {self.conversation_id}: {e}")
                raise

        if response.action == "complete":
            self.is_complete = True
            logger.info(f"Conversation {self.conversation_id} marked complete")
        return response

    # Admin overrides

    def mark_topic_closed(self, topic: str) -> None:
        self.tracker.mark_topic_closed(topic)

    def unmark_topic(self, topic: str) -> None:
        self.tracker.unmark_topic(topic)

    def reset(self) -> None:
        """Forget everything gathered so far."""
        self.fact_store.clear()
        self.history.clear()
        self.intelligence = IntelligenceRecord()
        self.tracker.reset()
        self.is_complete = False
        self.last_category = None
        logger.info(f"Session reset: {self.conversation_id}")

    # Synthesis

    def synthesize(self, now: datetime | None = None) -> ScopeDocument:
        synthesizer = ScopeSynthesizer(self.feature_catalog, self.config.pricing)
        return synthesizer.synthesize(self.intelligence, self.conversation_id, now=now)

    # Persistence

    def export_state(self) -> dict[str, Any]:
        """JSON-safe snapshot of the session."""
        return {
            "version": SNAPSHOT_VERSION,
            "conversation_id": self.conversation_id,
            "facts": self.fact_store.to_list(),
            "history": [
                {
                    "question_id": exchange.question_id,
                    "question": exchange.question,
                    "answer": exchange.answer,
                    "timestamp": exchange.timestamp.isoformat(),
                    "topic": exchange.topic,
                }
                for exchange in self.history
            ],
            "covered_topics": sorted(self.tracker.state.closed_topics),
            "recent_question_topics": list(self.tracker.state.recent_topics),
            "intelligence": self.intelligence.model_dump(mode="json"),
            "is_complete": self.is_complete,
            "last_category": self.last_category,
        }

    @classmethod
    def import_state(cls, snapshot: dict[str, Any], **kwargs: Any) -> "ConversationSession":
        """
        Rehydrate a session from export_state output.

        Raises:
            StateImportError: If the snapshot is malformed
        """
        if not isinstance(snapshot, dict):
            raise StateImportError(f"Snapshot must be an object, got {type(snapshot).__name__}")
        try:
            conversation_id = str(snapshot["conversation_id"])
            facts = [Fact.model_validate(item) for item in snapshot.get("facts", [])]
            history = [
                Exchange(
                    question_id=str(item["question_id"]),
                    question=str(item["question"]),
                    answer=str(item["answer"]),
                    timestamp=datetime.fromisoformat(item["timestamp"]),
                    topic=str(item.get("topic", "general")),
                )
                for item in snapshot.get("history", [])
            ]
            intelligence = IntelligenceRecord.model_validate(snapshot.get("intelligence", {}))
            closed = list(snapshot.get("covered_topics", []))
            recent = list(snapshot.get("recent_question_topics", []))
        except (KeyError, TypeError, ValueError) as e:
            # pydantic's ValidationError is a ValueError
            raise StateImportError(f"Malformed session snapshot: {e}") from e

        session = cls(conversation_id, **kwargs)
        session.fact_store = FactStore(facts)
        session.history = history
        session.intelligence = intelligence
        session.tracker.restore(closed, recent)
        session.tracker.update_closure(session.fact_store)
        session.is_complete = bool(snapshot.get("is_complete", False))
        session.last_category = snapshot.get("last_category")

        logger.info(
            f"State imported for {conversation_id}: {len(facts)} facts, {len(history)} exchanges"
        )
        return session
