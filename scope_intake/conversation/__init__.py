# scope_intake/conversation/__init__.py
"""Interview state: fact extraction, topic closure, context and progress."""

from .closure import ClosureState, TopicClosureTracker
from .context import Exchange, QuestionContext, TokenMetrics, build_question_context
from .extractor import FactExtractor, QuestionMetadata
from .progress import ScopeProgress, calculate_section_progress, progress_from_question_count
from .session import ConversationSession, QuestionGenerator
from .topics import GENERAL_TOPIC, TopicCatalog, TopicMapping, build_default_topic_catalog
from .validation_triggers import ValidationPrompt, should_trigger_validation

__all__ = [
    "ClosureState",
    "TopicClosureTracker",
    "Exchange",
    "QuestionContext",
    "TokenMetrics",
    "build_question_context",
    "FactExtractor",
    "QuestionMetadata",
    "ScopeProgress",
    "calculate_section_progress",
    "progress_from_question_count",
    "ConversationSession",
    "QuestionGenerator",
    "GENERAL_TOPIC",
    "TopicCatalog",
    "TopicMapping",
    "build_default_topic_catalog",
    "ValidationPrompt",
    "should_trigger_validation",
]
