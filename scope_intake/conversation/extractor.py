# scope_intake/conversation/extractor.py
"""
Fact extraction from a single question/answer pair.

Each question category has an ordered rule list. Keyword rules look at the
lower-cased question text and store the trimmed answer; pattern rules scan
the answer and keep only the first matching pattern. When no rule fires,
a generic `answer_<slug>` fact is synthesized so no answer is dropped.
"""

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone

from scope_intake.models.facts import Fact, FactCategory

logger = logging.getLogger(__name__)

FALLBACK_CONFIDENCE = 0.8
SLUG_MAX_LENGTH = 50


@dataclass(frozen=True)
class QuestionMetadata:
    """Routing metadata that accompanies a question."""

    category: str
    scope_section: str | None = None


@dataclass(frozen=True)
class KeywordRule:
    """Emit `key` with the trimmed answer when `predicate(lower_question)` holds."""

    key: str
    category: FactCategory
    confidence: float
    predicate: Callable[[str], bool]


@dataclass(frozen=True)
class PatternRule:
    """Emit `key` with the text of the first pattern that matches the answer."""

    key: str
    category: FactCategory
    confidence: float
    patterns: tuple[re.Pattern[str], ...]

    def first_match(self, answer: str) -> str | None:
        for pattern in self.patterns:
            match = pattern.search(answer)
            if match:
                return match.group(0)
        return None


def _contains_any(*words: str) -> Callable[[str], bool]:
    return lambda text: any(word in text for word in words)


def _names_business(text: str) -> bool:
    return "name" in text and ("business" in text or "company" in text)


FOUNDATION_KEYS: dict[str, str] = {
    "foundation_name": "contact_name",
    "foundation_email": "contact_email",
    "foundation_phone": "contact_phone",
    "foundation_website_type": "website_type",
}

FOUNDATION_RULES: tuple[KeywordRule, ...] = (
    KeywordRule("business_name", "business", 1.0, _names_business),
)

BUSINESS_RULES: tuple[KeywordRule, ...] = (
    KeywordRule("business_name", "business", 1.0, _names_business),
    KeywordRule("target_audience", "business", 0.9, _contains_any("customer", "audience", "who")),
    KeywordRule(
        "services_offered", "business", 0.9, _contains_any("service", "offer", "provide", "help")
    ),
    KeywordRule("project_purpose", "business", 0.9, _contains_any("goal", "objective", "purpose")),
)

# Later patterns overlap earlier ones; only the first match is kept.
TIMELINE_RULE = PatternRule(
    "project_timeline",
    "timeline",
    0.8,
    (
        re.compile(r"in (\d+) months?", re.IGNORECASE),
        re.compile(r"within (\d+) weeks?", re.IGNORECASE),
        re.compile(r"by ([A-Za-z]+ \d{4})", re.IGNORECASE),
        re.compile(r"(urgent|asap|immediately)", re.IGNORECASE),
        re.compile(r"(\d+) days?", re.IGNORECASE),
    ),
)

BUDGET_RULE = PatternRule(
    "budget_indication",
    "budget",
    0.7,
    (
        re.compile(r"\$[\d,]+k?"),
        re.compile(r"(budget|spend|invest).{0,30}(\d+k?)", re.IGNORECASE),
        re.compile(r"(tight|limited|flexible|unlimited) budget", re.IGNORECASE),
        re.compile(r"under.*\d+", re.IGNORECASE),
        re.compile(r"\d+.*to.*\d+", re.IGNORECASE),
    ),
)

TECHNICAL_RULES: tuple[KeywordRule, ...] = (
    KeywordRule(
        "auth_method",
        "technical",
        0.9,
        _contains_any("login", "authentication", "sign in", "auth"),
    ),
    KeywordRule("platform", "technical", 0.9, _contains_any("platform", "device", "mobile", "web")),
    KeywordRule(
        "cms_type",
        "technical",
        0.9,
        lambda text: "cms" in text or ("content" in text and "update" in text),
    ),
    KeywordRule(
        "payment_provider",
        "technical",
        0.9,
        _contains_any("payment", "billing", "checkout", "stripe", "paypal"),
    ),
)

DESIGN_RULES: tuple[KeywordRule, ...] = (
    KeywordRule(
        "existing_branding",
        "business",
        0.9,
        lambda text: "brand" in text and any(w in text for w in ("material", "logo", "upload")),
    ),
    KeywordRule(
        "design_style", "business", 0.9, _contains_any("design", "style", "look", "aesthetic")
    ),
)

CATEGORY_ALIASES: dict[str, str] = {
    "foundation": "foundation",
    "feature_selection": "features",
    "features": "features",
    "business_context": "business",
    "business": "business",
    "technical": "technical",
    "technical_requirements": "technical",
    "design": "design",
    "brand_assets": "design",
}


def slugify_question(question_text: str) -> str:
    """Slug used for fallback fact keys (without the `answer_` prefix)."""
    slug = re.sub(r"[^a-z0-9]+", "_", question_text.lower()).strip("_")
    return slug[:SLUG_MAX_LENGTH] or "answer"


class FactExtractor:
    """
    Converts one question/answer pair into typed facts.

    Stateless: storing the facts (last-write-wins by key) is the caller's job.
    Fact ids are derived from question id and key, so repeating an
    extraction produces the same keys and ids.
    """

    def extract(
        self,
        question_id: str,
        question_text: str,
        answer_text: str,
        metadata: QuestionMetadata | dict,
        now: datetime | None = None,
    ) -> list[Fact]:
        """
        Extract facts from an answer.

        Args:
            question_id: Question identifier (becomes source_question_id)
            question_text: Question as shown to the client
            answer_text: Raw answer
            metadata: Category and scope section of the question
            now: Extraction timestamp (defaults to current UTC time)

        Returns:
            Facts in rule order; empty only for blank answers
        """
        if isinstance(metadata, dict):
            metadata = QuestionMetadata(
                category=metadata.get("category", ""),
                scope_section=metadata.get("scope_section") or metadata.get("scopeSection"),
            )

        answer = answer_text.strip()
        if not answer:
            logger.debug(f"Blank answer to {question_id}; no facts extracted")
            return []

        extracted_at = now or datetime.now(timezone.utc)
        lower_question = question_text.lower()
        rule_set = CATEGORY_ALIASES.get(metadata.category)

        pairs: list[tuple[str, FactCategory, float, str]] = []
        if rule_set == "foundation":
            pairs.extend(self._foundation(question_id, lower_question, answer))
        elif rule_set == "features":
            pairs.append((f"selected_{question_id}", "feature", 1.0, answer))
        elif rule_set == "business":
            pairs.extend(self._keyword_rules(BUSINESS_RULES, lower_question, answer))
            pairs.extend(self._pattern_rule(TIMELINE_RULE, answer))
            pairs.extend(self._pattern_rule(BUDGET_RULE, answer))
        elif rule_set == "technical":
            pairs.extend(self._keyword_rules(TECHNICAL_RULES, lower_question, answer))
        elif rule_set == "design":
            pairs.extend(self._keyword_rules(DESIGN_RULES, lower_question, answer))

        if not pairs:
            category: FactCategory = "technical" if metadata.category == "technical" else "business"
            key = f"answer_{slugify_question(question_text)}"
            pairs.append((key, category, FALLBACK_CONFIDENCE, answer))
            logger.debug(f"No rule matched {question_id}; fallback fact '{key}'")

        facts = [
            Fact(
                id=f"fact_{question_id}_{key}",
                category=category,
                key=key,
                value=value,
                confidence=confidence,
                source_question_id=question_id,
                extracted_at=extracted_at,
            )
            for key, category, confidence, value in pairs
        ]
        logger.debug(f"Extracted {len(facts)} facts from {question_id}: {[f.key for f in facts]}")
        return facts

    @staticmethod
    def _foundation(question_id: str, lower_question: str, answer: str):
        key = FOUNDATION_KEYS.get(question_id)
        if key is not None:
            return [(key, "business", 1.0, answer)]
        return FactExtractor._keyword_rules(FOUNDATION_RULES, lower_question, answer)

    @staticmethod
    def _keyword_rules(rules: tuple[KeywordRule, ...], lower_question: str, answer: str):
        return [
            (rule.key, rule.category, rule.confidence, answer)
            for rule in rules
            if rule.predicate(lower_question)
        ]

    @staticmethod
    def _pattern_rule(rule: PatternRule, answer: str):
        matched = rule.first_match(answer)
        if matched is None:
            return []
        return [(rule.key, rule.category, rule.confidence, matched)]
