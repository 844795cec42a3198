# scope_intake/errors.py
"""Typed errors raised by the intake engine."""


class ScopeIntakeError(Exception):
    """Base class for all scope-intake errors."""


class ScopeCompletenessError(ScopeIntakeError):
    """Raised when foundation fields are missing before document synthesis."""

    def __init__(self, missing_fields: list[str]):
        self.missing_fields = list(missing_fields)
        super().__init__(
            "Cannot generate scope document: Missing required fields: "
            + ", ".join(self.missing_fields)
        )


class InvalidUpstreamResponseError(ScopeIntakeError):
    """Raised when the question generator returns malformed output."""

    def __init__(self, message: str, raw_output: str | None = None):
        self.raw_output = raw_output
        super().__init__(message)


class QuestionGenerationError(ScopeIntakeError):
    """Raised when the question generator call itself fails."""


class QuestionGenerationInFlightError(ScopeIntakeError):
    """Raised when a second question is requested while one is outstanding."""


class UnknownTopicError(ScopeIntakeError):
    """Raised when an administrative override names a topic not in the catalog."""

    def __init__(self, topic: str):
        self.topic = topic
        super().__init__(f"Unknown topic: {topic}")


class StateImportError(ScopeIntakeError):
    """Raised when an exported session snapshot can't be rehydrated."""
