# scope_intake/llm/__init__.py
"""Question generator adapter backed by a local Ollama server."""

from .client import OllamaQuestionGenerator
from .retry import is_retryable, ollama_retry

__all__ = ["OllamaQuestionGenerator", "is_retryable", "ollama_retry"]
