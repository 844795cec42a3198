# scope_intake/config/__init__.py
"""Configuration system for scope-intake."""

from .loader import get_config_path, load_config
from .schema import (
    ConversationConfig,
    OllamaConfig,
    OutputConfig,
    PricingConfig,
    ScopeIntakeConfig,
)

__all__ = [
    "ScopeIntakeConfig",
    "OllamaConfig",
    "ConversationConfig",
    "PricingConfig",
    "OutputConfig",
    "load_config",
    "get_config_path",
]
