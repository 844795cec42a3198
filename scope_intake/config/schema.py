# scope_intake/config/schema.py
"""
Pydantic configuration models for scope-intake.

All models use extra="ignore" to allow unknown YAML keys without crashing.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class OllamaConfig(BaseModel):
    """Ollama server configuration for the question generator."""

    model_config = ConfigDict(extra="ignore")

    base_url: str = Field(
        default="http://localhost:11434", description="Ollama API base URL"
    )
    model: str = Field(
        default="qwen2.5:14b-instruct",
        description="Ollama model used to phrase the next interview question",
    )
    timeout: int = Field(
        default=120, description="Request timeout in seconds (includes model loading)"
    )
    temperature: float = Field(
        default=0.4,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for question generation",
    )


class ConversationConfig(BaseModel):
    """Conversation context shaping."""

    model_config = ConfigDict(extra="ignore")

    recent_topic_window: int = Field(
        default=5,
        ge=1,
        le=20,
        description="How many recently asked topics to remember",
    )
    recent_exchange_count: int = Field(
        default=2,
        ge=0,
        le=10,
        description="Q/A exchanges included verbatim in the question context",
    )
    fact_value_preview: int = Field(
        default=60,
        ge=10,
        description="Fact values longer than this are truncated in the fact summary",
    )


class PricingConfig(BaseModel):
    """Package and hosting prices (USD)."""

    model_config = ConfigDict(extra="ignore")

    package_prices: dict[str, int] = Field(
        default_factory=lambda: {"starter": 2500, "professional": 4500, "custom": 6000},
        description="One-off base price per package tier",
    )
    hosting_prices: dict[str, int] = Field(
        default_factory=lambda: {"starter": 75, "professional": 150, "custom": 300},
        description="Monthly hosting price per hosting tier",
    )
    agency_name: str = Field(
        default="Applicreations",
        description="Agency name used in narrative maintenance and content text",
    )


class OutputConfig(BaseModel):
    """Output and file path configuration."""

    model_config = ConfigDict(extra="ignore")

    scope_dir: str = Field(
        default=".scope-intake/scopes",
        description="Directory for generated scope documents (relative to cwd)",
    )
    verbosity: Literal["quiet", "normal", "verbose"] = Field(
        default="normal", description="Logging verbosity level"
    )


class ScopeIntakeConfig(BaseModel):
    """Root configuration for scope-intake."""

    model_config = ConfigDict(extra="ignore")

    ollama: OllamaConfig = Field(default_factory=OllamaConfig)
    conversation: ConversationConfig = Field(default_factory=ConversationConfig)
    pricing: PricingConfig = Field(default_factory=PricingConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
