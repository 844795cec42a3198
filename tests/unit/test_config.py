# tests/unit/test_config.py
"""Tests for YAML config loading with auto-created defaults."""

from unittest.mock import patch

import pytest
import yaml
from pydantic import ValidationError

from scope_intake.config import ScopeIntakeConfig, load_config


class TestLoadConfig:
    def test_creates_default_file(self, tmp_path):
        """A missing config file is written with defaults."""
        config_path = tmp_path / "config.yaml"
        with patch("scope_intake.config.loader.get_config_path", return_value=config_path):
            config = load_config()

        assert config == ScopeIntakeConfig()
        assert config_path.exists()
        written = yaml.safe_load(config_path.read_text())
        assert written["pricing"]["package_prices"]["custom"] == 6000
        assert written["conversation"]["recent_topic_window"] == 5

    def test_reads_overrides(self, tmp_path):
        """Values in the file override defaults; unknown keys are ignored."""
        config_path = tmp_path / "config.yaml"
        config_path.write_text(yaml.safe_dump({
            "ollama": {"model": "llama3.1:8b", "surprise": True},
            "pricing": {"agency_name": "Northwind"},
            "conversation": {"recent_topic_window": 3},
        }))

        config = load_config(config_path)

        assert config.ollama.model == "llama3.1:8b"
        assert config.pricing.agency_name == "Northwind"
        assert config.pricing.hosting_prices["starter"] == 75
        assert config.conversation.recent_topic_window == 3

    def test_empty_file_gives_defaults(self, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("")
        assert load_config(config_path) == ScopeIntakeConfig()

    def test_out_of_range_rejected(self, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text(yaml.safe_dump({"conversation": {"recent_topic_window": 0}}))
        with pytest.raises(ValidationError):
            load_config(config_path)


class TestConfigWiring:
    def test_session_uses_recent_window(self):
        """The configured window bounds the session's recency queue."""
        from scope_intake.conversation.session import ConversationSession

        config = ScopeIntakeConfig(conversation={"recent_topic_window": 2})
        session = ConversationSession("conv-1", config=config)
        for n, question in enumerate(["Payment?", "Hosting?", "Search?"]):
            session.submit_answer(f"q{n}", question, "yes", {"category": "technical"})
        assert list(session.tracker.state.recent_topics) == ["hosting_infrastructure", "search_discovery"]
