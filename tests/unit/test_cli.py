# tests/unit/test_cli.py
"""
CLI unit tests.

Tests each command via typer's CliRunner. Config loading and logging setup
are patched out so nothing touches the user's config directory.
"""

import json
from unittest.mock import AsyncMock, patch

import pytest
from typer.testing import CliRunner

from scope_intake.cli import app
from scope_intake.config import ScopeIntakeConfig
from scope_intake.conversation.session import ConversationSession
from scope_intake.llm.client import OllamaQuestionGenerator

runner = CliRunner()

WIDE = {"COLUMNS": "200"}


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _isolated_config():
    with patch("scope_intake.cli.load_config", return_value=ScopeIntakeConfig()), \
         patch("scope_intake.cli.configure_logging"):
        yield


def _write_snapshot(tmp_path, record):
    session = ConversationSession("conv-123")
    session.intelligence = record
    path = tmp_path / "session.json"
    path.write_text(json.dumps(session.export_state()))
    return path


@pytest.fixture
def snapshot(tmp_path, ecommerce_record):
    return _write_snapshot(tmp_path, ecommerce_record)


# ---------------------------------------------------------------------------
# Catalog commands
# ---------------------------------------------------------------------------

class TestCatalogCommands:
    def test_help(self):
        result = runner.invoke(app, ["--help"], env=WIDE)
        assert result.exit_code == 0
        for command in ("topics", "features", "price", "progress", "synthesize", "validate"):
            assert command in result.output

    def test_topics(self):
        result = runner.invoke(app, ["topics"], env=WIDE)
        assert result.exit_code == 0
        assert "payment_processing" in result.output
        assert "3 of 4" in result.output

    def test_features_by_type(self):
        result = runner.invoke(app, ["features", "--type", "ecommerce"], env=WIDE)
        assert result.exit_code == 0
        assert "shopping_cart" in result.output
        assert "$1,200 add-on" in result.output
        assert "booking_system" not in result.output

    def test_price_with_bundle(self):
        """The e-commerce trio at custom tier: 1,800 less the 300 bundle discount."""
        result = runner.invoke(
            app,
            ["price", "shopping_cart", "payment_processing", "product_catalog", "--tier", "custom"],
            env=WIDE,
        )
        assert result.exit_code == 0
        assert "Subtotal: $1,800" in result.output
        assert "Bundle: E-commerce Essentials Bundle (-$300)" in result.output
        assert "Total: $1,500" in result.output

    def test_price_reports_problems(self):
        result = runner.invoke(app, ["price", "payment_processing", "teleporter"], env=WIDE)
        assert result.exit_code == 0
        assert "Unknown feature: teleporter" in result.output
        assert "Missing dependency: payment_processing needs shopping_cart" in result.output

    def test_progress(self):
        result = runner.invoke(app, ["progress", "10"])
        assert result.exit_code == 0
        assert "Progress: 71.43%" in result.output

    def test_progress_complete(self):
        result = runner.invoke(app, ["progress", "3", "--complete"])
        assert "Progress: 100.00%" in result.output


# ---------------------------------------------------------------------------
# Document commands
# ---------------------------------------------------------------------------

class TestSynthesize:
    def test_markdown_to_stdout(self, snapshot):
        result = runner.invoke(app, ["synthesize", str(snapshot)], env=WIDE)
        assert result.exit_code == 0, result.output
        assert "# PROJECT SCOPE DOCUMENT" in result.output
        assert "$10,000" in result.output

    def test_json_to_file(self, snapshot, tmp_path):
        out = tmp_path / "scope.json"
        result = runner.invoke(app, ["synthesize", str(snapshot), "-f", "json", "-o", str(out)], env=WIDE)
        assert result.exit_code == 0, result.output
        data = json.loads(out.read_text())
        assert data["conversation_id"] == "conv-123"
        assert data["investment_summary"]["total_project_investment"] == 10000

    def test_html_to_file(self, snapshot, tmp_path):
        out = tmp_path / "summary.html"
        result = runner.invoke(app, ["synthesize", str(snapshot), "--format", "html", "-o", str(out)])
        assert result.exit_code == 0, result.output
        assert out.read_text().startswith("<!DOCTYPE html>")

    def test_unknown_format(self, snapshot):
        result = runner.invoke(app, ["synthesize", str(snapshot), "-f", "pdf"])
        assert result.exit_code == 1

    def test_malformed_snapshot(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        result = runner.invoke(app, ["synthesize", str(path)])
        assert result.exit_code == 1

    def test_incomplete_record(self, tmp_path):
        """Without name, email and website type no document is produced."""
        from scope_intake.models.intelligence import IntelligenceRecord

        path = _write_snapshot(tmp_path, IntelligenceRecord(company_name="Wick & Co"))
        result = runner.invoke(app, ["synthesize", str(path)])
        assert result.exit_code == 1
        assert "PROJECT SCOPE DOCUMENT" not in result.output


class TestValidate:
    def test_valid_document(self, snapshot):
        result = runner.invoke(app, ["validate", str(snapshot)], env=WIDE)
        assert result.exit_code == 0, result.output
        assert "Completeness: 100%" in result.output
        assert "Document is valid" in result.output

    def test_invalid_email_fails(self, tmp_path, ecommerce_record):
        record = ecommerce_record.model_copy(update={"user_email": "not-an-email"})
        path = _write_snapshot(tmp_path, record)
        result = runner.invoke(app, ["validate", str(path)], env=WIDE)
        assert result.exit_code == 1
        assert "Document has 1 errors" in result.output


# ---------------------------------------------------------------------------
# Model commands
# ---------------------------------------------------------------------------

class TestModelCommands:
    def test_health_ok(self):
        with patch.object(OllamaQuestionGenerator, "health_check", new_callable=AsyncMock) as mock_health:
            mock_health.return_value = True
            result = runner.invoke(app, ["health"])
        assert result.exit_code == 0
        assert "Ollama reachable at http://localhost:11434" in result.output

    def test_health_down(self):
        with patch.object(OllamaQuestionGenerator, "health_check", new_callable=AsyncMock) as mock_health:
            mock_health.return_value = False
            result = runner.invoke(app, ["health"])
        assert result.exit_code == 1

    def test_ask_prints_response(self, snapshot):
        reply = json.dumps({
            "action": "complete",
            "sufficiency_evaluation": {"is_sufficient": True},
        })
        with patch.object(OllamaQuestionGenerator, "generate", new_callable=AsyncMock) as mock_generate:
            mock_generate.return_value = reply
            result = runner.invoke(app, ["ask", str(snapshot), "--question", "Anything else?"])
        assert result.exit_code == 0, result.output
        assert '"action": "complete"' in result.output
        assert mock_generate.call_args.args[0].current_question == "Anything else?"

    def test_ask_invalid_reply(self, snapshot):
        with patch.object(OllamaQuestionGenerator, "generate", new_callable=AsyncMock) as mock_generate:
            mock_generate.return_value = "no json here"
            result = runner.invoke(app, ["ask", str(snapshot)])
        assert result.exit_code == 1
