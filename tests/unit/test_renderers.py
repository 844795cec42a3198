# tests/unit/test_renderers.py
"""Tests for markdown rendering and the client summary."""

from datetime import datetime

from scope_intake.scope.client_summary import build_client_summary, render_client_summary_html
from scope_intake.scope.markdown import SECTION_SEPARATOR, format_date, render_markdown


class TestMarkdown:
    def test_header_sections_footer(self, scope_document):
        """Header, 14 numbered sections and the footer, separated by rules."""
        markdown = render_markdown(scope_document)
        blocks = markdown.split(SECTION_SEPARATOR)
        assert len(blocks) == 16
        assert blocks[0].startswith("# PROJECT SCOPE DOCUMENT")
        for number in range(1, 15):
            assert blocks[number].startswith(f"## Section {number}:")
        assert blocks[-1].startswith("## Document Information")

    def test_key_figures_rendered(self, scope_document):
        markdown = render_markdown(scope_document)
        assert "**Generated:** March 5, 2026" in markdown
        assert "**Project Complexity:** COMPLEX (score 7)" in markdown
        assert "**One-Time Project Cost:** $10,000" in markdown
        assert "**Estimated ROI:** 782%" in markdown
        assert "E-commerce Essentials Bundle" in markdown

    def test_agency_name_in_footer(self, scope_document):
        markdown = render_markdown(scope_document, agency_name="Northwind Studio")
        assert "generated by the Northwind Studio client intake system" in markdown

    def test_format_date(self):
        assert format_date(datetime(2026, 11, 2)) == "November 2, 2026"


class TestClientSummary:
    def test_summary_fields(self, scope_document):
        summary = build_client_summary(scope_document)
        assert summary.project_name == "Wick & Co"
        assert summary.client_name == "Jane Doe"
        assert summary.summary_date == "March 5, 2026"
        assert summary.investment.total_investment == 10000
        assert summary.investment.first_year_investment == 13600
        assert len(summary.next_steps) == 5
        assert len(summary.key_features) == 6
        assert summary.agency_name == "Applicreations"

    def test_content_step_follows_provider(self, scope_document):
        """Non-client content providers coordinate with the agency."""
        summary = build_client_summary(scope_document, agency_name="Northwind")
        assert "coordinate with Northwind" in summary.next_steps[3]

    def test_html_is_escaped(self, scope_document):
        """Text is HTML-escaped, so the ampersand in the name is encoded."""
        html = render_client_summary_html(build_client_summary(scope_document))
        assert html.startswith("<!DOCTYPE html>")
        assert "<h1>Wick &amp; Co</h1>" in html
        assert "$10,000" in html
        assert html.count("<li>") == 6 + 5
