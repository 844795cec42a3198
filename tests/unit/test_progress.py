# tests/unit/test_progress.py
"""Tests for question-count progress and per-section status."""

import pytest

from scope_intake.conversation.progress import (
    SECTION_METADATA,
    calculate_section_progress,
    progress_from_question_count,
)
from scope_intake.models.intelligence import IntelligenceRecord


class TestQuestionCountProgress:
    def test_starts_at_zero(self):
        assert progress_from_question_count(0) == 0.0

    def test_linear_phase(self):
        """Each of the first 10 questions fills 1/14 of the bar."""
        assert progress_from_question_count(1) == 7.14
        assert progress_from_question_count(10) == 71.43

    def test_complete_is_hundred(self):
        assert progress_from_question_count(3, is_complete=True) == 100.0

    @pytest.mark.parametrize("count", [11, 25, 60, 500])
    def test_tail_stays_below_hundred(self, count):
        """Without the completion event progress never reaches 100."""
        assert progress_from_question_count(count) < 100.0

    def test_monotone(self):
        """Progress never decreases as questions are answered."""
        values = [progress_from_question_count(n) for n in range(0, 80)]
        assert values == sorted(values)

    def test_tail_slows_down(self):
        """Each tail question moves the bar 6% of the remaining distance."""
        step_11 = progress_from_question_count(11) - progress_from_question_count(10)
        step_12 = progress_from_question_count(12) - progress_from_question_count(11)
        assert step_11 == pytest.approx(28.57 * 0.06, abs=0.01)
        assert step_12 < step_11


class TestSectionProgress:
    def test_empty_record(self):
        """A blank record has no complete sections."""
        progress = calculate_section_progress(IntelligenceRecord())
        assert len(progress.sections) == len(SECTION_METADATA) == 14
        assert progress.sections_complete == 0
        assert progress.overall_completeness == 0
        assert progress.sections["section1_executive_summary"] == "not_started"
        assert progress.current_section is not None
        assert progress.percent == 0.0

    def test_foundation_starts_sections(self):
        """Name and website type put the executive summary in progress."""
        record = IntelligenceRecord(user_name="Jane", user_email="jane@example.com", website_type="blog")
        progress = calculate_section_progress(record)
        assert progress.sections["section1_executive_summary"] == "in_progress"
        assert progress.sections["section3_client_information"] == "in_progress"
        assert progress.sections["section2_project_classification"] == "in_progress"

    def test_features_complete_two_sections(self):
        """A feature selection completes the features and investment sections."""
        record = IntelligenceRecord(selected_features=["contact_form"])
        progress = calculate_section_progress(record)
        assert progress.sections["section10_features_breakdown"] == "complete"
        assert progress.sections["section13_investment_summary"] == "complete"
        assert progress.sections_complete >= 2

    def test_validation_section_follows_completion(self):
        record = IntelligenceRecord()
        assert calculate_section_progress(record).sections["section14_validation_outcomes"] == "not_started"
        done = calculate_section_progress(record, questions_asked=20, is_complete=True)
        assert done.sections["section14_validation_outcomes"] == "complete"
        assert done.percent == 100.0

    def test_estimate_shrinks_as_sections_complete(self):
        """Completing sections lowers the remaining-question estimate."""
        blank = calculate_section_progress(IntelligenceRecord(website_type="service"))
        fuller = calculate_section_progress(IntelligenceRecord(
            website_type="service",
            industry="Plumbing",
            user_name="Jane",
            user_email="jane@example.com",
            user_phone="555-0100",
            company_name="Pipes Inc",
            selected_features=["contact_form"],
        ))
        assert fuller.estimated_questions_remaining < blank.estimated_questions_remaining
