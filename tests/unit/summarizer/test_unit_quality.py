# tests/unit/summarizer/test_unit_quality.py - v1
"""Tests for summarizer/quality.py."""

from __future__ import annotations

import pytest

from myday.summarizer.quality import (
    POINTS_PER_FACTOR,
    QualityPolicy,
    assess_quality,
    is_generic,
    recommendations_for,
)

_GOOD_TEXT = "INFRA-101: Completed Terraform deployment to AWS and validated the VPC"


class TestAssessQuality:
    def test_full_marks(self):
        quality = assess_quality(_GOOD_TEXT, ["AWS", "Terraform"], 1, 1)
        assert quality.score == 100
        assert all(f.passed for f in quality.factors)
        assert quality.recommendations == [
            "Excellent summary quality! Keep up the detailed documentation"
        ]

    def test_count_statement_scores_zero(self):
        quality = assess_quality("Recent activity: 1 issues, 0 comments", [], 1, 0)
        assert quality.score == 0
        assert len(quality.recommendations) == 3

    def test_factor_details(self):
        quality = assess_quality("short", [], 0, 0)
        details = {f.name: f.detail for f in quality.factors}
        assert details == {
            "length": "Summary might be too brief",
            "specificity": "Contains meaningful content",
            "technical_terms": "Limited technical context",
            "data_completeness": "Limited data available",
        }
        assert quality.score == POINTS_PER_FACTOR

    def test_too_verbose(self):
        quality = assess_quality("word " * 80, ["AWS"], 1, 1)
        length = next(f for f in quality.factors if f.name == "length")
        assert length.passed is False
        assert length.detail == "Summary might be too verbose"

    def test_custom_policy(self):
        quality = assess_quality("tiny text", [], 1, 1, QualityPolicy(min_length=5))
        assert next(f for f in quality.factors if f.name == "length").passed

    @pytest.mark.parametrize(
        "text,terms,issues,comments",
        [
            ("", [], 0, 0),
            (_GOOD_TEXT, ["AWS"], 1, 1),
            (_GOOD_TEXT, [], 1, 0),
            ("x" * 1000, ["AWS"], 3, 0),
        ],
    )
    def test_score_is_bounded_multiple(self, text, terms, issues, comments):
        score = assess_quality(text, terms, issues, comments).score
        assert 0 <= score <= 100
        assert score % POINTS_PER_FACTOR == 0


class TestIsGeneric:
    @pytest.mark.parametrize(
        "text",
        [
            "",
            "Recent activity: 2 issues, 3 comments",
            "Recent activity: 2 issues, 3 comments, 1 worklog entries",
            "No recent activity.",
            "Multiple comments added",
        ],
    )
    def test_generic(self, text):
        assert is_generic(text) is True

    def test_specific(self):
        assert is_generic(_GOOD_TEXT) is False


class TestRecommendations:
    def test_bands(self):
        assert len(recommendations_for(25)) == 3
        assert recommendations_for(50)[0].startswith("Good summary quality")
        assert recommendations_for(75)[0].startswith("Excellent")
