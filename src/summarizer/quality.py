# src/summarizer/quality.py - v1
"""Composite 0-100 quality score for generated summaries.

Four independent factors worth 25 points each:
    length            - text length inside the policy window
    specificity       - text is more than a bare count statement
    technical_terms   - at least one dictionary term was found
    data_completeness - both issues and comments were supplied
"""

from __future__ import annotations

import re

from pydantic import BaseModel

from myday.summarizer.models import QualityAssessment, QualityFactor

POINTS_PER_FACTOR = 25

_COUNT_STATEMENT = re.compile(
    r"^\s*recent activity:\s*\d+ [a-z ]+?(?:,\s*\d+ [a-z ]+?)*\.?\s*$",
    re.IGNORECASE,
)
_GENERIC_PHRASES = (
    "no recent activity to report",
    "no recent activity",
    "multiple comments added",
)


class QualityPolicy(BaseModel):
    """Length window considered appropriate for a summary."""

    min_length: int = 50
    max_length: int = 300


DEFAULT_POLICY = QualityPolicy()


def is_generic(text: str) -> bool:
    """True for empty text, bare count statements and stock filler lines."""
    stripped = text.strip()
    if not stripped:
        return True
    if _COUNT_STATEMENT.match(stripped):
        return True
    return stripped.lower().rstrip(".") in _GENERIC_PHRASES


def assess_quality(
    text: str,
    technical_terms: list[str],
    issue_count: int,
    comment_count: int,
    policy: QualityPolicy = DEFAULT_POLICY,
) -> QualityAssessment:
    """Score a summary and attach recommendations for its score band."""
    length = len(text)
    if length < policy.min_length:
        length_detail = "Summary might be too brief"
    elif length > policy.max_length:
        length_detail = "Summary might be too verbose"
    else:
        length_detail = "Appropriate length"

    generic = is_generic(text)
    complete = issue_count > 0 and comment_count > 0
    factors = [
        _factor("length", policy.min_length <= length <= policy.max_length, length_detail),
        _factor(
            "specificity",
            not generic,
            "May be too generic" if generic else "Contains meaningful content",
        ),
        _factor(
            "technical_terms",
            bool(technical_terms),
            f"Contains {len(technical_terms)} technical terms"
            if technical_terms else "Limited technical context",
        ),
        _factor(
            "data_completeness",
            complete,
            "Complete data available" if complete else "Limited data available",
        ),
    ]

    score = sum(f.points for f in factors)
    return QualityAssessment(
        score=score,
        factors=factors,
        recommendations=recommendations_for(score),
    )


def _factor(name: str, passed: bool, detail: str) -> QualityFactor:
    return QualityFactor(
        name=name,  # type: ignore[arg-type]
        passed=passed,
        points=POINTS_PER_FACTOR if passed else 0,
        detail=detail,
    )


def recommendations_for(score: int) -> list[str]:
    """Human-readable advice keyed to the score band."""
    if score < 50:
        return [
            "Consider adding more detailed comments to tickets",
            "Include technical terms and specific actions in comments",
            "Ensure tickets are updated regularly",
        ]
    if score < 75:
        return [
            "Good summary quality, consider adding more technical details",
            "Include deployment status and environment information",
        ]
    return ["Excellent summary quality! Keep up the detailed documentation"]
