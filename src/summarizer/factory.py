# src/summarizer/factory.py - v1
"""Factory for summarizer instantiation."""

from __future__ import annotations

from myday.summarizer.base_summarizer import BaseSummarizer, SummarizationConfigError
from myday.summarizer.models import StyleConfig
from myday.summarizer.vocabulary import Vocabulary

SUMMARIZER_MODES: tuple[str, ...] = ("embedded", "disabled")


def create_summarizer(
    style: StyleConfig | None = None,
    mode: str = "embedded",
    vocabulary: Vocabulary | None = None,
    min_meaningful_chars: int = 3,
) -> BaseSummarizer:
    """Instantiate the configured summarizer.

    Args:
        style: Style configuration passed to the summarizer's constructor.
        mode: Backend identifier ('embedded' or 'disabled').
        vocabulary: Custom word lists for the rule engine.
        min_meaningful_chars: Threshold for comments the engine narrates.

    Raises:
        SummarizationConfigError: If mode is not recognized.
    """
    if mode == "embedded":
        from myday.summarizer.rule_engine import RuleBasedSummarizer
        return RuleBasedSummarizer(
            style=style, vocabulary=vocabulary, min_meaningful_chars=min_meaningful_chars
        )

    if mode == "disabled":
        from myday.summarizer.disabled import DisabledSummarizer
        return DisabledSummarizer(style=style)

    raise SummarizationConfigError(
        f"Unknown summarization mode {mode!r}; expected one of: {', '.join(SUMMARIZER_MODES)}"
    )
