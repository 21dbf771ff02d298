# src/summarizer/vocabulary.py - v2
"""Word lists driving the rule-based summarizer.

Everything here is policy: callers may build their own Vocabulary and
pass it to the engine. Matching is case-insensitive; technical terms
use plain substring matching, completion words match whole words.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field

from myday.summarizer.models import CompletionState

_TECHNICAL_TERMS: tuple[str, ...] = (
    "GitHub", "GitLab", "AWS", "VPC", "EC2", "Lambda", "Docker",
    "Kubernetes", "Helm", "Terraform", "Spacelift", "Ansible", "Jenkins",
    "CI/CD", "API", "GraphQL", "PostgreSQL", "MySQL", "MongoDB",
    "MSSQL", "Redis", "Elasticsearch", "Kafka", "RabbitMQ", "Nginx",
    "Liquibase", "Snowflake", "LocalStack", "Vault", "OAuth", "OIDC",
    "JWT", "SSL", "TLS", "Gradle", "Maven", "npm", "Python", "Golang",
    "TypeScript", "database", "microservice", "pipeline", "deployment",
    "infrastructure", "authentication", "certificate", "monitoring",
)

_COMPLETION_WORDS: tuple[str, ...] = (
    "completed", "done", "finished", "deployed", "resolved", "merged",
    "fixed", "closed", "shipped", "released",
)

_IN_PROGRESS_WORDS: tuple[str, ...] = (
    "in progress", "working", "ongoing", "investigating", "started",
    "wip", "reviewing", "in review", "in development",
)

# (substring to look for, verb used in technical phrasing). Order decides
# which action wins when several appear.
_ACTION_VERBS: tuple[tuple[str, str], ...] = (
    ("implement", "Implemented"),
    ("deploy", "Deployed"),
    ("fix", "Fixed"),
    ("resolv", "Resolved"),
    ("migrat", "Migrated"),
    ("configur", "Configured"),
    ("integrat", "Integrated"),
    ("refactor", "Refactored"),
    ("optimiz", "Optimized"),
    ("upgrad", "Upgraded"),
    ("updat", "Updated"),
    ("creat", "Created"),
    ("test", "Tested"),
    ("validat", "Validated"),
    ("review", "Reviewed"),
    ("merg", "Merged"),
    ("investigat", "Investigated"),
    ("document", "Documented"),
)

# Business phrasing: outcome label -> keywords that imply it.
_WORK_CATEGORIES: dict[str, tuple[str, ...]] = {
    "platform reliability improvements": (
        "terraform", "aws", "kubernetes", "infrastructure", "vpc", "docker",
        "helm", "monitoring",
    ),
    "release delivery": ("deploy", "release", "pipeline", "ci/cd", "rollout"),
    "data platform work": ("database", "migration", "sql", "liquibase", "snowflake"),
    "security hardening": ("security", "auth", "oauth", "ssl", "tls", "certificate", "vault"),
    "defect resolution": ("bug", "fix", "error", "incident", "resolve"),
    "quality assurance": ("test", "validat", "verif"),
    "feature delivery": ("feature", "story", "implement", "api", "endpoint"),
}


class Vocabulary(BaseModel):
    """Immutable bundle of the summarizer's word lists."""

    model_config = ConfigDict(frozen=True)

    technical_terms: tuple[str, ...] = _TECHNICAL_TERMS
    completion_words: tuple[str, ...] = _COMPLETION_WORDS
    in_progress_words: tuple[str, ...] = _IN_PROGRESS_WORDS
    action_verbs: tuple[tuple[str, str], ...] = _ACTION_VERBS
    work_categories: dict[str, tuple[str, ...]] = Field(
        default_factory=lambda: dict(_WORK_CATEGORIES)
    )


DEFAULT_VOCABULARY = Vocabulary()


def extract_technical_terms(
    texts: Iterable[str], vocabulary: Vocabulary = DEFAULT_VOCABULARY
) -> list[str]:
    """Return distinct dictionary terms found in any text, in dictionary order."""
    haystack = " ".join(texts).lower()
    return [term for term in vocabulary.technical_terms if term.lower() in haystack]


def classify_completion(
    texts: Iterable[str], vocabulary: Vocabulary = DEFAULT_VOCABULARY
) -> CompletionState:
    """Decide whether the described work reads as finished, ongoing, or both."""
    haystack = " ".join(texts).lower()
    completed = any(_word_pattern(w).search(haystack) for w in vocabulary.completion_words)
    ongoing = any(_word_pattern(w).search(haystack) for w in vocabulary.in_progress_words)
    if completed and ongoing:
        return "mixed"
    if completed:
        return "completed"
    if ongoing:
        return "in_progress"
    return "unknown"


def primary_action(text: str, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> str | None:
    """First action verb (in vocabulary order) whose stem appears in text."""
    lowered = text.lower()
    for stem, verb in vocabulary.action_verbs:
        if stem in lowered:
            return verb
    return None


def work_categories(
    texts: Iterable[str], vocabulary: Vocabulary = DEFAULT_VOCABULARY
) -> list[str]:
    """Outcome labels implied by the text, in vocabulary order."""
    haystack = " ".join(texts).lower()
    return [
        label
        for label, keywords in vocabulary.work_categories.items()
        if any(k in haystack for k in keywords)
    ]


def strip_terms(text: str, terms: Iterable[str]) -> str:
    """Remove whole-word occurrences of terms and tidy what is left."""
    for term in sorted(set(terms), key=len, reverse=True):
        text = _term_pattern(term).sub("", text)
    text = re.sub(r"\(\s*\)", "", text)
    text = re.sub(r"\s+([,.;:])", r"\1", text)
    text = re.sub(r"([,;:])(?:\s*[,;:])+", r"\1", text)
    text = re.sub(r"\s{2,}", " ", text)
    return text.strip(" ,;:-")


@lru_cache(maxsize=256)
def _word_pattern(word: str) -> re.Pattern[str]:
    return re.compile(rf"(?<![\w]){re.escape(word.lower())}(?![\w])")


@lru_cache(maxsize=256)
def _term_pattern(term: str) -> re.Pattern[str]:
    # "API-42" is an issue key, not the term API
    return re.compile(rf"(?<![\w/]){re.escape(term)}s?(?![\w/]|-\d)", re.IGNORECASE)
