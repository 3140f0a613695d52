"""
Text utilities shared by the analyzers.

Provides deterministic tokenization with stop-word filtering, frequency
ranking, syllable estimation and the Flesch reading-ease score.
"""

import math
import re
from typing import Iterable

from .models import ReadabilityResult


HTML_TAG_PATTERN = re.compile(r"<[^>]*>")
PUNCTUATION_PATTERN = re.compile(r"[^\w\s]")
VOWEL_GROUP_PATTERN = re.compile(r"[aeiouy]+")
SENTENCE_END_PATTERN = re.compile(r"[.!?]+")

NO_CONTENT_LEVEL = "No content"

# Common English stop words
STOP_WORDS = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
    "of", "with", "by", "from", "as", "is", "was", "are", "were", "been",
    "be", "have", "has", "had", "do", "does", "did", "will", "would", "could",
    "should", "may", "might", "must", "can", "this", "that", "these", "those",
    "i", "you", "he", "she", "it", "we", "they", "what", "which", "who",
    "when", "where", "why", "how", "all", "each", "every", "both", "few",
    "more", "most", "other", "some", "such", "only", "own", "same", "than",
    "too", "very", "just", "now",
})

# (minimum score, level), checked top to bottom
READABILITY_LEVELS: list[tuple[float, str]] = [
    (90, "Very Easy"),
    (80, "Easy"),
    (70, "Fairly Easy"),
    (60, "Standard"),
    (50, "Fairly Difficult"),
    (30, "Difficult"),
]


def strip_html(text: str) -> str:
    """Replace HTML tags with spaces."""
    return HTML_TAG_PATTERN.sub(" ", text)


def is_stop_word(word: str) -> bool:
    """Check whether a word is in the stop-word set (case-insensitive)."""
    return word.lower() in STOP_WORDS


def tokenize(text: str, min_length: int = 3) -> list[str]:
    """
    Split text into lowercase content tokens.

    HTML tags and punctuation are replaced by spaces, then tokens shorter
    than ``min_length`` and stop words are dropped. Order is preserved.

    Args:
        text: Text to tokenize (may contain HTML).
        min_length: Minimum token length to keep.

    Returns:
        List of tokens in their original order (duplicates kept).
    """
    if not text:
        return []

    clean = PUNCTUATION_PATTERN.sub(" ", strip_html(text)).lower().strip()
    return [
        word for word in clean.split()
        if len(word) >= min_length and word not in STOP_WORDS
    ]


def rank_tokens(tokens: Iterable[str]) -> list[str]:
    """
    Rank unique tokens by frequency, most frequent first.

    Ties keep first-seen order (dicts preserve insertion order and
    ``sorted`` is stable).
    """
    counts: dict[str, int] = {}
    for token in tokens:
        counts[token] = counts.get(token, 0) + 1
    return sorted(counts, key=lambda token: -counts[token])


def count_words(text: str) -> int:
    """Count whitespace-separated words."""
    return len(text.split()) if text else 0


def estimate_syllables(word: str) -> int:
    """
    Estimate syllables as the number of vowel groups.

    A trailing silent 'e' is discounted when the word has more than one
    vowel group.
    """
    lower = word.lower()
    groups = len(VOWEL_GROUP_PATTERN.findall(lower))
    if lower.endswith("e") and groups > 1:
        groups -= 1
    return groups


def readability_level(score: float) -> str:
    """Map a Flesch score to its level label."""
    for minimum, level in READABILITY_LEVELS:
        if score >= minimum:
            return level
    return "Very Difficult"


def flesch_readability(text: str) -> ReadabilityResult:
    """
    Calculate the Flesch Reading Ease score.

    score = 206.835 - 1.015 * (words / sentences) - 84.6 * (syllables / words)

    Sentences are runs of ``.``, ``!`` or ``?`` (at least one). The level is
    taken from the raw score; the returned score is clamped to [0, 100].

    Args:
        text: Text to score (HTML tags are ignored).

    Returns:
        ReadabilityResult. Empty input yields score 0 and level "No content".
    """
    if not text or not text.strip():
        return ReadabilityResult(score=0, level=NO_CONTENT_LEVEL)

    clean = strip_html(text)
    words = clean.split()
    if not words:
        return ReadabilityResult(score=0, level=NO_CONTENT_LEVEL)

    sentences = len(SENTENCE_END_PATTERN.findall(clean)) or 1
    syllables = sum(estimate_syllables(word) for word in words)

    avg_sentence_length = len(words) / sentences
    avg_syllables_per_word = syllables / len(words)
    score = 206.835 - (1.015 * avg_sentence_length) - (84.6 * avg_syllables_per_word)

    return ReadabilityResult(
        score=max(0.0, min(100.0, score)),
        level=readability_level(score),
    )


def join_fields(*values: str) -> str:
    """Join the non-empty values with single spaces."""
    return " ".join(value for value in values if value)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves rounding up."""
    return int(math.floor(value + 0.5))
