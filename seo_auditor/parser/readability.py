"""Readability and keyword density heuristics."""
from __future__ import annotations

import re
from collections import Counter
from dataclasses import asdict, dataclass, field

from bs4 import BeautifulSoup

from seo_auditor.config.settings import settings
from seo_auditor.parser.document import body_or_root, visible_text

_SENTENCE_SPLIT = re.compile(r"[.!?]+")
_NON_WORD = re.compile(r"\W+")
_NON_ALPHA = re.compile(r"[^a-z]")
_SILENT_SUFFIX = re.compile(r"(?:[^laeiouy]es|ed|[^laeiouy]e)$")
_LEADING_Y = re.compile(r"^y")
_VOWEL_RUN = re.compile(r"[aeiouy]+")

# Used when no per-word syllable pass is wanted
APPROXIMATE_SYLLABLES_PER_WORD = 1.5


@dataclass(frozen=True)
class TextAnalysis:
    """Readability and keyword figures for one document's visible text."""
    word_count: int
    sentence_count: int
    syllable_count: int
    reading_ease: float
    average_sentence_length: float
    keyword_density: dict[str, float] = field(default_factory=dict)
    syllables_estimated: bool = True

    def to_dict(self) -> dict:
        return asdict(self)


def count_words(text: str) -> int:
    if not text:
        return 0
    return len(text.split())


def count_sentences(text: str) -> int:
    """Count non-blank segments between runs of sentence punctuation."""
    segments = [segment for segment in _SENTENCE_SPLIT.split(text or "") if segment.strip()]
    return max(1, len(segments))


def count_syllables(word: str) -> int:
    """Estimate syllables in a single word.

    Heuristic only: short words count as one, a trailing silent e / -ed /
    consonant+es and a leading y are dropped, then vowel groups are counted.
    """
    word = _NON_ALPHA.sub("", word.lower())
    if len(word) <= 3:
        return 1
    word = _SILENT_SUFFIX.sub("", word)
    word = _LEADING_Y.sub("", word)
    return max(1, len(_VOWEL_RUN.findall(word)))


def flesch_reading_ease(words: int, sentences: int, syllables: int) -> float:
    """Flesch reading ease, rounded to one decimal and not clamped."""
    if words == 0 or sentences == 0:
        return 0.0
    score = 206.835 - 1.015 * (words / sentences) - 84.6 * (syllables / words)
    return round(score, 1)


def approximate_reading_ease(text: str) -> float:
    """Reading ease assuming 1.5 syllables per word, clamped to 0-100.

    Sentences are every segment of the punctuation split, including a
    trailing empty one.
    """
    if not text or not text.strip():
        return 0.0
    sentences = len(_SENTENCE_SPLIT.split(text))
    words = count_words(text)
    if words == 0 or sentences == 0:
        return 0.0
    score = 206.835 - 1.015 * (words / sentences) - 84.6 * APPROXIMATE_SYLLABLES_PER_WORD
    return min(100.0, max(0.0, round(score, 1)))


def keyword_density(text: str, limit: int | None = None, min_length: int | None = None) -> dict[str, float]:
    """Top keywords mapped to their share of all kept tokens, in percent."""
    limit = settings.content.keyword_limit if limit is None else limit
    min_length = settings.content.keyword_min_length if min_length is None else min_length

    tokens = [token for token in _NON_WORD.split((text or "").lower()) if len(token) >= min_length]
    if not tokens:
        return {}

    total = len(tokens)
    # most_common keeps first-seen order among equal counts
    return {
        word: round(count / total * 100, 2)
        for word, count in Counter(tokens).most_common(limit)
    }


def analyze_text(text: str, estimate_syllables: bool | None = None) -> TextAnalysis:
    """Compute readability and keyword figures for already-cleaned text."""
    if estimate_syllables is None:
        estimate_syllables = settings.content.estimate_syllables

    words = text.split() if text else []
    word_count = len(words)
    sentence_count = count_sentences(text)

    if estimate_syllables:
        syllable_count = sum(count_syllables(word) for word in words)
        reading_ease = flesch_reading_ease(word_count, sentence_count, syllable_count)
    else:
        syllable_count = round(word_count * APPROXIMATE_SYLLABLES_PER_WORD)
        reading_ease = approximate_reading_ease(text)

    average_sentence_length = round(word_count / sentence_count, 1) if word_count else 0.0

    return TextAnalysis(
        word_count=word_count,
        sentence_count=sentence_count,
        syllable_count=syllable_count,
        reading_ease=reading_ease,
        average_sentence_length=average_sentence_length,
        keyword_density=keyword_density(text),
        syllables_estimated=estimate_syllables,
    )


def analyze_document(doc: BeautifulSoup, estimate_syllables: bool | None = None) -> TextAnalysis:
    """Analyze the visible body text of a parsed document."""
    return analyze_text(visible_text(body_or_root(doc)), estimate_syllables)
