# comment_analyzer/domain/summarizer.py
"""Extractive summarization of comment text.

Sentences are scored by keyword presence, position and length; the best
ones are kept and put back in document order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

from comment_analyzer.domain.models import SummaryStats
from comment_analyzer.domain.text_stats import count_words, tokenize

SUMMARY_RATIOS = {
    "short": 0.2,
    "medium": 0.4,
    "long": 0.6,
}

_DELIMS = {".", "!", "?", "\n"}
_TERMINAL = (".", "!", "?")


def split_sentences(text: str) -> List[str]:
    """Split on '.', '!', '?' and newlines, keeping the punctuation.

    Empty or whitespace-only pieces are dropped; each sentence is stripped.
    """
    out: List[str] = []
    start = 0
    for i, ch in enumerate(text):
        if ch in _DELIMS:
            piece = text[start:i + 1].strip()
            if piece and not all(c in _DELIMS for c in piece):
                out.append(piece)
            start = i + 1
    tail = text[start:].strip()
    if tail:
        out.append(tail)
    return out


def target_count(n_sentences: int, ratio: float) -> int:
    """Number of sentences to keep: ratio of n rounded half up, at least 1."""
    if n_sentences <= 0:
        return 0
    k = int(n_sentences * ratio + 0.5)
    return max(1, min(n_sentences, k))


@dataclass(frozen=True)
class ScoredSentence:
    index: int
    text: str
    score: float


class ExtractiveSummarizer:
    def __init__(
        self,
        keywords: Iterable[str],
        ratio: float = 0.4,
        keyword_weight: float = 1.0,
        position_bonus: float = 1.0,
        position_window: int = 1,
        length_threshold: int = 12,
        length_bonus: float = 0.5,
    ):
        if not 0.0 < ratio <= 1.0:
            raise ValueError(f"ratio must be in (0, 1]: {ratio}")
        self.keywords = frozenset(k.lower() for k in keywords)
        self.ratio = ratio
        self.keyword_weight = keyword_weight
        self.position_bonus = position_bonus
        self.position_window = position_window
        self.length_threshold = length_threshold
        self.length_bonus = length_bonus

    def score_sentences(self, sentences: List[str]) -> List[ScoredSentence]:
        n = len(sentences)
        scored: List[ScoredSentence] = []
        for i, sentence in enumerate(sentences):
            hits = self.keywords.intersection(tokenize(sentence))
            score = self.keyword_weight * len(hits)
            if i < self.position_window or i >= n - self.position_window:
                score += self.position_bonus
            if count_words(sentence) > self.length_threshold:
                score += self.length_bonus
            scored.append(ScoredSentence(index=i, text=sentence, score=score))
        return scored

    def select(self, text: str, ratio: float | None = None) -> List[ScoredSentence]:
        """Chosen sentences in document order."""
        sentences = split_sentences(text)
        if not sentences:
            return []
        k = target_count(len(sentences), self.ratio if ratio is None else ratio)

        scored = self.score_sentences(sentences)
        best = sorted(scored, key=lambda s: (-s.score, s.index))[:k]
        return sorted(best, key=lambda s: s.index)

    def summarize(self, text: str, ratio: float | None = None) -> str:
        chosen = self.select(text, ratio)
        return " ".join(_terminate(s.text) for s in chosen)


def _terminate(sentence: str) -> str:
    return sentence if sentence.endswith(_TERMINAL) else sentence + "."


def summary_stats(original: str, summary: str) -> SummaryStats:
    original_words = count_words(original)
    summary_words = count_words(summary)
    if original_words > 0:
        ratio = round((original_words - summary_words) / original_words * 100.0, 1)
    else:
        ratio = 0.0
    return SummaryStats(
        original_words=original_words,
        summary_words=summary_words,
        compression_ratio=ratio,
    )


def ratio_for_length(length: str) -> float:
    try:
        return SUMMARY_RATIOS[length]
    except KeyError:
        raise ValueError(
            f"unknown summary length {length!r}; expected one of {sorted(SUMMARY_RATIOS)}"
        ) from None

