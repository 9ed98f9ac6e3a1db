# comment_analyzer/domain/sentiment.py
"""
Lexical sentiment scoring.

Two local scorers are provided:

- LexicalSentimentScorer: token matches against positive/negative word sets,
  normalized by token count into [-1, 1]. Used by the dashboard and the
  combined insights report.
- KeywordPresenceScorer: counts which keywords appear anywhere in the text.
  Used by the live stream when the external API is not used.

Both are deterministic. `sentiment_from_remote_row` turns one row returned by
the external classifier into the same AnalyzedComment shape.
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from comment_analyzer.domain.models import AnalyzedComment, SentimentLabel

NEUTRAL_CONFIDENCE = 0.4


def _clamp(value: float, low: float = -1.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


class LexicalSentimentScorer:
    def __init__(
        self,
        positive_words: Iterable[str],
        negative_words: Iterable[str],
        scale: float = 5.0,
        threshold: float = 0.1,
    ):
        self.positive_words = frozenset(w.lower() for w in positive_words)
        self.negative_words = frozenset(w.lower() for w in negative_words)
        self.scale = scale
        self.threshold = threshold

    def raw_score(self, text: str) -> int:
        """+1 for every positive token, -1 for every negative token."""
        score = 0
        for token in text.lower().split():
            if token in self.positive_words:
                score += 1
            if token in self.negative_words:
                score -= 1
        return score

    def normalized_score(self, text: str) -> float:
        tokens = text.lower().split()
        if not tokens:
            return 0.0
        return _clamp(self.raw_score(text) / len(tokens) * self.scale)

    def classify(self, score: float) -> SentimentLabel:
        if score > self.threshold:
            return "positive"
        if score < -self.threshold:
            return "negative"
        return "neutral"

    def analyze(self, text: str) -> AnalyzedComment:
        raw = self.raw_score(text)
        score = self.normalized_score(text)
        label = self.classify(score)
        confidence = abs(score) if label != "neutral" else NEUTRAL_CONFIDENCE
        return AnalyzedComment(
            text=text,
            sentiment=label,
            score=score,
            confidence=confidence,
            raw_score=raw,
            source="lexical",
        )


class KeywordPresenceScorer:
    """Substring keyword hits; the side with more distinct hits wins."""

    def __init__(self, positive_words: Iterable[str], negative_words: Iterable[str]):
        self.positive_words = tuple(w.lower() for w in positive_words)
        self.negative_words = tuple(w.lower() for w in negative_words)

    def analyze(self, text: str) -> AnalyzedComment:
        lowered = text.lower()
        pos_hits = sum(1 for w in self.positive_words if w in lowered)
        neg_hits = sum(1 for w in self.negative_words if w in lowered)

        if pos_hits > neg_hits:
            confidence = min(0.5 + (pos_hits - neg_hits) * 0.1, 0.9)
            label: SentimentLabel = "positive"
            score = 0.5 + confidence * 0.5
        elif neg_hits > pos_hits:
            confidence = min(0.5 + (neg_hits - pos_hits) * 0.1, 0.9)
            label = "negative"
            score = -(0.5 + confidence * 0.5)
        else:
            confidence = NEUTRAL_CONFIDENCE
            label = "neutral"
            score = 0.0

        return AnalyzedComment(
            text=text,
            sentiment=label,
            score=score,
            confidence=confidence,
            source="keyword",
        )


def parse_confidence(value: object) -> float:
    """'87.5%' -> 0.875. Numbers above 1 are read as percentages."""
    if value is None:
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        try:
            number = float(str(value).strip().rstrip("%"))
        except ValueError:
            return 0.0
        if str(value).strip().endswith("%"):
            number /= 100.0
    if number > 1.0:
        number /= 100.0
    return _clamp(number, 0.0, 1.0)


def sentiment_from_remote_row(
    text: str,
    row: Sequence[object],
    raw_score: Optional[int] = None,
) -> AnalyzedComment:
    """Map a `[text, label, confidence]` classifier row to an AnalyzedComment."""
    label = str(row[1] if len(row) > 1 and row[1] is not None else "neutral").strip().lower()
    if label not in ("positive", "negative", "neutral"):
        label = "neutral"
    confidence = parse_confidence(row[2] if len(row) > 2 else None)

    if label == "positive":
        score = 0.5 + confidence * 0.5
    elif label == "negative":
        score = -0.5 - confidence * 0.5
    else:
        score = 0.0

    return AnalyzedComment(
        text=text,
        sentiment=label,  # type: ignore[arg-type]
        score=score,
        confidence=confidence,
        raw_score=raw_score,
        source="remote",
    )
