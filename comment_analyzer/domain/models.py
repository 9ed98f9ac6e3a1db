# comment_analyzer/domain/models.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal, Optional, Tuple

SentimentLabel = Literal["positive", "negative", "neutral"]
SENTIMENT_LABELS: Tuple[str, ...] = ("positive", "negative", "neutral")


@dataclass(frozen=True)
class WordFrequency:
    """A normalized word and how many times it occurred (count >= 1)."""

    word: str
    count: int


@dataclass(frozen=True)
class AnalyzedComment:
    """Sentiment result for one comment line.

    - score: signed sentiment in [-1, 1]
    - confidence: [0, 1]
    - raw_score: un-normalized lexical count, when the lexical scorer produced it
    - source: 'lexical', 'keyword' or 'remote'
    """

    text: str
    sentiment: SentimentLabel
    score: float
    confidence: float
    raw_score: Optional[int] = None
    source: str = "lexical"


@dataclass
class WordCloudNode:
    """A word placed on the word-cloud canvas.

    x/y are the bubble centre in canvas pixels (origin top-left).
    Positions change while the layout relaxes and are final once returned.
    """

    text: str
    count: int
    font_size: float
    color: str
    x: float = 0.0
    y: float = 0.0
    radius: float = 0.0


@dataclass(frozen=True)
class SentimentStats:
    total: int
    positive: int
    negative: int
    neutral: int
    average_score: float

    def percentage(self, label: str) -> float:
        if self.total <= 0:
            return 0.0
        return round(getattr(self, label) / self.total * 100.0, 1)


@dataclass(frozen=True)
class SummaryStats:
    original_words: int
    summary_words: int
    compression_ratio: float


@dataclass(frozen=True)
class StreamComment:
    id: int
    text: str
    sentiment: SentimentLabel
    score: float
    confidence: float
    user: str
    timestamp: datetime


@dataclass(frozen=True)
class HistoryPoint:
    time: str
    sentiment: float
    positive: int
    negative: int
    neutral: int


@dataclass(frozen=True)
class User:
    id: str
    email: str
    name: str
    role: str
    verified: bool
    permissions: Tuple[str, ...] = field(default_factory=tuple)
    organization: Optional[str] = None
    department: Optional[str] = None
