from __future__ import annotations
from typing import Any, Dict, List, Sequence

from comment_analyzer.domain.models import (
    AnalyzedComment,
    HistoryPoint,
    SENTIMENT_LABELS,
    SentimentStats,
    WordFrequency,
)

CHART_COLORS = {
    "positive": "#22c55e",
    "negative": "#ef4444",
    "neutral": "#64748b",
}


def build_sentiment_stats(comments: Sequence[Any]) -> SentimentStats:
    """Count labels and average the scores of analyzed comments.

    Works for anything with `sentiment` and `score` attributes
    (AnalyzedComment, StreamComment).
    """
    total = len(comments)
    counts = {label: 0 for label in SENTIMENT_LABELS}
    for c in comments:
        if c.sentiment in counts:
            counts[c.sentiment] += 1

    average = sum(c.score for c in comments) / total if total else 0.0

    return SentimentStats(
        total=total,
        positive=counts["positive"],
        negative=counts["negative"],
        neutral=counts["neutral"],
        average_score=average,
    )


def sentiment_chart_rows(stats: SentimentStats) -> List[Dict[str, Any]]:
    """Pie/bar chart rows: name, value, color."""
    return [
        {"name": label.capitalize(), "value": getattr(stats, label), "color": CHART_COLORS[label]}
        for label in SENTIMENT_LABELS
    ]


def frequency_chart_rows(frequencies: Sequence[WordFrequency], max_items: int = 10) -> List[Dict[str, Any]]:
    return [{"word": f.word, "count": f.count} for f in frequencies[:max_items]]


def filter_by_sentiment(comments: Sequence[AnalyzedComment], label: str) -> List[AnalyzedComment]:
    """'all' keeps everything; otherwise only the given label."""
    if label == "all":
        return list(comments)
    return [c for c in comments if c.sentiment == label]


def append_history(
    history: List[HistoryPoint],
    point: HistoryPoint,
    max_points: int = 20,
) -> List[HistoryPoint]:
    """New list with `point` appended, keeping only the last `max_points`."""
    updated = list(history) + [point]
    return updated[-max_points:]


def stats_to_dict(stats: SentimentStats) -> Dict[str, Any]:
    return {
        "total": stats.total,
        "positive": stats.positive,
        "negative": stats.negative,
        "neutral": stats.neutral,
        "average_score": stats.average_score,
        "percentages": {label: stats.percentage(label) for label in SENTIMENT_LABELS},
    }
