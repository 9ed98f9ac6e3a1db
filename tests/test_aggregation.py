from comment_analyzer.domain.aggregation import (
    append_history,
    build_sentiment_stats,
    filter_by_sentiment,
    sentiment_chart_rows,
    stats_to_dict,
)
from comment_analyzer.domain.models import AnalyzedComment, HistoryPoint


def _c(label, score):
    return AnalyzedComment(text=label, sentiment=label, score=score, confidence=0.5)


def test_stats_and_percentages():
    comments = [_c("positive", 1.0), _c("positive", 0.5), _c("negative", -0.5)]
    stats = build_sentiment_stats(comments)

    assert (stats.total, stats.positive, stats.negative, stats.neutral) == (3, 2, 1, 0)
    assert stats.average_score == 1.0 / 3
    assert stats_to_dict(stats)["percentages"] == {
        "positive": 66.7,
        "negative": 33.3,
        "neutral": 0.0,
    }


def test_empty_stats():
    stats = build_sentiment_stats([])
    assert stats.total == 0
    assert stats.average_score == 0.0
    assert stats.percentage("positive") == 0.0
    assert [row["value"] for row in sentiment_chart_rows(stats)] == [0, 0, 0]


def test_filter_by_sentiment():
    comments = [_c("positive", 1.0), _c("neutral", 0.0)]
    assert filter_by_sentiment(comments, "all") == comments
    assert filter_by_sentiment(comments, "neutral") == [comments[1]]
    assert filter_by_sentiment(comments, "negative") == []


def test_history_keeps_last_points():
    history = []
    for i in range(5):
        history = append_history(history, HistoryPoint(str(i), 0.0, 0, 0, 0), max_points=3)
    assert [p.time for p in history] == ["2", "3", "4"]
