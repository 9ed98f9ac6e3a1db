from __future__ import annotations

import logging
from dataclasses import asdict
from datetime import datetime
from typing import Any, Dict, List, Optional

from comment_analyzer.domain.aggregation import (
    build_sentiment_stats,
    frequency_chart_rows,
    sentiment_chart_rows,
    stats_to_dict,
)
from comment_analyzer.domain.text_stats import split_comments, word_frequency
from comment_analyzer.exceptions import CommentDataError
from comment_analyzer.infra.lexicon_repo import load_stopwords
from comment_analyzer.infra.output_repo import save_insights_report
from comment_analyzer.services.analysis_service import AnalysisService

logger = logging.getLogger(__name__)

MAX_COMMENTS = 1000
INSIGHT_WORDS = 20


def validate_comments(comments: List[str], max_comments: Optional[int] = MAX_COMMENTS) -> List[str]:
    cleaned = [c.strip() for c in comments if c and c.strip()]
    if not cleaned:
        raise CommentDataError("enter at least one comment to analyze")
    if max_comments is not None and len(cleaned) > max_comments:
        raise CommentDataError(f"at most {max_comments} comments can be analyzed at once")
    return cleaned


def run_combined_insights_usecase(
    service: AnalysisService,
    text: str,
    use_remote: Optional[bool] = None,
    length: str = "medium",
    save_report: Optional[bool] = None,
    max_comments: Optional[int] = MAX_COMMENTS,
) -> Dict[str, Any]:
    """Sentiment, summary and word frequency for a block of comments (one per line)."""
    # 1) input validation
    comments = validate_comments(split_comments(text), max_comments)

    # 2) sentiment per comment
    sentiment = service.analyze_sentiment(comments, use_remote=use_remote)
    stats = build_sentiment_stats(sentiment.comments)

    # 3) summary
    summary = service.summarize(comments, length=length, use_remote=use_remote)

    # 4) word frequency over the whole input
    frequencies = word_frequency(
        text,
        max_words=INSIGHT_WORDS,
        stopwords=load_stopwords("short"),
    )

    report: Dict[str, Any] = {
        "timestamp": datetime.now().isoformat(timespec="seconds"),
        "sentiment": stats_to_dict(stats),
        "sentiment_chart": sentiment_chart_rows(stats),
        "sentiment_source": sentiment.source,
        "summary": summary.summary,
        "summary_source": summary.source,
        "summary_stats": asdict(summary.stats),
        "key_phrases": summary.key_phrases,
        "word_frequency": [[f.word, f.count] for f in frequencies],
        "word_chart": frequency_chart_rows(frequencies),
        "comments": [
            {"id": i, **asdict(c)} for i, c in enumerate(sentiment.comments)
        ],
    }

    # 5) optional YAML export
    should_save = service.config.save_reports if save_report is None else save_report
    if should_save:
        try:
            path = save_insights_report(report, service.config.output_dir)
            report["report_path"] = str(path)
        except OSError as e:
            logger.warning("report could not be saved: %s", e)

    return report
