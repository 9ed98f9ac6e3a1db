from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List, Optional, Sequence

from comment_analyzer.core.config import AnalysisConfig, load_analysis_config
from comment_analyzer.domain.models import AnalyzedComment, SummaryStats, WordCloudNode, WordFrequency
from comment_analyzer.domain.sentiment import LexicalSentimentScorer, sentiment_from_remote_row
from comment_analyzer.domain.summarizer import (
    ExtractiveSummarizer,
    ratio_for_length,
    summary_stats,
)
from comment_analyzer.domain.text_stats import top_words, word_frequency
from comment_analyzer.domain.wordcloud import layout_word_cloud
from comment_analyzer.exceptions import RemoteServiceError
from comment_analyzer.infra.cancellation import CancelToken
from comment_analyzer.infra.lexicon_repo import (
    load_stopwords,
    load_summary_keywords,
    load_word_lists,
)
from comment_analyzer.infra.remote_client import RemoteAnalysisClient
from comment_analyzer.infra.remote_schemas import Err

logger = logging.getLogger(__name__)

# words of one or two letters never make it into a word cloud
MIN_CLOUD_WORD_LENGTH = 3


@dataclass(frozen=True)
class SentimentOutcome:
    comments: List[AnalyzedComment]
    source: str
    fallback_reason: Optional[str] = None


@dataclass(frozen=True)
class SummaryOutcome:
    summary: str
    source: str
    stats: SummaryStats
    key_phrases: List[str] = field(default_factory=list)
    fallback_reason: Optional[str] = None


@dataclass(frozen=True)
class WordCloudOutcome:
    frequencies: List[WordFrequency]
    nodes: List[WordCloudNode]
    width: float
    height: float


class AnalysisService:
    """
    Remote-first analysis with a deterministic local fallback.

    When remote calls are enabled the external API is tried first. Transport
    errors and responses that fail strict decoding are logged and replaced by
    the local lexical scorer / extractive summarizer; the outcome records
    which source produced it. RequestCancelled is never swallowed.
    """

    def __init__(
        self,
        config: AnalysisConfig,
        scorer: LexicalSentimentScorer,
        summarizer: ExtractiveSummarizer,
        remote: Optional[RemoteAnalysisClient] = None,
    ):
        self.config = config
        self.scorer = scorer
        self.summarizer = summarizer
        self.remote = remote

    @classmethod
    def from_config(cls, config: Optional[AnalysisConfig] = None) -> "AnalysisService":
        config = config or load_analysis_config()
        positive, negative = load_word_lists("dashboard")
        return cls(
            config=config,
            scorer=LexicalSentimentScorer(positive, negative),
            summarizer=ExtractiveSummarizer(load_summary_keywords()),
            remote=RemoteAnalysisClient.from_config(config),
        )

    def _use_remote(self, use_remote: Optional[bool]) -> bool:
        wanted = self.config.remote_enabled if use_remote is None else use_remote
        return wanted and self.remote is not None

    # ---------------------------
    # sentiment
    # ---------------------------

    def local_sentiment(self, comments: Sequence[str]) -> List[AnalyzedComment]:
        return [self.scorer.analyze(c) for c in comments]

    def analyze_sentiment(
        self,
        comments: Sequence[str],
        use_remote: Optional[bool] = None,
        token: Optional[CancelToken] = None,
    ) -> SentimentOutcome:
        if not self._use_remote(use_remote):
            return SentimentOutcome(comments=self.local_sentiment(comments), source="local")

        try:
            result = self.remote.classify_sentiment(comments, token)
        except RemoteServiceError as e:
            logger.warning("remote sentiment unavailable, using local scorer: %s", e)
            return SentimentOutcome(self.local_sentiment(comments), "local", str(e))

        if isinstance(result, Err):
            logger.warning("remote sentiment rejected, using local scorer: %s", result.reason)
            return SentimentOutcome(self.local_sentiment(comments), "local", result.reason)

        analyzed = [
            sentiment_from_remote_row(text, row, raw_score=self.scorer.raw_score(text))
            for text, row in zip(comments, result.value)
        ]
        return SentimentOutcome(comments=analyzed, source="remote")

    # ---------------------------
    # summary
    # ---------------------------

    def local_summary(self, comments: Sequence[str], ratio: float) -> str:
        return self.summarizer.summarize("\n".join(comments), ratio)

    def summarize(
        self,
        comments: Sequence[str],
        length: str = "medium",
        use_remote: Optional[bool] = None,
        token: Optional[CancelToken] = None,
    ) -> SummaryOutcome:
        ratio = ratio_for_length(length)
        original = "\n".join(comments)
        key_phrases = top_words(word_frequency(original, stopwords=load_stopwords("full")), 10)

        source = "local"
        reason: Optional[str] = None
        summary: Optional[str] = None

        if self._use_remote(use_remote):
            try:
                result = self.remote.summarize(comments, token)
            except RemoteServiceError as e:
                reason = str(e)
                logger.warning("remote summary unavailable, using extractive summary: %s", e)
            else:
                if isinstance(result, Err):
                    reason = result.reason
                    logger.warning("remote summary rejected, using extractive summary: %s", reason)
                else:
                    summary = result.value
                    source = "remote"

        if summary is None:
            summary = self.local_summary(comments, ratio)

        return SummaryOutcome(
            summary=summary,
            source=source,
            stats=summary_stats(original, summary),
            key_phrases=key_phrases,
            fallback_reason=reason,
        )

    # ---------------------------
    # word frequency / word cloud
    # ---------------------------

    def word_cloud(
        self,
        text: str,
        remove_stopwords: bool = True,
        min_word_length: int = 3,
        max_words: int = 50,
        color_scheme: str = "mixed",
        seed: Optional[int] = None,
        width: float = 600.0,
        height: float = 400.0,
    ) -> WordCloudOutcome:
        frequencies = word_frequency(
            text,
            remove_stopwords=remove_stopwords,
            min_length=max(min_word_length, MIN_CLOUD_WORD_LENGTH),
            max_words=max_words,
            stopwords=load_stopwords("full"),
        )
        nodes = layout_word_cloud(
            frequencies,
            width=width,
            height=height,
            color_scheme=color_scheme,
            seed=seed,
        )
        return WordCloudOutcome(frequencies=frequencies, nodes=nodes, width=width, height=height)


@lru_cache
def get_analysis_service() -> AnalysisService:
    """Process-wide service used by the web routes."""
    return AnalysisService.from_config()
