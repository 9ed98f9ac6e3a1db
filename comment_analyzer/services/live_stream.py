# comment_analyzer/services/live_stream.py
"""
Simulated live comment stream.

A session draws comments from a sample pool (or takes user text), scores
them and keeps a rolling window of the newest comments, running statistics
and a short history for the trend chart. Time only advances when the caller
asks for the next comment (`tick`), so the session itself never spawns
threads or timers.

Each analysis gets its own CancelToken from a LatestRequest; starting a new
analysis cancels the previous one, and pause/stop cancel whatever is pending.
"""

from __future__ import annotations

import logging
import random
import threading
from datetime import datetime
from functools import lru_cache
from typing import Callable, List, Optional, Sequence

from comment_analyzer.domain.aggregation import append_history, build_sentiment_stats
from comment_analyzer.domain.models import (
    AnalyzedComment,
    HistoryPoint,
    SentimentStats,
    StreamComment,
)
from comment_analyzer.domain.sentiment import KeywordPresenceScorer
from comment_analyzer.exceptions import CommentDataError, RequestCancelled
from comment_analyzer.infra.cancellation import CancelToken, LatestRequest
from comment_analyzer.infra.lexicon_repo import load_sample_comments, load_word_lists
from comment_analyzer.services.analysis_service import AnalysisService, get_analysis_service

logger = logging.getLogger(__name__)

MANUAL_USER = "You"
SAMPLE_SIZE = 10


class LiveStreamSession:
    def __init__(
        self,
        scorer: KeywordPresenceScorer,
        pool: Sequence[str],
        users: Sequence[str],
        analysis: Optional[AnalysisService] = None,
        use_remote: bool = False,
        seed: Optional[int] = None,
        max_comments: int = 100,
        max_history: int = 20,
        clock: Callable[[], datetime] = datetime.now,
    ):
        if not pool or not users:
            raise ValueError("live stream needs a non-empty comment pool and user list")
        self.scorer = scorer
        self.pool = list(pool)
        self.users = list(users)
        self.analysis = analysis
        self.use_remote = use_remote
        self.max_comments = max_comments
        self.max_history = max_history
        self._clock = clock
        self._rng = random.Random(seed)
        self._lock = threading.RLock()
        self._latest = LatestRequest()

        self.streaming = False
        self.speed = 2.0
        self.comments: List[StreamComment] = []
        self.history: List[HistoryPoint] = []
        self._next_id = 0

    # ---------------------------
    # controls
    # ---------------------------

    def start(self) -> None:
        with self._lock:
            self.streaming = True

    def pause(self) -> None:
        """Stop producing comments but keep everything collected so far."""
        with self._lock:
            self.streaming = False
            self._latest.cancel()

    def stop(self) -> None:
        """Stop and forget: comments, statistics, history and ids are reset."""
        with self._lock:
            self.streaming = False
            self._latest.cancel()
            self.comments = []
            self.history = []
            self._next_id = 0

    def set_speed(self, comments_per_second: float) -> None:
        if comments_per_second <= 0:
            raise CommentDataError("stream speed must be positive")
        with self._lock:
            self.speed = comments_per_second

    # ---------------------------
    # analysis
    # ---------------------------

    def _analyze(self, text: str, token: CancelToken) -> AnalyzedComment:
        if self.use_remote and self.analysis is not None:
            outcome = self.analysis.analyze_sentiment([text], use_remote=True, token=token)
            if outcome.source == "remote":
                return outcome.comments[0]
            # remote unavailable: fall back to the stream keyword lists
        token.raise_if_cancelled()
        return self.scorer.analyze(text)

    def _make_comment(self, text: str, user: str) -> Optional[StreamComment]:
        token = self._latest.next_token()
        try:
            result = self._analyze(text, token)
        except RequestCancelled:
            logger.info("stream analysis superseded, dropping comment")
            return None

        with self._lock:
            comment = StreamComment(
                id=self._next_id,
                text=text,
                sentiment=result.sentiment,
                score=result.score,
                confidence=result.confidence,
                user=user,
                timestamp=self._clock(),
            )
            self._next_id += 1
        return comment

    def _push(self, new_comments: Sequence[StreamComment]) -> None:
        with self._lock:
            # newest first
            self.comments = (list(reversed(new_comments)) + self.comments)[: self.max_comments]
            stats = self.stats()
            point = HistoryPoint(
                time=self._clock().strftime("%H:%M:%S"),
                sentiment=stats.average_score,
                positive=stats.positive,
                negative=stats.negative,
                neutral=stats.neutral,
            )
            self.history = append_history(self.history, point, self.max_history)

    def _random_comment(self) -> Optional[StreamComment]:
        text = self._rng.choice(self.pool)
        user = self._rng.choice(self.users)
        return self._make_comment(text, user)

    # ---------------------------
    # producing comments
    # ---------------------------

    def tick(self) -> Optional[StreamComment]:
        """Next simulated comment; None while paused or when the analysis was superseded."""
        if not self.streaming:
            return None
        comment = self._random_comment()
        if comment is not None:
            self._push([comment])
        return comment

    def add_comment(self, text: str) -> Optional[StreamComment]:
        text = (text or "").strip()
        if not text:
            raise CommentDataError("comment text is empty")
        comment = self._make_comment(text, MANUAL_USER)
        if comment is not None:
            self._push([comment])
        return comment

    def load_sample(self, manual_text: Optional[str] = None) -> List[StreamComment]:
        """Replace the stream with ten comments, the manual one first when given."""
        batch: List[StreamComment] = []
        manual_text = (manual_text or "").strip()
        if manual_text:
            first = self._make_comment(manual_text, MANUAL_USER)
            if first is not None:
                batch.append(first)
        attempts = 0
        while len(batch) < SAMPLE_SIZE and attempts < SAMPLE_SIZE * 3:
            attempts += 1
            c = self._random_comment()
            if c is not None:
                batch.append(c)

        with self._lock:
            self.comments = []
            self.history = []
        # first comment should end up on top
        self._push(list(reversed(batch)))
        return batch

    # ---------------------------
    # views
    # ---------------------------

    def stats(self) -> SentimentStats:
        with self._lock:
            return build_sentiment_stats(self.comments)


def build_live_stream(analysis: Optional[AnalysisService] = None, seed: Optional[int] = None) -> LiveStreamSession:
    positive, negative = load_word_lists("stream")
    use_remote = bool(analysis is not None and analysis.config.remote_enabled)
    return LiveStreamSession(
        scorer=KeywordPresenceScorer(positive, negative),
        pool=load_sample_comments("stream_pool"),
        users=load_sample_comments("stream_users"),
        analysis=analysis,
        use_remote=use_remote,
        seed=seed,
    )


@lru_cache
def get_live_stream() -> LiveStreamSession:
    return build_live_stream(get_analysis_service())
