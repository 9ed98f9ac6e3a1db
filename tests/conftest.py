from __future__ import annotations

from datetime import datetime

import pytest

from comment_analyzer.core.config import AnalysisConfig
from comment_analyzer.domain.sentiment import KeywordPresenceScorer, LexicalSentimentScorer
from comment_analyzer.domain.summarizer import ExtractiveSummarizer
from comment_analyzer.infra.lexicon_repo import (
    load_sample_comments,
    load_summary_keywords,
    load_word_lists,
)
from comment_analyzer.services.analysis_service import AnalysisService
from comment_analyzer.services.auth_service import build_auth_service
from comment_analyzer.services.live_stream import LiveStreamSession


@pytest.fixture
def lexical_scorer() -> LexicalSentimentScorer:
    positive, negative = load_word_lists("dashboard")
    return LexicalSentimentScorer(positive, negative)


@pytest.fixture
def summarizer() -> ExtractiveSummarizer:
    return ExtractiveSummarizer(load_summary_keywords())


@pytest.fixture
def local_service(tmp_path, lexical_scorer, summarizer) -> AnalysisService:
    config = AnalysisConfig(remote_enabled=False, output_dir=str(tmp_path / "output"))
    return AnalysisService(config, lexical_scorer, summarizer, remote=None)


@pytest.fixture
def stream_session() -> LiveStreamSession:
    positive, negative = load_word_lists("stream")
    return LiveStreamSession(
        scorer=KeywordPresenceScorer(positive, negative),
        pool=load_sample_comments("stream_pool"),
        users=load_sample_comments("stream_users"),
        seed=7,
        clock=lambda: datetime(2025, 9, 1, 10, 30, 0),
    )


@pytest.fixture
def auth_service():
    return build_auth_service(demo_password="password123")
