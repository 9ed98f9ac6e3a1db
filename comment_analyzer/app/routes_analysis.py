# comment_analyzer/app/routes_analysis.py
from __future__ import annotations
import logging
from dataclasses import asdict
from typing import Any, Callable, Dict, List, Literal, Optional, Union
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, Field
from comment_analyzer.domain.aggregation import (
    build_sentiment_stats,
    filter_by_sentiment,
    frequency_chart_rows,
    sentiment_chart_rows,
    stats_to_dict,
)
from comment_analyzer.exceptions import CommentDataError, LexiconLoadError
from comment_analyzer.infra.lexicon_repo import load_sample_comments
from comment_analyzer.infra.wordcloud_render import render_wordcloud_png
from comment_analyzer.services.analysis_service import (
    AnalysisService,
    WordCloudOutcome,
    get_analysis_service,
)
from comment_analyzer.usecases.combined_insights import (
    run_combined_insights_usecase,
    validate_comments,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/analysis", tags=["analysis"])

# ---------------------------
# Request schemas
# ---------------------------

class SentimentRequest(BaseModel):
    comments: List[str] = Field(..., description="comments to classify, one per entry")
    use_remote: Optional[bool] = Field(
        None,
        description="try the external API first (None: server default)",
    )
    filter: Literal["all", "positive", "negative", "neutral"] = "all"


class SummaryRequest(BaseModel):
    comments: List[str]
    length: Literal["short", "medium", "long"] = "medium"
    use_remote: Optional[bool] = None


class WordCloudRequest(BaseModel):
    text: str
    remove_stopwords: bool = True
    min_word_length: int = Field(3, ge=2, le=8)
    max_words: int = Field(50, ge=10, le=100)
    color_scheme: Literal["mixed", "blue", "green", "purple", "orange"] = "mixed"
    seed: Optional[int] = Field(None, description="fixed seed gives a reproducible layout")
    width: float = Field(600.0, gt=0, le=4000)
    height: float = Field(400.0, gt=0, le=4000)


class InsightsRequest(BaseModel):
    text: str = Field(..., description="comments, one per line")
    use_remote: Optional[bool] = None
    length: Literal["short", "medium", "long"] = "medium"
    save_report: Optional[bool] = None

# ---------------------------
# Response schemas
# ---------------------------

class AnalysisSuccessResponse(BaseModel):
    status: Literal["ok"] = "ok"
    result: Dict[str, Any]


class AnalysisErrorResponse(BaseModel):
    status: Literal["error"] = "error"
    error_type: str
    message: str


AnalysisResponse = Union[AnalysisSuccessResponse, AnalysisErrorResponse]


def _run(action: Callable[[], Dict[str, Any]]) -> AnalysisResponse:
    """Run a route body and map domain errors to the error envelope."""
    try:
        return AnalysisSuccessResponse(result=action())

    except CommentDataError as e:
        logger.warning("comment data error: %s", e)
        return AnalysisErrorResponse(
            error_type="comment_data_error",
            message=str(e),
        )

    except LexiconLoadError as e:
        logger.error("lexicon data unavailable: %s", e)
        return AnalysisErrorResponse(
            error_type="lexicon_error",
            message=str(e),
        )

    except Exception:
        logger.exception("unexpected internal error")
        return AnalysisErrorResponse(
            error_type="internal_error",
            message="Internal server error. Please try again later.",
        )


def _error_json(status_code: int, error_type: str, message: str) -> JSONResponse:
    body = AnalysisErrorResponse(error_type=error_type, message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump())


# ---------------------------
# Routes
# ---------------------------

@router.get("/samples")
async def sample_comments():
    return {"comments": list(load_sample_comments("dashboard"))}


@router.post("/sentiment", response_model=AnalysisResponse)
def sentiment_route(
    req: SentimentRequest,
    service: AnalysisService = Depends(get_analysis_service),
):
    """
    Sentiment per comment plus label statistics.

    Statistics always cover every comment; `filter` only narrows the returned list.
    """
    def action() -> Dict[str, Any]:
        comments = validate_comments(req.comments)
        outcome = service.analyze_sentiment(comments, use_remote=req.use_remote)
        stats = build_sentiment_stats(outcome.comments)
        shown = filter_by_sentiment(outcome.comments, req.filter)
        return {
            "source": outcome.source,
            "fallback_reason": outcome.fallback_reason,
            "comments": [asdict(c) for c in shown],
            "stats": stats_to_dict(stats),
            "chart": sentiment_chart_rows(stats),
        }

    return _run(action)


@router.post("/summary", response_model=AnalysisResponse)
def summary_route(
    req: SummaryRequest,
    service: AnalysisService = Depends(get_analysis_service),
):
    def action() -> Dict[str, Any]:
        comments = validate_comments(req.comments)
        outcome = service.summarize(comments, length=req.length, use_remote=req.use_remote)
        return {
            "summary": outcome.summary,
            "source": outcome.source,
            "fallback_reason": outcome.fallback_reason,
            "key_phrases": outcome.key_phrases,
            "stats": asdict(outcome.stats),
        }

    return _run(action)


def _build_word_cloud(req: WordCloudRequest, service: AnalysisService) -> WordCloudOutcome:
    if not req.text.strip():
        raise CommentDataError("enter some text to build a word cloud")
    return service.word_cloud(
        req.text,
        remove_stopwords=req.remove_stopwords,
        min_word_length=req.min_word_length,
        max_words=req.max_words,
        color_scheme=req.color_scheme,
        seed=req.seed,
        width=req.width,
        height=req.height,
    )


@router.post("/wordcloud", response_model=AnalysisResponse)
def wordcloud_route(
    req: WordCloudRequest,
    service: AnalysisService = Depends(get_analysis_service),
):
    def action() -> Dict[str, Any]:
        outcome = _build_word_cloud(req, service)
        return {
            "width": outcome.width,
            "height": outcome.height,
            "frequencies": [[f.word, f.count] for f in outcome.frequencies],
            "chart": frequency_chart_rows(outcome.frequencies),
            "nodes": [asdict(n) for n in outcome.nodes],
        }

    return _run(action)


@router.post("/wordcloud.png")
def wordcloud_png_route(
    req: WordCloudRequest,
    service: AnalysisService = Depends(get_analysis_service),
):
    """The same layout as /wordcloud, drawn as a PNG download.

    Errors come back in the JSON error envelope with a 4xx/5xx status.
    """
    try:
        outcome = _build_word_cloud(req, service)
    except CommentDataError as e:
        logger.warning("comment data error: %s", e)
        return _error_json(422, "comment_data_error", str(e))
    except LexiconLoadError as e:
        logger.error("lexicon data unavailable: %s", e)
        return _error_json(503, "lexicon_error", str(e))

    png = render_wordcloud_png(outcome.nodes, outcome.width, outcome.height)
    return Response(
        content=png,
        media_type="image/png",
        headers={"Content-Disposition": 'attachment; filename="wordcloud.png"'},
    )


@router.post("/insights", response_model=AnalysisResponse)
def insights_route(
    req: InsightsRequest,
    service: AnalysisService = Depends(get_analysis_service),
):
    """Combined sentiment, summary and keyword report."""
    return _run(
        lambda: run_combined_insights_usecase(
            service,
            req.text,
            use_remote=req.use_remote,
            length=req.length,
            save_report=req.save_report,
        )
    )
