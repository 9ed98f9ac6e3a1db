# comment_analyzer/app/routes_stream.py
from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from comment_analyzer.domain.aggregation import sentiment_chart_rows, stats_to_dict
from comment_analyzer.domain.models import StreamComment
from comment_analyzer.exceptions import CommentDataError
from comment_analyzer.services.live_stream import LiveStreamSession, get_live_stream

router = APIRouter(prefix="/stream", tags=["stream"])


class ManualCommentRequest(BaseModel):
    text: str


class SampleRequest(BaseModel):
    manual_text: Optional[str] = None


class SpeedRequest(BaseModel):
    comments_per_second: float = Field(..., gt=0, le=10)


def _comment_dict(c: StreamComment) -> Dict[str, Any]:
    data = asdict(c)
    data["timestamp"] = c.timestamp.isoformat(timespec="seconds")
    return data


def _snapshot(stream: LiveStreamSession) -> Dict[str, Any]:
    stats = stream.stats()
    return {
        "streaming": stream.streaming,
        "speed": stream.speed,
        "stats": stats_to_dict(stats),
        "chart": sentiment_chart_rows(stats),
        "history": [asdict(p) for p in stream.history],
        "comments": [_comment_dict(c) for c in stream.comments],
    }


@router.get("")
def stream_state(stream: LiveStreamSession = Depends(get_live_stream)):
    return _snapshot(stream)


@router.post("/start")
def start_stream(stream: LiveStreamSession = Depends(get_live_stream)):
    stream.start()
    return _snapshot(stream)


@router.post("/pause")
def pause_stream(stream: LiveStreamSession = Depends(get_live_stream)):
    stream.pause()
    return _snapshot(stream)


@router.post("/stop")
def stop_stream(stream: LiveStreamSession = Depends(get_live_stream)):
    stream.stop()
    return _snapshot(stream)


@router.post("/speed")
def set_speed(req: SpeedRequest, stream: LiveStreamSession = Depends(get_live_stream)):
    stream.set_speed(req.comments_per_second)
    return _snapshot(stream)


@router.post("/tick")
def next_comment(stream: LiveStreamSession = Depends(get_live_stream)):
    """Produce the next simulated comment (the client polls at its chosen speed)."""
    comment = stream.tick()
    return {
        "comment": _comment_dict(comment) if comment is not None else None,
        "state": _snapshot(stream),
    }


@router.post("/comments")
def add_comment(req: ManualCommentRequest, stream: LiveStreamSession = Depends(get_live_stream)):
    try:
        comment = stream.add_comment(req.text)
    except CommentDataError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return {
        "comment": _comment_dict(comment) if comment is not None else None,
        "state": _snapshot(stream),
    }


@router.post("/sample")
def load_sample(req: SampleRequest, stream: LiveStreamSession = Depends(get_live_stream)):
    stream.load_sample(req.manual_text)
    return _snapshot(stream)
