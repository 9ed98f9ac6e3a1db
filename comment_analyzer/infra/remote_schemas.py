# comment_analyzer/infra/remote_schemas.py
"""
Strict decoding of the external analysis API responses.

Every decoder returns a tagged result, `Ok(value)` or `Err(reason)`, instead
of raising or quietly returning a half-parsed string. Callers decide what an
`Err` means (the analysis service falls back to the local heuristics and logs
the reason).

Accepted shapes

- /sentiment: {"data": {"data": [[text, label, "87.5%"], ...]}}
- /summary:   {"summary": {"summary": "..."}}
              {"summary": "{\"summary\": \"...\"}"}          (JSON string)
              {"summary": "{'status': 'success', 'summary': '...'}"}  (Python literal string)
              {"summary": "plain summary text"}
"""

from __future__ import annotations

import ast
import json
from dataclasses import dataclass
from typing import Any, Dict, Generic, List, TypeVar, Union

from pydantic import BaseModel, ValidationError, field_validator

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    reason: str


Result = Union[Ok[T], Err]


# ---------------------------
# /sentiment
# ---------------------------

class SentimentTable(BaseModel):
    data: List[List[Any]]

    @field_validator("data")
    @classmethod
    def _rows_have_labels(cls, rows: List[List[Any]]) -> List[List[Any]]:
        for i, row in enumerate(rows):
            if len(row) < 2 or not isinstance(row[1], str) or not row[1].strip():
                raise ValueError(f"row {i} has no sentiment label")
        return rows


class SentimentResponse(BaseModel):
    data: SentimentTable


def decode_sentiment_response(payload: Any, expected_rows: int) -> Result[List[List[Any]]]:
    """Rows of the classifier table; exactly one row per submitted comment."""
    try:
        parsed = SentimentResponse.model_validate(payload)
    except ValidationError as e:
        return Err(f"sentiment response failed validation: {e.error_count()} error(s)")

    rows = parsed.data.data
    if len(rows) != expected_rows:
        return Err(f"sentiment response has {len(rows)} rows for {expected_rows} comments")
    return Ok(rows)


# ---------------------------
# /summary
# ---------------------------

class SummaryObject(BaseModel):
    summary: str
    status: str | None = None

    @field_validator("summary")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("summary is empty")
        return value.strip()


class SummaryResponse(BaseModel):
    summary: Union[SummaryObject, str]


def _decode_object_string(raw: str) -> Result[Dict[str, Any]]:
    """A serialized object: JSON first, then a Python literal (single quotes, None/True/False)."""
    try:
        value = json.loads(raw)
    except ValueError:
        try:
            value = ast.literal_eval(raw)
        except (ValueError, SyntaxError) as e:
            return Err(f"summary string is neither JSON nor a Python literal: {e}")
    if not isinstance(value, dict):
        return Err("serialized summary is not an object")
    return Ok(value)


def _summary_from_object(obj: Any) -> Result[str]:
    try:
        parsed = SummaryObject.model_validate(obj)
    except ValidationError as e:
        return Err(f"summary object failed validation: {e.error_count()} error(s)")
    if parsed.status is not None and parsed.status.lower() not in ("success", "ok"):
        return Err(f"summary service reported status {parsed.status!r}")
    return Ok(parsed.summary)


def decode_summary_response(payload: Any) -> Result[str]:
    try:
        parsed = SummaryResponse.model_validate(payload)
    except ValidationError as e:
        return Err(f"summary response failed validation: {e.error_count()} error(s)")

    summary = parsed.summary
    if isinstance(summary, SummaryObject):
        return _summary_from_object(summary.model_dump())

    text = summary.strip()
    if not text:
        return Err("summary is empty")
    if not text.startswith("{"):
        return Ok(text)

    decoded = _decode_object_string(text)
    if isinstance(decoded, Err):
        return decoded
    return _summary_from_object(decoded.value)
