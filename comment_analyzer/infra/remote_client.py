# comment_analyzer/infra/remote_client.py

from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence

import requests

from comment_analyzer.core.config import AnalysisConfig
from comment_analyzer.exceptions import RemoteServiceError
from comment_analyzer.infra.cancellation import CancelToken
from comment_analyzer.infra.remote_schemas import (
    Result,
    decode_sentiment_response,
    decode_summary_response,
)

logger = logging.getLogger(__name__)


class RemoteAnalysisClient:
    """
    Thin client for the external sentiment / summary API.

    - transport problems (connection, timeout, HTTP status, non-JSON body)
      raise RemoteServiceError
    - a body that arrives but has the wrong shape comes back as `Err`
    - a triggered CancelToken raises RequestCancelled before the request is
      sent and again before a late response is decoded
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, config: AnalysisConfig) -> "RemoteAnalysisClient":
        return cls(config.remote_api_base, timeout=config.remote_timeout)

    def _post(self, path: str, comments: Sequence[str], token: Optional[CancelToken]) -> Any:
        if token is not None:
            token.raise_if_cancelled()

        url = f"{self.base_url}{path}"
        logger.info("remote call start: POST %s (comments=%d)", url, len(comments))
        try:
            response = self.session.post(
                url,
                json={"comments": list(comments)},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            raise RemoteServiceError(f"POST {path} failed: {e}") from e

        if token is not None:
            token.raise_if_cancelled()

        try:
            return response.json()
        except ValueError as e:
            raise RemoteServiceError(f"POST {path} returned a non-JSON body") from e

    def classify_sentiment(
        self,
        comments: Sequence[str],
        token: Optional[CancelToken] = None,
    ) -> Result[List[List[Any]]]:
        payload = self._post("/sentiment", comments, token)
        return decode_sentiment_response(payload, expected_rows=len(comments))

    def summarize(
        self,
        comments: Sequence[str],
        token: Optional[CancelToken] = None,
    ) -> Result[str]:
        payload = self._post("/summary", comments, token)
        return decode_summary_response(payload)
