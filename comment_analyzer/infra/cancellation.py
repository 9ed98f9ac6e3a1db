# comment_analyzer/infra/cancellation.py
from __future__ import annotations

import threading

from comment_analyzer.exceptions import RequestCancelled


class CancelToken:
    """
    Per-call cancellation flag.

    The caller creates a token, passes it to the call and may cancel it from
    anywhere. The callee checks it at its boundaries (before sending, after
    receiving) and raises RequestCancelled instead of returning a stale result.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise RequestCancelled("request was cancelled by the caller")


class LatestRequest:
    """Hands out a fresh token per request and cancels the one before it."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._current: CancelToken | None = None

    def next_token(self) -> CancelToken:
        token = CancelToken()
        with self._lock:
            if self._current is not None:
                self._current.cancel()
            self._current = token
        return token

    def cancel(self) -> None:
        with self._lock:
            if self._current is not None:
                self._current.cancel()
            self._current = None
