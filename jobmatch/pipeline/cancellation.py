"""Cooperative cancellation for batch runs."""

import threading
from typing import Callable, Optional, Union

from jobmatch.logging import get_logger

logger = get_logger(__name__, component="batch")


class CancelToken:
    """Thread-safe flag a caller sets to stop a batch between postings.

    The batch checks the token before starting each posting; a classification
    already in flight always finishes. ``cancel`` may be called from another
    thread or from a signal handler.
    """

    def __init__(self) -> None:
        self._event = threading.Event()
        self.reason: Optional[str] = None

    def cancel(self, reason: Optional[str] = None) -> None:
        if not self._event.is_set():
            self.reason = reason
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def __repr__(self) -> str:
        return f"CancelToken(cancelled={self.is_cancelled})"


CancelSource = Union[CancelToken, Callable[[], bool]]


def cancellation_requested(source: Optional[CancelSource]) -> bool:
    """Check a CancelToken or a ``should_stop``-style callable.

    A callable that raises counts as a stop request; the batch then ends with
    the results gathered so far.
    """
    if source is None:
        return False
    if isinstance(source, CancelToken):
        return source.is_cancelled
    try:
        return bool(source())
    except Exception as e:
        logger.warning(
            f"Cancellation check failed, stopping batch: {e}",
            extra={"event": "batch.cancel_check.failed", "error_type": type(e).__name__},
        )
        return True
