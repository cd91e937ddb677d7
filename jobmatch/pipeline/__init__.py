"""Batch coordination for scoring postings and streaming matches."""

from .cancellation import CancelToken, cancellation_requested
from .exceptions import InvalidInputError
from .models import BatchRunResult, BatchRunState, BatchStatus, ScoreDistribution
from .runner import DEFAULT_PROGRESS_INTERVAL, DEFAULT_THRESHOLD, BatchCoordinator

__all__ = [
    "BatchCoordinator",
    "BatchRunResult",
    "BatchRunState",
    "BatchStatus",
    "ScoreDistribution",
    "CancelToken",
    "cancellation_requested",
    "InvalidInputError",
    "DEFAULT_THRESHOLD",
    "DEFAULT_PROGRESS_INTERVAL",
]
