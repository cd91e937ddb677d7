"""Data models for batch run state and reporting."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List

from jobmatch.domain.models import MatchedPosting

HIGH_MATCH_SCORE = 80
MEDIUM_MATCH_SCORE = 60


class BatchStatus(str, Enum):
    """Lifecycle of one batch invocation.

    IDLE -> RUNNING -> (CANCELLING ->) COMPLETED. There is no failed state:
    per-item errors are absorbed and only invalid input prevents RUNNING.
    """

    IDLE = "idle"
    RUNNING = "running"
    CANCELLING = "cancelling"
    COMPLETED = "completed"


@dataclass
class BatchRunState:
    """Mutable state owned by exactly one batch invocation.

    Attributes:
        total: Number of postings in the batch
        processed_count: Postings scored so far
        streamed_count: Postings that met the threshold so far
        results: Matched postings in processing (input) order
        status: Current lifecycle status
    """

    total: int
    processed_count: int = 0
    streamed_count: int = 0
    results: List[MatchedPosting] = field(default_factory=list)
    status: BatchStatus = BatchStatus.IDLE

    def record(self, matched: MatchedPosting) -> None:
        """Append a result; processed_count always equals len(results)."""
        self.results.append(matched)
        self.processed_count += 1


@dataclass(frozen=True)
class ScoreDistribution:
    """Counts of results per score band.

    Attributes:
        high: Scores of 80 and above
        medium: Scores from 60 to 79
        low: Scores below 60
    """

    high: int = 0
    medium: int = 0
    low: int = 0

    @classmethod
    def from_results(cls, results: List[MatchedPosting]) -> "ScoreDistribution":
        high = sum(1 for r in results if r.match_score >= HIGH_MATCH_SCORE)
        medium = sum(1 for r in results if MEDIUM_MATCH_SCORE <= r.match_score < HIGH_MATCH_SCORE)
        return cls(high=high, medium=medium, low=len(results) - high - medium)


@dataclass
class BatchRunResult:
    """Outcome of a complete batch invocation.

    Attributes:
        run_id: Identifier attached to every log line of the run
        results: Matched postings sorted by score, highest first; ties keep
            input order
        total: Number of postings supplied
        processed_count: Number of postings scored (equals len(results))
        streamed_count: Number of results at or above the threshold
        threshold: Streaming threshold used for the run
        status: Final status (always COMPLETED once returned)
        cancelled: Whether the run stopped early on cancellation
        run_started_at: UTC timestamp when the run began
        run_finished_at: UTC timestamp when the run completed
        total_duration_seconds: Wall time of the run
        fallback_count: Results produced by the classification fallback
    """

    run_id: str
    results: List[MatchedPosting]
    total: int
    processed_count: int
    streamed_count: int
    threshold: float
    status: BatchStatus
    cancelled: bool
    run_started_at: datetime
    run_finished_at: datetime
    total_duration_seconds: float = 0.0
    fallback_count: int = 0

    def __post_init__(self):
        if self.total_duration_seconds == 0.0:
            delta = self.run_finished_at - self.run_started_at
            self.total_duration_seconds = delta.total_seconds()

    @property
    def distribution(self) -> ScoreDistribution:
        return ScoreDistribution.from_results(self.results)

    @property
    def matches(self) -> List[MatchedPosting]:
        """Results at or above the run's threshold, in final order."""
        return [r for r in self.results if r.match_score >= self.threshold]

    @property
    def skipped_count(self) -> int:
        """Postings never started because the run was cancelled."""
        return self.total - self.processed_count
