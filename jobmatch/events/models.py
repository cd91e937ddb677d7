"""Event types pushed to observers during a batch run.

Two notification kinds exist, mirroring the socket events the UI listens to:
- ``log``: human-readable progress line with a severity type
- ``job-match``: a matched posting that crossed the streaming threshold
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict

from jobmatch.domain.models import MatchedPosting


class EventSinkError(Exception):
    """Raised (or wrapped) when pushing a notification to a sink fails.

    Always caught at the emission site; it never interrupts a batch.
    """

    pass


class LogType(str, Enum):
    """Severity of a ``log`` notification."""

    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Progress:
    """Batch progress at the moment a notification was emitted.

    Attributes:
        processed: Postings scored so far, including the current one
        total: Postings in the batch
        streamed_count: Matches streamed so far, including the current one
    """

    processed: int
    total: int
    streamed_count: int

    def to_payload(self) -> Dict[str, int]:
        return {
            "processed": self.processed,
            "total": self.total,
            "streamedCount": self.streamed_count,
        }


@dataclass(frozen=True)
class LogEvent:
    """Human-readable notification."""

    name: ClassVar[str] = "log"

    message: str
    type: LogType = LogType.INFO

    def to_payload(self) -> Dict[str, Any]:
        return {"message": self.message, "type": LogType(self.type).value}


@dataclass(frozen=True)
class JobMatchEvent:
    """A posting that met the threshold, streamed before the batch ends."""

    name: ClassVar[str] = "job-match"

    job: MatchedPosting
    progress: Progress

    def to_payload(self) -> Dict[str, Any]:
        return {"job": self.job.to_payload(), "progress": self.progress.to_payload()}
