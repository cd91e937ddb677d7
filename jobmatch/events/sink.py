"""Event sinks: where batch notifications are delivered.

A sink is injected into the batch coordinator. It is optional; without one
the batch is a pure computation with the same return value.
"""

import logging
from typing import Any, Callable, Dict, Optional, Protocol, Union, runtime_checkable

from jobmatch.logging import get_logger

from .models import EventSinkError, JobMatchEvent, LogEvent, LogType

logger = get_logger(__name__, component="events")

Event = Union[LogEvent, JobMatchEvent]


@runtime_checkable
class EventSink(Protocol):
    """Receives notifications in emission order. May raise on failure."""

    def emit(self, event: Event) -> None:
        ...


class NullEventSink:
    """Sink that discards everything."""

    def emit(self, event: Event) -> None:
        return None


class CallbackEventSink:
    """Forwards ``(event_name, payload)`` to a socket-style emit callable.

    Example:
        >>> sink = CallbackEventSink(socketio.emit)
        >>> sink.emit(LogEvent("Starting"))  # socketio.emit("log", {...})
    """

    def __init__(self, callback: Callable[[str, Dict[str, Any]], Any]):
        self.callback = callback

    def emit(self, event: Event) -> None:
        try:
            self.callback(event.name, event.to_payload())
        except Exception as e:
            raise EventSinkError(f"Failed to emit {event.name} event: {e}") from e


_LOG_TYPE_LEVELS = {
    LogType.INFO: logging.INFO,
    LogType.SUCCESS: logging.INFO,
    LogType.WARNING: logging.WARNING,
    LogType.ERROR: logging.ERROR,
}


class LoggingEventSink:
    """Writes notifications to a logger; used by the command line runner."""

    def __init__(self, logger_instance: Optional[logging.Logger] = None):
        self.logger = logger_instance or logger

    def emit(self, event: Event) -> None:
        if isinstance(event, JobMatchEvent):
            progress = event.progress
            self.logger.info(
                f"Match streamed: {event.job.title} at {event.job.company} "
                f"({event.job.match_score}%)",
                extra={
                    "event": "sink.job_match",
                    "posting_id": event.job.id,
                    "match_score": event.job.match_score,
                    "processed": progress.processed,
                    "total": progress.total,
                    "streamed_count": progress.streamed_count,
                },
            )
            return

        self.logger.log(
            _LOG_TYPE_LEVELS.get(LogType(event.type), logging.INFO),
            event.message,
            extra={"event": "sink.log", "log_type": LogType(event.type).value},
        )
