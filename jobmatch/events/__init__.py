"""Progress and match notifications for live observers."""

from .models import EventSinkError, JobMatchEvent, LogEvent, LogType, Progress
from .sink import CallbackEventSink, Event, EventSink, LoggingEventSink, NullEventSink

__all__ = [
    "Event",
    "EventSink",
    "EventSinkError",
    "NullEventSink",
    "CallbackEventSink",
    "LoggingEventSink",
    "LogEvent",
    "LogType",
    "JobMatchEvent",
    "Progress",
]
