"""Test helper utilities for Job Match Streamer tests."""

from .stubs import RecordingEventSink, StubClassifier, match_response

__all__ = ["StubClassifier", "RecordingEventSink", "match_response"]
