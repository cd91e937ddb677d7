"""Batch coordination: score postings in order, stream matches, sort results."""

import logging
import numbers
from collections.abc import Iterable, Mapping
from typing import Any, List, Optional, Tuple
from uuid import uuid4

from pydantic import ValidationError

from jobmatch.domain.models import MatchedPosting, Posting, Profile
from jobmatch.events.models import EventSinkError, JobMatchEvent, LogEvent, LogType, Progress
from jobmatch.events.sink import Event, EventSink, NullEventSink
from jobmatch.logging import get_logger
from jobmatch.logging.context import log_context
from jobmatch.matching.engine import ItemMatcher
from jobmatch.utils.timestamps import utc_now

from .cancellation import CancelSource, cancellation_requested
from .exceptions import InvalidInputError
from .models import BatchRunResult, BatchRunState, BatchStatus

logger = get_logger(__name__, component="batch")

DEFAULT_THRESHOLD = 75
DEFAULT_PROGRESS_INTERVAL = 5


class BatchCoordinator:
    """
    Drives one batch of postings through the item matcher.

    Postings are scored sequentially in input order with at most one
    classification in flight. Matches at or above the threshold are streamed
    to the sink as soon as they are scored; the returned list is sorted by
    score once the loop ends.

    The coordinator keeps no per-run state on the instance: every call to
    ``run`` owns a fresh BatchRunState, so independent runs never share
    accumulators.
    """

    def __init__(
        self,
        item_matcher: ItemMatcher,
        progress_interval: int = DEFAULT_PROGRESS_INTERVAL,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """
        Initialize the batch coordinator.

        Args:
            item_matcher: Matcher used to score each posting
            progress_interval: Emit a progress log every N processed postings
            logger_instance: Optional logger instance (defaults to module logger)
        """
        if progress_interval < 1:
            raise ValueError("progress_interval must be at least 1")
        self.item_matcher = item_matcher
        self.progress_interval = progress_interval
        self.logger = logger_instance or logger

    def match_all(
        self,
        postings: Any,
        profile: Any,
        threshold: float = DEFAULT_THRESHOLD,
        sink: Optional[EventSink] = None,
        cancel_token: Optional[CancelSource] = None,
    ) -> List[MatchedPosting]:
        """
        Score all postings and return them sorted by match score.

        See ``run`` for arguments; this returns only the sorted results.
        """
        return self.run(postings, profile, threshold, sink, cancel_token).results

    def run(
        self,
        postings: Any,
        profile: Any,
        threshold: float = DEFAULT_THRESHOLD,
        sink: Optional[EventSink] = None,
        cancel_token: Optional[CancelSource] = None,
    ) -> BatchRunResult:
        """
        Execute a complete batch.

        This method:
        1. Validates input (nothing is scored if validation fails)
        2. Scores each posting sequentially in input order
        3. Streams postings scoring >= threshold and periodic progress
        4. Stops before the next posting once cancellation is requested
        5. Stable-sorts results by score, highest first

        Args:
            postings: Sequence of Posting objects or posting mappings
            profile: Profile or raw profile mapping
            threshold: Inclusive streaming threshold in [0, 100]
            sink: Optional observer for log and job-match notifications
            cancel_token: CancelToken or zero-argument callable returning True
                once the run should stop

        Returns:
            BatchRunResult with sorted results and run counters

        Raises:
            InvalidInputError: If postings, profile or threshold is malformed.
                Per-posting and sink failures never propagate.
        """
        validated_postings, validated_profile = self._validate_input(postings, profile, threshold)
        sink = sink if sink is not None else NullEventSink()

        run_id = uuid4().hex
        run_started_at = utc_now()
        state = BatchRunState(total=len(validated_postings))
        fallback_count = 0

        with log_context(run_id=run_id):
            state.status = BatchStatus.RUNNING
            self.logger.info(
                f"Batch run started: {state.total} postings",
                extra={
                    "event": "batch.run.started",
                    "total": state.total,
                    "threshold": threshold,
                },
            )
            self._emit(sink, LogEvent(f"🎯 Starting AI analysis of {state.total} jobs..."))
            self._emit(
                sink, LogEvent(f"🔥 Jobs with {threshold:g}%+ match will appear immediately!")
            )

            for posting in validated_postings:
                if cancellation_requested(cancel_token):
                    state.status = BatchStatus.CANCELLING
                    self.logger.info(
                        "Cancellation requested, stopping before next posting",
                        extra={
                            "event": "batch.run.cancelled",
                            "processed": state.processed_count,
                            "total": state.total,
                        },
                    )
                    self._emit(
                        sink,
                        LogEvent(
                            f"🛑 Stopping... processed {state.processed_count}/{state.total} jobs",
                            LogType.WARNING,
                        ),
                    )
                    break

                with log_context(posting_id=posting.id):
                    result = self.item_matcher.match(posting, validated_profile)
                    matched = MatchedPosting.merge(posting, result)
                    state.record(matched)
                    if result.is_fallback:
                        fallback_count += 1

                    self.logger.info(
                        f"{posting.title} at {posting.company}: {matched.match_score}% match",
                        extra={
                            "event": "batch.item.matched",
                            "match_score": matched.match_score,
                            "processed": state.processed_count,
                            "total": state.total,
                        },
                    )

                    if matched.match_score >= threshold:
                        state.streamed_count += 1
                        self.logger.info(
                            f"Streaming match {posting.id} ({matched.match_score}%)",
                            extra={
                                "event": "batch.item.streamed",
                                "match_score": matched.match_score,
                                "streamed_count": state.streamed_count,
                            },
                        )
                        self._emit(
                            sink,
                            JobMatchEvent(
                                job=matched,
                                progress=Progress(
                                    processed=state.processed_count,
                                    total=state.total,
                                    streamed_count=state.streamed_count,
                                ),
                            ),
                        )
                        self._emit(
                            sink,
                            LogEvent(
                                f"🎯 {matched.match_score}% Match: "
                                f"{posting.title} at {posting.company}",
                                LogType.SUCCESS,
                            ),
                        )

                    if state.processed_count % self.progress_interval == 0:
                        self._emit(
                            sink,
                            LogEvent(
                                f"⏳ Progress: {state.processed_count}/{state.total} jobs analyzed "
                                f"({state.streamed_count} matches found)"
                            ),
                        )

            cancelled = state.status is BatchStatus.CANCELLING

            # sorted() is stable, so equal scores keep input order
            ranked = sorted(state.results, key=lambda m: m.match_score, reverse=True)

            if cancelled:
                self._emit(
                    sink,
                    LogEvent(
                        f"⏹️ Search stopped. Found {state.streamed_count} matches in "
                        f"{state.processed_count} jobs analyzed.",
                        LogType.WARNING,
                    ),
                )
            else:
                self._emit(
                    sink,
                    LogEvent(
                        f"✅ Analysis complete! {state.streamed_count} jobs meet your "
                        f"{threshold:g}%+ threshold",
                        LogType.SUCCESS,
                    ),
                )

            state.status = BatchStatus.COMPLETED
            result = BatchRunResult(
                run_id=run_id,
                results=ranked,
                total=state.total,
                processed_count=state.processed_count,
                streamed_count=state.streamed_count,
                threshold=threshold,
                status=state.status,
                cancelled=cancelled,
                run_started_at=run_started_at,
                run_finished_at=utc_now(),
                fallback_count=fallback_count,
            )

            self.logger.info(
                "Batch run completed",
                extra={
                    "event": "batch.run.completed",
                    "duration_ms": int(result.total_duration_seconds * 1000),
                    "processed": result.processed_count,
                    "total": result.total,
                    "streamed": result.streamed_count,
                    "fallbacks": result.fallback_count,
                    "cancelled": result.cancelled,
                },
            )

        return result

    def _emit(self, sink: EventSink, event: Event) -> None:
        """Push one notification, discarding any sink failure."""
        try:
            sink.emit(event)
        except Exception as e:
            error = e if isinstance(e, EventSinkError) else EventSinkError(str(e))
            self.logger.warning(
                f"Dropped {event.name} notification: {error}",
                extra={
                    "event": "batch.sink.failed",
                    "notification": event.name,
                    "error_type": type(e).__name__,
                },
            )

    @staticmethod
    def _validate_input(
        postings: Any, profile: Any, threshold: Any
    ) -> Tuple[List[Posting], Profile]:
        """
        Convert and validate batch input before anything runs.

        Raises:
            InvalidInputError: On any structural problem
        """
        if profile is None:
            raise InvalidInputError("Profile is required")
        try:
            validated_profile = Profile.from_raw(profile)
        except (TypeError, ValidationError) as e:
            raise InvalidInputError("Malformed profile", errors=[str(e)]) from e

        if (
            isinstance(threshold, bool)
            or not isinstance(threshold, numbers.Real)
            or not 0 <= threshold <= 100
        ):
            raise InvalidInputError(f"Threshold must be a number in [0, 100], got {threshold!r}")

        if postings is None or isinstance(postings, (str, bytes, Mapping)) or not isinstance(
            postings, Iterable
        ):
            raise InvalidInputError(
                f"Postings must be a sequence of postings, got {type(postings).__name__}"
            )

        validated_postings: List[Posting] = []
        errors: List[str] = []
        for index, item in enumerate(postings):
            if isinstance(item, Posting):
                validated_postings.append(item)
                continue
            if not isinstance(item, Mapping):
                errors.append(f"postings[{index}]: expected a mapping, got {type(item).__name__}")
                continue
            try:
                validated_postings.append(Posting.model_validate(dict(item)))
            except ValidationError as e:
                errors.append(f"postings[{index}]: {e.errors()[0]['msg']}")

        if errors:
            raise InvalidInputError("Malformed postings", errors=errors)

        return validated_postings, validated_profile
