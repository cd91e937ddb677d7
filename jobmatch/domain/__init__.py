"""Domain models for the job match streamer."""

from .models import (
    FALLBACK_REASONING,
    NOT_SPECIFIED,
    ExperienceEntry,
    MatchedPosting,
    MatchResult,
    Posting,
    Profile,
)

__all__ = [
    "Posting",
    "Profile",
    "ExperienceEntry",
    "MatchResult",
    "MatchedPosting",
    "FALLBACK_REASONING",
    "NOT_SPECIFIED",
]
