"""Item matcher: scores one posting against one profile.

This module implements the per-item step of a batch:
1. Render the classification prompt (description truncated)
2. Make exactly one classifier call
3. Parse and validate the response
4. Substitute the fallback result on any ClassificationError
"""

import logging
from typing import Optional

from jobmatch.classification.client import Classifier
from jobmatch.classification.exceptions import ClassificationError
from jobmatch.classification.parsing import parse_match_response
from jobmatch.classification.prompts import DEFAULT_DESCRIPTION_LIMIT, build_match_prompt
from jobmatch.domain.models import MatchResult, Posting, Profile
from jobmatch.logging import get_logger

logger = get_logger(__name__, component="matcher")


class ItemMatcher:
    """Scores postings through an injected classifier.

    ``match`` never raises ClassificationError: a failed call or an unusable
    response yields ``MatchResult.fallback()`` so one bad posting cannot abort
    the batch. The matcher holds no per-call state and may be shared.
    """

    def __init__(
        self,
        classifier: Classifier,
        description_limit: int = DEFAULT_DESCRIPTION_LIMIT,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize ItemMatcher.

        Args:
            classifier: Classification capability, constructed once at startup
            description_limit: Maximum description characters sent per request
            logger_instance: Optional logger instance (defaults to module logger)
        """
        if description_limit < 1:
            raise ValueError("description_limit must be positive")
        self.classifier = classifier
        self.description_limit = description_limit
        self.logger = logger_instance or logger

    def match(self, posting: Posting, profile: Profile) -> MatchResult:
        """Score a posting against a profile.

        Args:
            posting: Posting to evaluate
            profile: Candidate profile (already defaulted)

        Returns:
            Validated MatchResult, or the fallback result on failure
        """
        prompt = build_match_prompt(posting, profile, self.description_limit)

        try:
            response_text = self.classifier.classify(prompt)
        except ClassificationError as e:
            return self._fallback(posting, e)
        except Exception as e:
            # Classifier implementations outside this package may raise anything
            return self._fallback(posting, ClassificationError(f"Unexpected classifier error: {e}"))

        try:
            outcome = parse_match_response(response_text)
        except Exception as e:
            return self._fallback(posting, ClassificationError(f"Unexpected parse error: {e}"))
        if not outcome.ok:
            return self._fallback(posting, outcome.error)

        self.logger.debug(
            f"Scored posting {posting.id}: {outcome.result.match_score}%",
            extra={
                "event": "match.scored",
                "posting_id": posting.id,
                "match_score": outcome.result.match_score,
                "matched_skills": len(outcome.result.matched_skills),
                "missing_skills": len(outcome.result.missing_skills),
            },
        )
        return outcome.result

    def _fallback(self, posting: Posting, error: ClassificationError) -> MatchResult:
        self.logger.warning(
            f"Classification failed for {posting.title!r} at {posting.company!r}: {error}",
            extra={
                "event": "match.classification.failed",
                "posting_id": posting.id,
                "error_type": type(error).__name__,
                "error": str(error),
            },
        )
        return MatchResult.fallback()
