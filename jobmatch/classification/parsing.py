"""Parse and validate classifier responses into MatchResult objects.

The classifier is asked for a single JSON object but may wrap it in markdown
fences or surround it with prose. ``parse_match_response`` handles both and
returns a tagged ``ParseOutcome`` instead of raising, so callers branch once
on ``outcome.ok``.
"""

import json
import math
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from jobmatch.domain.models import MatchResult

from .exceptions import ClassificationError, ClassifierResponseError

_FENCE_PATTERN = re.compile(r"```(?:json|JSON)?")

SKILL_FIELDS = ("matchedSkills", "missingSkills")
OPTIONAL_TEXT_FIELDS = ("salaryMatch", "locationMatch")


@dataclass(frozen=True)
class ParseOutcome:
    """Result of parsing one classifier response.

    Exactly one of ``result`` and ``error`` is set.

    Attributes:
        result: Validated MatchResult on success
        error: ClassificationError describing the failure
    """

    result: Optional[MatchResult] = None
    error: Optional[ClassificationError] = None

    @classmethod
    def success(cls, result: MatchResult) -> "ParseOutcome":
        return cls(result=result)

    @classmethod
    def failure(cls, error: ClassificationError) -> "ParseOutcome":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.result is not None


def strip_fences(text: str) -> str:
    """Remove markdown code fences and isolate the outermost JSON object.

    Args:
        text: Raw response text

    Returns:
        Text between the first ``{`` and the last ``}``, or the stripped
        text if no braces are present
    """
    cleaned = _FENCE_PATTERN.sub("", text or "").strip()
    start = cleaned.find("{")
    end = cleaned.rfind("}")
    if start != -1 and end > start:
        return cleaned[start : end + 1]
    return cleaned


def _coerce_score(value: Any) -> int:
    """Validate the raw score and convert it to an int in [0, 100].

    Raises:
        ValueError: If the score is missing, non-numeric or out of range
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"matchScore must be a number, got {value!r}")
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            raise ValueError(f"matchScore must be finite, got {value!r}")
        value = int(round(value))
    if value < 0 or value > 100:
        raise ValueError(f"matchScore out of range [0, 100]: {value}")
    return value


def _coerce_skills(name: str, value: Any) -> List[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"{name} must be a list, got {type(value).__name__}")
    return [str(item).strip() for item in value if item is not None and str(item).strip()]


def _normalize_payload(data: Dict[str, Any]) -> Dict[str, Any]:
    if "matchScore" not in data:
        raise ValueError("matchScore is missing")

    payload: Dict[str, Any] = {"matchScore": _coerce_score(data["matchScore"])}
    for name in SKILL_FIELDS:
        payload[name] = _coerce_skills(name, data.get(name))

    reasoning = data.get("reasoning")
    payload["reasoning"] = "" if reasoning is None else str(reasoning).strip()

    for name in OPTIONAL_TEXT_FIELDS:
        value = data.get(name)
        if value is not None:
            payload[name] = str(value)
    return payload


def parse_match_response(text: str) -> ParseOutcome:
    """Parse classifier output into a validated MatchResult.

    Args:
        text: Raw classifier response, possibly fenced

    Returns:
        ParseOutcome carrying either the MatchResult or a
        ClassifierResponseError
    """
    cleaned = strip_fences(text)
    if not cleaned:
        return ParseOutcome.failure(
            ClassifierResponseError("Classifier returned an empty response", raw_text=text)
        )

    try:
        data = json.loads(cleaned)
    except (ValueError, RecursionError) as e:
        # RecursionError: nesting deeper than the decoder can follow
        return ParseOutcome.failure(
            ClassifierResponseError(f"Response is not valid JSON: {e}", raw_text=text)
        )

    if not isinstance(data, dict):
        return ParseOutcome.failure(
            ClassifierResponseError(
                f"Response must be a JSON object, got {type(data).__name__}", raw_text=text
            )
        )

    try:
        result = MatchResult.model_validate(_normalize_payload(data))
    except (ValueError, ValidationError, RecursionError) as e:
        return ParseOutcome.failure(
            ClassifierResponseError(f"Response failed validation: {e}", raw_text=text)
        )

    return ParseOutcome.success(result)
