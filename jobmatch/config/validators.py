"""Non-fatal configuration checks."""

import warnings
from typing import Any, Dict, List


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Check configuration for settings that are valid but probably unintended.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    matching = config_dict.get("matching", {})
    if isinstance(matching, dict):
        threshold = matching.get("threshold")
        if isinstance(threshold, (int, float)) and not isinstance(threshold, bool):
            if threshold < 30:
                warning_messages.append(
                    f"Low matching.threshold ({threshold}) will stream most postings"
                )
            elif threshold > 95:
                warning_messages.append(
                    f"High matching.threshold ({threshold}) will stream almost nothing"
                )

        limit = matching.get("description_limit")
        if isinstance(limit, int) and limit > 5000:
            warning_messages.append(
                f"Large matching.description_limit ({limit}) increases classification cost"
            )

    classifier = config_dict.get("classifier", {})
    if isinstance(classifier, dict):
        temperature = classifier.get("temperature")
        if isinstance(temperature, (int, float)) and temperature > 1.0:
            warning_messages.append(
                f"classifier.temperature {temperature} makes scores less repeatable"
            )

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """Emit warning messages using Python's warnings module."""
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
