"""Batch-level exceptions."""

from typing import List, Optional


class InvalidInputError(ValueError):
    """Raised before any posting is processed when the batch input is malformed.

    Covers a profile that is not a mapping or has unusable field types,
    postings that are not a sequence of posting records, and a threshold
    outside [0, 100]. This error is fatal for the batch and propagates to
    the caller.
    """

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        """Initialize InvalidInputError.

        Args:
            message: Primary error message
            errors: Specific validation problems, if any
        """
        self.message = message
        self.errors = errors or []
        detail = "; ".join(self.errors)
        super().__init__(f"{message}: {detail}" if detail else message)
