"""Custom exceptions for the classification capability."""

from typing import Optional


class ClassificationError(Exception):
    """Base exception for all classification errors.

    This is the parent class for every failure of a single classification:
    the call itself raising (timeout, network, quota) or the returned text
    failing to parse or validate. The item matcher catches this exception and
    substitutes a fallback result, so it never reaches the batch loop.
    """

    pass


class ClassifierTimeoutError(ClassificationError):
    """The classification request did not complete within the client timeout."""

    pass


class ClassifierTransportError(ClassificationError):
    """The request failed at the network or HTTP level.

    Carries the HTTP status code when the endpoint answered with an error.
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        """Initialize transport error.

        Args:
            message: Human-readable error message
            status_code: HTTP status code, if the endpoint responded
        """
        super().__init__(message)
        self.status_code = status_code


class ClassifierQuotaError(ClassifierTransportError):
    """The endpoint rejected the request because of rate limits or quota."""

    pass


class ClassifierResponseError(ClassificationError):
    """Response parsing or validation failed.

    Indicates the classifier answered but the text was not a JSON object of
    the expected shape (missing fields, non-numeric or out-of-range score,
    skill fields that are not lists).
    """

    def __init__(self, message: str, raw_text: Optional[str] = None) -> None:
        super().__init__(message)
        self.raw_text = raw_text


class ClassifierConfigurationError(Exception):
    """Invalid classifier configuration, such as a missing API key.

    Raised eagerly when the client is constructed, never per item.
    """

    pass
