"""Context propagation for structured logging.

Fields pushed here (run_id, posting_id, ...) are attached to every log record
emitted inside the scope by ``ContextualFilter``. Backed by contextvars, so
each thread or task sees its own context.
"""

from contextvars import ContextVar, Token
from typing import Any, Dict, Optional

LogContextVar: ContextVar[Dict[str, Any]] = ContextVar("log_context", default={})


def get_log_context() -> Dict[str, Any]:
    """Return a copy of the active logging context.

    Returns:
        Dictionary of fields (run_id, posting_id, ...) for the current scope
    """
    return LogContextVar.get().copy()


def push_log_context(**kwargs) -> Token:
    """Merge fields into the active context.

    Args:
        **kwargs: Fields to add; existing keys are overwritten

    Returns:
        Token for ``pop_log_context``

    Example:
        >>> token = push_log_context(run_id="abc123")
        >>> pop_log_context(token)
    """
    return LogContextVar.set({**LogContextVar.get(), **kwargs})


def pop_log_context(token: Token) -> None:
    """Restore the context captured by ``push_log_context``.

    Args:
        token: Token returned by the matching push
    """
    LogContextVar.reset(token)


def clear_log_context() -> None:
    """Drop all context fields.

    Tests call this between cases so run_id and posting_id never leak.
    """
    LogContextVar.set({})


class log_context:
    """Context manager that scopes logging fields to a block.

    Example:
        >>> with log_context(run_id="abc123", posting_id="job-7"):
        ...     logger.info("Scoring posting")  # carries run_id and posting_id
    """

    def __init__(self, **kwargs):
        """Initialize with the fields to scope.

        Args:
            **kwargs: Fields such as run_id or posting_id
        """
        self.kwargs = kwargs
        self.token: Optional[Token] = None

    def __enter__(self):
        """Push the fields; they apply until the block exits."""
        self.token = push_log_context(**self.kwargs)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Restore the previous context. Exceptions propagate."""
        if self.token is not None:
            pop_log_context(self.token)
        return False
