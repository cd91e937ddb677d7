"""Classifier clients for scoring a prompt with an external LLM.

The classifier is constructed once at startup and passed by reference into
the item matcher. Tests substitute any object satisfying ``Classifier``.
"""

import logging
from typing import Optional, Protocol, runtime_checkable

import openai
from openai import OpenAI

from jobmatch.logging import get_logger

from .exceptions import (
    ClassificationError,
    ClassifierConfigurationError,
    ClassifierQuotaError,
    ClassifierResponseError,
    ClassifierTimeoutError,
    ClassifierTransportError,
)

logger = get_logger(__name__, component="classifier")

DEFAULT_MODEL = "gpt-4o-mini"


@runtime_checkable
class Classifier(Protocol):
    """Anything that turns a prompt into response text.

    Implementations raise ClassificationError (or a subclass) on failure.
    """

    def classify(self, prompt: str) -> str:
        ...


class OpenAIClassifier:
    """Classifier backed by an OpenAI-compatible chat completions endpoint.

    Any provider exposing the chat completions API (OpenAI, Groq, a local
    gateway) works by pointing ``base_url`` at it. The SDK's own retries are
    disabled: a failed call is reported once and the item falls back.
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        base_url: Optional[str] = None,
        max_tokens: int = 1024,
        temperature: float = 0.0,
        timeout_seconds: float = 60.0,
        client: Optional[OpenAI] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize the classifier and validate credentials eagerly.

        Args:
            api_key: API key for the endpoint
            model: Model name passed on every request
            base_url: Optional OpenAI-compatible endpoint URL
            max_tokens: Response token cap
            temperature: Sampling temperature
            timeout_seconds: Transport timeout per request
            client: Pre-built OpenAI client (mainly for tests)
            logger_instance: Optional logger (defaults to module logger)

        Raises:
            ClassifierConfigurationError: If the API key or model is empty
        """
        if not api_key or not api_key.strip():
            raise ClassifierConfigurationError("Classifier API key is not set")
        if not model or not model.strip():
            raise ClassifierConfigurationError("Classifier model name is not set")

        self.model = model.strip()
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.logger = logger_instance or logger
        self._client = client or OpenAI(
            api_key=api_key.strip(),
            base_url=base_url,
            timeout=timeout_seconds,
            max_retries=0,
        )

    def classify(self, prompt: str) -> str:
        """Send one prompt and return the first choice's text.

        Args:
            prompt: Fully rendered prompt

        Returns:
            Response text (may be fenced JSON)

        Raises:
            ClassifierTimeoutError: Request timed out
            ClassifierQuotaError: Rate limit or quota exceeded
            ClassifierTransportError: Connection or HTTP status failure
            ClassifierResponseError: Response had no text content
            ClassificationError: Any other SDK error
        """
        try:
            response = self._client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
        except openai.APITimeoutError as e:
            raise ClassifierTimeoutError(f"Classification request timed out: {e}") from e
        except openai.RateLimitError as e:
            raise ClassifierQuotaError(
                f"Classification rate limited: {e}", status_code=e.status_code
            ) from e
        except openai.APIStatusError as e:
            raise ClassifierTransportError(
                f"Classification request failed with HTTP {e.status_code}: {e}",
                status_code=e.status_code,
            ) from e
        except openai.APIConnectionError as e:
            raise ClassifierTransportError(f"Classification connection failed: {e}") from e
        except openai.OpenAIError as e:
            raise ClassificationError(f"Classification failed: {e}") from e

        if not response.choices:
            raise ClassifierResponseError("Classifier returned no choices")

        content = response.choices[0].message.content or ""
        self.logger.debug(
            "Classifier responded",
            extra={
                "event": "classifier.response",
                "model": self.model,
                "response_chars": len(content),
            },
        )
        return content.strip()
