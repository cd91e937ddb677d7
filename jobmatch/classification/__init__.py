"""Classification capability: prompt building, LLM client, and response parsing.

This module provides:
- Classifier: protocol for anything that scores a prompt
- OpenAIClassifier: production client for OpenAI-compatible endpoints
- build_match_prompt: renders the posting-versus-profile prompt
- parse_match_response: tagged parse-and-validate of classifier output
"""

from .client import Classifier, OpenAIClassifier
from .exceptions import (
    ClassificationError,
    ClassifierConfigurationError,
    ClassifierQuotaError,
    ClassifierResponseError,
    ClassifierTimeoutError,
    ClassifierTransportError,
)
from .parsing import ParseOutcome, parse_match_response, strip_fences
from .prompts import DEFAULT_DESCRIPTION_LIMIT, build_match_prompt, truncate_description

__all__ = [
    "Classifier",
    "OpenAIClassifier",
    "ClassificationError",
    "ClassifierConfigurationError",
    "ClassifierQuotaError",
    "ClassifierResponseError",
    "ClassifierTimeoutError",
    "ClassifierTransportError",
    "ParseOutcome",
    "parse_match_response",
    "strip_fences",
    "DEFAULT_DESCRIPTION_LIMIT",
    "build_match_prompt",
    "truncate_description",
]
