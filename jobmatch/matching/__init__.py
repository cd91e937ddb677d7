"""Per-posting matching against a candidate profile.

This module provides:
- ItemMatcher: scores one posting via the classifier, never raising
"""

from .engine import ItemMatcher

__all__ = ["ItemMatcher"]
