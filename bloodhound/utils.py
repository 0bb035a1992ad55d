"""Small string helpers shared by the evaluators."""

from __future__ import annotations

from collections.abc import Iterable


def contains_any(content: str, words: Iterable[str]) -> bool:
    """Return True if any of ``words`` occurs as a substring of ``content``."""
    return any(word in content for word in words)