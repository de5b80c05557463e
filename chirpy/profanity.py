"""Masking of banned words inside chirp bodies."""
from __future__ import annotations

from typing import FrozenSet

PROFANE_WORDS: FrozenSet[str] = frozenset({"kerfuffle", "sharbert", "fornax"})
MASK = "****"


def _is_profane(token: str) -> bool:
    lowered = token.lower()
    return any(word in lowered for word in PROFANE_WORDS)


def clean_profanity(text: str) -> str:
    """Replace every space-separated token containing a banned word with ``****``.

    Only the literal space character separates tokens, so tabs, newlines and
    repeated spaces are preserved exactly as they were submitted.
    """

    tokens = text.split(" ")
    return " ".join(MASK if _is_profane(token) else token for token in tokens)


__all__ = ["PROFANE_WORDS", "MASK", "clean_profanity"]
