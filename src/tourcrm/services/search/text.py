"""Accent- and case-insensitive text helpers used by client lookup."""

from __future__ import annotations

import unicodedata


def normalize(text: str | None) -> str:
    """Lowercase ``text`` and strip diacritics ("Città" -> "citta")."""

    if not text:
        return ""
    decomposed = unicodedata.normalize("NFD", text.lower())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def tokenize(query: str | None) -> list[str]:
    """Normalize ``query`` and split it on whitespace runs.

    Empty or whitespace-only input yields an empty list.
    """

    return normalize(query).split()
