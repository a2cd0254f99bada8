"""Client search helpers."""

from .index import composite_text, matches, search_clients
from .text import normalize, tokenize

__all__ = ["composite_text", "matches", "normalize", "search_clients", "tokenize"]
