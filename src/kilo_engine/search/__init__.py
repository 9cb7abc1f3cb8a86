"""Substring search over rendered rows."""

from .overlay import BACKWARD, FORWARD, SearchMatch, SearchOverlay, find

__all__ = ["BACKWARD", "FORWARD", "SearchMatch", "SearchOverlay", "find"]
