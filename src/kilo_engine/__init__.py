"""UI-agnostic document model and incremental syntax highlighter."""

__all__ = [
    "buffer",
    "config",
    "runtime",
    "search",
    "session",
    "syntax",
]

__version__ = "0.1.0"
