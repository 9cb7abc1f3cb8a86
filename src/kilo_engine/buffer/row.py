"""Row entity: raw text plus its derived render and highlight buffers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from kilo_engine.syntax.models import HighlightClass


@dataclass(slots=True)
class Row:
    """One logical line of a document.

    ``render`` and ``highlight`` are derived from ``raw`` by the owning
    document and must never be edited directly (the search overlay is the
    one sanctioned, reversible exception for ``highlight``).
    """

    index: int
    raw: str
    render: str = ""
    highlight: List[HighlightClass] = field(default_factory=list)
    open_block_comment: bool = False

    @property
    def size(self) -> int:
        return len(self.raw)

    @property
    def render_size(self) -> int:
        return len(self.render)


__all__ = ["Row"]
