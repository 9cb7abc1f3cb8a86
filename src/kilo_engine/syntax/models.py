"""Highlight classes and immutable language profiles."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, IntFlag


class HighlightClass(IntEnum):
    """Syntax category assigned to each rendered character."""

    NORMAL = 0
    COMMENT = 1
    BLOCK_COMMENT = 2
    KEYWORD1 = 3
    KEYWORD2 = 4
    STRING = 5
    NUMBER = 6
    SEARCH_MATCH = 7


class ProfileFlags(IntFlag):
    NONE = 0
    HIGHLIGHT_NUMBERS = 1 << 0
    HIGHLIGHT_STRINGS = 1 << 1


SECONDARY_MARKER = "|"


@dataclass(frozen=True, slots=True)
class Keyword:
    """Single keyword entry; ``secondary`` keywords render as Keyword2."""

    text: str
    secondary: bool = False

    def __post_init__(self) -> None:
        if not self.text:
            raise ValueError("keyword text cannot be empty")

    @property
    def highlight(self) -> HighlightClass:
        return HighlightClass.KEYWORD2 if self.secondary else HighlightClass.KEYWORD1

    @classmethod
    def parse(cls, entry: str) -> "Keyword":
        """Parse table notation where a trailing ``|`` marks a secondary keyword."""

        if entry.endswith(SECONDARY_MARKER):
            return cls(entry[: -len(SECONDARY_MARKER)], secondary=True)
        return cls(entry)


@dataclass(frozen=True, slots=True)
class LanguageProfile:
    """Static per-language ruleset used by the highlighter."""

    name: str
    filematch: tuple[str, ...]
    keywords: tuple[Keyword, ...] = ()
    singleline_comment_start: str = ""
    multiline_comment_start: str = ""
    multiline_comment_end: str = ""
    flags: ProfileFlags = ProfileFlags.NONE

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("profile name cannot be empty")
        object.__setattr__(self, "filematch", tuple(self.filematch))
        object.__setattr__(
            self,
            "keywords",
            tuple(
                kw if isinstance(kw, Keyword) else Keyword.parse(str(kw))
                for kw in self.keywords
            ),
        )
        object.__setattr__(self, "flags", ProfileFlags(self.flags))

    @property
    def highlights_numbers(self) -> bool:
        return bool(self.flags & ProfileFlags.HIGHLIGHT_NUMBERS)

    @property
    def highlights_strings(self) -> bool:
        return bool(self.flags & ProfileFlags.HIGHLIGHT_STRINGS)

    @property
    def has_block_comments(self) -> bool:
        return bool(self.multiline_comment_start and self.multiline_comment_end)

    def matches_filename(self, filename: str) -> bool:
        """Extension patterns (leading ``.``) match the final suffix only;
        anything else matches as a substring of the name."""

        dot = filename.rfind(".")
        extension = filename[dot:] if dot != -1 else None
        for pattern in self.filematch:
            if pattern.startswith("."):
                if extension is not None and extension == pattern:
                    return True
            elif pattern in filename:
                return True
        return False


__all__ = [
    "HighlightClass",
    "Keyword",
    "LanguageProfile",
    "ProfileFlags",
    "SECONDARY_MARKER",
]
