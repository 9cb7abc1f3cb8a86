"""Built-in language profiles that seed a registry."""

from __future__ import annotations

from typing import Optional

from .models import LanguageProfile, ProfileFlags
from .registry import ProfileRegistry

# Reserved words are primary; library types and constants carry a trailing "|".
C_HL_EXTENSIONS = (".c", ".h", ".cpp", ".hpp", ".cc")
C_HL_KEYWORDS = (
    "switch", "if", "while", "for", "break", "continue", "return", "else",
    "struct", "union", "typedef", "static", "enum", "class", "case",
    "default", "do", "goto", "sizeof", "extern", "register", "volatile",
    "const", "inline",
    "int", "long", "double", "float", "char", "unsigned", "signed", "void",
    "short",
    "size_t|", "ssize_t|", "ptrdiff_t|", "bool|", "FILE|",
    "int8_t|", "int16_t|", "int32_t|", "int64_t|",
    "uint8_t|", "uint16_t|", "uint32_t|", "uint64_t|",
    "NULL|", "true|", "false|",
)

PY_HL_EXTENSIONS = (".py", ".pyw")
PY_HL_KEYWORDS = (
    "False", "None", "True", "and", "as", "assert", "async", "await",
    "break", "class", "continue", "def", "del", "elif", "else", "except",
    "finally", "for", "from", "global", "if", "import", "in", "is",
    "lambda", "nonlocal", "not", "or", "pass", "raise", "return", "try",
    "while", "with", "yield",
    "int|", "float|", "str|", "bytes|", "bool|", "list|", "dict|", "set|",
    "tuple|", "object|", "len|", "print|", "range|", "self|", "super|",
)

C_PROFILE = LanguageProfile(
    name="c",
    filematch=C_HL_EXTENSIONS,
    keywords=C_HL_KEYWORDS,
    singleline_comment_start="//",
    multiline_comment_start="/*",
    multiline_comment_end="*/",
    flags=ProfileFlags.HIGHLIGHT_NUMBERS | ProfileFlags.HIGHLIGHT_STRINGS,
)

PYTHON_PROFILE = LanguageProfile(
    name="python",
    filematch=PY_HL_EXTENSIONS,
    keywords=PY_HL_KEYWORDS,
    singleline_comment_start="#",
    flags=ProfileFlags.HIGHLIGHT_NUMBERS | ProfileFlags.HIGHLIGHT_STRINGS,
)

DEFAULT_PROFILES: tuple[LanguageProfile, ...] = (C_PROFILE, PYTHON_PROFILE)


def load_default_profiles(
    registry: Optional[ProfileRegistry] = None,
) -> ProfileRegistry:
    """Register the built-in profiles, replacing same-named entries."""

    target = registry if registry is not None else ProfileRegistry()
    for profile in DEFAULT_PROFILES:
        target.register(profile, replace=True)
    return target


__all__ = [
    "C_PROFILE",
    "PYTHON_PROFILE",
    "DEFAULT_PROFILES",
    "load_default_profiles",
]
