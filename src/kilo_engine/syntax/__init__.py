"""Language profiles and the incremental syntax highlighter."""

from .models import HighlightClass, Keyword, LanguageProfile, ProfileFlags
from .registry import ProfileConflictError, ProfileRegistry, RegistryStats
from .defaults import C_PROFILE, PYTHON_PROFILE, load_default_profiles
from .highlighter import highlight_all, is_separator, refresh, scan_row

__all__ = [
    "HighlightClass",
    "Keyword",
    "LanguageProfile",
    "ProfileFlags",
    "ProfileRegistry",
    "ProfileConflictError",
    "RegistryStats",
    "C_PROFILE",
    "PYTHON_PROFILE",
    "load_default_profiles",
    "highlight_all",
    "is_separator",
    "refresh",
    "scan_row",
]
