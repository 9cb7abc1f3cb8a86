import pytest

from kilo_engine.syntax import (
    C_PROFILE,
    PYTHON_PROFILE,
    HighlightClass,
    Keyword,
    LanguageProfile,
    ProfileConflictError,
    ProfileFlags,
    ProfileRegistry,
    load_default_profiles,
)


def make_profile(name: str = "make", filematch: tuple[str, ...] = ("Makefile",)) -> LanguageProfile:
    return LanguageProfile(
        name=name,
        filematch=filematch,
        keywords=("ifeq", "endif", "PHONY|"),
        singleline_comment_start="#",
    )


def test_default_profiles_selected_by_extension() -> None:
    registry = load_default_profiles()

    assert registry.select_for_filename("main.c") is C_PROFILE
    assert registry.select_for_filename("include/kilo.h") is C_PROFILE
    assert registry.select_for_filename("tool.py") is PYTHON_PROFILE
    assert registry.stats().names == ("c", "python")


def test_extension_must_be_final_suffix() -> None:
    registry = load_default_profiles()

    assert registry.select_for_filename("main.c.bak") is None
    assert registry.select_for_filename("README") is None
    assert registry.select_for_filename(None) is None


def test_substring_patterns_match_anywhere() -> None:
    registry = ProfileRegistry()
    profile = registry.register(make_profile())

    assert registry.select_for_filename("build/Makefile.am") is profile


def test_first_registered_profile_wins() -> None:
    registry = ProfileRegistry()
    first = registry.register(make_profile("first", (".mk",)))
    registry.register(make_profile("second", (".mk",)))

    assert registry.select_for_filename("rules.mk") is first


def test_duplicate_registration_conflicts() -> None:
    registry = ProfileRegistry()
    registry.register(make_profile())

    with pytest.raises(ProfileConflictError):
        registry.register(make_profile())

    replacement = make_profile(filematch=("GNUmakefile",))
    registry.register(replacement, replace=True)
    assert registry.get("make") is replacement
    assert len(registry) == 1


def test_unknown_profile_lookup() -> None:
    registry = ProfileRegistry()

    with pytest.raises(KeyError):
        registry.get("cobol")
    assert registry.unregister("cobol") is None


def test_keyword_table_notation() -> None:
    profile = make_profile()

    assert profile.keywords[0] == Keyword("ifeq")
    assert profile.keywords[2] == Keyword("PHONY", secondary=True)
    assert profile.keywords[2].highlight is HighlightClass.KEYWORD2
    assert profile.keywords[0].highlight is HighlightClass.KEYWORD1
    assert not profile.has_block_comments
    assert profile.flags == ProfileFlags.NONE


def test_c_profile_flags() -> None:
    assert C_PROFILE.highlights_numbers
    assert C_PROFILE.highlights_strings
    assert C_PROFILE.has_block_comments
    assert Keyword("int") in C_PROFILE.keywords
