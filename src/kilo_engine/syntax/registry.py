"""Language profile registry used to pick a ruleset for a filename."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, Optional

from kilo_engine.runtime import telemetry
from kilo_engine.runtime.telemetry import span

from .models import LanguageProfile


@dataclass(slots=True)
class RegistryStats:
    """Lightweight snapshot describing registry state."""

    profile_count: int
    names: tuple[str, ...]


class ProfileConflictError(RuntimeError):
    """Raised when a profile name is registered twice."""

    def __init__(self, profile: LanguageProfile, existing: LanguageProfile):
        super().__init__(f"Profile '{profile.name}' is already registered")
        self.profile = profile
        self.existing = existing


class ProfileRegistry:
    """Owns the ordered table of language profiles."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        # Insertion order is the lookup order for filename selection.
        self._profiles: Dict[str, LanguageProfile] = {}
        self._logger_name = logger_name

    def register(
        self, profile: LanguageProfile, *, replace: bool = False
    ) -> LanguageProfile:
        with span(
            "syntax::register_profile",
            logger_name=self._logger_name,
            component="syntax",
            metadata={"profile": profile.name},
        ):
            existing = self._profiles.get(profile.name)
            if existing is not None and not replace:
                raise ProfileConflictError(profile, existing)
            self._profiles[profile.name] = profile
            return profile

    def unregister(self, name: str) -> Optional[LanguageProfile]:
        return self._profiles.pop(name, None)

    def get(self, name: str) -> LanguageProfile:
        try:
            return self._profiles[name]
        except KeyError as exc:
            raise KeyError(f"Profile '{name}' is not registered") from exc

    def iter_profiles(self) -> Iterator[LanguageProfile]:
        yield from self._profiles.values()

    def select_for_filename(self, filename: str | None) -> Optional[LanguageProfile]:
        if not filename:
            return None
        for profile in self._profiles.values():
            if profile.matches_filename(filename):
                telemetry.record_event(
                    "syntax.select",
                    level="debug",
                    data={"filename": filename, "profile": profile.name},
                    logger_name=self._logger_name,
                )
                return profile
        return None

    def stats(self) -> RegistryStats:
        return RegistryStats(
            profile_count=len(self._profiles),
            names=tuple(self._profiles),
        )

    def __contains__(self, name: object) -> bool:
        return name in self._profiles

    def __len__(self) -> int:
        return len(self._profiles)


__all__ = [
    "ProfileRegistry",
    "ProfileConflictError",
    "RegistryStats",
]
