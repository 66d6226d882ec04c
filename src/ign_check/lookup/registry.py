from __future__ import annotations

from collections.abc import Iterable, Iterator

from ign_check.lookup.types import GameProfile


class GameRegistry:
    """Read-only after start-up: game code -> profile."""

    def __init__(self, profiles: Iterable[GameProfile] = ()) -> None:
        self._profiles: dict[str, GameProfile] = {}
        for profile in profiles:
            self.register(profile)

    def register(self, profile: GameProfile) -> None:
        key = profile.code.lower()
        if key in self._profiles:
            raise ValueError(f"Duplicate game registration: {profile.code}")
        self._profiles[key] = profile

    def get(self, code: str) -> GameProfile | None:
        return self._profiles.get(code.strip().lower())

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and self.get(code) is not None

    def __iter__(self) -> Iterator[GameProfile]:
        return iter(sorted(self._profiles.values(), key=lambda p: p.display_name))

    def __len__(self) -> int:
        return len(self._profiles)
