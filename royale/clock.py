"""Storm countdown for a single round."""

from __future__ import annotations

from dataclasses import dataclass

from . import config


@dataclass
class MatchClock:
    """Seconds left before the storm closes. Never negative."""

    storm_timer: int = config.STORM_TIMER_SECONDS

    def tick(self) -> int:
        """Advance the clock by one interval and return the remaining time."""

        self.storm_timer = max(0, self.storm_timer - 1)
        return self.storm_timer

    @property
    def expired(self) -> bool:
        return self.storm_timer == 0


def format_storm_timer(seconds: int) -> str:
    """Render ``seconds`` the way the HUD shows it, e.g. ``3:05``."""

    seconds = max(0, int(seconds))
    return f"{seconds // 60}:{seconds % 60:02d}"


__all__ = ["MatchClock", "format_storm_timer"]
