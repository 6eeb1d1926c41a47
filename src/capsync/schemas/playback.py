from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PlaybackState:
    current_time: float = 0.0
    duration: float = 0.0
