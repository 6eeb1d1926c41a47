from __future__ import annotations

from collections.abc import Iterator
from typing import Protocol

DEFAULT_TICK_INTERVAL = 0.5


class PlaybackListener(Protocol):
    def on_time_update(self, time: float) -> None:
        ...

    def on_duration_known(self, duration: float) -> None:
        ...


def iter_tick_times(
    duration: float,
    interval: float = DEFAULT_TICK_INTERVAL,
    start: float = 0.0,
) -> Iterator[float]:
    """Yield playback sample times from ``start`` up to and including ``duration``."""
    if interval <= 0:
        raise ValueError(f"interval must be > 0, got {interval}")
    step = 0
    while True:
        # Multiply instead of accumulating to keep float drift out of long runs.
        time = start + step * interval
        if time > duration:
            break
        yield round(time, 6)
        step += 1
    if step and start + (step - 1) * interval < duration:
        yield float(duration)


class SimulatedPlayback:
    """Playback source that replays a timeline at a fixed polling interval."""

    def __init__(self, duration: float, interval: float = DEFAULT_TICK_INTERVAL) -> None:
        if duration <= 0:
            raise ValueError(f"duration must be > 0, got {duration}")
        if interval <= 0:
            raise ValueError(f"interval must be > 0, got {interval}")
        self.duration = float(duration)
        self.interval = float(interval)

    def run(self, listener: PlaybackListener, start: float = 0.0) -> int:
        listener.on_duration_known(self.duration)
        ticks = 0
        for time in iter_tick_times(self.duration, self.interval, start=start):
            listener.on_time_update(time)
            ticks += 1
        return ticks

    def seek(self, listener: PlaybackListener, time: float) -> None:
        listener.on_time_update(float(time))
