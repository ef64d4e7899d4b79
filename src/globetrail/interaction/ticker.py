# SPDX-License-Identifier: Apache-2.0
"""Frame tickers driving auto-rotation and tweens.

A ticker calls back with the milliseconds elapsed since it was started, once
per display frame. The host runtime owns the real frame clock; the core only
needs ``start``/``stop`` and the elapsed time.
"""

from __future__ import annotations

from typing import Callable, Protocol, runtime_checkable

TickCallback = Callable[[float], None]


@runtime_checkable
class Ticker(Protocol):
    @property
    def running(self) -> bool: ...

    def start(self, callback: TickCallback) -> None: ...

    def stop(self) -> None: ...


class ManualTicker:
    """Ticker advanced explicitly by the host loop (or a test)."""

    def __init__(self) -> None:
        self._callback: TickCallback | None = None
        self._elapsed = 0.0
        self._generation = 0

    @property
    def running(self) -> bool:
        return self._callback is not None

    @property
    def elapsed(self) -> float:
        return self._elapsed

    def start(self, callback: TickCallback) -> None:
        self._callback = callback
        self._elapsed = 0.0
        self._generation += 1

    def stop(self) -> None:
        self._callback = None

    def advance(self, ms: float) -> None:
        """Move the clock forward by ``ms`` and deliver one tick."""
        if self._callback is None:
            return
        self._elapsed += ms
        self._callback(self._elapsed)

    def run_frames(self, count: int, frame_ms: float = 1000.0 / 60.0) -> None:
        """Deliver ``count`` frames, stopping early if the ticker is stopped or restarted."""
        generation = self._generation
        for _ in range(count):
            if not self.running or self._generation != generation:
                break
            self.advance(frame_ms)
