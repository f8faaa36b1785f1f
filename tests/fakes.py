"""Recording stand-ins for the frame scheduler and the drawing surface."""

from __future__ import annotations

from typing import Callable


class FakeScheduler:
    def __init__(self, honour_cancel: bool = True) -> None:
        self.honour_cancel = honour_cancel
        self.pending: dict[int, Callable[[float], None]] = {}
        self.cancelled: list[int] = []
        self.scheduled = 0
        self._next = 0

    def schedule(self, callback: Callable[[float], None]) -> int:
        self._next += 1
        self.scheduled += 1
        self.pending[self._next] = callback
        return self._next

    def cancel(self, handle: int) -> None:
        self.cancelled.append(handle)
        if self.honour_cancel:
            self.pending.pop(handle, None)

    def fire(self, timestamp_ms: float) -> None:
        due, self.pending = self.pending, {}
        for callback in due.values():
            callback(timestamp_ms)


class FakeSurface:
    def __init__(self, width: int = 800, height: int = 600) -> None:
        self.size = (width, height)
        self.calls: list[tuple] = []

    def surface_size(self) -> tuple[int, int]:
        return self.size

    def clear(self) -> None:
        self.calls = [("clear",)]

    def draw_line(self, start, end) -> None:
        self.calls.append(("line", start, end))

    def fill_circle(self, center, radius) -> None:
        self.calls.append(("circle", center, radius))

    def present(self) -> None:
        self.calls.append(("present",))

    def count(self, kind: str) -> int:
        return sum(1 for c in self.calls if c[0] == kind)
