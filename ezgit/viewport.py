"""Sliding-window pagination shared by the commit log, branch list and detail text."""

from __future__ import annotations

from enum import Enum


class ViewportStyle(Enum):
    PAGED = "paged"
    CENTERED = "centered"
    FREE = "free"


class Viewport:
    """Half-open window ``[start, end)`` over a sequence of ``length`` items.

    ``PAGED`` and ``CENTERED`` viewports track a selected index and derive
    the window from it. ``FREE`` viewports have no selection and are moved
    by explicit scroll requests.
    """

    def __init__(
        self, style: ViewportStyle, length: int = 0, capacity: int = 1
    ) -> None:
        self.style = style
        self.length = max(0, length)
        self.capacity = max(0, capacity)
        self.selected = 0
        self.start = 0
        self.end = 0
        self._derive()

    @property
    def window(self) -> tuple[int, int]:
        return self.start, self.end

    def visible_range(self) -> range:
        return range(self.start, self.end)

    def reset(self, length: int) -> None:
        """Point the viewport at a replacement sequence, back at the top."""
        self.length = max(0, length)
        self.selected = 0
        self.start = 0
        self.end = 0
        self._derive()

    def resize(self, capacity: int) -> None:
        self.capacity = max(0, capacity)
        self._derive()

    def select(self, index: int) -> None:
        if not self.length:
            return
        self.selected = max(0, min(self.length - 1, index))
        self._derive()

    def move(self, delta: int) -> None:
        """Move the selection by ``delta`` items, stepping the window to follow it."""
        if not self.length or self.style is ViewportStyle.FREE:
            return
        self.selected = max(0, min(self.length - 1, self.selected + delta))
        while self.selected >= self.end and self.end < self.length:
            self.step(1)
        while self.selected < self.start and self.start > 0:
            self.step(-1)

    def step(self, direction: int, lines: int = 1) -> None:
        """Shift the whole window by ``lines`` in ``direction`` without leaving the sequence."""
        if not self.length or lines <= 0:
            return
        if direction > 0:
            shift = min(lines, self.length - self.end)
        else:
            shift = -min(lines, self.start)
        self.start += shift
        self.end += shift

    def page(self, direction: int) -> None:
        if not self.length:
            return
        if self.style is ViewportStyle.FREE:
            self.step(direction, self.capacity)
            return
        delta = self.capacity if direction > 0 else -self.capacity
        self.selected = max(0, min(self.length - 1, self.selected + delta))
        self._derive()

    def scroll_up(self, lines: int = 1) -> None:
        self.step(-1, lines)

    def scroll_down(self, lines: int = 1) -> None:
        self.step(1, lines)

    def _derive(self) -> None:
        if not self.length:
            self.selected = 0
            self.start = self.end = 0
            return
        self.selected = max(0, min(self.length - 1, self.selected))
        if self.style is ViewportStyle.FREE:
            self.start = min(self.start, self.length)
            self.end = min(self.start + self.capacity, self.length)
            # keep the window full when the trailing edge hits the end
            shortfall = self.capacity - (self.end - self.start)
            if shortfall > 0:
                self.start = max(0, self.start - shortfall)
            return
        if not self.capacity:
            self.start = self.end = self.selected
            return
        if self.style is ViewportStyle.PAGED:
            self.start = self.selected - (self.selected % self.capacity)
        else:
            self.start = max(0, self.selected - self.capacity // 2)
        self.end = min(self.start + self.capacity, self.length)
