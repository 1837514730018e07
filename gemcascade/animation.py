"""Tweening equations and a multi-attribute animation driver."""

from __future__ import annotations

from enum import Enum
from typing import Callable

Easing = Callable[[float, float, float, float], float]


def ease_linear(t: float, b: float, c: float, d: float) -> float:
    """Linear interpolation from b to b + c over d steps."""
    return c * t / d + b


def ease_in_quad(t: float, b: float, c: float, d: float) -> float:
    t /= d
    return c * t * t + b


def ease_out_quad(t: float, b: float, c: float, d: float) -> float:
    t /= d
    return -c * t * (t - 2) + b


def ease_in_out_quad(t: float, b: float, c: float, d: float) -> float:
    t /= d / 2
    if t < 1:
        return c / 2 * t * t + b
    t -= 1
    return -c / 2 * (t * (t - 2) - 1) + b


def ease_in_cubic(t: float, b: float, c: float, d: float) -> float:
    t /= d
    return c * t * t * t + b


def ease_out_cubic(t: float, b: float, c: float, d: float) -> float:
    t = t / d - 1
    return c * (t * t * t + 1) + b


def ease_in_out_cubic(t: float, b: float, c: float, d: float) -> float:
    t /= d / 2
    if t < 1:
        return c / 2 * t * t * t + b
    t -= 2
    return c / 2 * (t * t * t + 2) + b


def ease_in_quart(t: float, b: float, c: float, d: float) -> float:
    t /= d
    return c * t * t * t * t + b


def ease_out_quart(t: float, b: float, c: float, d: float) -> float:
    t = t / d - 1
    return -c * (t * t * t * t - 1) + b


def ease_in_out_quart(t: float, b: float, c: float, d: float) -> float:
    t /= d / 2
    if t < 1:
        return c / 2 * t * t * t * t + b
    t -= 2
    return -c / 2 * (t * t * t * t - 2) + b


def ease_out_back(t: float, b: float, c: float, d: float) -> float:
    s = 1.3
    t = t / d - 1
    return c * (t * t * ((s + 1) * t + s) + 1) + b


class AnimationType(Enum):
    """The easing curve an animation follows."""

    EASE_IN_QUAD = "ease_in_quad"
    EASE_OUT_QUAD = "ease_out_quad"
    EASE_IN_OUT_QUAD = "ease_in_out_quad"
    EASE_IN_CUBIC = "ease_in_cubic"
    EASE_OUT_CUBIC = "ease_out_cubic"
    EASE_IN_OUT_CUBIC = "ease_in_out_cubic"
    EASE_IN_QUART = "ease_in_quart"
    EASE_OUT_QUART = "ease_out_quart"
    EASE_IN_OUT_QUART = "ease_in_out_quart"
    EASE_OUT_BACK = "ease_out_back"
    LINEAR = "linear"


_EASINGS: dict[AnimationType, Easing] = {
    AnimationType.EASE_IN_QUAD: ease_in_quad,
    AnimationType.EASE_OUT_QUAD: ease_out_quad,
    AnimationType.EASE_IN_OUT_QUAD: ease_in_out_quad,
    AnimationType.EASE_IN_CUBIC: ease_in_cubic,
    AnimationType.EASE_OUT_CUBIC: ease_out_cubic,
    AnimationType.EASE_IN_OUT_CUBIC: ease_in_out_cubic,
    AnimationType.EASE_IN_QUART: ease_in_quart,
    AnimationType.EASE_OUT_QUART: ease_out_quart,
    AnimationType.EASE_IN_OUT_QUART: ease_in_out_quart,
    AnimationType.EASE_OUT_BACK: ease_out_back,
    AnimationType.LINEAR: ease_linear,
}


class Animation:
    """Animates a fixed number of integer attributes between start and end values.

    Call :meth:`update` once per frame and read each attribute with :meth:`get`.
    Indices outside the attribute range are ignored by setters and read as 0.
    """

    def __init__(
        self,
        attributes: int,
        duration: int,
        kind: AnimationType = AnimationType.EASE_IN_QUAD,
        delay: int = 0,
    ) -> None:
        if attributes < 0:
            raise ValueError("number of attributes must not be negative")
        self.duration = duration
        self.delay = delay
        self.time = 0
        self._start = [0] * attributes
        self._end = [0] * attributes
        self._change = [0] * attributes
        self._current = [0.0] * attributes
        self.kind = kind

    @property
    def kind(self) -> AnimationType:
        return self._kind

    @kind.setter
    def kind(self, value: AnimationType) -> None:
        self._kind = value
        self._easing = _EASINGS.get(value, ease_linear)

    def __len__(self) -> int:
        return len(self._start)

    def _valid(self, i: int) -> bool:
        return 0 <= i < len(self._start)

    def restart(self) -> None:
        """Rewind the animation to its first step."""
        self.time = 0

    def end(self) -> None:
        """Jump to the final step of the animation."""
        self.time = self.duration + self.delay
        self.update(False)

    def finished(self) -> bool:
        return self.time > self.duration + self.delay

    def get(self, i: int) -> float:
        """Current value of attribute ``i``, or 0 if there is no such attribute."""
        return self._current[i] if self._valid(i) else 0.0

    def set(self, i: int, start: int, end: int) -> None:
        if self._valid(i):
            self._start[i] = int(start)
            self._end[i] = int(end)
            self._change[i] = self._end[i] - self._start[i]
            self._current[i] = float(self._start[i])

    def set_start(self, i: int, value: int) -> None:
        if self._valid(i):
            self._start[i] = int(value)
            self._change[i] = self._end[i] - self._start[i]
            self._current[i] = float(self._start[i])

    def set_end(self, i: int, value: int) -> None:
        if self._valid(i):
            self._end[i] = int(value)
            self._change[i] = self._end[i] - self._start[i]

    def reverse(self) -> None:
        """Swap start and end values of every attribute."""
        self._start, self._end = self._end, self._start
        self._change = [e - s for s, e in zip(self._start, self._end)]

    def update(self, advance: bool = True) -> None:
        """Compute the current values; move one step forward if ``advance``."""
        elapsed = self.time - self.delay
        if elapsed > self.duration:
            self._current = [float(v) for v in self._end]
            return
        if self.time >= self.delay:
            self._current = [
                self._easing(elapsed, start, change, self.duration)
                for start, change in zip(self._start, self._change)
            ]
        if advance:
            self.time += 1