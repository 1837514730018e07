"""Random number helpers and text translation."""

from __future__ import annotations

import gettext
import random


def random_float(low: float, high: float, rng: random.Random | None = None) -> float:
    """A random float between ``low`` and ``high``."""
    source = rng if rng is not None else random
    return low + source.random() * (high - low)


def random_int(low: int, high: int, rng: random.Random | None = None) -> int:
    """A random integer in ``[low, high]``, both ends included."""
    source = rng if rng is not None else random
    return source.randint(low, high)


def tr(text: str) -> str:
    """Translate ``text`` through the active gettext catalogue."""
    return gettext.gettext(text)