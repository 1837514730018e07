"""Visual effects: floating scores, particle bursts, hints and the menu jewels."""

from __future__ import annotations

import math
import random
from typing import TYPE_CHECKING

from gemcascade.animation import ease_out_cubic, ease_out_quart
from gemcascade.board import Coord
from gemcascade.media import Font, Image
from gemcascade.util import random_float, random_int

if TYPE_CHECKING:
    from gemcascade.window import Color, Window

BOARD_X = 241
BOARD_Y = 41
CELL = 65

_WHITE = (255, 255, 255, 255)
_BLACK = (0, 0, 0, 255)

# Fraction of a particle's travel after which it starts fading out.
_FADE_FROM = 0.70


class FloatingScore:
    """Points earned by a match, rising and fading over a board cell."""

    def __init__(self, window: Window, score: int, x: float, y: float, z: float) -> None:
        self.x = x
        self.y = y
        self.z = z
        self.current_step = 0
        self.total_steps = 50

        font = Font(window, "media/fuentelcd.ttf", 60)
        text = str(int(score))
        self.image = font.render_text(text, _WHITE)
        self.shadow = font.render_text(text, _BLACK)

    def ended(self) -> bool:
        return self.current_step == self.total_steps

    def draw(self) -> None:
        if self.current_step >= self.total_steps:
            return
        self.current_step += 1

        p = 1 - self.current_step / self.total_steps
        pos_x = BOARD_X + self.x * CELL
        pos_y = BOARD_Y + self.y * CELL - (1 - p) * 20
        alpha = int(p * 255)

        self.image.draw(pos_x, pos_y, self.z, 1, 1, 0, alpha)
        self.shadow.draw(pos_x + 2, pos_y + 2, self.z - 0.1, 1, 1, 0, alpha)
        self.shadow.draw(pos_x - 2, pos_y - 2, self.z - 0.1, 1, 1, 0, alpha)


class Particle:
    """One spark flying outwards from a centre, shrinking as it goes."""

    def __init__(
        self,
        angle: float,
        distance: float,
        size: float,
        total_steps: int,
        image: Image,
        color: Color,
    ) -> None:
        if total_steps < 1:
            raise ValueError("a particle needs at least one step")
        self.angle = angle
        self.distance = distance
        self.size = size
        self.total_steps = int(total_steps)
        self.image = image
        self.color = color
        self.alpha = 255
        self.current_step = 0
        self.pos_x = 0.0
        self.pos_y = 0.0
        self.size_coef = 0.0

    def update(self) -> None:
        if self.current_step != self.total_steps:
            self.current_step += 1

        travelled = ease_out_quart(self.current_step, 0, 1, self.total_steps)

        if travelled >= _FADE_FROM:
            self.alpha = int(255 * (1 - (travelled - _FADE_FROM) / (1 - _FADE_FROM)))
        else:
            self.alpha = 255

        self.size_coef = self.size * (1 - travelled)

        radians = self.angle * 3.141592 / 180
        self.pos_x = (
            travelled * self.distance * math.cos(radians)
            - self.image.width * self.size_coef / 2
        )
        self.pos_y = (
            travelled * self.distance * math.sin(radians)
            - self.image.height * self.size_coef / 2
        )

    def draw(self, origin_x: float, origin_y: float) -> None:
        self.image.draw(
            origin_x + self.pos_x,
            origin_y + self.pos_y,
            7,
            self.size_coef,
            self.size_coef,
            0,
            255,
            self.color,
        )

    def progress(self) -> float:
        """Fraction of the particle's steps already taken."""
        return self.current_step / self.total_steps


class ParticleSystem:
    """A burst of particles around a point, active for a fixed number of frames."""

    def __init__(
        self,
        window: Window,
        quantity: int,
        total_steps: int,
        x: int,
        y: int,
        distance: float = 200,
        scale: float = 1,
        color: Color = _WHITE,
        rng: random.Random | None = None,
    ) -> None:
        self.total_steps = total_steps
        self.current_step = 0
        self.distance = distance
        self.scale = scale
        self.color = color
        self.pos_x = x
        self.pos_y = y
        self.active = True

        first = Image(window, "media/partc1.png")
        second = Image(window, "media/partc2.png")
        source = rng if rng is not None else random

        self.particles = [
            Particle(
                random_int(0, 360, rng),
                random_float(0, 1, rng) * distance,
                random_float(0, scale, rng) + 1,
                max(1, int(random_float(0.1, 1, rng) * total_steps)),
                first if source.random() > 0.5 else second,
                color,
            )
            for _ in range(quantity)
        ]

    def ended(self) -> bool:
        return not self.active

    def draw(self) -> None:
        self.current_step += 1
        if self.current_step < self.total_steps:
            for particle in self.particles:
                particle.update()
                particle.draw(self.pos_x, self.pos_y)
        else:
            self.active = False


class GameHint:
    """A green selector that pulses over a square that can be moved."""

    def __init__(self, window: Window) -> None:
        self.image = Image(window, "media/selector.png")
        self.current_step = 0
        self.total_steps = 40
        self.showing = False
        self.location = Coord()

    def show(self, location: Coord) -> None:
        """Start the hint animation over ``location``."""
        self.location = location
        self.current_step = 0
        self.showing = True

    def draw(self) -> None:
        if not self.showing:
            return

        step = self.current_step
        self.current_step += 1
        if step == self.total_steps:
            self.showing = False
            return

        p = 1 - self.current_step / self.total_steps
        scale = 2 - p
        pos_x = BOARD_X + self.location.x * CELL - self.image.width * scale / 2 + CELL // 2
        pos_y = BOARD_Y + self.location.y * CELL - self.image.height * scale / 2 + CELL // 2

        self.image.draw(pos_x, pos_y, 10, scale, scale, 0, p * 255, (0, 255, 0, 255))


_GEM_FILES = (
    "media/gemWhite.png",
    "media/gemRed.png",
    "media/gemPurple.png",
    "media/gemOrange.png",
    "media/gemGreen.png",
    "media/gemYellow.png",
    "media/gemBlue.png",
)


class JewelGroupAnim:
    """A row of seven gems dropping one after another into place on the menu."""

    def __init__(self, window: Window) -> None:
        self.images = [Image(window, path) for path in _GEM_FILES]
        count = len(self.images)
        self.pos_x = [800 // 2 - (CELL * count) // 2 + i * CELL for i in range(count)]
        self.current_step = 0
        self.total_steps = 30
        self.final_y = 265

    def draw(self) -> None:
        if self.current_step < len(self.images) * 5 + self.total_steps:
            self.current_step += 1

        for i, (image, x) in enumerate(zip(self.images, self.pos_x)):
            step = self.current_step - i * 5
            if step < 0:
                continue
            if step < self.total_steps:
                y = ease_out_cubic(step, 600, self.final_y - 600, self.total_steps)
                image.draw(x, y, 2)
            else:
                image.draw(x, self.final_y, 2)