"""Images, fonts, sound effects and music bound to a game window."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pygame

from gemcascade.log import LogLevel, log

if TYPE_CHECKING:
    from gemcascade.window import Color, Window

_WHITE = (255, 255, 255, 255)


class Image:
    """A surface that draws itself through its window's drawing queue."""

    def __init__(self, window: Window | None = None, path: str | None = None) -> None:
        self.window = window
        self.path = path
        self.surface: pygame.Surface | None = None
        self.width = 0
        self.height = 0
        if path is not None:
            self.load(window, path)

    def load(self, window: Window | None, path: str) -> bool:
        """Load the image at ``path``; False if it cannot be read."""
        self.window = window
        self.path = path
        try:
            surface = pygame.image.load(path)
        except (pygame.error, OSError):
            return False
        if pygame.display.get_init() and pygame.display.get_surface() is not None:
            surface = surface.convert_alpha()
        self.set_surface(surface)
        return True

    def set_surface(self, surface: pygame.Surface | None) -> None:
        self.surface = surface
        self.width, self.height = surface.get_size() if surface is not None else (0, 0)

    def draw(
        self,
        x: float,
        y: float,
        z: float,
        factor_x: float = 1,
        factor_y: float = 1,
        angle: float = 0,
        alpha: float = 255,
        color: Color = _WHITE,
    ) -> bool:
        """Queue the image at (x, y) with depth ``z``; False if it cannot be drawn."""
        if self.window is None:
            log("Parent window missing", LogLevel.DEBUG)
            return False
        if self.surface is None:
            log("Surface missing", LogLevel.DEBUG)
            return False

        rect = pygame.Rect(
            int(x), int(y), int(self.width * factor_x), int(self.height * factor_y)
        )
        alpha = max(0, min(255, int(alpha)))
        self.window.enqueue_draw(self.surface, rect, angle, int(z), alpha, color)
        return True


class Font:
    """A TrueType font that renders text into images."""

    def __init__(
        self,
        window: Window | None = None,
        path: str | None = None,
        size: int | None = None,
    ) -> None:
        if not pygame.font.get_init():
            pygame.font.init()
        self.window = window
        self.path = path
        self.size = size
        self._font: pygame.font.Font | None = None
        if path is not None:
            if size is None:
                raise ValueError("a font size is required with a font path")
            try:
                self._font = pygame.font.Font(path, size)
            except (pygame.error, OSError) as err:
                raise RuntimeError(f"cannot open font {path!r}: {err}") from err

    def _loaded(self) -> pygame.font.Font:
        if self._font is None:
            raise RuntimeError("no font has been opened")
        return self._font

    def text_width(self, text: str) -> int:
        """Width in pixels of ``text``, or 0 if no font is open."""
        if self._font is None:
            return 0
        return self._font.size(text)[0]

    def render_text(self, text: str, color: Color = _WHITE) -> Image:
        surface = self._loaded().render(text, True, color)
        return self._to_image(surface)

    def render_block(self, text: str, color: Color, width: int) -> Image:
        """Render ``text`` wrapped to ``width`` pixels, honouring line breaks."""
        font = self._loaded()
        lines = self._wrap(text, width)
        rendered = [font.render(line, True, color) if line else None for line in lines]
        line_height = font.get_linesize()
        block_width = max((s.get_width() for s in rendered if s is not None), default=1)
        block = pygame.Surface(
            (max(1, block_width), line_height * len(lines)), pygame.SRCALPHA
        )
        for row, surface in enumerate(rendered):
            if surface is not None:
                block.blit(surface, (0, row * line_height))
        return self._to_image(block)

    def _wrap(self, text: str, width: int) -> list[str]:
        font = self._loaded()
        lines = []
        for paragraph in text.split("\n"):
            current = ""
            for word in paragraph.split(" "):
                candidate = f"{current} {word}" if current else word
                if current and font.size(candidate)[0] > width:
                    lines.append(current)
                    current = word
                else:
                    current = candidate
            lines.append(current)
        return lines

    def _to_image(self, surface: pygame.Surface) -> Image:
        image = Image(self.window)
        image.set_surface(surface)
        return image


class Sound:
    """A short sound effect."""

    def __init__(self, path: str | None = None) -> None:
        self.path = path
        self._sample: pygame.mixer.Sound | None = None
        if path is not None:
            try:
                self._sample = pygame.mixer.Sound(path)
            except (pygame.error, OSError) as err:
                log(f"Cannot load sound {path!r}: {err}", LogLevel.ERROR)

    @property
    def loaded(self) -> bool:
        return self._sample is not None

    def play(self, volume: float = 1) -> None:
        if self._sample is None:
            return
        self._sample.set_volume(volume)
        self._sample.play()


class Music:
    """Looping background music with a short fade in and out."""

    FADE_MS = 200

    def __init__(self, path: str | None = None) -> None:
        self.path: str | None = None
        if path is not None:
            if os.path.isfile(path):
                self.path = path
            else:
                log(f"Cannot load music {path!r}", LogLevel.ERROR)

    @property
    def loaded(self) -> bool:
        return self.path is not None

    def play(self, volume: float = 1) -> None:
        if self.path is None:
            return
        try:
            pygame.mixer.music.load(self.path)
            pygame.mixer.music.set_volume(volume)
            pygame.mixer.music.play(loops=-1, fade_ms=self.FADE_MS)
        except pygame.error as err:
            log(f"Cannot play music {self.path!r}: {err}", LogLevel.ERROR)

    def stop(self) -> None:
        try:
            pygame.mixer.music.fadeout(self.FADE_MS)
        except pygame.error:
            pass

    def is_playing(self) -> bool:
        try:
            return bool(pygame.mixer.music.get_busy())
        except pygame.error:
            return False