"""Game window with a depth-sorted drawing queue and a fixed-rate main loop."""

from __future__ import annotations

import bisect
import itertools
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterator

import pygame

from gemcascade.log import LogLevel, log

try:
    from pygame._sdl2 import controller as _controller
except ImportError:
    _controller = None

Color = tuple[int, int, int, int]

WHITE: Color = (255, 255, 255, 255)


@dataclass
class DrawOperation:
    """A pending blit: what to draw, where, and how to tint it."""

    surface: pygame.Surface
    rect: pygame.Rect
    angle: float = 0.0
    alpha: int = 255
    color: Color = WHITE


class DrawingQueue:
    """Operations ordered by depth; equal depths keep their insertion order."""

    def __init__(self) -> None:
        self._items: list[tuple[float, int, DrawOperation]] = []
        self._counter = itertools.count()

    def draw(self, z: float, operation: DrawOperation) -> None:
        """Queue ``operation`` at depth ``z``."""
        bisect.insort(self._items, (z, next(self._counter), operation))

    def clear(self) -> None:
        self._items.clear()

    def __iter__(self) -> Iterator[tuple[float, DrawOperation]]:
        for z, _, operation in self._items:
            yield z, operation

    def __len__(self) -> int:
        return len(self._items)


def _prepare(operation: DrawOperation) -> tuple[pygame.Surface, pygame.Rect] | None:
    """Scale, tint, fade and rotate a queued surface for blitting."""
    rect = operation.rect
    if rect.width <= 0 or rect.height <= 0:
        return None

    surface = operation.surface
    copied = False
    if surface.get_size() != rect.size:
        try:
            surface = pygame.transform.smoothscale(surface, rect.size)
        except ValueError:
            surface = pygame.transform.scale(surface, rect.size)
        copied = True

    rgb = tuple(operation.color[:3])
    if rgb != (255, 255, 255):
        if not copied:
            surface = surface.copy()
            copied = True
        surface.fill((*rgb, 255), special_flags=pygame.BLEND_RGB_MULT)

    if operation.alpha < 255:
        if not copied:
            surface = surface.copy()
            copied = True
        surface.set_alpha(operation.alpha)

    if operation.angle:
        surface = pygame.transform.rotate(surface, -operation.angle)
        rect = surface.get_rect(center=rect.center)

    return surface, rect


class Window(ABC):
    """A window that runs update and draw once per frame until closed.

    Subclasses implement :meth:`update` and :meth:`draw` and may override the
    input callbacks. Using the window as a context manager shuts pygame down
    on exit.
    """

    def __init__(
        self,
        width: int,
        height: int,
        caption: str,
        fullscreen: bool = False,
        update_interval: float = 16.666666,
    ) -> None:
        os.environ.setdefault("SDL_TOUCH_MOUSE_EVENTS", "0")

        self.width = width
        self.height = height
        self.caption = caption
        self.fullscreen = fullscreen
        self.update_interval = update_interval
        self.is_running = False
        self.queue = DrawingQueue()
        self._controller = None

        pygame.mixer.pre_init(44100, -16, 2, 2048)
        pygame.init()
        for module in (pygame.display, pygame.mixer):
            if not module.get_init():
                try:
                    module.init()
                except pygame.error as err:
                    raise RuntimeError(str(err)) from err

        flags = pygame.FULLSCREEN if fullscreen else 0
        try:
            self.screen = pygame.display.set_mode((width, height), flags)
        except pygame.error as err:
            raise RuntimeError(str(err)) from err
        pygame.display.set_caption(caption)

        self._last_ticks = pygame.time.get_ticks()
        self._open_controller()

    def _open_controller(self) -> None:
        if _controller is None:
            return
        try:
            _controller.init()
            for index in range(_controller.get_count()):
                if _controller.is_controller(index):
                    self._controller = _controller.Controller(index)
                    break
        except pygame.error:
            self._controller = None

    def __enter__(self) -> Window:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self._controller = None
        pygame.quit()

    def show(self) -> None:
        """Run the main loop until :meth:`close` is called or a quit event arrives."""
        self.is_running = True
        while self.is_running:
            now = pygame.time.get_ticks()
            elapsed = now - self._last_ticks
            if elapsed < self.update_interval:
                pygame.time.wait(int(self.update_interval - elapsed))
                continue

            if not self._dispatch_events():
                return

            self.update()
            self.draw()
            self._render()

            self._last_ticks = now

    def _dispatch_events(self) -> bool:
        """Hand pending events to the callbacks; False when asked to quit."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.KEYDOWN:
                self.button_down(event.key)
            elif event.type == pygame.KEYUP:
                self.button_up(event.key)
            elif event.type == pygame.MOUSEBUTTONDOWN:
                self.mouse_button_down(event.button)
            elif event.type == pygame.MOUSEBUTTONUP:
                self.mouse_button_up(event.button)
            elif event.type == pygame.CONTROLLERBUTTONDOWN:
                self.controller_button_down(event.button)
        return True

    def _render(self) -> None:
        self.screen.fill((0, 0, 0))
        for _, operation in self.queue:
            prepared = _prepare(operation)
            if prepared is None:
                log("Skipping draw with an empty destination", LogLevel.ERROR)
                continue
            self.screen.blit(*prepared)
        self.queue.clear()
        pygame.display.flip()

    def close(self) -> None:
        """Stop the main loop after the current frame."""
        self.is_running = False

    @abstractmethod
    def update(self) -> None:
        """Per-frame logic."""

    @abstractmethod
    def draw(self) -> None:
        """Per-frame drawing."""

    def button_down(self, key: int) -> None:
        pass

    def button_up(self, key: int) -> None:
        pass

    def mouse_button_down(self, button: int) -> None:
        pass

    def mouse_button_up(self, button: int) -> None:
        pass

    def controller_button_down(self, button: int) -> None:
        pass

    def mouse_x(self) -> int:
        return pygame.mouse.get_pos()[0]

    def mouse_y(self) -> int:
        return pygame.mouse.get_pos()[1]

    def show_cursor(self) -> None:
        pygame.mouse.set_visible(True)

    def hide_cursor(self) -> None:
        pygame.mouse.set_visible(False)

    def enqueue_draw(
        self,
        surface: pygame.Surface,
        rect: pygame.Rect | tuple[int, int, int, int],
        angle: float = 0.0,
        z: float = 0.0,
        alpha: int = 255,
        color: Color = WHITE,
    ) -> None:
        """Queue ``surface`` to be drawn into ``rect`` at depth ``z`` this frame."""
        self.queue.draw(
            z, DrawOperation(surface, pygame.Rect(rect), angle, alpha, tuple(color))
        )