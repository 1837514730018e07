"""The main menu with its animated logo and falling jewels."""

from __future__ import annotations

from enum import Enum, auto
from typing import Any

import pygame

from gemcascade.effects import JewelGroupAnim
from gemcascade.log import LogLevel, constructed, log
from gemcascade.media import Font, Image
from gemcascade.state import State
from gemcascade.util import tr

_WHITE = (255, 255, 255, 255)
_BLACK = (0, 0, 0, 255)

_ENTRIES = (
    ("stateGameTimetrial", "Timetrial mode"),
    ("stateGameEndless", "Endless mode"),
    ("stateHowtoplay", "How to play?"),
    ("stateQuit", "Exit"),
)


class _Transition(Enum):
    IN = auto()
    ACTIVE = auto()
    OUT = auto()


def _clamp(value: int, bottom: int, top: int) -> int:
    return max(bottom, min(value, top))


class MainMenuState(State):
    """Lets the player pick a game mode with the keyboard, mouse or controller."""

    def __init__(self, game: Any) -> None:
        super().__init__(game)
        log(constructed("StateMainMenu"), LogLevel.DEBUG)

        self.transition = _Transition.IN
        self.background = Image(game, "media/stateMainMenu/mainMenuBackground.png")
        self.logo = Image(game, "media/stateMainMenu/mainMenuLogo.png")
        self.highlight = Image(game, "media/stateMainMenu/menuHighlight.png")

        self.targets = [target for target, _ in _ENTRIES]
        self.texts, self.shadows = self._render_entries(game)

        self.jewels = JewelGroupAnim(game)

        self.animation_total_steps = 30
        self.animation_logo_steps = 30
        self.animation_step = 0

        self.selected = 0
        self.menu_y_start = 350
        self.menu_y_gap = 42
        self.menu_y_end = self.menu_y_start + len(self.targets) * self.menu_y_gap

    @staticmethod
    def _render_entries(game: Any) -> tuple[list[Image], list[Image]]:
        try:
            font = Font(game, "media/fuenteMenu.ttf", 30)
        except (RuntimeError, OSError, pygame.error) as err:
            log(f"Cannot load the menu font: {err}", LogLevel.ERROR)
            blanks = [Image(game) for _ in _ENTRIES]
            return blanks, [Image(game) for _ in _ENTRIES]
        texts = [font.render_text(tr(label), _WHITE) for _, label in _ENTRIES]
        shadows = [font.render_text(tr(label), _BLACK) for _, label in _ENTRIES]
        return texts, shadows

    def update(self) -> None:
        if self.transition is _Transition.IN:
            self.animation_step += 1
            if self.animation_step == self.animation_total_steps:
                self.transition = _Transition.ACTIVE

        mouse_y = int(self.game.mouse_y())
        if self.menu_y_start <= mouse_y < self.menu_y_end:
            self.selected = (mouse_y - self.menu_y_start) // self.menu_y_gap

    def draw(self) -> None:
        self.background.draw(0, 0, 1)

        logo_alpha = _clamp(
            int(255 * self.animation_step / self.animation_logo_steps), 0, 255
        )
        self.logo.draw(86, 0, 2, 1, 1, 0, logo_alpha)

        for i, (text, shadow) in enumerate(zip(self.texts, self.shadows)):
            pos_x = 800 // 2 - text.width // 2
            pos_y = self.menu_y_start + i * self.menu_y_gap
            text.draw(pos_x, pos_y, 3)
            shadow.draw(pos_x, pos_y + 2, 2.9, 1, 1, 0, 128)

        self.highlight.draw(
            266, self.menu_y_start + 5 + self.selected * self.menu_y_gap, 2
        )
        self.jewels.draw()

    def button_down(self, key: int) -> None:
        if key == pygame.K_ESCAPE:
            self.game.close()
        elif key == pygame.K_DOWN:
            self.move_down()
        elif key == pygame.K_UP:
            self.move_up()
        elif key in (pygame.K_RETURN, pygame.K_KP_ENTER):
            self.option_chosen()

    def controller_button_down(self, button: int) -> None:
        if button == pygame.CONTROLLER_BUTTON_A:
            self.option_chosen()
        elif button == pygame.CONTROLLER_BUTTON_DPAD_DOWN:
            self.move_down()
        elif button == pygame.CONTROLLER_BUTTON_DPAD_UP:
            self.move_up()

    def mouse_button_down(self, button: int) -> None:
        if button != pygame.BUTTON_LEFT:
            return
        mouse_y = int(self.game.mouse_y())
        if self.menu_y_start <= mouse_y <= self.menu_y_end:
            self.option_chosen()

    def move_up(self) -> None:
        self.selected = (self.selected - 1) % len(self.targets)

    def move_down(self) -> None:
        self.selected = (self.selected + 1) % len(self.targets)

    def option_chosen(self) -> None:
        """Switch to the screen of the highlighted entry."""
        self.game.change_state(self.targets[self.selected])