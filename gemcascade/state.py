"""Base class for game screens and the how-to-play screen."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import pygame

from gemcascade.log import LogLevel, constructed, log
from gemcascade.media import Font, Image
from gemcascade.util import tr

_WHITE = (255, 255, 255, 255)
_BLACK = (0, 0, 0, 255)


class State(ABC):
    """A screen of the game that receives logic, drawing and input calls.

    ``game`` is the main window, used to switch screens and to draw.
    """

    def __init__(self, game: Any) -> None:
        self.game = game
        log(constructed("State"), LogLevel.DEBUG)

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


class HowToPlayState(State):
    """A static page explaining the rules; any exit goes back to the menu."""

    BODY_WIDTH = 450

    def __init__(self, game: Any) -> None:
        super().__init__(game)
        log(constructed("StateHowtoPlay"), LogLevel.DEBUG)

        self.background = Image(game, "media/howtoScreen.png")

        title_font = Font(game, "media/fuenteMenu.ttf", 48)
        self.title = title_font.render_text(tr("How to play"), _WHITE)
        self.title_shadow = title_font.render_text(tr("How to play"), _BLACK)

        subtitle_font = Font(game, "media/fuenteMenu.ttf", 23)
        subtitle = tr("Press escape to go back")
        self.subtitle = subtitle_font.render_text(subtitle, _WHITE)
        self.subtitle_shadow = subtitle_font.render_text(subtitle, _BLACK)

        body_font = Font(game, "media/fuenteNormal.ttf", 28)
        body = "\n\n".join(
            (
                tr(
                    "The objective of the game is to swap one gem with an adjacent gem "
                    "to form a horizontal or vertical chain of three or more gems."
                ),
                tr(
                    "Click the first gem and then click the gem you want to swap it "
                    "with. If the movement is correct, they will swap and the chained "
                    "gems will disappear."
                ),
                tr(
                    "Bonus points are given when more than three identical gems are "
                    "formed. Sometimes chain reactions, called cascades, are triggered, "
                    "where chains are formed by the falling gems. Cascades are awarded "
                    "with bonus points."
                ),
            )
        )
        self.body = body_font.render_block(body, _WHITE, self.BODY_WIDTH)
        self.body_shadow = body_font.render_block(body, _BLACK, self.BODY_WIDTH)

    def update(self) -> None:
        pass

    def draw(self) -> None:
        self.background.draw(0, 0, 0)

        title_x = 470 // 2 - int(self.title.width / 2)
        self.title.draw(300 + title_x, 20, 1)
        self.title_shadow.draw(301 + title_x, 22, 0.9, 1, 1, 0, 128)

        self.subtitle.draw(30, 550, 1)
        self.subtitle_shadow.draw(31, 552, 0.9, 1, 1, 0, 128)

        self.body.draw(310, 110, 1)
        self.body_shadow.draw(311, 112, 0.9, 1, 1, 0, 128)

    def _back_to_menu(self) -> None:
        self.game.change_state("stateMainMenu")

    def button_down(self, key: int) -> None:
        if key == pygame.K_ESCAPE:
            self._back_to_menu()

    def mouse_button_down(self, button: int) -> None:
        if button == pygame.BUTTON_LEFT:
            self._back_to_menu()

    def controller_button_down(self, button: int) -> None:
        self._back_to_menu()