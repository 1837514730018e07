"""The playing screen, in its time-trial and endless variants."""

from __future__ import annotations

from abc import abstractmethod
from enum import Enum, auto
from typing import Any, Callable

import pygame

from gemcascade.board import Coord
from gemcascade.game_board import GameBoard
from gemcascade.indicators import GameIndicators
from gemcascade.log import LogLevel, constructed, log
from gemcascade.media import Image
from gemcascade.state import State

ROUND_TIME_MS = 2 * 60 * 1000


class _Phase(Enum):
    INITIAL = auto()
    START_LOADING = auto()
    STEADY = auto()


class StateGame(State):
    """Shows a loading banner, then runs the board and the side panel.

    Subclasses decide whether the clock counts down; ``clock`` returns the
    current time in milliseconds and may be replaced.
    """

    def __init__(self, game: Any) -> None:
        super().__init__(game)
        log(constructed("StateGame"), LogLevel.DEBUG)

        self.phase = _Phase.INITIAL
        self.mouse_pressed = False
        self.time_start = 0.0
        self.clock: Callable[[], float] = pygame.time.get_ticks

        self.indicators = GameIndicators(game, self)
        self.game_board = GameBoard()
        self.game_board.set_game(game, self)

        self.loading_banner = Image(game, "media/loadingBanner.png")
        self.background = Image(game)

    @abstractmethod
    def update(self) -> None:
        """Per-frame logic of the game mode."""

    def _prepare_frame(self, timed: bool) -> bool:
        """Load resources on the first logic frame; False while still initial."""
        if self.phase is _Phase.INITIAL:
            return False
        if self.phase is _Phase.START_LOADING:
            self.load_resources()
            self.phase = _Phase.STEADY
            self.reset_time()
            if timed:
                self.indicators.enable_time()
            else:
                self.indicators.disable_time()
            self.indicators.score = 0
        return True

    def draw(self) -> None:
        if self.phase is _Phase.INITIAL:
            self.loading_banner.draw(156, 200, 2)
            self.phase = _Phase.START_LOADING
            return

        self.background.draw(0, 0, 0)
        self.indicators.draw()
        self.game_board.draw()

    def button_down(self, key: int) -> None:
        if key == pygame.K_ESCAPE:
            self.game.change_state("stateMainMenu")
        elif key == pygame.K_h:
            self.show_hint()
        else:
            self.game_board.button_down(key)

    def controller_button_down(self, button: int) -> None:
        if button == pygame.CONTROLLER_BUTTON_START:
            self.game.change_state("stateMainMenu")
        elif button == pygame.CONTROLLER_BUTTON_BACK:
            self.reset_game()
        else:
            self.game_board.controller_button_down(button)

    def mouse_button_down(self, button: int) -> None:
        if button != pygame.BUTTON_LEFT:
            return
        self.mouse_pressed = True
        mouse_x = self.game.mouse_x()
        mouse_y = self.game.mouse_y()
        self.indicators.click(mouse_x, mouse_y)
        self.game_board.mouse_button_down(mouse_x, mouse_y)

    def mouse_button_up(self, button: int) -> None:
        if button != pygame.BUTTON_LEFT:
            return
        self.mouse_pressed = False
        self.game_board.mouse_button_up(self.game.mouse_x(), self.game.mouse_y())

    def current_score(self) -> int:
        return self.indicators.score

    def increase_score(self, amount: int) -> None:
        self.indicators.increase_score(amount)

    def show_hint(self) -> Coord | None:
        """Show where a move is possible and return that square."""
        return self.game_board.show_hint()

    def reset_game(self) -> None:
        self.indicators.score = 0
        self.reset_time()
        self.game_board.reset_game()

    def reset_time(self) -> None:
        """Give the player a fresh two-minute round."""
        self.time_start = self.clock() + ROUND_TIME_MS

    def load_resources(self) -> None:
        self.background = Image(self.game, "media/board.png")
        self.indicators.load_resources()
        self.game_board.load_resources()


class EndlessGame(StateGame):
    """Play without a clock until no move is left."""

    def update(self) -> None:
        if not self._prepare_frame(timed=False):
            return
        self.game_board.update()


class TimetrialGame(StateGame):
    """Play against a two-minute clock."""

    def update(self) -> None:
        if not self._prepare_frame(timed=True):
            return

        remaining = (self.time_start - self.clock()) / 1000
        self.indicators.update_time(remaining)
        if remaining <= 0:
            self.game_board.end_game(self.indicators.score)

        self.game_board.update()