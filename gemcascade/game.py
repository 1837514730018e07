"""The main game window and the screen it is showing."""

from __future__ import annotations

from typing import Callable

from gemcascade.log import LogLevel, constructed, log
from gemcascade.main_menu import MainMenuState
from gemcascade.media import Image
from gemcascade.state import HowToPlayState, State
from gemcascade.state_game import EndlessGame, TimetrialGame
from gemcascade.window import Window

_SCREENS: dict[str, Callable[[Window], State]] = {
    "stateMainMenu": MainMenuState,
    "stateGameTimetrial": TimetrialGame,
    "stateGameEndless": EndlessGame,
    "stateHowtoplay": HowToPlayState,
}


class Game(Window):
    """An 800x600 window that forwards frames and input to the current screen."""

    def __init__(self) -> None:
        super().__init__(800, 600, "Gem Cascade")
        log(constructed("Game"), LogLevel.DEBUG)

        self.active_state: State | None = None
        self._state_name = ""

        self.mouse_cursor = Image(self, "media/handCursor.png")
        self.hide_cursor()

        self.change_state("stateMainMenu")

    def update(self) -> None:
        if self.active_state is not None:
            self.active_state.update()

    def draw(self) -> None:
        self.mouse_cursor.draw(self.mouse_x(), self.mouse_y(), 999)
        if self.active_state is not None:
            self.active_state.draw()

    def button_down(self, key: int) -> None:
        if self.active_state is not None:
            self.active_state.button_down(key)

    def button_up(self, key: int) -> None:
        if self.active_state is not None:
            self.active_state.button_up(key)

    def mouse_button_down(self, button: int) -> None:
        if self.active_state is not None:
            self.active_state.mouse_button_down(button)

    def mouse_button_up(self, button: int) -> None:
        if self.active_state is not None:
            self.active_state.mouse_button_up(button)

    def controller_button_down(self, button: int) -> None:
        if self.active_state is not None:
            self.active_state.controller_button_down(button)

    def change_state(self, name: str) -> None:
        """Switch to the named screen; ``stateQuit`` closes the window.

        Switching to the current screen or to an unknown name does nothing.
        """
        if name == self._state_name:
            return
        if name == "stateQuit":
            self.close()
            return
        factory = _SCREENS.get(name)
        if factory is None:
            return
        self.active_state = factory(self)
        self._state_name = name

    def current_state(self) -> str:
        return self._state_name


def main(argv: list[str] | None = None) -> int:
    """Open the game window and run it until it is closed."""
    with Game() as game:
        game.show()
    return 0