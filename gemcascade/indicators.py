"""The left-hand panel: score, remaining time and the game buttons."""

from __future__ import annotations

from typing import Any

from gemcascade.buttons import BaseButton
from gemcascade.media import Font, Image, Music
from gemcascade.util import tr

_BLACK = (0, 0, 0, 255)
_HEADER = (160, 169, 255, 255)
_LCD = (78, 193, 190, 255)

_BUTTONS_TOP = 360
_BUTTON_GAP = 47


def _half(value: float) -> int:
    return int(value / 2)


def format_time(seconds: float) -> str:
    """Remaining time as minutes and two-digit seconds."""
    minutes = int(seconds / 60)
    secs = int(seconds - minutes * 60)
    return f"{minutes}{':0' if secs < 10 else ':'}{secs}"


class GameIndicators:
    """Shows the score and clock, and dispatches clicks on the panel buttons.

    ``game`` must offer ``change_state`` and the window drawing interface;
    ``state_game`` must offer ``show_hint`` and ``reset_game``.
    """

    def __init__(self, game: Any, state_game: Any) -> None:
        self.game = game
        self.state_game = state_game

        self._score = 0
        self._score_previous = -1
        self.remaining_time = 0.0
        self._remaining_previous = 0.0
        self.time_text = ""
        self.time_enabled = False

        self._font_time: Font | None = None
        self._font_score: Font | None = None
        self.score_image = Image(game)
        self.time_image = Image(game)

        self.hint_button: BaseButton | None = None
        self.reset_button: BaseButton | None = None
        self.exit_button: BaseButton | None = None
        self.music_button: BaseButton | None = None
        self.music: Music | None = None

    def load_resources(self) -> None:
        game = self.game
        self._font_time = Font(game, "media/fuentelcd.ttf", 62)
        self._font_score = Font(game, "media/fuentelcd.ttf", 33)

        header_font = Font(game, "media/fuenteNormal.ttf", 37)
        self.score_header = header_font.render_text(tr("score"), _HEADER)
        self.score_header_shadow = header_font.render_text(tr("score"), _BLACK)
        self.time_header = header_font.render_text(tr("time left"), _HEADER)
        self.time_header_shadow = header_font.render_text(tr("time left"), _BLACK)

        self.time_background = Image(game, "media/timeBackground.png")
        self.score_background = Image(game, "media/scoreBackground.png")

        self.hint_button = BaseButton(game, tr("Show hint"), "iconHint.png")
        self.reset_button = BaseButton(game, tr("Reset game"), "iconRestart.png")
        self.exit_button = BaseButton(game, tr("Exit"), "iconExit.png")
        self.music_button = BaseButton(game, tr("Turn off music"), "iconMusic.png")

        self.music = Music("media/music.ogg")
        self.music.play()

        self._score_previous = -1
        self._regenerate_score()

    @property
    def score(self) -> int:
        return self._score

    @score.setter
    def score(self, value: int) -> None:
        self._score = value
        self._regenerate_score()

    def increase_score(self, amount: int) -> None:
        self._score += amount
        self._regenerate_score()

    def _regenerate_score(self) -> None:
        if self._font_score is None or self._score == self._score_previous:
            return
        self.score_image = self._font_score.render_text(str(self._score), _LCD)
        self._score_previous = self._score

    def update_time(self, remaining: float) -> None:
        """Set the remaining time in seconds, re-rendering the clock if it changed."""
        self.remaining_time = remaining
        if remaining >= 0 and remaining != self._remaining_previous:
            self.time_text = format_time(remaining)
            if self._font_time is not None:
                self.time_image = self._font_time.render_text(self.time_text, _LCD)
            self._remaining_previous = remaining

    def enable_time(self) -> None:
        self.time_enabled = True

    def disable_time(self) -> None:
        self.time_enabled = False

    def draw(self) -> None:
        if self.hint_button is None:
            return

        self.hint_button.draw(17, _BUTTONS_TOP, 2)
        self.reset_button.draw(17, _BUTTONS_TOP + _BUTTON_GAP, 2)
        self.music_button.draw(17, _BUTTONS_TOP + _BUTTON_GAP * 2, 2)
        self.exit_button.draw(17, 538, 2)

        header_x = _half(self.score_background.width) - _half(self.score_header.width)
        self.score_background.draw(17, 124, 2)
        self.score_header.draw(17 + header_x, 84, 3)
        self.score_header_shadow.draw(18 + header_x, 85, 2.95, 1, 1, 0, 128)
        self.score_image.draw(197 - self.score_image.width, 127, 2)

        if self.time_enabled:
            header_x = _half(self.time_background.width) - _half(self.time_header.width)
            self.time_background.draw(17, 230, 2)
            self.time_header.draw(17 + header_x, 190, 3)
            self.time_header_shadow.draw(18 + header_x, 191, 2, 1, 1, 0, 128)
            self.time_image.draw(190 - self.time_image.width, 232, 2)

    def click(self, mouse_x: int, mouse_y: int) -> None:
        """React to a click at the given point on one of the panel buttons."""
        if self.hint_button is None:
            return

        if self.exit_button.clicked(mouse_x, mouse_y):
            self.game.change_state("stateMainMenu")
        elif self.hint_button.clicked(mouse_x, mouse_y):
            self.state_game.show_hint()
        elif self.reset_button.clicked(mouse_x, mouse_y):
            self.state_game.reset_game()
        elif self.music_button.clicked(mouse_x, mouse_y):
            if self.music.is_playing():
                self.music_button.set_text(tr("Turn on music"))
                self.music.stop()
            else:
                self.music_button.set_text(tr("Turn off music"))
                self.music.play()