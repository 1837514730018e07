"""Clickable interface buttons and the sound effects of the game board."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gemcascade.media import Font, Image, Sound

if TYPE_CHECKING:
    from gemcascade.window import Window

_WHITE = (255, 255, 255, 255)
_BLACK = (0, 0, 0, 255)

# Horizontal room taken by the icon on the left of a button.
_ICON_ROOM = 40


def _half(value: float) -> int:
    """Half of ``value``, truncated towards zero."""
    return int(value / 2)


class BaseButton:
    """A button with a centred caption and an optional icon on its left.

    :meth:`clicked` tests against the position of the last :meth:`draw`.
    """

    def __init__(self, window: Window, caption: str, icon_path: str = "") -> None:
        self.window = window
        self.background = Image(window, "media/buttonBackground.png")
        self.has_icon = icon_path != ""
        self.icon = Image(window, f"media/{icon_path}") if self.has_icon else Image(window)
        self.last_x: int | None = None
        self.last_y: int | None = None
        self.caption = ""
        self.text_x = 0
        self.caption_image = Image(window)
        self.caption_shadow = Image(window)
        self.set_text(caption)

    def set_text(self, caption: str) -> None:
        """Render ``caption`` and centre it in the space beside the icon."""
        font = Font(self.window, "media/fuenteNormal.ttf", 27)
        self.caption = caption
        self.caption_image = font.render_text(caption, _WHITE)
        self.caption_shadow = font.render_text(caption, _BLACK)

        if self.has_icon:
            self.text_x = (
                _ICON_ROOM
                + _half(self.background.width - _ICON_ROOM)
                - _half(self.caption_image.width)
            )
        else:
            self.text_x = _half(self.background.width) - _half(self.caption_image.width)

    def draw(self, x: int, y: int, z: float) -> None:
        self.last_x = x
        self.last_y = y

        if self.has_icon:
            self.icon.draw(x + 7, y, z + 1)

        self.caption_image.draw(x + self.text_x, y + 5, z + 2)
        self.caption_shadow.draw(x + self.text_x + 1, y + 7, z + 1, 1, 1, 1, 128)
        self.background.draw(x, y, z)

    def clicked(self, mouse_x: int, mouse_y: int) -> bool:
        """True if the point lies strictly inside the button as last drawn."""
        if self.last_x is None or self.last_y is None:
            return False
        return (
            self.last_x < mouse_x < self.last_x + self.background.width
            and self.last_y < mouse_y < self.last_y + self.background.height
        )


class GameBoardSounds:
    """The sound effects played while the board is in play."""

    SELECT_VOLUME = 0.3
    FALL_VOLUME = 0.3
    MATCH_VOLUME = 0.25

    def __init__(self) -> None:
        self.match1 = Sound("media/match1.ogg")
        self.match2 = Sound("media/match2.ogg")
        self.match3 = Sound("media/match3.ogg")
        self.select = Sound("media/select.ogg")
        self.fall = Sound("media/fall.ogg")

    def play_select(self) -> None:
        self.select.play(self.SELECT_VOLUME)

    def play_fall(self) -> None:
        self.fall.play(self.FALL_VOLUME)

    def play_match(self, multiplier: int) -> Sound:
        """Play the match sound for the current cascade multiplier and return it."""
        if multiplier == 1:
            sound = self.match1
        elif multiplier == 2:
            sound = self.match2
        else:
            sound = self.match3
        sound.play(self.MATCH_VOLUME)
        return sound