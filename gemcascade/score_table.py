"""High-score persistence and the table shown when a game ends."""

from __future__ import annotations

import re
from pathlib import Path
from typing import TYPE_CHECKING

from gemcascade.media import Font
from gemcascade.util import tr

if TYPE_CHECKING:
    from gemcascade.window import Window

_BLACK = (0, 0, 0, 255)
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _half(value: float) -> int:
    return int(value / 2)


def score_file_path(game_mode: str, home: str | Path | None = None) -> Path:
    """Where the high score of ``game_mode`` is kept, inside ``home``."""
    base = Path(home) if home is not None else Path.home()
    return base / f".gemcascade-{game_mode}"


def _read_score(path: Path) -> int:
    try:
        text = path.read_text()
    except (OSError, UnicodeDecodeError):
        return 0
    found = _LEADING_INT.match(text)
    return int(found.group(1)) if found else 0


def record_high_score(path: str | Path, score: int) -> int:
    """Return the stored high score, replacing it with ``score`` if higher.

    A missing or unreadable file counts as a high score of 0.
    """
    path = Path(path)
    last = _read_score(path)
    if last < score:
        try:
            path.write_text(str(score))
        except OSError:
            pass
    return last


class ScoreTable:
    """The game-over panel with the final score and the previous best."""

    WIDTH = 300

    def __init__(
        self,
        window: Window,
        score: int,
        game_mode: str,
        home: str | Path | None = None,
    ) -> None:
        self.window = window
        self.score = score
        self.last_score = record_high_score(score_file_path(game_mode, home), score)

        header_font = Font(window, "media/fuenteMenu.ttf", 60)
        text_font = Font(window, "media/fuenteNormal.ttf", 35)
        lcd_font = Font(window, "media/fuentelcd.ttf", 72)

        self.header = header_font.render_text(tr("GAME OVER"))
        self.score_image = lcd_font.render_text(str(score))
        self.last_score_image = text_font.render_text(
            tr("Latest high score: ") + str(self.last_score)
        )

    def draw(self, x: int, y: int, z: int) -> None:
        center = x + _half(self.WIDTH)
        rows = (
            (self.header, y, y + 3),
            (self.score_image, y + 67 + 10, y + 70 + 10),
            (self.last_score_image, y + 67 + 80, y + 70 + 80),
        )
        for image, text_y, shadow_y in rows:
            left = center - _half(image.width)
            image.draw(left, text_y, z)
            image.draw(left + 1, shadow_y, z - 1, 1, 1, 0, 128, _BLACK)