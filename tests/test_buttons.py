import shutil
from pathlib import Path

import pygame
import pytest

from gemcascade.buttons import BaseButton, GameBoardSounds

FONT = Path(pygame.__file__).parent / pygame.font.get_default_font()
BACKGROUND_SIZE = (200, 40)


class FakeWindow:
    def __init__(self):
        self.drawn = []

    def enqueue_draw(self, surface, rect, angle=0.0, z=0.0, alpha=255, color=(255, 255, 255, 255)):
        self.drawn.append((surface, pygame.Rect(rect), angle, z, alpha, color))


@pytest.fixture
def media(tmp_path, monkeypatch):
    folder = tmp_path / "media"
    folder.mkdir()
    shutil.copy(FONT, folder / "fuenteNormal.ttf")
    pygame.image.save(pygame.Surface(BACKGROUND_SIZE), str(folder / "buttonBackground.png"))
    pygame.image.save(pygame.Surface((30, 30)), str(folder / "iconHint.png"))
    monkeypatch.chdir(tmp_path)
    return folder


def test_not_clicked_before_drawn(media):
    button = BaseButton(FakeWindow(), "Show hint", "iconHint.png")
    assert button.clicked(50, 20) is False


def test_clicked_inside_after_draw(media):
    button = BaseButton(FakeWindow(), "Exit")
    button.draw(100, 100, 2)
    assert button.clicked(150, 120) is True


@pytest.mark.parametrize("point", [(100, 120), (300, 120), (150, 100), (150, 140), (50, 50)])
def test_clicked_edges_and_outside(media, point):
    button = BaseButton(FakeWindow(), "Exit")
    button.draw(100, 100, 2)
    assert button.clicked(*point) is False


def test_draw_queues_background_at_position(media):
    window = FakeWindow()
    button = BaseButton(window, "Exit")
    button.draw(17, 538, 2)
    backgrounds = [op for op in window.drawn if op[0] is button.background.surface]
    assert len(backgrounds) == 1
    assert backgrounds[0][1].topleft == (17, 538)
    assert backgrounds[0][1].size == BACKGROUND_SIZE
    assert backgrounds[0][3] == 2


def test_icon_adds_one_draw(media):
    plain_window = FakeWindow()
    icon_window = FakeWindow()
    BaseButton(plain_window, "Hint").draw(0, 0, 2)
    BaseButton(icon_window, "Hint", "iconHint.png").draw(0, 0, 2)
    assert len(icon_window.drawn) == len(plain_window.drawn) + 1


def test_icon_shifts_caption_right(media):
    plain = BaseButton(FakeWindow(), "Hint")
    with_icon = BaseButton(FakeWindow(), "Hint", "iconHint.png")
    assert with_icon.has_icon and not plain.has_icon
    assert with_icon.text_x > plain.text_x


def test_set_text_replaces_caption(media):
    button = BaseButton(FakeWindow(), "Turn off music", "iconHint.png")
    short_width = BaseButton(FakeWindow(), "On").caption_image.width
    button.set_text("On")
    assert button.caption == "On"
    assert button.caption_image.width == short_width


def test_missing_font_raises(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(RuntimeError):
        BaseButton(FakeWindow(), "Exit")


@pytest.mark.parametrize("multiplier, attribute", [(1, "match1"), (2, "match2"), (3, "match3"), (7, "match3")])
def test_play_match_picks_sound(tmp_path, monkeypatch, multiplier, attribute):
    monkeypatch.chdir(tmp_path)
    sounds = GameBoardSounds()
    assert sounds.play_match(multiplier) is getattr(sounds, attribute)


def test_missing_sounds_are_not_loaded(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    sounds = GameBoardSounds()
    assert not any(
        s.loaded for s in (sounds.match1, sounds.match2, sounds.match3, sounds.select, sounds.fall)
    )