import random
import shutil
from pathlib import Path

import pygame
import pytest

from gemcascade.board import Coord
from gemcascade.effects import (
    FloatingScore,
    GameHint,
    JewelGroupAnim,
    Particle,
    ParticleSystem,
)
from gemcascade.media import Image

WHITE = (255, 255, 255, 255)


class RecordingWindow:
    def __init__(self):
        self.calls = []

    def enqueue_draw(self, surface, rect, angle=0.0, z=0.0, alpha=255, color=WHITE):
        self.calls.append({"rect": pygame.Rect(rect), "z": z, "alpha": alpha, "color": tuple(color)})


@pytest.fixture
def media(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    folder = tmp_path / "media"
    folder.mkdir()
    font_file = Path(pygame.__file__).parent / pygame.font.get_default_font()
    shutil.copy(font_file, folder / "fuentelcd.ttf")
    images = ["partc1.png", "partc2.png", "selector.png"] + [
        f"gem{name}.png" for name in ("White", "Red", "Purple", "Orange", "Green", "Yellow", "Blue")
    ]
    for name in images:
        pygame.image.save(pygame.Surface((10, 10)), str(folder / name))
    return folder


@pytest.fixture
def window():
    return RecordingWindow()


def test_floating_score_ends_after_its_steps(media, window):
    score = FloatingScore(window, 120, 0, 0, 80)
    for _ in range(49):
        score.draw()
    assert not score.ended()
    score.draw()
    assert score.ended()
    assert len(window.calls) == 150
    score.draw()
    assert len(window.calls) == 150


def test_floating_score_layout(media, window):
    score = FloatingScore(window, 30, 0, 0, 80)
    score.draw()
    main, shadow_a, shadow_b = window.calls
    assert main["rect"].x == 241
    assert main["z"] == 80
    assert shadow_a["z"] == 79
    assert shadow_a["rect"].x == main["rect"].x + 2
    assert shadow_b["rect"].x == main["rect"].x - 2


def test_floating_score_rises_and_fades(media, window):
    score = FloatingScore(window, 45, 2, 3, 80)
    while not score.ended():
        score.draw()
    main_calls = window.calls[::3]
    alphas = [c["alpha"] for c in main_calls]
    ys = [c["rect"].y for c in main_calls]
    assert alphas == sorted(alphas, reverse=True)
    assert alphas[-1] == 0
    assert ys == sorted(ys, reverse=True)
    assert ys[0] > ys[-1]


def make_image(window=None):
    image = Image(window)
    image.set_surface(pygame.Surface((10, 10)))
    return image


def test_particle_progress_stops_at_total():
    particle = Particle(0, 100, 1, 4, make_image(), WHITE)
    for _ in range(6):
        particle.update()
    assert particle.current_step == 4
    assert particle.progress() == 1.0


def test_particle_final_state():
    particle = Particle(0, 100, 1, 4, make_image(), WHITE)
    for _ in range(4):
        particle.update()
    assert particle.size_coef == pytest.approx(0.0)
    assert particle.alpha == 0
    assert particle.pos_x == pytest.approx(100.0)
    assert particle.pos_y == pytest.approx(0.0, abs=1e-4)


def test_particle_fully_opaque_early():
    particle = Particle(90, 100, 1, 100, make_image(), WHITE)
    particle.update()
    assert particle.alpha == 255
    assert particle.progress() == pytest.approx(0.01)


def test_particle_needs_steps():
    with pytest.raises(ValueError):
        Particle(0, 100, 1, 0, make_image(), WHITE)


def test_particle_draw_queues_on_window(window):
    color = (10, 20, 30, 255)
    particle = Particle(0, 100, 1, 10, make_image(window), color)
    particle.update()
    particle.draw(50, 60)
    assert len(window.calls) == 1
    call = window.calls[0]
    assert call["z"] == 7
    assert call["alpha"] == 255
    assert call["color"] == color


def test_particle_system_lifetime(media, window):
    system = ParticleSystem(window, 5, 3, 100, 100, rng=random.Random(3))
    system.draw()
    system.draw()
    assert not system.ended()
    assert len(window.calls) == 10
    system.draw()
    assert system.ended()
    assert len(window.calls) == 10


def test_particle_system_color(media, window):
    color = (10, 20, 30, 255)
    system = ParticleSystem(window, 4, 10, 0, 0, 60, 0.5, color, random.Random(1))
    system.draw()
    assert len(system.particles) == 4
    assert all(call["color"] == color for call in window.calls)
    assert all(p.color == color for p in system.particles)


def test_hint_hidden_draws_nothing(media, window):
    hint = GameHint(window)
    hint.draw()
    assert window.calls == []
    assert not hint.showing


def test_hint_runs_its_animation(media, window):
    hint = GameHint(window)
    hint.show(Coord(1, 1))
    for _ in range(41):
        hint.draw()
    assert not hint.showing
    assert len(window.calls) == 40
    assert all(call["color"] == (0, 255, 0, 255) for call in window.calls)
    assert window.calls[-1]["alpha"] == 0
    assert window.calls[0]["z"] == 10


def test_hint_restart(media, window):
    hint = GameHint(window)
    hint.show(Coord(0, 0))
    for _ in range(10):
        hint.draw()
    hint.show(Coord(0, 0))
    assert hint.current_step == 0
    assert hint.showing


def test_hint_position_follows_location(media, window):
    near = GameHint(window)
    near.show(Coord(0, 0))
    near.draw()
    far = GameHint(window)
    far.show(Coord(2, 3))
    far.draw()
    first, second = window.calls
    assert second["rect"].x - first["rect"].x == 2 * 65
    assert second["rect"].y - first["rect"].y == 3 * 65


def test_jewels_start_one_at_a_time(media, window):
    jewels = JewelGroupAnim(window)
    jewels.draw()
    assert len(window.calls) == 1
    assert window.calls[0]["z"] == 2


def test_jewels_settle_in_a_row(media, window):
    jewels = JewelGroupAnim(window)
    for _ in range(80):
        jewels.draw()
    window.calls.clear()
    jewels.draw()
    assert len(window.calls) == 7
    assert all(call["rect"].y == 265 for call in window.calls)
    xs = [call["rect"].x for call in window.calls]
    assert all(b - a == 65 for a, b in zip(xs, xs[1:]))
    assert xs[0] + xs[-1] + 65 == 2 * 400 - 1 or abs((xs[0] + xs[-1] + 65) / 2 - 400) <= 1