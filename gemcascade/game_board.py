"""The playing field: gem selection, swapping, cascades and board transitions."""

from __future__ import annotations

from enum import Enum, auto
from pathlib import Path
from typing import Any

import pygame

from gemcascade.animation import ease_in_quad, ease_out_quad
from gemcascade.board import SIZE, Board, Coord, Gem, MultipleMatch
from gemcascade.buttons import GameBoardSounds
from gemcascade.effects import BOARD_X, BOARD_Y, CELL, FloatingScore, GameHint, ParticleSystem
from gemcascade.log import LogLevel, log
from gemcascade.media import Image
from gemcascade.score_table import ScoreTable

_SELECTED_COLOR = (0, 255, 255, 255)

_GEM_FILES = {
    Gem.WHITE: "media/gemWhite.png",
    Gem.RED: "media/gemRed.png",
    Gem.PURPLE: "media/gemPurple.png",
    Gem.ORANGE: "media/gemOrange.png",
    Gem.GREEN: "media/gemGreen.png",
    Gem.YELLOW: "media/gemYellow.png",
    Gem.BLUE: "media/gemBlue.png",
}


class BoardState(Enum):
    NO_BOARD = auto()
    BOARD_APPEARING = auto()
    BOARD_FILLING = auto()
    BOARD_DISAPPEARING = auto()
    STEADY = auto()
    GEM_SELECTED = auto()
    GEM_SWITCHING = auto()
    GEM_DISAPPEARING = auto()
    TIME_FINISHED = auto()
    SHOWING_SCORE_TABLE = auto()


def _over_gem(mouse_x: int, mouse_y: int) -> bool:
    return (
        BOARD_X < mouse_x < BOARD_X + CELL * SIZE
        and BOARD_Y < mouse_y < BOARD_Y + CELL * SIZE
    )


def _coord_at(mouse_x: int, mouse_y: int) -> Coord:
    return Coord(int((mouse_x - BOARD_X) / CELL), int((mouse_y - BOARD_Y) / CELL))


class GameBoard:
    """Draws the board and drives its state machine from player input.

    ``game`` must offer ``current_state``, ``mouse_x``, ``mouse_y`` and the
    window drawing interface; ``state_game`` must offer ``increase_score`` and
    ``current_score``.
    """

    LONG_STEPS = 50
    SHORT_STEPS = 17

    def __init__(self) -> None:
        self.game: Any = None
        self.state_game: Any = None
        self.state = BoardState.NO_BOARD
        self.board = Board()
        self.selected_first = Coord()
        self.selected_second = Coord()
        self.grouped = MultipleMatch()
        self.animation_step = 0
        self.multiplier = 1
        self.floating_scores: list[FloatingScore] = []
        self.particles: list[ParticleSystem] = []
        self.score_table: ScoreTable | None = None
        self.selector_x = 3
        self.selector_y = 3
        self.mouse_active = True
        self.home: str | Path | None = None

        self.hint: GameHint | None = None
        self.sounds: GameBoardSounds | None = None
        self.selector_image = Image()
        self.board_image = Image()
        self.gem_images: dict[Gem, Image] = {gem: Image() for gem in _GEM_FILES}

    def set_game(self, game: Any, state_game: Any) -> None:
        self.game = game
        self.state_game = state_game
        self.board.generate()
        self.state = BoardState.BOARD_APPEARING
        self.animation_step = 0

    def reset_game(self) -> None:
        """Start over; only possible while idle or once the game has ended."""
        if self.state not in (BoardState.STEADY, BoardState.SHOWING_SCORE_TABLE):
            return

        self.multiplier = 0
        self.animation_step = 0

        if self.state != BoardState.SHOWING_SCORE_TABLE:
            self.board.drop_all_gems()
            self.state = BoardState.BOARD_DISAPPEARING
        else:
            self.board.generate()
            self.state = BoardState.BOARD_APPEARING

    def end_game(self, score: int) -> None:
        """Drop the board and prepare the score table for ``score``."""
        if self.state in (BoardState.TIME_FINISHED, BoardState.SHOWING_SCORE_TABLE):
            return

        self.board.drop_all_gems()
        self.state = BoardState.TIME_FINISHED

        try:
            self.score_table = ScoreTable(
                self.game, score, self.game.current_state(), self.home
            )
        except RuntimeError as err:
            log(f"Cannot build the score table: {err}", LogLevel.ERROR)
            self.score_table = None

    def load_resources(self) -> None:
        self.board_image = Image(self.game, "media/gemBoard.png")
        self.gem_images = {gem: Image(self.game, path) for gem, path in _GEM_FILES.items()}
        self.selector_image = Image(self.game, "media/selector.png")
        self.hint = GameHint(self.game)
        self.sounds = GameBoardSounds()

    def _play_select(self) -> None:
        if self.sounds is not None:
            self.sounds.play_select()

    def _play_fall(self) -> None:
        if self.sounds is not None:
            self.sounds.play_fall()

    def _play_match(self) -> None:
        if self.sounds is not None:
            self.sounds.play_match(self.multiplier)

    def update(self) -> None:
        state = self.state

        if state == BoardState.STEADY:
            self.multiplier = 0
            self.animation_step = 0

        elif state == BoardState.BOARD_APPEARING:
            self.animation_step += 1
            if self.animation_step == self.LONG_STEPS:
                self.state = BoardState.STEADY

        elif state == BoardState.GEM_SWITCHING:
            self.animation_step += 1
            if self.animation_step == self.SHORT_STEPS:
                self.state = BoardState.GEM_DISAPPEARING
                self.animation_step = 0
                first, second = self.selected_first, self.selected_second
                self.board.swap(first.x, first.y, second.x, second.y)
                self.multiplier += 1
                self._play_match()
                self._create_floating_scores()

        elif state == BoardState.GEM_DISAPPEARING:
            self.animation_step += 1
            if self.animation_step == self.SHORT_STEPS:
                self.state = BoardState.BOARD_FILLING
                for match in self.grouped:
                    for coord in match:
                        self.board.delete(coord.x, coord.y)
                self.board.calc_fall_movements()
                self.animation_step = 0

        elif state == BoardState.BOARD_FILLING:
            self.animation_step += 1
            if self.animation_step == self.SHORT_STEPS:
                self._play_fall()
                self.state = BoardState.STEADY
                self.animation_step = 0
                self.board.end_animations()
                self.grouped = self.board.check()

                if self.grouped:
                    self.multiplier += 1
                    self._create_floating_scores()
                    self._play_match()
                    self.state = BoardState.GEM_DISAPPEARING
                elif not self.board.solutions():
                    if self.game.current_state() == "stateGameEndless":
                        self.end_game(self.state_game.current_score())
                    else:
                        self.state = BoardState.BOARD_DISAPPEARING
                        self.board.drop_all_gems()

        elif state == BoardState.BOARD_DISAPPEARING:
            self.animation_step += 1
            if self.animation_step == self.LONG_STEPS:
                self.animation_step = 0
                self.board.generate()
                self.state = BoardState.BOARD_APPEARING

        elif state == BoardState.TIME_FINISHED:
            self.animation_step += 1
            if self.animation_step == self.LONG_STEPS:
                self.animation_step = 0
                self.state = BoardState.SHOWING_SCORE_TABLE

        self.floating_scores = [f for f in self.floating_scores if not f.ended()]
        self.particles = [p for p in self.particles if not p.ended()]

    def draw(self) -> None:
        if self.game is None:
            return

        mouse_x = int(self.game.mouse_x())
        mouse_y = int(self.game.mouse_y())
        if self.mouse_active and _over_gem(mouse_x, mouse_y):
            coord = _coord_at(mouse_x, mouse_y)
            self.selector_x, self.selector_y = coord.x, coord.y

        self.selector_image.draw(
            BOARD_X + self.selector_x * CELL, BOARD_Y + self.selector_y * CELL, 4
        )

        if self.state == BoardState.GEM_SELECTED:
            self.selector_image.draw(
                BOARD_X + self.selected_first.x * CELL,
                BOARD_Y + self.selected_first.y * CELL,
                4,
                1,
                1,
                0,
                255,
                _SELECTED_COLOR,
            )

        if self.hint is not None:
            self.hint.draw()
        for floating in self.floating_scores:
            floating.draw()
        for system in self.particles:
            system.draw()

        if self.state == BoardState.SHOWING_SCORE_TABLE:
            if self.score_table is not None:
                self.score_table.draw(BOARD_X + (CELL * SIZE) // 2 - 150, 105, 3)
            return

        for x, column in enumerate(self.board.squares):
            for y, square in enumerate(column):
                image = self.gem_images.get(square.gem)
                if image is None:
                    continue
                img_x, img_y, alpha = self._gem_position(x, y)
                image.draw(img_x, img_y, 3, 1, 1, 0, alpha)

    def _gem_position(self, x: int, y: int) -> tuple[float, float, float]:
        """Screen position and opacity of the gem at (x, y) this frame."""
        square = self.board.squares[x][y]
        img_x: float = BOARD_X + x * CELL
        img_y: float = BOARD_Y + y * CELL
        alpha: float = 255
        step = float(self.animation_step)
        state = self.state

        if state == BoardState.BOARD_APPEARING:
            img_y = ease_out_quad(
                step,
                BOARD_Y + square.orig_y * CELL,
                square.dest_y * CELL,
                self.LONG_STEPS,
            )
        elif state == BoardState.GEM_SWITCHING:
            first, second = self.selected_first, self.selected_second
            here = Coord(x, y)
            if here in (first, second):
                other = second if here == first else first
                img_x = ease_out_quad(
                    step, img_x, (other.x - here.x) * CELL, self.SHORT_STEPS
                )
                img_y = ease_out_quad(
                    step, img_y, (other.y - here.y) * CELL, self.SHORT_STEPS
                )
        elif state == BoardState.GEM_DISAPPEARING:
            if self.grouped.matched(Coord(x, y)):
                alpha = 255 * (1 - step / self.SHORT_STEPS)
        elif state == BoardState.BOARD_FILLING:
            if square.must_fall:
                img_y = ease_out_quad(
                    step,
                    BOARD_Y + square.orig_y * CELL,
                    square.dest_y * CELL,
                    self.SHORT_STEPS,
                )
        elif state in (BoardState.BOARD_DISAPPEARING, BoardState.TIME_FINISHED):
            img_y = ease_in_quad(
                step,
                BOARD_Y + square.orig_y * CELL,
                square.dest_y * CELL,
                self.LONG_STEPS,
            )
        return img_x, img_y, alpha

    def _move_selector(self, dx: int, dy: int) -> None:
        self.selector_x += dx
        self.selector_y += dy

        if self.selector_x < 0:
            self.selector_x = SIZE - 1
        elif self.selector_y < 0:
            self.selector_y = SIZE - 1
        elif self.selector_x > SIZE - 1:
            self.selector_x = 0
        elif self.selector_y > SIZE - 1:
            self.selector_y = 0

    def _keyboard_move(self, dx: int, dy: int) -> None:
        self.mouse_active = False
        self._play_select()
        self._move_selector(dx, dy)

    def button_down(self, key: int) -> None:
        moves = {
            pygame.K_LEFT: (-1, 0),
            pygame.K_RIGHT: (1, 0),
            pygame.K_UP: (0, -1),
            pygame.K_DOWN: (0, 1),
        }
        if key in moves:
            self._keyboard_move(*moves[key])
        elif key == pygame.K_SPACE:
            self._select_gem()

    def controller_button_down(self, button: int) -> None:
        moves = {
            pygame.CONTROLLER_BUTTON_DPAD_DOWN: (0, 1),
            pygame.CONTROLLER_BUTTON_DPAD_LEFT: (-1, 0),
            pygame.CONTROLLER_BUTTON_DPAD_UP: (0, -1),
            pygame.CONTROLLER_BUTTON_DPAD_RIGHT: (1, 0),
        }
        if button == pygame.CONTROLLER_BUTTON_Y:
            self.show_hint()
        elif button == pygame.CONTROLLER_BUTTON_A:
            self._select_gem()
        elif button in moves:
            self._keyboard_move(*moves[button])

    def mouse_button_down(self, mouse_x: int, mouse_y: int) -> None:
        if _over_gem(mouse_x, mouse_y):
            self.mouse_active = True
            coord = _coord_at(mouse_x, mouse_y)
            self.selector_x, self.selector_y = coord.x, coord.y
            self._select_gem()

    def mouse_button_up(self, mouse_x: int, mouse_y: int) -> None:
        if self.state != BoardState.GEM_SELECTED:
            return
        released = _coord_at(mouse_x, mouse_y)
        if released != self.selected_first and self._check_selected_square():
            self.state = BoardState.GEM_SWITCHING
            self.animation_step = 0

    def _select_gem(self) -> None:
        self._play_select()

        if self.state == BoardState.STEADY:
            self.state = BoardState.GEM_SELECTED
            self.selected_first = Coord(self.selector_x, self.selector_y)
        elif self.state == BoardState.GEM_SELECTED:
            if self._check_selected_square():
                self.state = BoardState.GEM_SWITCHING
                self.animation_step = 0
            else:
                self.state = BoardState.STEADY
                self.selected_first = Coord(-1, -1)

    def _check_selected_square(self) -> bool:
        """True if swapping the first selection with the selector makes a match."""
        self.selected_second = Coord(self.selector_x, self.selector_y)
        first, second = self.selected_first, self.selected_second

        if abs(first.x - second.x) + abs(first.y - second.y) == 1:
            trial = self.board.copy()
            trial.swap(first.x, first.y, second.x, second.y)
            self.grouped = trial.check()
            if self.grouped:
                return True
        return False

    def show_hint(self) -> Coord | None:
        """Point the hint at a movable square and return that square."""
        locations = self.board.solutions()
        if not locations:
            return None
        if self.hint is not None:
            self.hint.show(locations[0])
        return locations[0]

    def _create_floating_scores(self) -> None:
        for match in self.grouped:
            points = len(match) * 5 * self.multiplier
            middle = match.mid_square()
            try:
                self.floating_scores.append(
                    FloatingScore(self.game, points, middle.x, middle.y, 80)
                )
            except RuntimeError as err:
                log(f"Cannot show floating score: {err}", LogLevel.ERROR)

            for coord in match:
                self.particles.append(
                    ParticleSystem(
                        self.game,
                        50,
                        50,
                        BOARD_X + coord.x * CELL + 32,
                        BOARD_Y + coord.y * CELL + 32,
                        60,
                        0.5,
                    )
                )

            self.state_game.increase_score(points)