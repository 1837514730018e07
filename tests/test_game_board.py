import pygame
import pytest

from gemcascade.board import Coord, Gem, Square
from gemcascade.game_board import BoardState, GameBoard
from gemcascade.score_table import score_file_path


class FakeGame:
    def __init__(self, mode="stateGameTimetrial"):
        self.mode = mode
        self.mouse = (0, 0)
        self.drawn = []

    def current_state(self):
        return self.mode

    def mouse_x(self):
        return self.mouse[0]

    def mouse_y(self):
        return self.mouse[1]

    def enqueue_draw(self, surface, rect, angle=0, z=0, alpha=255, color=None):
        self.drawn.append((rect, z))

    def change_state(self, name):
        self.mode = name


class FakeStateGame:
    def __init__(self):
        self.score = 0

    def increase_score(self, amount):
        self.score += amount

    def current_score(self):
        return self.score


def _grid():
    values = {(x, y): (x + 3 * y) % 7 for x in range(8) for y in range(8)}
    values[(0, 0)] = values[(1, 0)] = values[(2, 1)] = 6
    return [[Square(Gem(values[(x, y)] + 1)) for y in range(8)] for x in range(8)]


def _pixel(x, y):
    return 241 + x * 65 + 10, 41 + y * 65 + 10


@pytest.fixture
def setup(tmp_path):
    gb = GameBoard()
    game = FakeGame()
    sg = FakeStateGame()
    gb.set_game(game, sg)
    gb.home = tmp_path
    gb.board.squares = _grid()
    gb.state = BoardState.STEADY
    return gb, game, sg


def test_fixture_board_has_no_match_but_a_move(setup):
    gb, _, _ = setup
    assert len(gb.board.check()) == 0
    assert Coord(2, 0) in gb.board.solutions()


def test_set_game_appears_then_steady():
    gb = GameBoard()
    gb.set_game(FakeGame(), FakeStateGame())
    assert gb.state == BoardState.BOARD_APPEARING
    for _ in range(GameBoard.LONG_STEPS - 1):
        gb.update()
    assert gb.state == BoardState.BOARD_APPEARING
    gb.update()
    assert gb.state == BoardState.STEADY


def test_select_and_switch_with_keyboard(setup):
    gb, _, _ = setup
    gb.selector_x, gb.selector_y = 2, 0
    gb.button_down(pygame.K_SPACE)
    assert gb.state == BoardState.GEM_SELECTED
    assert gb.selected_first == Coord(2, 0)
    gb.button_down(pygame.K_DOWN)
    assert (gb.selector_x, gb.selector_y) == (2, 1)
    assert gb.mouse_active is False
    gb.button_down(pygame.K_SPACE)
    assert gb.state == BoardState.GEM_SWITCHING
    assert gb.selected_second == Coord(2, 1)
    assert gb.animation_step == 0


def test_invalid_second_selection_returns_to_steady(setup):
    gb, _, _ = setup
    gb.selector_x, gb.selector_y = 5, 5
    gb.button_down(pygame.K_SPACE)
    gb.selector_x, gb.selector_y = 7, 7
    gb.button_down(pygame.K_SPACE)
    assert gb.state == BoardState.STEADY
    assert gb.selected_first == Coord(-1, -1)


def test_full_swap_cycle(setup):
    gb, _, sg = setup
    gb.selector_x, gb.selector_y = 2, 0
    gb.button_down(pygame.K_SPACE)
    gb.selector_y = 1
    gb.button_down(pygame.K_SPACE)
    assert gb.state == BoardState.GEM_SWITCHING

    for _ in range(GameBoard.SHORT_STEPS - 1):
        gb.update()
    assert gb.state == BoardState.GEM_SWITCHING
    gb.update()
    assert gb.state == BoardState.GEM_DISAPPEARING
    assert gb.board.squares[2][0].gem == Gem.BLUE
    assert gb.multiplier == 1
    assert len(gb.grouped) == 1
    assert set(gb.grouped[0]) == {Coord(0, 0), Coord(1, 0), Coord(2, 0)}
    assert sg.score == 15
    assert len(gb.particles) == 3

    for _ in range(GameBoard.SHORT_STEPS):
        gb.update()
    assert gb.state == BoardState.BOARD_FILLING
    assert all(sq.gem != Gem.EMPTY for column in gb.board.squares for sq in column)

    for _ in range(GameBoard.SHORT_STEPS):
        gb.update()
    assert gb.state in {
        BoardState.STEADY,
        BoardState.GEM_DISAPPEARING,
        BoardState.BOARD_DISAPPEARING,
    }
    assert gb.animation_step == 0


def test_selector_wraps(setup):
    gb, _, _ = setup
    gb.selector_x, gb.selector_y = 0, 0
    gb.button_down(pygame.K_LEFT)
    assert gb.selector_x == 7
    gb.button_down(pygame.K_UP)
    assert gb.selector_y == 7
    gb.button_down(pygame.K_RIGHT)
    assert gb.selector_x == 0
    gb.button_down(pygame.K_DOWN)
    assert gb.selector_y == 0


def test_controller_moves_selector(setup):
    gb, _, _ = setup
    gb.selector_x, gb.selector_y = 3, 3
    gb.controller_button_down(pygame.CONTROLLER_BUTTON_DPAD_RIGHT)
    assert (gb.selector_x, gb.selector_y) == (4, 3)
    gb.controller_button_down(pygame.CONTROLLER_BUTTON_DPAD_UP)
    assert (gb.selector_x, gb.selector_y) == (4, 2)
    gb.controller_button_down(pygame.CONTROLLER_BUTTON_A)
    assert gb.state == BoardState.GEM_SELECTED
    assert gb.selected_first == Coord(4, 2)


def test_mouse_click_selects_gem(setup):
    gb, _, _ = setup
    gb.mouse_active = False
    gb.mouse_button_down(*_pixel(2, 0))
    assert gb.mouse_active is True
    assert (gb.selector_x, gb.selector_y) == (2, 0)
    assert gb.state == BoardState.GEM_SELECTED


def test_mouse_click_outside_board_is_ignored(setup):
    gb, _, _ = setup
    gb.mouse_button_down(10, 10)
    assert gb.state == BoardState.STEADY


def test_mouse_release_on_neighbour_switches(setup):
    gb, _, _ = setup
    gb.mouse_button_down(*_pixel(2, 0))
    gb.selector_x, gb.selector_y = 2, 1
    gb.mouse_button_up(*_pixel(2, 1))
    assert gb.state == BoardState.GEM_SWITCHING


def test_mouse_release_on_same_square_keeps_selection(setup):
    gb, _, _ = setup
    gb.mouse_button_down(*_pixel(2, 0))
    gb.mouse_button_up(*_pixel(2, 0))
    assert gb.state == BoardState.GEM_SELECTED


def test_reset_game_from_steady(setup):
    gb, _, _ = setup
    gb.reset_game()
    assert gb.state == BoardState.BOARD_DISAPPEARING
    assert gb.multiplier == 0
    assert all(sq.must_fall for column in gb.board.squares for sq in column)
    for _ in range(GameBoard.LONG_STEPS):
        gb.update()
    assert gb.state == BoardState.BOARD_APPEARING


def test_reset_game_ignored_while_selected(setup):
    gb, _, _ = setup
    gb.state = BoardState.GEM_SELECTED
    gb.reset_game()
    assert gb.state == BoardState.GEM_SELECTED


def test_end_game_records_high_score(setup, tmp_path):
    gb, game, _ = setup
    gb.end_game(120)
    assert gb.state == BoardState.TIME_FINISHED
    path = score_file_path(game.current_state(), tmp_path)
    assert path.read_text() == "120"
    for _ in range(GameBoard.LONG_STEPS):
        gb.update()
    assert gb.state == BoardState.SHOWING_SCORE_TABLE
    gb.end_game(500)
    assert gb.state == BoardState.SHOWING_SCORE_TABLE
    assert path.read_text() == "120"


def test_reset_after_score_table_generates_new_board(setup):
    gb, _, _ = setup
    gb.state = BoardState.SHOWING_SCORE_TABLE
    gb.reset_game()
    assert gb.state == BoardState.BOARD_APPEARING
    assert len(gb.board.check()) == 0
    assert len(gb.board.solutions()) > 0


def test_show_hint_points_at_a_solution(setup):
    gb, _, _ = setup
    gb.load_resources()
    location = gb.show_hint()
    assert location in gb.board.solutions()
    assert gb.hint.showing is True
    assert gb.hint.location == location


def test_draw_follows_mouse_over_board(setup):
    gb, game, _ = setup
    game.mouse = _pixel(3, 4)
    gb.draw()
    assert (gb.selector_x, gb.selector_y) == (3, 4)


def test_draw_ignores_mouse_when_keyboard_active(setup):
    gb, game, _ = setup
    gb.button_down(pygame.K_RIGHT)
    game.mouse = _pixel(0, 0)
    gb.draw()
    assert (gb.selector_x, gb.selector_y) == (4, 3)