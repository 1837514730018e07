import pygame
import pytest

from gemcascade.main_menu import MainMenuState, _Transition


class FakeGame:
    def __init__(self):
        self.changes = []
        self.closed = False
        self.my = 0

    def change_state(self, name):
        self.changes.append(name)

    def close(self):
        self.closed = True

    def mouse_x(self):
        return 0

    def mouse_y(self):
        return self.my


@pytest.fixture
def fake():
    return FakeGame()


@pytest.fixture
def menu(fake):
    return MainMenuState(fake)


def test_targets_in_menu_order(menu):
    assert menu.targets == [
        "stateGameTimetrial",
        "stateGameEndless",
        "stateHowtoplay",
        "stateQuit",
    ]


def test_move_up_wraps_to_last(menu):
    menu.move_up()
    assert menu.selected == len(menu.targets) - 1


def test_move_down_cycles(menu):
    for _ in range(len(menu.targets)):
        menu.move_down()
    assert menu.selected == 0


def test_enter_chooses_highlighted(menu, fake):
    menu.button_down(pygame.K_DOWN)
    menu.button_down(pygame.K_RETURN)
    assert menu.selected == 1
    assert fake.changes == [menu.targets[menu.selected]]
    assert fake.changes == ["stateGameEndless"]


def test_keypad_enter_chooses(menu, fake):
    menu.button_down(pygame.K_KP_ENTER)
    assert menu.selected == 0
    assert fake.changes == [menu.targets[menu.selected]]
    assert fake.changes == ["stateGameTimetrial"]


def test_escape_closes(menu, fake):
    menu.button_down(pygame.K_ESCAPE)
    assert menu.selected == 0
    assert fake.changes == []
    assert fake.closed is True


def test_controller_navigation(menu, fake):
    menu.controller_button_down(pygame.CONTROLLER_BUTTON_DPAD_UP)
    assert menu.selected == 3
    menu.controller_button_down(pygame.CONTROLLER_BUTTON_A)
    assert fake.changes == [menu.targets[menu.selected]]
    assert fake.changes == ["stateQuit"]


def test_update_highlights_under_mouse(menu, fake):
    fake.my = menu.menu_y_start + 2 * menu.menu_y_gap
    menu.update()
    assert menu.selected == 2


def test_update_ignores_mouse_outside(menu, fake):
    menu.selected = 1
    fake.my = menu.menu_y_end + 5
    menu.update()
    assert menu.selected == 1


def test_transition_becomes_active(menu, fake):
    for _ in range(menu.animation_total_steps):
        assert menu.transition is _Transition.IN
        menu.update()
    assert menu.transition is _Transition.ACTIVE


def test_left_click_in_menu_chooses(menu, fake):
    fake.my = menu.menu_y_start
    menu.mouse_button_down(pygame.BUTTON_LEFT)
    assert menu.selected == 0
    assert fake.changes == [menu.targets[menu.selected]]
    assert fake.changes == ["stateGameTimetrial"]


def test_click_outside_menu_does_nothing(menu, fake):
    fake.my = menu.menu_y_start - 1
    menu.mouse_button_down(pygame.BUTTON_LEFT)
    menu.mouse_button_down(pygame.BUTTON_RIGHT)
    assert menu.selected == 0
    assert menu.transition is _Transition.IN
    assert fake.changes == []


def test_draw_steps_jewel_animation(menu):
    menu.draw()
    assert menu.jewels.current_step == 1