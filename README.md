# gemcascade

A match-three puzzle game built on pygame. Swap two adjacent gems to line up
three or more of the same colour horizontally or vertically. Matched gems fade
out, the gems above fall into their place and new ones drop in from the top.
Chains formed by falling gems (cascades) raise the score multiplier: each match
is worth `5 × gems in the match × multiplier` points.

## Modes

- **Timetrial mode**: score as many points as you can in two minutes. If the
  board runs out of moves, it is cleared and a new one is dealt.
- **Endless mode**: no clock; the game ends when the board has no moves left.
- **How to play?**: a short page describing the rules.

When a game ends, a score table shows the final score and the previous best.
The best score of each mode is kept in a file in your home directory named
after the mode's screen: `.gemcascade-stateGameTimetrial` and
`.gemcascade-stateGameEndless`. A missing or unreadable file counts as a best
score of 0.

## Installing and running

```
pip install .
gemcascade
```

The `gemcascade` command opens an 800×600 window and runs until you choose
"Exit" in the main menu, press Escape there, or close the window.

## Controls

In a game:

| Action             | Keyboard   | Mouse                                    | Controller |
|--------------------|------------|------------------------------------------|------------|
| Move selector      | Arrow keys | Move the pointer over the board          | D-pad      |
| Select / swap gem  | Space      | Click a gem, then click or drag to a neighbour | A    |
| Show a hint        | H          | "Show hint" button                       | Y          |
| Reset the game     |            | "Reset game" button                      | Back       |
| Back to main menu  | Escape     | "Exit" button                            | Start      |

The "Turn off music" / "Turn on music" button toggles the background music.

In the main menu use Up/Down and Enter (or keypad Enter), click an entry, or use
the controller's D-pad and A. Escape in the main menu closes the game. On the
"How to play?" page, Escape, a left click or any controller button returns to
the menu.

## Media files

The package contains code only. The game loads its images, fonts, sounds and
music from a `media/` directory relative to the working directory (for example
`media/gemRed.png`, `media/fuenteMenu.ttf`, `media/match1.ogg`,
`media/music.ogg`, `media/stateMainMenu/mainMenuLogo.png`). These files are not
shipped with the package and must be supplied. Missing images and sounds are
skipped with a logged message; a missing font raises `RuntimeError`.

Interface texts pass through `gettext`; no translation catalogues are included,
so the texts appear in English unless your application installs one.

## Using the pieces as a library

The game logic works without a window:

```python
import random
from gemcascade.board import Board

board = Board(random.Random(1))
print(board)                 # 8x8 grid of gem numbers, one row per line
print(board.solutions())     # squares that can be swapped into a match
board.swap(0, 0, 1, 0)
print(board.check())         # the matches now on the board (a MultipleMatch)
```

Other useful modules:

- `gemcascade.board`: `Coord`, `Gem`, `Square`, `Match`, `MultipleMatch` and
  `Board` (`generate`, `swap`, `delete`, `check`, `solutions`,
  `calc_fall_movements`, `drop_all_gems`, `end_animations`, `copy`).
- `gemcascade.animation`: the easing functions (`ease_linear`, `ease_in_quad`,
  `ease_out_quad`, `ease_in_out_quad`, the cubic and quartic variants and
  `ease_out_back`), each taking `(t, b, c, d)`, and the `Animation` class that
  tweens several integer attributes at once using an `AnimationType`.
- `gemcascade.score_table`: `score_file_path` and `record_high_score` for
  reading and updating a stored best score.
- `gemcascade.indicators`: `format_time`, which turns seconds into `m:ss`.
- `gemcascade.window`: the `Window` base class with its depth-ordered
  `DrawingQueue`; subclass it and implement `update` and `draw`.

## Running the tests

```
pip install .[test]
pytest
```