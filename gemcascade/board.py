"""The 8x8 gem board, its matches and the search for valid moves."""

from __future__ import annotations

import random
from dataclasses import dataclass, replace
from enum import IntEnum
from itertools import groupby, takewhile
from typing import Iterable, Iterator

from gemcascade.log import LogLevel, constructed, log

SIZE = 8
GEM_KINDS = 7

# Order in which neighbours are tried: above, below, left, right.
_NEIGHBOURS = ((0, -1), (0, 1), (-1, 0), (1, 0))


@dataclass(frozen=True)
class Coord:
    """A position on the board; (-1, -1) means no position."""

    x: int = -1
    y: int = -1

    def __str__(self) -> str:
        return f"({self.x},{self.y})"


class Match(list):
    """A run of three or more equal gems, as a list of coordinates."""

    def mid_square(self) -> Coord:
        """The coordinate in the middle of the run."""
        return self[len(self) // 2]

    def matched(self, coord: Coord) -> bool:
        return coord in self

    def __str__(self) -> str:
        return f"Match ({len(self)}): " + "".join(f"{coord}, " for coord in self)


class MultipleMatch(list):
    """All the matches found on a board."""

    def matched(self, coord: Coord) -> bool:
        """True if ``coord`` belongs to any of the matches."""
        return any(match.matched(coord) for match in self)


class Gem(IntEnum):
    EMPTY = 0
    WHITE = 1
    RED = 2
    PURPLE = 3
    ORANGE = 4
    GREEN = 5
    YELLOW = 6
    BLUE = 7


@dataclass(eq=False)
class Square:
    """A board cell: the gem it holds and how it is falling.

    Squares compare equal when they hold the same gem, and compare with a
    :class:`Gem` directly.
    """

    gem: Gem = Gem.EMPTY
    orig_y: int = 0
    dest_y: int = 0
    must_fall: bool = False

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Square):
            return self.gem == other.gem
        if isinstance(other, int):
            return self.gem == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __int__(self) -> int:
        return int(self.gem)


class Board:
    """An 8x8 grid of squares, indexed as ``squares[x][y]``."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng if rng is not None else random.Random()
        self.squares: list[list[Square]] = []
        log(constructed("Board"), LogLevel.DEBUG)
        self.generate()

    def _random_gem(self) -> Gem:
        return Gem(self.rng.randint(1, GEM_KINDS))

    def _falling_square(self, y: int) -> Square:
        orig_y = self.rng.randrange(SIZE) - 9
        return Square(self._random_gem(), orig_y, y - orig_y, True)

    def generate(self) -> None:
        """Fill the board with gems: no ready matches, but at least one move."""
        while True:
            self.squares = [
                [self._falling_square(y) for y in range(SIZE)] for _ in range(SIZE)
            ]
            if not self.check() and self.solutions():
                return

    def swap(self, x1: int, y1: int, x2: int, y2: int) -> None:
        """Exchange two gems; the second cell gets a fresh, still square."""
        first = self.squares[x1][y1].gem
        self.squares[x1][y1] = replace(self.squares[x2][y2])
        self.squares[x2][y2] = Square(first)

    def delete(self, x: int, y: int) -> None:
        """Empty the square at (x, y)."""
        self.squares[x][y] = Square()

    def calc_fall_movements(self) -> None:
        """Let gems fall into empty cells and refill the top with new gems."""
        self.end_animations()

        for column in self.squares:
            for y in reversed(range(SIZE)):
                column[y].orig_y = y
                if column[y].gem == Gem.EMPTY:
                    for above in column[:y]:
                        above.must_fall = True
                        above.dest_y += 1

            for y in reversed(range(SIZE)):
                square = column[y]
                if square.must_fall and square.gem != Gem.EMPTY:
                    column[y + square.dest_y] = square
                    column[y] = Square()

            empty = sum(1 for _ in takewhile(lambda s: s.gem == Gem.EMPTY, column))

            for y, square in enumerate(column):
                if square.gem == Gem.EMPTY:
                    column[y] = Square(self._random_gem(), y - empty, empty, True)

    def end_animations(self) -> None:
        """Put every square at rest in its own place."""
        for column in self.squares:
            for y, square in enumerate(column):
                square.must_fall = False
                square.orig_y = y
                square.dest_y = 0

    def drop_all_gems(self) -> None:
        """Send every gem falling off the bottom of the board."""
        for column in self.squares:
            for y, square in enumerate(column):
                square.must_fall = True
                square.orig_y = y
                square.dest_y = 9 + self.rng.randrange(SIZE)

    def _runs(self, coords: Iterable[Coord]) -> Iterator[Match]:
        for gem, group in groupby(coords, key=lambda c: self.squares[c.x][c.y].gem):
            run = Match(group)
            if gem != Gem.EMPTY and len(run) > 2:
                yield run

    def check(self) -> MultipleMatch:
        """Every horizontal run, then every vertical run, of three or more gems."""
        matches = MultipleMatch()
        for y in range(SIZE):
            matches.extend(self._runs(Coord(x, y) for x in range(SIZE)))
        for x in range(SIZE):
            matches.extend(self._runs(Coord(x, y) for y in range(SIZE)))
        return matches

    def solutions(self) -> list[Coord]:
        """Squares that can be swapped with a neighbour to make a match.

        A square appears once for each neighbour it can be swapped with. If the
        board already holds a match the result is just ``[Coord(-1, -1)]``.
        """
        if self.check():
            return [Coord(-1, -1)]

        trial = self.copy()
        found: list[Coord] = []
        for x in range(SIZE):
            for y in range(SIZE):
                for dx, dy in _NEIGHBOURS:
                    nx, ny = x + dx, y + dy
                    if not (0 <= nx < SIZE and 0 <= ny < SIZE):
                        continue
                    trial.swap(x, y, nx, ny)
                    if trial.check():
                        found.append(Coord(x, y))
                    trial.swap(x, y, nx, ny)
        return found

    def copy(self) -> Board:
        """An independent board with the same squares, sharing the generator."""
        clone = Board.__new__(Board)
        clone.rng = self.rng
        clone.squares = [[replace(square) for square in column] for column in self.squares]
        return clone

    def __str__(self) -> str:
        return "".join(
            "".join(f"{int(self.squares[x][y].gem)} " for x in range(SIZE)) + "\n"
            for y in range(SIZE)
        )