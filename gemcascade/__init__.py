"""A match-three gem puzzle game: board logic, easing animations and a pygame front end."""

__version__ = "1.0.0"