"""Shared game constants: grid layout, directions, modes, states and colours."""

from __future__ import annotations

from enum import IntEnum

HUD_HEIGHT = 40
GRID_SIZE = 20
CELL_SIZE = 40
BOARD_PIXELS = GRID_SIZE * CELL_SIZE
TOTAL_HEIGHT = BOARD_PIXELS + HUD_HEIGHT

MAX_BUILDINGS = 500
MAX_ROADS = 600
MAX_STATIONS = 5
MAX_CARS = 15
MAX_OBSTACLES = 15
MAX_PASSENGERS = 10
MAX_PACKAGES = 10

FPS = 80
KEY_ESC = 27

# The value of pi the drawing helpers use for angle conversion.
ANGLE_PI = 3.141519


class Direction(IntEnum):
    """Movement direction on the grid."""

    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3


class GameMode(IntEnum):
    """The role the player is driving in."""

    TAXI = 0
    DELIVERY = 1


class GameState(IntEnum):
    """Top-level state of the game loop."""

    MENU = 0
    PLAYING = 1
    PAUSED = 2
    GAMEOVER = 3
    LEADERBOARD = 4


Color = tuple[float, ...]

ROAD_COLOR: Color = (1.0, 1.0, 1.0)
BUILDING_COLOR: Color = (0.0, 0.0, 0.0)
TAXI_COLOR: Color = (1.0, 0.0, 0.0)
DELIVERY_COLOR: Color = (0.0, 0.0, 1.0)
PASSENGER_COLOR: Color = (0.7, 0.5, 0.9)
PACKAGE_COLOR: Color = (0.6, 0.3, 0.0)
FUELSTATION_COLOR: Color = (1.0, 0.5, 0.0)
STATION_COLOR: Color = (0.5, 0.5, 0.5)
OBSTACLE_COLOR: Color = (1.0, 0.0, 0.5)
MENU_BG_COLOR: Color = (0.957, 0.675, 0.718)
MENU_TEXT_COLOR: Color = (1.0, 1.0, 1.0)
HUD_BG_COLOR: Color = (0.898, 0.596, 0.608, 0.7)
HUD_TEXT_COLOR: Color = (1.0, 1.0, 1.0)

# Named colours from the general palette that the game refers to.
RED: Color = (1.0, 0.0, 0.0)
GREEN: Color = (0.0, 0.501960784313726, 0.0)
WHITE: Color = (1.0, 1.0, 1.0)
BLACK: Color = (0.0, 0.0, 0.0)

# Indexed as CITY_GRID[x][y]; 0 is road, 1 is building.
CITY_GRID: tuple[tuple[int, ...], ...] = (
    (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 0, 1, 1, 0, 1, 1, 0, 1, 0, 1, 0, 1, 1, 0, 1, 1, 0, 0, 0),
    (0, 1, 0, 0, 0, 0, 0, 0, 1, 0, 1, 0, 0, 0, 0, 0, 1, 0, 1, 0),
    (0, 1, 0, 1, 1, 1, 1, 0, 0, 0, 1, 1, 1, 1, 1, 0, 1, 0, 1, 0),
    (0, 0, 0, 1, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 1, 0, 0, 0, 1, 0),
    (0, 1, 0, 1, 0, 1, 1, 1, 0, 0, 1, 1, 1, 0, 1, 1, 1, 0, 1, 0),
    (0, 1, 0, 0, 0, 1, 0, 0, 0, 0, 0, 0, 1, 0, 0, 0, 1, 0, 0, 0),
    (0, 1, 1, 1, 1, 1, 0, 1, 1, 1, 1, 0, 0, 1, 1, 0, 1, 1, 0, 0),
    (0, 0, 0, 0, 0, 0, 0, 1, 0, 0, 1, 0, 0, 0, 0, 0, 0, 0, 1, 0),
    (0, 1, 1, 0, 1, 1, 1, 1, 0, 0, 0, 1, 1, 0, 1, 1, 0, 0, 1, 0),
    (0, 0, 0, 0, 0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 0, 0, 0, 1, 0),
    (0, 1, 0, 0, 1, 1, 1, 1, 0, 1, 0, 1, 1, 1, 0, 0, 1, 1, 1, 0),
    (0, 1, 0, 0, 0, 0, 0, 1, 0, 0, 0, 1, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 1, 0, 1, 1, 1, 0, 1, 1, 0, 1, 1, 0, 1, 1, 1, 1, 1, 1, 0),
    (0, 0, 0, 1, 0, 0, 0, 0, 0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 1, 0),
    (0, 1, 1, 0, 0, 1, 1, 1, 0, 1, 1, 1, 0, 1, 0, 1, 1, 0, 1, 0),
    (0, 1, 0, 0, 0, 1, 0, 0, 0, 0, 0, 1, 0, 0, 0, 1, 0, 0, 0, 0),
    (0, 1, 0, 1, 1, 1, 0, 1, 1, 1, 0, 1, 1, 0, 1, 1, 0, 1, 1, 0),
    (0, 0, 0, 1, 0, 0, 0, 1, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
)

_OFFSETS = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}


def in_bounds(x: int, y: int) -> bool:
    """Return whether the cell lies on the grid."""
    return 0 <= x < GRID_SIZE and 0 <= y < GRID_SIZE


def is_road(x: int, y: int) -> bool:
    """Return whether the cell is on the grid and is a road cell."""
    return in_bounds(x, y) and CITY_GRID[x][y] == 0


def step(direction: int, x: int, y: int) -> tuple[int, int]:
    """Return the cell one block away from (x, y) in the given direction."""
    dx, dy = _OFFSETS[Direction(direction)]
    return x + dx, y + dy