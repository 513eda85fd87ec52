"""Things placed on the city grid: buildings, roads, stations, obstacles and fares."""

from __future__ import annotations

import logging
import random
from enum import IntEnum
from typing import Any, ClassVar, Protocol

from .constants import (
    BOARD_PIXELS,
    CELL_SIZE,
    FUELSTATION_COLOR,
    GRID_SIZE,
    HUD_HEIGHT,
    OBSTACLE_COLOR,
    PACKAGE_COLOR,
    PASSENGER_COLOR,
    RED,
    ROAD_COLOR,
    STATION_COLOR,
    TOTAL_HEIGHT,
    is_road,
)
from .render import Canvas

log = logging.getLogger(__name__)

MAX_DESTINATION_ATTEMPTS = 100

BUILDING_BODY_COLOR = (0.0, 0.0, 0.0)
BUILDING_WINDOW_COLOR = (0.7, 0.7, 0.9)
PUMP_COLOR = (0.8, 0.8, 0.8)
TRUNK_COLOR = (0.5, 0.3, 0.1)
LEAVES_COLOR = (0.0, 0.6, 0.1)
DOOR_COLOR = (0.4, 0.4, 0.4)
HIGHLIGHT_COLOR = (0.0, 1.0, 0.0)


class ClearanceMap(Protocol):
    """Anything that can tell whether a grid cell is free to use."""

    def is_position_clear(self, x: int, y: int) -> bool: ...


def _cell_centre(x: int, y: int) -> tuple[int, int]:
    return x * CELL_SIZE + CELL_SIZE // 2, y * CELL_SIZE + CELL_SIZE // 2


def _random_destination(rng: random.Random, board: ClearanceMap) -> tuple[int, int]:
    """Pick a clear road cell; fall back to (0, 0) once the attempts run out."""
    attempt = 0
    x = y = 0
    while attempt < MAX_DESTINATION_ATTEMPTS:
        x = rng.randrange(GRID_SIZE)
        y = rng.randrange(GRID_SIZE)
        attempt += 1
        if board.is_position_clear(x, y) and is_road(x, y):
            break
    if attempt >= MAX_DESTINATION_ATTEMPTS:
        return 0, 0
    return x, y


class GameObject:
    """Something that occupies one grid cell."""

    kind: ClassVar[str] = "GameObject"

    def __init__(self, x: int = 0, y: int = 0, width: int = 0, height: int = 0) -> None:
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        self.is_active = True

    def __repr__(self) -> str:
        return f"{type(self).__name__}(x={self.x}, y={self.y}, active={self.is_active})"

    def draw(self, canvas: Canvas) -> None:
        """Draw a plain red rectangle at the object's raw coordinates."""
        canvas.draw_rectangle(self.x, self.y, self.width, self.height, RED)

    def update(self) -> None:
        """Advance the object by one frame; plain objects do nothing."""

    def check_collision(self, other: GameObject | None) -> bool:
        """Return whether the other object stands on the same cell."""
        if other is None:
            return False
        return self.x == other.x and self.y == other.y


class Building(GameObject):
    """A black block with four windows."""

    kind: ClassVar[str] = "Building"

    def __init__(self, x: int, y: int) -> None:
        super().__init__(x, y, 30, 30)

    def draw(self, canvas: Canvas) -> None:
        if not self.is_active:
            return
        cx, cy = _cell_centre(self.x, self.y)
        w, h = self.width, self.height
        canvas.draw_square(cx - w // 2, cy - h // 2, w, BUILDING_BODY_COLOR)
        window = w // 4
        for wx, wy in (
            (cx - w // 3, cy - h // 3),
            (cx + w // 6, cy - h // 3),
            (cx - w // 3, cy + h // 6),
            (cx + w // 6, cy + h // 6),
        ):
            canvas.draw_square(wx, wy, window, BUILDING_WINDOW_COLOR)


class Road(GameObject):
    """A drivable cell."""

    kind: ClassVar[str] = "Road"

    def __init__(self, x: int, y: int) -> None:
        super().__init__(x, y, CELL_SIZE, CELL_SIZE)

    def draw(self, canvas: Canvas) -> None:
        if not self.is_active:
            return
        canvas.draw_square(self.x * CELL_SIZE, self.y * CELL_SIZE, CELL_SIZE, ROAD_COLOR)


class FuelStation(GameObject):
    """A pump that sells fuel at a fixed price per unit."""

    kind: ClassVar[str] = "FuelStation"

    def __init__(self, x: int, y: int) -> None:
        super().__init__(x, y, 30, 30)
        self.fuel_price = 2.0

    def calculate_cost(self, amount: float) -> float:
        """Return the price of the given amount of fuel."""
        return amount * self.fuel_price

    def refuel_car(self, car: Any, player: Any, amount: float) -> bool:
        """Sell fuel to the player's car if they can afford it; return whether they could."""
        cost = self.calculate_cost(amount)
        if player.money < cost:
            return False
        car.fuel_level = min(car.fuel_level + amount, car.max_fuel)
        player.update_money(-cost)
        return True

    def draw(self, canvas: Canvas) -> None:
        if not self.is_active:
            return
        cx, cy = _cell_centre(self.x, self.y)
        canvas.draw_square(
            cx - self.width // 2, cy - self.height // 2, self.width, FUELSTATION_COLOR
        )
        canvas.draw_rectangle(cx - 5, cy - 15, 10, 20, PUMP_COLOR)


class ObstacleKind(IntEnum):
    """What an obstacle looks like."""

    TREE = 0
    BOX = 1


class Obstacle(GameObject):
    """A tree or a box standing in the road."""

    kind: ClassVar[str] = "Obstacle"

    def __init__(self, x: int, y: int, obstacle_type: int) -> None:
        super().__init__(x, y, 20, 20)
        self.obstacle_type = ObstacleKind.TREE if obstacle_type == 0 else ObstacleKind.BOX
        log.debug("obstacle created at %d %d", x, y)

    def draw(self, canvas: Canvas) -> None:
        if not self.is_active:
            return
        px, py = _cell_centre(self.x, self.y)
        if self.obstacle_type == ObstacleKind.TREE:
            canvas.draw_rectangle(px - 3, py - 10, 6, 10, TRUNK_COLOR)
            canvas.draw_circle(px, py - 15, 10, LEAVES_COLOR)
        else:
            canvas.draw_square(
                px - self.width // 2, py - self.height // 2, self.width, OBSTACLE_COLOR
            )


class Station(GameObject):
    """The place where the player can switch between taxi and delivery work."""

    kind: ClassVar[str] = "Station"

    def __init__(self, x: int, y: int, engine: Any = None) -> None:
        super().__init__(x, y, 40, 40)
        self.engine = engine
        self.is_available = True

    def change_player_role(self, player: Any) -> None:
        """Open the role menu and pause the game."""
        if player is None or self.engine is None:
            return
        self.engine.menu.show_role_change_menu(True)
        self.engine.game.pause_game()

    def is_player_near(self, player: Any) -> bool:
        """Return whether the player's car stands on the station."""
        if player is None or player.car is None:
            return False
        return player.car.x == self.x and player.car.y == self.y

    def draw(self, canvas: Canvas) -> None:
        if not self.is_active:
            return
        cx, cy = _cell_centre(self.x, self.y)
        w, h = self.width, self.height
        canvas.draw_square(cx - w // 2, cy - h // 2, w, STATION_COLOR)
        canvas.draw_rectangle(cx - w // 3, cy - h // 3, w * 2 // 3, h * 2 // 3, DOOR_COLOR)


class Passenger(GameObject):
    """Someone waiting for a taxi, with a destination and a fare."""

    kind: ClassVar[str] = "Passenger"

    def __init__(
        self,
        x: int,
        y: int,
        dest_x: int = 0,
        dest_y: int = 0,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__(x, y, 10, 10)
        self._rng = rng if rng is not None else random.Random()
        self.destination_x = dest_x
        self.destination_y = dest_y
        self.fare = 10.0 + self._rng.randrange(20)
        self.is_picked_up = False
        self.ready_for_deletion = False

    def generate_destination(self, board: ClearanceMap | None) -> None:
        """Choose a random clear road cell on the board as the destination."""
        if board is None:
            return
        self.destination_x, self.destination_y = _random_destination(self._rng, board)

    def set_picked_up(self, status: bool) -> None:
        """Record whether the passenger is in a taxi."""
        self.is_picked_up = status

    def draw(self, canvas: Canvas) -> None:
        if not self.is_active:
            return
        px, py = _cell_centre(self.x, self.y)
        canvas.draw_circle(px, py, 5, PASSENGER_COLOR)
        canvas.draw_line(px, py + 5, px, py + 15, 2, PASSENGER_COLOR)
        canvas.draw_line(px - 5, py + 10, px + 5, py + 10, 2, PASSENGER_COLOR)
        canvas.draw_line(px, py + 15, px - 5, py + 25, 2, PASSENGER_COLOR)
        canvas.draw_line(px, py + 15, px + 5, py + 25, 2, PASSENGER_COLOR)

    def highlight_destination(self, canvas: Canvas) -> None:
        """Mark the destination cell with a green circle."""
        px, py = _cell_centre(self.destination_x, self.destination_y)
        canvas.draw_circle(px, py + HUD_HEIGHT, 15, HIGHLIGHT_COLOR)


class Package(GameObject):
    """A parcel waiting for pickup, with a destination and a delivery fee."""

    kind: ClassVar[str] = "Package"

    def __init__(
        self,
        x: int,
        y: int,
        dest_x: int = 0,
        dest_y: int = 0,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__(x, y, 15, 15)
        self._rng = rng if rng is not None else random.Random()
        self.pickup_x = x
        self.pickup_y = y
        self.destination_x = dest_x
        self.destination_y = dest_y
        self.delivery_fee = 15.0 + self._rng.randrange(25)
        self.is_picked_up = False
        self.ready_for_deletion = False

    def generate_destination(self, board: ClearanceMap | None) -> None:
        """Choose a random clear road cell on the board as the destination."""
        if board is None:
            return
        self.destination_x, self.destination_y = _random_destination(self._rng, board)

    def set_picked_up(self, status: bool) -> None:
        """Record whether the package is in a delivery car."""
        self.is_picked_up = status

    def draw(self, canvas: Canvas) -> None:
        if not self.is_active:
            return
        px, py = _cell_centre(self.x, self.y)
        canvas.draw_square(
            px - self.width // 2, py - self.height // 2, self.width, PACKAGE_COLOR
        )

    def highlight_destination(self, canvas: Canvas) -> None:
        """Mark the destination with a green circle when it lies inside the board."""
        px, py = _cell_centre(self.destination_x, self.destination_y)
        py += HUD_HEIGHT
        if px <= 0 or px >= BOARD_PIXELS or py <= HUD_HEIGHT or py >= TOTAL_HEIGHT:
            return
        canvas.draw_circle(px, py, 15, HIGHLIGHT_COLOR)