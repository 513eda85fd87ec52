"""The cars on the board: the player's taxi or delivery van and the traffic."""

from __future__ import annotations

import logging
import random
from typing import Any, ClassVar, Protocol

from .constants import (
    CELL_SIZE,
    HUD_HEIGHT,
    Direction,
    in_bounds,
    is_road,
    step,
)
from .objects import GameObject, Package, Passenger
from .render import Canvas
from .sound import play_sound

log = logging.getLogger(__name__)

FUEL_PER_MOVE = 0.5
FULL_TANK = 100.0
COLLISION_COOLDOWN = 10
FARE_COLLISION_PENALTY = -5
OBSTACLE_PENALTY = -2
NPC_CAR_PENALTY = -3
TAXI_JOB_POINTS = 10
DELIVERY_JOB_POINTS = 20

TAXI_DRAW_COLOR = (1.0, 1.0, 0.0)
DELIVERY_DRAW_COLOR = (0.0, 0.0, 1.0)
PASSENGER_INDICATOR_COLOR = (0.0, 1.0, 0.0)
PACKAGE_INDICATOR_COLOR = (0.6, 0.3, 0.0)


class TrafficMap(Protocol):
    """Anything holding the list of cars driving around the board."""

    cars: list[Any]


def _car_centre(x: int, y: int) -> tuple[int, int]:
    """Pixel centre of a cell, with y measured from the top of the window."""
    return x * CELL_SIZE + CELL_SIZE // 2, y * CELL_SIZE + CELL_SIZE // 2 + HUD_HEIGHT


class Car(GameObject):
    """A car that drives from cell to cell along the roads and burns fuel."""

    kind: ClassVar[str] = "Car"

    def __init__(self, x: int = 0, y: int = 0, speed: float = 5.0) -> None:
        super().__init__(x, y, 30, 20)
        self.speed = speed
        self.color = [0, 0, 0]
        self.direction = Direction.RIGHT
        self.fuel_level = FULL_TANK
        self.max_fuel = FULL_TANK
        self.is_player_controlled = False
        self.jobs_completed = 0

    def move(self, direction: int, board: TrafficMap) -> None:
        """Turn to the direction and drive one cell if the way is free."""
        self.direction = Direction(direction)
        new_x, new_y = step(self.direction, self.x, self.y)
        if self.is_valid_position(new_x, new_y, board):
            self.x, self.y = new_x, new_y
            self.decrease_fuel()

    def is_valid_position(self, x: int, y: int, board: TrafficMap) -> bool:
        """Return whether the cell is a road on the grid with no active car on it."""
        if not is_road(x, y):
            return False
        return not any(
            car.is_active and car.x == x and car.y == y for car in board.cars
        )

    def draw(self, canvas: Canvas) -> None:
        if not self.is_active:
            return
        rgb = tuple(component / 255 for component in self.color)
        draw_x, draw_y = _car_centre(self.x, self.y)
        with canvas.translated(draw_x, draw_y):
            canvas.draw_car(draw_x, draw_y, 30, rgb)

    def decrease_fuel(self) -> None:
        """Burn the fuel for one move; only the player's car uses fuel."""
        if self.is_player_controlled:
            self.fuel_level -= FUEL_PER_MOVE

    def reset_car(self) -> None:
        """Put the car back at the start with a full tank and no jobs done."""
        self.x = 0
        self.y = 0
        self.direction = Direction.RIGHT
        self.fuel_level = FULL_TANK
        self.jobs_completed = 0

    def handle_collision(self, obj: GameObject | None) -> None:
        """React to running into something; a plain car ignores it."""


class _JobCar(Car):
    """A player's car that carries one fare at a time and pays for crashes."""

    fare_kind: ClassVar[str] = ""

    def __init__(self, x: int, y: int, player: Any) -> None:
        super().__init__(x, y, 5.0)
        self.player = player
        self._last_collided: GameObject | None = None
        self._cooldown = 0

    def _collide(
        self, obj: GameObject | None, carrying: bool, current: GameObject | None
    ) -> None:
        """Dock the player's score for hitting obstacles, traffic or the wrong fare."""
        if self.player is None or obj is None or obj is self._last_collided:
            return

        kind = getattr(obj, "kind", "")
        penalty = 0
        if kind == self.fare_kind:
            if obj.is_active and carrying and current is not obj:
                penalty = FARE_COLLISION_PENALTY
        elif kind == "Obstacle":
            penalty = OBSTACLE_PENALTY
        elif kind == "NPCCar":
            penalty = NPC_CAR_PENALTY

        if penalty:
            self.player.update_score(penalty)
            self._last_collided = obj
            self._cooldown = COLLISION_COOLDOWN
            play_sound("collision.wav")

        if self._cooldown > 0:
            self._cooldown -= 1
        else:
            self._last_collided = None


class TaxiCar(_JobCar):
    """The yellow taxi that picks passengers up and drops them at their destination."""

    kind: ClassVar[str] = "TaxiCar"
    fare_kind: ClassVar[str] = "Passenger"

    def __init__(self, x: int = 0, y: int = 0, player: Any = None) -> None:
        super().__init__(x, y, player)
        self.color = [255, 255, 0]
        self.current_passenger: Passenger | None = None
        self.has_passenger = False

    def pickup_passenger(self, passenger: Passenger | None) -> bool:
        """Take a passenger on board if the taxi is empty."""
        if self.has_passenger or passenger is None:
            return False
        self.current_passenger = passenger
        self.has_passenger = True
        passenger.set_picked_up(True)
        return True

    def drop_passenger(self) -> bool:
        """Drop the passenger if the taxi is at their destination, paying the fare."""
        passenger = self.current_passenger
        if not self.has_passenger or passenger is None:
            return False
        if (self.x, self.y) != (passenger.destination_x, passenger.destination_y):
            return False

        if self.player is not None:
            play_sound("dropped.wav")
            self.player.update_money(passenger.fare)
            self.player.update_score(TAXI_JOB_POINTS)

        passenger.ready_for_deletion = True
        self.has_passenger = False
        self.jobs_completed += 1
        self.current_passenger = None
        return True

    def draw(self, canvas: Canvas) -> None:
        if not self.is_active:
            return
        px, py = _car_centre(self.x, self.y)
        canvas.draw_car(px, py, 30, TAXI_DRAW_COLOR)
        if self.has_passenger:
            canvas.draw_circle(px, py - 15, 5, PASSENGER_INDICATOR_COLOR)

    def handle_collision(self, obj: GameObject | None) -> None:
        """Penalise crashes; bumping another passenger while carrying one costs points."""
        self._collide(obj, self.has_passenger, self.current_passenger)

    def reset_car(self) -> None:
        super().reset_car()
        self.has_passenger = False
        self.current_passenger = None


class DeliveryCar(_JobCar):
    """The blue van that picks packages up and delivers them."""

    kind: ClassVar[str] = "DeliveryCar"
    fare_kind: ClassVar[str] = "Package"

    def __init__(self, x: int = 0, y: int = 0, player: Any = None) -> None:
        super().__init__(x, y, player)
        self.color = [0, 0, 255]
        self.current_package: Package | None = None
        self.has_package = False

    def pickup_package(self, package: Package | None) -> bool:
        """Load a package if the van is empty."""
        if self.has_package or package is None:
            return False
        self.current_package = package
        self.has_package = True
        package.set_picked_up(True)
        return True

    def deliver_package(self) -> bool:
        """Hand the package over if the van is at its destination, collecting the fee."""
        package = self.current_package
        if not self.has_package or package is None:
            return False
        if (self.x, self.y) != (package.destination_x, package.destination_y):
            return False

        if self.player is not None:
            play_sound("dropped.wav")
            self.player.update_money(package.delivery_fee)
            self.player.update_score(DELIVERY_JOB_POINTS)

        package.ready_for_deletion = True
        self.has_package = False
        self.jobs_completed += 1
        log.debug("jobs completed: %d", self.jobs_completed)
        self.current_package = None
        return True

    def draw(self, canvas: Canvas) -> None:
        if not self.is_active:
            return
        px, py = _car_centre(self.x, self.y)
        canvas.draw_car(px, py, 30, DELIVERY_DRAW_COLOR)
        if self.has_package:
            canvas.draw_square(px - 5, py - 15, 10, PACKAGE_INDICATOR_COLOR)

    def handle_collision(self, obj: GameObject | None) -> None:
        """Penalise crashes; bumping another package while carrying one costs points."""
        self._collide(obj, self.has_package, self.current_package)

    def reset_car(self) -> None:
        super().reset_car()
        self.has_package = False
        self.current_package = None


class NPCCar(Car):
    """A computer-driven car that wanders the roads and works its way out of jams."""

    kind: ClassVar[str] = "NPCCar"

    # Shared by all traffic: only every second call to update_movement moves a car.
    _move_counter: ClassVar[int] = 0

    def __init__(self, x: int, y: int, rng: random.Random | None = None) -> None:
        super().__init__(x, y, 3.0)
        self._rng = rng if rng is not None else random.Random()
        self.movement_type = self._rng.randrange(3)
        self.stuck_frames = 0
        self.last_direction_change = 0
        self.color = [100 + self._rng.randrange(155) for _ in range(3)]
        self.direction = Direction(self._rng.randrange(4))
        self.is_player_controlled = False

    def update_movement(self, board: TrafficMap) -> None:
        """Advance the car one step, steering around whatever blocks it."""
        if not self.is_active:
            return

        NPCCar._move_counter += 1
        if NPCCar._move_counter < 2:
            return
        NPCCar._move_counter = 0

        old_position = (self.x, self.y)
        self.move_one_block(self.direction, board)

        if (self.x, self.y) == old_position:
            self.stuck_frames += 1
            if self.stuck_frames > 2:
                self.find_new_direction(board)
            if self.stuck_frames > 5 and self.attempt_escape(board):
                self.stuck_frames = 0
            if self.stuck_frames > 15:
                self.reset_car()
                self.stuck_frames = 0
        else:
            self.stuck_frames = 0
            self.last_direction_change = 0

        if self._rng.randrange(20) == 0 and self.stuck_frames == 0:
            self.find_new_direction(board)

    def move_one_block(self, direction: int, board: TrafficMap) -> None:
        """Drive one cell in the direction if it is free; traffic burns no fuel."""
        new_x, new_y = step(direction, self.x, self.y)
        if self.is_valid_position(new_x, new_y, board):
            self.x, self.y = new_x, new_y

    def is_valid_position(self, x: int, y: int, board: TrafficMap) -> bool:
        """Return whether the cell is a road with no other active car on it."""
        if not in_bounds(x, y) or not is_road(x, y):
            return False
        return not any(
            car is not self and car.is_active and car.x == x and car.y == y
            for car in board.cars
        )

    def find_new_direction(self, board: TrafficMap) -> None:
        """Pick a free direction at random, waiting ten calls between changes."""
        if self.last_direction_change < 10:
            self.last_direction_change += 1
            return

        directions = list(Direction)
        for i in range(len(directions)):
            j = self._rng.randrange(4)
            directions[i], directions[j] = directions[j], directions[i]

        for candidate in directions:
            if self.is_valid_position(*step(candidate, self.x, self.y), board):
                self.direction = candidate
                self.last_direction_change = 0
                return

        self.direction = Direction((self.direction + 2) % 4)
        self.last_direction_change = 0

    def attempt_escape(self, board: TrafficMap) -> bool:
        """Try each direction, starting with the current one, and move the first free way."""
        for turn in range(4):
            candidate = Direction((self.direction + turn) % 4)
            if self.is_valid_position(*step(candidate, self.x, self.y), board):
                self.direction = candidate
                self.move_one_block(candidate, board)
                return True
        return False

    def reset_car(self) -> None:
        super().reset_car()
        self.direction = Direction(self._rng.randrange(4))
        self.last_direction_change = 0

    def draw(self, canvas: Canvas) -> None:
        if not self.is_active:
            return
        px, py = _car_centre(self.x, self.y)
        rgb = tuple(component / 255 for component in self.color)
        canvas.draw_car(px, py, 30, rgb)


__all__ = ["Car", "TaxiCar", "DeliveryCar", "NPCCar"]