"""The city board: the grid of roads and buildings and everything placed on it."""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from typing import Any

from .cars import DeliveryCar, NPCCar, TaxiCar
from .constants import (
    CELL_SIZE,
    CITY_GRID,
    GRID_SIZE,
    HUD_HEIGHT,
    MAX_BUILDINGS,
    MAX_CARS,
    MAX_OBSTACLES,
    MAX_PACKAGES,
    MAX_PASSENGERS,
    MAX_ROADS,
    MAX_STATIONS,
    GameMode,
)
from .objects import (
    Building,
    FuelStation,
    Obstacle,
    Package,
    Passenger,
    Road,
    Station,
)
from .render import Canvas

log = logging.getLogger(__name__)

MAX_PLACEMENT_ATTEMPTS = 100
FUEL_STATION_COUNT = 3
INITIAL_CARS = 3
FARES_PER_MODE = 2
MAX_NPC_SPEED = 5.0
SPEED_STEP = 0.2


class Board:
    """The city: static cells, fuel stations, obstacles, fares and traffic."""

    def __init__(
        self,
        engine: Any,
        grid: Sequence[Sequence[int]] = CITY_GRID,
        rng: random.Random | None = None,
    ) -> None:
        self.engine = engine
        self.width = GRID_SIZE * CELL_SIZE
        self.height = GRID_SIZE * CELL_SIZE
        self.grid = grid
        self.rng = rng if rng is not None else random.Random()
        self.buildings: list[Building] = []
        self.roads: list[Road] = []
        self.fuel_stations: list[FuelStation] = []
        self.cars: list[NPCCar] = []
        self.obstacles: list[Obstacle] = []
        self.passengers: list[Passenger] = []
        self.packages: list[Package] = []
        self.role_change_station: Station | None = None
        self.generate_board()

    def _game(self) -> Any:
        return getattr(self.engine, "game", None) if self.engine is not None else None

    def _player(self) -> Any:
        return getattr(self.engine, "player", None) if self.engine is not None else None

    def _random_cell(self) -> tuple[int, int]:
        return self.rng.randrange(GRID_SIZE), self.rng.randrange(GRID_SIZE)

    def _taxi_mode(self) -> bool:
        return self._game().game_mode == GameMode.TAXI

    def generate_board(self) -> None:
        """Lay out a fresh city with stations, obstacles, fares and traffic."""
        self.cleanup()

        for x in range(GRID_SIZE):
            for y in range(GRID_SIZE):
                if self.grid[x][y] == 1 and len(self.buildings) < MAX_BUILDINGS:
                    self.buildings.append(Building(x, y))
                elif len(self.roads) < MAX_ROADS:
                    self.roads.append(Road(x, y))

        self.role_change_station = Station(0, GRID_SIZE - 1, self.engine)
        self.role_change_station.is_active = True

        for _ in range(FUEL_STATION_COUNT):
            if len(self.fuel_stations) >= MAX_STATIONS:
                break
            while True:
                x, y = self._random_cell()
                # Keep fuel stations off the cell where every car starts.
                if self.grid[x][y] == 0 and (x, y) != (0, 0):
                    break
            self.fuel_stations.append(FuelStation(x, y))
        for station in self.fuel_stations:
            station.is_active = True

        placed = 0
        while placed < 3 + self.rng.randrange(2) and len(self.obstacles) < MAX_OBSTACLES:
            self.add_obstacle()
            placed += 1

        game = self._game()
        if game is not None:
            add_fare = self.add_passenger if game.game_mode == GameMode.TAXI else self.add_package
            for _ in range(FARES_PER_MODE):
                add_fare()

        for _ in range(INITIAL_CARS):
            if len(self.cars) >= MAX_CARS:
                break
            self.add_car()

    def update_board(self) -> None:
        """Run one frame: move traffic, drop finished fares, refuel and resolve crashes."""
        for car in self.cars:
            if car.is_active:
                car.update_movement(self)

        if self._taxi_mode():
            self.passengers = [p for p in self.passengers if not p.ready_for_deletion]
        else:
            self.packages = [p for p in self.packages if not p.ready_for_deletion]

        player = self._player()
        if player is None or player.car is None:
            return
        player_car = player.car

        for station in self.fuel_stations:
            if station.is_active and (station.x, station.y) == (player_car.x, player_car.y):
                affordable = player.money / station.fuel_price
                needed = player_car.max_fuel - player_car.fuel_level
                amount = min(affordable, needed)
                if amount > 0:
                    station.refuel_car(player_car, player, amount)

        for obstacle in self.obstacles:
            if obstacle.is_active and player_car.check_collision(obstacle):
                player_car.handle_collision(obstacle)

        for car in self.cars:
            if car is not player_car and car.is_active and player_car.check_collision(car):
                player_car.handle_collision(car)

        if self._taxi_mode():
            if isinstance(player_car, TaxiCar):
                for passenger in self.passengers:
                    if passenger.is_active and player_car.check_collision(passenger):
                        player_car.handle_collision(passenger)
        elif isinstance(player_car, DeliveryCar):
            for package in self.packages:
                if package.is_active and player_car.check_collision(package):
                    player_car.handle_collision(package)

    def add_car(self) -> None:
        """Add a computer car on a free road cell away from the player's start."""
        if len(self.cars) >= MAX_CARS:
            return
        for _ in range(MAX_PLACEMENT_ATTEMPTS):
            x, y = self._random_cell()
            if self.grid[x][y] != 0 or (x < 2 and y < 2):
                continue
            if any(car.x == x and car.y == y for car in self.cars):
                continue
            self.cars.append(NPCCar(x, y, self.rng))
            return

    def _fare_cell(self) -> tuple[int, int] | None:
        """Find a clear road cell; a hit on the last allowed attempt does not count."""
        for attempt in range(1, MAX_PLACEMENT_ATTEMPTS + 1):
            x, y = self._random_cell()
            if self.is_position_clear(x, y) and self.grid[x][y] == 0:
                return (x, y) if attempt < MAX_PLACEMENT_ATTEMPTS else None
        return None

    def add_passenger(self) -> None:
        """Place a waiting passenger with a destination."""
        if len(self.passengers) >= MAX_PASSENGERS:
            return
        cell = self._fare_cell()
        if cell is None:
            return
        passenger = Passenger(cell[0], cell[1], 0, 0, self.rng)
        passenger.generate_destination(self)
        self.passengers.append(passenger)

    def add_package(self) -> None:
        """Place a package for pickup with a destination."""
        if len(self.packages) >= MAX_PACKAGES:
            return
        cell = self._fare_cell()
        if cell is None:
            return
        package = Package(cell[0], cell[1], 0, 0, self.rng)
        package.generate_destination(self)
        self.packages.append(package)

    def increase_difficulty(self) -> None:
        """Speed up the traffic, up to a limit, and add one more car."""
        for car in self.cars:
            car.speed = min(car.speed + SPEED_STEP, MAX_NPC_SPEED)
        if len(self.cars) < MAX_CARS:
            self.add_car()

    def add_obstacle(self) -> None:
        """Put a tree or a box on a clear cell."""
        if len(self.obstacles) >= MAX_OBSTACLES:
            return
        for _ in range(MAX_PLACEMENT_ATTEMPTS):
            x, y = self._random_cell()
            if self.is_position_clear(x, y):
                self.obstacles.append(Obstacle(x, y, self.rng.randrange(2)))
                return
        log.warning("failed to place obstacle after %d attempts", MAX_PLACEMENT_ATTEMPTS)

    def is_position_clear(self, x: int, y: int) -> bool:
        """Return whether the cell is a road not taken by a station, obstacle or building."""
        if self.grid[x][y] != 0:
            return False
        station = self.role_change_station
        if station is not None and (station.x, station.y) == (x, y):
            return False
        for group in (self.obstacles, self.buildings, self.fuel_stations):
            if any(obj.is_active and obj.x == x and obj.y == y for obj in group):
                return False
        return True

    def draw(self, canvas: Canvas) -> None:
        """Draw the city, the fares, the traffic and finally the player's car."""
        if self.engine is None:
            return
        with canvas.translated(0, HUD_HEIGHT):
            for group in (self.roads, self.buildings):
                for obj in group:
                    if obj.is_active:
                        obj.draw(canvas)
            if self.role_change_station is not None and self.role_change_station.is_active:
                self.role_change_station.draw(canvas)
            for group in (self.fuel_stations, self.obstacles):
                for obj in group:
                    if obj.is_active:
                        obj.draw(canvas)

            player = self._player()
            player_car = player.car if player is not None else None
            if self._taxi_mode():
                for passenger in self.passengers:
                    if passenger.is_active:
                        passenger.draw(canvas)
                if isinstance(player_car, TaxiCar) and player_car.has_passenger:
                    cargo = player_car.current_passenger
                else:
                    cargo = None
            else:
                for package in self.packages:
                    if package.is_active:
                        package.draw(canvas)
                if isinstance(player_car, DeliveryCar) and player_car.has_package:
                    cargo = player_car.current_package
                else:
                    cargo = None
            if cargo is not None:
                dx, dy = canvas.offset
                with canvas.translated(-dx, -dy):
                    cargo.highlight_destination(canvas)

            for car in self.cars:
                if car.is_active:
                    car.draw(canvas)
            if player_car is not None:
                player_car.draw(canvas)

    def cleanup(self) -> None:
        """Remove everything from the board."""
        for passenger in self.passengers:
            for car in self.cars:
                if isinstance(car, TaxiCar) and car.current_passenger is passenger:
                    car.current_passenger = None
                    car.has_passenger = False
        for package in self.packages:
            for car in self.cars:
                if isinstance(car, DeliveryCar) and car.current_package is package:
                    car.current_package = None
                    car.has_package = False
        self.buildings = []
        self.roads = []
        self.fuel_stations = []
        self.cars = []
        self.obstacles = []
        self.passengers = []
        self.packages = []
        self.role_change_station = None

    def clear_mode_objects(self) -> None:
        """Drop all fares and place new ones for the current mode."""
        self.passengers = []
        self.packages = []
        add_fare = self.add_passenger if self._taxi_mode() else self.add_package
        for _ in range(FARES_PER_MODE):
            add_fare()