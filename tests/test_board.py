import random
from types import SimpleNamespace
from unittest import mock

import pygame

from rushhour.board import Board
from rushhour.cars import OBSTACLE_PENALTY
from rushhour.constants import CITY_GRID, GRID_SIZE, MAX_CARS, GameMode
from rushhour.game import Game
from rushhour.objects import Obstacle
from rushhour.player import Player
from rushhour.render import Canvas


def make_board(mode=GameMode.TAXI, seed=7, with_game=True):
    game = Game()
    game.game_mode = mode
    player = Player()
    player.change_role(mode)
    engine = SimpleNamespace(game=game if with_game else None, player=player)
    return Board(engine, CITY_GRID, random.Random(seed)), engine


def test_every_cell_becomes_a_road_or_a_building():
    board, _ = make_board()
    assert len(board.buildings) + len(board.roads) == GRID_SIZE * GRID_SIZE
    assert len(board.buildings) == sum(map(sum, CITY_GRID))
    assert all(CITY_GRID[b.x][b.y] == 1 for b in board.buildings)


def test_role_change_station_bottom_left():
    board, _ = make_board()
    station = board.role_change_station
    assert (station.x, station.y) == (0, GRID_SIZE - 1)
    assert station.is_active


def test_fuel_stations_on_roads_away_from_start():
    board, _ = make_board()
    assert len(board.fuel_stations) == 3
    for station in board.fuel_stations:
        assert CITY_GRID[station.x][station.y] == 0
        assert (station.x, station.y) != (0, 0)
        assert station.is_active


def test_obstacles_three_or_four_on_roads():
    for seed in range(5):
        board, _ = make_board(seed=seed)
        assert len(board.obstacles) in (3, 4)
        assert all(CITY_GRID[o.x][o.y] == 0 for o in board.obstacles)


def test_taxi_mode_places_passengers_only():
    board, _ = make_board(GameMode.TAXI)
    assert len(board.passengers) == 2
    assert board.packages == []
    for p in board.passengers:
        assert CITY_GRID[p.x][p.y] == 0


def test_delivery_mode_places_packages_only():
    board, _ = make_board(GameMode.DELIVERY)
    assert len(board.packages) == 2
    assert board.passengers == []


def test_no_fares_without_game():
    board, _ = make_board(with_game=False)
    assert board.passengers == [] and board.packages == []


def test_traffic_keeps_away_from_start():
    board, _ = make_board()
    assert len(board.cars) == 3
    positions = [(c.x, c.y) for c in board.cars]
    assert len(set(positions)) == len(positions)
    for x, y in positions:
        assert CITY_GRID[x][y] == 0
        assert not (x < 2 and y < 2)


def test_is_position_clear():
    board, _ = make_board()
    assert board.is_position_clear(1, 2) is False
    assert board.is_position_clear(0, GRID_SIZE - 1) is False
    obstacle = board.obstacles[0]
    assert board.is_position_clear(obstacle.x, obstacle.y) is False
    station = board.fuel_stations[0]
    assert board.is_position_clear(station.x, station.y) is False
    board.obstacles = []
    board.fuel_stations = []
    assert board.is_position_clear(0, 0) is True


def test_add_car_stops_at_limit():
    board, _ = make_board()
    for _ in range(MAX_CARS * 2):
        board.add_car()
    assert len(board.cars) == MAX_CARS
    assert len({(c.x, c.y) for c in board.cars}) == MAX_CARS


def test_increase_difficulty_caps_speed_and_adds_car():
    board, _ = make_board()
    for car in board.cars:
        car.speed = 4.9
    before = len(board.cars)
    board.increase_difficulty()
    assert len(board.cars) == before + 1
    assert all(car.speed == 5.0 for car in board.cars[:before])


def test_update_removes_finished_passengers():
    board, _ = make_board()
    board.cars = []
    board.obstacles = []
    board.passengers[0].ready_for_deletion = True
    keep = board.passengers[1]
    board.update_board()
    assert board.passengers == [keep]


def test_update_refuels_player_on_station():
    board, engine = make_board()
    board.cars = []
    board.obstacles = []
    station = board.fuel_stations[0]
    car = engine.player.car
    car.x, car.y = station.x, station.y
    car.fuel_level = 50.0
    engine.player.money = 1000.0
    board.update_board()
    assert car.fuel_level == car.max_fuel
    assert engine.player.money == 1000.0 - station.calculate_cost(50.0)


def test_update_penalises_obstacle_collision():
    board, engine = make_board()
    board.cars = []
    board.obstacles = [Obstacle(0, 0, 1)]
    with mock.patch("subprocess.run") as run:
        board.update_board()
    assert engine.player.score == OBSTACLE_PENALTY
    assert run.called


def test_cleanup_empties_board():
    board, _ = make_board()
    board.cleanup()
    assert board.role_change_station is None
    for group in (board.buildings, board.roads, board.fuel_stations, board.cars,
                  board.obstacles, board.passengers, board.packages):
        assert group == []


def test_clear_mode_objects_follows_mode():
    board, engine = make_board(GameMode.TAXI)
    engine.game.game_mode = GameMode.DELIVERY
    board.clear_mode_objects()
    assert board.passengers == []
    assert len(board.packages) == 2
    for package in board.packages:
        assert CITY_GRID[package.destination_x][package.destination_y] == 0


def test_draw_paints_roads_below_hud():
    board, _ = make_board()
    surface = pygame.Surface((board.width, board.height + 40))
    surface.fill((50, 50, 50))
    board.draw(Canvas(surface))
    assert tuple(surface.get_at((2, 42)))[:3] == (255, 255, 255)
    assert tuple(surface.get_at((2, 2)))[:3] == (50, 50, 50)