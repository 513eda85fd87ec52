import random
from types import SimpleNamespace
from unittest import mock

import pygame
import pytest

from rushhour.cars import Car, DeliveryCar, NPCCar, TaxiCar
from rushhour.constants import CELL_SIZE, Direction, is_road
from rushhour.objects import Obstacle, Package, Passenger
from rushhour.player import Player
from rushhour.render import Canvas


@pytest.fixture(autouse=True)
def quiet_sound():
    with mock.patch("subprocess.run") as run:
        run.return_value = SimpleNamespace(returncode=0)
        yield run


def empty_board(*cars):
    return SimpleNamespace(cars=list(cars))


def make_passenger(x, y, dest_x, dest_y):
    return Passenger(x, y, dest_x, dest_y, random.Random(1))


def make_package(x, y, dest_x, dest_y):
    return Package(x, y, dest_x, dest_y, random.Random(1))


def test_move_onto_road_changes_position_and_burns_player_fuel():
    car = Car(0, 0, 5.0)
    car.is_player_controlled = True
    car.move(Direction.RIGHT, empty_board())
    assert (car.x, car.y) == (1, 0)
    assert car.direction == Direction.RIGHT
    assert car.fuel_level < car.max_fuel


def test_move_of_non_player_car_keeps_fuel():
    car = Car(0, 0, 5.0)
    car.move(Direction.DOWN, empty_board())
    assert (car.x, car.y) == (0, 1)
    assert car.fuel_level == car.max_fuel


def test_move_off_grid_is_refused_but_direction_turns():
    car = Car(0, 0, 5.0)
    car.is_player_controlled = True
    car.move(Direction.UP, empty_board())
    assert (car.x, car.y) == (0, 0)
    assert car.direction == Direction.UP
    assert car.fuel_level == car.max_fuel


def test_move_into_building_is_refused():
    assert not is_road(1, 2)
    car = Car(1, 1, 5.0)
    car.move(Direction.DOWN, empty_board())
    assert (car.x, car.y) == (1, 1)


def test_active_car_blocks_but_inactive_does_not():
    blocker = NPCCar(1, 0, random.Random(3))
    car = Car(0, 0, 5.0)
    car.move(Direction.RIGHT, empty_board(blocker))
    assert (car.x, car.y) == (0, 0)
    blocker.is_active = False
    car.move(Direction.RIGHT, empty_board(blocker))
    assert (car.x, car.y) == (1, 0)


def test_reset_car_restores_start_state():
    car = Car(4, 4, 5.0)
    car.fuel_level = 10.0
    car.jobs_completed = 3
    car.direction = Direction.LEFT
    car.reset_car()
    assert (car.x, car.y) == (0, 0)
    assert car.fuel_level == car.max_fuel
    assert car.jobs_completed == 0
    assert car.direction == Direction.RIGHT


def test_taxi_pickup_and_drop_pays_player():
    player = Player("Ann")
    taxi = TaxiCar(0, 5, player)
    passenger = make_passenger(0, 5, 0, 6)
    assert taxi.pickup_passenger(passenger)
    assert passenger.is_picked_up
    assert not taxi.pickup_passenger(make_passenger(0, 5, 0, 6))

    assert not taxi.drop_passenger()
    taxi.y = 6
    assert taxi.drop_passenger()
    assert player.money == passenger.fare
    assert player.score == 10
    assert passenger.ready_for_deletion
    assert taxi.jobs_completed == 1
    assert taxi.current_passenger is None
    assert not taxi.has_passenger


def test_taxi_drop_without_passenger_fails():
    taxi = TaxiCar(0, 0, Player())
    assert not taxi.drop_passenger()
    assert taxi.jobs_completed == 0


def test_delivery_pickup_and_deliver_pays_player():
    player = Player("Bo")
    van = DeliveryCar(19, 3, player)
    package = make_package(19, 3, 19, 4)
    assert van.pickup_package(package)
    assert not van.pickup_package(None)
    van.y = 4
    assert van.deliver_package()
    assert player.money == package.delivery_fee
    assert player.score == 20
    assert package.ready_for_deletion
    assert van.jobs_completed == 1
    assert not van.deliver_package()


def test_taxi_collision_penalties_and_cooldown():
    player = Player()
    taxi = TaxiCar(0, 0, player)
    obstacle = Obstacle(0, 0, 0)
    taxi.handle_collision(obstacle)
    assert player.score == -2
    taxi.handle_collision(obstacle)
    assert player.score == -2
    taxi.handle_collision(NPCCar(0, 0, random.Random(2)))
    assert player.score == -5


def test_taxi_passenger_collision_only_when_carrying_another():
    player = Player()
    taxi = TaxiCar(0, 0, player)
    waiting = make_passenger(0, 0, 0, 3)
    taxi.handle_collision(waiting)
    assert player.score == 0
    taxi.pickup_passenger(make_passenger(0, 0, 0, 4))
    taxi.handle_collision(waiting)
    assert player.score == -5


def test_delivery_package_collision_penalty():
    player = Player()
    van = DeliveryCar(0, 0, player)
    van.pickup_package(make_package(0, 0, 0, 4))
    van.handle_collision(make_package(0, 0, 0, 5))
    assert player.score == -5


def test_collision_without_player_is_ignored():
    taxi = TaxiCar(0, 0, None)
    taxi.handle_collision(Obstacle(0, 0, 1))
    assert taxi.jobs_completed == 0
    assert taxi.player is None


def test_reset_clears_cargo():
    taxi = TaxiCar(3, 0, Player())
    taxi.pickup_passenger(make_passenger(3, 0, 0, 0))
    taxi.reset_car()
    assert not taxi.has_passenger
    assert taxi.current_passenger is None
    van = DeliveryCar(3, 0, Player())
    van.pickup_package(make_package(3, 0, 0, 0))
    van.reset_car()
    assert not van.has_package
    assert (van.x, van.y) == (0, 0)


def test_npc_car_random_setup_is_in_range():
    car = NPCCar(5, 0, random.Random(7))
    assert car.speed == 3.0
    assert all(100 <= component <= 254 for component in car.color)
    assert car.direction in set(Direction)
    assert 0 <= car.movement_type < 3
    assert not car.is_player_controlled


def test_npc_same_seed_same_car():
    a = NPCCar(5, 0, random.Random(11))
    b = NPCCar(5, 0, random.Random(11))
    assert a.color == b.color
    assert a.direction == b.direction


def test_npc_valid_position_ignores_itself():
    car = NPCCar(0, 0, random.Random(1))
    board = empty_board(car)
    assert car.is_valid_position(0, 0, board)
    other = NPCCar(0, 1, random.Random(2))
    board.cars.append(other)
    assert not car.is_valid_position(0, 1, board)
    assert not car.is_valid_position(-1, 0, board)


def test_npc_attempt_escape_turns_to_first_free_direction():
    car = NPCCar(0, 0, random.Random(1))
    car.direction = Direction.UP
    assert car.attempt_escape(empty_board(car))
    assert car.direction == Direction.DOWN
    assert (car.x, car.y) == (0, 1)


def test_npc_attempt_escape_fails_when_boxed_in():
    car = NPCCar(0, 0, random.Random(1))
    board = empty_board(car, NPCCar(1, 0, random.Random(2)), NPCCar(0, 1, random.Random(3)))
    assert not car.attempt_escape(board)
    assert (car.x, car.y) == (0, 0)


def test_npc_find_new_direction_waits_before_turning():
    car = NPCCar(0, 0, random.Random(1))
    car.direction = Direction.UP
    car.find_new_direction(empty_board(car))
    assert car.direction == Direction.UP
    assert car.last_direction_change == 1


def test_npc_find_new_direction_picks_free_way():
    car = NPCCar(0, 0, random.Random(5))
    car.last_direction_change = 10
    board = empty_board(car)
    car.find_new_direction(board)
    assert car.direction in (Direction.DOWN, Direction.RIGHT)
    assert car.last_direction_change == 0


def test_npc_find_new_direction_when_boxed_in_rotates_by_two():
    car = NPCCar(0, 0, random.Random(5))
    car.direction = Direction.UP
    car.last_direction_change = 10
    board = empty_board(car, NPCCar(1, 0, random.Random(2)), NPCCar(0, 1, random.Random(3)))
    car.find_new_direction(board)
    assert car.direction == Direction.LEFT


def test_npc_update_moves_once_every_two_calls():
    car = NPCCar(0, 5, random.Random(4))
    car.direction = Direction.DOWN
    board = empty_board(car)
    car.update_movement(board)
    car.update_movement(board)
    assert (car.x, car.y) == (0, 6)
    assert car.stuck_frames == 0


def test_npc_inactive_does_not_move():
    car = NPCCar(0, 5, random.Random(4))
    car.direction = Direction.DOWN
    car.is_active = False
    for _ in range(4):
        car.update_movement(empty_board(car))
    assert (car.x, car.y) == (0, 5)


def test_npc_reset_car_goes_home():
    car = NPCCar(7, 0, random.Random(4))
    car.last_direction_change = 5
    car.reset_car()
    assert (car.x, car.y) == (0, 0)
    assert car.last_direction_change == 0
    assert car.fuel_level == car.max_fuel


def _canvas():
    return Canvas(pygame.Surface((CELL_SIZE * 20, CELL_SIZE * 21)))


def test_taxi_draws_yellow_body():
    canvas = _canvas()
    taxi = TaxiCar(2, 2, None)
    taxi.draw(canvas)
    centre_x = 2 * CELL_SIZE + CELL_SIZE // 2
    centre_y = 2 * CELL_SIZE + CELL_SIZE // 2
    assert tuple(canvas.surface.get_at((centre_x - 13, centre_y)))[:3] == (255, 255, 0)


def test_inactive_car_draws_nothing():
    canvas = _canvas()
    van = DeliveryCar(2, 2, None)
    van.is_active = False
    van.draw(canvas)
    centre = 2 * CELL_SIZE + CELL_SIZE // 2
    assert tuple(canvas.surface.get_at((centre - 13, centre)))[:3] == (0, 0, 0)