from types import SimpleNamespace

import pytest

from rushhour.constants import GameMode, GameState
from rushhour.game import Game


def player(score=0, fuel=100.0):
    return SimpleNamespace(score=score, car=SimpleNamespace(fuel_level=fuel))


def test_new_game_defaults():
    game = Game()
    assert game.game_state == GameState.MENU
    assert game.game_mode == GameMode.TAXI
    assert game.time_limit == 180
    assert game.is_game_over is False


def test_start_game_records_clock_and_plays():
    game = Game()
    game.current_time = 12
    game.is_game_over = True
    game.start_game(5000)
    assert game.game_state == GameState.PLAYING
    assert game.start_time == 5000
    assert game.current_time == 0
    assert game.is_game_over is False


def test_pause_and_resume():
    game = Game()
    game.start_game(0)
    game.pause_game()
    assert game.game_state == GameState.PAUSED
    game.resume_game()
    assert game.game_state == GameState.PLAYING


def test_pause_outside_play_does_nothing():
    game = Game()
    game.pause_game()
    assert game.game_state == GameState.MENU
    game.resume_game()
    assert game.game_state == GameState.MENU


def test_end_game():
    game = Game()
    game.end_game()
    assert game.is_game_over
    assert game.game_state == GameState.GAMEOVER


def test_switch_mode_toggles():
    game = Game()
    game.switch_game_mode()
    assert game.game_mode == GameMode.DELIVERY
    game.switch_game_mode()
    assert game.game_mode == GameMode.TAXI


@pytest.mark.parametrize("score, over", [(-1, True), (0, False), (5, False)])
def test_check_score(score, over):
    game = Game()
    game.start_game(0)
    game.check_score(player(score=score))
    assert game.is_game_over is over


@pytest.mark.parametrize("fuel, over", [(0.0, True), (-0.5, True), (0.5, False)])
def test_check_fuel(fuel, over):
    game = Game()
    game.start_game(0)
    game.check_fuel(player(fuel=fuel))
    assert game.is_game_over is over


@pytest.mark.parametrize("score, over", [(100, True), (99, False)])
def test_check_win_conditions(score, over):
    game = Game()
    game.start_game(0)
    game.check_win_conditions(player(score=score))
    assert game.is_game_over is over


def test_check_time_limit():
    game = Game()
    game.start_game(0)
    game.current_time = game.time_limit - 1
    game.check_time_limit()
    assert game.game_state == GameState.PLAYING
    game.current_time = game.time_limit
    game.check_time_limit()
    assert game.game_state == GameState.GAMEOVER