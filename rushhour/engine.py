"""Owns every part of the game and drives updates and rendering."""

from __future__ import annotations

import os
import random

from .board import Board
from .constants import (
    BOARD_PIXELS,
    CITY_GRID,
    HUD_BG_COLOR,
    WHITE,
    GameState,
)
from .game import Game
from .hud import HUD
from .inputs import InputManager
from .menu import Menu
from .player import Player
from .render import Canvas
from .scores import Leaderboard
from .sound import play_sound

JOBS_PER_LEVEL = 2


class GameEngine:
    """The game, the board, the player and the screens around them."""

    def __init__(
        self,
        leaderboard_path: str | os.PathLike[str] = "highscores.dat",
        rng: random.Random | None = None,
    ) -> None:
        self.rng = rng if rng is not None else random.Random()
        self.game = Game()
        self.player: Player | None = Player()
        self.player.change_role(self.game.game_mode)
        car = self.player.car
        if car is not None:
            car.x = 0
            car.y = 0
            car.is_active = True
            car.is_player_controlled = True
        self.board = Board(self, CITY_GRID, self.rng)
        self.input_manager = InputManager()
        self.hud = HUD(self.game, self.player)
        self.leaderboard = Leaderboard(leaderboard_path)
        self.menu = Menu(self, self.rng)

    def render(self, canvas: Canvas) -> None:
        """Draw the screen for the current state."""
        canvas.surface.fill((0, 0, 0))
        state = self.game.game_state

        if state == GameState.MENU:
            self.menu.draw(canvas)
        elif state in (GameState.PLAYING, GameState.PAUSED):
            self.board.draw(canvas)
            self.hud.draw(canvas)
            if self.menu.show_role_change:
                self.menu.draw(canvas)
            elif state == GameState.PAUSED:
                canvas.draw_rectangle(0, 0, BOARD_PIXELS, BOARD_PIXELS, HUD_BG_COLOR)
                canvas.draw_string(BOARD_PIXELS // 2 - 50, BOARD_PIXELS // 2, "PAUSED", WHITE)
        elif state == GameState.GAMEOVER:
            self.board.draw(canvas)
            self.hud.show_game_over(canvas)
            play_sound("gameover.wav")
            if not self.game.score_added_to_leaderboard and self.leaderboard.is_high_score(
                self.player.score
            ):
                self.leaderboard.add_score(self.player.name, self.player.score)
                self.game.score_added_to_leaderboard = True
        elif state == GameState.LEADERBOARD:
            self.menu.draw(canvas)
            self.leaderboard.display(canvas)

    def update(self) -> None:
        """Advance one game tick while playing and check for the end of the game."""
        if self.game.game_state != GameState.PLAYING:
            return
        self.game.current_time += 1
        self.board.update_board()
        self.game.check_time_limit()
        self.game.check_win_conditions(self.player)
        self.game.check_score(self.player)
        self.game.check_fuel(self.player)

        car = self.player.car
        if car.jobs_completed == JOBS_PER_LEVEL:
            self.board.increase_difficulty()
            car.jobs_completed = 0

    def switch_game_state(self, new_state: int) -> None:
        """Change state; entering play resets the player and lays out a new board."""
        new_state = GameState(new_state)
        self.game.game_state = new_state
        if new_state != GameState.PLAYING:
            return
        self.menu.is_active = False
        if self.player is None:
            self.player = Player()
            self.hud = HUD(self.game, self.player)
        self.player.reset_player()
        self.board.generate_board()
        self.game.score_added_to_leaderboard = False