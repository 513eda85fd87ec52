"""Game session state: mode, state machine, timer and end conditions."""

from __future__ import annotations

import logging
from typing import Any

from .constants import GameMode, GameState

log = logging.getLogger(__name__)

TIME_LIMIT = 180
WINNING_SCORE = 100


class Game:
    """One play session: current mode, state and elapsed time."""

    def __init__(self) -> None:
        self.start_time = 0
        self.current_time = 0
        self.is_game_over = False
        self.game_mode = GameMode.TAXI
        self.game_state = GameState.MENU
        self.time_limit = TIME_LIMIT
        self.score_added_to_leaderboard = False

    def start_game(self, now: int) -> None:
        """Begin playing; `now` is the elapsed clock in milliseconds."""
        self.current_time = 0
        self.is_game_over = False
        self.game_state = GameState.PLAYING
        self.start_time = now
        log.info("game started in state %s", self.game_state.name)

    def end_game(self) -> None:
        """Finish the session."""
        self.is_game_over = True
        self.game_state = GameState.GAMEOVER

    def pause_game(self) -> None:
        """Pause if currently playing."""
        if self.game_state == GameState.PLAYING:
            self.game_state = GameState.PAUSED

    def resume_game(self) -> None:
        """Resume if currently paused."""
        if self.game_state == GameState.PAUSED:
            self.game_state = GameState.PLAYING

    def check_score(self, player: Any) -> None:
        """End the game when the player's score has gone negative."""
        if player.score < 0:
            self.end_game()

    def check_fuel(self, player: Any) -> None:
        """End the game when the player's car has run out of fuel."""
        if player.car.fuel_level <= 0:
            self.end_game()

    def switch_game_mode(self) -> None:
        """Toggle between taxi and delivery."""
        self.game_mode = (
            GameMode.DELIVERY if self.game_mode == GameMode.TAXI else GameMode.TAXI
        )

    def check_win_conditions(self, player: Any) -> None:
        """End the game once the player reaches the winning score."""
        if player.score >= WINNING_SCORE:
            self.end_game()

    def check_time_limit(self) -> None:
        """End the game when the time limit has been reached."""
        if self.current_time >= self.time_limit:
            self.end_game()