"""The heads-up display: score, money, fuel, time and mode above the board."""

from __future__ import annotations

from typing import Any

from .constants import (
    BOARD_PIXELS,
    GREEN,
    HUD_BG_COLOR,
    HUD_HEIGHT,
    HUD_TEXT_COLOR,
    RED,
    GameMode,
    GameState,
)
from .render import Canvas

SEGMENTS = 5
LOW_FUEL = 0.2
FUEL_BAR_LENGTH = 50


def format_time(remaining: int) -> str:
    """Format seconds as minutes:seconds, padding seconds below ten with a zero."""
    minutes = int(remaining / 60)
    seconds = remaining - minutes * 60
    pad = "0" if seconds < 10 else ""
    return f"{minutes}:{pad}{seconds}"


class HUD:
    """Status bar shown while playing, and the game-over overlay."""

    def __init__(self, game: Any, player: Any) -> None:
        self.game = game
        self.player = player

    def status_texts(self) -> dict[str, str]:
        """Return the texts shown in the bar; fuel is left out when there is no car."""
        texts = {
            "score": f"SCORE: {self.player.score}",
            "money": f"MONEY: ${int(self.player.money)}",
        }
        if self.player.car is not None:
            texts["fuel"] = f"FUEL: {int(self.player.car.fuel_level)}%"
        remaining = self.game.time_limit - self.game.current_time
        texts["time"] = f"TIME: {format_time(remaining)}"
        texts["mode"] = "TAXI" if self.game.game_mode == GameMode.TAXI else "DELIVERY"
        return texts

    def draw(self, canvas: Canvas) -> None:
        """Draw the status bar; nothing is shown unless the game is being played."""
        if self.game.game_state != GameState.PLAYING:
            return
        canvas.draw_rectangle(0, 0, BOARD_PIXELS, HUD_HEIGHT, HUD_BG_COLOR)
        segment = BOARD_PIXELS // SEGMENTS
        text_y = HUD_HEIGHT // 2 + 5
        texts = self.status_texts()
        positions = {
            "score": 10,
            "money": segment,
            "fuel": segment * 2,
            "time": segment * 3,
            "mode": segment * 4 + 10,
        }
        for key, text in texts.items():
            canvas.draw_string(positions[key], text_y, text, HUD_TEXT_COLOR)

        if self.player.car is not None:
            fraction = self.player.car.fuel_level / 100.0
            canvas.draw_rectangle(
                positions["fuel"],
                text_y + 10,
                int(FUEL_BAR_LENGTH * fraction),
                5,
                RED if fraction < LOW_FUEL else GREEN,
            )

    def show_game_over(self, canvas: Canvas) -> None:
        """Cover the board and show the final score."""
        canvas.draw_rectangle(0, HUD_HEIGHT, BOARD_PIXELS, BOARD_PIXELS, HUD_BG_COLOR)
        centre_y = HUD_HEIGHT + BOARD_PIXELS // 2
        canvas.draw_string(BOARD_PIXELS // 2 - 80, centre_y - 30, "GAME OVER", RED)
        canvas.draw_string(
            BOARD_PIXELS // 2 - 100,
            centre_y + 20,
            f"FINAL SCORE: {self.player.score}",
            HUD_TEXT_COLOR,
        )