"""The start menu, the mode selection, name entry and the role-change menu."""

from __future__ import annotations

import logging
import random
from enum import IntEnum
from typing import Any

from .constants import (
    BLACK,
    BOARD_PIXELS,
    HUD_BG_COLOR,
    MENU_BG_COLOR,
    MENU_TEXT_COLOR,
    GameMode,
    GameState,
)
from .render import Canvas

log = logging.getLogger(__name__)

START_ITEMS = ("1. Start Game", "2. View Leaderboard")
MODE_ITEMS = ("1. Taxi Driver", "2. Delivery Driver", "3. Random Selection")


class MenuScreen(IntEnum):
    """Which page of the menu is showing."""

    START = 0
    MODE_SELECTION = 1


class Menu:
    """Menu pages and the choices the player has made in them."""

    def __init__(self, engine: Any = None, rng: random.Random | None = None) -> None:
        self.engine = engine
        self.rng = rng if rng is not None else random.Random()
        self.current_selection = 0
        self.menu_state = MenuScreen.START
        self.is_active = True
        self.mode_selection = int(GameMode.TAXI)
        self.show_role_change = False
        self.name_input_mode = False
        self.name_input = ""

    def draw(self, canvas: Canvas) -> None:
        """Draw whichever menu page is current; nothing when the menu is closed."""
        if not self.is_active and not self.show_role_change:
            return
        canvas.draw_rectangle(0, 0, BOARD_PIXELS, BOARD_PIXELS, MENU_BG_COLOR)
        if self.show_role_change:
            self._draw_role_change(canvas)
        elif self.name_input_mode:
            self._draw_name_input(canvas)
        elif self.menu_state == MenuScreen.START:
            self._draw_items(canvas, "RUSH HOUR", START_ITEMS)
        else:
            self._draw_items(canvas, "SELECT GAME MODE", MODE_ITEMS)

    @staticmethod
    def _draw_items(canvas: Canvas, title: str, items: tuple[str, ...]) -> None:
        centre = BOARD_PIXELS // 2
        canvas.draw_string(centre - 100, 100, title, MENU_TEXT_COLOR)
        for row, item in enumerate(items):
            canvas.draw_string(centre - 50, 200 + row * 50, item, MENU_TEXT_COLOR)

    def _draw_name_input(self, canvas: Canvas) -> None:
        centre = BOARD_PIXELS // 2
        canvas.draw_string(centre - 100, 150, "ENTER YOUR NAME:", MENU_TEXT_COLOR)
        canvas.draw_string(centre - 50, 200, self.name_input, MENU_TEXT_COLOR)
        canvas.draw_string(centre - 120, 250, "Press ENTER when done", MENU_TEXT_COLOR)

    def _draw_role_change(self, canvas: Canvas) -> None:
        canvas.draw_rectangle(100, 100, 400, 300, HUD_BG_COLOR)
        canvas.draw_string(150, 150, "SELECT YOUR NEW ROLE:", BLACK)
        canvas.draw_string(150, 200, "1. Taxi Driver", BLACK)
        canvas.draw_string(150, 250, "2. Delivery Driver", BLACK)

    def handle_input(self, key: int | str) -> None:
        """React to the keys 1, 2 and 3; ignored while a name is being typed."""
        if self.name_input_mode:
            return
        char = chr(key) if isinstance(key, int) else key
        if char == "1":
            self.current_selection = 0
            self.select_option()
        elif char == "2":
            self.current_selection = 1
            self.select_option()
        elif char == "3" and self.menu_state == MenuScreen.MODE_SELECTION:
            self.current_selection = 2
            self.select_option()

    def select_option(self) -> None:
        """Act on the current selection for the page that is showing."""
        if self.menu_state == MenuScreen.START:
            if self.current_selection == 0:
                self.menu_state = MenuScreen.MODE_SELECTION
            else:
                self.engine.game.game_state = GameState.LEADERBOARD
                self.is_active = True
        else:
            if self.current_selection == 2:
                self.mode_selection = self.rng.randrange(2)
            else:
                self.mode_selection = self.current_selection
            self.name_input_mode = True

    def start_game(self, now: int) -> None:
        """Start playing in the chosen mode under the typed name."""
        engine = self.engine
        if engine is None or getattr(engine, "game", None) is None or getattr(
            engine, "player", None
        ) is None:
            raise RuntimeError("game engine, game or player not initialised")

        mode = GameMode(self.mode_selection)
        log.info("starting game in mode %s as %s", mode.name.title(), self.name_input)
        engine.game.game_mode = mode
        engine.player.change_role(mode)
        engine.player.name = self.name_input

        self.is_active = False
        self.name_input_mode = False
        engine.game.start_game(now)

        board = getattr(engine, "board", None)
        if board is not None:
            board.cleanup()
            board.generate_board()

    def show_role_change_menu(self, show: bool) -> None:
        """Open or close the role-change menu."""
        self.show_role_change = show