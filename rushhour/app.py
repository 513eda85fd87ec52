"""The window, the keyboard and the timer that drive the game."""

from __future__ import annotations

import argparse
import logging
import random
from collections.abc import Callable, Sequence

import pygame

from .cars import DeliveryCar, TaxiCar
from .constants import (
    BOARD_PIXELS,
    KEY_ESC,
    TOTAL_HEIGHT,
    Direction,
    GameMode,
    GameState,
)
from .engine import GameEngine
from .render import Canvas

log = logging.getLogger(__name__)

KEY_ENTER = 13
KEY_SPACE = 32
TIMER_INTERVAL_MS = 16
UPDATE_EVERY_FRAMES = 4
RESPAWN_DELAY_MS = 1000

_ARROWS = {
    pygame.K_UP: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
}


class GameController:
    """Turns key presses and timer ticks into actions on the game engine."""

    def __init__(self, engine: GameEngine) -> None:
        self.engine = engine
        self._frame = 0
        self._scheduled: list[tuple[int, Callable[[], None]]] = []

    def _schedule(self, due: int, action: Callable[[], None]) -> None:
        self._scheduled.append((due, action))

    def on_key(self, key: int | str, now: int = 0) -> None:
        """Handle a printable key (or enter, escape, space) pressed at time `now` in ms."""
        code = ord(key) if isinstance(key, str) else int(key)
        engine = self.engine
        game = engine.game
        menu = engine.menu

        if (
            game.game_state == GameState.MENU
            and not menu.name_input_mode
            and code in (ord("1"), ord("2"), ord("3"))
        ):
            menu.handle_input(chr(code))
            return

        engine.input_manager.handle_key_press(code)

        if menu.name_input_mode:
            if code == KEY_ENTER:
                if menu.name_input:
                    menu.start_game(now)
            elif 32 <= code <= 126:
                menu.name_input += chr(code)
            return

        if code == KEY_ESC:
            if game.game_state == GameState.PLAYING:
                game.pause_game()
            elif game.game_state == GameState.PAUSED:
                game.resume_game()

        if code == KEY_SPACE and game.game_state == GameState.PLAYING:
            self._handle_job(now)

        if code in (ord("p"), ord("P")) and game.game_state == GameState.PLAYING:
            station = engine.board.role_change_station
            if station is not None and station.is_player_near(engine.player):
                game.pause_game()
                menu.show_role_change_menu(True)

        if menu.show_role_change:
            if code in (ord("1"), ord("2")):
                mode = GameMode.TAXI if code == ord("1") else GameMode.DELIVERY
                engine.player.change_role(mode)
                game.game_mode = mode
                engine.board.clear_mode_objects()
                menu.show_role_change_menu(False)
                game.resume_game()
            elif code == KEY_ESC:
                menu.show_role_change_menu(False)
                game.resume_game()

    def _handle_job(self, now: int) -> None:
        engine = self.engine
        player = engine.player
        if player is None or player.car is None:
            return
        car = player.car
        board = engine.board

        if engine.game.game_mode == GameMode.TAXI:
            if not isinstance(car, TaxiCar):
                return
            if not car.has_passenger:
                for passenger in board.passengers:
                    if passenger.is_active and car.check_collision(passenger):
                        if car.pickup_passenger(passenger):
                            passenger.is_active = False
                            log.info("passenger picked up")
                            break
            elif car.drop_passenger():
                log.info("passenger dropped off")
                self._schedule(now + RESPAWN_DELAY_MS, lambda: self.engine.board.add_passenger())
        else:
            if not isinstance(car, DeliveryCar):
                return
            if not car.has_package:
                for package in board.packages:
                    if (
                        package.is_active
                        and abs(package.x - car.x) <= 1
                        and abs(package.y - car.y) <= 1
                    ):
                        if car.pickup_package(package):
                            package.is_active = False
                            log.info("package picked up")
                            break
            elif car.deliver_package():
                log.info("package dropped off")
                self._schedule(now + RESPAWN_DELAY_MS, lambda: self.engine.board.add_package())

    def on_arrow(self, direction: int) -> None:
        """Drive the player's car one cell while the game is being played."""
        engine = self.engine
        if engine.game.game_state != GameState.PLAYING:
            return
        player = engine.player
        if player is not None and player.car is not None:
            player.car.move(direction, engine.board)

    def on_timer(self, now: int) -> None:
        """Handle one timer tick at `now` ms: every fourth tick updates the game."""
        self._frame += 1
        game = self.engine.game
        if self._frame % UPDATE_EVERY_FRAMES == 0 and game.game_state == GameState.PLAYING:
            game.current_time = (now - game.start_time) // 1000
            self.engine.update()
            game.check_time_limit()

        due = [action for when, action in self._scheduled if when <= now]
        self._scheduled = [(when, action) for when, action in self._scheduled if when > now]
        for action in due:
            action()

    def run(self) -> None:
        """Open the window and run the game until it is closed."""
        pygame.init()
        try:
            screen = pygame.display.set_mode((BOARD_PIXELS, TOTAL_HEIGHT))
            pygame.display.set_caption("Rush Hour Game")
            canvas = Canvas(screen)
            clock = pygame.time.Clock()
            held: dict[int, int] = {}
            running = True
            while running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        running = False
                    elif event.type == pygame.KEYDOWN:
                        direction = _ARROWS.get(event.key)
                        if direction is not None:
                            self.on_arrow(direction)
                        elif len(event.unicode) == 1 and ord(event.unicode) < 256:
                            code = ord(event.unicode)
                            held[event.key] = code
                            self.on_key(code, pygame.time.get_ticks())
                    elif event.type == pygame.KEYUP:
                        code = held.pop(event.key, None)
                        if code is not None:
                            self.engine.input_manager.handle_key_release(code)
                self.on_timer(pygame.time.get_ticks())
                self.engine.render(canvas)
                pygame.display.flip()
                clock.tick(1000 // TIMER_INTERVAL_MS)
        finally:
            pygame.quit()


def main(argv: Sequence[str] | None = None) -> int:
    """Start the game window."""
    parser = argparse.ArgumentParser(prog="rushhour", description="Drive a taxi or a van around the city.")
    parser.add_argument("--scores", default="highscores.dat", help="high-score file")
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    args = parser.parse_args(argv)

    engine = GameEngine(args.scores, random.Random(args.seed))
    engine.game.game_state = GameState.MENU
    engine.menu.is_active = True
    GameController(engine).run()
    return 0