"""The person playing: name, score, money and the car for the current role."""

from __future__ import annotations

import logging

from .cars import Car, DeliveryCar, TaxiCar
from .constants import GameMode

log = logging.getLogger(__name__)


class Player:
    """A player with a score, a wallet and a taxi or delivery car."""

    def __init__(self, name: str = "Player") -> None:
        self.name = name
        self.score = 0
        self.money = 0.0
        self.current_role = GameMode.TAXI
        self.car: Car | None = None

    def change_role(self, role: int) -> None:
        """Swap to a taxi or a delivery car, keeping the position and the fuel."""
        role = GameMode.TAXI if role == GameMode.TAXI else GameMode.DELIVERY
        log.info("changing role to %s for %s", role.name.title(), self.name)

        old = self.car
        fuel = old.fuel_level if old is not None else 100.0
        x = old.x if old is not None else 0
        y = old.y if old is not None else 0

        car: Car = TaxiCar(x, y, self) if role == GameMode.TAXI else DeliveryCar(x, y, self)
        car.fuel_level = fuel
        car.is_player_controlled = True
        car.is_active = True
        self.car = car
        self.current_role = role

    def update_score(self, points: int) -> None:
        """Add points to the score; negative points take them away."""
        self.score += points

    def update_money(self, amount: float) -> None:
        """Add money to the wallet; a negative amount spends it."""
        self.money += amount

    def reset_player(self) -> None:
        """Clear score and money and put the car back at the start."""
        self.score = 0
        self.money = 0.0
        if self.car is not None:
            self.car.reset_car()
            return
        car: Car = (
            TaxiCar(player=self)
            if self.current_role == GameMode.TAXI
            else DeliveryCar(player=self)
        )
        car.is_player_controlled = True
        self.car = car