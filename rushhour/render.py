"""Drawing primitives on a pygame surface, in the board's pixel coordinates."""

from __future__ import annotations

import random
from collections.abc import Iterator, Sequence
from contextlib import contextmanager

import pygame

from .constants import ANGLE_PI, BLACK, HUD_HEIGHT, TAXI_COLOR, WHITE

RGB = tuple[int, int, int]

DEFAULT_ROUND_RECT_RGB: RGB = (156, 207, 255)
FONT_SIZE = 24
WINDOW_COLOR = (0.8, 0.8, 0.9)
ROOF_LIGHT_COLOR = (1.0, 1.0, 0.5)


def deg_to_rad(degree: float) -> float:
    """Convert an angle in degrees to radians."""
    return degree / 180.0 * ANGLE_PI


def rad_to_deg(angle: float) -> float:
    """Convert an angle in radians to degrees."""
    return angle * (180.0 / ANGLE_PI)


def rand_in_range(rmin: int, rmax: int) -> int:
    """Return a random integer n with rmin <= n < rmax."""
    if rmax <= rmin:
        raise ValueError(f"empty range [{rmin}, {rmax})")
    return random.randrange(rmin, rmax)


def to_rgb(color: Sequence[float]) -> RGB:
    """Convert a colour of float components in [0, 1] to 8-bit RGB, dropping alpha."""
    if len(color) < 3:
        raise ValueError("a colour needs at least three components")
    red, green, blue = (round(min(max(float(c), 0.0), 1.0) * 255) for c in color[:3])
    return red, green, blue


class Canvas:
    """A pygame surface with an offset stack and the game's drawing helpers."""

    def __init__(self, surface: pygame.Surface) -> None:
        self.surface = surface
        self.offset: tuple[float, float] = (0, 0)
        self._color: RGB = to_rgb(WHITE)
        self._font: pygame.font.Font | None = None

    @contextmanager
    def translated(self, dx: float, dy: float) -> Iterator[Canvas]:
        """Shift every shape drawn inside the block by (dx, dy)."""
        saved = self.offset
        self.offset = (saved[0] + dx, saved[1] + dy)
        try:
            yield self
        finally:
            self.offset = saved

    def _pick(self, color: Sequence[float] | None) -> RGB:
        if color is not None:
            self._color = to_rgb(color)
        return self._color

    def _at(self, x: float, y: float) -> tuple[float, float]:
        return x + self.offset[0], y + self.offset[1]

    def draw_square(self, x: int, y: int, size: int, color: Sequence[float]) -> None:
        """Fill a size x size square whose top-left pixel is (x, y)."""
        self.draw_rectangle(x, y, size, size, color)

    def draw_rectangle(
        self, x: int, y: int, width: int, height: int, color: Sequence[float]
    ) -> None:
        """Fill a width x height rectangle whose top-left pixel is (x, y)."""
        rgb = self._pick(color)
        width, height = int(width), int(height)
        if width <= 0 or height <= 0:
            return
        left, top = self._at(int(x), int(y))
        pygame.draw.rect(self.surface, rgb, pygame.Rect(int(left), int(top), width, height))

    def draw_triangle(
        self,
        x1: int,
        y1: int,
        x2: int,
        y2: int,
        x3: int,
        y3: int,
        color: Sequence[float],
    ) -> None:
        """Fill the triangle with the three given corners."""
        rgb = self._pick(color)
        points = [self._at(x1, y1), self._at(x2, y2), self._at(x3, y3)]
        pygame.draw.polygon(self.surface, rgb, points)

    def draw_circle(
        self, x: float, y: float, radius: float, color: Sequence[float]
    ) -> None:
        """Fill a circle of the given radius centred on (x, y)."""
        rgb = self._pick(color)
        pygame.draw.circle(self.surface, rgb, self._at(x, y), radius)

    def draw_line(
        self,
        x1: int,
        y1: int,
        x2: int,
        y2: int,
        width: int = 3,
        color: Sequence[float] | None = None,
    ) -> None:
        """Draw a straight line; without a colour the last one used is kept."""
        rgb = self._pick(color)
        pygame.draw.line(
            self.surface, rgb, self._at(x1, y1), self._at(x2, y2), max(1, int(width))
        )

    def draw_round_rect(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        color: Sequence[float] | None = None,
        radius: float = 0.0,
    ) -> None:
        """Fill a rectangle with rounded corners; a zero radius means 10% of the short side."""
        if color is None:
            self._color = DEFAULT_ROUND_RECT_RGB
            rgb = self._color
        else:
            rgb = self._pick(color)
        if radius == 0.0:
            radius = min(width, height) * 0.10
        w, h = int(width), int(height)
        if w <= 0 or h <= 0:
            return
        left, top = self._at(x, y)
        pygame.draw.rect(
            self.surface,
            rgb,
            pygame.Rect(int(left), int(top), w, h),
            border_radius=int(radius),
        )

    def _get_font(self) -> pygame.font.Font:
        if self._font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            self._font = pygame.font.Font(None, FONT_SIZE)
        return self._font

    def draw_string(
        self, x: float, y: float, text: str, color: Sequence[float] | None = None
    ) -> None:
        """Draw text with its baseline starting at (x, y); translation is ignored."""
        rgb = self._pick(color)
        if not text:
            return
        font = self._get_font()
        image = font.render(text, True, rgb)
        self.surface.blit(image, (int(x), int(y) - font.get_ascent()))

    def draw_car(self, x: int, y: int, size: int, color: Sequence[float]) -> None:
        """Draw a car centred on (x, y), where y is measured below the HUD."""
        screen_y = y - HUD_HEIGHT
        car_width = size
        car_height = int(size * 0.6)

        self.draw_round_rect(
            x - car_width // 2, screen_y - car_height // 2, car_width, car_height, color, 5
        )
        self.draw_round_rect(
            x - car_width // 3,
            screen_y - car_height // 4,
            car_width * 0.66,
            car_height // 3,
            WINDOW_COLOR,
            3,
        )

        wheel_size = size // 5
        wheel_y = screen_y + car_height // 2 + 2
        self.draw_circle(x - car_width // 3, wheel_y, wheel_size, BLACK)
        self.draw_circle(x + car_width // 3, wheel_y, wheel_size, BLACK)

        if tuple(color) == TAXI_COLOR:
            self.draw_round_rect(
                x - 5, screen_y - car_height // 2 + 5, 10, 8, ROOF_LIGHT_COLOR, 3
            )