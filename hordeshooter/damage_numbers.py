"""Floating numbers that rise and fade after damage is dealt."""

from __future__ import annotations

from dataclasses import replace
from enum import Enum, auto

from .geometry import Color, Vector2

FADE_TIME = 0.7
RISE_SPEED = 50.0
REGULAR_SIZE = 18
CRITICAL_SIZE = 26


class NumberType(Enum):
    REGULAR = auto()
    CRITICAL = auto()


class DamageNumber:
    """A number drifting upwards while its alpha fades to zero."""

    def __init__(self, position: Vector2, damage: int, size: int, colour: Color, font: str) -> None:
        self.position = position
        self.damage = damage
        self.size = size
        self.colour = colour
        self.fill_colour = colour
        self.font = font
        self.fade_time = FADE_TIME
        self.speed = RISE_SPEED

    def update(self, delta_time: float) -> None:
        self.position = Vector2(self.position.x, self.position.y - self.speed * delta_time)
        alpha = max(0.0, self.fill_colour.a - (255.0 / self.fade_time) * delta_time)
        self.fill_colour = replace(self.fill_colour, a=int(alpha))

    def is_expired(self) -> bool:
        return self.fill_colour.a <= 0


class DamageNumberManager:
    """Keeps the live damage numbers and retires them once faded."""

    def __init__(self, regular_font: str = "Roboto-Regular", critical_font: str = "Roboto-Bold") -> None:
        self.regular_font = regular_font
        self.critical_font = critical_font
        self.numbers: list[DamageNumber] = []

    def add(self, position: Vector2, damage: int, kind: NumberType) -> None:
        if kind is NumberType.REGULAR:
            self.numbers.append(DamageNumber(position, damage, REGULAR_SIZE, Color.WHITE, self.regular_font))
        elif kind is NumberType.CRITICAL:
            self.numbers.append(DamageNumber(position, damage, CRITICAL_SIZE, Color.YELLOW, self.critical_font))

    def update(self, delta_time: float) -> None:
        for number in self.numbers:
            number.update(delta_time)
        self.numbers = [number for number in self.numbers if not number.is_expired()]