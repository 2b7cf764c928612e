"""Health bar drawn above a character."""

from __future__ import annotations

import math

from .geometry import Color, FloatRect, RectangleShape, Vector2

HP_WIDTH_PIXELS = 85
HP_HEIGHT_PIXELS = 6
INTERPOLATION_FACTOR = 0.1
HP_Y_OFFSET = 10.0
SEGMENT_LINE_THICKNESS = 1
SEGMENT_SIZE = 100

_HALF_WIDTH = HP_WIDTH_PIXELS // 2
_HALF_HEIGHT = HP_HEIGHT_PIXELS // 2


def _round(value: float) -> float:
    """Round half away from zero."""
    return math.copysign(math.floor(abs(value) + 0.5), value)


class Hud:
    """An HP bar with a trailing damage bar and segment markers."""

    def __init__(self, max_hp: int, health_colour: Color, damage_colour: Color) -> None:
        self.max_hp = max_hp
        self.current_hp_width = float(HP_WIDTH_PIXELS)
        self.target_hp_width = float(HP_WIDTH_PIXELS)
        self.damage_hp_width = float(HP_WIDTH_PIXELS)
        origin = Vector2(_HALF_WIDTH, _HALF_HEIGHT)
        full_size = Vector2(HP_WIDTH_PIXELS, HP_HEIGHT_PIXELS)

        self.hp_bar = RectangleShape(fill_color=health_colour, origin=origin)
        self.hp_bar_background = RectangleShape(size=full_size, fill_color=Color.BLACK, origin=origin)
        self.damage_bar = RectangleShape(size=full_size, fill_color=damage_colour, origin=origin)
        self.segment_lines: list[RectangleShape] = []

    def interpolate_hp_bar(self) -> None:
        """Snap the HP bar to its target and let the damage bar trail behind."""
        self.current_hp_width = max(1.0, self.target_hp_width)
        if self.damage_hp_width > self.target_hp_width:
            diff = self.damage_hp_width - self.target_hp_width
            self.damage_hp_width -= max(diff * INTERPOLATION_FACTOR * 0.65, 0.15)
        else:
            self.damage_hp_width = self.target_hp_width

    def update(self, current_hp: int, bounds: FloatRect) -> None:
        self.target_hp_width = (current_hp / self.max_hp) * HP_WIDTH_PIXELS
        self.interpolate_hp_bar()
        self.hp_bar.size = Vector2(self.current_hp_width, HP_HEIGHT_PIXELS)
        self.hp_bar.position = Vector2(
            _round(bounds.position.x + bounds.size.x / 2),
            _round(bounds.position.y - HP_Y_OFFSET),
        )
        bar_position = Vector2(_round(self.hp_bar.position.x), _round(self.hp_bar.position.y))
        self.damage_bar.size = Vector2(self.damage_hp_width, HP_HEIGHT_PIXELS)
        self.damage_bar.position = bar_position
        self.update_segments(self.max_hp)
        self.hp_bar_background.position = bar_position

    def update_segments(self, max_health: int) -> None:
        """Rebuild the markers every 100 HP up to the current HP, and the border."""
        self.segment_lines = []
        bar_x = self.hp_bar.position.x
        bar_y = self.hp_bar.position.y
        bar_left = bar_x - _HALF_WIDTH
        for hp in range(SEGMENT_SIZE, max_health, SEGMENT_SIZE):
            x_position = (hp / max_health) * HP_WIDTH_PIXELS
            if x_position > self.target_hp_width:
                break
            if hp % 1000 == 0:
                size = Vector2(SEGMENT_LINE_THICKNESS * 2, HP_HEIGHT_PIXELS)
            else:
                size = Vector2(SEGMENT_LINE_THICKNESS, HP_HEIGHT_PIXELS * 0.5)
            self.segment_lines.append(
                RectangleShape(
                    size=size,
                    fill_color=Color.BLACK,
                    position=Vector2(_round(bar_left + x_position), _round(bar_y - _HALF_HEIGHT)),
                )
            )

        border_top = bar_y - _HALF_HEIGHT - SEGMENT_LINE_THICKNESS
        horizontal = Vector2(HP_WIDTH_PIXELS, SEGMENT_LINE_THICKNESS)
        vertical = Vector2(SEGMENT_LINE_THICKNESS, HP_HEIGHT_PIXELS + 2 * SEGMENT_LINE_THICKNESS)
        borders = (
            (horizontal, Vector2(bar_left, border_top)),
            (horizontal, Vector2(bar_left, bar_y + _HALF_HEIGHT)),
            (vertical, Vector2(bar_left - SEGMENT_LINE_THICKNESS, border_top)),
            (vertical, Vector2(bar_x + _HALF_WIDTH, border_top)),
        )
        self.segment_lines.extend(
            RectangleShape(size=size, fill_color=Color.BLACK, position=position)
            for size, position in borders
        )

    def rectangles(self) -> list[RectangleShape]:
        """All rectangles of the bar in drawing order."""
        return [self.hp_bar_background, self.damage_bar, self.hp_bar, *self.segment_lines]