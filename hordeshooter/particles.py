"""Muzzle flashes and ejected bullet shells."""

from __future__ import annotations

import math
import random

from .character import AnimData, Sprite, advance_animation
from .geometry import Color, RectangleShape, Vector2

PI = 3.141592
MIRROR_NEG_Y_AXIS_BOUND = PI / 2.0
MIRROR_POS_Y_AXIS_BOUND = -PI / 2.0
FALL_DISTANCE = 35.0
MAX_TIME_ALIVE = 1.4
SHELL_SPREAD = 115.0
SHELL_COLOUR = Color(207, 166, 35)


def _faces_left(direction: Vector2) -> bool:
    radians = math.atan2(direction.y, direction.x)
    return radians > MIRROR_NEG_Y_AXIS_BOUND or radians < MIRROR_POS_Y_AXIS_BOUND


class MuzzleFlash:
    """A flash sprite following the muzzle of the current weapon."""

    def __init__(
        self,
        anim: AnimData,
        muzzle_position: Vector2,
        direction: Vector2,
        scale: float = 1.0,
        is_second: bool = False,
    ) -> None:
        self.anim = anim.copy()
        self.muzzle_position = muzzle_position
        self.direction = direction
        self.scale = scale
        self.is_second = is_second
        self.sprite = Sprite(texture=self.anim.texture, texture_rect=self.anim.texture_frame)
        bounds = self.sprite.local_bounds()
        self.sprite.origin = Vector2(bounds.size.x / 4, bounds.size.y / 2)
        self.sprite.position = muzzle_position
        self.sprite.scale = Vector2(scale, scale)
        self.rotate_to_weapon()

    def rotate_to_weapon(self) -> None:
        """Point along the weapon, mirrored vertically when it faces left."""
        if _faces_left(self.direction):
            self.sprite.scale = Vector2(self.scale, -self.scale)
        else:
            self.sprite.scale = Vector2(self.scale, self.scale)
        self.sprite.rotation = math.atan2(self.direction.y, self.direction.x)

    def update(self, muzzle_position: Vector2, direction: Vector2, delta_time: float) -> bool:
        """Follow the muzzle; return True when the flash animation has finished."""
        self.muzzle_position = muzzle_position
        self.direction = direction
        self.sprite.position = muzzle_position
        self.rotate_to_weapon()
        return advance_animation(self.sprite, self.anim, delta_time)


def shell_velocity(weapon_relative: Vector2, offset: float) -> Vector2:
    """Ejection velocity: perpendicular to the weapon, shifted by a spread offset."""
    if _faces_left(weapon_relative):
        perpendicular = Vector2(weapon_relative.y, -weapon_relative.x)
    else:
        perpendicular = Vector2(-weapon_relative.y, weapon_relative.x)
    return Vector2(perpendicular.x + offset, perpendicular.y + offset) / 5.0


class Shell:
    """A spent casing that flies a short distance, spins and disappears."""

    def __init__(self, position: Vector2, weapon_relative: Vector2, rng: random.Random | None = None) -> None:
        rng = rng or random.Random()
        self.rotation_speed = rng.uniform(-0.1, 0.1)
        self.velocity = shell_velocity(weapon_relative, rng.uniform(-SHELL_SPREAD, SHELL_SPREAD))
        self.fall_distance = 0.0
        self.delta_time_sum = 0.0
        self.shape = RectangleShape(size=Vector2(5.0, 1.0), fill_color=SHELL_COLOUR, position=position)

    def update(self, delta_time: float) -> bool:
        """Move and spin the shell; return True once it should be removed."""
        step = self.velocity * delta_time
        self.fall_distance += step.length()
        if self.fall_distance < FALL_DISTANCE:
            self.shape.move(step)
        if self.delta_time_sum > MAX_TIME_ALIVE:
            return True
        self.shape.rotate(self.rotation_speed)
        self.delta_time_sum += delta_time
        return False