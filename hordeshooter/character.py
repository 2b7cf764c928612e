"""Animated sprites and the base character with health and an HP bar."""

from __future__ import annotations

import dataclasses
import itertools
from dataclasses import dataclass

from .geometry import Color, FloatRect, Transformable, Vector2
from .hud import Hud

_ids = itertools.count()


@dataclass
class AnimData:
    """State of a frame-by-frame animation laid out along one row of a texture."""

    texture: str
    texture_frame: FloatRect
    total_frames: int = 1
    anim_speed: float = 0.1
    frame_spacing: float | None = None
    curr_frame: int = 0
    init_curr_frame: int = 0
    delta_time_sum: float = 0.0
    hang_last_frame: bool = False
    first_frame_x: float | None = None

    def __post_init__(self) -> None:
        if self.frame_spacing is None:
            self.frame_spacing = self.texture_frame.size.x
        if self.first_frame_x is None:
            self.first_frame_x = self.texture_frame.position.x - self.curr_frame * self.frame_spacing

    def copy(self) -> AnimData:
        return dataclasses.replace(self)


class Sprite(Transformable):
    """A textured rectangle showing one frame of a texture."""

    def __init__(
        self,
        texture: str = "",
        texture_rect: FloatRect = FloatRect(),
        color: Color = Color.WHITE,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.texture = texture
        self.texture_rect = texture_rect
        self.color = color

    def local_bounds(self) -> FloatRect:
        size = self.texture_rect.size
        return FloatRect(Vector2(), Vector2(abs(size.x), abs(size.y)))


def advance_animation(sprite: Sprite, anim: AnimData, delta_time: float) -> bool:
    """Advance a one-row animation; return True when the sequence has completed."""
    anim.delta_time_sum += delta_time
    if anim.delta_time_sum < anim.anim_speed:
        return False
    anim.delta_time_sum = 0.0
    next_frame = anim.curr_frame + 1
    finished = next_frame >= anim.total_frames
    if finished:
        next_frame = anim.total_frames - 1 if anim.hang_last_frame else 0
    anim.curr_frame = next_frame
    frame = anim.texture_frame
    x = anim.first_frame_x + next_frame * anim.frame_spacing
    anim.texture_frame = FloatRect(Vector2(x, frame.position.y), frame.size)
    sprite.texture_rect = anim.texture_frame
    return finished


class Character:
    """A sprite with health, movement speed and an HP bar."""

    def __init__(
        self,
        position: Vector2,
        anim: AnimData,
        health_colour: Color,
        damage_colour: Color,
        health: int,
        movement_speed: float,
        scale: float,
    ) -> None:
        self.anim = anim.copy()
        frame = self.anim.texture_frame
        self.sprite = Sprite(
            texture=self.anim.texture,
            texture_rect=frame,
            position=position,
            scale=Vector2(scale, scale),
            origin=Vector2(frame.size.x / 2, frame.size.y / 2),
        )
        self.health = health
        self.movement_speed = movement_speed
        self.scale = scale
        self.hud = Hud(health, health_colour, damage_colour)
        self.id = next(_ids)

    def is_dead(self) -> bool:
        if self.health <= 0:
            self.health = 0
            return True
        return False

    def take_damage(self, damage: int) -> None:
        self.health = max(0, self.health - damage)

    def y_ordering(self) -> float:
        """Bottom edge of the sprite, used to sort characters for drawing."""
        return self.sprite.global_bounds().bottom

    def position(self) -> Vector2:
        return self.sprite.position

    def global_bounds(self) -> FloatRect:
        return self.sprite.global_bounds()