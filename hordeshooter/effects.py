"""Status effects that can be applied to a character: knockback, fire, paralysis, shrink and slow."""

from __future__ import annotations

import math
from dataclasses import replace

from .character import AnimData, Sprite, advance_animation
from .geometry import Color, FloatRect, Vector2

ON_FIRE_DAMAGE = 20
ON_FIRE_DAMAGE_INTERVAL = 0.25
BURNT_COLOUR_FACTOR = 0.15
PARALYZE_COOLDOWN = 3.0
SHRINK_RECOVERY_TIME = 0.5
SHRINK_INTERPOLATION_FACTOR = 0.1
SLOWED_COLOUR = Color(60, 220, 255)

ON_FIRE_ANIMATION = AnimData(
    "on_fire",
    FloatRect(Vector2(0, 0), Vector2(32, 32)),
    total_frames=8,
    anim_speed=0.05,
)
PARALYZE_ANIMATION = AnimData(
    "status_effects",
    FloatRect(Vector2(0, 0), Vector2(64, 64)),
    total_frames=8,
    anim_speed=0.05,
)


class StatusEffect:
    """A timed effect on a character."""

    def __init__(self, character) -> None:
        self.character = character
        self.time_left = 0.0

    def update_time_left(self, delta_time: float) -> bool:
        """Count down; return True once the effect has run out."""
        self.time_left -= delta_time
        if self.time_left <= 0:
            self.time_left = max(0.0, self.time_left)
            return True
        return False

    def apply(self, duration: float) -> None:
        self.time_left = duration

    def is_active(self) -> bool:
        return self.time_left > 0


class Knockback:
    """Pushes a character along a vector until a distance has been covered."""

    def __init__(self, character) -> None:
        self.character = character
        self.debt = 0.0
        self.vector = Vector2()

    def set(self, distance: float, vector: Vector2) -> None:
        self.vector = vector
        self.debt = distance

    def apply(self) -> None:
        """Move the character one step along the knockback vector."""
        self.character.sprite.move(self.vector)
        self.debt = max(0.0, self.debt - self.vector.length())

    def is_active(self) -> bool:
        return self.debt > 0


def _effect_sprite(character, anim: AnimData, scale: Vector2) -> Sprite:
    frame = anim.texture_frame
    return Sprite(
        texture=anim.texture,
        texture_rect=frame,
        position=character.position(),
        origin=Vector2(frame.size.x * 0.5, frame.size.y * 0.5),
        scale=scale,
        rotation=math.pi / 2,
    )


class OnFire(StatusEffect):
    """Burns the character for periodic damage and chars it if it dies."""

    def __init__(self, character, anim: AnimData = ON_FIRE_ANIMATION) -> None:
        super().__init__(character)
        self.anim = anim.copy()
        self.sprite = _effect_sprite(character, self.anim, Vector2(2.6, 2.4))
        self.dps = 0
        self.damage_timer = 0.0
        self.flamethrower_dmg_cd = 0.0
        self.updated_colour = False

    def _update_colour(self) -> None:
        if not self.updated_colour and self.character.is_dead():
            sprite = self.character.sprite
            colour = sprite.color
            sprite.color = replace(
                colour,
                r=int(colour.r * BURNT_COLOUR_FACTOR),
                g=int(colour.g * BURNT_COLOUR_FACTOR),
                b=int(colour.b * BURNT_COLOUR_FACTOR),
            )
            self.updated_colour = True

    def update(self, delta_time: float) -> bool:
        """Deal fire damage; return True once the fire has gone out."""
        self.sprite.position = self.character.position()
        self._update_colour()
        if self.update_time_left(delta_time):
            return True
        if self.flamethrower_dmg_cd > 0:
            self.flamethrower_dmg_cd -= delta_time
        if self.damage_timer >= ON_FIRE_DAMAGE_INTERVAL:
            self.character.take_damage(ON_FIRE_DAMAGE)
            self.damage_timer = 0.0
        self.damage_timer += delta_time
        advance_animation(self.sprite, self.anim, delta_time)
        return False


class Paralyzed(StatusEffect):
    """Stops the character; cannot be reapplied until a cooldown passes."""

    def __init__(self, character, anim: AnimData = PARALYZE_ANIMATION) -> None:
        super().__init__(character)
        self.anim = anim.copy()
        self.sprite = _effect_sprite(character, self.anim, Vector2(1.0, 1.0))
        self.disabled_cd = 0.0

    def update(self, delta_time: float) -> bool:
        """Return True once the paralysis ends, starting its cooldown."""
        self.sprite.position = self.character.position()
        if self.update_time_left(delta_time):
            self.disabled_cd = PARALYZE_COOLDOWN
            return True
        advance_animation(self.sprite, self.anim, delta_time)
        return False

    def attempt_apply(self, duration: float) -> None:
        if not self.is_active() and not self.on_cooldown():
            self.apply(duration)

    def update_disabled_cooldown(self, delta_time: float) -> None:
        self.disabled_cd = max(0.0, self.disabled_cd - delta_time)

    def on_cooldown(self) -> bool:
        return self.disabled_cd > 0


class Shrink(StatusEffect):
    """Scales the character down, growing back near the end of the effect."""

    def __init__(self, character) -> None:
        super().__init__(character)
        self.original_scale = Vector2()
        self.size_factor = 1.0
        self.updated_size = False
        self.initial_time = 0.0

    def apply_shrink(self, duration: float, size_factor: float) -> None:
        self.apply(duration)
        if not self.updated_size and self.character.health > 0:
            self.initial_time = duration
            self.original_scale = self.character.sprite.scale
            self.size_factor = size_factor
            self.character.sprite.scale = self.original_scale * size_factor
            self.updated_size = True

    def _set_scale(self, x: float, y: float) -> None:
        inverted = getattr(self.character, "x_axis_inverted", False)
        self.character.sprite.scale = Vector2(-x if inverted else x, y)

    def update(self, delta_time: float) -> bool:
        """Return True once the character is back to its original size."""
        original = self.original_scale
        if self.update_time_left(delta_time):
            self._set_scale(abs(original.x), original.y)
            self.updated_size = False
            return True
        if not self.character.is_dead() and self.time_left < SHRINK_RECOVERY_TIME:
            current = self.character.sprite.scale
            x = abs(current.x) + (abs(original.x) - abs(current.x)) * SHRINK_INTERPOLATION_FACTOR
            y = current.y + (original.y - current.y) * SHRINK_INTERPOLATION_FACTOR
            self._set_scale(x, y)
        return False


class Slowed(StatusEffect):
    """Reduces movement speed and tints the character."""

    def __init__(self, character) -> None:
        super().__init__(character)
        self.slow_factor = 1.0
        self.updated_colour = False

    def _update_colour(self) -> None:
        if not self.updated_colour and self.character.health > 0:
            self.character.sprite.color = SLOWED_COLOUR
            self.updated_colour = True

    def apply_slow(self, duration: float, slow_factor: float) -> None:
        self.slow_factor = slow_factor
        self.apply(duration)
        self._update_colour()

    def update(self, delta_time: float) -> bool:
        """Return True once the slow wears off, restoring speed and colour."""
        if self.update_time_left(delta_time):
            self.slow_factor = 1.0
            self.character.sprite.color = Color(255, 255, 255)
            self.updated_colour = False
            return True
        return False