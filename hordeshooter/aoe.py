"""Area effects such as explosions that damage nearby monsters."""

from __future__ import annotations

import random
from dataclasses import dataclass, replace

from .character import AnimData, Sprite, advance_animation
from .geometry import Vector2

PARALYZE_DURATION = 4.0
FIRE_DURATION = 5.0
MAX_RANDOM_ROTATION = 6.23


class AoE:
    """An animated area effect at a fixed position."""

    def __init__(self, anim: AnimData, position: Vector2) -> None:
        self.anim = anim.copy()
        frame = self.anim.texture_frame
        self.sprite = Sprite(
            texture=self.anim.texture,
            texture_rect=frame,
            position=position,
            origin=Vector2(frame.size.x / 2, frame.size.y / 2),
        )
        self.is_active = True

    def update(self, monsters, delta_time: float) -> bool:
        """Advance the animation; return True once the effect is finished."""
        return advance_animation(self.sprite, self.anim, delta_time)


def update_aoe(effects: list[AoE], monsters, delta_time: float) -> None:
    """Update every effect, dropping those that have finished."""
    effects[:] = [effect for effect in effects if not effect.update(monsters, delta_time)]


@dataclass
class ExplosionData:
    """How an explosion looks and what it does to monsters in range."""

    damage: int
    radius: float
    scale: float = 1.0
    delay: float = 0.0
    set_paralyze: bool = False
    set_fire: bool = False


class Explosion(AoE):
    """An explosion that damages every monster within its radius once."""

    def __init__(
        self,
        anim: AnimData,
        position: Vector2,
        data: ExplosionData,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__(anim, position)
        self.data = replace(data)
        rng = rng or random.Random()
        self.sprite.scale = Vector2(self.data.scale, self.data.scale)
        self.sprite.rotation = rng.uniform(0.0, MAX_RANDOM_ROTATION)

    def damage_neighbours(self, monsters) -> None:
        """Damage monsters in range and apply the explosion's status effect."""
        for monster in monsters:
            if (monster.position() - self.sprite.position).length() < self.data.radius:
                monster.take_damage(self.data.damage)
                if self.data.set_paralyze:
                    monster.paralyzed.attempt_apply(PARALYZE_DURATION)
                elif self.data.set_fire:
                    monster.on_fire.apply(FIRE_DURATION)
        self.is_active = False

    def update(self, monsters, delta_time: float) -> bool:
        if self.is_active and self.data.delay <= 0:
            self.damage_neighbours(monsters)
        self.data.delay = max(0.0, self.data.delay - delta_time)
        return advance_animation(self.sprite, self.anim, delta_time)