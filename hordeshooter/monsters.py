"""The melee monsters and the factory that spawns monsters around the screen."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable, ClassVar

from .attacks import MeleeAttack, MonsterState
from .character import AnimData
from .geometry import FloatRect, Vector2
from .monster import Monster

LOW_MONSTER_TEXTURE = "low_monster"

WINDOW_LEFT_BOUND = 0
WINDOW_RIGHT_BOUND = 1200
WINDOW_TOP_BOUND = 0
WINDOW_BOTTOM_BOUND = 720
SPAWN_OFFSET_MIN = 300
SPAWN_OFFSET_MAX = 500


def _row(y: float, width: float, height: float, frames: int, speed: float = 0.1) -> AnimData:
    return AnimData(
        LOW_MONSTER_TEXTURE,
        FloatRect(Vector2(0, y), Vector2(width, height)),
        total_frames=frames,
        anim_speed=speed,
    )


@dataclass(frozen=True)
class MonsterAnimations:
    """The animations a melee monster plays in each state."""

    walk: AnimData
    idle: AnimData
    attack: AnimData
    death: AnimData

    def as_map(self) -> dict[MonsterState, AnimData]:
        death = self.death.copy()
        death.hang_last_frame = True
        return {
            MonsterState.WALK: self.walk.copy(),
            MonsterState.IDLE: self.idle.copy(),
            MonsterState.ATTACK1: self.attack.copy(),
            MonsterState.DEATH: death,
        }


ZOMBIE_ANIMATIONS = MonsterAnimations(
    walk=_row(0, 32, 32, 8),
    idle=_row(32, 32, 32, 4),
    attack=_row(64, 32, 32, 6),
    death=_row(96, 32, 32, 8),
)
SMALL_DEMON_ANIMATIONS = MonsterAnimations(
    walk=_row(128, 32, 32, 8),
    idle=_row(160, 32, 32, 4),
    attack=_row(192, 32, 32, 6),
    death=_row(224, 32, 32, 8),
)
BIG_DEMON_ANIMATIONS = MonsterAnimations(
    walk=_row(256, 64, 64, 8),
    idle=_row(320, 64, 64, 4),
    attack=_row(384, 64, 64, 6),
    death=_row(448, 64, 64, 8),
)


class _MeleeMonster(Monster):
    animations: ClassVar[MonsterAnimations]
    origin_ratio: ClassVar[tuple[float, float]]

    def __init__(
        self,
        position: Vector2,
        health: int,
        movement_speed: float,
        scale: float,
        x_hit_ratio: float,
        y_hit_ratio: float,
    ) -> None:
        super().__init__(
            position, self.animations.walk, health, movement_speed, scale, x_hit_ratio, y_hit_ratio
        )
        self.anim_map = self.animations.as_map()
        self.attack_map = {MonsterState.ATTACK1: self._create_attack()}
        frame = self.anim.texture_frame
        self.sprite.texture_rect = frame
        ratio_x, ratio_y = self.origin_ratio
        self.sprite.origin = Vector2(frame.size.x * ratio_x, frame.size.y * ratio_y)

    def _create_attack(self) -> MeleeAttack:
        raise NotImplementedError


class Zombie(_MeleeMonster):
    """A slow monster with a short bite."""

    animations = ZOMBIE_ANIMATIONS
    origin_ratio = (0.5, 0.7)

    def __init__(self, position: Vector2) -> None:
        super().__init__(position, 500, 1.0, 1.7, 0.45, 0.49)

    def _create_attack(self) -> MeleeAttack:
        box = self.update_hitbox()
        box = FloatRect(box.position, Vector2(box.size.x, box.size.y * 0.5))
        return MeleeAttack(MonsterState.ATTACK1, self, 1.0, box, box, 2, 100)


class SmallDemon(_MeleeMonster):
    """A quick demon with a strong swipe."""

    animations = SMALL_DEMON_ANIMATIONS
    origin_ratio = (0.5, 0.8)

    def __init__(self, position: Vector2) -> None:
        super().__init__(position, 700, 1.5, 1.7, 0.45, 0.55)

    def _create_attack(self) -> MeleeAttack:
        box = self.update_hitbox()
        box = FloatRect(box.position, Vector2(box.size.x, box.size.y * 0.8))
        return MeleeAttack(MonsterState.ATTACK1, self, 1.0, box, box, 3, 120)


class BigDemon(_MeleeMonster):
    """A large, tough demon with a wide, slow attack."""

    animations = BIG_DEMON_ANIMATIONS
    origin_ratio = (0.5, 0.6)

    def __init__(self, position: Vector2) -> None:
        super().__init__(position, 3000, 1.2, 1.7, 0.4, 0.35)

    def _create_attack(self) -> MeleeAttack:
        box = self.update_hitbox()
        top = box.position.y + 0.4 * box.size.y
        y_offset = box.size.y * 0.2
        box = FloatRect(
            Vector2(box.position.x, top),
            Vector2(box.size.x * 1.4, box.size.y * 0.6),
        )
        return MeleeAttack(MonsterState.ATTACK1, self, 2.0, box, box, 3, 0, Vector2(0, y_offset))


def _spawn_wolf(position: Vector2) -> Monster:
    from .wolf import Wolf

    return Wolf(position)


DEFAULT_KINDS: dict[int, Callable[[Vector2], Monster]] = {
    1: Zombie,
    2: SmallDemon,
    3: BigDemon,
    4: _spawn_wolf,
}


class MonsterFactory:
    """Spawns monsters just outside a random side of the screen."""

    def __init__(
        self,
        rng: random.Random | None = None,
        monster_types: tuple[int, int] = (4, 4),
        kinds: dict[int, Callable[[Vector2], Monster]] | None = None,
    ) -> None:
        self.rng = rng or random.Random()
        self.monster_types = monster_types
        self.kinds = dict(DEFAULT_KINDS) if kinds is None else dict(kinds)

    def _offset(self) -> int:
        return self.rng.randint(SPAWN_OFFSET_MIN, SPAWN_OFFSET_MAX)

    def random_position(self, screen_side: int) -> Vector2:
        """A point beyond side 1 (left), 2 (right), 3 (top) or 4 (bottom) of the screen."""
        if screen_side == 1:
            x = WINDOW_LEFT_BOUND - self._offset()
            y = self.rng.randint(WINDOW_TOP_BOUND, WINDOW_BOTTOM_BOUND)
        elif screen_side == 2:
            x = WINDOW_RIGHT_BOUND + self._offset()
            y = self.rng.randint(WINDOW_TOP_BOUND, WINDOW_BOTTOM_BOUND)
        elif screen_side == 3:
            x = self.rng.randint(WINDOW_LEFT_BOUND, WINDOW_RIGHT_BOUND)
            y = WINDOW_TOP_BOUND - self._offset()
        elif screen_side == 4:
            x = self.rng.randint(WINDOW_LEFT_BOUND, WINDOW_RIGHT_BOUND)
            y = WINDOW_BOTTOM_BOUND + self._offset()
        else:
            raise ValueError(f"screen side must be 1 to 4, not {screen_side}")
        return Vector2(float(x), float(y))

    def spawn(self, count: int) -> list[Monster]:
        """Create up to count monsters; types without a constructor are skipped."""
        low, high = self.monster_types
        monsters = []
        for _ in range(count):
            position = self.random_position(self.rng.randint(1, 4))
            create = self.kinds.get(self.rng.randint(low, high))
            if create is not None:
                monsters.append(create(position))
        return monsters