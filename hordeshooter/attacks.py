"""Monster attacks: cooldowns, aggro boxes and damage boxes."""

from __future__ import annotations

from enum import Enum, auto

from .geometry import FloatRect, RectangleShape, Vector2


class MonsterState(Enum):
    WALK = auto()
    RUN = auto()
    IDLE = auto()
    HIT = auto()
    ATTACK1 = auto()
    ATTACK2 = auto()
    ATTACK3 = auto()
    DEATH = auto()


class Attack:
    """An attack with a cooldown, a box that triggers it and a box that deals damage."""

    def __init__(
        self,
        attack_state: MonsterState,
        monster,
        cooldown: float,
        aggro_box: FloatRect,
        damage_box: FloatRect,
    ) -> None:
        self.attack_state = attack_state
        self.monster = monster
        self.aggro_box = RectangleShape(size=aggro_box.size)
        self.damage_box = RectangleShape(size=damage_box.size)
        self.cooldown = cooldown
        self.cooldown_timer = 0.0

    def is_on_cooldown(self) -> bool:
        return self.cooldown_timer > 0

    def set_on_cooldown(self) -> None:
        self.cooldown_timer = self.cooldown


class MeleeAttack(Attack):
    """A close-range attack that deals damage on one frame of its animation."""

    def __init__(
        self,
        attack_state: MonsterState,
        monster,
        cooldown: float,
        aggro_box: FloatRect,
        damage_box: FloatRect,
        damage_frame: int,
        damage: int,
        damage_box_offset: Vector2 = Vector2(),
    ) -> None:
        super().__init__(attack_state, monster, cooldown, aggro_box, damage_box)
        self.damage_frame = damage_frame
        self.damage = damage
        self.damage_box_offset = damage_box_offset
        self.dealt = False

    def update_box_bounds(self) -> None:
        """Place the boxes beside the monster's hitbox, on the side it faces."""
        origin = self.monster.hitbox.position
        offset = self.damage_box_offset
        for box in (self.aggro_box, self.damage_box):
            box.position = origin
            if self.monster.x_axis_inverted:
                box.move(Vector2(-box.size.x - offset.x, offset.y))
            else:
                box.move(Vector2(box.size.x + offset.x, offset.y))

    def update_during_attack(self, players, delta_time: float) -> None:
        """Deal damage on the damage frame; return to walking when the animation ends."""
        monster = self.monster
        if self.cooldown_timer <= 0 and monster.anim.curr_frame == self.damage_frame:
            damage_bounds = self.damage_box.global_bounds()
            for player in players:
                if player.is_dead():
                    continue
                if damage_bounds.intersects(player.global_bounds()):
                    player.take_damage(self.damage)
                self.set_on_cooldown()
                self.dealt = True
        if monster.anim.curr_frame == 0 and self.dealt:
            monster.anim = monster.anim_map[MonsterState.WALK].copy()
            monster.anim_state = MonsterState.WALK

    def start_attack(self, player) -> None:
        self.monster.anim = self.monster.anim_map[self.attack_state].copy()
        self.monster.anim_state = self.attack_state
        self.dealt = False

    def check_conditions_and_attack(self, players) -> None:
        """Start attacking the first living player inside the aggro box, if off cooldown."""
        aggro_bounds = self.aggro_box.global_bounds()
        for player in players:
            if player.is_dead():
                continue
            if self.cooldown_timer <= 0 and aggro_bounds.intersects(player.global_bounds()):
                self.start_attack(player)
                break