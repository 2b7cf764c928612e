"""The wolf: a fast monster that leaps at players from a distance."""

from __future__ import annotations

import math

from .attacks import MeleeAttack, MonsterState
from .character import AnimData, Sprite, advance_animation
from .geometry import FloatRect, Vector2
from .monster import Monster

WOLF_TEXTURE = "wolf"
WOLF_SHEET_COLUMNS = 8
WOLF_FRAME_SIZE = Vector2(96, 64)

DEATH_DT_SUM_PER_FRAME = 0.10
DEATH_ROTATE_PER_FRAME_DEG = 5
MOVEMENT_SPEED = 7.0
JUMP_COOLDOWN = 8.0
JUMP_MOVEMENT = 15.0
JUMP_TRACKING_RADIUS = 170.0
JUMP_LANDING_RADIUS = 50.0
ON_TOP_RADIUS = 10.0
FREEZE_JAW_FRAME = 22
DAMAGE_FRAME = 23
ATTACK_COOLDOWN = 0.9
ATTACK_DAMAGE = 100


def _grid(row: int, frames: int, speed: float) -> AnimData:
    return AnimData(
        WOLF_TEXTURE,
        FloatRect(Vector2(0, row * WOLF_FRAME_SIZE.y), WOLF_FRAME_SIZE),
        total_frames=frames,
        anim_speed=speed,
    )


WOLF_ANIMATIONS: dict[MonsterState, AnimData] = {
    MonsterState.RUN: _grid(0, 8, 0.05),
    MonsterState.WALK: _grid(1, 8, 0.1),
    MonsterState.IDLE: _grid(2, 8, 0.1),
    MonsterState.ATTACK1: _grid(3, 26, 0.03),
    MonsterState.DEATH: _grid(7, 8, 0.1),
}


def _safe_normalized(vector: Vector2) -> Vector2:
    return vector.normalized() if vector.length() > 0 else Vector2()


def _advance_grid_animation(
    sprite: Sprite, anim: AnimData, delta_time: float, columns: int = WOLF_SHEET_COLUMNS
) -> bool:
    """Advance an animation whose frames wrap over several rows; True when it completes."""
    anim.delta_time_sum += delta_time
    if anim.delta_time_sum < anim.anim_speed:
        return False
    anim.delta_time_sum = 0.0
    frame = anim.texture_frame
    base_y = frame.position.y - (anim.curr_frame // columns) * frame.size.y
    next_frame = anim.curr_frame + 1
    finished = next_frame >= anim.total_frames
    if finished:
        next_frame = anim.total_frames - 1 if anim.hang_last_frame else 0
    anim.curr_frame = next_frame
    x = anim.first_frame_x + (next_frame % columns) * anim.frame_spacing
    y = base_y + (next_frame // columns) * frame.size.y
    anim.texture_frame = FloatRect(Vector2(x, y), frame.size)
    sprite.texture_rect = anim.texture_frame
    return finished


class Wolf(Monster):
    """A monster that runs at players and leaps with its jaws open."""

    horizontal_hitbox = True

    def __init__(self, position: Vector2) -> None:
        super().__init__(
            position,
            WOLF_ANIMATIONS[MonsterState.RUN],
            1000,
            MOVEMENT_SPEED,
            1.0,
            0.2,
            0.35,
        )
        self.freeze_jaw = False
        self.jump_cd = JUMP_COOLDOWN
        self.jump_cd_timer = 0.0
        self.anim_map = {state: anim.copy() for state, anim in WOLF_ANIMATIONS.items()}
        self.anim_map[MonsterState.DEATH].hang_last_frame = True
        self.attack_map = {MonsterState.ATTACK1: self._create_attack()}
        frame = self.anim.texture_frame
        self.sprite.texture_rect = frame
        self.sprite.origin = Vector2(frame.size.x * 0.45, frame.size.y * 0.5)

    def _create_attack(self) -> WolfAttack:
        hitbox = self.update_hitbox()
        damage_box = FloatRect(hitbox.position, Vector2(hitbox.size.x * 0.85, hitbox.size.y))
        bounds = self.global_bounds()
        aggro_box = FloatRect(bounds.position, bounds.size * 1.2)
        return WolfAttack(
            MonsterState.ATTACK1, self, ATTACK_COOLDOWN, aggro_box, damage_box, DAMAGE_FRAME, ATTACK_DAMAGE
        )

    def handle_attacks(self, players, delta_time: float) -> None:
        attack = self.attack_map[MonsterState.ATTACK1]
        attack.update_box_bounds()
        if attack.is_on_cooldown():
            attack.cooldown_timer -= delta_time
        if self.jump_cd_timer > 0:
            self.jump_cd_timer = max(0.0, self.jump_cd_timer - delta_time)
        if self.anim_state is MonsterState.ATTACK1:
            attack.update_during_attack(players, delta_time)
        else:
            attack.check_conditions_and_attack(players)

    def update_dead(self, delta_time: float) -> None:
        """Play the death animation while tipping the body over."""
        self.update_state_and_animation(MonsterState.DEATH)
        advance_animation(self.sprite, self.anim, delta_time)
        self.time_since_death += delta_time
        target = 330 if self.x_axis_inverted else 30
        if self.death_dt_sum < DEATH_DT_SUM_PER_FRAME:
            current = math.degrees(self.sprite.rotation)
            if self.x_axis_inverted and (current > 330 or abs(current) < 0.1):
                if current <= 0 or current >= target:
                    self.sprite.rotate(math.radians(-DEATH_ROTATE_PER_FRAME_DEG))
                    self.sprite.move(Vector2(0, 3))
            elif not self.x_axis_inverted and (abs(current) < 0.1 or current < 30):
                if current <= target:
                    self.sprite.rotate(math.radians(DEATH_ROTATE_PER_FRAME_DEG))
                    self.sprite.move(Vector2(0, 1))
            self.death_dt_sum = 0.0
        self.death_dt_sum += delta_time

    def update_hitbox(self) -> FloatRect:
        """A low, narrow box around the body, shifted to the side the head is on."""
        bounds = self.sprite.global_bounds()
        ratio = 0.35 if self.x_axis_inverted else self.x_hit_ratio
        self.hitbox = FloatRect(
            Vector2(
                bounds.position.x + bounds.size.x * ratio,
                bounds.position.y + bounds.size.y * self.y_hit_ratio,
            ),
            Vector2(bounds.size.x * 0.45, bounds.size.y * 0.25),
        )
        return self.hitbox

    def update_current_animation(self, delta_time: float) -> None:
        if self.has_no_disabling_effects(False) and not self.freeze_jaw:
            _advance_grid_animation(self.sprite, self.anim, delta_time)

    def handle_knockback(self) -> None:
        """A knockback mid-leap closes the jaws and starts the jump cooldown."""
        if self.freeze_jaw:
            self.freeze_jaw = False
            self.jump_cd_timer = self.jump_cd

    def base_updates(self, direction: Vector2) -> None:
        """Turn the wolf to face along the direction, limiting steep angles unless attacking."""
        self.x_axis_inverted = direction.x < 0
        original = math.degrees(math.atan2(direction.y, direction.x))
        if original == -90.0:
            original = -90.1
            self.x_axis_inverted = True
        elif original == 90.0:
            original = 90.1
        degrees = original
        if self.anim_state is not MonsterState.ATTACK1:
            if 50.0 < original <= 90.0:
                degrees = 50.0
            elif 90.0 <= original < 130.0:
                degrees = 130.0
            elif -125.0 < original <= -90.0:
                degrees = -125.0
            elif -90.0 <= original < -55.0:
                degrees = -55.0
        scale = self.sprite.scale
        if self.x_axis_inverted:
            self.sprite.scale = Vector2(-abs(scale.x), scale.y)
            self.sprite.rotation = math.radians(degrees + 180.0)
        else:
            self.sprite.scale = Vector2(abs(scale.x), scale.y)
            self.sprite.rotation = math.radians(degrees)


class WolfAttack(MeleeAttack):
    """A bite that turns into a leap at the target while the jump is ready."""

    def __init__(
        self,
        attack_state: MonsterState,
        monster: Wolf,
        cooldown: float,
        aggro_box: FloatRect,
        damage_box: FloatRect,
        damage_frame: int,
        damage: int,
    ) -> None:
        super().__init__(attack_state, monster, cooldown, aggro_box, damage_box, damage_frame, damage)
        self.jump_movement = JUMP_MOVEMENT
        self.normalized_dir = Vector2()
        self.target_position = Vector2()
        self.player_to_jump = None

    def update_box_bounds(self) -> None:
        """Attach the boxes to the front of the hitbox, rotated with the sprite."""
        hitbox = self.monster.hitbox
        mid_y = hitbox.position.y + hitbox.size.y / 2
        for box in (self.aggro_box, self.damage_box):
            if self.monster.x_axis_inverted:
                box.origin = Vector2(box.size.x, box.size.y / 2)
                box.position = Vector2(hitbox.position.x + hitbox.size.x * 0.1, mid_y)
            else:
                box.origin = Vector2(0, box.size.y / 2)
                box.position = Vector2(hitbox.position.x + hitbox.size.x * 0.9, mid_y)
            box.rotation = self.monster.sprite.rotation

    def update_during_attack(self, players, delta_time: float) -> None:
        wolf = self.monster
        center = wolf.hitbox.center()
        if self.player_to_jump is not None:
            if (self.player_to_jump.position() - center).length() < JUMP_TRACKING_RADIUS:
                self.target_position = self.player_to_jump.position()
                self.normalized_dir = _safe_normalized(self.target_position - center)

        landing = self.damage_box.global_bounds().center() - self.target_position
        if landing.length() < JUMP_LANDING_RADIUS:
            if wolf.freeze_jaw:
                wolf.freeze_jaw = False
                wolf.jump_cd_timer = wolf.jump_cd
        elif wolf.jump_cd_timer <= 0 and wolf.anim.curr_frame == FREEZE_JAW_FRAME:
            wolf.freeze_jaw = True
            wolf.sprite.move(self.normalized_dir * self.jump_movement)

        if not self.dealt and wolf.anim.curr_frame == self.damage_frame:
            damage_bounds = self.damage_box.global_bounds()
            for player in players:
                if player.is_dead():
                    continue
                if damage_bounds.intersects(player.global_bounds()):
                    player.take_damage(self.damage)
            self.set_on_cooldown()
            self.dealt = True

        if wolf.anim.curr_frame == 0 and self.dealt:
            wolf.update_state_and_animation(MonsterState.WALK)
            wolf.movement_speed = MOVEMENT_SPEED / 5

        if wolf.jump_cd_timer > 0:
            wolf_bounds = wolf.global_bounds()
            for player in players:
                if player.global_bounds().intersects(wolf_bounds):
                    wolf.base_updates(player.position() - wolf.hitbox.center())
                    break
        else:
            wolf.base_updates(self.normalized_dir)

        if self.player_to_jump is not None:
            if (self.player_to_jump.position() - wolf.hitbox.center()).length() < ON_TOP_RADIUS:
                wolf.sprite.move(Vector2(-10, 0))

    def check_conditions_and_attack(self, players) -> None:
        """Leap from the large aggro box when the jump is ready, else bite at close range."""
        wolf = self.monster
        aggro_bounds = self.aggro_box.global_bounds()
        for player in players:
            if player.is_dead():
                continue
            if wolf.jump_cd_timer <= 0:
                trigger = aggro_bounds.intersects(player.global_bounds())
            else:
                trigger = player.global_bounds().intersects(wolf.hitbox)
            if self.cooldown_timer <= 0 and trigger:
                self.start_attack(player)
                break
        if self.cooldown_timer <= 0 and wolf.anim_state is MonsterState.WALK:
            wolf.update_state_and_animation(MonsterState.RUN)
            wolf.movement_speed = MOVEMENT_SPEED

    def start_attack(self, player) -> None:
        self.monster.update_state_and_animation(self.attack_state)
        self.dealt = False
        self.target_position = player.position()
        self.normalized_dir = _safe_normalized(self.target_position - self.monster.hitbox.center())
        self.player_to_jump = player