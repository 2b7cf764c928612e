"""Base monster: status effects, attacks, projectile hits and chasing the players."""

from __future__ import annotations

import random
from typing import Protocol

from .attacks import Attack, MonsterState
from .blood import create_projectile_blood
from .character import AnimData, Character, advance_animation
from .effects import Knockback, OnFire, Paralyzed, Shrink, Slowed
from .geometry import Color, FloatRect, Vector2

DISAPPEAR_TIME = 12.0
ON_TOP_DISTANCE = 1.0


class Target(Protocol):
    """What a monster needs to know about a player."""

    def is_dead(self) -> bool: ...

    def take_damage(self, damage: int) -> None: ...

    def position(self) -> Vector2: ...

    def global_bounds(self) -> FloatRect: ...


class Projectile(Protocol):
    """What a monster needs to know about a projectile flying at it."""

    creates_blood: bool
    source_position: Vector2
    damage: int

    def position(self) -> Vector2: ...

    def global_bounds(self) -> FloatRect: ...

    def has_hit(self, character_id: int) -> bool: ...

    def update_projectile_status(self, monster: Monster, world: World) -> bool:
        """Record the hit; return True when the projectile is spent."""
        ...


class World(Protocol):
    """The parts of the game state a monster reads and changes."""

    players: list
    projectiles: list
    blood_spray: list
    ground_blood: list
    rng: random.Random


class Monster(Character):
    """A character that walks towards the first player and attacks when close."""

    horizontal_hitbox = False

    def __init__(
        self,
        position: Vector2,
        anim: AnimData,
        health: int,
        movement_speed: float,
        scale: float,
        x_hit_ratio: float,
        y_hit_ratio: float,
    ) -> None:
        super().__init__(position, anim, Color.RED, Color.YELLOW, health, movement_speed, scale)
        self.death_dt_sum = 0.0
        self.time_since_death = 0.0
        self.x_axis_inverted = False
        self.disabled_movement = False
        self.on_fire = OnFire(self)
        self.paralyzed = Paralyzed(self)
        self.slowed = Slowed(self)
        self.knockback = Knockback(self)
        self.shrink = Shrink(self)
        self.x_hit_ratio = x_hit_ratio
        self.y_hit_ratio = y_hit_ratio
        self.anim_state = MonsterState.WALK
        self.anim_map: dict[MonsterState, AnimData] = {}
        self.attack_map: dict[MonsterState, Attack] = {}
        self.hitbox = FloatRect()
        self.knockback_frames = 0
        self.last_direction = Vector2()

    def is_idle(self, players) -> bool:
        """Decide whether the monster should stand still this frame."""
        if self.has_attacks_on_cooldown() and self.is_next_to_player(players):
            self.update_state_and_animation(MonsterState.IDLE)
            return True
        if self.anim_state is MonsterState.IDLE and self.has_attacks_on_cooldown():
            return True
        if players[0].is_dead():
            self.update_state_and_animation(MonsterState.IDLE)
            return True
        if self.anim_state is MonsterState.IDLE and not self.has_attacks_on_cooldown():
            self.update_state_and_animation(MonsterState.WALK)
        return False

    def is_attacking(self) -> bool:
        return self.anim_state in (MonsterState.ATTACK1, MonsterState.ATTACK2, MonsterState.ATTACK3)

    def has_attacks_on_cooldown(self) -> bool:
        return self.attack_map[MonsterState.ATTACK1].cooldown_timer > 0

    def is_next_to_player(self, players) -> bool:
        """True if the hitbox touches any living player."""
        return any(
            self.hitbox.intersects(player.global_bounds())
            for player in players
            if not player.is_dead()
        )

    def update_status_effects(self, delta_time: float) -> None:
        if self.on_fire.is_active():
            self.on_fire.update(delta_time)
        if self.paralyzed.is_active():
            self.paralyzed.update(delta_time)
        else:
            self.paralyzed.update_disabled_cooldown(delta_time)
        if self.slowed.is_active():
            self.slowed.update(delta_time)
        if self.shrink.is_active():
            self.shrink.update(delta_time)

    def update_dead(self, delta_time: float) -> None:
        self.update_state_and_animation(MonsterState.DEATH)
        self.update_current_animation(delta_time)
        self.time_since_death += delta_time

    def update_state_and_animation(self, state: MonsterState) -> None:
        """Switch to the animation of a new state, starting it from its first frame."""
        if self.anim_state is state:
            return
        self.anim = self.anim_map[state].copy()
        self.anim_state = state
        self.anim.curr_frame = self.anim.init_curr_frame
        self.sprite.texture = self.anim.texture
        self.sprite.texture_rect = self.anim.texture_frame

    def handle_attacks(self, players, delta_time: float) -> None:
        attack = self.attack_map[MonsterState.ATTACK1]
        attack.update_box_bounds()
        if attack.is_on_cooldown():
            attack.cooldown_timer -= delta_time
        if self.anim_state is MonsterState.ATTACK1:
            attack.update_during_attack(players, delta_time)
        else:
            attack.check_conditions_and_attack(players)

    def _process_updates(self, world: World, delta_time: float) -> None:
        self.update_hitbox()
        self.update_collisions(world)
        if self.has_no_disabling_effects(False):
            self.handle_attacks(world.players, delta_time)
        self.hud.update(self.health, self.hitbox)

    def update_current_animation(self, delta_time: float) -> None:
        if self.has_no_disabling_effects(False):
            advance_animation(self.sprite, self.anim, delta_time)

    def has_no_disabling_effects(self, apply: bool) -> bool:
        """True if nothing stops the monster; with apply, carry out a pending knockback."""
        if self.knockback.is_active():
            if apply:
                self.knockback.apply()
                self.handle_knockback()
            return False
        if self.paralyzed.is_active():
            return False
        return True

    def handle_knockback(self) -> None:
        """Count the frames spent being knocked back; monsters may react further."""
        self.knockback_frames += 1

    def is_ready_for_deletion(self) -> bool:
        return self.time_since_death > DISAPPEAR_TIME

    def _flip_x(self) -> None:
        scale = self.sprite.scale
        self.sprite.scale = Vector2(-scale.x, scale.y)

    def update_facing_direction(self, next_move: Vector2) -> None:
        if next_move.x < 0:
            if not self.x_axis_inverted:
                self._flip_x()
                self.x_axis_inverted = True
        elif self.x_axis_inverted:
            self._flip_x()
            self.x_axis_inverted = False

    def update_collisions(self, world: World) -> None:
        """Take damage from projectiles touching the hitbox and leave blood behind."""
        for projectile in list(world.projectiles):
            if not self.hitbox.intersects(projectile.global_bounds()) or self.is_dead():
                continue
            if not projectile.has_hit(self.id):
                if projectile.creates_blood:
                    create_projectile_blood(
                        projectile.position(),
                        projectile.source_position,
                        self.hitbox,
                        world.blood_spray,
                        world.ground_blood,
                        self.horizontal_hitbox,
                        world.rng,
                    )
                self.take_damage(projectile.damage)
            if projectile.update_projectile_status(self, world):
                world.projectiles.remove(projectile)

    def update_hitbox(self) -> FloatRect:
        """Shrink the sprite bounds by the hit ratios: centred sideways, bottom aligned."""
        bounds = self.sprite.global_bounds()
        width = bounds.size.x - bounds.size.x * self.x_hit_ratio * 2
        height = bounds.size.y * (1 - self.y_hit_ratio)
        self.hitbox = FloatRect(
            Vector2(
                bounds.position.x + bounds.size.x * self.x_hit_ratio,
                bounds.position.y + bounds.size.y * self.y_hit_ratio,
            ),
            Vector2(width, height),
        )
        return self.hitbox

    def base_updates(self, direction: Vector2) -> None:
        """Remember the direction to the player; monsters may also turn towards it."""
        self.last_direction = Vector2(direction.x, direction.y)

    def move_towards(self, players) -> None:
        """Step towards the first player, slowed by any slow effect."""
        next_move = players[0].position() - self.sprite.position
        self.base_updates(next_move)
        if next_move.length() > ON_TOP_DISTANCE:
            step = next_move.normalized() * (self.movement_speed * self.slowed.slow_factor)
            self.update_facing_direction(step)
            if not self.disabled_movement:
                self.sprite.move(step)

    def update(self, world: World, delta_time: float) -> bool:
        """Run one frame; return True once the body should be removed."""
        self.update_status_effects(delta_time)
        if self.is_dead():
            self.update_dead(delta_time)
            return self.is_ready_for_deletion()
        self._process_updates(world, delta_time)
        self.update_current_animation(delta_time)
        if self.has_no_disabling_effects(True) and not self.is_attacking():
            if not self.is_idle(world.players):
                self.move_towards(world.players)
        return False