"""The player: keyboard movement, aiming, weapons and footprints."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable, Mapping, Protocol

from .blood import FootprintManager
from .character import AnimData, Character, advance_animation
from .geometry import Color, FloatRect, Vector2

PLAYER_TEXTURE = "player"
PLAYER_FRAME_SIZE = Vector2(64, 64)
PLAYER_HEALTH = 500
PLAYER_SPEED = 5.0
PLAYER_SCALE = 1.0
TRIGGER_HAPPY_TIME = 2.5
MAP_BOUNDS = FloatRect(Vector2(0, 0), Vector2(1200, 720))

KEY_LEFT = "a"
KEY_RIGHT = "d"
KEY_UP = "w"
KEY_DOWN = "s"
KEY_UPGRADE = "space"


class PlayerState(Enum):
    IDLE = auto()
    WALK = auto()
    HIT = auto()
    SHOOT_WALK = auto()
    SHOOT_IDLE = auto()
    DEATH = auto()


def _row(row: int, frames: int, speed: float = 0.1) -> AnimData:
    return AnimData(
        PLAYER_TEXTURE,
        FloatRect(Vector2(0, row * PLAYER_FRAME_SIZE.y), PLAYER_FRAME_SIZE),
        total_frames=frames,
        anim_speed=speed,
    )


_WALK = _row(1, 8)
PLAYER_ANIMATIONS: dict[PlayerState, AnimData] = {
    PlayerState.IDLE: _row(0, 4),
    PlayerState.WALK: _WALK,
    PlayerState.HIT: _WALK,
    PlayerState.SHOOT_WALK: _row(2, 8),
    PlayerState.SHOOT_IDLE: _row(3, 4),
    PlayerState.DEATH: _row(4, 6),
}


@dataclass(frozen=True)
class InputState:
    """Keys held, the mouse position in the window and whether the left button is down."""

    keys: frozenset[str] = field(default_factory=frozenset)
    mouse_position: Vector2 = Vector2()
    mouse_left: bool = False


class Weapon(Protocol):
    def update(self, world, player: Player, mouse_position: Vector2, delta_time: float) -> None: ...

    def upgrade(self) -> None: ...


class Player(Character):
    """The character controlled with the keyboard and mouse."""

    def __init__(
        self,
        position: Vector2,
        anim: AnimData | None = None,
        bounds: FloatRect = MAP_BOUNDS,
        weapons: Mapping[str, Callable[[Player], Weapon]] | None = None,
        weapon: Weapon | None = None,
    ) -> None:
        super().__init__(
            position,
            anim or PLAYER_ANIMATIONS[PlayerState.IDLE],
            Color.GREEN,
            Color.RED,
            PLAYER_HEALTH,
            PLAYER_SPEED,
            PLAYER_SCALE,
        )
        self.bounds = bounds
        self.weapons = dict(weapons or {})
        self.weapon = weapon
        self.death_timer = 0.0
        self.curr_state = PlayerState.IDLE
        self.trigger_happy = 0.0
        self.footprint_manager = FootprintManager()
        self.mouse_global = Vector2()
        self.mouse_relative = Vector2()

    def _show_anim(self) -> None:
        self.sprite.texture = self.anim.texture
        self.sprite.texture_rect = self.anim.texture_frame

    def handle_death(self, delta_time: float) -> None:
        """Switch to the death animation, then play it through to its last frame."""
        if self.curr_state is not PlayerState.DEATH:
            self.anim = PLAYER_ANIMATIONS[PlayerState.DEATH].copy()
            self.anim.hang_last_frame = True
            self.curr_state = PlayerState.DEATH
            self._show_anim()
        else:
            advance_animation(self.sprite, self.anim, delta_time)

    def set_facing_direction(self) -> None:
        if self.mouse_relative.x < 0:
            self.sprite.scale = Vector2(self.scale, self.scale)
        else:
            self.sprite.scale = Vector2(-self.scale, self.scale)

    def move(self, inputs: InputState, world, delta_time: float) -> PlayerState:
        """Move from the held keys within the map bounds; return the resulting state."""
        state = PlayerState.IDLE
        x, y = self.sprite.position.x, self.sprite.position.y
        speed = self.movement_speed
        dx = dy = 0.0
        if KEY_LEFT in inputs.keys:
            state = PlayerState.WALK
            if x - speed >= self.bounds.left:
                dx -= 1
        if KEY_RIGHT in inputs.keys:
            state = PlayerState.WALK
            if x + speed <= self.bounds.right:
                dx += 1
        if KEY_UP in inputs.keys:
            state = PlayerState.WALK
            if y - speed >= self.bounds.top:
                dy -= 1
        if KEY_DOWN in inputs.keys:
            state = PlayerState.WALK
            if y + speed <= self.bounds.bottom:
                dy += 1

        if self.trigger_happy > TRIGGER_HAPPY_TIME:
            state = PlayerState.SHOOT_WALK if state is PlayerState.WALK else PlayerState.SHOOT_IDLE

        if inputs.mouse_left:
            self.trigger_happy += delta_time
        else:
            self.trigger_happy = 0.0

        next_move = Vector2(dx, dy)
        if next_move.length() > 0:
            direction = next_move.normalized()
            self.footprint_manager.update(
                self.global_bounds(), direction, world.ground_blood, world.footprints, delta_time
            )
            self.sprite.move(direction * speed)
        self._cycle_weapons(inputs)
        self.set_facing_direction()
        return state

    def _cycle_weapons(self, inputs: InputState) -> None:
        for key, create in self.weapons.items():
            if key in inputs.keys:
                self.weapon = create(self)
        if KEY_UPGRADE in inputs.keys and self.weapon is not None:
            self.weapon.upgrade()

    def set_mouse_position(self, mouse: Vector2) -> None:
        self.mouse_global = mouse
        self.mouse_relative = mouse - self.position()

    def set_anim_by_state(self, state: PlayerState) -> None:
        """Start the animation that belongs to the state from its first frame."""
        self.anim = PLAYER_ANIMATIONS[state].copy()
        self.curr_state = state
        self._show_anim()

    def update(self, world, inputs: InputState, delta_time: float) -> None:
        """Run one frame of input, weapon and animation handling."""
        if self.is_dead():
            self.handle_death(delta_time)
            return
        self.set_mouse_position(inputs.mouse_position)
        self.hud.update(self.health, self.global_bounds())
        state = self.move(inputs, world, delta_time)
        if self.weapon is not None:
            self.weapon.update(world, self, self.mouse_global, delta_time)
        if self.curr_state is not state:
            self.set_anim_by_state(state)
        advance_animation(self.sprite, self.anim, delta_time)

    def foot_collider(self) -> FloatRect:
        return self.footprint_manager.foot_collider(self.global_bounds())