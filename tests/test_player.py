import random
from types import SimpleNamespace

import pytest

from hordeshooter.blood import GROUND_ANIMATION, GroundBlood
from hordeshooter.geometry import Vector2
from hordeshooter.player import (
    PLAYER_ANIMATIONS,
    InputState,
    Player,
    PlayerState,
)


def make_world():
    return SimpleNamespace(ground_blood=[], footprints=[])


class FakeWeapon:
    def __init__(self, owner=None):
        self.owner = owner
        self.upgrades = 0
        self.updates = []

    def update(self, world, player, mouse_position, delta_time):
        self.updates.append((player, mouse_position, delta_time))

    def upgrade(self):
        self.upgrades += 1


def test_initial_state():
    player = Player(Vector2(700, 600))
    assert player.health == 500
    assert player.movement_speed == 5.0
    assert player.is_dead() is False
    assert player.curr_state is PlayerState.IDLE


def test_move_right():
    player = Player(Vector2(700, 600))
    state = player.move(InputState(keys=frozenset({"d"})), make_world(), 0.016)
    assert state is PlayerState.WALK
    assert player.position().x == pytest.approx(705)
    assert player.position().y == pytest.approx(600)


def test_move_blocked_at_left_bound_still_walks():
    player = Player(Vector2(2, 300))
    state = player.move(InputState(keys=frozenset({"a"})), make_world(), 0.016)
    assert state is PlayerState.WALK
    assert player.position() == Vector2(2, 300)


def test_diagonal_move_is_normalized():
    player = Player(Vector2(500, 300))
    start = player.position()
    player.move(InputState(keys=frozenset({"d", "s"})), make_world(), 0.016)
    assert (player.position() - start).length() == pytest.approx(player.movement_speed)


def test_no_keys_is_idle():
    player = Player(Vector2(500, 300))
    state = player.move(InputState(), make_world(), 0.016)
    assert state is PlayerState.IDLE
    assert player.position() == Vector2(500, 300)


def test_trigger_happy_shooting_states():
    player = Player(Vector2(500, 300))
    player.trigger_happy = 3.0
    idle = player.move(InputState(mouse_left=True), make_world(), 0.1)
    assert idle is PlayerState.SHOOT_IDLE
    assert player.trigger_happy == pytest.approx(3.1)
    walking = player.move(InputState(keys=frozenset({"d"}), mouse_left=True), make_world(), 0.1)
    assert walking is PlayerState.SHOOT_WALK


def test_releasing_mouse_resets_trigger():
    player = Player(Vector2(500, 300))
    player.trigger_happy = 3.0
    player.move(InputState(), make_world(), 0.1)
    assert player.trigger_happy == 0.0


def test_facing_follows_mouse():
    player = Player(Vector2(500, 300))
    player.set_mouse_position(Vector2(100, 300))
    player.set_facing_direction()
    assert player.sprite.scale.x > 0
    player.set_mouse_position(Vector2(900, 300))
    player.set_facing_direction()
    assert player.sprite.scale.x < 0
    assert player.mouse_relative == Vector2(400, 0)


def test_hit_state_uses_walk_animation():
    player = Player(Vector2(500, 300))
    player.set_anim_by_state(PlayerState.HIT)
    assert player.curr_state is PlayerState.HIT
    assert player.anim.texture_frame == PLAYER_ANIMATIONS[PlayerState.WALK].texture_frame
    assert player.sprite.texture_rect == player.anim.texture_frame


def test_handle_death_hangs_on_last_frame():
    player = Player(Vector2(500, 300))
    player.handle_death(0.0)
    assert player.curr_state is PlayerState.DEATH
    assert player.anim.hang_last_frame is True
    for _ in range(20):
        player.handle_death(1.0)
    assert player.anim.curr_frame == player.anim.total_frames - 1


def test_update_dead_player_enters_death():
    player = Player(Vector2(500, 300))
    player.take_damage(1000)
    player.update(make_world(), InputState(keys=frozenset({"d"})), 0.016)
    assert player.curr_state is PlayerState.DEATH
    assert player.position() == Vector2(500, 300)


def test_update_changes_state_and_moves():
    player = Player(Vector2(500, 300))
    player.update(make_world(), InputState(keys=frozenset({"d"}), mouse_position=Vector2(0, 0)), 0.016)
    assert player.curr_state is PlayerState.WALK
    assert player.position().x > 500
    assert player.mouse_global == Vector2(0, 0)


def test_weapon_cycling_and_upgrade():
    player = Player(Vector2(500, 300), weapons={"k": FakeWeapon})
    player.move(InputState(keys=frozenset({"k"})), make_world(), 0.016)
    weapon = player.weapon
    assert isinstance(weapon, FakeWeapon)
    assert weapon.owner is player
    player.move(InputState(keys=frozenset({"space"})), make_world(), 0.016)
    assert player.weapon is weapon
    assert weapon.upgrades == 1


def test_update_drives_weapon():
    weapon = FakeWeapon()
    player = Player(Vector2(500, 300), weapon=weapon)
    player.update(make_world(), InputState(mouse_position=Vector2(10, 20)), 0.5)
    assert weapon.updates == [(player, Vector2(10, 20), 0.5)]


def test_foot_collider_is_at_bottom_of_bounds():
    player = Player(Vector2(500, 300))
    collider = player.foot_collider()
    bounds = player.global_bounds()
    assert collider == player.footprint_manager.foot_collider(bounds)
    assert collider.bottom == pytest.approx(bounds.bottom)
    assert collider.size.x < bounds.size.x


def test_walking_through_blood_leaves_footprints():
    player = Player(Vector2(500, 300))
    world = make_world()
    feet = player.foot_collider().center()
    world.ground_blood.append(GroundBlood(GROUND_ANIMATION, feet, random.Random(0)))
    player.footprint_manager.dt_sum = 1.0
    player.move(InputState(keys=frozenset({"d"})), world, 0.016)
    assert len(world.footprints) == 1
    assert player.footprint_manager.decay_timer > 0