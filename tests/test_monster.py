import random
from dataclasses import dataclass, field

import pytest

from hordeshooter.attacks import MeleeAttack, MonsterState
from hordeshooter.character import AnimData, Character
from hordeshooter.effects import ON_FIRE_DAMAGE
from hordeshooter.geometry import Color, FloatRect, Vector2
from hordeshooter.monster import DISAPPEAR_TIME, Monster

SIZE = Vector2(40, 40)


def _anim(y=0, frames=4, hang=False):
    return AnimData("test", FloatRect(Vector2(0, y), SIZE), total_frames=frames, anim_speed=0.1, hang_last_frame=hang)


def make_monster(position=Vector2(0, 0), health=300, speed=2.0, x_ratio=0.25, y_ratio=0.5):
    monster = Monster(position, _anim(), health, speed, 1.0, x_ratio, y_ratio)
    monster.anim_map = {
        MonsterState.WALK: _anim(0),
        MonsterState.IDLE: _anim(40),
        MonsterState.ATTACK1: _anim(80),
        MonsterState.DEATH: _anim(120, hang=True),
    }
    box = monster.update_hitbox()
    monster.attack_map = {
        MonsterState.ATTACK1: MeleeAttack(MonsterState.ATTACK1, monster, 1.0, box, box, 2, 50)
    }
    return monster


def make_player(position):
    return Character(position, AnimData("player", FloatRect(Vector2(), SIZE)), Color.GREEN, Color.RED, 500, 5.0, 1.0)


@dataclass
class FakeProjectile:
    bounds: FloatRect
    damage: int = 40
    creates_blood: bool = True
    source_position: Vector2 = Vector2(-200, 0)
    spent: bool = True
    hits: set = field(default_factory=set)

    def position(self):
        return self.bounds.center()

    def global_bounds(self):
        return self.bounds

    def has_hit(self, character_id):
        return character_id in self.hits

    def update_projectile_status(self, monster, world):
        self.hits.add(monster.id)
        return self.spent


@dataclass
class FakeWorld:
    players: list
    projectiles: list = field(default_factory=list)
    blood_spray: list = field(default_factory=list)
    ground_blood: list = field(default_factory=list)
    rng: random.Random = field(default_factory=lambda: random.Random(1))


def test_hitbox_with_zero_ratios_matches_sprite_bounds():
    monster = make_monster(x_ratio=0.0, y_ratio=0.0)
    assert monster.update_hitbox() == monster.global_bounds()


def test_hitbox_is_centred_and_bottom_aligned():
    monster = make_monster(position=Vector2(50, 70))
    hitbox = monster.update_hitbox()
    bounds = monster.global_bounds()
    assert hitbox.center().x == pytest.approx(bounds.center().x)
    assert hitbox.bottom == pytest.approx(bounds.bottom)
    assert hitbox.size.x < bounds.size.x
    assert monster.hitbox == hitbox


def test_move_towards_player_on_the_right():
    monster = make_monster()
    monster.move_towards([make_player(Vector2(100, 0))])
    assert monster.position() == Vector2(2.0, 0.0)
    assert monster.x_axis_inverted is False


def test_move_towards_player_on_the_left_flips():
    monster = make_monster()
    monster.move_towards([make_player(Vector2(-100, 0))])
    assert monster.position() == Vector2(-2.0, 0.0)
    assert monster.x_axis_inverted is True
    assert monster.sprite.scale.x < 0


def test_disabled_movement_still_turns():
    monster = make_monster()
    monster.disabled_movement = True
    monster.move_towards([make_player(Vector2(-100, 0))])
    assert monster.position() == Vector2(0, 0)
    assert monster.x_axis_inverted is True


def test_slow_reduces_step():
    monster = make_monster()
    monster.slowed.apply_slow(5.0, 0.5)
    monster.move_towards([make_player(Vector2(100, 0))])
    assert monster.position() == Vector2(1.0, 0.0)


def test_no_move_when_on_top_of_player():
    monster = make_monster()
    monster.move_towards([make_player(Vector2(0.5, 0))])
    assert monster.position() == Vector2(0, 0)


def test_update_facing_direction_toggles_back():
    monster = make_monster()
    monster.update_facing_direction(Vector2(-1, 0))
    monster.update_facing_direction(Vector2(1, 0))
    assert monster.x_axis_inverted is False
    assert monster.sprite.scale.x > 0


def test_state_change_resets_animation():
    monster = make_monster()
    monster.anim.curr_frame = 3
    monster.update_state_and_animation(MonsterState.IDLE)
    assert monster.anim_state is MonsterState.IDLE
    assert monster.anim.curr_frame == 0
    assert monster.anim.texture_frame.position.y == 40
    monster.anim.curr_frame = 2
    monster.update_state_and_animation(MonsterState.IDLE)
    assert monster.anim.curr_frame == 2


def test_is_attacking():
    monster = make_monster()
    assert monster.is_attacking() is False
    monster.update_state_and_animation(MonsterState.ATTACK1)
    assert monster.is_attacking() is True


def test_handle_attacks_counts_down_cooldown():
    monster = make_monster()
    monster.attack_map[MonsterState.ATTACK1].cooldown_timer = 1.0
    monster.handle_attacks([make_player(Vector2(500, 500))], 0.25)
    assert monster.attack_map[MonsterState.ATTACK1].cooldown_timer == pytest.approx(0.75)
    assert monster.anim_state is MonsterState.WALK


def test_handle_attacks_starts_attack_on_close_player():
    monster = make_monster()
    monster.update_hitbox()
    monster.handle_attacks([make_player(Vector2(20, 10))], 0.01)
    assert monster.anim_state is MonsterState.ATTACK1


def test_is_idle_when_first_player_dead():
    monster = make_monster()
    player = make_player(Vector2(300, 0))
    player.health = 0
    assert monster.is_idle([player]) is True
    assert monster.anim_state is MonsterState.IDLE


def test_not_idle_when_ready_and_player_alive():
    monster = make_monster()
    assert monster.is_idle([make_player(Vector2(300, 0))]) is False
    assert monster.anim_state is MonsterState.WALK


def test_idle_monster_walks_again_after_cooldown():
    monster = make_monster()
    monster.update_state_and_animation(MonsterState.IDLE)
    assert monster.is_idle([make_player(Vector2(300, 0))]) is False
    assert monster.anim_state is MonsterState.WALK


def test_idle_while_on_cooldown_next_to_player():
    monster = make_monster()
    monster.update_hitbox()
    monster.attack_map[MonsterState.ATTACK1].cooldown_timer = 0.5
    assert monster.is_idle([make_player(Vector2(0, 0))]) is True
    assert monster.has_attacks_on_cooldown() is True


def test_knockback_disables_and_moves_only_when_applied():
    monster = make_monster()
    monster.knockback.set(10.0, Vector2(3, 0))
    assert monster.has_no_disabling_effects(False) is False
    assert monster.position() == Vector2(0, 0)
    assert monster.has_no_disabling_effects(True) is False
    assert monster.position() == Vector2(3, 0)
    assert monster.knockback.debt == pytest.approx(7.0)


def test_paralysis_disables_monster():
    monster = make_monster()
    assert monster.has_no_disabling_effects(False) is True
    monster.paralyzed.attempt_apply(2.0)
    assert monster.has_no_disabling_effects(False) is False


def test_fire_damages_through_status_effects():
    monster = make_monster(health=300)
    monster.on_fire.apply(1.0)
    monster.update_status_effects(0.3)
    monster.update_status_effects(0.3)
    assert monster.health == 300 - ON_FIRE_DAMAGE


def test_paralysis_cooldown_counts_down_when_inactive():
    monster = make_monster()
    monster.paralyzed.disabled_cd = 1.0
    monster.update_status_effects(0.4)
    assert monster.paralyzed.disabled_cd == pytest.approx(0.6)


def test_projectile_hit_damages_and_bleeds():
    monster = make_monster(health=300)
    monster.update_hitbox()
    world = FakeWorld(players=[], projectiles=[FakeProjectile(monster.hitbox, damage=40)])
    monster.update_collisions(world)
    assert monster.health == 260
    assert len(world.blood_spray) == 1
    assert len(world.ground_blood) == 1
    assert world.projectiles == []


def test_projectile_that_already_hit_does_no_damage():
    monster = make_monster(health=300)
    monster.update_hitbox()
    projectile = FakeProjectile(monster.hitbox, spent=False, hits={monster.id})
    world = FakeWorld(players=[], projectiles=[projectile])
    monster.update_collisions(world)
    assert monster.health == 300
    assert world.projectiles == [projectile]
    assert world.blood_spray == []


def test_projectile_without_blood():
    monster = make_monster(health=300)
    monster.update_hitbox()
    world = FakeWorld(players=[], projectiles=[FakeProjectile(monster.hitbox, damage=10, creates_blood=False)])
    monster.update_collisions(world)
    assert monster.health == 290
    assert world.blood_spray == [] and world.ground_blood == []


def test_missing_projectile_is_left_alone():
    monster = make_monster(health=300)
    monster.update_hitbox()
    far = FloatRect(Vector2(900, 900), Vector2(5, 5))
    world = FakeWorld(players=[], projectiles=[FakeProjectile(far)])
    monster.update_collisions(world)
    assert monster.health == 300
    assert len(world.projectiles) == 1


def test_update_alive_moves_towards_player():
    monster = make_monster()
    world = FakeWorld(players=[make_player(Vector2(200, 0))])
    assert monster.update(world, 0.01) is False
    assert monster.position() == Vector2(2.0, 0.0)


def test_dead_monster_removed_after_disappear_time():
    monster = make_monster()
    monster.health = 0
    world = FakeWorld(players=[make_player(Vector2(200, 0))])
    assert monster.update(world, DISAPPEAR_TIME + 1) is True
    assert monster.anim_state is MonsterState.DEATH


def test_dead_monster_kept_before_disappear_time():
    monster = make_monster()
    monster.health = 0
    world = FakeWorld(players=[make_player(Vector2(200, 0))])
    assert monster.update(world, 1.0) is False
    assert monster.time_since_death == pytest.approx(1.0)


def test_deletion_needs_strictly_more_than_disappear_time():
    monster = make_monster()
    monster.update_dead(DISAPPEAR_TIME)
    assert monster.is_ready_for_deletion() is False
    monster.update_dead(0.01)
    assert monster.is_ready_for_deletion() is True