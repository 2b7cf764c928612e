import random

from hordeshooter.aoe import (
    FIRE_DURATION,
    MAX_RANDOM_ROTATION,
    AoE,
    Explosion,
    ExplosionData,
    update_aoe,
)
from hordeshooter.character import AnimData, Character
from hordeshooter.effects import OnFire, Paralyzed
from hordeshooter.geometry import Color, FloatRect, Vector2


def anim(frames=3):
    return AnimData("explosion", FloatRect(Vector2(0, 0), Vector2(64, 64)), total_frames=frames, anim_speed=0.1)


class Target(Character):
    def __init__(self, position):
        base = AnimData("monster", FloatRect(Vector2(0, 0), Vector2(32, 32)))
        super().__init__(position, base, Color.RED, Color.YELLOW, 100, 1.0, 1.0)
        self.paralyzed = Paralyzed(self)
        self.on_fire = OnFire(self)


def test_aoe_origin_at_frame_center():
    effect = AoE(anim(), Vector2(10, 20))
    assert effect.sprite.origin == Vector2(32, 32)
    assert effect.sprite.position == Vector2(10, 20)
    assert effect.is_active


def test_update_aoe_drops_finished_effects():
    effects = [AoE(anim(frames=1), Vector2()), AoE(anim(frames=3), Vector2())]
    update_aoe(effects, [], 0.2)
    assert len(effects) == 1
    assert effects[0].anim.total_frames == 3


def test_update_aoe_keeps_effects_between_frames():
    effects = [AoE(anim(frames=1), Vector2())]
    update_aoe(effects, [], 0.05)
    assert len(effects) == 1


def test_explosion_damages_only_monsters_in_radius_once():
    near = Target(Vector2(110, 100))
    far = Target(Vector2(600, 100))
    explosion = Explosion(anim(), Vector2(100, 100), ExplosionData(damage=30, radius=50), random.Random(1))
    explosion.update([near, far], 0.01)
    assert near.health == 70
    assert far.health == 100
    assert not explosion.is_active
    explosion.update([near, far], 0.01)
    assert near.health == 70


def test_explosion_waits_for_delay():
    target = Target(Vector2(100, 100))
    data = ExplosionData(damage=30, radius=50, delay=0.5)
    explosion = Explosion(anim(frames=10), Vector2(100, 100), data, random.Random(1))
    explosion.update([target], 0.2)
    assert target.health == 100
    explosion.update([target], 0.3)
    assert target.health == 100
    explosion.update([target], 0.01)
    assert target.health == 70
    assert data.delay == 0.5


def test_paralyzing_explosion_paralyzes():
    target = Target(Vector2(100, 100))
    data = ExplosionData(damage=0, radius=50, set_paralyze=True, set_fire=True)
    Explosion(anim(), Vector2(100, 100), data, random.Random(1)).damage_neighbours([target])
    assert target.paralyzed.is_active()
    assert not target.on_fire.is_active()


def test_fire_explosion_sets_fire():
    target = Target(Vector2(100, 100))
    data = ExplosionData(damage=0, radius=50, set_fire=True)
    Explosion(anim(), Vector2(100, 100), data, random.Random(1)).damage_neighbours([target])
    assert target.on_fire.time_left == FIRE_DURATION
    assert not target.paralyzed.is_active()


def test_explosion_scale_and_random_rotation():
    data = ExplosionData(damage=10, radius=20, scale=2.5)
    explosion = Explosion(anim(), Vector2(), data, random.Random(7))
    assert explosion.sprite.scale == Vector2(2.5, 2.5)
    assert 0.0 <= explosion.sprite.rotation <= MAX_RANDOM_ROTATION
    again = Explosion(anim(), Vector2(), data, random.Random(7))
    assert again.sprite.rotation == explosion.sprite.rotation