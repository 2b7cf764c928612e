from hordeshooter.attacks import Attack, MeleeAttack, MonsterState
from hordeshooter.character import AnimData, Character
from hordeshooter.geometry import Color, FloatRect, Vector2

BOX = FloatRect(Vector2(0, 0), Vector2(20, 40))


def anim(name, frames=4):
    return AnimData(name, FloatRect(Vector2(0, 0), Vector2(32, 32)), total_frames=frames)


class FakeMonster:
    def __init__(self, inverted=False):
        self.hitbox = FloatRect(Vector2(100, 100), Vector2(20, 40))
        self.x_axis_inverted = inverted
        self.anim_map = {
            MonsterState.WALK: anim("walk"),
            MonsterState.ATTACK1: anim("attack"),
        }
        self.anim = self.anim_map[MonsterState.WALK].copy()
        self.anim_state = MonsterState.WALK


def make_player(position, health=100):
    return Character(position, anim("player"), Color.GREEN, Color.RED, health, 5.0, 1.0)


def make_attack(monster, offset=Vector2(0, 5)):
    return MeleeAttack(MonsterState.ATTACK1, monster, 1.0, BOX, BOX, 2, 30, offset)


def test_cooldown_set_and_reported():
    attack = Attack(MonsterState.ATTACK1, FakeMonster(), 1.5, BOX, BOX)
    assert not attack.is_on_cooldown()
    attack.set_on_cooldown()
    assert attack.cooldown_timer == 1.5
    assert attack.is_on_cooldown()


def test_boxes_take_rect_sizes():
    attack = make_attack(FakeMonster())
    assert attack.aggro_box.size == Vector2(20, 40)
    assert attack.damage_box.size == Vector2(20, 40)


def test_box_bounds_in_front_when_facing_right():
    attack = make_attack(FakeMonster())
    attack.update_box_bounds()
    assert attack.aggro_box.position == Vector2(120, 105)
    assert attack.damage_box.position == Vector2(120, 105)


def test_box_bounds_mirrored_when_inverted():
    attack = make_attack(FakeMonster(inverted=True))
    attack.update_box_bounds()
    assert attack.aggro_box.position == Vector2(80, 105)
    assert attack.damage_box.position == Vector2(80, 105)


def test_attack_starts_when_player_in_aggro_box():
    monster = FakeMonster()
    attack = make_attack(monster)
    attack.update_box_bounds()
    attack.check_conditions_and_attack([make_player(Vector2(130, 125))])
    assert monster.anim_state is MonsterState.ATTACK1
    assert monster.anim.texture == "attack"
    assert monster.anim is not monster.anim_map[MonsterState.ATTACK1]


def test_no_attack_when_player_far_or_dead_or_on_cooldown():
    monster = FakeMonster()
    attack = make_attack(monster)
    attack.update_box_bounds()
    attack.check_conditions_and_attack([make_player(Vector2(500, 500))])
    assert monster.anim_state is MonsterState.WALK
    attack.check_conditions_and_attack([make_player(Vector2(130, 125), health=0)])
    assert monster.anim_state is MonsterState.WALK
    attack.set_on_cooldown()
    attack.check_conditions_and_attack([make_player(Vector2(130, 125))])
    assert monster.anim_state is MonsterState.WALK


def test_damage_on_damage_frame_then_back_to_walk():
    monster = FakeMonster()
    attack = make_attack(monster)
    attack.update_box_bounds()
    player = make_player(Vector2(130, 125))
    attack.start_attack(player)
    monster.anim.curr_frame = attack.damage_frame
    attack.update_during_attack([player], 0.1)
    assert player.health == 100 - attack.damage
    assert attack.dealt
    assert attack.cooldown_timer == attack.cooldown
    attack.update_during_attack([player], 0.1)
    assert player.health == 100 - attack.damage
    monster.anim.curr_frame = 0
    attack.update_during_attack([player], 0.1)
    assert monster.anim_state is MonsterState.WALK
    assert monster.anim.texture == "walk"


def test_no_damage_to_player_outside_damage_box():
    monster = FakeMonster()
    attack = make_attack(monster)
    attack.update_box_bounds()
    player = make_player(Vector2(500, 500))
    attack.start_attack(player)
    monster.anim.curr_frame = attack.damage_frame
    attack.update_during_attack([player], 0.1)
    assert player.health == 100
    assert attack.is_on_cooldown()