import pytest

from hordeshooter.damage_numbers import (
    CRITICAL_SIZE,
    REGULAR_SIZE,
    DamageNumber,
    DamageNumberManager,
    NumberType,
)
from hordeshooter.geometry import Color, Vector2


def test_regular_and_critical_numbers_differ():
    manager = DamageNumberManager()
    manager.add(Vector2(0, 0), 10, NumberType.REGULAR)
    manager.add(Vector2(0, 0), 99, NumberType.CRITICAL)
    regular, critical = manager.numbers
    assert (regular.size, regular.colour, regular.font) == (REGULAR_SIZE, Color.WHITE, "Roboto-Regular")
    assert (critical.size, critical.colour, critical.font) == (CRITICAL_SIZE, Color.YELLOW, "Roboto-Bold")
    assert critical.damage == 99


def test_number_rises_and_fades():
    number = DamageNumber(Vector2(10, 100), 5, 18, Color.WHITE, "font")
    assert not number.is_expired()
    number.update(0.1)
    assert number.position.y == pytest.approx(100 - number.speed * 0.1)
    assert number.position.x == 10
    assert 0 < number.fill_colour.a < 255


def test_number_expires_after_fade_time():
    number = DamageNumber(Vector2(0, 0), 5, 18, Color.WHITE, "font")
    number.update(number.fade_time + 0.1)
    assert number.is_expired()
    assert number.fill_colour.a == 0


def test_manager_drops_expired_numbers():
    manager = DamageNumberManager()
    manager.add(Vector2(0, 0), 1, NumberType.REGULAR)
    manager.update(0.1)
    assert len(manager.numbers) == 1
    manager.update(1.0)
    assert manager.numbers == []