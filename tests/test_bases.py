from dotf.bases import DemonBase
from dotf.demon import Demon
from dotf.protocol import Vector2


def _demon(base, demon_id=0, at=Vector2(0, 0)):
    return Demon(demon_id, "Demon", "Demon description", 45, 3, at, base)


def test_spawn_limit_defaults_to_three_and_reduces():
    base = DemonBase(Vector2(4, 4), 0)
    assert base.spawn_limit == 3
    base.reduce_spawn_limit(1)
    assert base.spawn_limit == 2
    base.reduce_spawn_limit(2)
    assert base.spawn_limit == 0


def test_add_and_remove_demons():
    base = DemonBase(Vector2(4, 4), 1)
    first = _demon(base, 0)
    second = _demon(base, 1)
    base.add_demon(first)
    base.add_demon(second)
    assert base.current_demons == [first, second]
    base.remove_demon(first)
    assert base.current_demons == [second]


def test_remove_drops_every_occurrence_only_of_that_demon():
    base = DemonBase(Vector2(4, 4))
    first = _demon(base, 0)
    second = _demon(base, 1)
    for demon in (first, second, first):
        base.add_demon(demon)
    base.remove_demon(first)
    assert base.current_demons == [second]


def test_remove_missing_demon_is_harmless():
    base = DemonBase(Vector2(4, 4))
    kept = _demon(base, 0)
    base.add_demon(kept)
    base.remove_demon(_demon(base, 9))
    assert base.current_demons == [kept]


def test_bases_are_distinct_even_with_equal_fields():
    a = DemonBase(Vector2(4, 4), 0)
    b = DemonBase(Vector2(4, 4), 0)
    assert a != b
    assert a == a


def test_demon_finds_closest_other_base():
    home = DemonBase(Vector2(4, 4), 0)
    near = DemonBase(Vector2(11, 4), 1)
    far = DemonBase(Vector2(25, 18), 2)
    demon = _demon(home, 0, Vector2(4, 5))
    assert demon.find_closest_base([home, far, near]) is near


def test_demon_outside_base_bounds_uses_base_position():
    base = DemonBase(Vector2(11, 11))
    demon = _demon(base, 0, Vector2(11, 11))
    assert demon.outside_base_bounds(Vector2(14, 14)) is False
    assert demon.outside_base_bounds(Vector2(15, 11)) is True