import pytest

from dotf.interpolation import RobotInterpolation, lerp
from dotf.protocol import Vector2


def test_lerp_endpoints():
    start, end = Vector2(3, -4), Vector2(17, 9)
    assert lerp(start, end, 0.0) == start
    assert lerp(start, end, 1.0) == end


def test_lerp_truncates():
    assert lerp(Vector2(0, 0), Vector2(3, 3), 0.5) == Vector2(1, 1)


def test_lerp_stays_between_endpoints():
    start, end = Vector2(0, 100), Vector2(50, 0)
    for step in range(11):
        point = lerp(start, end, step / 10)
        assert 0 <= point.x <= 50
        assert 0 <= point.y <= 100


def test_interpolation_halfway():
    interp = RobotInterpolation()
    interp.on_server_update(Vector2(10, 20))
    assert interp.interpolate_position(0.5, 1.0) == Vector2(5, 10)


def test_interpolation_clamps_at_target():
    interp = RobotInterpolation()
    target = Vector2(40, -8)
    interp.on_server_update(target)
    assert interp.interpolate_position(5.0, 1.0) == target
    assert interp.interpolate_position(5.0, 1.0) == target


def test_interpolation_accumulates_time():
    interp = RobotInterpolation()
    target = Vector2(64, 32)
    interp.on_server_update(target)
    interp.interpolate_position(0.6, 1.0)
    assert interp.current_position != target
    interp.interpolate_position(0.6, 1.0)
    assert interp.current_position == target


def test_server_update_restarts_from_current_position():
    interp = RobotInterpolation(current_position=Vector2(7, 7))
    interp.interpolate_position(0.05, 1.0)
    current = interp.current_position
    interp.on_server_update(Vector2(100, 100))
    assert interp.previous_position == current
    assert interp.target_position == Vector2(100, 100)
    assert interp.interpolation_time == 0.0
    assert interp.interpolate_position(0.0, 1.0) == current


def test_zero_update_interval_raises():
    interp = RobotInterpolation()
    with pytest.raises(ValueError):
        interp.interpolate_position(0.1, 0.0)