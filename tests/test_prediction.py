from dotf.prediction import RobotPrediction, scale_vector
from dotf.protocol import Vector2


def test_scale_identity_and_zero():
    v = Vector2(7, -3)
    assert scale_vector(v, 1.0) == v
    assert scale_vector(v, 0.0) == Vector2(0, 0)


def test_scale_truncates_towards_zero():
    assert scale_vector(Vector2(3, -3), 0.5) == Vector2(1, -1)


def test_server_update_resets_position():
    p = RobotPrediction()
    p.on_server_update(Vector2(100, 200), Vector2(4, -2))
    assert p.last_position == Vector2(100, 200)
    assert p.last_known_server_position == Vector2(100, 200)
    assert p.velocity == Vector2(4, -2)


def test_predict_with_zero_time_stays_put():
    p = RobotPrediction()
    p.on_server_update(Vector2(50, 60), Vector2(9, 9))
    assert p.predict_position(0.0) == Vector2(50, 60)


def test_predict_adds_scaled_velocity():
    p = RobotPrediction()
    p.on_server_update(Vector2(50, 60), Vector2(10, -20))
    result = p.predict_position(2.0)
    assert result == Vector2(50, 60) + scale_vector(Vector2(10, -20), 2.0)
    assert p.predicted_position == result


def test_predict_does_not_accumulate():
    p = RobotPrediction()
    p.on_server_update(Vector2(0, 0), Vector2(10, 10))
    first = p.predict_position(1.0)
    assert p.predict_position(1.0) == first
    assert p.last_position == Vector2(0, 0)