import pytest

from dotf.protocol import (
    DemonData,
    PacketError,
    PacketReader,
    PacketWriter,
    PlayerState,
    Vector2,
)


def test_uint32_is_big_endian():
    assert PacketWriter().write_uint32(1).to_bytes() == b"\x00\x00\x00\x01"


def test_bool_is_one_byte():
    assert PacketWriter().write_bool(True).write_bool(False).to_bytes() == b"\x01\x00"


def test_string_is_length_prefixed():
    assert PacketWriter().write_string("ab").to_bytes() == b"\x00\x00\x00\x02ab"


def test_int32_round_trip_negative():
    data = PacketWriter().write_int32(-1).write_int32(53000).to_bytes()
    reader = PacketReader(data)
    assert reader.read_int32() == -1
    assert reader.read_int32() == 53000
    assert reader.at_end()


def test_string_round_trip():
    reader = PacketReader(PacketWriter().write_string("127.0.0.1").to_bytes())
    assert reader.read_string() == "127.0.0.1"
    assert reader.at_end()


def test_uint32_out_of_range_rejected():
    with pytest.raises(ValueError):
        PacketWriter().write_uint32(-1)


def test_reading_past_end_raises():
    reader = PacketReader(b"\x00\x01")
    with pytest.raises(PacketError):
        reader.read_uint32()


def test_default_state_size():
    # two counts, one flag and sixteen integers
    assert len(PlayerState().encode()) == 73


def test_default_state_round_trip():
    assert PlayerState.decode(PlayerState().encode()) == PlayerState()


def test_full_state_round_trip():
    state = PlayerState(
        is_spectating=True,
        map=[[0, 1, 2], [3, 4]],
        position=Vector2(250, 736),
        ally_position=Vector2(512, 736),
        velocity=Vector2(8, 0),
        ally_velocity=Vector2(0, -8),
        shooting_robot_index=0,
        fire_direction=Vector2(14, 0),
        shooting_ally_robot_index=-2,
        ally_fire_direction=Vector2(0, -14),
        health=85,
        ally_health=100,
    )
    assert PlayerState.decode(state.encode()) == state


def test_demon_position_is_not_kept_on_read():
    state = PlayerState(demons=[DemonData(id=7, base_number=2, health=45,
                                          position=Vector2(64, 96))])
    decoded = PlayerState.decode(state.encode())
    assert decoded.demons == [DemonData(id=7, base_number=2, health=45)]


def test_truncated_state_raises():
    data = PlayerState(map=[[1, 2]]).encode()
    with pytest.raises(PacketError):
        PlayerState.decode(data[:-1])


def test_vector_arithmetic():
    assert Vector2(3, 4) + Vector2(1, -1) == Vector2(4, 3)
    assert Vector2(3, 4) - Vector2(3, 4) == Vector2(0, 0)