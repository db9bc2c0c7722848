"""Wire format shared by the game client and the relay server.

Values are written big-endian: 32-bit integers take four bytes, booleans one
byte, and strings are a 32-bit length followed by their UTF-8 bytes.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass, field

_U16 = struct.Struct(">H")
_U32 = struct.Struct(">I")
_I32 = struct.Struct(">i")


class PacketError(ValueError):
    """Raised when a packet is truncated or malformed."""


class PacketWriter:
    """Builds a packet from typed values."""

    def __init__(self) -> None:
        self._buffer = bytearray()

    def _pack(self, fmt: struct.Struct, value: int) -> PacketWriter:
        try:
            self._buffer += fmt.pack(value)
        except struct.error as exc:
            raise ValueError(f"{value!r} does not fit a {fmt.size}-byte field") from exc
        return self

    def write_uint16(self, value: int) -> PacketWriter:
        return self._pack(_U16, value)

    def write_uint32(self, value: int) -> PacketWriter:
        return self._pack(_U32, value)

    def write_int32(self, value: int) -> PacketWriter:
        return self._pack(_I32, value)

    def write_bool(self, value: bool) -> PacketWriter:
        self._buffer.append(1 if value else 0)
        return self

    def write_string(self, value: str) -> PacketWriter:
        raw = value.encode("utf-8")
        self.write_uint32(len(raw))
        self._buffer += raw
        return self

    def to_bytes(self) -> bytes:
        return bytes(self._buffer)


class PacketReader:
    """Reads typed values from a packet in order."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._offset = 0

    def _take(self, size: int) -> bytes:
        end = self._offset + size
        if end > len(self._data):
            raise PacketError(
                f"packet ends at byte {len(self._data)}, "
                f"{size} bytes needed at byte {self._offset}"
            )
        chunk = self._data[self._offset:end]
        self._offset = end
        return chunk

    def read_uint16(self) -> int:
        return _U16.unpack(self._take(_U16.size))[0]

    def read_uint32(self) -> int:
        return _U32.unpack(self._take(_U32.size))[0]

    def read_int32(self) -> int:
        return _I32.unpack(self._take(_I32.size))[0]

    def read_bool(self) -> bool:
        return self._take(1)[0] != 0

    def read_string(self) -> str:
        raw = self._take(self.read_uint32())
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise PacketError("string field is not valid UTF-8") from exc

    def at_end(self) -> bool:
        return self._offset >= len(self._data)


@dataclass(frozen=True)
class Vector2:
    """An integer 2D point or direction."""

    x: int = 0
    y: int = 0

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)


UNSET = Vector2(-1, -1)


@dataclass
class DemonData:
    """A demon as the client reports it to the server."""

    id: int = 0
    base_number: int = 0
    health: int = 0
    position: Vector2 = Vector2()


@dataclass
class InGameData:
    """The local player's robots as the client tracks them."""

    is_spectating: bool = False
    health: int = 0
    ally_health: int = 0
    player_position: Vector2 = Vector2()
    ally_position: Vector2 = Vector2()
    velocity: Vector2 = Vector2()
    ally_velocity: Vector2 = Vector2()


_TAIL_FIELDS = 16


@dataclass
class PlayerState:
    """Everything one client sends the server each frame.

    Unset values are -1, the marker the game checks before applying them.
    """

    is_spectating: bool = False
    map: list[list[int]] = field(default_factory=list)
    demons: list[DemonData] = field(default_factory=list)
    position: Vector2 = UNSET
    ally_position: Vector2 = UNSET
    velocity: Vector2 = UNSET
    ally_velocity: Vector2 = UNSET
    shooting_robot_index: int = -1
    fire_direction: Vector2 = UNSET
    shooting_ally_robot_index: int = -1
    ally_fire_direction: Vector2 = UNSET
    health: int = -1
    ally_health: int = -1

    def write_to(self, writer: PacketWriter) -> PacketWriter:
        writer.write_uint32(len(self.map))
        for row in self.map:
            writer.write_uint32(len(row))
            for tile in row:
                writer.write_int32(tile)

        writer.write_uint32(len(self.demons))
        for demon in self.demons:
            for value in (demon.id, demon.base_number, demon.health,
                          demon.position.x, demon.position.y):
                writer.write_int32(value)

        writer.write_bool(self.is_spectating)
        for value in (
            self.position.x, self.position.y,
            self.ally_position.x, self.ally_position.y,
            self.velocity.x, self.velocity.y,
            self.ally_velocity.x, self.ally_velocity.y,
            self.shooting_robot_index,
            self.fire_direction.x, self.fire_direction.y,
            self.shooting_ally_robot_index,
            self.ally_fire_direction.x, self.ally_fire_direction.y,
            self.health, self.ally_health,
        ):
            writer.write_int32(value)
        return writer

    @classmethod
    def read_from(cls, reader: PacketReader) -> PlayerState:
        """Read a state; demon positions are consumed but not kept."""
        grid: list[list[int]] = []
        for _ in range(reader.read_uint32()):
            row_length = reader.read_uint32()
            grid.append([reader.read_int32() for _ in range(row_length)])

        demons: list[DemonData] = []
        for _ in range(reader.read_uint32()):
            demon = DemonData(
                id=reader.read_int32(),
                base_number=reader.read_int32(),
                health=reader.read_int32(),
            )
            reader.read_int32()
            reader.read_int32()
            demons.append(demon)

        spectating = reader.read_bool()
        (px, py, ax, ay, vx, vy, avx, avy, shooting, fx, fy,
         ally_shooting, afx, afy, health, ally_health) = (
            reader.read_int32() for _ in range(_TAIL_FIELDS)
        )
        return cls(
            is_spectating=spectating,
            map=grid,
            demons=demons,
            position=Vector2(px, py),
            ally_position=Vector2(ax, ay),
            velocity=Vector2(vx, vy),
            ally_velocity=Vector2(avx, avy),
            shooting_robot_index=shooting,
            fire_direction=Vector2(fx, fy),
            shooting_ally_robot_index=ally_shooting,
            ally_fire_direction=Vector2(afx, afy),
            health=health,
            ally_health=ally_health,
        )

    def encode(self) -> bytes:
        return self.write_to(PacketWriter()).to_bytes()

    @classmethod
    def decode(cls, data: bytes) -> PlayerState:
        return cls.read_from(PacketReader(data))