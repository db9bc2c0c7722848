# dotf

These are the building blocks of a top-down strategy game. In the game, a squad of robots
fights demons that spawn from bases on a 32 × 24 tile map. The package is plain
Python and has no third-party dependencies.

## What is in it

- **`dotf.protocol`** holds the binary wire format that clients and the server share.
  - `PacketWriter` and `PacketReader` write and read big-endian values. Integers are
    32-bit and ports are 16-bit, booleans take one byte, and strings are UTF-8 with a
    32-bit length prefix.
  - The records are `PlayerState`, `DemonData`, `InGameData` and `Vector2`.
  - A truncated packet, or a string that is not UTF-8, raises `PacketError`.
- **`dotf.server`** holds `GameServer`, a non-blocking UDP relay.
  - It keeps the latest `PlayerState` from each client address.
  - It drops clients that have been silent for more than two seconds.
  - Roughly 60 times a second it sends every client a packet that lists all known
    clients as host, port and state.
  - It resets the shot markers (`-2`) to `-1` before each broadcast.
  - `decode_state_packet` splits such a broadcast back into `((host, port), state)`
    pairs.
- **`dotf.character`** covers what all units share.
  - `Character` has stats (`CharacterStats`) and healing. Damage is reduced by
    armour, and `boost_stats` and `reset_stats_to_default` change the stats.
  - Status messages (`StatusMessage`) are kept in order of expiry.
  - `move` steps a unit towards the next screen waypoint of its path.
  - The enums are `AITask` and `ControlStatus`.
- **`dotf.demon`** holds the demon AI.
  - `Demon` can `roam` around its base, `chase` and `evade` robots, and
    `attack_keeping_distance` to stay about four tiles away while shooting.
  - It can call other demons for help with `warn_base_demon`.
  - `situations` decides each frame's behaviour.
  - Randomness comes from an object with `randint` and `randrange`, such as
    `random.Random`. Shots go to an optional `fire` callback.
- **`dotf.bases`** holds `DemonBase`, a spawn point with its living demons and a spawn
  limit (3 by default).
- **`dotf.pathing`** holds the tile-map helpers.
  - `find_path_bfs` is breadth-first path finding. It returns screen waypoints with
    the first step last, so they can be consumed with `pop()`.
  - `follow_robot` finds a path to a free tile beside an ally. It raises `ValueError`
    if there is none.
  - `screen_to_array_point` converts a screen position to a tile, and
    `manhattan_distance` measures between two points.
- **`dotf.prediction`** and **`dotf.interpolation`** smooth, on the client side, the
  positions received from the server.
  - `RobotPrediction` extrapolates from the last server position and velocity.
  - `RobotInterpolation` lerps from the previous position to the latest one.

## Installation

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Running the server

```
dotf-server [--host HOST] [--port PORT]
```

The defaults are host `0.0.0.0` and port `53000`. The server logs each input it
receives and each packet it sends, and it runs until interrupted. If the port cannot be
bound, it prints `Error: ...` and exits with a non-zero status.

## Using the protocol

```python
from dotf.protocol import PlayerState, Vector2

state = PlayerState(position=Vector2(64, 96), health=100)
payload = state.encode()
assert PlayerState.decode(payload) == state
```

A state is written in this order:

1. the map, as nested lists with length prefixes;
2. the demons, as id, base number, health and position;
3. the spectating flag;
4. the positions and velocities of the player's robot and of its ally;
5. the shooting robot index and fire direction of each;
6. the health of each.

Unset positions, velocities, directions, indices and health values are `-1`. Demon
positions are written, but on reading they are skipped and come back as `(0, 0)`.

## What it does not do

The package holds no game client, so it does not:

- open a window, draw anything or read keyboard and mouse input;
- play sounds;
- generate random maps, handle fog of war, or resolve collisions between bullets,
  walls and units;
- provide menus.

The server only relays the states that clients send it. It neither runs the game
simulation itself nor checks the states it passes on.