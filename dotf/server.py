"""UDP relay that collects every client's state and broadcasts them all."""

from __future__ import annotations

import argparse
import logging
import socket
import sys
import time

from dotf.protocol import PacketError, PacketReader, PacketWriter, PlayerState

logger = logging.getLogger(__name__)

DEFAULT_PORT = 53000
FRAME_TIME = 0.016
TIMEOUT_SECONDS = 2.0
_MAX_DATAGRAM = 65535

ClientKey = tuple[str, int]


class GameServer:
    """Keeps the latest state of each client and relays it to all of them."""

    def __init__(self, port: int = DEFAULT_PORT, host: str = "0.0.0.0") -> None:
        self.port = port
        self.players: dict[ClientKey, PlayerState] = {}
        self.last_active: dict[ClientKey, float] = {}
        self._socket = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            self._socket.bind((host, port))
        except OSError as exc:
            self._socket.close()
            raise RuntimeError(f"Failed to bind server to port {port}") from exc
        self._socket.setblocking(False)
        bound_host, bound_port = self._socket.getsockname()
        logger.info("Socket bound to IP: %s and Port: %s", bound_host, bound_port)

    @property
    def address(self) -> ClientKey:
        return self._socket.getsockname()

    def __enter__(self) -> GameServer:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def handle_client_input(self, data: bytes, sender: ClientKey,
                            now: float | None = None) -> bool:
        """Store a client's state; return False if the packet did not parse."""
        host, port = sender[0], sender[1]
        try:
            state = PlayerState.decode(data)
        except PacketError:
            logger.error("Failed to parse input from %s:%s", host, port)
            return False
        key = (host, port)
        self.players[key] = state
        self.last_active[key] = time.monotonic() if now is None else now
        logger.info(
            "Received input from %s:%s -> Position: (%d, %d) -> Ally Position: (%d, %d)",
            host, port, state.position.x, state.position.y,
            state.ally_position.x, state.ally_position.y,
        )
        return True

    def check_alive_players(self, now: float | None = None) -> list[ClientKey]:
        """Drop clients silent for more than two seconds and return them."""
        now = time.monotonic() if now is None else now
        expired = [key for key, seen in self.last_active.items()
                   if now - seen > TIMEOUT_SECONDS]
        for key in expired:
            logger.info("Client %s:%s timed out.", *key)
            self.players.pop(key, None)
            del self.last_active[key]
        return expired

    def reset_bullet_flags(self) -> None:
        """Clear shot markers (-2) once a client has acknowledged a shot."""
        states = self.players.values()
        if any(s.shooting_robot_index == -2 for s in states):
            for state in states:
                state.shooting_robot_index = -1
        if any(s.shooting_ally_robot_index == -2 for s in states):
            for state in states:
                state.shooting_ally_robot_index = -1

    def build_state_packet(self) -> bytes:
        writer = PacketWriter()
        for (host, port), state in self.players.items():
            writer.write_string(host)
            writer.write_uint16(port)
            state.write_to(writer)
        return writer.to_bytes()

    def broadcast_game_state(self) -> int:
        """Send every client the states of all clients; return sends done."""
        self.reset_bullet_flags()
        packet = self.build_state_packet()
        sent = 0
        for host, port in list(self.players):
            logger.info("SEND -> IP & Port: %s:%s", host, port)
            try:
                self._socket.sendto(packet, (host, port))
            except OSError:
                logger.error("Failed to send state to %s:%s", host, port)
            else:
                sent += 1
        return sent

    def poll(self) -> int:
        """Handle every datagram waiting on the socket; return how many parsed."""
        handled = 0
        while True:
            try:
                data, sender = self._socket.recvfrom(_MAX_DATAGRAM)
            except BlockingIOError:
                return handled
            except ConnectionResetError:
                continue
            if self.handle_client_input(data, sender):
                handled += 1

    def run(self, max_frames: int | None = None) -> None:
        """Run the server loop at about 60 updates a second."""
        frames = 0
        while max_frames is None or frames < max_frames:
            started = time.monotonic()
            self.poll()
            self.check_alive_players()
            self.broadcast_game_state()
            frames += 1
            elapsed = time.monotonic() - started
            if elapsed < FRAME_TIME:
                time.sleep(FRAME_TIME - elapsed)

    def close(self) -> None:
        self._socket.close()


def decode_state_packet(data: bytes) -> list[tuple[ClientKey, PlayerState]]:
    """Split a broadcast packet into (client address, state) pairs."""
    reader = PacketReader(data)
    entries = []
    while not reader.at_end():
        host = reader.read_string()
        port = reader.read_uint16()
        entries.append(((host, port), PlayerState.read_from(reader)))
    return entries


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="dotf-server",
                                     description="Run the game state relay.")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--host", default="0.0.0.0")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    try:
        with GameServer(args.port, args.host) as server:
            server.run()
    except KeyboardInterrupt:
        return 0
    except (RuntimeError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return -1
    return 0


if __name__ == "__main__":
    sys.exit(main())