"""Predicts a robot's position from the last server position and velocity."""

from __future__ import annotations

from dataclasses import dataclass

from dotf.protocol import Vector2


def scale_vector(vector: Vector2, scalar: float) -> Vector2:
    """Scale both coordinates, truncating towards zero."""
    return Vector2(int(vector.x * scalar), int(vector.y * scalar))


@dataclass
class RobotPrediction:
    """Extrapolates the robot from the server's last word on it."""

    predicted_position: Vector2 = Vector2()
    last_position: Vector2 = Vector2()
    velocity: Vector2 = Vector2()
    last_known_server_position: Vector2 = Vector2()

    def predict_position(self, delta_time: float) -> Vector2:
        """Move from the last position by velocity times ``delta_time``."""
        self.predicted_position = self.last_position + scale_vector(self.velocity, delta_time)
        return self.predicted_position

    def on_server_update(self, server_position: Vector2, server_velocity: Vector2) -> None:
        """Take the server's position and velocity as authoritative."""
        self.last_known_server_position = server_position
        self.last_position = server_position
        self.velocity = server_velocity