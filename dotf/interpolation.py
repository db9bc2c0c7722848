"""Smooths a robot's position between server updates."""

from __future__ import annotations

from dataclasses import dataclass

from dotf.protocol import Vector2

DEFAULT_UPDATE_INTERVAL = 0.1


def lerp(start: Vector2, end: Vector2, alpha: float) -> Vector2:
    """Linear interpolation, truncating each coordinate towards zero."""
    dx = end.x - start.x
    dy = end.y - start.y
    return Vector2(int(start.x + alpha * dx), int(start.y + alpha * dy))


@dataclass
class RobotInterpolation:
    """Moves from the previous position to the latest server position over time."""

    current_position: Vector2 = Vector2()
    previous_position: Vector2 = Vector2()
    target_position: Vector2 = Vector2()
    interpolation_time: float = 0.0
    update_interval: float = DEFAULT_UPDATE_INTERVAL

    def interpolate_position(self, delta_time: float, update_interval: float) -> Vector2:
        """Advance by ``delta_time`` and return the new current position."""
        if update_interval <= 0:
            raise ValueError("update_interval must be positive")
        self.interpolation_time += delta_time
        alpha = min(self.interpolation_time / update_interval, 1.0)
        self.current_position = lerp(self.previous_position, self.target_position, alpha)
        return self.current_position

    def on_server_update(self, new_position: Vector2) -> None:
        """Start a new interpolation from where the robot is now."""
        self.previous_position = self.current_position
        self.target_position = new_position
        self.interpolation_time = 0.0