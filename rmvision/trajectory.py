"""Ballistic pitch compensation for projectiles with and without air drag."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass

_MAX_ANGLE = math.pi / 2.5
_TOLERANCE = 0.01
_STEP = 0.03
_MIN_RESISTANCE = 1e-4


def _distance_and_angle(target_position: Sequence[float]) -> tuple[float, float]:
    x, y, z = (float(v) for v in target_position[:3])
    distance = math.hypot(x, y)
    return distance, math.atan2(z, distance)


@dataclass
class TrajectoryCompensator(ABC):
    """Find the launch pitch that makes a projectile hit a target."""

    velocity: float = 15.0
    iteration_times: int = 20
    gravity: float = 9.8
    resistance: float = 0.01

    def compensate(self, target_position: Sequence[float]) -> float | None:
        """Return the pitch angle hitting ``(x, y, z)``, or ``None`` if none is found."""
        target_height = float(target_position[2])
        distance, angle = _distance_and_angle(target_position)
        iterative_height = target_height
        dh = 0.0
        for _ in range(self.iteration_times):
            angle = math.atan2(iterative_height, distance)
            if abs(angle) > _MAX_ANGLE:
                break
            dh = target_height - self.calculate_trajectory(distance, angle)
            if abs(dh) < _TOLERANCE:
                break
            iterative_height += dh
        if abs(dh) > _TOLERANCE or abs(angle) > _MAX_ANGLE:
            return None
        return angle

    def trajectory(self, distance: float, angle: float) -> list[tuple[float, float]]:
        """Sample ``(x, height)`` along the flight path every 3 cm up to ``distance``."""
        points: list[tuple[float, float]] = []
        if distance < 0:
            return points
        x = 0.0
        while x < distance:
            points.append((x, self.calculate_trajectory(x, angle)))
            x += _STEP
        return points

    @abstractmethod
    def flying_time(self, target_position: Sequence[float]) -> float:
        """Time the projectile takes to reach the target."""

    @abstractmethod
    def calculate_trajectory(self, x: float, angle: float) -> float:
        """Height of the projectile at horizontal distance ``x``."""


class IdealCompensator(TrajectoryCompensator):
    """Compensator that ignores air resistance."""

    def flying_time(self, target_position: Sequence[float]) -> float:
        distance, angle = _distance_and_angle(target_position)
        return distance / (self.velocity * math.cos(angle))

    def calculate_trajectory(self, x: float, angle: float) -> float:
        t = x / (self.velocity * math.cos(angle))
        return self.velocity * math.sin(angle) * t - 0.5 * self.gravity * t * t


class ResistanceCompensator(TrajectoryCompensator):
    """Compensator with air resistance proportional to velocity."""

    def _drag(self) -> float:
        return max(self.resistance, _MIN_RESISTANCE)

    def flying_time(self, target_position: Sequence[float]) -> float:
        r = self._drag()
        distance, angle = _distance_and_angle(target_position)
        return (math.exp(r * distance) - 1) / (r * self.velocity * math.cos(angle))

    def calculate_trajectory(self, x: float, angle: float) -> float:
        r = self._drag()
        t = (math.exp(r * x) - 1) / (r * self.velocity * math.cos(angle))
        return self.velocity * math.sin(angle) * t - 0.5 * self.gravity * t * t


def create_compensator(kind: str) -> TrajectoryCompensator:
    """Build a compensator: ``"ideal"`` or ``"resistance"``."""
    if kind == "ideal":
        return IdealCompensator()
    if kind == "resistance":
        return ResistanceCompensator()
    raise ValueError(f"unknown compensator type: {kind!r}")