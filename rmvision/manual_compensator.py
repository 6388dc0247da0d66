"""Table-driven pitch/yaw corrections keyed by distance and height ranges."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

FIELDS_PER_LINE = 6


@dataclass(frozen=True)
class LineRegion:
    """Open interval ``(lower, upper)`` on the real line."""

    lower: float
    upper: float

    def contains(self, point: float) -> bool:
        """Whether ``point`` lies strictly inside the region."""
        return self.lower < point < self.upper

    def intersects(self, other: LineRegion) -> bool:
        """Whether either end of ``other`` lies strictly inside this region."""
        return self.contains(other.lower) or self.contains(other.upper)


@dataclass
class HeightMapNode:
    """Angle offsets that apply within one height range."""

    height_region: LineRegion
    pitch_offset: float
    yaw_offset: float


@dataclass
class DistMapNode:
    """Height ranges that apply within one distance range."""

    dist_region: LineRegion
    height_map: list[HeightMapNode] = field(default_factory=list)


def parse_line(text: str) -> list[float]:
    """Parse ``"d_low d_high h_low h_high pitch yaw"`` into six floats.

    Raises :class:`ValueError` if the text does not hold exactly six numbers.
    """
    numbers = [float(token) for token in text.split()]
    if len(numbers) != FIELDS_PER_LINE:
        raise ValueError(
            f"expected {FIELDS_PER_LINE} numbers, got {len(numbers)}: {text!r}"
        )
    return numbers


class ManualCompensator:
    """Look up hand-tuned pitch and yaw offsets for a target's distance and height."""

    def __init__(self) -> None:
        self.angle_offset_map: list[DistMapNode] = []

    def update_map(
        self,
        d_region: LineRegion,
        h_region: LineRegion,
        pitch_offset: float,
        yaw_offset: float,
    ) -> bool:
        """Add an entry; return ``False`` if its height range clashes with an existing one."""
        height_node = HeightMapNode(h_region, pitch_offset, yaw_offset)
        dist_node = next(
            (node for node in self.angle_offset_map if node.dist_region.intersects(d_region)),
            None,
        )
        if dist_node is None:
            self.angle_offset_map.append(DistMapNode(d_region, [height_node]))
            return True
        if any(node.height_region.intersects(h_region) for node in dist_node.height_map):
            return False
        dist_node.height_map.append(height_node)
        return True

    def angle_hard_correct(self, dist: float, height: float) -> tuple[float, float]:
        """Return ``(pitch_offset, yaw_offset)`` for a target, or ``(0.0, 0.0)``."""
        dist_node = next(
            (node for node in self.angle_offset_map if node.dist_region.contains(dist)),
            None,
        )
        if dist_node is not None:
            for node in dist_node.height_map:
                if node.height_region.contains(height):
                    return (node.pitch_offset, node.yaw_offset)
        return (0.0, 0.0)

    def update_map_by_str(self, text: str) -> bool:
        """Add an entry given as six whitespace-separated numbers."""
        try:
            d_low, d_high, h_low, h_high, pitch, yaw = parse_line(text)
        except ValueError:
            return False
        return self.update_map(LineRegion(d_low, d_high), LineRegion(h_low, h_high), pitch, yaw)

    def update_map_flow(self, lines: Iterable[str]) -> bool:
        """Add entries in order, stopping at the first one that fails."""
        return all(self.update_map_by_str(line) for line in lines)