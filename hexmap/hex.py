"""Axial hex coordinates for a pointy-top grid.

Coordinates are ``(q, r)`` pairs; the cube coordinate ``s = -q - r`` is
derived where needed and never stored. String keys (``"q,r"``) are used
wherever coordinates are exposed in sets.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, NamedTuple, Tuple

HEX_SIZE = 30


class Hex(NamedTuple):
    q: int
    r: int


class Point(NamedTuple):
    x: float
    y: float


@dataclass(frozen=True)
class HexBounds:
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y


# E, NE, NW, W, SW, SE. Every edge-matching scan relies on this order.
HEX_DIRECTIONS: Tuple[Hex, ...] = (
    Hex(1, 0),
    Hex(1, -1),
    Hex(0, -1),
    Hex(-1, 0),
    Hex(-1, 1),
    Hex(0, 1),
)

_SQRT3 = math.sqrt(3)


def hex_key(h: Hex) -> str:
    return f"{h[0]},{h[1]}"


def parse_hex_key(key: str) -> Hex:
    q, r = key.split(",")
    return Hex(int(q), int(r))


def hex_add(a: Hex, b: Hex) -> Hex:
    return Hex(a[0] + b[0], a[1] + b[1])


def hex_neighbors(h: Hex) -> List[Hex]:
    return [Hex(h[0] + d.q, h[1] + d.r) for d in HEX_DIRECTIONS]


def _hex_s(q: float, r: float) -> float:
    return -q - r


def hex_distance(a: Hex, b: Hex) -> int:
    """Number of hex steps between ``a`` and ``b``."""
    dq = abs(a[0] - b[0])
    dr = abs(a[1] - b[1])
    ds = abs(_hex_s(a[0], a[1]) - _hex_s(b[0], b[1]))
    return (dq + dr + ds) // 2


def offset_distance(a: Hex, b: Hex) -> int:
    """Planar ``|dq| + |dr|``; cheaper than and not equal to ``hex_distance``."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def hex_round(q: float, r: float) -> Hex:
    """Snap fractional axial coordinates to the nearest hex.

    The cube component with the largest rounding error is re-derived from
    the other two so that ``q + r + s == 0`` still holds.
    """
    s = _hex_s(q, r)
    rq = _round_half_up(q)
    rr = _round_half_up(r)
    rs = _round_half_up(s)

    q_diff = abs(rq - q)
    r_diff = abs(rr - r)
    s_diff = abs(rs - s)

    if q_diff > r_diff and q_diff > s_diff:
        rq = -rr - rs
    elif r_diff > s_diff:
        rr = -rq - rs
    return Hex(int(rq), int(rr))


def hex_to_pixel(h: Hex, size: float = HEX_SIZE) -> Point:
    x = size * (_SQRT3 * h[0] + _SQRT3 / 2 * h[1])
    y = size * (3 / 2 * h[1])
    return Point(x, y)


def pixel_to_hex(point: Point, size: float = HEX_SIZE) -> Hex:
    x, y = point
    q = (_SQRT3 / 3 * x - 1 / 3 * y) / size
    r = (2 / 3 * y) / size
    return hex_round(q, r)


def hex_corners(center: Point, size: float = HEX_SIZE) -> List[Point]:
    """Six corner vertices, the first at -30 degrees, clockwise on screen."""
    corners: List[Point] = []
    for i in range(6):
        angle = (2 * math.pi * i) / 6 - math.pi / 6
        corners.append(
            Point(
                center[0] + size * math.cos(angle),
                center[1] + size * math.sin(angle),
            )
        )
    return corners


def edge_corner_indices(direction: int) -> Tuple[int, int]:
    """Corner indices of the edge shared with the neighbour in ``direction``."""
    first = (6 - direction) % 6
    return first, (first + 1) % 6


def corners_to_svg_points(corners: Iterable[Point]) -> str:
    return " ".join(f"{p[0]:.2f},{p[1]:.2f}" for p in corners)


def generate_hex_grid(width: int, height: int) -> List[Hex]:
    """Axial coordinates of a ``width`` x ``height`` odd-row-offset rectangle."""
    hexes: List[Hex] = []
    for row in range(height):
        for col in range(width):
            hexes.append(Hex(col - row // 2, row))
    return hexes


def hex_bounds(hexes: Iterable[Hex], size: float = HEX_SIZE) -> HexBounds:
    min_x = min_y = math.inf
    max_x = max_y = -math.inf
    seen = False
    for h in hexes:
        seen = True
        for x, y in hex_corners(hex_to_pixel(h, size), size):
            min_x = min(min_x, x)
            min_y = min(min_y, y)
            max_x = max(max_x, x)
            max_y = max(max_y, y)
    if not seen:
        return HexBounds(0.0, 0.0, 0.0, 0.0)
    return HexBounds(min_x, min_y, max_x, max_y)


__all__ = [
    "HEX_DIRECTIONS",
    "HEX_SIZE",
    "Hex",
    "HexBounds",
    "Point",
    "corners_to_svg_points",
    "edge_corner_indices",
    "generate_hex_grid",
    "hex_add",
    "hex_bounds",
    "hex_corners",
    "hex_distance",
    "hex_key",
    "hex_neighbors",
    "hex_round",
    "hex_to_pixel",
    "offset_distance",
    "parse_hex_key",
    "pixel_to_hex",
]
