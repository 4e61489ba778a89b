"""
Hexagonal grid mathematics for hex-tactics.

This module implements the coordinate operations used by every other part of
the simulation. It supports:
- Conversions between grid cells and pixel positions
- Distance calculations between hexes
- Finding adjacent hexes
- Finding all hexes within a range (for sight, ranged attacks, etc.)

Coordinate Systems:
-------------------
We use two coordinate systems:

1. Offset Coordinates (col, row) - for storage and representation
   - Pointy-topped hexes, "odd-r" layout
   - Odd rows are shifted half a cell to the right
   - Used in HexCoord dataclass and as board indices

2. Cube Coordinates (q, r, s) - for distance and rounding
   - three coordinates with constraint q + r + s = 0
   - Never stored, only computed on demand
   - Conversion: q = col - (row - (row & 1)) / 2, r = row, s = -q - r

References:
-----------
Based on the excellent guide at: https://www.redblobgames.com/grids/hexagons/
"""

import math
from dataclasses import dataclass

HEX_SIZE = 35.0
SQRT3 = math.sqrt(3)


@dataclass(frozen=True)
class HexCoord:
    """
    A hexagonal coordinate using the odd-r offset system.

    Attributes:
        col: Column index
        row: Row index

    Example:
        >>> origin = HexCoord(col=0, row=0)
        >>> neighbor = HexCoord(col=1, row=0)
        >>> hex_distance(origin, neighbor)
        1
    """

    col: int
    row: int

    def __hash__(self) -> int:
        """Make HexCoord hashable for use in sets and dicts."""
        return hash((self.col, self.row))


def offset_to_cube(coord: HexCoord) -> tuple[int, int, int]:
    """
    Convert odd-r offset coordinates (col, row) to cube coordinates (q, r, s).

    Args:
        coord: A hex coordinate in offset system

    Returns:
        A tuple (q, r, s) with q + r + s == 0

    Example:
        >>> offset_to_cube(HexCoord(col=5, row=5))
        (3, 5, -8)
    """
    q = coord.col - (coord.row - (coord.row & 1)) // 2
    r = coord.row
    return q, r, -q - r


def cube_to_offset(q: int, r: int, s: int) -> HexCoord:  # noqa: ARG001
    """
    Convert cube coordinates (q, r, s) back to odd-r offset coordinates.

    The s parameter is accepted for API consistency but is redundant
    (s = -q - r).

    Example:
        >>> cube_to_offset(3, 5, -8)
        HexCoord(col=5, row=5)
    """
    col = q + (r - (r & 1)) // 2
    return HexCoord(col=col, row=r)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def cube_round(q: float, r: float, s: float) -> tuple[int, int, int]:
    """
    Round fractional cube coordinates to the nearest hex.

    Each axis is rounded on its own, then the axis with the largest rounding
    error is recomputed from the other two so the result keeps q + r + s == 0.

    Example:
        >>> cube_round(0.4, 0.3, -0.7)
        (1, 0, -1)
    """
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
    else:
        rs = -rq - rr
    return rq, rr, rs


def to_pixel(coord: HexCoord, size: float = HEX_SIZE) -> tuple[float, float]:
    """
    Return the pixel position of the centre of a cell.

    Positions include a margin of one hex radius so cell (0, 0) is fully on
    screen.

    Args:
        coord: Cell to convert
        size: Hex radius in pixels

    Returns:
        (x, y) pixel coordinates
    """
    x = size * SQRT3 * (coord.col + 0.5 * (coord.row & 1))
    y = size * 3 / 2 * coord.row
    return x + size, y + size


def to_hex(x: float, y: float, size: float = HEX_SIZE) -> HexCoord:
    """
    Return the cell containing a pixel position.

    This is the inverse of :func:`to_pixel`: ``to_hex(*to_pixel(c)) == c``.
    """
    x -= size
    y -= size

    q = (SQRT3 / 3 * x - 1 / 3 * y) / size
    r = (2 / 3 * y) / size
    return cube_to_offset(*cube_round(q, r, -q - r))


def hex_distance(a: HexCoord, b: HexCoord) -> int:
    """
    Calculate the distance between two hexes.

    The distance is the minimum number of hex steps to move from hex a to hex b,
    ignoring obstacles:
        distance = (|dq| + |dr| + |ds|) / 2

    Example:
        >>> hex_distance(HexCoord(col=0, row=0), HexCoord(col=2, row=1))
        3
    """
    aq, ar, as_ = offset_to_cube(a)
    bq, br, bs = offset_to_cube(b)
    return (abs(aq - bq) + abs(ar - br) + abs(as_ - bs)) // 2


# Direction offsets for the 6 neighbors, clockwise from East.
# Odd rows are shifted right, so their diagonal neighbors lean east.
_EVEN_ROW_DIRECTIONS: list[tuple[int, int]] = [
    (1, 0),
    (0, -1),
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, 1),
]

_ODD_ROW_DIRECTIONS: list[tuple[int, int]] = [
    (1, 0),
    (1, -1),
    (0, -1),
    (-1, 0),
    (0, 1),
    (1, 1),
]


def hex_neighbors(coord: HexCoord) -> list[HexCoord]:
    """
    Find all 6 adjacent hexes to the given hex.

    The order is fixed (East first, then around the hex). Results are not
    bounds-checked; callers validate them against the board extent.

    Example:
        >>> neighbors = hex_neighbors(HexCoord(col=0, row=0))
        >>> len(neighbors)
        6
    """
    directions = _ODD_ROW_DIRECTIONS if coord.row & 1 else _EVEN_ROW_DIRECTIONS
    return [HexCoord(col=coord.col + dc, row=coord.row + dr) for dc, dr in directions]


def hexes_in_range(center: HexCoord, n: int) -> list[HexCoord]:
    """
    Find all hexes within range n of the center hex (inclusive).

    The number of hexes follows the formula: 3n^2 + 3n + 1

    Raises:
        ValueError: If n is negative
    """
    if n < 0:
        msg = f"Range n must be non-negative, got {n}"
        raise ValueError(msg)

    cq, cr, cs = offset_to_cube(center)

    hexes = []
    for dq in range(-n, n + 1):
        for dr in range(max(-n, -dq - n), min(n, -dq + n) + 1):
            ds = -dq - dr
            hexes.append(cube_to_offset(cq + dq, cr + dr, cs + ds))

    return hexes
