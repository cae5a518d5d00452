"""Direction algebra for pointy-top and flat-top hex grids.

All lookups are keyed by orientation. A direction that is not one of the
six valid directions for an orientation never appears in its tables.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal

from src.hexgrid.errors import InvalidDirectionError

HexOffset = Literal[1, -1]


class Orientation(str, Enum):
    POINTY = "pointy"
    FLAT = "flat"


class Direction(str, Enum):
    N = "N"
    NE = "NE"
    E = "E"
    SE = "SE"
    S = "S"
    SW = "SW"
    W = "W"
    NW = "NW"


OPPOSITE_DIRECTION: dict[Direction, Direction] = {
    Direction.N: Direction.S,
    Direction.NE: Direction.SW,
    Direction.E: Direction.W,
    Direction.SE: Direction.NW,
    Direction.S: Direction.N,
    Direction.SW: Direction.NE,
    Direction.W: Direction.E,
    Direction.NW: Direction.SE,
}

# Axial (dq, dr) step to the neighbouring hex, in clockwise order
AXIAL_DELTAS: dict[Orientation, dict[Direction, tuple[int, int]]] = {
    Orientation.POINTY: {
        Direction.NE: (1, -1),
        Direction.E: (1, 0),
        Direction.SE: (0, 1),
        Direction.SW: (-1, 1),
        Direction.W: (-1, 0),
        Direction.NW: (0, -1),
    },
    Orientation.FLAT: {
        Direction.N: (0, -1),
        Direction.NE: (1, -1),
        Direction.SE: (1, 0),
        Direction.S: (0, 1),
        Direction.SW: (-1, 1),
        Direction.NW: (-1, 0),
    },
}

# Directions of the six hex sides (also the six neighbour directions)
HEX_DIRECTIONS: dict[Orientation, list[Direction]] = {
    orientation: list(deltas) for orientation, deltas in AXIAL_DELTAS.items()
}

# Directions of the six hex corners
CORNER_DIRECTIONS: dict[Orientation, list[Direction]] = {
    Orientation.POINTY: [
        Direction.N, Direction.NE, Direction.SE,
        Direction.S, Direction.SW, Direction.NW,
    ],
    Orientation.FLAT: [
        Direction.NE, Direction.E, Direction.SE,
        Direction.SW, Direction.W, Direction.NW,
    ],
}

# Each hex owns three of its edges and two of its corners; the rest are
# named from a neighbouring hex.
EDGE_OWNER_DIRECTIONS: dict[Orientation, list[Direction]] = {
    Orientation.POINTY: [Direction.NE, Direction.W, Direction.NW],
    Orientation.FLAT: [Direction.N, Direction.NE, Direction.NW],
}

VERTEX_OWNER_DIRECTIONS: dict[Orientation, list[Direction]] = {
    Orientation.POINTY: [Direction.N, Direction.S],
    Orientation.FLAT: [Direction.NE, Direction.SW],
}


def axial_delta(direction: Direction, orientation: Orientation) -> tuple[int, int]:
    """Return the axial step for a direction, raising if it has none."""
    try:
        return AXIAL_DELTAS[orientation][direction]
    except KeyError:
        raise InvalidDirectionError(
            f"Direction {direction.value} is not valid for {orientation.value} hexes",
            direction=direction.value,
            orientation=orientation.value,
        ) from None


def next_hex(
    q: int, r: int, direction: Direction, orientation: Orientation,
) -> tuple[int, int] | None:
    """Step one hex in a direction. No bounds checking."""
    delta = AXIAL_DELTAS[orientation].get(direction)
    if delta is None:
        return None
    return q + delta[0], r + delta[1]


def hex_neighbours(q: int, r: int, orientation: Orientation) -> list[tuple[int, int]]:
    """Return all six hexes around (q, r), in clockwise direction order."""
    return [(q + dq, r + dr) for dq, dr in AXIAL_DELTAS[orientation].values()]


def bearing(
    from_hex: tuple[int, int],
    to_hex: tuple[int, int],
    orientation: Orientation,
) -> Direction | None:
    """If there is straight line of sight between two hexes, return its direction."""
    dq = to_hex[0] - from_hex[0]
    dr = to_hex[1] - from_hex[1]
    if dq == 0 and dr == 0:
        return None

    for direction, (step_q, step_r) in AXIAL_DELTAS[orientation].items():
        # dq, dr must be a positive multiple of the unit step
        if step_q == 0:
            if dq == 0 and dr * step_r > 0:
                return direction
        elif step_r == 0:
            if dr == 0 and dq * step_q > 0:
                return direction
        elif dq * step_q > 0 and dr * step_r > 0 and abs(dq) == abs(dr):
            return direction
    return None
