"""Canonical edges and vertices of hex cells.

Every edge and vertex has exactly one canonical name, a (q, r, dir) triple
in which ``dir`` is one of the owner directions for the orientation. Edges
and vertices computed from any of the hexes that touch them come out
identical, so ``uid`` can be used as a dictionary key by game code.

The owner tables below are fixed. Game code stores edge and vertex uids,
so changing which hex names a shared edge would invalidate saved games.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, model_validator

from src.hexgrid.directions import (
    CORNER_DIRECTIONS,
    HEX_DIRECTIONS,
    Direction,
    Orientation,
)
from src.hexgrid.errors import InvalidDirectionError
from src.hexgrid.hex import ModularHex

# A form is a (dq, dr, dir) triple relative to some (q, r)
Form = tuple[int, int, Direction]

N, NE, E, SE, S, SW, W, NW = (
    Direction.N, Direction.NE, Direction.E, Direction.SE,
    Direction.S, Direction.SW, Direction.W, Direction.NW,
)
POINTY, FLAT = Orientation.POINTY, Orientation.FLAT


class Edge(BaseModel):
    model_config = ConfigDict(frozen=True)

    q: int
    r: int
    dir: Direction
    orientation: Orientation

    @model_validator(mode="after")
    def _check_direction(self) -> Edge:
        if self.dir not in HEX_DIRECTIONS[self.orientation]:
            raise ValueError(
                f"{self.dir.value} is not a side of a {self.orientation.value} hex"
            )
        return self

    @property
    def uid(self) -> str:
        return f"{self.q},{self.r},{self.dir.value}"


class Vertex(BaseModel):
    model_config = ConfigDict(frozen=True)

    q: int
    r: int
    dir: Direction
    orientation: Orientation

    @model_validator(mode="after")
    def _check_direction(self) -> Vertex:
        if self.dir not in CORNER_DIRECTIONS[self.orientation]:
            raise ValueError(
                f"{self.dir.value} is not a corner of a {self.orientation.value} hex"
            )
        return self

    @property
    def uid(self) -> str:
        return f"{self.q},{self.r},{self.dir.value}"


# ── Hex -> canonical edge / vertex, keyed by side or corner direction ──

HEX_EDGE_FORMS: dict[Orientation, dict[Direction, Form]] = {
    POINTY: {
        NE: (0, 0, NE),
        E: (1, 0, W),
        SE: (0, 1, NW),
        SW: (-1, 1, NE),
        W: (0, 0, W),
        NW: (0, 0, NW),
    },
    FLAT: {
        N: (0, 0, N),
        NE: (0, 0, NE),
        SE: (1, 0, NW),
        S: (0, 1, N),
        SW: (-1, 1, NE),
        NW: (0, 0, NW),
    },
}

HEX_VERTEX_FORMS: dict[Orientation, dict[Direction, Form]] = {
    POINTY: {
        N: (0, 0, N),
        NE: (1, -1, S),
        SE: (0, 1, N),
        S: (0, 0, S),
        SW: (-1, 1, N),
        NW: (0, -1, S),
    },
    FLAT: {
        NE: (0, 0, NE),
        E: (1, -1, SW),
        SE: (0, 1, NE),
        SW: (0, 0, SW),
        W: (-1, 1, NE),
        NW: (0, -1, SW),
    },
}

# ── Canonical edge / vertex -> what touches it, keyed by owner direction ──

EDGE_HEX_DELTAS: dict[Orientation, dict[Direction, list[tuple[int, int]]]] = {
    POINTY: {
        NE: [(0, 0), (1, -1)],
        NW: [(0, 0), (0, -1)],
        W: [(0, 0), (-1, 0)],
    },
    FLAT: {
        NE: [(0, 0), (1, -1)],
        NW: [(0, 0), (-1, 0)],
        N: [(0, 0), (0, -1)],
    },
}

VERTEX_HEX_DELTAS: dict[Orientation, dict[Direction, list[tuple[int, int]]]] = {
    POINTY: {
        N: [(0, 0), (1, -1), (0, -1)],
        S: [(0, 0), (0, 1), (-1, 1)],
    },
    FLAT: {
        NE: [(0, 0), (0, -1), (1, -1)],
        SW: [(0, 0), (0, 1), (-1, 1)],
    },
}

EDGE_VERTEX_FORMS: dict[Orientation, dict[Direction, list[Form]]] = {
    POINTY: {
        NE: [(0, 0, N), (1, -1, S)],
        NW: [(0, 0, N), (0, -1, S)],
        W: [(0, -1, S), (-1, 1, N)],
    },
    FLAT: {
        NE: [(0, 0, NE), (1, -1, SW)],
        NW: [(-1, 1, NE), (0, -1, SW)],
        N: [(0, -1, SW), (0, 0, NE)],
    },
}

VERTEX_EDGE_FORMS: dict[Orientation, dict[Direction, list[Form]]] = {
    POINTY: {
        N: [(0, 0, NE), (1, -1, W), (0, 0, NW)],
        S: [(0, 1, NW), (-1, 1, NE), (0, 1, W)],
    },
    FLAT: {
        NE: [(0, 0, NE), (0, 0, N), (1, -1, NW)],
        SW: [(0, 1, N), (0, 1, NW), (-1, 1, NE)],
    },
}

VERTEX_NEIGHBOUR_FORMS: dict[Orientation, dict[Direction, list[Form]]] = {
    POINTY: {
        N: [(1, -2, S), (0, -1, S), (1, -1, S)],
        S: [(-1, 1, N), (-1, 2, N), (0, 1, N)],
    },
    FLAT: {
        NE: [(1, -2, SW), (1, -1, SW), (0, -1, SW)],
        SW: [(-1, 1, NE), (0, 1, NE), (-1, 2, NE)],
    },
}


def _lookup(table: dict, orientation: Orientation, direction: Direction, what: str, obj: BaseModel):
    found = table[orientation].get(direction)
    if found is None:
        raise InvalidDirectionError(
            f"Invalid {what}: {obj.model_dump_json()}",
            direction=direction.value,
            orientation=orientation.value,
        )
    return found


def hex_edges(hex: ModularHex) -> dict[Direction, Edge]:
    """Return the canonical edge on each of the six sides of a hex."""
    edges: dict[Direction, Edge] = {}
    for side, (dq, dr, owner_dir) in HEX_EDGE_FORMS[hex.orientation].items():
        edges[side] = Edge(q=hex.q + dq, r=hex.r + dr, dir=owner_dir, orientation=hex.orientation)
    return edges


def edge_hexes(edge: Edge) -> list[tuple[int, int]]:
    """Return the two hex coordinates that share an edge (owner first)."""
    deltas = _lookup(EDGE_HEX_DELTAS, edge.orientation, edge.dir, "edge", edge)
    return [(edge.q + dq, edge.r + dr) for dq, dr in deltas]


def hex_vertices(hex: ModularHex) -> dict[Direction, Vertex]:
    """Return the canonical vertex at each of the six corners of a hex."""
    verts: dict[Direction, Vertex] = {}
    for corner, (dq, dr, owner_dir) in HEX_VERTEX_FORMS[hex.orientation].items():
        verts[corner] = Vertex(q=hex.q + dq, r=hex.r + dr, dir=owner_dir, orientation=hex.orientation)
    return verts


def vertex_hexes(vertex: Vertex) -> list[tuple[int, int]]:
    """Return the three hex coordinates meeting at a vertex (owner first)."""
    deltas = _lookup(VERTEX_HEX_DELTAS, vertex.orientation, vertex.dir, "vertex", vertex)
    return [(vertex.q + dq, vertex.r + dr) for dq, dr in deltas]


def edge_vertices(edge: Edge) -> list[Vertex]:
    """Return the two vertices at the ends of an edge."""
    forms = _lookup(EDGE_VERTEX_FORMS, edge.orientation, edge.dir, "edge", edge)
    return [
        Vertex(q=edge.q + dq, r=edge.r + dr, dir=d, orientation=edge.orientation)
        for dq, dr, d in forms
    ]


def vertex_edges(vertex: Vertex) -> list[Edge]:
    """Return the three edges that meet at a vertex."""
    forms = _lookup(VERTEX_EDGE_FORMS, vertex.orientation, vertex.dir, "vertex", vertex)
    return [
        Edge(q=vertex.q + dq, r=vertex.r + dr, dir=d, orientation=vertex.orientation)
        for dq, dr, d in forms
    ]


def vertex_neighbours(vertex: Vertex) -> list[Vertex]:
    """Return the three vertices one edge away from a vertex."""
    forms = _lookup(VERTEX_NEIGHBOUR_FORMS, vertex.orientation, vertex.dir, "vertex", vertex)
    return [
        Vertex(q=vertex.q + dq, r=vertex.r + dr, dir=d, orientation=vertex.orientation)
        for dq, dr, d in forms
    ]
