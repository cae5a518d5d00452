from __future__ import annotations

from src.hexgrid.board import ModularBoard
from src.hexgrid.directions import Direction, Orientation
from src.hexgrid.edges import Edge, Vertex
from src.hexgrid.graph import LatticeGraph
from src.hexgrid.hex import ModularHex
from src.hexgrid.stateful import StatefulBoard, StatefulHex, Tile

__all__ = [
    "Direction",
    "Orientation",
    "ModularHex",
    "Edge",
    "Vertex",
    "LatticeGraph",
    "ModularBoard",
    "StatefulBoard",
    "StatefulHex",
    "Tile",
]
