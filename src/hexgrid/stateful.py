"""Boards whose hexes carry a tile classification and a stack of pieces.

Territories and nations are the connected groups of hexes used for area
scoring. They are rebuilt from the lattice on every call.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from enum import Enum

from pydantic import Field

from src.hexgrid.board import ModularBoard
from src.hexgrid.errors import HexNotFoundError
from src.hexgrid.graph import connected_components
from src.hexgrid.hex import ModularHex

logger = logging.getLogger(__name__)


class Tile(str, Enum):
    VIRGIN = "virgin"
    TERRITORY = "territory"
    WALL = "wall"


class StatefulHex(ModularHex):
    tile: Tile = Tile.VIRGIN
    stack: list[int | str] = Field(default_factory=list)  # bottom piece first


class StatefulBoard(ModularBoard):
    hex_class = StatefulHex

    def _find_slot(self, hex: ModularHex) -> int:
        slot = self._axial_index.get(hex.uid)
        if slot is None:
            raise HexNotFoundError(f"Could not find a matching hex at {hex.uid}.")
        return slot

    def update_hex_stack(self, hex: ModularHex, new_stack: Iterable[int | str]) -> StatefulHex:
        """Replace the stack on a hex. Returns a detached copy of the updated hex."""
        slot = self._find_slot(hex)
        found = self._hexes[slot]
        found.stack = list(new_stack)
        self._index_hex(slot)
        return found.dupe()

    def update_hex_tile(self, hex: ModularHex, new_tile: Tile | str) -> StatefulHex:
        """Reclassify a hex. Returns a detached copy of the updated hex."""
        slot = self._find_slot(hex)
        found = self._hexes[slot]
        found.tile = Tile(new_tile)
        self._index_hex(slot)
        logger.debug(f"Hex {found.uid} is now {found.tile.value}")
        return found.dupe()

    def _tile_at(self, cell: str) -> Tile | None:
        slot = self._algebraic_index.get(cell)
        return None if slot is None else self._hexes[slot].tile

    def _components(self, keep: Callable[[str], bool]) -> list[list[str]]:
        return connected_components(self.graph.adjacency(keep=keep))

    @property
    def territories(self) -> list[list[str]]:
        """Connected groups of territory hexes, as lists of cells."""
        return self._components(lambda cell: self._tile_at(cell) == Tile.TERRITORY)

    @property
    def nations(self) -> list[list[str]]:
        """Connected groups of territory and virgin hexes (walls split nations)."""
        return self._components(
            lambda cell: self._tile_at(cell) in (Tile.VIRGIN, Tile.TERRITORY)
        )
