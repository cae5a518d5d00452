"""Hex boards assembled from overlapping flowers.

A flower is a seed hex plus its six neighbours. The board is the union of
the flowers of all the seed centres, which is usually irregular and may
have holes. Hexes are stored once, in an arena list, and three indexes
(axial, offset and algebraic) map coordinate keys to arena slots. All
readers get detached copies.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel

from src.config import settings
from src.hexgrid.directions import Direction, HexOffset, Orientation, hex_neighbours
from src.hexgrid.errors import DuplicateHexError
from src.hexgrid.graph import LatticeGraph
from src.hexgrid.hex import ModularHex

logger = logging.getLogger(__name__)

# Fields that locate a hex; anything else in a serialized record is payload
_HEX_KEYS = ("q", "r", "orientation", "offset")


def _axial_key(q: int, r: int) -> str:
    return f"{q},{r}"


def _offset_key(col: int, row: int) -> str:
    return f"{col},{row}"


def _coords_of(item: Any) -> tuple[int, int]:
    """Accept {"q": .., "r": ..}, (q, r), or anything with q/r attributes."""
    if isinstance(item, dict):
        return item["q"], item["r"]
    if hasattr(item, "q") and hasattr(item, "r"):
        return item.q, item.r
    q, r = item
    return q, r


class ModularBoard:
    hex_class: type[ModularHex] = ModularHex

    def __init__(
        self,
        centres: Iterable[Any] | None = None,
        hexes: Iterable[Any] | None = None,
        orientation: Orientation | str | None = None,
        offset: HexOffset | None = None,
    ):
        self.orientation = Orientation(orientation or settings.default_orientation)
        self.offset = settings.default_offset if offset is None else offset
        if self.offset not in (1, -1):
            raise ValueError(f"Offset parity must be 1 or -1, got {self.offset}")

        self._hexes: list[ModularHex] = []
        self._axial_index: dict[str, int] = {}
        self._offset_index: dict[str, int] = {}
        self._algebraic_index: dict[str, int] = {}

        self._min_x: int | None = None
        self._max_x: int | None = None
        self._min_y: int | None = None
        self._max_y: int | None = None
        self._shift_x = 0
        self._shift_y = 0
        self._graph = LatticeGraph(0, 0, self.orientation, self.offset)

        if centres is not None:
            for centre in centres:
                q, r = _coords_of(centre)
                self._add(q, r, overwrite=True)
                for nq, nr in hex_neighbours(q, r, self.orientation):
                    self._add(nq, nr, overwrite=True)
        if hexes is not None:
            for item in hexes:
                q, r = _coords_of(item)
                self._add(q, r, overwrite=True)
        self._index_hexes()

    # ── Construction ──

    def _make_hex(self, q: int, r: int, **payload: Any) -> ModularHex:
        return self.hex_class(q=q, r=r, orientation=self.orientation, offset=self.offset, **payload)

    def _add(self, q: int, r: int, overwrite: bool = False, **payload: Any) -> ModularHex:
        """Insert a hex into the arena. Only used while a board is being built."""
        key = _axial_key(q, r)
        newhex = self._make_hex(q, r, **payload)
        slot = self._axial_index.get(key)
        if slot is not None:
            if not overwrite:
                logger.warning(f"Rejected duplicate hex at {key}")
                raise DuplicateHexError(q, r)
            self._hexes[slot] = newhex
        else:
            self._axial_index[key] = len(self._hexes)
            self._hexes.append(newhex)

        col, row = newhex.col, newhex.row
        self._min_x = col if self._min_x is None else min(self._min_x, col)
        self._max_x = col if self._max_x is None else max(self._max_x, col)
        self._min_y = row if self._min_y is None else min(self._min_y, row)
        self._max_y = row if self._max_y is None else max(self._max_y, row)
        return newhex

    def _index_hexes(self) -> None:
        """Fix the normalization shifts and rebuild all three indexes."""
        self._shift_x = 0
        self._shift_y = 0
        # Shift the parity axis by an even amount only, so that shoved rows
        # (pointy) or columns (flat) stay shoved in the normalized frame.
        if self.orientation == Orientation.POINTY:
            if self._min_y is not None:
                self._shift_y = self._min_y - 1 if self._min_y % 2 != 0 else self._min_y
                self._shift_x = self._min_x
        elif self._min_x is not None:
            self._shift_x = self._min_x - 1 if self._min_x % 2 != 0 else self._min_x
            self._shift_y = self._min_y

        self._graph = LatticeGraph(self.width, self.height, self.orientation, self.offset)
        self._axial_index.clear()
        self._offset_index.clear()
        self._algebraic_index.clear()
        for slot in range(len(self._hexes)):
            self._index_hex(slot)

        logger.debug(
            "Indexed %d hexes (%dx%d, shift %d,%d, %s/%d)",
            len(self._hexes), self.width, self.height,
            self._shift_x, self._shift_y, self.orientation.value, self.offset,
        )

    def _index_hex(self, slot: int) -> None:
        hex = self._hexes[slot]
        self._axial_index[hex.uid] = slot
        self._offset_index[_offset_key(hex.col, hex.row)] = slot
        self._algebraic_index[self.hex2algebraic(hex)] = slot

    # ── Lookups ──

    def get_hex_at_offset(self, col: int, row: int) -> ModularHex | None:
        slot = self._offset_index.get(_offset_key(col, row))
        return None if slot is None else self._hexes[slot].dupe()

    def get_hex_at_axial(self, q: int, r: int) -> ModularHex | None:
        slot = self._axial_index.get(_axial_key(q, r))
        return None if slot is None else self._hexes[slot].dupe()

    def get_hex_at_algebraic(self, cell: str) -> ModularHex | None:
        slot = self._algebraic_index.get(cell)
        return None if slot is None else self._hexes[slot].dupe()

    def has_cell(self, cell: str) -> bool:
        return cell in self._algebraic_index

    @property
    def hexes(self) -> list[ModularHex]:
        return [h.dupe() for h in self._hexes]

    @property
    def hexes_ordered(self) -> list[list[ModularHex]]:
        """Hexes grouped by lattice row, top row first, holes left out."""
        ordered: list[list[ModularHex]] = []
        for row in self._graph.list_cells(ordered=True):
            ordered.append([
                self._hexes[self._algebraic_index[cell]].dupe()
                for cell in row
                if cell in self._algebraic_index
            ])
        return ordered

    # ── Extents ──

    @property
    def min_x(self) -> int | None:
        return self._min_x

    @property
    def max_x(self) -> int | None:
        return self._max_x

    @property
    def min_y(self) -> int | None:
        return self._min_y

    @property
    def max_y(self) -> int | None:
        return self._max_y

    @property
    def shift_x(self) -> int:
        return self._shift_x

    @property
    def shift_y(self) -> int:
        return self._shift_y

    @property
    def width(self) -> int:
        if self._max_x is None or self._min_x is None:
            return 0
        return self._max_x - self._shift_x + 1

    @property
    def height(self) -> int:
        if self._max_y is None or self._min_y is None:
            return 0
        return self._max_y - self._shift_y + 1

    @property
    def graph(self) -> LatticeGraph:
        return self._graph

    def hex2coords(self, hex: ModularHex) -> tuple[int, int]:
        return hex.col - self._shift_x, hex.row - self._shift_y

    def hex2algebraic(self, hex: ModularHex) -> str:
        return self._graph.coords2algebraic(*self.hex2coords(hex))

    # ── Queries ──

    def cast_ray(self, start: str, direction: Direction, ignore_voids: bool = False) -> list[str]:
        """Cells in a straight line from ``start``, stopping at the first hole.

        With ``ignore_voids`` the ray jumps holes and keeps going to the edge
        of the bounding rectangle, collecting only populated cells.
        """
        ray: list[str] = []
        for cell in self._graph.ray(start, direction):
            if cell in self._algebraic_index:
                ray.append(cell)
            elif not ignore_voids:
                break
        return ray

    @property
    def blocked_cells(self) -> list[str]:
        """Cells of the bounding rectangle that have no hex, column by column."""
        blocked: list[str] = []
        for x in range(self.width):
            for y in range(self.height):
                cell = self._graph.coords2algebraic(x, y)
                if cell not in self._algebraic_index:
                    blocked.append(cell)
        return blocked

    def neighbours(self, hex: ModularHex) -> list[ModularHex]:
        found: list[ModularHex] = []
        for nq, nr in hex_neighbours(hex.q, hex.r, self.orientation):
            n = self.get_hex_at_axial(nq, nr)
            if n is not None:
                found.append(n)
        return found

    # ── Copying ──

    @classmethod
    def _from_records(
        cls, records: Iterable[dict[str, Any]], orientation: Orientation | str, offset: int,
    ) -> ModularBoard:
        board = cls(orientation=orientation, offset=offset)
        for rec in records:
            payload = {k: v for k, v in rec.items() if k not in _HEX_KEYS}
            board._add(rec["q"], rec["r"], **payload)
        board._index_hexes()
        return board

    def clone(self) -> ModularBoard:
        return self._from_records(self.serialize(), self.orientation, self.offset)

    def serialize(self) -> list[dict[str, Any]]:
        return [h.model_dump(mode="json") for h in self._hexes]

    @classmethod
    def deserialize(
        cls,
        hexes: list[dict[str, Any] | BaseModel],
        orientation: Orientation | str | None = None,
        offset: HexOffset | None = None,
    ) -> ModularBoard:
        """Rebuild a board from ``serialize()`` output.

        Orientation and offset come from the first record unless given.
        Algebraic labels are always derived afresh.
        """
        records = [h.model_dump(mode="json") if isinstance(h, BaseModel) else dict(h) for h in hexes]
        if records:
            if orientation is None:
                orientation = records[0].get("orientation")
            if offset is None:
                offset = records[0].get("offset")
        return cls._from_records(records, orientation, offset)
