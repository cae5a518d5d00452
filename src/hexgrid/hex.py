"""Hex cell records and axial <-> offset conversion."""

from __future__ import annotations

from pydantic import BaseModel, field_validator

from src.hexgrid.directions import HEX_DIRECTIONS, Direction, Orientation


def axial_to_offset(q: int, r: int, orientation: Orientation, offset: int) -> tuple[int, int]:
    """Convert axial (q, r) to rectangular (col, row).

    ``offset`` is 1 when even rows (pointy) or columns (flat) are shoved
    out, -1 when odd ones are. ``x & 1`` is 1 for odd negatives too, so the
    numerator is always even.
    """
    if orientation == Orientation.POINTY:
        return q + (r + offset * (r & 1)) // 2, r
    return q, r + (q + offset * (q & 1)) // 2


def offset_to_axial(col: int, row: int, orientation: Orientation, offset: int) -> tuple[int, int]:
    """Convert rectangular (col, row) back to axial (q, r)."""
    if orientation == Orientation.POINTY:
        return col - (row + offset * (row & 1)) // 2, row
    return col, row - (col + offset * (col & 1)) // 2


class ModularHex(BaseModel):
    q: int
    r: int
    orientation: Orientation = Orientation.POINTY
    offset: int = 1

    @field_validator("offset")
    @classmethod
    def _check_offset(cls, value: int) -> int:
        if value not in (1, -1):
            raise ValueError(f"Offset parity must be 1 or -1, got {value}")
        return value

    def __hash__(self) -> int:
        return hash((self.q, self.r))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ModularHex):
            return self.q == other.q and self.r == other.r
        return NotImplemented

    @property
    def uid(self) -> str:
        return f"{self.q},{self.r}"

    @property
    def col(self) -> int:
        return axial_to_offset(self.q, self.r, self.orientation, self.offset)[0]

    @property
    def row(self) -> int:
        return axial_to_offset(self.q, self.r, self.orientation, self.offset)[1]

    @property
    def directions(self) -> list[Direction]:
        return list(HEX_DIRECTIONS[self.orientation])

    def dupe(self) -> ModularHex:
        """Return a detached copy that shares no mutable state with this hex."""
        return self.model_copy(deep=True)
