"""Rectangular lattice of hex cells addressed by algebraic labels.

Cells are labelled like ``c7``: letters name the row band counted from the
bottom of the rectangle (a..z, aa, ab, ... as in spreadsheet columns), the
number is the 1-based column. Coordinates (x, y) are offset coordinates in
the normalized frame, with y = 0 at the top.
"""

from __future__ import annotations

import re
from collections import deque
from collections.abc import Callable, Iterable

from src.hexgrid.directions import HEX_DIRECTIONS, Direction, HexOffset, Orientation, axial_delta
from src.hexgrid.errors import InvalidLabelError
from src.hexgrid.hex import axial_to_offset, offset_to_axial

COLUMN_LABELS = "abcdefghijklmnopqrstuvwxyz"

_DIGIT = re.compile(r"[0-9]")
_NUMBER = re.compile(r"[0-9]+")


class LatticeGraph:
    def __init__(self, width: int, height: int, orientation: Orientation, offset: HexOffset):
        self.width = width
        self.height = height
        self.orientation = orientation
        self.offset = offset

    @property
    def all_dirs(self) -> list[Direction]:
        return list(HEX_DIRECTIONS[self.orientation])

    def coords2algebraic(self, x: int, y: int) -> str:
        label = ""
        idx = self.height - 1 - y
        while idx >= 0:
            label = COLUMN_LABELS[idx % 26] + label
            idx = idx // 26 - 1
        return label + str(x + 1)

    def algebraic2coords(self, cell: str) -> tuple[int, int]:
        match = _DIGIT.search(cell)
        if match is None:
            raise InvalidLabelError(f"Could not find a digit in the cell '{cell}'.", cell)
        letters = cell[:match.start()]
        num = cell[match.start():]

        y = 0
        for char in letters:
            val = COLUMN_LABELS.find(char)
            if val < 0:
                raise InvalidLabelError(f"The row label is invalid: {letters}", cell)
            y = y * 26 + (val + 1)
        y -= 1
        if y < 0:
            raise InvalidLabelError(f"The row label is invalid: {letters}", cell)

        if _NUMBER.fullmatch(num) is None:
            raise InvalidLabelError(f"The column label is invalid: {num}", cell)
        return int(num) - 1, self.height - 1 - y

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _coords_on_board(self, cell: str) -> tuple[int, int]:
        x, y = self.algebraic2coords(cell)
        if not self.contains(x, y):
            raise InvalidLabelError(f"The cell '{cell}' is not on the board.", cell)
        return x, y

    def _step(self, x: int, y: int, direction: Direction) -> tuple[int, int] | None:
        dq, dr = axial_delta(direction, self.orientation)
        q, r = offset_to_axial(x, y, self.orientation, self.offset)
        nx, ny = axial_to_offset(q + dq, r + dr, self.orientation, self.offset)
        if not self.contains(nx, ny):
            return None
        return nx, ny

    def move(self, cell: str, direction: Direction, dist: int = 1) -> str | None:
        """Return the cell ``dist`` steps away, or None if that leaves the rectangle."""
        x, y = self._coords_on_board(cell)
        for _ in range(dist):
            step = self._step(x, y, direction)
            if step is None:
                return None
            x, y = step
        return self.coords2algebraic(x, y)

    def ray(self, cell: str, direction: Direction, include_first: bool = False) -> list[str]:
        """Walk from ``cell`` in a straight line to the edge of the rectangle."""
        x, y = self._coords_on_board(cell)
        cells = [cell] if include_first else []
        step = self._step(x, y, direction)
        while step is not None:
            cells.append(self.coords2algebraic(*step))
            step = self._step(*step, direction)
        return cells

    def neighbours(self, cell: str) -> list[str]:
        x, y = self._coords_on_board(cell)
        found: list[str] = []
        for direction in self.all_dirs:
            step = self._step(x, y, direction)
            if step is not None:
                found.append(self.coords2algebraic(*step))
        return found

    def list_cells(self, ordered: bool = False) -> list[str] | list[list[str]]:
        """All cells, row-major from the top. ``ordered`` groups them by row."""
        rows = [
            [self.coords2algebraic(col, row) for col in range(self.width)]
            for row in range(self.height)
        ]
        if ordered:
            return rows
        return [cell for row in rows for cell in row]

    def adjacency(self, keep: Callable[[str], bool] | None = None) -> dict[str, list[str]]:
        """Build the node -> neighbours map, optionally restricted to kept nodes."""
        nodes = [c for c in self.list_cells() if keep is None or keep(c)]
        node_set = set(nodes)
        return {
            node: [n for n in self.neighbours(node) if n in node_set]
            for node in nodes
        }

    def path(self, start: str, end: str) -> list[str] | None:
        """Shortest path between two cells (inclusive), or None."""
        self._coords_on_board(start)
        self._coords_on_board(end)
        came_from: dict[str, str | None] = {start: None}
        queue = deque([start])
        while queue:
            current = queue.popleft()
            if current == end:
                result = [current]
                while came_from[result[-1]] is not None:
                    result.append(came_from[result[-1]])
                return list(reversed(result))
            for n in self.neighbours(current):
                if n not in came_from:
                    came_from[n] = current
                    queue.append(n)
        return None

    def bearing(self, start: str, end: str) -> Direction | None:
        for direction in self.all_dirs:
            if end in self.ray(start, direction):
                return direction
        return None


def connected_components(adjacency: dict[str, Iterable[str]]) -> list[list[str]]:
    """Group the nodes of an undirected adjacency map into connected components."""
    seen: set[str] = set()
    components: list[list[str]] = []
    for node in adjacency:
        if node in seen:
            continue
        seen.add(node)
        component: list[str] = []
        queue = deque([node])
        while queue:
            current = queue.popleft()
            component.append(current)
            for n in adjacency.get(current, ()):
                if n not in seen:
                    seen.add(n)
                    queue.append(n)
        components.append(component)
    return components
