from __future__ import annotations

import pytest

from src.hexgrid.directions import Orientation
from src.hexgrid.hex import ModularHex

# Seven overlapping flowers with several holes between them
CENTRES = [
    {"q": 0, "r": 0},
    {"q": 2, "r": -3},
    {"q": 4, "r": -6},
    {"q": 5, "r": -9},
    {"q": 6, "r": -5},
    {"q": 7, "r": -8},
    {"q": 9, "r": -7},
]


@pytest.fixture
def centres() -> list[dict[str, int]]:
    """Seed centres shared by the board tests."""
    return [dict(c) for c in CENTRES]


@pytest.fixture(params=[Orientation.POINTY, Orientation.FLAT], ids=["pointy", "flat"])
def orientation(request) -> Orientation:
    return request.param


@pytest.fixture
def hex_patch(orientation: Orientation) -> list[ModularHex]:
    """A radius-3 patch of hexes around the origin."""
    return [
        ModularHex(q=q, r=r, orientation=orientation)
        for q in range(-3, 4)
        for r in range(-3, 4)
        if abs(q + r) <= 3
    ]
