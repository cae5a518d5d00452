"""Tests for boards built from hex flowers."""

from __future__ import annotations

import pytest

from src.config import settings
from src.hexgrid.board import ModularBoard
from src.hexgrid.directions import Direction, Orientation
from src.hexgrid.errors import DuplicateHexError, InvalidLabelError


class TestFlatEven:
    @pytest.fixture
    def board(self, centres) -> ModularBoard:
        return ModularBoard(centres=centres, orientation=Orientation.FLAT, offset=1)

    def test_dimensions(self, board: ModularBoard) -> None:
        assert board.width == 13
        assert board.height == 9

    def test_blocked_cells(self, board: ModularBoard) -> None:
        assert board.blocked_cells == [
            "i1", "h1", "g1", "f1", "e1", "d1", "c1",
            "b1", "a1", "i2", "h2", "g2", "f2", "e2",
            "d2", "c2", "i3", "h3", "g3", "f3", "e3",
            "d3", "i4", "h4", "g4", "f4", "e4", "i5",
            "h5", "g5", "f5", "b5", "a5", "i6", "h6",
            "g6", "b6", "a6", "d7", "c7", "b7", "a7",
            "b8", "a8", "b9", "a9", "i10", "h10", "b10",
            "a10", "i11", "h11", "c11", "b11", "a11", "i12",
            "h12", "g12", "f12", "b12", "a12", "i13", "h13",
            "g13", "f13", "c13", "b13", "a13",
        ]

    def test_rays(self, board: ModularBoard) -> None:
        assert board.cast_ray("c6", Direction.N) == ["d6", "e6", "f6"]
        assert board.cast_ray("c6", Direction.NE) == []
        assert board.cast_ray("c6", Direction.NE, ignore_voids=True) == ["d8", "e9", "e10", "f11"]
        assert board.cast_ray("c6", Direction.S) == []
        assert board.cast_ray("c6", Direction.SE) == []
        assert board.cast_ray("c6", Direction.SW) == ["c5", "b4", "b3", "a2"]


class TestFlatOdd:
    @pytest.fixture
    def board(self, centres) -> ModularBoard:
        return ModularBoard(centres=centres, orientation=Orientation.FLAT, offset=-1)

    def test_dimensions(self, board: ModularBoard) -> None:
        assert board.width == 13
        assert board.height == 10

    def test_blocked_cells(self, board: ModularBoard) -> None:
        assert board.blocked_cells == [
            "j1", "i1", "h1", "g1", "f1", "e1", "d1", "c1",
            "b1", "a1", "j2", "i2", "h2", "g2", "f2", "e2",
            "d2", "a2", "j3", "i3", "h3", "g3", "f3", "e3",
            "d3", "j4", "i4", "h4", "g4", "f4", "a4", "j5",
            "i5", "h5", "g5", "f5", "b5", "a5", "j6", "i6",
            "h6", "c6", "b6", "a6", "j7", "d7", "c7", "b7",
            "a7", "c8", "b8", "a8", "j9", "b9", "a9", "j10",
            "i10", "c10", "b10", "a10", "j11", "i11", "h11", "c11",
            "b11", "a11", "j12", "i12", "h12", "g12", "c12", "b12",
            "a12", "j13", "i13", "h13", "g13", "f13", "c13", "b13",
            "a13",
        ]

    def test_rays(self, board: ModularBoard) -> None:
        assert board.cast_ray("d6", Direction.N) == ["e6", "f6", "g6"]
        assert board.cast_ray("d6", Direction.NE) == []
        assert board.cast_ray("d6", Direction.NE, ignore_voids=True) == ["e8", "e9", "f10", "f11"]
        assert board.cast_ray("d6", Direction.S) == []
        assert board.cast_ray("d6", Direction.SE) == []
        assert board.cast_ray("d6", Direction.SW) == ["c5", "c4", "b3", "b2"]


class TestPointyEven:
    @pytest.fixture
    def board(self, centres) -> ModularBoard:
        return ModularBoard(centres=centres, orientation=Orientation.POINTY, offset=1)

    def test_dimensions(self, board: ModularBoard) -> None:
        assert board.width == 9
        assert board.height == 12

    def test_blocked_cells(self, board: ModularBoard) -> None:
        assert board.blocked_cells == [
            "l1", "k1", "j1", "i1", "h1", "g1", "f1",
            "e1", "d1", "c1", "a1", "i2", "g2", "l4",
            "f4", "d4", "c4", "b4", "a4", "l5", "e5",
            "d5", "c5", "b5", "a5", "l6", "e6", "d6",
            "c6", "b6", "a6", "l7", "k7", "f7", "e7",
            "d7", "c7", "b7", "a7", "l8", "k8", "g8",
            "f8", "e8", "d8", "c8", "b8", "a8", "l9",
            "k9", "j9", "h9", "g9", "f9", "e9", "d9",
            "c9", "b9", "a9",
        ]

    def test_rays(self, board: ModularBoard) -> None:
        assert board.cast_ray("e4", Direction.NE) == []
        assert board.cast_ray("e4", Direction.NE, ignore_voids=True) == ["g5", "h5", "i6", "j6"]
        assert board.cast_ray("e4", Direction.E) == []
        assert board.cast_ray("e4", Direction.SE) == []
        assert board.cast_ray("e4", Direction.SW) == ["d3", "c3", "b2", "a2"]
        assert board.cast_ray("e4", Direction.NW) == ["f3", "g3", "h2"]


class TestPointyOdd:
    @pytest.fixture
    def board(self, centres) -> ModularBoard:
        return ModularBoard(centres=centres, orientation=Orientation.POINTY, offset=-1)

    def test_dimensions(self, board: ModularBoard) -> None:
        assert board.width == 8
        assert board.height == 12

    def test_blocked_cells(self, board: ModularBoard) -> None:
        assert board.blocked_cells == [
            "l1", "j1", "i1", "h1", "g1", "f1",
            "d1", "c3", "a3", "l4", "f4", "e4",
            "d4", "c4", "b4", "a4", "l5", "e5",
            "d5", "c5", "b5", "a5", "l6", "k6",
            "e6", "d6", "c6", "b6", "a6", "l7",
            "k7", "g7", "f7", "e7", "d7", "c7",
            "b7", "a7", "l8", "k8", "g8", "f8",
            "e8", "d8", "c8", "b8", "a8",
        ]

    def test_rays(self, board: ModularBoard) -> None:
        assert board.cast_ray("e3", Direction.NE) == []
        assert board.cast_ray("e3", Direction.NE, ignore_voids=True) == ["g4", "h5", "i5", "j6"]
        assert board.cast_ray("e3", Direction.E) == []
        assert board.cast_ray("e3", Direction.SE) == []
        assert board.cast_ray("e3", Direction.SW) == ["d3", "c2", "b2", "a1"]
        assert board.cast_ray("e3", Direction.NW) == ["f3", "g2", "h2"]


class TestNormalization:
    @pytest.mark.parametrize("offset", [1, -1])
    @pytest.mark.parametrize("shift", [(50, -50), (-20, 36), (-7, -12)])
    def test_translated_board_is_identical(self, centres, orientation, offset, shift) -> None:
        dq, dr = shift
        if orientation == Orientation.FLAT and dq % 2:
            pytest.skip("flat boards keep column parity only under even q shifts")
        moved = [{"q": c["q"] + dq, "r": c["r"] + dr} for c in centres]
        base = ModularBoard(centres=centres, orientation=orientation, offset=offset)
        other = ModularBoard(centres=moved, orientation=orientation, offset=offset)

        assert (other.width, other.height) == (base.width, base.height)
        assert other.blocked_cells == base.blocked_cells
        for h in base.hexes:
            cell = base.hex2algebraic(h)
            twin = other.get_hex_at_axial(h.q + dq, h.r + dr)
            assert other.hex2algebraic(twin) == cell
            for direction in h.directions:
                assert other.cast_ray(cell, direction) == base.cast_ray(cell, direction)
                assert other.cast_ray(cell, direction, ignore_voids=True) == \
                    base.cast_ray(cell, direction, ignore_voids=True)

    def test_pointy_shift_keeps_row_parity(self) -> None:
        board = ModularBoard(centres=[{"q": 3, "r": -5}], orientation=Orientation.POINTY)
        assert board.min_y == -6
        assert board.shift_y == -6
        board = ModularBoard(centres=[{"q": 3, "r": -4}], orientation=Orientation.POINTY)
        assert board.min_y == -5
        assert board.shift_y == -6
        assert board.height == 4

    def test_flat_shift_keeps_column_parity(self) -> None:
        board = ModularBoard(centres=[(-4, 0)], orientation=Orientation.FLAT)
        assert board.min_x == -5
        assert board.shift_x == -6
        assert board.width == 4


class TestHoles:
    @pytest.fixture
    def board(self) -> ModularBoard:
        # Two flowers with a one-hex gap between them along row 0
        return ModularBoard(centres=[(0, 0), (4, 0)], orientation=Orientation.POINTY, offset=1)

    def test_layout(self, board: ModularBoard) -> None:
        # min row -1 is odd, so the frame starts one row higher
        assert (board.width, board.height) == (7, 4)
        assert board.hex2algebraic(board.get_hex_at_axial(1, 0)) == "b3"
        assert board.hex2algebraic(board.get_hex_at_axial(3, 0)) == "b5"

    def test_gap_is_blocked(self, board: ModularBoard) -> None:
        assert "b4" in board.blocked_cells
        assert board.get_hex_at_algebraic("b4") is None

    def test_ray_stops_at_gap(self, board: ModularBoard) -> None:
        assert board.cast_ray("b3", Direction.E) == []

    def test_ray_jumps_gap(self, board: ModularBoard) -> None:
        ray = board.cast_ray("b3", Direction.E, ignore_voids=True)
        assert ray == ["b5", "b6", "b7"]
        assert all(board.has_cell(c) for c in ray)


class TestLookups:
    @pytest.fixture
    def board(self, centres) -> ModularBoard:
        return ModularBoard(centres=centres, orientation=Orientation.POINTY, offset=1)

    def test_flowers_merge(self, board: ModularBoard, centres) -> None:
        assert len(board.hexes) == len({h.uid for h in board.hexes})
        for c in centres:
            assert board.get_hex_at_axial(c["q"], c["r"]) is not None

    def test_three_ways_to_the_same_hex(self, board: ModularBoard) -> None:
        for h in board.hexes:
            assert board.get_hex_at_offset(h.col, h.row) == h
            assert board.get_hex_at_algebraic(board.hex2algebraic(h)) == h

    def test_misses_return_none(self, board: ModularBoard) -> None:
        assert board.get_hex_at_axial(100, 100) is None
        assert board.get_hex_at_offset(-50, 3) is None
        assert board.get_hex_at_algebraic("zz99") is None
        assert board.get_hex_at_algebraic("not a cell") is None

    def test_lookups_return_copies(self, board: ModularBoard) -> None:
        a = board.get_hex_at_axial(0, 0)
        b = board.get_hex_at_axial(0, 0)
        assert a == b
        assert a is not b
        assert board.hexes[0] is not board.hexes[0]

    def test_neighbours(self, board: ModularBoard) -> None:
        centre = board.get_hex_at_axial(0, 0)
        assert len(board.neighbours(centre)) == 6
        edge = board.get_hex_at_axial(-1, 0)
        ns = board.neighbours(edge)
        assert {n.uid for n in ns} == {"0,-1", "0,0", "-1,1"}

    def test_hexes_ordered(self, board: ModularBoard) -> None:
        rows = board.hexes_ordered
        assert len(rows) == board.height
        assert sum(len(r) for r in rows) == len(board.hexes)
        for row in rows:
            assert len({h.row for h in row}) <= 1

    def test_ray_from_off_board_label(self, board: ModularBoard) -> None:
        with pytest.raises(InvalidLabelError):
            board.cast_ray("z1", Direction.E)


class TestConstruction:
    def test_empty_board(self) -> None:
        board = ModularBoard()
        assert board.width == 0
        assert board.height == 0
        assert board.hexes == []
        assert board.blocked_cells == []
        assert board.min_x is None

    def test_explicit_hexes_not_expanded(self) -> None:
        board = ModularBoard(hexes=[(0, 0), (1, 0), (1, 0)], orientation=Orientation.FLAT)
        assert sorted(h.uid for h in board.hexes) == ["0,0", "1,0"]

    def test_duplicate_add_rejected(self) -> None:
        board = ModularBoard(centres=[(0, 0)])
        with pytest.raises(DuplicateHexError) as exc:
            board._add(0, 0)
        assert (exc.value.q, exc.value.r) == (0, 0)

    def test_bad_offset_rejected(self) -> None:
        with pytest.raises(ValueError):
            ModularBoard(offset=0)

    def test_defaults_come_from_settings(self, monkeypatch) -> None:
        monkeypatch.setattr(settings, "default_orientation", Orientation.FLAT)
        monkeypatch.setattr(settings, "default_offset", -1)
        board = ModularBoard(centres=[(0, 0)])
        assert board.orientation == Orientation.FLAT
        assert board.offset == -1
        assert all(h.orientation == Orientation.FLAT for h in board.hexes)


class TestCopying:
    @pytest.fixture
    def board(self, centres, orientation) -> ModularBoard:
        return ModularBoard(centres=centres, orientation=orientation, offset=-1)

    def test_clone_matches(self, board: ModularBoard) -> None:
        cloned = board.clone()
        assert cloned is not board
        assert cloned.orientation == board.orientation
        assert cloned.offset == board.offset
        assert cloned.blocked_cells == board.blocked_cells
        assert [h.uid for h in cloned.hexes] == [h.uid for h in board.hexes]

    def test_serialize_round_trip(self, board: ModularBoard) -> None:
        records = board.serialize()
        assert all(set(rec) == {"q", "r", "orientation", "offset"} for rec in records)
        restored = ModularBoard.deserialize(records)
        assert restored.orientation == board.orientation
        assert restored.offset == board.offset
        assert (restored.width, restored.height) == (board.width, board.height)
        assert restored.blocked_cells == board.blocked_cells

    def test_deserialize_hex_models(self, board: ModularBoard) -> None:
        restored = ModularBoard.deserialize(board.hexes)
        assert restored.blocked_cells == board.blocked_cells

    def test_deserialize_duplicates_rejected(self, board: ModularBoard) -> None:
        records = board.serialize()
        with pytest.raises(DuplicateHexError):
            ModularBoard.deserialize(records + records[:1])
