"""Unit tests for /src/mercs/tile.py"""

from string import ascii_lowercase

import pytest

from src.mercs.tile import Tile


@pytest.mark.parametrize(
    "rank, file, notation",
    [
        (rank, file, f"{ascii_lowercase[file - 1]}{rank}")
        for file in range(1, 9)
        for rank in range(1, 9)
    ],
)
def test_creating_from_algebraic(rank: int, file: int, notation: str) -> None:
    """Simply checks if the notation for 'a1' indeed maps to rank 1, file 1, etc."""
    tile = Tile.from_algebraic(notation)
    assert tile.rank == rank
    assert tile.file == file
    assert tile.to_algebraic() == notation


def test_ranks_with_two_digits() -> None:
    """Boards can be larger than 9 ranks"""
    tile = Tile.from_algebraic("c12")
    assert tile == Tile(12, 3)
    assert tile.to_algebraic() == "c12"


def test_tiles_compare_by_coordinate() -> None:
    assert Tile(2, 3) == Tile(rank=2, file=3)
    assert Tile(2, 3) != Tile(3, 2)
    assert len({Tile(1, 1), Tile(1, 1), Tile(1, 2)}) == 2


def test_offset() -> None:
    tile = Tile(4, 4)
    assert tile.offset(1, -2) == Tile(5, 2)
    # the tile itself does not change
    assert tile == Tile(4, 4)
    # offsets are allowed to leave any sensible board
    assert tile.offset(-5, 0) == Tile(-1, 4)


def test_tile_is_immutable() -> None:
    tile = Tile(1, 1)
    with pytest.raises(AttributeError):
        tile.rank = 2  # type: ignore[misc]
