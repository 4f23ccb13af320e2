"""The Board implements all rules that affect the `occupancy` (in Mercs: which piece stands on which tile)"""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import product
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from src.core.exceptions import InvalidMoveError
from src.mercs.move import Move, Play
from src.mercs.tile import Tile


@dataclass(frozen=True)
class Board:
    """
    Immutable board. Every move produces a new Board.

    ---
    * `playable`: the static geometry, i.e. all tiles a piece can stand on.
    * `occupancy`: tile -> piece id for the occupied tiles. The inverse (piece id -> tile) is derived from it,
      so the two lookups can never disagree.
    * `displaced`: pieces knocked off their tile by another piece moving onto it, that have not yet been taken off
      the board by an explicit removal move. A board reached by a complete play has none.
    """

    playable: frozenset[Tile]
    occupancy: Mapping[Tile, int] = field(default_factory=dict)
    displaced: frozenset[int] = frozenset()
    _positions: Mapping[int, Tile] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        occupancy = dict(self.occupancy)
        off_board = [tile for tile in occupancy if tile not in self.playable]
        if off_board:
            raise InvalidMoveError(f"Tiles are not part of the board: {off_board}")

        positions = {piece: tile for tile, piece in occupancy.items()}
        if len(positions) != len(occupancy):
            raise InvalidMoveError("A piece cannot stand on more than one tile.")

        # frozen dataclass: go around __setattr__ to store the read-only views
        object.__setattr__(self, "playable", frozenset(self.playable))
        object.__setattr__(self, "occupancy", MappingProxyType(occupancy))
        object.__setattr__(self, "displaced", frozenset(self.displaced))
        object.__setattr__(self, "_positions", MappingProxyType(positions))

    @classmethod
    def rectangular(cls, ranks: int, files: int) -> Board:
        """Empty board with tiles (1, 1) up to and including (ranks, files)"""
        tiles = frozenset(
            Tile(rank, file)
            for rank, file in product(range(1, ranks + 1), range(1, files + 1))
        )
        return cls(tiles)

    # -- QUERIES --
    def tiles(self) -> frozenset[Tile]:
        return self.playable

    def piece_on_tile(self, tile: Tile) -> Optional[int]:
        return self.occupancy.get(tile)

    def tile_for_piece(self, piece: int) -> Optional[Tile]:
        return self._positions.get(piece)

    def pieces(self) -> frozenset[int]:
        """The pieces currently on the board"""
        return frozenset(self._positions)

    def occupied_tiles(self) -> frozenset[Tile]:
        return frozenset(self.occupancy)

    def displaced_pieces(self) -> frozenset[int]:
        return self.displaced

    def is_on_board(self, tile: Tile) -> bool:
        return tile in self.playable

    # -- CREATING NEW BOARDS --
    def make_move(self, move: Move) -> Board:
        """
        Board after a single atomic move.
        ---

        * relocation: the piece leaves its current tile (if any) and stands on the new one.
            If another piece stood there, it is displaced (un-positioned, and listed in `displaced`).
        * removal: the piece leaves the board. Also used to settle a displaced piece.
        * a piece that is not on the board (and not displaced) moving onto an empty tile is a placement.
        """
        current_tile = self.tile_for_piece(move.piece)
        is_displaced = move.piece in self.displaced

        if move.new_position is None:
            if current_tile is None and not is_displaced:
                raise InvalidMoveError(
                    f"Cannot remove piece {move.piece}: it is not on the board."
                )
            occupancy = dict(self.occupancy)
            if current_tile is not None:
                del occupancy[current_tile]
            return Board(self.playable, occupancy, self.displaced - {move.piece})

        target = move.new_position
        if target not in self.playable:
            raise InvalidMoveError(
                f"Cannot move piece {move.piece} to {target}: not a tile of this board."
            )

        occupant = self.piece_on_tile(target)
        if current_tile is None:
            if is_displaced:
                raise InvalidMoveError(
                    f"Piece {move.piece} was displaced and must be removed before it can be placed again."
                )
            if occupant is not None:
                raise InvalidMoveError(
                    f"Cannot place piece {move.piece} on {target}: tile is occupied by {occupant}."
                )

        displaced = self.displaced
        if occupant is not None and occupant != move.piece:
            displaced = displaced | {occupant}

        occupancy = dict(self.occupancy)
        if current_tile is not None:
            del occupancy[current_tile]
        occupancy[target] = move.piece
        return Board(self.playable, occupancy, displaced)

    def make_play(self, play: Play) -> Board:
        """Apply the moves of a play one after the other."""
        board = self
        for move in play:
            board = board.make_move(move)
        return board

    def place(self, piece: int, tile: Tile) -> Board:
        """convenience method: put a piece that is not yet on the board onto a tile"""
        if self.tile_for_piece(piece) is not None:
            raise InvalidMoveError(f"Piece {piece} is already on the board.")
        return self.make_move(Move(piece, tile))

    def place_all(self, placements: Iterable[tuple[int, Tile]]) -> Board:
        """convenience method to set up a board with many pieces at once"""
        board = self
        for piece, tile in placements:
            board = board.place(piece, tile)
        return board
