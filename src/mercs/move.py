"""
Atomic moves and plays.

A Move relocates a single piece, or takes it off the board. A Play is everything one piece does in a single turn:
an ordered sequence of moves that get applied together (ex. a relocation followed by the removal of the captured piece).
"""

from dataclasses import dataclass
from typing import Optional, Self

from src.mercs.tile import Tile

REMOVAL_NOTATION = "x"


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made. `new_position=None` takes the piece off the board."""

    piece: int
    new_position: Optional[Tile]

    @property
    def is_removal(self) -> bool:
        return self.new_position is None

    @classmethod
    def from_notation(cls, notation: str) -> Self:
        """
        Short notation: <piece id>:<tile or x>

        examples:
        * "3:e4": piece 3 moves to e4
        * "7:x": piece 7 is taken off the board
        """
        piece, position = notation.split(":")
        new_position = (
            None if position == REMOVAL_NOTATION else Tile.from_algebraic(position)
        )
        return cls(int(piece), new_position)

    def to_notation(self) -> str:
        position = (
            REMOVAL_NOTATION
            if self.new_position is None
            else self.new_position.to_algebraic()
        )
        return f"{self.piece}:{position}"


Play = tuple[Move, ...]


def play_to_notation(play: Play) -> str:
    """Moves of a play separated by spaces, ex. '1:b1 2:x'"""
    return " ".join(move.to_notation() for move in play)
