"""
A tile on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Tile:
    rank: int
    file: int

    @classmethod
    def from_algebraic(cls, name: str) -> Tile:
        """Algebraic notation: 'a1' gets converted to rank 1, file 1. Ranks may have more than one digit ('c10')."""
        file = ord(name[0]) - ord("a") + 1
        rank = int(name[1:])
        return cls(rank, file)

    def to_algebraic(self) -> str:
        return f"{chr(self.file + ord('a') - 1)}{self.rank}"

    def offset(self, d_rank: int, d_file: int) -> Tile:
        """The tile shifted by the given amount. Might not be a tile of any board."""
        return Tile(self.rank + d_rank, self.file + d_file)
