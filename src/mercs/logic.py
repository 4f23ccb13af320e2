"""
Geometry/Base movement and capturing rules of the Mercs pieces

Key idea: Use strategy pattern to define the candidate plays for each piece type.
A MoveLogic is the per-piece value that ties the strategy to the piece's own history.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, Optional, Protocol

from src.core.config import DEFAULT_RULES, MercsRules
from src.core.shared_types import PieceType
from src.mercs.move import Move, Play
from src.mercs.tile import Tile


class Board(Protocol):
    """Just the parts the movement strategies need"""

    def piece_on_tile(self, tile: Tile) -> Optional[int]: ...
    def tile_for_piece(self, piece: int) -> Optional[Tile]: ...
    def is_on_board(self, tile: Tile) -> bool: ...


Vector = tuple[int, int]

ORTHOGONALS: list[Vector] = [(1, 0), (-1, 0), (0, 1), (0, -1)]
DIAGONALS: list[Vector] = [(1, 1), (1, -1), (-1, 1), (-1, -1)]
KNIGHT_DELTAS: list[Vector] = [
    (2, 1),
    (2, -1),
    (-2, 1),
    (-2, -1),
    (1, 2),
    (1, -2),
    (-1, 2),
    (-1, -2),
]


@dataclass(frozen=True)
class Step:
    """One entry in a piece's history: where it came from and where it ended up (None: taken off the board)."""

    origin: Optional[Tile]
    destination: Optional[Tile]


@dataclass(frozen=True)
class MoveLogic:
    """
    Everything needed to compute the plays of a single piece.
    ----

    * `piece`: the id of the piece this logic belongs to.
    * `piece_type`: selects the movement rule.
    * `allies`: ids of the pieces owned by the same player (ownership never changes during a game).
    * `forward`: rank direction the piece considers forward (+1 up the board, -1 down). Only pawns care.
    * `history`: the steps this piece made so far, oldest first.

    The plays are purely a function of these fields and the board.
    """

    piece: int
    piece_type: PieceType
    allies: frozenset[int]
    forward: int = 1
    history: tuple[Step, ...] = ()
    rules: MercsRules = DEFAULT_RULES

    def plays(self, board: Board) -> list[Play]:
        """Candidate plays of this piece. A piece that is not on the board cannot play."""
        tile = board.tile_for_piece(self.piece)
        if tile is None:
            return []
        movement_rule: CandidatePlaysFn = MOVEMENT_RULES[self.piece_type]
        return movement_rule(self, tile, board)

    def update(self, board: Board, play: Play) -> MoveLogic:
        """
        The logic after `play` got made on `board` (the board as it was BEFORE the play).

        Every move in the play that concerns this piece gets recorded as a step.
        Plays that do not touch this piece leave the logic as it was.
        """
        position = board.tile_for_piece(self.piece)
        new_steps: list[Step] = []
        for move in play:
            if move.piece != self.piece:
                continue
            new_steps.append(Step(origin=position, destination=move.new_position))
            position = move.new_position

        if not new_steps:
            return self
        return replace(self, history=self.history + tuple(new_steps))

    # -- HISTORY --
    @property
    def has_moved(self) -> bool:
        return len(self.history) > 0

    @property
    def times_moved(self) -> int:
        return len(self.history)

    @property
    def last_step(self) -> Optional[Step]:
        return self.history[-1] if self.history else None

    # -- HELPERS USED BY THE MOVEMENT RULES --
    def is_ally(self, piece: int) -> bool:
        return piece == self.piece or piece in self.allies

    def relocation(self, board: Board, target: Tile) -> Optional[Play]:
        """
        The play that moves this piece onto `target`.

        None if the target is off the board or holds an ally. When an enemy stands there,
        the play ends with a move that takes it off the board.
        """
        if not board.is_on_board(target):
            return None
        occupant = board.piece_on_tile(target)
        if occupant is None:
            return (Move(self.piece, target),)
        if self.is_ally(occupant):
            return None
        return (Move(self.piece, target), Move(occupant, None))


# --- MOVEMENT RULES ---
def raycasting_plays(
    logic: MoveLogic, tile: Tile, board: Board, directions: list[Vector]
) -> list[Play]:
    """
    Raycasting algorithm
    -----

    Move along each direction until we hit another piece or the edge of the board.
    The first occupied tile is only a target if an enemy stands on it.
    """
    plays: list[Play] = []
    for d_rank, d_file in directions:
        target = tile
        while True:
            target = target.offset(d_rank, d_file)
            if not board.is_on_board(target):
                break

            play = logic.relocation(board, target)
            if play is not None:
                plays.append(play)

            if board.piece_on_tile(target) is not None:
                break
    return plays


def single_step_plays(
    logic: MoveLogic, tile: Tile, board: Board, deltas: list[Vector]
) -> list[Play]:
    """Raycasting is for sliding pieces. This is the equivalent for pieces that jump/step a single time along a delta"""
    plays: list[Play] = []
    for d_rank, d_file in deltas:
        play = logic.relocation(board, tile.offset(d_rank, d_file))
        if play is not None:
            plays.append(play)
    return plays


def candidate_wazir_plays(logic: MoveLogic, tile: Tile, board: Board) -> list[Play]:
    """Wazirs slide along ranks and files"""
    return raycasting_plays(logic, tile, board, ORTHOGONALS)


def candidate_ferz_plays(logic: MoveLogic, tile: Tile, board: Board) -> list[Play]:
    """Ferzes slide diagonally: |delta_rank| = |delta_file|"""
    return raycasting_plays(logic, tile, board, DIAGONALS)


def candidate_commando_plays(
    logic: MoveLogic, tile: Tile, board: Board
) -> list[Play]:
    """The Commando combines the wazir moves and the ferz moves"""
    return candidate_wazir_plays(logic, tile, board) + candidate_ferz_plays(
        logic, tile, board
    )


def candidate_mann_plays(logic: MoveLogic, tile: Tile, board: Board) -> list[Play]:
    """The mann steps a single tile in any of the eight directions"""
    return single_step_plays(logic, tile, board, ORTHOGONALS + DIAGONALS)


def candidate_knight_plays(logic: MoveLogic, tile: Tile, board: Board) -> list[Play]:
    """Knights always jump such that |delta_rank| + |delta_file| = 3, whatever stands in between"""
    return single_step_plays(logic, tile, board, KNIGHT_DELTAS)


def candidate_pawn_plays(logic: MoveLogic, tile: Tile, board: Board) -> list[Play]:
    """
    A pawn:
    - steps a single tile forward, onto an empty tile only.
    - may step two tiles forward on its first move, if the rules allow it and both tiles are empty.
    - takes diagonally forward (and only moves diagonally when taking).
    """
    plays: list[Play] = []

    push = tile.offset(logic.forward, 0)
    if board.is_on_board(push) and board.piece_on_tile(push) is None:
        plays.append((Move(logic.piece, push),))

        double_push = push.offset(logic.forward, 0)
        if (
            logic.rules.pawn_double_step
            and not logic.has_moved
            and board.is_on_board(double_push)
            and board.piece_on_tile(double_push) is None
        ):
            plays.append((Move(logic.piece, double_push),))

    for d_file in [-1, 1]:
        target = tile.offset(logic.forward, d_file)
        if not board.is_on_board(target):
            continue
        occupant = board.piece_on_tile(target)
        if occupant is None or logic.is_ally(occupant):
            continue
        plays.append((Move(logic.piece, target), Move(occupant, None)))

    return plays


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidatePlaysFn = Callable[[MoveLogic, Tile, Board], list[Play]]
MOVEMENT_RULES: dict[PieceType, CandidatePlaysFn] = {
    PieceType.PAWN: candidate_pawn_plays,
    PieceType.FERZ: candidate_ferz_plays,
    PieceType.WAZIR: candidate_wazir_plays,
    PieceType.KNIGHT: candidate_knight_plays,
    PieceType.COMMANDO: candidate_commando_plays,
    PieceType.MANN: candidate_mann_plays,
}
