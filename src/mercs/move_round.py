"""
A round of movement for the current player in a game of Mercs.

The current player can look at the plays each of their pieces on the board could make,
and pick one of them to produce the next GameState.
"""

import logging

from src.core.exceptions import (
    IllegalPhaseError,
    IndexOutOfRangeError,
    InvalidMoveError,
    NoSuchPieceError,
)
from src.core.shared_types import PlayState
from src.mercs.board import Board
from src.mercs.game_state import GameState, PieceInfo
from src.mercs.move import Play, play_to_notation
from src.mercs.records import CooldownPolicy, PlayerRecord, default_cooldown_policy

logger = logging.getLogger(__name__)


class MoveRound:
    """Single use: construct a new one for every GameState. The rules are the ones the game was set up with."""

    def __init__(
        self,
        state: GameState,
        cooldown_policy: CooldownPolicy = default_cooldown_policy,
    ) -> None:
        if state.order.phase != PlayState.MOVE:
            raise IllegalPhaseError(
                f"Game is not in its move round. phase: {state.order.phase}"
            )
        self.state = state
        self.rules = state.rules
        self.cooldown_policy = cooldown_policy

    def piece_to_plays(self) -> dict[int, list[Play]]:
        """
        Plays of every piece of the current player that is on the board.
        ---

        Pieces off the board cannot make plays, so they are left out. Ordered by piece id.
        """
        board = self.state.board
        pieces_on_board = sorted(
            piece
            for piece in self.state.current_record().pieces
            if board.tile_for_piece(piece) is not None
        )
        return {
            piece: self.state.logic(piece).plays(board) for piece in pieces_on_board
        }

    def plays_for(self, piece: int) -> list[Play]:
        plays = self.piece_to_plays().get(piece)
        if not plays:
            raise NoSuchPieceError(
                f"Piece {piece} cannot make a play for player {self.state.current_player}."
            )
        return plays

    def play(self, piece: int, play_index: int) -> Play:
        """Look up the play the caller selected"""
        plays = self.plays_for(piece)
        if not 0 <= play_index < len(plays):
            raise IndexOutOfRangeError(
                f"Piece {piece} has {len(plays)} plays. No play with index {play_index}."
            )
        return plays[play_index]

    def apply(self, piece: int, play_index: int) -> GameState:
        """
        The game after the current player makes the selected play
        -----

        1. make every move of the play on the board
        2. update the logic of EVERY piece (another piece's history can depend on this play too)
        3. add the captures to the current player's record, and advance their cooldown
        4. hand the turn over to the opponent
        """
        play = self.play(piece, play_index)

        board = self._new_board(play)
        piece_to_info = self._new_piece_to_info(play)
        player_to_info = self._new_player_to_info(play)
        order = self.state.order.pass_turn(self.rules.phase_after_move)

        logger.debug(
            "player %s played %r with piece %s",
            self.state.current_player,
            play_to_notation(play),
            piece,
        )
        return GameState(board, piece_to_info, player_to_info, order, self.rules)

    # -- PRIVATE HELPERS ---
    def _new_board(self, play: Play) -> Board:
        board = self.state.board.make_play(play)
        if board.displaced_pieces():
            raise InvalidMoveError(
                f"Play {play_to_notation(play)!r} displaces pieces without removing them: {sorted(board.displaced_pieces())}"
            )
        return board

    def _new_piece_to_info(self, play: Play) -> dict[int, PieceInfo]:
        """Reuse the type of each piece, update its logic using the board before the play."""
        old_board = self.state.board
        return {
            piece: PieceInfo(info.type, info.logic.update(old_board, play))
            for piece, info in self.state.piece_to_info.items()
        }

    def _new_player_to_info(self, play: Play) -> dict[int, PlayerRecord]:
        """
        Only the current player's record changes.

        For a piece to be "captured" by a player, it has to be taken off the board and must not belong to that player.
        """
        current_player = self.state.current_player
        record = self.state.current_record()
        captured = count_captures(play, record)
        cooldown = self.cooldown_policy(record, captured, self.rules)

        player_to_info = dict(self.state.player_to_info)
        player_to_info[current_player] = record.after_play(captured, cooldown)
        return player_to_info


def count_captures(play: Play, record: PlayerRecord) -> int:
    """Number of moves in the play that take a piece not owned by `record` off the board"""
    return sum(1 for move in play if move.is_removal and not record.owns(move.piece))
