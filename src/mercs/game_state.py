"""
Snapshot of an entire game of Mercs.

A GameState is never changed: every play produces a new one. Hence it can be handed to rendering or other
readers without worrying about them changing it.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from src.core.config import DEFAULT_RULES, MercsRules
from src.core.exceptions import GameStateError, UnownedPieceError
from src.core.shared_types import PieceType
from src.mercs.board import Board
from src.mercs.logic import MoveLogic
from src.mercs.records import PlayerRecord, TurnOrder


@dataclass(frozen=True)
class PieceInfo:
    type: PieceType
    logic: MoveLogic


@dataclass(frozen=True)
class GameState:
    board: Board
    piece_to_info: Mapping[int, PieceInfo]
    player_to_info: Mapping[int, PlayerRecord]
    order: TurnOrder
    rules: MercsRules = DEFAULT_RULES

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "piece_to_info", MappingProxyType(dict(self.piece_to_info))
        )
        object.__setattr__(
            self, "player_to_info", MappingProxyType(dict(self.player_to_info))
        )
        self._validate()

    def _validate(self) -> None:
        """
        Invariants of a game
        ----

        1. Exactly the two players in the turn order have a record.
        2. No piece is owned by both players.
        3. Every owned piece, and every piece on the board, is registered.
        4. The info of every piece agrees with its id, its owner and the rules of the game.
        """
        if set(self.player_to_info) != set(self.order.players):
            raise GameStateError(
                f"Player records {sorted(self.player_to_info)} do not match the players in the turn order {self.order.players}."
            )

        first = self.player_to_info[self.order.first_player].pieces
        second = self.player_to_info[self.order.second_player].pieces
        shared = first & second
        if shared:
            raise GameStateError(f"Pieces owned by both players: {sorted(shared)}")

        unregistered = (first | second | self.board.pieces()) - set(
            self.piece_to_info
        )
        if unregistered:
            raise GameStateError(f"Pieces without info: {sorted(unregistered)}")

        for piece, info in self.piece_to_info.items():
            self._validate_info(piece, info)

    def _validate_info(self, piece: int, info: PieceInfo) -> None:
        logic = info.logic
        if logic.piece != piece or logic.piece_type != info.type:
            raise GameStateError(
                f"Info of piece {piece} describes piece {logic.piece} of type {logic.piece_type}, not a {info.type}."
            )
        if logic.rules != self.rules:
            raise GameStateError(
                f"Piece {piece} does not follow the rules of the game."
            )

        for player in self.order.players:
            pieces = self.player_to_info[player].pieces
            if piece in pieces and logic.allies != pieces:
                raise GameStateError(
                    f"Allies of piece {piece} {sorted(logic.allies)} are not the pieces of player {player} {sorted(pieces)}."
                )

    @property
    def current_player(self) -> int:
        return self.order.current_player

    def current_record(self) -> PlayerRecord:
        return self.player_to_info[self.order.current_player]

    def owner(self, piece: int) -> int:
        """The player owning the piece. Every piece in the game has one, so failing here means a bug."""
        for player in self.order.players:
            if self.player_to_info[player].owns(piece):
                return player
        raise UnownedPieceError(f"Piece {piece} isn't owned by a player.")

    def piece_type(self, piece: int) -> PieceType:
        return self.piece_to_info[piece].type

    def logic(self, piece: int) -> MoveLogic:
        return self.piece_to_info[piece].logic
