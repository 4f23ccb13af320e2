"""Bookkeeping of the players and of whose turn it is"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable

from src.core.config import MercsRules
from src.core.exceptions import GameStateError
from src.core.shared_types import PlayState


@dataclass(frozen=True)
class PlayerRecord:
    """
    * `pieces`: ids of the pieces this player owns. Fixed at setup, also contains pieces that are off the board.
    * `num_pieces_captured`: how many of the opponent's pieces this player took off the board.
    * `cooldown`: counter managed by the cooldown policy.
    """

    pieces: frozenset[int]
    num_pieces_captured: int = 0
    cooldown: int = 0

    def __post_init__(self) -> None:
        if self.num_pieces_captured < 0 or self.cooldown < 0:
            raise GameStateError(
                f"Capture count and cooldown cannot be negative: {self.num_pieces_captured=}, {self.cooldown=}"
            )
        object.__setattr__(self, "pieces", frozenset(self.pieces))

    def owns(self, piece: int) -> bool:
        return piece in self.pieces

    def after_play(self, captured: int, cooldown: int) -> PlayerRecord:
        """Record after a play of this player that captured `captured` pieces."""
        return replace(
            self,
            num_pieces_captured=self.num_pieces_captured + captured,
            cooldown=cooldown,
        )


# -- COOLDOWN POLICY --
CooldownPolicy = Callable[[PlayerRecord, int, MercsRules], int]


def default_cooldown_policy(
    record: PlayerRecord, captured: int, rules: MercsRules
) -> int:
    """Capturing resets the cooldown to `rules.capture_cooldown`, any other play ticks it down towards zero."""
    if captured > 0:
        return rules.capture_cooldown
    return max(0, record.cooldown - 1)


@dataclass(frozen=True)
class TurnOrder:
    first_player: int
    second_player: int
    current_player: int
    phase: PlayState

    def __post_init__(self) -> None:
        if self.first_player == self.second_player:
            raise GameStateError("The two players must be different.")
        if self.current_player not in self.players:
            raise GameStateError(
                f"Current player {self.current_player} is not playing this game."
            )

    @property
    def players(self) -> tuple[int, int]:
        return self.first_player, self.second_player

    def opponent(self, player: int) -> int:
        if player == self.first_player:
            return self.second_player
        if player == self.second_player:
            return self.first_player
        raise GameStateError(f"Player {player} is not playing this game.")

    def pass_turn(self, phase: PlayState) -> TurnOrder:
        """Hand the turn over to the other player"""
        return replace(
            self, current_player=self.opponent(self.current_player), phase=phase
        )
