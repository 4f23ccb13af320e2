"""Orchestration of communication between an outer surface (input loop, API router) and the rule engine."""

import logging

from src.api.models import GameSetupRequest, PlayRequest, PlaysResponse
from src.core.config import DEFAULT_RULES, MercsRules
from src.mercs.game_state import GameState
from src.mercs.move import play_to_notation
from src.mercs.move_round import MoveRound
from src.mercs.records import CooldownPolicy, default_cooldown_policy
from src.mercs.setup import new_game

logger = logging.getLogger(__name__)


class MercsService:
    """
    Turns requests into state transitions.

    The service keeps no game around: it gets handed a GameState and returns the next one.
    """

    def __init__(
        self,
        rules: MercsRules = DEFAULT_RULES,
        cooldown_policy: CooldownPolicy = default_cooldown_policy,
    ) -> None:
        self.rules = rules
        self.cooldown_policy = cooldown_policy

    def new_game(self, request: GameSetupRequest) -> GameState:
        """Create the first GameState. The service's rules win over the ones in the request and stay with the game."""
        request = request.model_copy(update={"rules": self.rules})
        state = new_game(request)
        logger.info(
            "new game between players %s and %s with %d pieces",
            request.first_player,
            request.second_player,
            len(request.pieces),
        )
        return state

    def available_plays(self, state: GameState) -> PlaysResponse:
        """The plays of the current player, written in move notation, so an input loop can show them."""
        move_round = self._move_round(state)
        return PlaysResponse(
            current_player=state.current_player,
            phase=state.order.phase,
            plays={
                piece: [play_to_notation(play) for play in plays]
                for piece, plays in move_round.piece_to_plays().items()
            },
        )

    def make_play(self, state: GameState, request: PlayRequest) -> GameState:
        """Make the requested play. The given state stays as it was, also when the request gets rejected."""
        move_round = self._move_round(state)
        new_state = move_round.apply(request.piece, request.play_index)

        player = state.current_player
        captures = (
            new_state.player_to_info[player].num_pieces_captured
            - state.player_to_info[player].num_pieces_captured
        )
        if captures:
            logger.info("player %s captured %d piece(s)", player, captures)
        return new_state

    def owner_of(self, state: GameState, piece: int) -> int:
        return state.owner(piece)

    # -- Internal helpers --
    def _move_round(self, state: GameState) -> MoveRound:
        return MoveRound(state, self.cooldown_policy)
