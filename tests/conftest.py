"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable

import pytest

from src.api.models import GameSetupRequest, PieceSetup
from src.core.config import DEFAULT_RULES, MercsRules
from src.core.shared_types import PieceType, PlayState
from src.mercs.game_state import GameState
from src.mercs.setup import new_game

FIRST_PLAYER = 100
SECOND_PLAYER = 200

# piece id -> (type, owner, tile)
Placements = dict[int, tuple[PieceType, int, str]]
StateFactory = Callable[..., GameState]


def build_request(
    placements: Placements,
    ranks: int = 8,
    files: int = 8,
    rules: MercsRules = DEFAULT_RULES,
    phase: PlayState = PlayState.MOVE,
) -> GameSetupRequest:
    return GameSetupRequest(
        first_player=FIRST_PLAYER,
        second_player=SECOND_PLAYER,
        ranks=ranks,
        files=files,
        pieces=[
            PieceSetup(piece=piece, type=piece_type, owner=owner, tile=tile)
            for piece, (piece_type, owner, tile) in placements.items()
        ],
        rules=rules,
        starting_phase=phase,
    )


@pytest.fixture
def make_state() -> StateFactory:
    """Call the inner function with the pieces to place (and optionally board size, rules, phase)"""

    def _make_state(
        placements: Placements,
        ranks: int = 8,
        files: int = 8,
        rules: MercsRules = DEFAULT_RULES,
        phase: PlayState = PlayState.MOVE,
    ) -> GameState:
        return new_game(build_request(placements, ranks, files, rules, phase))

    return _make_state


@pytest.fixture
def capture_scenario(make_state: StateFactory) -> GameState:
    """
    Degenerate 2x2 board:
    * wazir (id 1) of the first player on a1
    * mann (id 2) of the second player on b1
    First player to move.
    """
    return make_state(
        {
            1: (PieceType.WAZIR, FIRST_PLAYER, "a1"),
            2: (PieceType.MANN, SECOND_PLAYER, "b1"),
        },
        ranks=2,
        files=2,
    )
