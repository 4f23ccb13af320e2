"""Unit tests for /src/mercs/game_state.py"""

import pytest

from src.core.config import DEFAULT_RULES, MercsRules
from src.core.exceptions import GameStateError, UnownedPieceError
from src.core.shared_types import PieceType, PlayState
from src.mercs.board import Board
from src.mercs.game_state import GameState, PieceInfo
from src.mercs.logic import MoveLogic
from src.mercs.records import PlayerRecord, TurnOrder
from src.mercs.tile import Tile

FIRST_PLAYER = 100
SECOND_PLAYER = 200
ORDER = TurnOrder(FIRST_PLAYER, SECOND_PLAYER, FIRST_PLAYER, PlayState.MOVE)
FIRST_PIECES = frozenset([1, 3])


def info(
    piece: int,
    piece_type: PieceType = PieceType.MANN,
    allies: frozenset[int] | None = None,
) -> PieceInfo:
    """Allies default to the piece alone"""
    allies = frozenset([piece]) if allies is None else allies
    return PieceInfo(piece_type, MoveLogic(piece, piece_type, allies))


@pytest.fixture
def state() -> GameState:
    board = Board.rectangular(2, 2).place_all([(1, Tile(1, 1)), (2, Tile(2, 2))])
    return GameState(
        board=board,
        piece_to_info={
            1: info(1, allies=FIRST_PIECES),
            2: info(2, PieceType.PAWN),
            3: info(3, allies=FIRST_PIECES),
        },
        player_to_info={
            FIRST_PLAYER: PlayerRecord(FIRST_PIECES),
            SECOND_PLAYER: PlayerRecord(frozenset([2])),
        },
        order=ORDER,
    )


def test_accessors(state: GameState) -> None:
    assert state.current_player == FIRST_PLAYER
    assert state.current_record().pieces == frozenset([1, 3])
    assert state.piece_type(2) == PieceType.PAWN
    assert state.logic(1).piece == 1


def test_owner(state: GameState) -> None:
    assert state.owner(1) == FIRST_PLAYER
    # off the board, still owned
    assert state.owner(3) == FIRST_PLAYER
    assert state.owner(2) == SECOND_PLAYER


def test_unowned_piece(state: GameState) -> None:
    with pytest.raises(UnownedPieceError):
        _ = state.owner(42)


def test_registries_are_read_only(state: GameState) -> None:
    with pytest.raises(TypeError):
        state.piece_to_info[4] = info(4)  # type: ignore[index]
    with pytest.raises(TypeError):
        del state.player_to_info[FIRST_PLAYER]  # type: ignore[attr-defined]


def test_state_copies_registries() -> None:
    """Changing the dictionary used to build a state does not change the state"""
    pieces = {1: info(1), 2: info(2)}
    state = GameState(
        Board.rectangular(2, 2),
        pieces,
        {
            FIRST_PLAYER: PlayerRecord(frozenset([1])),
            SECOND_PLAYER: PlayerRecord(frozenset([2])),
        },
        ORDER,
    )
    pieces[3] = info(3)
    assert 3 not in state.piece_to_info


def test_players_must_match_turn_order() -> None:
    with pytest.raises(GameStateError):
        _ = GameState(
            Board.rectangular(2, 2),
            {1: info(1)},
            {FIRST_PLAYER: PlayerRecord(frozenset([1]))},
            ORDER,
        )


def test_ownership_is_exclusive() -> None:
    with pytest.raises(GameStateError):
        _ = GameState(
            Board.rectangular(2, 2),
            {1: info(1)},
            {
                FIRST_PLAYER: PlayerRecord(frozenset([1])),
                SECOND_PLAYER: PlayerRecord(frozenset([1])),
            },
            ORDER,
        )


def test_pieces_must_be_registered() -> None:
    board = Board.rectangular(2, 2).place(5, Tile(1, 1))
    with pytest.raises(GameStateError):
        _ = GameState(
            board,
            {1: info(1)},
            {
                FIRST_PLAYER: PlayerRecord(frozenset([1])),
                SECOND_PLAYER: PlayerRecord(frozenset()),
            },
            ORDER,
        )


def two_piece_state(
    piece_to_info: dict[int, PieceInfo], rules: MercsRules = DEFAULT_RULES
) -> GameState:
    return GameState(
        Board.rectangular(2, 2),
        piece_to_info,
        {
            FIRST_PLAYER: PlayerRecord(frozenset([1])),
            SECOND_PLAYER: PlayerRecord(frozenset([2])),
        },
        ORDER,
        rules,
    )


def test_rules_default() -> None:
    state = two_piece_state({1: info(1), 2: info(2)})
    assert state.rules == DEFAULT_RULES


@pytest.mark.parametrize(
    "piece_to_info",
    [
        # logic of another piece under this id
        {1: info(2), 2: info(2)},
        # type tag and logic disagree
        {
            1: PieceInfo(PieceType.PAWN, MoveLogic(1, PieceType.MANN, frozenset([1]))),
            2: info(2),
        },
        # piece of the first player thinks the opponent's piece is an ally
        {1: info(1, allies=frozenset([1, 2])), 2: info(2)},
        # allies missing a piece of the same player
        {1: info(1), 2: info(2, allies=frozenset())},
    ],
)
def test_piece_info_must_agree_with_registries(
    piece_to_info: dict[int, PieceInfo],
) -> None:
    with pytest.raises(GameStateError):
        _ = two_piece_state(piece_to_info)


def test_piece_logic_must_follow_game_rules() -> None:
    with pytest.raises(GameStateError):
        _ = two_piece_state(
            {1: info(1), 2: info(2)}, rules=MercsRules(capture_cooldown=2)
        )
