"""
Creating the GameState a game of Mercs starts from.

Pieces can be listed one by one in a GameSetupRequest, or be read from a layout string.
"""

from src.api.models import GameSetupRequest, PieceSetup
from src.core.config import DEFAULT_RULES, MercsRules
from src.core.exceptions import InvalidSetupError
from src.core.shared_types import PieceType, PlayState
from src.mercs.board import Board
from src.mercs.game_state import GameState, PieceInfo
from src.mercs.logic import MoveLogic
from src.mercs.records import PlayerRecord, TurnOrder

LAYOUT_TO_PIECE: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "f": PieceType.FERZ,
    "w": PieceType.WAZIR,
    "n": PieceType.KNIGHT,
    "c": PieceType.COMMANDO,
    "m": PieceType.MANN,
}

# first player (upper case) at the bottom, second player (lower case) at the top
STANDARD_LAYOUT = "wnfcmfnw/pppppppp/8/8/8/8/PPPPPPPP/WNFCMFNW"


def new_game(request: GameSetupRequest) -> GameState:
    """
    Build the first GameState of a game
    ----

    * the board gets every piece placed on its tile
    * each piece gets a fresh logic. Pawns of the first player move up the board, those of the second player move down.
    * players start without captures, with the starting cooldown of the rules
    * the first player is the first one to act
    * the game keeps the rules of the request
    """
    rules = request.rules
    owned: dict[int, set[int]] = {
        request.first_player: set(),
        request.second_player: set(),
    }
    for setup in request.pieces:
        owned[setup.owner].add(setup.piece)

    board = Board.rectangular(request.ranks, request.files).place_all(
        (setup.piece, setup.to_tile()) for setup in request.pieces
    )

    piece_to_info: dict[int, PieceInfo] = {}
    for setup in request.pieces:
        logic = MoveLogic(
            piece=setup.piece,
            piece_type=setup.type,
            allies=frozenset(owned[setup.owner]),
            forward=1 if setup.owner == request.first_player else -1,
            rules=rules,
        )
        piece_to_info[setup.piece] = PieceInfo(setup.type, logic)

    player_to_info = {
        player: PlayerRecord(
            pieces=frozenset(pieces), cooldown=rules.starting_cooldown
        )
        for player, pieces in owned.items()
    }
    order = TurnOrder(
        first_player=request.first_player,
        second_player=request.second_player,
        current_player=request.first_player,
        phase=request.starting_phase,
    )
    return GameState(board, piece_to_info, player_to_info, order, rules)


def setup_from_layout(
    layout: str,
    first_player: int,
    second_player: int,
    rules: MercsRules = DEFAULT_RULES,
    starting_phase: PlayState = PlayState.MOVE,
) -> GameSetupRequest:
    """
    Read a setup from a layout string.

    ex. the standard layout:
    wnfcmfnw/pppppppp/8/8/8/8/PPPPPPPP/WNFCMFNW
    means:
    * ranks are separated by slashes, the top rank comes first
    * within a rank, the first character is on the a-file
    * letters denote pieces: upper case for the first player, lower case for the second
    * a number denotes that many empty tiles after each other

    Pieces get ids 1, 2, ... in reading order.
    """
    layout_by_ranks = layout.split("/")
    num_ranks = len(layout_by_ranks)
    pieces: list[PieceSetup] = []
    num_files: set[int] = set()

    for rank_idx, layout_one_rank in enumerate(layout_by_ranks):
        # layout is read from the top rank to the bottom rank
        rank = num_ranks - rank_idx
        file = 1
        empty_count = ""
        for character in layout_one_rank + "/":
            if character.isdigit():
                empty_count += character
                continue

            # a number ends at the next piece (or at the end of the rank)
            if empty_count:
                file += int(empty_count)
                empty_count = ""

            if character == "/":
                break
            if character.lower() not in LAYOUT_TO_PIECE:
                raise InvalidSetupError(
                    f"Unknown piece {character!r} in rank {rank} of layout {layout!r}"
                )

            owner = first_player if character.isupper() else second_player
            tile = f"{chr(file + ord('a') - 1)}{rank}"
            pieces.append(
                PieceSetup(
                    piece=len(pieces) + 1,
                    type=LAYOUT_TO_PIECE[character.lower()],
                    owner=owner,
                    tile=tile,
                )
            )
            file += 1
        num_files.add(file - 1)

    if len(num_files) != 1:
        raise InvalidSetupError(
            f"All ranks of a layout must have the same number of tiles: {layout!r}"
        )

    return GameSetupRequest(
        first_player=first_player,
        second_player=second_player,
        ranks=num_ranks,
        files=num_files.pop(),
        pieces=pieces,
        rules=rules,
        starting_phase=starting_phase,
    )


def standard_game(
    first_player: int, second_player: int, rules: MercsRules = DEFAULT_RULES
) -> GameState:
    """convenience method: a game in the standard starting layout"""
    request = setup_from_layout(STANDARD_LAYOUT, first_player, second_player, rules)
    return new_game(request)

