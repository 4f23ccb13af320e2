"""Requests and Response models"""

from typing import Self

from pydantic import BaseModel, Field, field_validator, model_validator

from src.core.config import DEFAULT_RULES, MercsRules
from src.core.exceptions import InvalidSetupError
from src.core.shared_types import PieceType, PlayState
from src.mercs.tile import Tile

# the algebraic notation uses one letter per file
MAX_FILES = 26

PieceId = int
PlayNotation = str


def _is_algebraic_notation(value: str) -> bool:
    if len(value) < 2:
        return False

    first_character = value[0]
    other_characters = value[1:]
    if not first_character.isascii():
        return False
    if not (first_character.isalpha() and first_character.islower()):
        return False
    return other_characters.isascii() and other_characters.isdecimal()


# --- REQUEST MODELS ---
class PieceSetup(BaseModel):
    piece: PieceId = Field(ge=1)
    type: PieceType
    owner: int
    tile: str

    @field_validator("tile")
    @classmethod
    def validate_tile(cls, value: str) -> str:
        if not _is_algebraic_notation(value):
            raise InvalidSetupError(
                f"Cannot interpret tile: {value!r} as a valid tile name."
            )
        return value

    def to_tile(self) -> Tile:
        return Tile.from_algebraic(self.tile)


class GameSetupRequest(BaseModel):
    first_player: int
    second_player: int
    ranks: int = Field(default=8, ge=1)
    files: int = Field(default=8, ge=1, le=MAX_FILES)
    pieces: list[PieceSetup]
    rules: MercsRules = DEFAULT_RULES
    starting_phase: PlayState = PlayState.MOVE

    @model_validator(mode="after")
    def validate_setup(self) -> Self:
        """
        A setup is consistent if
        ---

        * the two players are different
        * every piece id and every tile is used only once
        * every tile lies on the board
        * every piece belongs to one of the two players
        """
        if self.first_player == self.second_player:
            raise InvalidSetupError(
                f"A game needs two different players. Got {self.first_player} twice."
            )

        piece_ids = [setup.piece for setup in self.pieces]
        if len(set(piece_ids)) != len(piece_ids):
            raise InvalidSetupError(f"Piece ids must be unique: {piece_ids}")

        tiles = [setup.tile for setup in self.pieces]
        if len(set(tiles)) != len(tiles):
            raise InvalidSetupError(f"Only one piece can stand on a tile: {tiles}")

        for setup in self.pieces:
            tile = setup.to_tile()
            if not (1 <= tile.rank <= self.ranks and 1 <= tile.file <= self.files):
                raise InvalidSetupError(
                    f"Tile {setup.tile} of piece {setup.piece} is not on a {self.ranks}x{self.files} board."
                )
            if setup.owner not in (self.first_player, self.second_player):
                raise InvalidSetupError(
                    f"Piece {setup.piece} belongs to {setup.owner}, who is not playing this game."
                )
        return self


class PlayRequest(BaseModel):
    piece: PieceId
    play_index: int = Field(ge=0)


# --- RESPONSE MODELS ---
class PlaysResponse(BaseModel):
    current_player: int
    phase: PlayState
    plays: dict[PieceId, list[PlayNotation]]
