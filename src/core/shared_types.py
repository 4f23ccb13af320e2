"""
Type definitions used across layers
"""

from enum import StrEnum


class PieceType(StrEnum):
    PAWN = "pawn"
    FERZ = "ferz"
    WAZIR = "wazir"
    KNIGHT = "knight"
    COMMANDO = "commando"
    MANN = "mann"


class PlayState(StrEnum):
    """The kind of turn that is currently allowed. Only MOVE rounds are driven by this engine."""

    PLACE = "place"
    MOVE = "move"
