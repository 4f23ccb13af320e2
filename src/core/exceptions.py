"""
Custom errors raised by the Mercs engine.

All layers import from here, so callers can catch `MercsError` to handle anything the engine complains about.
"""


class MercsError(Exception):
    """Base class of every error raised by the engine."""


# --- GAME STATE ---
class GameStateError(MercsError):
    """The GameState (or a part of it) does not satisfy its invariants."""


class IllegalPhaseError(GameStateError):
    """An action was requested that the current phase of the game does not allow."""


class UnownedPieceError(GameStateError):
    """A piece belongs to neither player. Always a programming error, never a user error."""


# --- BOARD ---
class InvalidMoveError(MercsError):
    """A Move cannot be applied to the Board."""


# --- SELECTING A PLAY ---
class PlaySelectionError(MercsError):
    """Caller picked something that is not among the candidate plays. Re-query the plays and try again."""


class NoSuchPieceError(PlaySelectionError, KeyError):
    """The selected piece has no candidate plays this round."""


class IndexOutOfRangeError(PlaySelectionError, IndexError):
    """The selected play index does not point into the piece's candidate plays."""


# --- SETUP ---
class InvalidSetupError(MercsError):
    """The request to set up a new game is inconsistent."""
