"""
Rule options of a game of Mercs.

Parts of the rules that are not settled (pawn double step, how cooldown evolves, which phase follows a move round)
are exposed here as options, so the engine does not hardcode one reading of them.
"""

from pydantic import BaseModel, ConfigDict, Field

from src.core.shared_types import PlayState


class MercsRules(BaseModel):
    model_config = ConfigDict(frozen=True)

    # a pawn that never moved may advance two tiles if both are empty
    pawn_double_step: bool = False
    # cooldown a player gets after a play in which they captured something
    capture_cooldown: int = Field(default=0, ge=0)
    # cooldown both players start with
    starting_cooldown: int = Field(default=0, ge=0)
    phase_after_move: PlayState = PlayState.MOVE


DEFAULT_RULES = MercsRules()
