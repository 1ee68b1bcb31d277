"""Commands issued by the rendering layer"""

from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field

from undercover.types.game import PlayerConfig


class CommandType(str, Enum):
    """Commands the engine accepts"""
    START_GAME = "start_game"
    REVEAL_WORD = "reveal_word"
    SELECT_STARTING_PLAYER = "select_starting_player"
    ELIMINATE_PLAYER = "eliminate_player"
    MISTER_WHITE_GUESS = "mister_white_guess"
    SKIP_ROUND = "skip_round"
    START_NEW_ROUND = "start_new_round"
    ENABLE_AMNESIC_MODE = "enable_amnesic_mode"
    COMPLETE_TRANSITION = "complete_transition"
    RESET_GAME = "reset_game"


class GameCommand(BaseModel):
    """A single command applied to the game state"""
    command_type: CommandType = Field(..., description="Type of command")
    player_id: Optional[str] = Field(None, description="Target player (reveal, eliminate, amnesic mode)")
    player_index: Optional[int] = Field(None, description="Seat index (starting player selection)")
    guess: Optional[str] = Field(None, description="Mister White's guess of the civilian word")

    # start_game only
    player_configs: List[PlayerConfig] = Field(default_factory=list)
    undercover_count: int = Field(1, description="Requested undercover count")
    mister_white_count: int = Field(0, description="Requested Mister White count")
