"""Game state models for the Undercover party game"""

from enum import Enum
from typing import Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field


MIN_PLAYERS = 3
MAX_PLAYERS = 12
MAX_NAME_LENGTH = 16
PALETTE_SIZE = 8


class Scores:
    """Points awarded to each winner at the end of a round"""
    CIVIL_WIN = 5
    UNDERCOVER_WIN = 10
    MISTER_WHITE_WIN = 12
    MISTER_WHITE_GUESS = 6


class Role(str, Enum):
    """Secret roles dealt at the start of each round"""
    CIVIL = "civil"
    UNDERCOVER = "undercover"
    MISTER_WHITE = "mister-white"


class Winner(str, Enum):
    """Possible round outcomes"""
    CIVIL = "civil"
    UNDERCOVER = "undercover"
    MISTER_WHITE = "mister-white"


class GamePhase(str, Enum):
    """Phases of a round"""
    SETUP = "setup"
    WORD_DISTRIBUTION = "word-distribution"
    STARTING_PLAYER_SELECTION = "starting-player-selection"
    PLAYING = "playing"
    VOTING = "voting"
    AMNESIC_MODE = "amnesic-mode"
    GAME_OVER = "game-over"


class GameSettings(BaseModel):
    """Role configuration for the session"""
    model_config = ConfigDict(frozen=True)

    min_players: int = Field(MIN_PLAYERS, description="Minimum number of players")
    max_players: int = Field(MAX_PLAYERS, description="Maximum number of players")
    undercover_count: int = Field(1, ge=0, description="Number of undercover players")
    mister_white_count: int = Field(1, ge=0, description="Number of Mister White players")

    @property
    def has_mister_white(self) -> bool:
        return self.mister_white_count > 0


class WordPair(BaseModel):
    """Civilian/undercover word duo active for a round"""
    model_config = ConfigDict(frozen=True)

    civilian: str
    undercover: str


class PlayerConfig(BaseModel):
    """Player identity supplied by the setup screen"""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Display name")
    profile_image: Optional[str] = Field(
        None,
        description="Opaque image reference (URI or base64 blob), never interpreted by the engine"
    )


class Player(BaseModel):
    """A participant for the lifetime of a session"""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Stable identifier within the session")
    name: str = Field(..., max_length=MAX_NAME_LENGTH)
    role: Role
    word: Optional[str] = Field(None, description="Secret word, absent for Mister White")
    profile_image: Optional[str] = None
    score: int = Field(0, ge=0, description="Cumulative score across rounds")
    is_eliminated: bool = False
    has_seen_word: bool = False
    color_index: int = Field(1, ge=1, le=PALETTE_SIZE)


class GameState(BaseModel):
    """Immutable snapshot of the game, replaced on every command"""
    model_config = ConfigDict(frozen=True)

    phase: GamePhase = Field(GamePhase.SETUP)
    players: Tuple[Player, ...] = Field(default_factory=tuple, description="Players in seating order")
    current_player_index: int = Field(0, ge=0, description="Seat whose turn it is to look at their card")
    starting_player_index: Optional[int] = Field(None, description="Seat leading the discussion")
    civilian_word: str = ""
    undercover_word: str = ""
    round_number: int = Field(1, ge=1)

    winner: Optional[Winner] = Field(None, description="Set only in game-over")
    winner_players: Tuple[Player, ...] = Field(default_factory=tuple)

    # Mister White who was just voted out and may guess the civilian word
    guessing_player_id: Optional[str] = None

    # Phase the host should move to once its presentation delay has elapsed
    pending_transition: Optional[GamePhase] = None

    game_settings: GameSettings = Field(default_factory=GameSettings)

    @property
    def word_pair(self) -> Optional[WordPair]:
        if not self.civilian_word:
            return None
        return WordPair(civilian=self.civilian_word, undercover=self.undercover_word)

    @property
    def current_player(self) -> Optional[Player]:
        if 0 <= self.current_player_index < len(self.players):
            return self.players[self.current_player_index]
        return None

    def find_player(self, player_id: str) -> Optional[Player]:
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def index_of(self, player_id: str) -> int:
        for index, player in enumerate(self.players):
            if player.id == player_id:
                return index
        return -1
