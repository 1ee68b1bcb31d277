"""Runtime settings read from the environment (and a .env file if present)"""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from undercover.storage.history import DEFAULT_HISTORY_LIMIT


class Settings(BaseModel):
    """Settings for the terminal front end and the history store"""
    data_dir: Path = Field(Path("game_data"), description="Where the outcome history is written")
    history_limit: int = Field(DEFAULT_HISTORY_LIMIT, ge=1, description="Outcomes kept in the history")
    transition_delay: float = Field(1.5, ge=0.0, description="Seconds before automatic phase changes")
    log_level: str = Field("WARNING", description="Logging level name")

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        return cls(
            data_dir=Path(os.getenv("UNDERCOVER_DATA_DIR", "game_data")),
            history_limit=int(os.getenv("UNDERCOVER_HISTORY_LIMIT", str(DEFAULT_HISTORY_LIMIT))),
            transition_delay=float(os.getenv("UNDERCOVER_TRANSITION_DELAY", "1.5")),
            log_level=os.getenv("UNDERCOVER_LOG_LEVEL", "WARNING").upper(),
        )
