"""Application settings. Defaults work out of the box, environment variables override them."""

import os
from dataclasses import dataclass
from typing import Optional, Self

TRUTHY = ("true", "1", "yes")


@dataclass
class Settings:
    log_level: str = "INFO"
    opponent_seed: Optional[int] = None
    database_echo: bool = False

    @classmethod
    def from_env(cls) -> Self:
        """Create settings from environment variables with proper type conversion."""
        seed = os.getenv("CHESS_OPPONENT_SEED")
        return cls(
            log_level=os.getenv("CHESS_LOG_LEVEL", "INFO").upper(),
            opponent_seed=int(seed) if seed else None,
            database_echo=os.getenv("CHESS_DB_ECHO", "false").lower() in TRUTHY,
        )
