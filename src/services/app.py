"""Wire the layers together for a host process: settings, logging, storage, opponent."""

import logging

from src.chess.opponent import RandomOpponent
from src.core.config import Settings
from src.core.log import configure_logging
from src.db.database import SessionLocal
from src.db.sql_repository import SQLSessionRepository
from src.services.chess_service import ChessService

logger = logging.getLogger(__name__)


def build_service(settings: Settings | None = None) -> ChessService:
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    repository = SQLSessionRepository(SessionLocal())
    opponent = RandomOpponent(seed=settings.opponent_seed)
    logger.info(
        "Chess service ready (log level %s, opponent seed %s)",
        settings.log_level,
        settings.opponent_seed,
    )
    return ChessService(repository, opponent=opponent)
