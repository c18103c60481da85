"""Implementation of (Session)Repository using SQLAlchemy"""

import logging
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.orm import Session

from src.core.models import SessionModel
from src.db.schema import DBSession

logger = logging.getLogger(__name__)


class SQLSessionRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_session(self, session_id: UUID) -> SessionModel | None:
        """Get session by ID, if record exists."""
        session_db = self._fetch_session(session_id)
        if session_db:
            return self._to_model(session_db)
        return None

    def create_session(self, session: SessionModel) -> tuple[SessionModel, UUID]:
        """Store new session and return the stored data + newly created session ID."""

        new_id = uuid4()
        session_db = DBSession(
            id=new_id,
            position=session.position,
            team_to_move=session.team_to_move,
            white_score=session.scores.get("white", 0),
            black_score=session.scores.get("black", 0),
        )
        self.db.add(session_db)
        self.db.commit()
        self.db.refresh(session_db)
        logger.debug("Stored new session %s", new_id)
        return self._to_model(session_db), new_id

    def update_session(
        self, session_id: UUID, session: SessionModel
    ) -> SessionModel | None:
        """Add new info to existing record."""
        session_db = self._fetch_session(session_id)
        if not session_db:
            return None
        session_db.position = session.position
        session_db.team_to_move = session.team_to_move
        session_db.white_score = session.scores.get("white", 0)
        session_db.black_score = session.scores.get("black", 0)
        self.db.commit()
        self.db.refresh(session_db)
        return self._to_model(session_db)

    def delete_session(self, session_id: UUID) -> SessionModel | None:
        """Remove a session's record."""
        session_db = self._fetch_session(session_id)
        if not session_db:
            return None
        session_model = self._to_model(session_db)
        self.db.delete(session_db)
        self.db.commit()
        return session_model

    def _fetch_session(self, session_id: UUID) -> DBSession | None:
        query = select(DBSession).where(DBSession.id == session_id)
        return self.db.scalar(query)

    def _to_model(self, session_db: DBSession) -> SessionModel:
        """Convert SQLAlchemy model to data transfer model."""
        return SessionModel(
            position=session_db.position,
            team_to_move=session_db.team_to_move,
            scores={"white": session_db.white_score, "black": session_db.black_score},
        )
