"""
Generate database session

NOTE: the engine lives in memory only. Sessions are gone once the process stops; nothing is persisted across runs.
"""

from typing import Generator

from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.config import Settings
from src.db.schema import Base

DATABASE_URL = "sqlite:///:memory:"

settings = Settings.from_env()

# StaticPool: every connection shares the one in-memory database
engine = create_engine(
    DATABASE_URL,
    echo=settings.database_echo,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
SessionLocal = sessionmaker(bind=engine)

# Ensure all tables are created
Base.metadata.create_all(bind=engine)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
