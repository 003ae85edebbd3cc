"""Database configuration and connection setup"""
import logging

from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session, sessionmaker

from app.config.settings import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()


def build_engine(database_url: str):
    """Create an engine; pooling options only apply to server databases."""
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            echo=False,
        )

    return create_engine(
        database_url,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_pre_ping=True,
        echo=False,
    )


engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """Database dependency for FastAPI"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def lock_booking_day(db: Session, resource_type: str, salon_id, booking_date) -> None:
    """
    Serialize booking writes for one salon/day inside the current transaction.

    Uses a transaction-scoped PostgreSQL advisory lock, released on commit or
    rollback. Other dialects have no equivalent and skip the lock.
    """
    if db.get_bind().dialect.name != "postgresql":
        return

    key = f"{resource_type}:{salon_id}:{booking_date}"
    db.execute(text("SELECT pg_advisory_xact_lock(hashtext(:key))"), {"key": key})


def create_tables(bind=None):
    """Create all database tables"""
    from app.models import Base  # noqa: F401 - registers every model

    Base.metadata.create_all(bind=bind or engine)
    logger.info("Database tables created")


if __name__ == "__main__":
    create_tables()
