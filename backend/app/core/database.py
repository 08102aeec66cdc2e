from sqlalchemy import create_engine, inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from app.core.config import get_settings
from app.core.logging import get_logger

settings = get_settings()
logger = get_logger(__name__)

engine = create_engine(
    settings.DATABASE_URL,
    connect_args={"check_same_thread": False} if settings.is_sqlite else {},
    pool_pre_ping=True,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class Base(DeclarativeBase):
    pass


def get_db():
    """Dependency for FastAPI routes to get a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# Columns added to `readables` after the first release, with their DDL.
# Older databases only carry the single `chapter_count` column; the row mapper
# reconciles those rows, so the upgrade is additive only.
READABLE_LATE_COLUMNS: dict[str, str] = {
    "progress_percent": "INTEGER NOT NULL DEFAULT 0",
    "started_at": "TEXT",
    "finished_at": "TEXT",
    "dnf_at": "TEXT",
    "notes": "TEXT",
    "current_page": "INTEGER",
    "current_chapter": "INTEGER",
    "available_chapters": "INTEGER",
    "total_chapters": "INTEGER",
    "time_current_seconds": "INTEGER",
    "time_total_seconds": "INTEGER",
    "progress_mode": "TEXT",
}


def upgrade_legacy_columns(bind: Engine) -> list[str]:
    """Add any missing late columns to an existing `readables` table.

    Returns the names of the columns that were added.
    """
    inspector = inspect(bind)
    if "readables" not in inspector.get_table_names():
        return []

    existing = {col["name"] for col in inspector.get_columns("readables")}
    added = []
    with bind.connect() as conn:
        for name, ddl in READABLE_LATE_COLUMNS.items():
            if name in existing:
                continue
            conn.execute(text(f"ALTER TABLE readables ADD COLUMN {name} {ddl}"))
            added.append(name)
            logger.info(f"Added {name} column to readables table")
        conn.commit()
    return added
