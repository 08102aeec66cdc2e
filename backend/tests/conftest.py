"""
Pytest configuration and fixtures for backend tests.
"""

import os
from typing import Generator

# Keep the application engine off the on-disk default database
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import Base, get_db
from app.data.moods import MoodTag
from app.main import app
from app.schemas.readable import BookReadable, FanficReadable, ReadableItem, ReadableStatus
from app.services import readable_service

# Create in-memory SQLite database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Create a fresh database session for each test."""
    # Create all tables
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        # Drop all tables after test
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db: Session) -> Generator[TestClient, None, None]:
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def test_readables(db: Session) -> list[ReadableItem]:
    """A small queue: two books and two fanfics, plus one finished book."""
    items = [
        BookReadable(
            title="The House in the Cerulean Sea",
            author="TJ Klune",
            priority=4,
            mood_tags=[MoodTag.COZY, MoodTag.WHOLESOME],
            page_count=400,
            genres=["Fantasy", "Found Family"],
        ),
        BookReadable(
            title="Gideon the Ninth",
            author="Tamsyn Muir",
            priority=3,
            mood_tags=[MoodTag.DARK, MoodTag.FUNNY],
            page_count=448,
            genres=["Science Fantasy"],
        ),
        FanficReadable(
            title="Slow Tides",
            author="harborlights",
            priority=5,
            mood_tags=[MoodTag.SLOW_BURN, MoodTag.ROMANTIC],
            ao3_work_id="111111",
            ao3_url="https://archiveofourown.org/works/111111",
            fandoms=["Good Omens"],
            relationships=["Aziraphale/Crowley"],
            rating="T",
            available_chapters=12,
            total_chapters=20,
            complete=False,
            word_count=85000,
        ),
        FanficReadable(
            title="A Quiet Bakery",
            author="flourdust",
            priority=2,
            mood_tags=[MoodTag.COZY],
            ao3_work_id="222222",
            fandoms=["Original Work"],
            ao3_tags=["Fluff", "Coffee Shop AU"],
            rating="G",
            available_chapters=3,
            total_chapters=3,
            complete=True,
            word_count=9000,
        ),
        BookReadable(
            title="Piranesi",
            author="Susanna Clarke",
            status=ReadableStatus.FINISHED,
            mood_tags=[MoodTag.MYSTERIOUS],
            page_count=272,
            finished_at="2024-03-01T12:00:00.000Z",
        ),
    ]

    stored = []
    for index, item in enumerate(items):
        stored.append(readable_service.insert(db, item, now=f"2024-05-0{index + 1}T09:00:00.000Z"))
    return stored
