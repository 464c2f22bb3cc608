"""
pytest Fixtures for Library API Tests

Shared fixtures used across all test files.

DATABASE STRATEGY:
==================
Every test gets its own SQLite in-memory engine. StaticPool keeps the
single connection alive for the lifetime of the engine, so the session
used by the test and the session injected into the app see the same
data. Services commit (and roll back on failure) for real; a fresh
engine per test keeps those commits from leaking between tests.

Some PostgreSQL features won't work in SQLite. For integration tests,
use a real PostgreSQL test database.
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app
import os

os.environ["SECRET_KEY"] = "test-secret-key-for-unit-tests-at-least-32-characters-long"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from library_api.database import Base, get_db
from library_api.main import app
from library_api.models import Author, Book, BookGenre, User
from library_api.services.pubsub import PubSub
from library_api.services.security import create_user_token

# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture
def engine():
    """
    Create a SQLite in-memory database engine with all tables.

    Scope: function, so every test starts from an empty database.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine) -> Generator[Session, None, None]:
    """Create a database session bound to the test engine."""
    TestSessionLocal = sessionmaker(autoflush=False, bind=engine)
    session = TestSessionLocal()

    yield session

    session.close()


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """
    Create a test client with the test database.

    The get_db dependency is overridden, which also reaches the GraphQL
    context since it is built from the same dependency.
    """

    def override_get_db():
        """Provide test database session instead of real one."""
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    # Fresh channel so subscribers never carry over between tests
    app.state.pubsub = PubSub()

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================


@pytest.fixture
def sample_author(db_session: Session) -> Author:
    """Create a sample author for testing."""
    author = Author(name="Robert Martin", born=1952)
    db_session.add(author)
    db_session.commit()
    db_session.refresh(author)
    return author


@pytest.fixture
def sample_book(db_session: Session, sample_author: Author) -> Book:
    """Create a sample book by sample_author with two genres."""
    book = Book(
        title="Clean Code",
        published=2008,
        author=sample_author,
        genre_tags=[
            BookGenre(position=0, name="refactoring"),
            BookGenre(position=1, name="agile"),
        ],
    )
    db_session.add(book)
    db_session.commit()
    db_session.refresh(book)
    return book


@pytest.fixture
def library(db_session: Session) -> dict[str, Author]:
    """
    Create a small library for filter tests.

    - Robert Martin: Clean Code (refactoring, agile), Agile Software
      Development (agile, patterns)
    - Martin Fowler: Refactoring (refactoring)
    - Fyodor Dostoevsky: Crime and Punishment (classic, crime)
    - Joshua Kerievsky: no books
    """
    martin = Author(name="Robert Martin", born=1952)
    fowler = Author(name="Martin Fowler", born=1963)
    dostoevsky = Author(name="Fyodor Dostoevsky", born=1821)
    kerievsky = Author(name="Joshua Kerievsky")
    db_session.add_all([martin, fowler, dostoevsky, kerievsky])
    db_session.flush()

    def book(title: str, published: int, author: Author, *genres: str) -> Book:
        return Book(
            title=title,
            published=published,
            author=author,
            genre_tags=[
                BookGenre(position=i, name=name) for i, name in enumerate(genres)
            ],
        )

    db_session.add_all(
        [
            book("Clean Code", 2008, martin, "refactoring", "agile"),
            book("Agile Software Development", 2002, martin, "agile", "patterns"),
            book("Refactoring", 1999, fowler, "refactoring"),
            book("Crime and Punishment", 1866, dostoevsky, "classic", "crime"),
        ]
    )
    db_session.commit()

    return {
        "martin": martin,
        "fowler": fowler,
        "dostoevsky": dostoevsky,
        "kerievsky": kerievsky,
    }


@pytest.fixture
def sample_user(db_session: Session) -> User:
    """Create a sample user for testing."""
    user = User(username="mluukkai", favourite_genre="refactoring")
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def auth_token(sample_user: User) -> str:
    """A valid login token for sample_user."""
    return create_user_token(sample_user)
