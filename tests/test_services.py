"""
Service Layer Tests

Tests the catalog and user services directly against the database,
without going through GraphQL.
"""

import pytest
from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from library_api.models import Author, Book, BookGenre, User
from library_api.schemas import (
    AuthorBornUpdate,
    BookCreate,
    BookFilter,
    LoginRequest,
    UserCreate,
)
from library_api.services import catalog, users
from library_api.services.errors import InvalidCredentialsError, InvalidInputError
from library_api.services.security import decode_token


# =============================================================================
# Schema Tests
# =============================================================================


class TestBookSchemas:
    """Tests for the typed book inputs."""

    def test_book_create_keeps_values_verbatim(self):
        """Author names are identity keys, so padding is preserved."""
        data = BookCreate(
            title="  Clean Code ",
            author=" Robert Martin",
            published=2008,
            genres=[" agile "],
        )
        assert data.title == "  Clean Code "
        assert data.author == " Robert Martin"
        assert data.genres == [" agile "]

    def test_book_create_rejects_whitespace_author(self):
        with pytest.raises(ValidationError):
            BookCreate(title="Clean Code", author="   ", published=2008, genres=[])

    def test_author_update_keeps_name_verbatim(self):
        data = AuthorBornUpdate(name=" Herbert ", born=1920)
        assert data.name == " Herbert "

    def test_author_update_rejects_blank_name(self):
        with pytest.raises(ValidationError):
            AuthorBornUpdate(name="  ", born=1920)

    def test_user_create_rejects_blank_username(self):
        with pytest.raises(ValidationError):
            UserCreate(username=" ", favourite_genre="classic")

    def test_book_create_rejects_blank_title(self):
        with pytest.raises(ValidationError):
            BookCreate(title=" ", author="Robert Martin", published=2008, genres=[])

    def test_book_create_rejects_blank_genre(self):
        with pytest.raises(ValidationError):
            BookCreate(title="Clean Code", author="Robert Martin", published=2008, genres=[""])

    def test_book_create_dedupes_genres(self):
        data = BookCreate(
            title="Clean Code",
            author="Robert Martin",
            published=2008,
            genres=["agile", "refactoring", "agile"],
        )
        assert data.genres == ["agile", "refactoring"]

    def test_book_filter_empty_strings(self):
        filters = BookFilter(author="", genre="")
        assert filters.author is None
        assert filters.genre is None
        assert filters.is_empty

    def test_book_filter_with_values(self):
        filters = BookFilter(genre="classic")
        assert not filters.is_empty


# =============================================================================
# Catalog Reads
# =============================================================================


class TestCatalogReads:
    """Tests for counts and listings."""

    def test_counts(self, db_session: Session, library: dict[str, Author]):
        assert catalog.count_books(db_session) == 4
        assert catalog.count_authors(db_session) == 4

    def test_get_author_by_name_is_exact(self, db_session: Session, library: dict[str, Author]):
        assert catalog.get_author_by_name(db_session, "Martin Fowler") == library["fowler"]
        assert catalog.get_author_by_name(db_session, "martin fowler") is None

    def test_list_books_unfiltered(self, db_session: Session, library: dict[str, Author]):
        books = catalog.list_books(db_session)
        assert [b.title for b in books] == [
            "Clean Code",
            "Agile Software Development",
            "Refactoring",
            "Crime and Punishment",
        ]

    def test_list_books_loads_author_and_genres(
        self, db_session: Session, sample_book: Book
    ):
        [book] = catalog.list_books(db_session, BookFilter())
        assert book.author.name == "Robert Martin"
        assert book.genres == ["refactoring", "agile"]

    def test_list_books_by_author(self, db_session: Session, library: dict[str, Author]):
        books = catalog.list_books(db_session, BookFilter(author="Martin Fowler"))
        assert [b.title for b in books] == ["Refactoring"]

    def test_list_books_unknown_author(self, db_session: Session, library: dict[str, Author]):
        assert catalog.list_books(db_session, BookFilter(author="Nobody")) == []

    def test_list_books_by_genre(self, db_session: Session, library: dict[str, Author]):
        books = catalog.list_books(db_session, BookFilter(genre="agile"))
        assert [b.title for b in books] == ["Clean Code", "Agile Software Development"]

    def test_list_books_by_author_and_genre(
        self, db_session: Session, library: dict[str, Author]
    ):
        books = catalog.list_books(
            db_session, BookFilter(author="Robert Martin", genre="patterns")
        )
        assert [b.title for b in books] == ["Agile Software Development"]

    def test_authors_with_book_counts(self, db_session: Session, library: dict[str, Author]):
        summaries = catalog.list_authors_with_book_counts(db_session)

        assert [(s.author.name, s.book_count) for s in summaries] == [
            ("Robert Martin", 2),
            ("Martin Fowler", 1),
            ("Fyodor Dostoevsky", 1),
            ("Joshua Kerievsky", 0),
        ]


# =============================================================================
# Catalog Writes
# =============================================================================


class TestCatalogWrites:
    """Tests for adding books and editing authors."""

    def test_add_book_new_author(self, db_session: Session):
        data = BookCreate(
            title="Dune", author="Frank Herbert", published=1965, genres=["scifi"]
        )

        book = catalog.add_book(db_session, data)

        assert book.id is not None
        assert book.author.name == "Frank Herbert"
        assert book.author.born is None
        assert book.genres == ["scifi"]
        assert catalog.count_authors(db_session) == 1

    def test_add_book_existing_author(self, db_session: Session, sample_author: Author):
        data = BookCreate(
            title="Clean Agile", author="Robert Martin", published=2019, genres=[]
        )

        book = catalog.add_book(db_session, data)

        assert book.author_id == sample_author.id
        assert catalog.count_authors(db_session) == 1

    def test_genres_stored_in_order(self, db_session: Session):
        data = BookCreate(
            title="Dune",
            author="Frank Herbert",
            published=1965,
            genres=["scifi", "classic", "adventure"],
        )
        book = catalog.add_book(db_session, data)

        rows = db_session.execute(
            select(BookGenre.position, BookGenre.name)
            .where(BookGenre.book_id == book.id)
            .order_by(BookGenre.position)
        ).all()
        assert [tuple(r) for r in rows] == [
            (0, "scifi"),
            (1, "classic"),
            (2, "adventure"),
        ]

    def test_resolve_or_create_author_is_idempotent(self, db_session: Session):
        first = catalog.resolve_or_create_author(db_session, "Frank Herbert")
        second = catalog.resolve_or_create_author(db_session, "Frank Herbert")

        assert first.id == second.id
        assert catalog.count_authors(db_session) == 1

    def test_failed_book_keeps_new_author(
        self, db_session: Session, monkeypatch: pytest.MonkeyPatch
    ):
        """The author created in step one survives a failure in step two."""
        data = BookCreate(title="Dune", author="Frank Herbert", published=1965, genres=[])
        author = catalog.resolve_or_create_author(db_session, data.author)

        def failing_commit():
            raise OperationalError("INSERT INTO books", {}, Exception("disk full"))

        monkeypatch.setattr(db_session, "commit", failing_commit)
        with pytest.raises(InvalidInputError) as exc_info:
            catalog.create_book(db_session, author, data)
        monkeypatch.undo()

        assert str(exc_info.value) == "Saving new book failed"
        assert exc_info.value.invalid_args == "Dune"
        assert catalog.count_books(db_session) == 0
        assert catalog.get_author_by_name(db_session, "Frank Herbert") is not None

    def test_edit_author(self, db_session: Session, sample_book: Book):
        summary = catalog.edit_author(
            db_session, AuthorBornUpdate(name="Robert Martin", born=1958)
        )

        assert summary.author.born == 1958
        assert summary.book_count == 1

    def test_edit_unknown_author(self, db_session: Session):
        summary = catalog.edit_author(
            db_session, AuthorBornUpdate(name="Nobody", born=1900)
        )
        assert summary is None


# =============================================================================
# User Service
# =============================================================================


class TestUserService:
    """Tests for creating users and logging in."""

    def test_create_user(self, db_session: Session):
        user = users.create_user(
            db_session, UserCreate(username="hellas", favourite_genre="classic")
        )

        assert user.id is not None
        assert users.get_user(db_session, user.id) == user
        assert users.get_user_by_username(db_session, "hellas") == user

    def test_create_user_duplicate(self, db_session: Session, sample_user: User):
        with pytest.raises(InvalidInputError) as exc_info:
            users.create_user(
                db_session, UserCreate(username="mluukkai", favourite_genre="classic")
            )

        assert str(exc_info.value) == "adding new user failed"
        assert exc_info.value.invalid_args == "mluukkai"
        # The session is usable again after the failed insert
        assert users.get_user_by_username(db_session, "mluukkai") is not None

    def test_login(self, db_session: Session, sample_user: User):
        token = users.login(db_session, LoginRequest(username="mluukkai", password="secret"))

        payload = decode_token(token)
        assert payload["sub"] == str(sample_user.id)
        assert payload["username"] == "mluukkai"
        assert payload["id"] == sample_user.id

    def test_login_wrong_password(self, db_session: Session, sample_user: User):
        with pytest.raises(InvalidCredentialsError):
            users.login(db_session, LoginRequest(username="mluukkai", password="Secret"))

    def test_login_unknown_user(self, db_session: Session):
        with pytest.raises(InvalidCredentialsError) as exc_info:
            users.login(db_session, LoginRequest(username="nobody", password="secret"))

        assert str(exc_info.value) == "Wrong credentials"
