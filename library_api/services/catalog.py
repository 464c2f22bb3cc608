"""
Catalog Service

Business logic for books and authors:
- record counts
- filtered book listing
- the books-per-author aggregation
- adding books (with implicit author creation) and editing authors

Functions take a SQLAlchemy session and typed inputs from
library_api.schemas; they know nothing about GraphQL.

Adding a book is two separate writes: the author is resolved or created
and committed first, then the book is committed. A failure in the second
step leaves the new author in place, which is fine since authors may
exist without books.

Books per author are always derived from the books table at read time.
No per-author list of books is stored, so the count cannot go stale.
"""

import logging
from collections import Counter
from typing import NamedTuple

from sqlalchemy import Select, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, joinedload, selectinload

from library_api.models import Author, Book, BookGenre
from library_api.schemas import AuthorBornUpdate, BookCreate, BookFilter
from library_api.services.errors import InvalidInputError

logger = logging.getLogger(__name__)


class AuthorSummary(NamedTuple):
    """An author together with the number of books referencing it."""

    author: Author
    book_count: int


# =============================================================================
# Reads
# =============================================================================


def count_books(db: Session) -> int:
    """Total number of books."""
    return db.execute(select(func.count()).select_from(Book)).scalar_one()


def count_authors(db: Session) -> int:
    """Total number of authors."""
    return db.execute(select(func.count()).select_from(Author)).scalar_one()


def get_author_by_name(db: Session, name: str) -> Author | None:
    """Find an author by exact name."""
    stmt = select(Author).where(Author.name == name)
    return db.execute(stmt).scalar_one_or_none()


def get_book(db: Session, book_id: int) -> Book | None:
    """Get a book by ID with its author and genres loaded."""
    stmt = _books_with_relations().where(Book.id == book_id)
    return db.execute(stmt).scalar_one_or_none()


def _books_with_relations() -> Select:
    return (
        select(Book)
        .options(joinedload(Book.author), selectinload(Book.genre_tags))
        .order_by(Book.id)
    )


def list_books(db: Session, filters: BookFilter | None = None) -> list[Book]:
    """
    List books, optionally filtered by author name and/or genre.

    The author filter is resolved to an author record first. When no
    author has that name the result is empty and the books table is not
    queried at all. The genre filter keeps books whose genre tags contain
    the given genre. Both filters combine with AND.

    Args:
        db: Database session
        filters: Optional author and genre filters

    Returns:
        Books ordered by creation, with author and genres loaded
    """
    stmt = _books_with_relations()

    if filters is None or filters.is_empty:
        return list(db.execute(stmt).scalars().all())

    if filters.author:
        author = get_author_by_name(db, filters.author)
        if author is None:
            return []
        stmt = stmt.where(Book.author_id == author.id)

    if filters.genre:
        stmt = stmt.where(Book.genre_tags.any(BookGenre.name == filters.genre))

    return list(db.execute(stmt).scalars().all())


def list_authors_with_book_counts(db: Session) -> list[AuthorSummary]:
    """
    List every author with the number of books they wrote.

    Reads all authors and all books (with their authors) once and counts
    in memory, instead of one count query per author.
    """
    authors = db.execute(select(Author).order_by(Author.id)).scalars().all()
    books = db.execute(select(Book).options(joinedload(Book.author))).scalars().all()

    counts = Counter(book.author.name for book in books)
    return [AuthorSummary(author, counts[author.name]) for author in authors]


# =============================================================================
# Writes
# =============================================================================


def resolve_or_create_author(db: Session, name: str) -> Author:
    """
    Return the author with this name, creating it if needed.

    A new author has no birth year. The new record is committed on its
    own, before anything that references it.

    Raises:
        InvalidInputError: If the author could not be saved
    """
    author = get_author_by_name(db, name)
    if author is not None:
        return author

    author = Author(name=name)
    db.add(author)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        # Another request inserted the same name first; use that row
        author = get_author_by_name(db, name)
        if author is None:
            raise InvalidInputError("Saving new author failed", invalid_args=name)
        return author
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error(f"Saving author '{name}' failed: {exc}")
        raise InvalidInputError("Saving new author failed", invalid_args=name) from exc

    db.refresh(author)
    logger.info(f"Created author: {author.name} (id={author.id})")
    return author


def create_book(db: Session, author: Author, data: BookCreate) -> Book:
    """
    Persist a new book referencing an existing author.

    Raises:
        InvalidInputError: If the book could not be saved
    """
    book = Book(
        title=data.title,
        published=data.published,
        author=author,
        genre_tags=[
            BookGenre(position=position, name=name)
            for position, name in enumerate(data.genres)
        ],
    )
    db.add(book)

    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error(f"Saving book '{data.title}' failed: {exc}")
        raise InvalidInputError("Saving new book failed", invalid_args=data.title) from exc

    logger.info(f"Created book: {data.title} (id={book.id}) by {author.name}")
    return get_book(db, book.id)


def add_book(db: Session, data: BookCreate) -> Book:
    """
    Add a book, creating its author on first use.

    Step 1 resolves or creates the author, step 2 creates the book. The
    steps are separate commits; there is no rollback of step 1 when
    step 2 fails. Adding the same input twice creates two books.

    Returns:
        The new book with its author and genres loaded
    """
    author = resolve_or_create_author(db, data.author)
    return create_book(db, author, data)


def edit_author(db: Session, data: AuthorBornUpdate) -> AuthorSummary | None:
    """
    Set the birth year of an author.

    Returns:
        The updated author with its book count, or None if no author has
        the given name

    Raises:
        InvalidInputError: If the update could not be saved
    """
    author = get_author_by_name(db, data.name)
    if author is None:
        return None

    author.born = data.born

    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error(f"Updating author '{data.name}' failed: {exc}")
        raise InvalidInputError("updating author failed", invalid_args=data.name) from exc

    db.refresh(author)
    logger.info(f"Set birth year of {author.name} to {author.born}")
    return AuthorSummary(author, len(author.books))
