"""
Book Model

The central model of the Library API.

This file also contains BookGenre, the ordered genre tags of a book.

WHY a Genre Tag Table?
======================
Genres are free-form strings, not managed records. Storing them as rows
(book_id, position, name) keeps:
- the order the client sent them in (position)
- "books containing genre G" as an indexed EXISTS filter on any SQL
  backend, instead of a JSON containment operator only some backends have
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from library_api.database import Base

if TYPE_CHECKING:
    from library_api.models.author import Author


class BookGenre(Base):
    """
    One genre tag of a book.

    Table: book_genres

    The composite primary key (book_id, position) keeps tags ordered;
    the index on name serves the allBooks(genre: ...) filter.
    """

    __tablename__ = "book_genres"

    book_id: Mapped[int] = mapped_column(
        ForeignKey("books.id", ondelete="CASCADE"),
        primary_key=True,
    )
    position: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        comment="Zero-based position of the tag in the book's genre list"
    )
    name: Mapped[str] = mapped_column(
        String(100),
        index=True,
        nullable=False,
        comment="Genre name (e.g., 'refactoring', 'classic')"
    )

    book: Mapped["Book"] = relationship("Book", back_populates="genre_tags")

    def __repr__(self) -> str:
        return f"BookGenre(book_id={self.book_id}, position={self.position}, name='{self.name}')"


class Book(Base):
    """
    Book model representing books in the library.

    Table: books

    Fields:
    - title: Book title (required, not unique: adding the same book twice
      creates two records)
    - published: Publication year
    - author_id: Reference to exactly one author

    Relationships:
    - author: Many-to-One
    - genre_tags: One-to-Many, ordered by position

    Example:
        book = Book(
            title="Clean Code",
            published=2008,
            author=author,
            genre_tags=[BookGenre(position=0, name="refactoring")],
        )
    """

    __tablename__ = "books"

    id: Mapped[int] = mapped_column(primary_key=True)

    # -------------------------------------------------------------------------
    # Basic Fields
    # -------------------------------------------------------------------------
    title: Mapped[str] = mapped_column(
        String(500),
        index=True,
        nullable=False,
        comment="Book title"
    )

    published: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Year of publication"
    )

    author_id: Mapped[int] = mapped_column(
        ForeignKey("authors.id"),
        index=True,
        nullable=False,
        comment="The book's author"
    )

    # -------------------------------------------------------------------------
    # Timestamps
    # -------------------------------------------------------------------------
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    # -------------------------------------------------------------------------
    # Relationships
    # -------------------------------------------------------------------------
    author: Mapped["Author"] = relationship(
        "Author",
        back_populates="books",
    )

    genre_tags: Mapped[list[BookGenre]] = relationship(
        BookGenre,
        back_populates="book",
        order_by=BookGenre.position,
        cascade="all, delete-orphan",
    )

    @property
    def genres(self) -> list[str]:
        """Genre names in the order they were given."""
        return [tag.name for tag in self.genre_tags]

    def __repr__(self) -> str:
        return f"Book(id={self.id}, title='{self.title}', published={self.published})"
