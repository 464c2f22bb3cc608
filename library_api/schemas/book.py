"""
Book Pydantic Schemas

Typed inputs for the book operations. GraphQL resolver arguments are
converted into these models before they reach the catalog service, so
the service never sees a loosely typed arguments object.
"""

from pydantic import BaseModel, Field, field_validator


class BookCreate(BaseModel):
    """
    Input for the addBook mutation.

    The author is given by name; the catalog service resolves it to an
    existing author or creates one. Strings are stored exactly as given:
    the author name is the identity key that allBooks and editAuthor match
    verbatim, so it is never trimmed. Blank values are rejected.
    """

    title: str = Field(
        ...,
        min_length=1,
        max_length=500,
        description="Book title",
        examples=["Clean Code"],
    )

    author: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Name of the book's author",
        examples=["Robert Martin"],
    )

    published: int = Field(
        ...,
        description="Year of publication",
        examples=[2008],
    )

    genres: list[str] = Field(
        default_factory=list,
        description="Genre tags, kept in the given order",
        examples=[["refactoring"]],
    )

    @field_validator("title", "author")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("cannot be empty or whitespace")
        return v

    @field_validator("genres")
    @classmethod
    def genres_are_a_tag_set(cls, v: list[str]) -> list[str]:
        """
        Turn genres into an ordered set.

        Blank tags are rejected; repeated tags keep their first position.
        Tags are kept verbatim since allBooks(genre: ...) matches exactly.
        """
        tags: list[str] = []
        for genre in v:
            if not genre.strip():
                raise ValueError("Genre cannot be empty or whitespace")
            if len(genre) > 100:
                raise ValueError("Genre must be at most 100 characters")
            if genre not in tags:
                tags.append(genre)
        return tags


class BookFilter(BaseModel):
    """
    Filters of the allBooks query.

    Both filters are optional and combine with AND. Empty strings are
    treated as "no filter".
    """

    author: str | None = Field(
        default=None,
        description="Only books by the author with exactly this name",
    )

    genre: str | None = Field(
        default=None,
        description="Only books tagged with this genre",
    )

    @field_validator("author", "genre")
    @classmethod
    def empty_means_absent(cls, v: str | None) -> str | None:
        return v or None

    @property
    def is_empty(self) -> bool:
        return self.author is None and self.genre is None
