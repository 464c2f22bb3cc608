"""
GraphQL Author Type

Defines the Author type for GraphQL queries.
"""

import strawberry


@strawberry.type(name="Author")
class AuthorType:
    """
    GraphQL type representing a book author.

    Maps to the Author SQLAlchemy model. book_count is derived from the
    books table and is only filled in where a resolver computed it
    (allAuthors, editAuthor).
    """

    id: strawberry.ID
    name: str
    born: int | None = None
    book_count: int | None = None
