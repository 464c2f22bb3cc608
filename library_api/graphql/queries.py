"""
GraphQL Query Resolvers

Defines all read operations (queries) for the GraphQL API.
Each resolver delegates to the catalog service using the context's
database session and converts the result to GraphQL types.
"""

import strawberry
from strawberry.types import Info

from library_api.graphql.context import GraphQLContext
from library_api.graphql.errors import validate_input
from library_api.graphql.types import AuthorType, BookType, UserType
from library_api.models import Author, Book, User
from library_api.schemas import BookFilter
from library_api.services import catalog


def author_to_graphql(author: Author, book_count: int | None = None) -> AuthorType:
    """Convert SQLAlchemy Author model to GraphQL AuthorType."""
    return AuthorType(
        id=strawberry.ID(str(author.id)),
        name=author.name,
        born=author.born,
        book_count=book_count,
    )


def book_to_graphql(book: Book) -> BookType:
    """Convert SQLAlchemy Book model (author loaded) to GraphQL BookType."""
    return BookType(
        id=strawberry.ID(str(book.id)),
        title=book.title,
        published=book.published,
        author=author_to_graphql(book.author),
        genres=book.genres,
    )


def user_to_graphql(user: User) -> UserType:
    """Convert SQLAlchemy User model to GraphQL UserType."""
    return UserType(
        id=strawberry.ID(str(user.id)),
        username=user.username,
        favourite_genre=user.favourite_genre,
    )


@strawberry.type
class Query:
    """
    GraphQL Query type containing all read operations.

    All resolvers receive an `info` parameter that contains the
    GraphQL context with database session and current user.
    """

    @strawberry.field(description="Total number of books")
    def book_count(self, info: Info[GraphQLContext, None]) -> int:
        return catalog.count_books(info.context.db)

    @strawberry.field(description="Total number of authors")
    def author_count(self, info: Info[GraphQLContext, None]) -> int:
        return catalog.count_authors(info.context.db)

    @strawberry.field(description="List books, optionally by author name and/or genre")
    def all_books(
        self,
        info: Info[GraphQLContext, None],
        author: str | None = None,
        genre: str | None = None,
    ) -> list[BookType]:
        """
        Get books with optional filtering.

        Args:
            author: Only books by the author with exactly this name. An
                unknown author gives an empty list, not an error.
            genre: Only books tagged with this genre

        Returns:
            Books with their authors populated
        """
        filters = validate_input(BookFilter, author=author, genre=genre)
        books = catalog.list_books(info.context.db, filters)
        return [book_to_graphql(b) for b in books]

    @strawberry.field(description="List all authors with their number of books")
    def all_authors(self, info: Info[GraphQLContext, None]) -> list[AuthorType]:
        summaries = catalog.list_authors_with_book_counts(info.context.db)
        return [author_to_graphql(s.author, s.book_count) for s in summaries]

    @strawberry.field(description="Get the currently authenticated user")
    def me(self, info: Info[GraphQLContext, None]) -> UserType | None:
        """
        Get the current authenticated user.

        Returns None if not authenticated.
        """
        user = info.context.user

        if user is None:
            return None

        return user_to_graphql(user)
