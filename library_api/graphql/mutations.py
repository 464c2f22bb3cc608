"""
GraphQL Mutation Resolvers

Defines all write operations (mutations) for the GraphQL API.

addBook and editAuthor require a token; createUser and login do not.
Each resolver checks authentication first, then validates its
arguments into a typed input, then calls the service. Service errors
are translated into GraphQL errors here.
"""

import strawberry
from strawberry.types import Info

from library_api.graphql.context import GraphQLContext, require_auth
from library_api.graphql.errors import (
    BadUserInputError,
    WrongCredentialsError,
    validate_input,
)
from library_api.graphql.queries import author_to_graphql, book_to_graphql, user_to_graphql
from library_api.graphql.types import AuthorType, BookType, TokenType, UserType
from library_api.schemas import AuthorBornUpdate, BookCreate, LoginRequest, UserCreate
from library_api.services import catalog, users
from library_api.services.errors import InvalidCredentialsError, InvalidInputError
from library_api.services.pubsub import Topic


@strawberry.type
class Mutation:
    """
    GraphQL Mutation type containing all write operations.
    """

    # =========================================================================
    # Catalog Mutations
    # =========================================================================

    @strawberry.mutation(description="Add a book, creating its author if needed")
    async def add_book(
        self,
        info: Info[GraphQLContext, None],
        title: str,
        author: str,
        published: int,
        genres: list[str],
    ) -> BookType | None:
        """
        Add a new book.

        Requires authentication. An author with this name is created
        when none exists. Subscribers of bookAdded receive the new book.
        """
        require_auth(info)
        data = validate_input(
            BookCreate, title=title, author=author, published=published, genres=genres
        )

        try:
            book = catalog.add_book(info.context.db, data)
        except InvalidInputError as exc:
            raise BadUserInputError.from_service_error(exc) from exc

        result = book_to_graphql(book)
        await info.context.pubsub.publish(Topic.BOOK_ADDED, result)
        return result

    @strawberry.mutation(description="Set the birth year of an author")
    def edit_author(
        self,
        info: Info[GraphQLContext, None],
        name: str,
        set_born_to: int,
    ) -> AuthorType | None:
        """
        Set an author's birth year.

        Requires authentication. Returns null when no author has the
        given name.
        """
        require_auth(info)
        data = validate_input(AuthorBornUpdate, name=name, born=set_born_to)

        try:
            summary = catalog.edit_author(info.context.db, data)
        except InvalidInputError as exc:
            raise BadUserInputError.from_service_error(exc) from exc

        if summary is None:
            return None

        return author_to_graphql(summary.author, summary.book_count)

    # =========================================================================
    # User Mutations
    # =========================================================================

    @strawberry.mutation(description="Create a new user")
    def create_user(
        self,
        info: Info[GraphQLContext, None],
        username: str,
        favourite_genre: str,
    ) -> UserType | None:
        """
        Create a user account. The username must be unique.
        """
        data = validate_input(
            UserCreate, username=username, favourite_genre=favourite_genre
        )

        try:
            user = users.create_user(info.context.db, data)
        except InvalidInputError as exc:
            raise BadUserInputError.from_service_error(exc) from exc

        return user_to_graphql(user)

    @strawberry.mutation(description="Log in and get a token")
    def login(
        self,
        info: Info[GraphQLContext, None],
        username: str,
        password: str,
    ) -> TokenType | None:
        """
        Authenticate with username and password.

        Returns a token to send as "Authorization: Bearer <value>".
        """
        data = validate_input(LoginRequest, username=username, password=password)

        try:
            token = users.login(info.context.db, data)
        except InvalidCredentialsError as exc:
            raise WrongCredentialsError(exc) from exc

        return TokenType(value=token)
