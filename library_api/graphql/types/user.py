"""
GraphQL User Type

Defines the User and Token types.
"""

import strawberry


@strawberry.type(name="User")
class UserType:
    """
    GraphQL type representing a user.

    Maps to the User SQLAlchemy model.
    """

    id: strawberry.ID
    username: str
    favourite_genre: str


@strawberry.type(name="Token")
class TokenType:
    """
    Response type of the login mutation.

    value is the signed token to send as "Authorization: Bearer <value>".
    """

    value: str
