"""
User Pydantic Schemas

Schemas:
- UserCreate: input of the createUser mutation
- LoginRequest: input of the login mutation
"""

from pydantic import BaseModel, Field, field_validator


class UserCreate(BaseModel):
    """
    Schema for user creation.

    Uniqueness of the username is enforced by the database, not here.
    The username is stored as given so that login finds it verbatim.
    """

    username: str = Field(
        ...,
        min_length=1,
        max_length=50,
        description="Unique login name",
        examples=["mluukkai"],
    )

    favourite_genre: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="User's favourite genre",
        examples=["refactoring"],
    )

    @field_validator("username", "favourite_genre")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("cannot be empty or whitespace")
        return v


class LoginRequest(BaseModel):
    """
    Schema for login.

    The password is not stripped: it is compared verbatim.
    """

    username: str = Field(..., description="Login name")
    password: str = Field(..., description="Password")
