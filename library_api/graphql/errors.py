"""
GraphQL Errors

API errors raised by resolvers. All of them carry
``extensions.code == "BAD_USER_INPUT"``, the code existing clients of
this API check for; the message tells them apart:

- NotAuthenticatedError: "not authenticated", a protected mutation was
  called without a valid token
- BadUserInputError: BAD_USER_INPUT, input was rejected at the boundary
  or by the database; ``extensions.invalidArgs`` holds the offending value
- WrongCredentialsError: "Wrong credentials", login failed
"""

from typing import Any, TypeVar

from graphql import GraphQLError
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from library_api.services.errors import InvalidCredentialsError, InvalidInputError

ModelT = TypeVar("ModelT", bound=BaseModel)

BAD_USER_INPUT = "BAD_USER_INPUT"


class NotAuthenticatedError(GraphQLError):
    """Raised when a mutation requires a current user and there is none."""

    def __init__(self):
        super().__init__("not authenticated", extensions={"code": BAD_USER_INPUT})


class BadUserInputError(GraphQLError):
    """Raised when input is rejected."""

    def __init__(self, message: str, invalid_args: Any = None):
        extensions: dict[str, Any] = {"code": BAD_USER_INPUT}
        if invalid_args is not None:
            extensions["invalidArgs"] = invalid_args
        super().__init__(message, extensions=extensions)

    @classmethod
    def from_service_error(cls, exc: InvalidInputError) -> "BadUserInputError":
        return cls(str(exc), invalid_args=exc.invalid_args)


class WrongCredentialsError(GraphQLError):
    """Raised when login fails, without saying which check failed."""

    def __init__(self, exc: InvalidCredentialsError | None = None):
        message = str(exc) if exc is not None else "Wrong credentials"
        super().__init__(message, extensions={"code": BAD_USER_INPUT})


def validate_input(model: type[ModelT], **values: Any) -> ModelT:
    """
    Build a typed input model from resolver arguments.

    Raises:
        BadUserInputError: For the first field that fails validation, with
            the value that was given for it as invalidArgs
    """
    try:
        return model(**values)
    except PydanticValidationError as exc:
        error = exc.errors()[0]
        field = str(error["loc"][0]) if error["loc"] else None
        raise BadUserInputError(
            f"Invalid {field}: {error['msg']}" if field else error["msg"],
            invalid_args=values.get(field) if field else None,
        ) from exc
