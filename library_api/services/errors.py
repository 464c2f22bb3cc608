"""
Service Errors

Exceptions raised by the catalog and user services. The GraphQL layer
translates them into API errors (see library_api.graphql.errors).
"""

from typing import Any


class ServiceError(Exception):
    """Base class for errors raised by the services."""


class InvalidInputError(ServiceError):
    """
    A write was rejected by the persistence layer.

    Attributes:
        invalid_args: The argument value the write was rejected for
    """

    def __init__(self, message: str, invalid_args: Any = None):
        super().__init__(message)
        self.invalid_args = invalid_args


class InvalidCredentialsError(ServiceError):
    """Login failed. Deliberately does not say which check failed."""

    def __init__(self, message: str = "Wrong credentials"):
        super().__init__(message)
