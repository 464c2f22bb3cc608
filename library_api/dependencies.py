"""
FastAPI Dependencies Module

Dependencies are reusable components injected into request handlers.
FastAPI's Depends() function manages their lifecycle. The GraphQL
context getter is itself a dependency built from the ones below, which
is what lets tests swap the database session via dependency_overrides.

Dependencies:
- DbSession: per-request SQLAlchemy session
- get_pubsub: the application's publish/subscribe channel
- get_optional_current_user: the user behind the Bearer token, if any
"""

import logging
from typing import Annotated

from fastapi import Depends, HTTPException, WebSocket, WebSocketException, status
from fastapi.requests import HTTPConnection
from sqlalchemy.orm import Session

from library_api.database import get_db
from library_api.models.user import User
from library_api.services.pubsub import PubSub
from library_api.services.security import ACCESS_TOKEN_TYPE, verify_token_type
from library_api.services.users import get_user

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "

# =============================================================================
# Type Aliases with Annotated
# =============================================================================
DbSession = Annotated[Session, Depends(get_db)]


# =============================================================================
# Publish/Subscribe
# =============================================================================
def get_pubsub(connection: HTTPConnection) -> PubSub:
    """
    Get the application's PubSub instance.

    Works for both HTTP requests and websocket connections; the
    instance is created by create_app() and kept on app.state.
    """
    return connection.app.state.pubsub


PubSubDep = Annotated[PubSub, Depends(get_pubsub)]


# =============================================================================
# Bearer Token Authentication
# =============================================================================
def get_bearer_token(connection: HTTPConnection) -> str | None:
    """
    Extract the token from an "Authorization: Bearer <token>" header.

    Returns None when the header is missing or uses another scheme.
    """
    auth_header = connection.headers.get("Authorization", "")
    if not auth_header.startswith(BEARER_PREFIX):
        return None
    return auth_header[len(BEARER_PREFIX):]


def _invalid_token(connection: HTTPConnection) -> Exception:
    if isinstance(connection, WebSocket):
        return WebSocketException(
            code=status.WS_1008_POLICY_VIOLATION,
            reason="Invalid authentication token",
        )
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid authentication token",
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_optional_current_user(
    connection: HTTPConnection,
    db: DbSession,
) -> User | None:
    """
    Resolve the Bearer token of a request to a user.

    - No token: anonymous (None), not an error
    - Token that fails verification (bad signature, expired, malformed,
      wrong type): the whole request fails with 401 (HTTP) or close code
      1008 (websocket)
    - Valid token whose user no longer exists: anonymous

    Args:
        connection: The HTTP request or websocket connection
        db: Database session

    Returns:
        The current user, or None for anonymous requests

    Raises:
        HTTPException: 401 if a supplied token is invalid
        WebSocketException: 1008 if a supplied token is invalid
    """
    token = get_bearer_token(connection)
    if token is None:
        return None

    payload = verify_token_type(token, ACCESS_TOKEN_TYPE)
    if payload is None:
        raise _invalid_token(connection)

    user_id = payload.get("id")
    if not isinstance(user_id, int):
        logger.warning("Token payload has no usable user id")
        raise _invalid_token(connection)

    user = get_user(db, user_id)
    if user is None:
        logger.warning(f"Token refers to unknown user id {user_id}")
    return user


OptionalCurrentUser = Annotated[User | None, Depends(get_optional_current_user)]
