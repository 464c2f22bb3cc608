"""
User Service

Creating users and logging them in.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from library_api.models import User
from library_api.schemas import LoginRequest, UserCreate
from library_api.services.errors import InvalidCredentialsError, InvalidInputError
from library_api.services.security import check_password, create_user_token

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: int) -> User | None:
    """Get a user by ID."""
    return db.get(User, user_id)


def get_user_by_username(db: Session, username: str) -> User | None:
    """Find a user by username."""
    stmt = select(User).where(User.username == username)
    return db.execute(stmt).scalar_one_or_none()


def create_user(db: Session, data: UserCreate) -> User:
    """
    Create a new user.

    Raises:
        InvalidInputError: If the user could not be saved, e.g. because
            the username is already taken
    """
    user = User(username=data.username, favourite_genre=data.favourite_genre)
    db.add(user)

    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.warning(f"Creating user '{data.username}' failed: {exc}")
        raise InvalidInputError("adding new user failed", invalid_args=data.username) from exc

    db.refresh(user)
    logger.info(f"Created user: {user.username} (id={user.id})")
    return user


def login(db: Session, data: LoginRequest) -> str:
    """
    Log a user in.

    Succeeds only if the user exists and the password is the shared demo
    password. Both failures raise the same error.

    Returns:
        Signed token embedding the user's username and id

    Raises:
        InvalidCredentialsError: On unknown user or wrong password
    """
    user = get_user_by_username(db, data.username)

    if user is None or not check_password(data.password):
        logger.info(f"Failed login for username '{data.username}'")
        raise InvalidCredentialsError()

    return create_user_token(user)
