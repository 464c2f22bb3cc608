"""
GraphQL Context

Provides request context to all GraphQL resolvers:
- Database session for queries
- Current authenticated user (if any)
- The publish/subscribe channel for the bookAdded subscription

The context is created fresh for each GraphQL request (or websocket
connection) and passed to all resolvers via the `info` parameter.
"""

from sqlalchemy.orm import Session
from strawberry.fastapi import BaseContext
from strawberry.types import Info

from library_api.dependencies import DbSession, OptionalCurrentUser, PubSubDep
from library_api.graphql.errors import NotAuthenticatedError
from library_api.models.user import User
from library_api.services.pubsub import PubSub


class GraphQLContext(BaseContext):
    """
    Context object available to all GraphQL resolvers.

    Inherits from Strawberry's BaseContext for proper integration.

    Attributes:
        db: SQLAlchemy database session
        user: Currently authenticated user (None if anonymous)
        pubsub: Application-wide publish/subscribe channel
    """

    def __init__(self, db: Session, pubsub: PubSub, user: User | None = None):
        super().__init__()
        self.db = db
        self.pubsub = pubsub
        self.user = user


async def get_context(
    db: DbSession,
    pubsub: PubSubDep,
    user: OptionalCurrentUser,
) -> GraphQLContext:
    """
    Create GraphQL context for each request.

    Strawberry resolves this as a FastAPI dependency, so the session,
    pub/sub channel and current user come from library_api.dependencies.
    An invalid Bearer token fails the request there, before any resolver
    runs.

    Returns:
        GraphQLContext with db session, pub/sub channel and optional user
    """
    return GraphQLContext(db=db, pubsub=pubsub, user=user)


def require_auth(info: Info[GraphQLContext, None]) -> User:
    """Return the current user or raise NotAuthenticatedError."""
    user = info.context.user
    if user is None:
        raise NotAuthenticatedError()
    return user
