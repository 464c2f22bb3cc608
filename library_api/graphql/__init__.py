"""
GraphQL Package

This package provides the GraphQL API using Strawberry GraphQL.

Features:
- Queries: bookCount, authorCount, allBooks, allAuthors, me
- Mutations: addBook, editAuthor, createUser, login
- Subscription: bookAdded (websocket)
- Authentication via JWT Bearer token in context

Usage:
    The GraphQL endpoint is available at /graphql with an interactive
    IDE for development (settings.graphql_ide_enabled).

Example Query:
    query {
        allBooks(genre: "refactoring") {
            title
            published
            author { name }
        }
    }
"""

import strawberry
from strawberry.fastapi import GraphQLRouter
from strawberry.subscriptions import GRAPHQL_TRANSPORT_WS_PROTOCOL, GRAPHQL_WS_PROTOCOL

from library_api.config import Settings, get_settings
from library_api.graphql.context import get_context
from library_api.graphql.mutations import Mutation
from library_api.graphql.queries import Query
from library_api.graphql.subscriptions import Subscription

# Create the GraphQL schema
schema = strawberry.Schema(
    query=Query,
    mutation=Mutation,
    subscription=Subscription,
)


def graphql_ide_for(settings: Settings) -> str | None:
    """
    Pick the interactive IDE served on GET /graphql.

    The IDE is never served in production, whatever graphql_ide_enabled says.
    """
    if settings.graphql_ide_enabled and not settings.is_production:
        return "apollo-sandbox"
    return None


def create_graphql_router() -> GraphQLRouter:
    """
    Create the GraphQL router for FastAPI.

    Returns:
        GraphQLRouter configured with schema, context and websocket
        subscription protocols
    """
    settings = get_settings()
    return GraphQLRouter(
        schema,
        context_getter=get_context,
        subscription_protocols=[GRAPHQL_TRANSPORT_WS_PROTOCOL, GRAPHQL_WS_PROTOCOL],
        # Options: "graphiql", "apollo-sandbox", or None to disable
        graphql_ide=graphql_ide_for(settings),
    )


__all__ = ["schema", "create_graphql_router", "graphql_ide_for"]
