"""
GraphQL Subscription Resolvers

Streams events from the context's PubSub to websocket clients
(graphql-transport-ws or the legacy graphql-ws protocol on /graphql).
"""

from collections.abc import AsyncGenerator
from typing import Any

import strawberry
from strawberry.types import Info

from library_api.graphql.context import GraphQLContext
from library_api.graphql.types import BookType
from library_api.services.pubsub import PubSub, Topic


async def stream_topic(pubsub: PubSub, topic: str) -> AsyncGenerator[Any, None]:
    """
    Yield every payload published on a topic from now on.

    The subscriber is registered before the first value is awaited and
    unregistered when the consumer stops (client disconnect, cancellation).
    """
    subscriber = pubsub.subscribe(topic)
    try:
        async for payload in subscriber:
            yield payload
    finally:
        subscriber.close()


@strawberry.type
class Subscription:
    """GraphQL Subscription type."""

    @strawberry.subscription(description="Books as they are added")
    async def book_added(
        self, info: Info[GraphQLContext, None]
    ) -> AsyncGenerator[BookType, None]:
        async for book in stream_topic(info.context.pubsub, Topic.BOOK_ADDED):
            yield book
