"""
In-Process Publish/Subscribe

Fans events out to live GraphQL subscriptions.

Features:
- Named topics (only BOOK_ADDED today)
- Any number of concurrent subscribers per topic
- Each subscriber receives every event published after it registered,
  in publish order
- No replay of past events, no persistence across restarts

One PubSub instance is created per application (stored on app.state)
and handed to each request through the GraphQL context, so nothing here
is a module-level singleton.

Usage:
    pubsub = PubSub()

    subscriber = pubsub.subscribe(Topic.BOOK_ADDED)
    await pubsub.publish(Topic.BOOK_ADDED, book)

    async for book in subscriber:
        ...
    subscriber.close()
"""

import asyncio
import logging
from enum import StrEnum
from typing import Any

logger = logging.getLogger(__name__)


class Topic(StrEnum):
    """Topics that can be published to."""

    BOOK_ADDED = "BOOK_ADDED"


class Subscriber:
    """
    One registration on a topic.

    Registered as soon as it is created, so events published after
    PubSub.subscribe() returns are never missed. Iterate with
    ``async for``; call close() to unregister.

    The queue is unbounded: a slow consumer accumulates events rather
    than blocking the publisher.
    """

    def __init__(self, pubsub: "PubSub", topic: str):
        self.topic = topic
        self._pubsub = pubsub
        self._queue: asyncio.Queue[Any] = asyncio.Queue()
        self.closed = False

    def deliver(self, payload: Any) -> None:
        self._queue.put_nowait(payload)

    @property
    def pending(self) -> int:
        """Number of delivered events not yet consumed."""
        return self._queue.qsize()

    def __aiter__(self) -> "Subscriber":
        return self

    async def __anext__(self) -> Any:
        if self.closed:
            raise StopAsyncIteration
        return await self._queue.get()

    def close(self) -> None:
        """Unregister from the topic. Safe to call more than once."""
        if self.closed:
            return
        self.closed = True
        self._pubsub._unsubscribe(self)


class PubSub:
    """
    Topic-based in-memory event channel.

    Subscribers are tracked per topic. publish() hands the payload to
    every subscriber registered at that moment.
    """

    def __init__(self):
        # Map of topic -> subscribers, in registration order
        self._subscribers: dict[str, list[Subscriber]] = {}

    def subscribe(self, topic: str) -> Subscriber:
        """
        Register a new subscriber on a topic.

        Args:
            topic: Topic name

        Returns:
            The subscriber, already registered
        """
        subscriber = Subscriber(self, topic)
        self._subscribers.setdefault(topic, []).append(subscriber)
        logger.debug(f"Subscribed to '{topic}' ({self.subscriber_count(topic)} subscribers)")
        return subscriber

    def _unsubscribe(self, subscriber: Subscriber) -> None:
        subscribers = self._subscribers.get(subscriber.topic, [])
        if subscriber in subscribers:
            subscribers.remove(subscriber)
        if not subscribers:
            self._subscribers.pop(subscriber.topic, None)
        logger.debug(
            f"Unsubscribed from '{subscriber.topic}' "
            f"({self.subscriber_count(subscriber.topic)} subscribers)"
        )

    async def publish(self, topic: str, payload: Any) -> int:
        """
        Publish an event to every current subscriber of a topic.

        Args:
            topic: Topic name
            payload: Event payload, delivered as-is

        Returns:
            Number of subscribers the event was delivered to
        """
        subscribers = list(self._subscribers.get(topic, []))
        for subscriber in subscribers:
            subscriber.deliver(payload)

        logger.debug(f"Published to '{topic}': {len(subscribers)} subscribers")
        return len(subscribers)

    def subscriber_count(self, topic: str) -> int:
        """Number of live subscribers on a topic."""
        return len(self._subscribers.get(topic, []))

    def get_stats(self) -> dict[str, Any]:
        """
        Subscriber counts and undelivered backlog, for the health endpoint.

        pending_events counts events delivered to a topic's subscribers
        but not yet consumed by them; a growing number means a slow client.
        """
        return {
            "total_subscribers": sum(len(s) for s in self._subscribers.values()),
            "topics": {topic: len(s) for topic, s in self._subscribers.items()},
            "pending_events": {
                topic: sum(subscriber.pending for subscriber in s)
                for topic, s in self._subscribers.items()
            },
        }
