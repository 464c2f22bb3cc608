"""
Tests for the root and health endpoints.
"""

from fastapi.testclient import TestClient

from library_api.config import Settings
from library_api.graphql import graphql_ide_for
from library_api.services.pubsub import Topic


class TestRootEndpoint:
    def test_root(self, client: TestClient):
        response = client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Welcome to Library API"
        assert data["graphql"] == "/graphql"


class TestHealthEndpoint:
    """Tests for GET /health."""

    def test_health(self, client: TestClient):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == {"healthy": True}
        assert data["graphql"]["endpoint"] == "/graphql"
        assert data["subscriptions"] == {
            "total_subscribers": 0,
            "topics": {},
            "pending_events": {},
        }

    def test_health_reports_subscribers(self, client: TestClient):
        subscriber = client.app.state.pubsub.subscribe(Topic.BOOK_ADDED)
        try:
            data = client.get("/health").json()
        finally:
            subscriber.close()

        assert data["subscriptions"]["total_subscribers"] == 1
        assert data["subscriptions"]["topics"] == {"BOOK_ADDED": 1}


class TestGraphQLIde:
    """Tests for the GraphQL IDE switch."""

    def test_ide_served_outside_production(self):
        settings = Settings(environment="development", graphql_ide_enabled=True)
        assert graphql_ide_for(settings) == "apollo-sandbox"

    def test_ide_disabled_by_setting(self):
        settings = Settings(environment="development", graphql_ide_enabled=False)
        assert graphql_ide_for(settings) is None

    def test_ide_never_served_in_production(self):
        settings = Settings(environment="Production", graphql_ide_enabled=True)
        assert settings.is_production
        assert graphql_ide_for(settings) is None

    def test_health_reports_ide(self, client: TestClient):
        data = client.get("/health").json()
        assert data["graphql"]["ide_enabled"] is True


class TestHealthBacklog:
    def test_health_reports_pending_events(self, client: TestClient, auth_token: str):
        """A subscriber that has not consumed an added book shows as backlog."""
        subscriber = client.app.state.pubsub.subscribe(Topic.BOOK_ADDED)
        try:
            client.post(
                "/graphql",
                json={
                    "query": 'mutation { addBook(title: "Dune", author: "Frank Herbert", '
                    'published: 1965, genres: []) { id } }'
                },
                headers={"Authorization": f"Bearer {auth_token}"},
            )
            data = client.get("/health").json()
        finally:
            subscriber.close()

        assert data["subscriptions"]["pending_events"] == {"BOOK_ADDED": 1}
