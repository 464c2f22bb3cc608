"""
Test Suite for the Library API

Test Organization:
- conftest.py: Shared fixtures (test database, client, sample data)
- test_graphql.py: Queries, mutations and the bookAdded subscription over /graphql
- test_services.py: Catalog and user services, typed inputs
- test_pubsub.py: The in-process event channel
- test_security.py: Password check and tokens
- test_health.py: Root and health endpoints
- test_seed.py: The development seed script

Running Tests:
    # Run all tests
    pytest

    # Run specific file
    pytest tests/test_graphql.py

    # Run with verbose output
    pytest -v
"""
