"""
Services Package

This package contains business logic services that are:
- Separate from request handling (GraphQL resolvers)
- Reusable across different parts of the application
- Easier to test in isolation

Current services:
- catalog.py: Book and author queries and writes
- users.py: User creation and login
- security.py: Credential check and JWT utilities
- pubsub.py: In-process publish/subscribe for subscriptions
- errors.py: Exceptions raised by the services
"""
