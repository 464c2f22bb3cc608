#!/usr/bin/env python3
"""
Database Seed Script

Populates the database with a sample library for development.

USAGE:
    # Make sure you're in the project root with venv activated
    python scripts/seed_data.py

    # Keep existing rows and only add what is missing
    python scripts/seed_data.py --keep

This script:
1. Connects to the database using app settings
2. Clears existing data (optional)
3. Creates sample authors with birth years
4. Adds sample books through the catalog service, so authors that are
   not in the author list are created on demand like addBook does
5. Creates a sample user (log in with the shared password "secret")
"""

import argparse
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import delete
from sqlalchemy.orm import Session

from library_api.database import SessionLocal, create_tables
from library_api.models import Author, Book, BookGenre, User
from library_api.schemas import AuthorBornUpdate, BookCreate, UserCreate
from library_api.services import catalog, users

AUTHORS = [
    ("Robert Martin", 1952),
    ("Martin Fowler", 1963),
    ("Fyodor Dostoevsky", 1821),
]

BOOKS = [
    ("Clean Code", 2008, "Robert Martin", ["refactoring"]),
    ("Agile software development", 2002, "Robert Martin", ["agile", "patterns", "design"]),
    ("Refactoring, edition 2", 2018, "Martin Fowler", ["refactoring"]),
    ("Refactoring to patterns", 2008, "Joshua Kerievsky", ["refactoring", "patterns"]),
    (
        "Practical Object-Oriented Design, An Agile Primer Using Ruby",
        2012,
        "Sandi Metz",
        ["refactoring", "design"],
    ),
    ("Crime and punishment", 1866, "Fyodor Dostoevsky", ["classic", "crime"]),
    ("Demons", 1872, "Fyodor Dostoevsky", ["classic", "revolution"]),
]

USERS = [
    ("mluukkai", "refactoring"),
]


def clear_data(db: Session) -> None:
    """Clear all existing data from the database."""
    print("Clearing existing data...")
    db.execute(delete(BookGenre))
    db.execute(delete(Book))
    db.execute(delete(Author))
    db.execute(delete(User))
    db.commit()
    print("Data cleared.")


def create_authors(db: Session) -> int:
    """Create the sample authors and set their birth years."""
    print("Creating authors...")
    for name, born in AUTHORS:
        catalog.resolve_or_create_author(db, name)
        catalog.edit_author(db, AuthorBornUpdate(name=name, born=born))
    print(f"Created {len(AUTHORS)} authors.")
    return len(AUTHORS)


def create_books(db: Session) -> int:
    """Add the sample books, creating unknown authors on the way."""
    print("Creating books...")
    for title, published, author, genres in BOOKS:
        data = BookCreate(title=title, author=author, published=published, genres=genres)
        catalog.add_book(db, data)
    print(f"Created {len(BOOKS)} books.")
    return len(BOOKS)


def create_users(db: Session) -> int:
    """Create the sample users that do not exist yet."""
    print("Creating users...")
    created = 0
    for username, favourite_genre in USERS:
        if users.get_user_by_username(db, username) is None:
            users.create_user(
                db, UserCreate(username=username, favourite_genre=favourite_genre)
            )
            created += 1
    print(f"Created {created} users.")
    return created


def seed_database(db: Session, clear_existing: bool = True) -> dict[str, int]:
    """
    Seed the given session's database.

    Args:
        db: Database session
        clear_existing: If True, clears existing data before seeding.

    Returns:
        Number of records created per kind
    """
    if clear_existing:
        clear_data(db)

    return {
        "authors": create_authors(db),
        "books": create_books(db),
        "users": create_users(db),
    }


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the library database")
    parser.add_argument(
        "--keep",
        action="store_true",
        help="Keep existing data instead of clearing it first",
    )
    args = parser.parse_args()

    print("=" * 60)
    print("Starting database seed...")
    print("=" * 60)

    # Create tables if they don't exist
    create_tables()

    db = SessionLocal()

    try:
        summary = seed_database(db, clear_existing=not args.keep)

        print("=" * 60)
        print("Database seeding completed successfully!")
        print("=" * 60)
        print("\nSummary:")
        for kind, count in summary.items():
            print(f"  - {kind.capitalize()}: {count}")
        print("\nGraphQL endpoint at http://localhost:4000/graphql")

    except Exception as e:
        print(f"Error seeding database: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
