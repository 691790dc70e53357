#!/usr/bin/env python3
"""
Schema management script.
Creates the listing tables, applies row-level security and seeds demo data.
"""

import asyncio
import sys
import argparse
import logging
from decimal import Decimal

from estate_api.config import settings
from estate_api.database import engine, AsyncSessionLocal, create_tables, drop_tables
from estate_api.models import User, Property
from estate_api.policies import apply_row_level_security
from estate_api.repositories.user import UserRepository

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

DEMO_OWNER_EMAIL = "owner@example.com"
DEMO_LISTINGS = [
    {"title": "Villa", "city": "Yerevan", "price": Decimal("100000")},
    {"title": "Apartment near Cascade", "city": "Yerevan", "price": Decimal("85000")},
    {"title": "Lake house", "city": "Sevan", "price": Decimal("64000")},
    {"title": "Stone cottage", "city": "Dilijan", "price": Decimal("42000")},
]


class MigrationManager:
    """Manages the schema and demo data."""

    async def create_schema(self) -> None:
        """Create tables and, on PostgreSQL, row-level security policies."""
        logger.info(f"Creating schema on {engine.dialect.name}")
        await create_tables(engine)
        await apply_row_level_security(engine)

    async def seed_database(self) -> None:
        """Seed the store with a demo owner and a few listings."""
        logger.info("Seeding database with demo data")

        async with AsyncSessionLocal() as session:
            try:
                if await UserRepository(session).get_by_email(DEMO_OWNER_EMAIL):
                    logger.info("Demo owner already exists, skipping seed")
                    return

                owner = User(
                    email=DEMO_OWNER_EMAIL,
                    hashed_password=User.hash_password("demo-password", settings.min_password_length)
                )
                session.add(owner)
                await session.flush()

                for listing in DEMO_LISTINGS:
                    session.add(Property(owner_id=owner.id, **listing))

                await session.commit()

                logger.info("Database seeded successfully")
                logger.info(f"  Owner: {DEMO_OWNER_EMAIL} / demo-password")
                logger.warning("Do not seed demo credentials in production!")

            except Exception as e:
                await session.rollback()
                logger.error(f"Failed to seed database: {e}")
                raise

    async def reset_database(self) -> None:
        """Drop and recreate every table, then reseed."""
        logger.warning("Resetting database - all data will be lost!")

        if settings.is_production:
            raise RuntimeError("Database reset is not allowed in production")

        await drop_tables(engine)
        await self.create_schema()
        await self.seed_database()

        logger.info("Database reset completed")


def main():
    """Main CLI interface for schema management."""
    parser = argparse.ArgumentParser(description="Schema management for the listings store")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("create", help="Create tables and row-level security policies")
    subparsers.add_parser("seed", help="Seed the store with demo listings")

    reset_parser = subparsers.add_parser("reset", help="Drop, recreate and reseed (not in production)")
    reset_parser.add_argument("--confirm", action="store_true", help="Confirm database reset")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return

    manager = MigrationManager()

    try:
        if args.command == "create":
            asyncio.run(manager.create_schema())

        elif args.command == "seed":
            asyncio.run(manager.seed_database())

        elif args.command == "reset":
            if not args.confirm:
                print("Database reset requires --confirm flag")
                return
            asyncio.run(manager.reset_database())

    except Exception as e:
        logger.error(f"Command failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
