"""
Seed script: fixture CSVs -> users / customers / invoices / revenue tables.

Safe to run repeatedly: tables are only created when missing and rows whose
key already exists are skipped.

Usage:
    python -m dashboard.seed                        # uses dashboard/fixtures
    python -m dashboard.seed --fixtures path/to/dir # custom fixture directory
"""

from __future__ import annotations

import argparse
import asyncio
import datetime as dt
import logging
import sys
import uuid
from pathlib import Path

import bcrypt
import pandas as pd
from sqlalchemy.dialects import postgresql, sqlite

from dashboard.config_env import LOG_LEVEL
from dashboard.database import Base, engine
from dashboard.models import Customer, Invoice, Revenue, User

logger = logging.getLogger(__name__)

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"

BCRYPT_ROUNDS = 10


def load_fixture(fixtures_dir: Path, name: str) -> list[dict]:
    df = pd.read_csv(fixtures_dir / f"{name}.csv", encoding="utf-8", dtype=str).fillna("")
    return df.to_dict(orient="records")


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def _insert(conn, model):
    """INSERT builder for the connection's dialect (both support ON CONFLICT)."""
    if conn.dialect.name == "postgresql":
        return postgresql.insert(model)
    if conn.dialect.name == "sqlite":
        return sqlite.insert(model)
    raise RuntimeError(f"Unsupported database dialect: {conn.dialect.name}")


async def _create_table(conn, model):
    await conn.run_sync(Base.metadata.create_all, tables=[model.__table__])
    logger.info('Created "%s" table', model.__tablename__)


async def seed_users(conn, users: list[dict]):
    try:
        await _create_table(conn, User)

        for user in users:
            stmt = _insert(conn, User).values(
                id=uuid.UUID(user["id"]),
                name=user["name"],
                email=user["email"],
                password=hash_password(user["password"]),
            ).on_conflict_do_nothing(index_elements=["id"])
            await conn.execute(stmt)

        logger.info("Seeded users")
    except Exception as e:
        logger.error("Error seeding users: %s", e)
        raise


async def seed_customers(conn, customers: list[dict]):
    try:
        await _create_table(conn, Customer)

        for customer in customers:
            stmt = _insert(conn, Customer).values(
                id=uuid.UUID(customer["id"]),
                name=customer["name"],
                email=customer["email"],
                image_url=customer["image_url"],
            ).on_conflict_do_nothing(index_elements=["id"])
            await conn.execute(stmt)

        logger.info("Seeded customers")
    except Exception as e:
        logger.error("Error seeding customers: %s", e)
        raise


async def seed_invoices(conn, invoices: list[dict]):
    try:
        await _create_table(conn, Invoice)

        for invoice in invoices:
            stmt = _insert(conn, Invoice).values(
                id=uuid.UUID(invoice["id"]),
                customer_id=uuid.UUID(invoice["customer_id"]),
                amount=int(invoice["amount"]),
                status=invoice["status"],
                date=dt.date.fromisoformat(invoice["date"]),
            ).on_conflict_do_nothing(index_elements=["id"])
            await conn.execute(stmt)

        logger.info("Seeded invoices")
    except Exception as e:
        logger.error("Error seeding invoices: %s", e)
        raise


async def seed_revenue(conn, revenue: list[dict]):
    try:
        await _create_table(conn, Revenue)

        for rev in revenue:
            stmt = _insert(conn, Revenue).values(
                month=rev["month"],
                revenue=int(rev["revenue"]),
            ).on_conflict_do_nothing(index_elements=["month"])
            await conn.execute(stmt)

        logger.info("Seeded revenue")
    except Exception as e:
        logger.error("Error seeding revenue: %s", e)
        raise


async def seed(fixtures_dir: Path = FIXTURES_DIR):
    async with engine.begin() as conn:
        await seed_users(conn, load_fixture(fixtures_dir, "users"))
        await seed_customers(conn, load_fixture(fixtures_dir, "customers"))
        await seed_invoices(conn, load_fixture(fixtures_dir, "invoices"))
        await seed_revenue(conn, load_fixture(fixtures_dir, "revenue"))


async def seed_and_close(fixtures_dir: Path):
    try:
        await seed(fixtures_dir)
    finally:
        await engine.dispose()


def main():
    logging.basicConfig(level=LOG_LEVEL, format="%(levelname)s: %(message)s")

    parser = argparse.ArgumentParser(description="Seed the dashboard database with fixture data.")
    parser.add_argument("--fixtures", default=str(FIXTURES_DIR), help="Directory holding the fixture CSVs")
    args = parser.parse_args()

    try:
        asyncio.run(seed_and_close(Path(args.fixtures)))
    except Exception as e:
        logger.error("An error occurred while attempting to seed the database: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
