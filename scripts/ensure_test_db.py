from __future__ import annotations

import argparse
import asyncio

import asyncpg
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import create_async_engine

import millionaire.db.models  # noqa: F401
from millionaire.core.config import get_settings
from millionaire.core.integration_db_safety import assert_safe_integration_db
from millionaire.db.models.base import Base


async def _create_database_if_missing(database_url: str) -> bool:
    parsed = make_url(database_url)
    db_name = (parsed.database or "").strip()

    conn = await asyncpg.connect(
        host=parsed.host or "localhost",
        port=int(parsed.port or 5432),
        user=parsed.username,
        password=parsed.password,
        database="postgres",
    )
    try:
        if await conn.fetchval("SELECT 1 FROM pg_database WHERE datname = $1", db_name):
            return False
        await conn.execute(f'CREATE DATABASE "{db_name}"')
        return True
    finally:
        await conn.close()


async def _create_tables(database_url: str) -> None:
    engine = create_async_engine(database_url)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    finally:
        await engine.dispose()


async def _run(database_url: str, *, create_tables: bool) -> None:
    assert_safe_integration_db(database_url)
    created = await _create_database_if_missing(database_url)
    db_name = make_url(database_url).database
    print(f"ensure_test_db: {'created' if created else 'exists'} db={db_name}")  # noqa: T201
    if create_tables:
        await _create_tables(database_url)
        print(f"ensure_test_db: tables ready db={db_name}")  # noqa: T201


def main() -> int:
    parser = argparse.ArgumentParser(description="Create the local PostgreSQL test database and its tables.")
    parser.add_argument("--skip-tables", action="store_true")
    args = parser.parse_args()

    asyncio.run(_run(get_settings().database_url, create_tables=not args.skip_tables))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
