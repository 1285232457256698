#!/usr/bin/env python3
"""
Database Reset Script
Reset the reservation database structure

Features:
1. Drop & Recreate Database - completely wipe the database (PostgreSQL)
2. Run Alembic Migrations - create the latest schema
3. SQLite - drop and recreate every table from the ORM metadata

Notes:
- This script only resets database structure, does not seed test data
- To seed test data, run `python script/seed_data.py`
"""

import asyncio
import subprocess

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import create_async_engine

from src.platform.config.core_setting import settings
from src.platform.constant.path import BASE_DIR
from src.platform.database.orm_db_setting import Database


async def _drop_and_create_db(database_url: str) -> None:
    """Drop and recreate database through the server's maintenance database"""
    url = make_url(database_url)
    db_name = url.database
    admin_engine = create_async_engine(
        url.set(database='postgres'), isolation_level='AUTOCOMMIT'
    )

    try:
        async with admin_engine.connect() as conn:
            await conn.execute(
                text(
                    'SELECT pg_terminate_backend(pid) FROM pg_stat_activity '
                    'WHERE datname = :db_name AND pid <> pg_backend_pid()'
                ),
                {'db_name': db_name},
            )
            await conn.execute(text(f'DROP DATABASE IF EXISTS "{db_name}"'))
            print(f"   ✅ Database '{db_name}' dropped")

            await conn.execute(text(f'CREATE DATABASE "{db_name}"'))
            print(f"   ✅ Database '{db_name}' created")
    finally:
        await admin_engine.dispose()


def _run_alembic_migrations() -> None:
    """Run Alembic migrations"""
    print("   🔄 Running 'alembic upgrade head'...")

    result = subprocess.run(
        ['alembic', 'upgrade', 'head'],
        cwd=BASE_DIR,
        capture_output=True,
        text=True,
    )

    if result.returncode != 0:
        print(f'   ❌ Migration failed (return code: {result.returncode})')
        if result.stdout:
            print(f'   📋 STDOUT: {result.stdout}')
        if result.stderr:
            print(f'   📋 STDERR: {result.stderr}')
        raise RuntimeError(f'Alembic migration failed with return code {result.returncode}')

    print('   ✅ Database migrations completed')


async def _reset_sqlite(database_url: str) -> None:
    database = Database(db_url=database_url)
    try:
        await database.drop_tables()
        print('   ✅ Tables dropped')
        await database.create_tables()
        print('   ✅ Tables created')
    finally:
        await database.dispose()


async def main() -> None:
    database_url = settings.DATABASE_URL_ASYNC
    print('🔄 Starting database reset...')
    print(f'Database URL: {make_url(database_url).render_as_string()}')
    print('=' * 50)

    try:
        if make_url(database_url).get_backend_name() == 'sqlite':
            await _reset_sqlite(database_url)
        else:
            print('🗑️ Dropping database...')
            await _drop_and_create_db(database_url)
            print('🏗️ Running database migrations...')
            _run_alembic_migrations()

        print('=' * 50)
        print('✅ Database reset completed!')
        print('💡 To seed test data, run: python script/seed_data.py')

    except Exception as e:
        print(f'❌ Reset failed: {e}')
        raise SystemExit(1) from e


if __name__ == '__main__':
    asyncio.run(main())
