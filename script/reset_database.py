#!/usr/bin/env python3
"""
Database Reset Script
Reset the database structure

Features:
1. Drop all tables of the events schema
2. Recreate them from the ORM models

Notes:
- This script only resets database structure, does not seed data
- To seed data, run `python -m script.seed_data`
- Managed PostgreSQL deployments should use alembic (`migrate`) instead
"""

import asyncio

from src.platform.config.di import container
from src.platform.database.orm_db_setting import create_db_and_tables, drop_db_and_tables


async def main() -> None:
    print('🔄 Resetting database...')
    database = container.database()

    try:
        await drop_db_and_tables(database)
        print('   ✅ Tables dropped')

        await create_db_and_tables(database)
        print('   ✅ Tables created')

    except Exception as e:
        print(f'❌ Reset failed: {e}')
        raise SystemExit(1) from e

    finally:
        await database.dispose()

    print('✅ Database reset completed!')


if __name__ == '__main__':
    asyncio.run(main())
