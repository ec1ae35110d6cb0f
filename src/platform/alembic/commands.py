"""Alembic command shortcuts (project scripts: migrate, rollback, make-migration)."""

import subprocess
import sys
from pathlib import Path

from src.platform.logging.loguru_io import Logger


# Get the path to alembic.ini
ALEMBIC_INI = Path(__file__).parent / 'alembic.ini'


def run_alembic(args: list[str]) -> int:
    """Run alembic command with config file."""
    cmd = ['alembic', '-c', str(ALEMBIC_INI), *args]
    return subprocess.call(cmd)


def upgrade() -> int:
    """Upgrade database to latest migration."""
    Logger.base.info('⬆️ [ALEMBIC] Running migrations...')
    return run_alembic(['upgrade', 'head'])


def downgrade() -> int:
    """Downgrade database by one migration."""
    Logger.base.info('⬇️ [ALEMBIC] Rolling back one migration...')
    return run_alembic(['downgrade', '-1'])


def make_migration() -> int:
    """Create a new migration based on model changes."""
    if len(sys.argv) < 2:
        Logger.base.error("Usage: make-migration 'migration message'")
        return 1

    message = ' '.join(sys.argv[1:])
    Logger.base.info(f'📝 [ALEMBIC] Creating migration: {message}')
    return run_alembic(['revision', '--autogenerate', '-m', message])
