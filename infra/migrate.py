# infra/migrate.py
from __future__ import annotations

import logging
from pathlib import Path

from alembic import command
from alembic.config import Config

logger = logging.getLogger(__name__)

# migration/ sits next to the core and infra packages
MIGRATION_DIR = Path(__file__).resolve().parents[1] / "migration"


def build_alembic_config(db_url: str) -> Config:
    alembic_ini = MIGRATION_DIR / "alembic.ini"
    if not alembic_ini.exists():
        raise RuntimeError(f"Alembic config missing: {alembic_ini}")

    cfg = Config(str(alembic_ini))
    cfg.set_main_option("script_location", str(MIGRATION_DIR))
    cfg.set_main_option("sqlalchemy.url", db_url)
    cfg.attributes["db_url"] = db_url
    cfg.attributes["configure_logger"] = False
    return cfg


def run_migrations(db_url: str) -> None:
    """Bring the schema at ``db_url`` up to the latest revision."""
    logger.info("Running migrations against %s", db_url)
    command.upgrade(build_alembic_config(db_url), "head")


__all__ = ["MIGRATION_DIR", "build_alembic_config", "run_migrations"]
