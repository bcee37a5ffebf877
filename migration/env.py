from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool

from infra.db.base import Base
import infra.db.models  # noqa: F401  (registers the tables on Base.metadata)

config = context.config

# run_migrations() keeps the application logging setup intact
if config.config_file_name is not None and config.attributes.get("configure_logger", True):
    fileConfig(config.config_file_name, disable_existing_loggers=False)

target_metadata = Base.metadata

# SQLite cannot ALTER most constraints in place; batch mode rebuilds the table
_CONFIGURE_OPTIONS = {
    "target_metadata": target_metadata,
    "render_as_batch": True,
    "compare_type": True,
}


def _db_url() -> str:
    """URL handed in by run_migrations(), else the one CPA_DB_PATH points at."""
    url = config.attributes.get("db_url") or config.get_main_option("sqlalchemy.url")
    if config.cmd_opts is not None and not config.attributes.get("db_url"):
        # invoked from the alembic command line: follow the application settings
        from infra.config import load_settings

        url = load_settings().db_url
    return url


def run_offline() -> None:
    context.configure(url=_db_url(), literal_binds=True, **_CONFIGURE_OPTIONS)
    with context.begin_transaction():
        context.run_migrations()


def run_online() -> None:
    engine = create_engine(_db_url(), future=True, poolclass=pool.NullPool)
    with engine.connect() as connection:
        context.configure(connection=connection, **_CONFIGURE_OPTIONS)
        with context.begin_transaction():
            context.run_migrations()
    engine.dispose()


if context.is_offline_mode():
    run_offline()
else:
    run_online()
