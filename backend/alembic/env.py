"""Alembic environment for the hwtube schema.

The URL always comes from ``hwtube.config.settings`` so migrations and the
running service agree on the database. SQLite needs batch mode for ALTERs.
"""
from logging.config import fileConfig
from sqlalchemy import engine_from_config, pool
from alembic import context

from hwtube.config import settings
from hwtube.database import Base

# Import all models so they register with Base.metadata
from hwtube.models.user import User                            # noqa: F401
from hwtube.models.network import Network, NetworkMembership   # noqa: F401
from hwtube.models.invitation import NetworkInvitation         # noqa: F401
from hwtube.models.application import NetworkApplication       # noqa: F401
from hwtube.models.video import Video                          # noqa: F401

config = context.config
config.set_main_option("sqlalchemy.url", settings.DATABASE_URL)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata
IS_SQLITE = settings.DATABASE_URL.startswith("sqlite")


def _configure(**kwargs) -> None:
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        render_as_batch=IS_SQLITE,
        **kwargs,
    )


def run_migrations_offline() -> None:
    """Emit SQL to stdout without a live connection."""
    _configure(
        url=settings.DATABASE_URL,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        _configure(connection=connection)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
