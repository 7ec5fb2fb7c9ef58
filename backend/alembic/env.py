"""Alembic environment configuration.

Reads the database URL from sro_portal.config and registers all models
so autogenerate can detect schema changes.
"""
from logging.config import fileConfig
from sqlalchemy import engine_from_config, pool
from alembic import context

from sro_portal.config import settings
from sro_portal.database import Base

# Import all models so they register with Base.metadata
from sro_portal.models.account import Account  # noqa: F401
from sro_portal.models.organization import Organization  # noqa: F401
from sro_portal.models.activity import Activity, ActivitySchedule  # noqa: F401
from sro_portal.models.annual_report import AnnualReport  # noqa: F401
from sro_portal.models.org_recognition import OrgRecognition  # noqa: F401
from sro_portal.models.appointment import Appointment, AppointmentSettings  # noqa: F401

config = context.config
config.set_main_option("sqlalchemy.url", settings.DATABASE_URL)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode."""
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode."""
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
