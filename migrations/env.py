"""
Alembic environment configuration.

This script runs whenever Alembic performs a migration.
It connects to our database using the application's settings
and knows about our models through Base.metadata.
"""

from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from finance_os.config import get_settings
from finance_os.models import Base  # registers every model on Base.metadata

# Alembic Config object; provides access to alembic.ini values
config = context.config

# Set up logging from alembic.ini
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Tell Alembic about our models.
# Base.metadata contains the schema definition for every model
# that inherits from Base. When we run autogenerate later,
# Alembic compares this metadata against the actual database
# and generates the migration automatically.
target_metadata = Base.metadata

# alembic.ini carries no sqlalchemy.url. The URL comes from
# finance_os.config's DATABASE_URL, read from the environment or a
# .env file, so migrations and the app always hit the same database.
settings = get_settings()
config.set_main_option("sqlalchemy.url", settings.DATABASE_URL)


def run_migrations_offline() -> None:
    """
    Run migrations in 'offline' mode.

    Generates SQL script without connecting to the database.
    Useful for reviewing changes before applying them.
    """
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
    """
    Run migrations in 'online' mode.

    Connects to the database and applies changes directly.
    This is the normal way to run migrations.
    """
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
