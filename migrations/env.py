from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from zuhri.core.config import settings
from zuhri.core.database import Base
from zuhri.models import (  # noqa: F401  registers every table on Base.metadata
    user,
    course,
    lesson,
    enrollment,
    lesson_progress,
    exam,
    exam_question,
    exam_attempt,
    certificate,
    diploma_template,
    certificate_image,
    token_denylist,
)

config = context.config
config.set_main_option("sqlalchemy.url", settings.DATABASE_URL)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
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
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            render_as_batch=connection.dialect.name == "sqlite",
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
