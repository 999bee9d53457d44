"""
Alembic migrations for the stars schema (users, dashboards, stars).

The database URL and metadata both come from the Flask app, so migrations
always target the same database the server would open for DATABASE_URL.
"""
from logging.config import fileConfig
import sys
from pathlib import Path

from alembic import context

sys.path.insert(0, str(Path(__file__).parent.parent))

from server import app  # noqa: E402
from models import db  # noqa: E402

STAR_TABLES = {'users', 'dashboards', 'stars'}

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)


def include_object(obj, name, type_, reflected, compare_to):
    """Keep autogenerate away from tables this service does not own."""
    if type_ == 'table':
        return name in STAR_TABLES
    return True


def _configure(**kwargs):
    context.configure(
        target_metadata=db.metadata,
        include_object=include_object,
        render_as_batch=app.config['SQLALCHEMY_DATABASE_URI'].startswith('sqlite'),
        compare_type=True,
        **kwargs,
    )


def migrate_offline():
    _configure(
        url=app.config['SQLALCHEMY_DATABASE_URI'],
        literal_binds=True,
        dialect_opts={'paramstyle': 'named'},
    )
    with context.begin_transaction():
        context.run_migrations()


def migrate_online():
    with app.app_context(), db.engine.connect() as connection:
        _configure(connection=connection)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    migrate_offline()
else:
    migrate_online()
