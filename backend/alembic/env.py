"""
Environnement Alembic : migrations appliquees sur l'engine de l'application,
metadonnees SQLModel des entites MoveRings.
"""
import sys
from logging.config import fileConfig
from pathlib import Path

from alembic import context
from sqlmodel import SQLModel

sys.path.append(str(Path(__file__).resolve().parent.parent))

import app.domain.entities  # noqa: E402,F401  enregistre les tables
from app.core.database import engine  # noqa: E402

if context.config.config_file_name is not None:
    fileConfig(context.config.config_file_name)


def run_migrations() -> None:
    if context.is_offline_mode():
        context.configure(
            url=engine.url.render_as_string(hide_password=False),
            target_metadata=SQLModel.metadata,
            literal_binds=True,
        )
        with context.begin_transaction():
            context.run_migrations()
        return

    with engine.connect() as connection:
        context.configure(connection=connection, target_metadata=SQLModel.metadata)
        with context.begin_transaction():
            context.run_migrations()


run_migrations()
