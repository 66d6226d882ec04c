from __future__ import annotations

import typer

import ign_check.db.models  # noqa: F401
from ign_check.core.config import settings
from ign_check.db import Base, DatabaseConfig, create_db_engine

app = typer.Typer(help="Local lookup-log database.")


@app.command("init")
def init_cmd() -> None:
    """Create missing tables (use alembic for upgrades)."""

    engine = create_db_engine(
        DatabaseConfig(database_url=settings.database_url, echo=settings.db_echo)
    )
    Base.metadata.create_all(engine)
    engine.dispose()
    typer.echo(f"Initialized {settings.database_url}")
