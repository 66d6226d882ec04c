from __future__ import annotations

import typer

from ign_check.cli.db import app as db_app
from ign_check.cli.lookup import app as lookup_app
from ign_check.cli.serve import serve_cmd
from ign_check.cli.stats import app as stats_app
from ign_check.core.config import settings
from ign_check.core.logging import configure_logging

app = typer.Typer(no_args_is_help=True)
app.add_typer(lookup_app, name="lookup")
app.add_typer(db_app, name="db")
app.add_typer(stats_app, name="stats")
app.command("serve")(serve_cmd)


@app.callback()
def main(
    log_level: str = typer.Option(settings.log_level, "--log-level", help="Python logging level."),
) -> None:
    configure_logging(log_level)
