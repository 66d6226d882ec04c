from __future__ import annotations

import typer

from ign_check.cli.common import session_scope
from ign_check.db.repos.lookup_check_repo import DEFAULT_PERIOD, LookupCheckRepository, period_start

app = typer.Typer(help="Lookup usage statistics.")


@app.command("show")
def show_cmd(
    period: str = typer.Option(DEFAULT_PERIOD, "--period", help="1h, 24h, 7d or 30d."),
) -> None:
    """Summarize logged lookups for a recent period."""

    with session_scope() as session:
        stats = LookupCheckRepository(session).stats_since(period_start(period))

    typer.echo(
        " ".join(
            [
                f"Lookups since {stats.since.isoformat(timespec='seconds')}:",
                f"total={stats.total_checks}",
                f"unique_clients={stats.unique_clients}",
                f"avg_duration_ms={stats.avg_duration_ms}",
            ]
            + [f"{k}={v}" for k, v in sorted(stats.by_outcome.items())]
        )
    )
    for g in stats.games:
        typer.echo(f"  {g.game_code:<12} checks={g.total_checks} success_rate={g.success_rate}%")
