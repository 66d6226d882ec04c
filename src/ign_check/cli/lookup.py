from __future__ import annotations

import json

import typer

from ign_check.api.responses import result_payload
from ign_check.lookup.dispatcher import LookupDispatcher
from ign_check.lookup.games import build_default_registry
from ign_check.lookup.providers.base.errors import InvalidLookupRequest
from ign_check.lookup.providers.codashop.client import CodashopClient
from ign_check.lookup.types import Found

app = typer.Typer(help="Look up accounts against the storefront.")


def make_dispatcher(client: CodashopClient) -> LookupDispatcher:
    return LookupDispatcher.with_default_games(client)


@app.command("check")
def check_cmd(
    game: str = typer.Argument(..., help="Game code (e.g. mlbb, genshin)."),
    user_id: str = typer.Argument(..., help="Account id, UID, tag or Riot ID."),
    zone: str | None = typer.Option(None, "--zone", help="Zone id for games that need one."),
) -> None:
    """Check one account and print the normalized result as JSON."""

    client = CodashopClient.from_settings()
    dispatcher = make_dispatcher(client)
    try:
        result = dispatcher.dispatch(game, user_id, zone)
    except InvalidLookupRequest as e:
        typer.echo(f"Invalid request: {e}", err=True)
        raise typer.Exit(code=2) from e
    finally:
        client.close()

    profile = dispatcher.registry.get(game)
    typer.echo(json.dumps(result_payload(result, profile), indent=2, ensure_ascii=False))
    if not isinstance(result, Found):
        raise typer.Exit(code=1)


@app.command("games")
def games_cmd() -> None:
    """List the games that can be checked."""

    for profile in build_default_registry():
        zone = "zone required" if profile.requires_zone else (profile.default_zone_id or "-")
        flag = "" if profile.verified else " (unverified)"
        typer.echo(f"{profile.code:<12} {profile.display_name:<22} {zone}{flag}")
