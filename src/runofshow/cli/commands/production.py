from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

import typer

from ...infra.settings import settings
from ...infra.uow import session
from ...usecases import crew_overview as _uc_crew_overview
from ...usecases import production_add as _uc_production_add
from ...usecases import timing_show as _uc_timing_show
from ._output import echo_json, fail, fail_message

app = typer.Typer(name="production", help="Production and timing operations")


def _clock(value: str | None) -> str:
    """Render a stored UTC instant as HH:MM on the display clock."""
    if not value:
        return "--:--"
    instant = datetime.fromisoformat(value.replace("Z", "+00:00"))
    return instant.astimezone(ZoneInfo(settings.display_timezone)).strftime("%H:%M")


def _echo_production(title: str, result: dict) -> None:
    typer.echo(title)
    typer.echo(f"  ID: {result['id']}")
    typer.echo(f"  Name: {result['name']}")
    typer.echo(f"  Anchor time: {result['anchor_time'] or 'not set'}")
    typer.echo(f"  Live time: {result['live_time'] or 'not set'}")


@app.command("add")
def add_production(
    name: str = typer.Option(..., "--name", help="Production name (e.g., 'Fortuna - PKC')"),
    anchor_time: str | None = typer.Option(
        None, "--anchor-time", help="Kickoff instant, ISO-8601. Naive values use DISPLAY_TIMEZONE"
    ),
    live_time: str | None = typer.Option(None, "--live-time", help="Livestream start, ISO-8601"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """Create a new production.

    Examples:
        runofshow production add --name "Fortuna - PKC" --anchor-time 2025-03-01T20:00
    """
    with session() as db:
        try:
            result = _uc_production_add.add_production(
                db, name=name, anchor_time=anchor_time, live_time=live_time
            )
            if json_output:
                echo_json({"status": "ok", "production": result})
            else:
                _echo_production("Production created:", result)
            return
        except typer.Exit:
            raise
        except Exception as e:
            raise fail(e, json_output, "creating production") from e


@app.command("show")
def show_production(
    production_id: int = typer.Argument(..., help="Production id"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """Show a production."""
    with session() as db:
        try:
            result = _uc_production_add.show_production(db, production_id=production_id)
            if json_output:
                echo_json({"status": "ok", "production": result})
            else:
                _echo_production("Production:", result)
            return
        except typer.Exit:
            raise
        except Exception as e:
            raise fail(e, json_output, "showing production") from e


@app.command("update")
def update_production(
    production_id: int = typer.Argument(..., help="Production id"),
    anchor_time: str | None = typer.Option(None, "--anchor-time", help="New kickoff instant"),
    live_time: str | None = typer.Option(None, "--live-time", help="New livestream start"),
    clear_anchor_time: bool = typer.Option(False, "--clear-anchor-time", help="Unset the kickoff"),
    clear_live_time: bool = typer.Option(False, "--clear-live-time", help="Unset the live time"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """Set or clear the kickoff and livestream times of a production.

    Examples:
        runofshow production update 4 --anchor-time 2025-03-01T20:30
        runofshow production update 4 --clear-live-time
    """
    with session() as db:
        try:
            result = _uc_production_add.update_production_times(
                db,
                production_id=production_id,
                anchor_time=anchor_time,
                live_time=live_time,
                clear_anchor_time=clear_anchor_time,
                clear_live_time=clear_live_time,
            )
            if json_output:
                echo_json({"status": "ok", "production": result})
            else:
                _echo_production("Production updated:", result)
            return
        except typer.Exit:
            raise
        except Exception as e:
            raise fail(e, json_output, "updating production") from e


@app.command("timing")
def show_timing(
    production_id: int = typer.Argument(..., help="Production id"),
    no_live: bool = typer.Option(False, "--no-live", help="Leave out the livestream start marker"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """Show start and end times of every segment.

    Times are derived from the kickoff instant and the anchor segment. Exits 1
    with code NO_ANCHOR while the anchor is not configured.
    """
    with session() as db:
        try:
            result = _uc_timing_show.show_timing(
                db, production_id=production_id, include_live=not no_live
            )
        except Exception as e:
            raise fail(e, json_output, "computing timing") from e

    if result["status"] == "no_anchor":
        raise fail_message("NO_ANCHOR", result["message"], json_output, reason=result["reason"])

    if json_output:
        echo_json(result)
        return
    if not result["segments"]:
        typer.echo("No segments")
        return
    for entry in result["segments"]:
        marker = "*" if entry["is_anchor"] else " "
        typer.echo(
            f"{marker} {_clock(entry['start'])} - {_clock(entry['end'])}  "
            f"{entry['name']} ({entry['duration_minutes']} min)"
        )
    typer.echo(f"\nTotal: {result['total_minutes']} min")


@app.command("crew")
def show_crew(
    production_id: int = typer.Argument(..., help="Production id"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """Show every crew member with all their positions in the production."""
    with session() as db:
        try:
            crew = _uc_crew_overview.crew_overview(db, production_id=production_id)
            if json_output:
                echo_json({"status": "ok", "total": len(crew), "crew": crew})
            elif not crew:
                typer.echo("No crew assigned")
            else:
                for member in crew:
                    typer.echo(f"{member['person_name']} ({member['person_id']})")
                    for item in member["positions"]:
                        where = item.get("segment_name") or "whole production"
                        typer.echo(f"    {item['position_name']}: {where}")
            return
        except typer.Exit:
            raise
        except Exception as e:
            raise fail(e, json_output, "listing crew") from e
