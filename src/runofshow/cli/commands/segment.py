from __future__ import annotations

import typer

from ...infra.uow import session
from ...usecases import segment_add as _uc_segment_add
from ...usecases import segment_delete as _uc_segment_delete
from ...usecases import segment_list as _uc_segment_list
from ...usecases import segment_move as _uc_segment_move
from ...usecases import segment_update as _uc_segment_update
from ._output import echo_json, fail

app = typer.Typer(name="segment", help="Segment running order operations")


def _echo_segment(title: str, segment: dict) -> None:
    typer.echo(title)
    typer.echo(f"  ID: {segment['id']}")
    typer.echo(f"  Production: {segment['production_id']}")
    typer.echo(f"  Name: {segment['name']}")
    typer.echo(f"  Position: {segment['position']}")
    typer.echo(f"  Duration: {segment['duration_minutes']} min")
    if segment["is_time_anchor"]:
        typer.echo("  Time anchor: yes")


def _echo_timing_status(timing: dict) -> None:
    if timing["status"] == "no_anchor":
        typer.echo(f"  Timing: {timing['message']}")


@app.command("add")
def add_segment(
    production_id: int = typer.Option(..., "--production", help="Production id"),
    name: str = typer.Option(..., "--name", help="Segment name (e.g., 'Voorbeschouwing')"),
    duration: int = typer.Option(..., "--duration", help="Duration in whole minutes"),
    position: int | None = typer.Option(
        None, "--position", help="1-based position; later segments shift. Default appends"
    ),
    anchor: bool = typer.Option(False, "--anchor", help="Make this the time anchor segment"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """Add a segment to a production's running order.

    Examples:
        runofshow segment add --production 4 --name "Wedstrijd" --duration 90 --anchor
        runofshow segment add --production 4 --name "Opening" --duration 5 --position 1
    """
    with session() as db:
        try:
            result = _uc_segment_add.add_segment(
                db,
                production_id=production_id,
                name=name,
                duration_minutes=duration,
                position=position,
                is_time_anchor=anchor,
            )
            if json_output:
                echo_json({"status": "ok", **result})
            else:
                _echo_segment("Segment created:", result["segment"])
                _echo_timing_status(result["timing"])
            return
        except typer.Exit:
            raise
        except Exception as e:
            raise fail(e, json_output, "creating segment") from e


@app.command("list")
def list_segments(
    production_id: int = typer.Option(..., "--production", help="Production id"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """List segments in running order."""
    with session() as db:
        try:
            segments = _uc_segment_list.list_segments(db, production_id=production_id)
            if json_output:
                echo_json({"status": "ok", "total": len(segments), "segments": segments})
            elif not segments:
                typer.echo("No segments found")
            else:
                for s in segments:
                    anchor = " [anchor]" if s["is_time_anchor"] else ""
                    typer.echo(
                        f"  {s['position']:>3}. {s['name']} ({s['duration_minutes']} min){anchor}"
                        f"  id={s['id']}"
                    )
                typer.echo(f"\nTotal: {len(segments)} segments")
            return
        except typer.Exit:
            raise
        except Exception as e:
            raise fail(e, json_output, "listing segments") from e


@app.command("update")
def update_segment(
    segment_id: int = typer.Argument(..., help="Segment id"),
    name: str | None = typer.Option(None, "--name", help="New segment name"),
    duration: int | None = typer.Option(None, "--duration", help="New duration in minutes"),
    anchor: bool | None = typer.Option(None, "--anchor/--no-anchor", help="Time anchor flag"),
    position: int | None = typer.Option(None, "--position", help="Move to this 1-based position"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """Rename, resize, re-anchor or move a segment.

    Examples:
        runofshow segment update 12 --duration 15
        runofshow segment update 12 --anchor
    """
    with session() as db:
        try:
            result = _uc_segment_update.update_segment(
                db,
                segment_id=segment_id,
                name=name,
                duration_minutes=duration,
                is_time_anchor=anchor,
                position=position,
            )
            if json_output:
                echo_json({"status": "ok", **result})
            else:
                _echo_segment("Segment updated:", result["segment"])
                for field, change in result["changes"].items():
                    typer.echo(f"  Changed {field}: {change['from']} -> {change['to']}")
                _echo_timing_status(result["timing"])
            return
        except typer.Exit:
            raise
        except Exception as e:
            raise fail(e, json_output, "updating segment") from e


@app.command("move")
def move_segment(
    segment_id: int = typer.Argument(..., help="Segment id"),
    to: int = typer.Option(..., "--to", help="New 1-based position"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """Move a segment to another position in the running order.

    Segments in between shift by one; the order stays 1..N.
    """
    with session() as db:
        try:
            result = _uc_segment_move.move_segment(db, segment_id=segment_id, new_position=to)
            if json_output:
                echo_json({"status": "ok", **result})
            else:
                typer.echo(f"Moved '{result['segment']['name']}' to position {to}:")
                for s in result["segments"]:
                    typer.echo(f"  {s['position']:>3}. {s['name']}")
            return
        except typer.Exit:
            raise
        except Exception as e:
            raise fail(e, json_output, "moving segment") from e


@app.command("delete")
def delete_segment(
    segment_id: int = typer.Argument(..., help="Segment id"),
    yes: bool = typer.Option(False, "--yes", help="Confirm deletion (non-interactive)"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """Delete a segment and its assignments.

    Requires --yes to confirm deletion. Later segments move up by one.
    """
    if not yes:
        if json_output:
            echo_json(
                {
                    "status": "error",
                    "code": "CONFIRMATION_REQUIRED",
                    "message": "Deletion requires --yes confirmation",
                }
            )
        else:
            typer.echo("Deletion requires --yes confirmation", err=True)
        raise typer.Exit(1)

    with session() as db:
        try:
            result = _uc_segment_delete.delete_segment(db, segment_id=segment_id)
            if json_output:
                echo_json(result)
            else:
                typer.echo(f"Segment deleted: {result['id']}")
            return
        except typer.Exit:
            raise
        except Exception as e:
            raise fail(e, json_output, "deleting segment") from e
