from __future__ import annotations

import typer

from ...infra.uow import session
from ...usecases import assignment_add as _uc_assignment_add
from ...usecases import assignment_copy as _uc_assignment_copy
from ...usecases import assignment_delete as _uc_assignment_delete
from ...usecases import assignment_list as _uc_assignment_list
from ...usecases import crew_candidates as _uc_crew_candidates
from ._output import echo_json, fail

app = typer.Typer(name="assignment", help="Segment crew assignment operations")


@app.command("list")
def list_assignments(
    segment_id: int = typer.Argument(..., help="Segment id"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """List the effective crew of a segment.

    Production-wide bindings are shown first, then the segment's own rows.
    """
    with session() as db:
        try:
            result = _uc_assignment_list.list_effective_assignments(db, segment_id=segment_id)
            if json_output:
                echo_json({"status": "ok", **result})
            elif not result["assignments"]:
                typer.echo("No assignments")
            else:
                for a in result["assignments"]:
                    scope = "production" if a["source"] == "production" else f"row {a['row_id']}"
                    typer.echo(f"  {a['position_name']}: {a['person_name']}  ({scope})")
            return
        except typer.Exit:
            raise
        except Exception as e:
            raise fail(e, json_output, "listing assignments") from e


@app.command("add")
def add_assignment(
    segment_id: int = typer.Argument(..., help="Segment id"),
    person_id: int = typer.Option(..., "--person", help="Person id"),
    position_id: int = typer.Option(..., "--position", help="Position id"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """Assign a person to a position for one segment."""
    with session() as db:
        try:
            result = _uc_assignment_add.add_segment_assignment(
                db, segment_id=segment_id, person_id=person_id, position_id=position_id
            )
            if json_output:
                echo_json({"status": "ok", "assignment": result})
            else:
                typer.echo(f"Assignment created: {result['id']}")
            return
        except typer.Exit:
            raise
        except Exception as e:
            raise fail(e, json_output, "creating assignment") from e


@app.command("remove")
def remove_assignment(
    segment_id: int = typer.Argument(..., help="Segment id"),
    assignment_id: int = typer.Argument(..., help="Assignment row id"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """Remove one assignment row from a segment."""
    with session() as db:
        try:
            result = _uc_assignment_delete.remove_segment_assignment(
                db, segment_id=segment_id, assignment_id=assignment_id
            )
            if json_output:
                echo_json(result)
            else:
                typer.echo(f"Assignment removed: {result['id']}")
            return
        except typer.Exit:
            raise
        except Exception as e:
            raise fail(e, json_output, "removing assignment") from e


@app.command("copy")
def copy_assignments(
    source_segment_id: int = typer.Argument(..., help="Segment to copy from"),
    targets: list[int] = typer.Option(..., "--to", help="Target segment id; repeat for more"),
    mode: str = typer.Option("merge", "--mode", help="merge or overwrite"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """Copy a segment's assignments onto other segments.

    merge adds the (person, position) pairs a target does not have yet;
    overwrite replaces each target's rows. Exits 1 when any target failed.

    Examples:
        runofshow assignment copy 12 --to 13 --to 14
        runofshow assignment copy 12 --to 15 --mode overwrite --json
    """
    with session() as db:
        try:
            report = _uc_assignment_copy.copy_assignments(
                db, source_segment_id=source_segment_id, target_segment_ids=targets, mode=mode
            )
        except Exception as e:
            raise fail(e, json_output, "copying assignments") from e

    if json_output:
        echo_json(report)
    else:
        for target in report["targets"]:
            if target["ok"]:
                typer.echo(
                    f"  segment {target['segment_id']}: "
                    f"+{target['created']} -{target['deleted']}"
                )
            else:
                typer.echo(f"  segment {target['segment_id']}: FAILED {target['error']}", err=True)
        typer.echo(f"Copied: {report['created']} created, {report['deleted']} deleted")
    if report["status"] != "ok":
        raise typer.Exit(1)


@app.command("candidates")
def list_candidates(
    segment_id: int = typer.Argument(..., help="Segment id"),
    position_id: int = typer.Option(..., "--position", help="Position id"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """List crew of the production who have the skill a position needs."""
    with session() as db:
        try:
            result = _uc_crew_candidates.list_candidates(
                db, segment_id=segment_id, position_id=position_id
            )
            if json_output:
                echo_json({"status": "ok", **result})
            elif not result["candidates"]:
                typer.echo("No eligible crew")
            else:
                for c in result["candidates"]:
                    typer.echo(f"  {c['name']}  id={c['person_id']}")
            return
        except typer.Exit:
            raise
        except Exception as e:
            raise fail(e, json_output, "listing candidates") from e
