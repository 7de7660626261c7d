from __future__ import annotations

import typer

from ...infra.uow import session
from ...usecases import crew_add as _uc_crew_add
from ...usecases import crew_remove as _uc_crew_remove
from ._output import echo_json, fail

app = typer.Typer(name="crew", help="Production crew roster operations")


@app.command("attach")
def attach_person(
    production_id: int = typer.Option(..., "--production", help="Production id"),
    person_id: int = typer.Option(..., "--person", help="Person id"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """Put a person on the crew roster of a production.

    Only rostered people are offered as candidates for positions.
    """
    with session() as db:
        try:
            result = _uc_crew_add.attach_person(
                db, production_id=production_id, person_id=person_id
            )
            if json_output:
                echo_json({"status": "ok", **result})
            elif result["attached"]:
                typer.echo(f"Person {person_id} added to production {production_id}")
            else:
                typer.echo(f"Person {person_id} is already on production {production_id}")
            return
        except typer.Exit:
            raise
        except Exception as e:
            raise fail(e, json_output, "attaching crew member") from e


@app.command("add-position")
def add_position(
    production_id: int = typer.Option(..., "--production", help="Production id"),
    person_id: int = typer.Option(..., "--person", help="Person id"),
    position_id: int = typer.Option(..., "--position", help="Position id"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """Bind a person to a position for every segment of a production."""
    with session() as db:
        try:
            result = _uc_crew_add.add_person_position(
                db, production_id=production_id, person_id=person_id, position_id=position_id
            )
            if json_output:
                echo_json({"status": "ok", "binding": result})
            else:
                typer.echo(f"Production-wide binding created: {result['id']}")
            return
        except typer.Exit:
            raise
        except Exception as e:
            raise fail(e, json_output, "binding crew member") from e


@app.command("remove-position")
def remove_position(
    production_id: int = typer.Option(..., "--production", help="Production id"),
    binding_id: int = typer.Argument(..., help="Production-wide binding id"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """Remove a production-wide binding. Segment rows are not touched."""
    with session() as db:
        try:
            result = _uc_crew_remove.remove_person_position(
                db, production_id=production_id, binding_id=binding_id
            )
            if json_output:
                echo_json(result)
            else:
                typer.echo(f"Production-wide binding removed: {result['id']}")
            return
        except typer.Exit:
            raise
        except Exception as e:
            raise fail(e, json_output, "removing binding") from e
