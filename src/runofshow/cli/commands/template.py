from __future__ import annotations

import typer

from ...infra.uow import session
from ...usecases import template_show as _uc_template_show
from ...usecases import template_update as _uc_template_update
from ._output import echo_json, fail

app = typer.Typer(name="template", help="Default position template operations")


def _echo_positions(positions: list[dict]) -> None:
    if not positions:
        typer.echo("  (no positions)")
    for p in positions:
        skill = f" [{p['required_skill_code']}]" if p.get("required_skill_code") else ""
        typer.echo(f"  {p['order']:>3}. {p['name']}{skill}  id={p['position_id']}")


@app.command("show")
def show_template(
    name: str | None = typer.Argument(None, help="Template name; 'Algemeen' is the global template"),
    segment_id: int | None = typer.Option(
        None, "--segment", help="Resolve the expected positions of this segment instead"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """Show a template, or the expected positions resolved for a segment.

    With --segment the segment's own template is used when it has one, the
    global template otherwise.

    Examples:
        runofshow template show Voorbeschouwing
        runofshow template show --segment 12
    """
    if (name is None) == (segment_id is None):
        typer.echo("Give either a template name or --segment", err=True)
        raise typer.Exit(1)

    with session() as db:
        try:
            if segment_id is not None:
                result = _uc_template_show.show_default_positions(db, segment_id=segment_id)
            else:
                result = _uc_template_show.show_template(db, segment_name=name)
            if json_output:
                echo_json({"status": "ok", **result})
            else:
                typer.echo(f"{result['segment_name']}:")
                _echo_positions(result["positions"])
            return
        except typer.Exit:
            raise
        except Exception as e:
            raise fail(e, json_output, "showing template") from e


@app.command("set")
def set_template(
    name: str = typer.Argument(..., help="Template name; 'Algemeen' is the global template"),
    positions: list[int] = typer.Option(
        [], "--position", help="Position id; repeat in slot order"
    ),
    clear: bool = typer.Option(False, "--clear", help="Remove every slot of the template"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """Replace a template with the given positions, in order.

    Examples:
        runofshow template set Wedstrijd --position 3 --position 1 --position 7
        runofshow template set Algemeen --clear
    """
    if not positions and not clear:
        typer.echo("Give at least one --position, or --clear", err=True)
        raise typer.Exit(1)

    slots = [{"position_id": p, "order": i} for i, p in enumerate(positions, start=1)]
    with session() as db:
        try:
            result = _uc_template_update.replace_template(db, segment_name=name, positions=slots)
            if json_output:
                echo_json({"status": "ok", **result})
            else:
                typer.echo(f"Template updated: {result['segment_name']}")
                _echo_positions(result["positions"])
            return
        except typer.Exit:
            raise
        except Exception as e:
            raise fail(e, json_output, "updating template") from e


@app.command("names")
def list_names(
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """List every configured template name."""
    with session() as db:
        try:
            result = _uc_template_show.list_template_names(db)
            if json_output:
                echo_json({"status": "ok", **result})
            elif not result["items"]:
                typer.echo("No templates configured")
            else:
                for item in result["items"]:
                    typer.echo(f"  {item}")
            return
        except typer.Exit:
            raise
        except Exception as e:
            raise fail(e, json_output, "listing templates") from e
