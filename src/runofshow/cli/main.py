"""
Main CLI application using Typer with router-based command dispatch.

This module provides the operator command-line interface for runofshow,
calling usecases and outputting JSON when requested.
"""

from __future__ import annotations

import typer

from ..infra.logging import configure_logging
from .commands import assignment, crew, production, segment, template
from .router import get_router

app = typer.Typer(help="Run-of-show operator CLI")

router = get_router(app)

router.register("production", production.app, help_text="Production and timing operations")
router.register("segment", segment.app, help_text="Segment running order operations")
router.register("template", template.app, help_text="Default position template operations")
router.register("assignment", assignment.app, help_text="Segment crew assignment operations")
router.register("crew", crew.app, help_text="Production crew roster operations")


@app.callback()
def main(
    log_level: str | None = typer.Option(None, "--log-level", help="Override LOG_LEVEL"),
):
    """Run of show planning for live broadcasts."""
    configure_logging(log_level)


def cli():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    cli()
