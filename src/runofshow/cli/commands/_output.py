"""
Shared output helpers for command groups.

Commands print a payload either as indented JSON or as plain text, and map
exceptions to a stable error code before exiting with status 1.
"""

from __future__ import annotations

import json
from typing import Any

import typer

from ...infra.exceptions import (
    InvalidCopyRequestError,
    InvalidOrderingError,
    UnknownReferenceError,
    ValidationError,
)


def error_code(exc: Exception) -> str:
    # Most specific first: the ordering and copy errors are ValidationErrors too.
    if isinstance(exc, InvalidOrderingError):
        return "INVALID_ORDERING"
    if isinstance(exc, InvalidCopyRequestError):
        return "INVALID_COPY_REQUEST"
    if isinstance(exc, UnknownReferenceError):
        return "NOT_FOUND"
    if isinstance(exc, ValidationError):
        return "VALIDATION_ERROR"
    return "UNKNOWN_ERROR"


def echo_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2))


def fail(exc: Exception, json_output: bool, action: str) -> typer.Exit:
    """Report ``exc`` and return the Exit to raise.

    Known errors print their own message; anything else is prefixed with the
    action that failed.
    """
    code = error_code(exc)
    if json_output:
        payload: dict[str, Any] = {"status": "error", "code": code, "message": str(exc)}
        if isinstance(exc, InvalidCopyRequestError) and exc.violations:
            payload["violations"] = exc.violations
        echo_json(payload)
    elif code == "UNKNOWN_ERROR":
        typer.echo(f"Error {action}: {exc}", err=True)
    else:
        typer.echo(f"Error: {exc}", err=True)
    return typer.Exit(1)


def fail_message(code: str, message: str, json_output: bool, **extra: Any) -> typer.Exit:
    """Report an error condition that is a result rather than an exception."""
    if json_output:
        echo_json({"status": "error", "code": code, "message": message, **extra})
    else:
        typer.echo(f"Error: {message}", err=True)
    return typer.Exit(1)
