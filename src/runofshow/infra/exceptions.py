"""
Custom exceptions for runofshow operations.

Conditions callers are expected to branch on in normal operation (an anchor
that is not configured yet, a copy that failed for some targets) are typed
results elsewhere, not exceptions. See core.timeline.NoAnchorConfigured and
core.copy_plan.CopyReport.
"""


class RunOfShowError(Exception):
    """Base exception for all runofshow errors."""

    pass


class ValidationError(RunOfShowError):
    """Raised when validation fails."""

    pass


class InvalidOrderingError(ValidationError):
    """Raised when a segment position is out of range or the order has gaps or duplicates."""

    def __init__(self, message: str, production_id: int | None = None):
        super().__init__(message)
        self.production_id = production_id


class InvalidCopyRequestError(ValidationError):
    """Raised when a copy request is rejected before any write."""

    def __init__(self, message: str, violations: list[str] | None = None):
        super().__init__(message)
        self.violations = violations or []

    def __str__(self) -> str:
        if self.violations:
            return f"{self.args[0]}: {'; '.join(self.violations)}"
        return self.args[0]


class UnknownReferenceError(RunOfShowError):
    """Raised when a referenced production, segment, position, or person does not exist."""

    def __init__(self, kind: str, ref_id: object):
        super().__init__(f"{kind.capitalize()} '{ref_id}' not found")
        self.kind = kind
        self.ref_id = ref_id
