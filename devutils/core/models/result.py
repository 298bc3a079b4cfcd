"""
Result models — what shell and package-manager calls hand back.

Neither layer raises on command failure.  Callers branch on ``ok`` /
``success`` instead of wrapping every call in try/except.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class ExecErrorKind(str, Enum):
    """Why a command did not exit cleanly."""

    NOT_FOUND = "not_found"   # executable could not be started
    TIMEOUT = "timeout"
    FAILED = "failed"         # ran, exited non-zero or errored


class ShellResult(BaseModel):
    """Captured output of one shell invocation."""

    stdout: str = ""
    stderr: str = ""
    code: int = 0
    error: ExecErrorKind | None = None

    @property
    def ok(self) -> bool:
        return self.code == 0

    @property
    def output(self) -> str:
        """stdout when present, otherwise stderr."""
        return self.stdout or self.stderr


class PackageResult(BaseModel):
    """Outcome of a package-manager operation."""

    success: bool
    output: str = ""

    @classmethod
    def from_shell(cls, result: ShellResult, ok_codes: tuple[int, ...] = (0,)) -> PackageResult:
        return cls(success=result.code in ok_codes, output=result.output)
