"""
Mock shell — universal test double for everything that shells out.

Records every command it receives and answers from a table of canned
results.  Binaries are "on PATH" when listed in ``present``; a canned
response can put more binaries on PATH once it runs, which is how an
install command is simulated.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field

from devutils.adapters.shell.command import Shell
from devutils.core.models.result import ExecErrorKind, ShellResult


@dataclass
class _Response:
    pattern: str
    result: ShellResult | Callable[[str], ShellResult]
    provides: tuple[str, ...] = ()
    paths: tuple[str, ...] = ()


@dataclass
class MockShell(Shell):
    """Shell that never touches the host.

    By default every command succeeds with empty output.  Responses are
    matched by substring, most recently registered first.
    """

    present: set[str] = field(default_factory=set)
    default: ShellResult = field(default_factory=ShellResult)
    files: set[str] = field(default_factory=set)

    def __post_init__(self) -> None:
        self.present = set(self.present)
        self.files = set(self.files)
        self._responses: list[_Response] = []
        self._call_log: list[str] = []

    @property
    def call_log(self) -> list[str]:
        """Every command this mock has received, in order."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    def reset(self) -> None:
        self._call_log.clear()

    # ── Configuration ───────────────────────────────────────────

    def set_response(
        self,
        pattern: str,
        result: ShellResult | Callable[[str], ShellResult] | None = None,
        *,
        stdout: str = "",
        code: int = 0,
        provides: Iterable[str] = (),
        paths: Iterable[str] = (),
    ) -> None:
        """Answer commands containing ``pattern``.

        Args:
            pattern: Substring to match against the command line.
            result: Full result (or a callable producing one). When
                omitted, one is built from ``stdout`` and ``code``.
            provides: Binaries that appear on PATH after a match.
            paths: Filesystem paths that appear after a match.
        """
        if result is None:
            result = ShellResult(
                stdout=stdout,
                code=code,
                stderr="" if code == 0 else f"mock failure: {pattern}",
                error=None if code == 0 else ExecErrorKind.FAILED,
            )
        self._responses.append(_Response(pattern, result, tuple(provides), tuple(paths)))

    def set_failure(self, pattern: str, stderr: str = "Mock failure", code: int = 1) -> None:
        self.set_response(
            pattern,
            ShellResult(stderr=stderr, code=code, error=ExecErrorKind.FAILED),
        )

    def ran(self, pattern: str) -> int:
        """How many recorded commands contain ``pattern``."""
        return sum(1 for cmd in self._call_log if pattern in cmd)

    # ── Shell interface ─────────────────────────────────────────

    def exec(
        self,
        command: str,
        cwd: str | None = None,
        env: Mapping[str, str] | None = None,
        timeout: float | None = None,
        max_buffer: int = 0,
    ) -> ShellResult:
        self._call_log.append(command)
        for response in reversed(self._responses):
            if response.pattern in command:
                self.present.update(response.provides)
                self.files.update(response.paths)
                if callable(response.result):
                    return response.result(command)
                return response.result
        return self.default

    def spawn_stream(
        self,
        args: Sequence[str],
        cwd: str | None = None,
        env: Mapping[str, str] | None = None,
        on_stdout: Callable[[str], None] | None = None,
        on_stderr: Callable[[str], None] | None = None,
    ) -> ShellResult:
        result = self.exec(" ".join(args), cwd=cwd, env=env)
        if on_stdout:
            for line in result.stdout.splitlines():
                on_stdout(line)
        if on_stderr:
            for line in result.stderr.splitlines():
                on_stderr(line)
        return result

    def run_interactive(self, command: str, cwd: str | None = None) -> int:
        return self.exec(command, cwd=cwd).code

    def which(self, executable: str) -> str | None:
        if executable in self.present:
            return f"/usr/bin/{executable}"
        return None

    def path_exists(self, path: str) -> bool:
        """Filesystem probe used by installers that look for app bundles."""
        return path in self.files
