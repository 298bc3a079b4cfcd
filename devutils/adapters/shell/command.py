"""
Shell command facade — run native tools and capture their output.

This is the most fundamental adapter: every package manager, installer
and script reaches the host through it.  Nothing here raises on command
failure.  Failures come back in the ``ShellResult`` (``code`` plus an
``ExecErrorKind``) so callers can write ``if not result.ok:``.
"""

from __future__ import annotations

import logging
import os
import subprocess
import sys
import threading
import time
from collections.abc import Callable, Mapping, Sequence

from devutils.core.models.result import ExecErrorKind, ShellResult

logger = logging.getLogger(__name__)

DEFAULT_MAX_BUFFER = 10 * 1024 * 1024
DEFAULT_PATHEXT = ".COM;.EXE;.BAT;.CMD"

EXIT_NOT_FOUND = 127
EXIT_TIMEOUT = 124


def _merge_env(env: Mapping[str, str] | None) -> dict[str, str] | None:
    if env is None:
        return None
    merged = dict(os.environ)
    merged.update(env)
    return merged


class Shell:
    """Execute commands and probe PATH.

    Instances are cheap; pass a ``MockShell`` wherever a ``Shell`` is
    accepted to keep tests off the host.
    """

    # ── Capture ─────────────────────────────────────────────────

    def exec(
        self,
        command: str,
        cwd: str | None = None,
        env: Mapping[str, str] | None = None,
        timeout: float | None = None,
        max_buffer: int = DEFAULT_MAX_BUFFER,
    ) -> ShellResult:
        """Run ``command`` through the system shell and capture output.

        Args:
            command: Shell command line.
            cwd: Working directory.
            env: Extra environment variables (merged over ``os.environ``).
            timeout: Seconds before the process is killed.
            max_buffer: Output beyond this many characters is dropped.

        Returns:
            ShellResult. Never raises.
        """
        logger.debug("exec: %s (cwd=%s)", command, cwd)
        start = time.monotonic()
        try:
            proc = subprocess.run(
                command,
                shell=True,
                cwd=cwd,
                env=_merge_env(env),
                capture_output=True,
                text=True,
                errors="replace",
                timeout=timeout,
            )
        except subprocess.TimeoutExpired:
            logger.debug("exec timed out after %ss: %s", timeout, command)
            return ShellResult(
                stderr=f"Command timed out after {timeout}s",
                code=EXIT_TIMEOUT,
                error=ExecErrorKind.TIMEOUT,
            )
        except OSError as e:
            return ShellResult(stderr=str(e), code=1, error=ExecErrorKind.FAILED)

        elapsed_ms = int((time.monotonic() - start) * 1000)
        logger.debug("exec: exit %d in %dms: %s", proc.returncode, elapsed_ms, command)

        error = None
        if proc.returncode == EXIT_NOT_FOUND:
            error = ExecErrorKind.NOT_FOUND
        elif proc.returncode != 0:
            error = ExecErrorKind.FAILED

        return ShellResult(
            stdout=(proc.stdout or "")[:max_buffer],
            stderr=(proc.stderr or "")[:max_buffer],
            code=proc.returncode,
            error=error,
        )

    def exec_sync(
        self,
        command: str,
        cwd: str | None = None,
        env: Mapping[str, str] | None = None,
        timeout: float | None = None,
    ) -> str:
        """Best-effort capture: trimmed stdout, or ``""`` on any failure."""
        result = self.exec(command, cwd=cwd, env=env, timeout=timeout)
        if not result.ok:
            return ""
        return result.stdout.strip()

    # ── Streaming ───────────────────────────────────────────────

    def spawn_stream(
        self,
        args: Sequence[str],
        cwd: str | None = None,
        env: Mapping[str, str] | None = None,
        on_stdout: Callable[[str], None] | None = None,
        on_stderr: Callable[[str], None] | None = None,
    ) -> ShellResult:
        """Run ``args`` without a shell, streaming output line by line.

        Every line is handed to the matching callback as it arrives and
        is also captured into the returned result.
        """
        logger.debug("spawn: %s (cwd=%s)", " ".join(args), cwd)
        try:
            proc = subprocess.Popen(
                list(args),
                cwd=cwd,
                env=_merge_env(env),
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                errors="replace",
            )
        except FileNotFoundError as e:
            return ShellResult(stderr=str(e), code=EXIT_NOT_FOUND, error=ExecErrorKind.NOT_FOUND)
        except OSError as e:
            return ShellResult(stderr=str(e), code=1, error=ExecErrorKind.FAILED)

        out_lines: list[str] = []
        err_lines: list[str] = []

        def _pump(stream, sink: list[str], callback: Callable[[str], None] | None) -> None:
            for line in stream:
                sink.append(line)
                if callback:
                    callback(line.rstrip("\n"))
            stream.close()

        err_thread = threading.Thread(
            target=_pump, args=(proc.stderr, err_lines, on_stderr), daemon=True,
        )
        err_thread.start()
        _pump(proc.stdout, out_lines, on_stdout)
        err_thread.join()
        code = proc.wait()

        return ShellResult(
            stdout="".join(out_lines),
            stderr="".join(err_lines),
            code=code,
            error=None if code == 0 else ExecErrorKind.FAILED,
        )

    def run_interactive(self, command: str, cwd: str | None = None) -> int:
        """Run through the shell with inherited stdio; return the exit code."""
        logger.debug("interactive: %s", command)
        try:
            return subprocess.run(command, shell=True, cwd=cwd).returncode
        except OSError as e:
            logger.warning("Cannot run %s: %s", command, e)
            return 1

    # ── PATH probing ────────────────────────────────────────────

    def which(self, executable: str) -> str | None:
        """Locate ``executable`` on PATH.

        On Windows each ``PATHEXT`` suffix is tried; on POSIX the file
        must carry the executable bit.
        """
        if not executable:
            return None

        windows = sys.platform == "win32"
        if windows:
            pathext = os.environ.get("PATHEXT") or DEFAULT_PATHEXT
            suffixes = [""] + [ext for ext in pathext.split(";") if ext]
        else:
            suffixes = [""]

        if os.sep in executable or (os.altsep and os.altsep in executable):
            candidates = [executable]
        else:
            dirs = [d for d in os.environ.get("PATH", "").split(os.pathsep) if d]
            candidates = [os.path.join(d, executable) for d in dirs]

        for base in candidates:
            for suffix in suffixes:
                path = base + suffix
                if not os.path.isfile(path):
                    continue
                if windows or os.access(path, os.X_OK):
                    return path
        return None

    def command_exists(self, command: str) -> bool:
        return self.which(command) is not None

    def path_exists(self, path: str) -> bool:
        """Filesystem probe for app bundles and fixed install locations."""
        return os.path.exists(os.path.expandvars(path))


# ── Module-level convenience ────────────────────────────────────

_default = Shell()


def get_shell() -> Shell:
    """The process-wide default shell."""
    return _default


def exec(command: str, **kwargs) -> ShellResult:  # noqa: A001
    return _default.exec(command, **kwargs)


def exec_sync(command: str, **kwargs) -> str:
    return _default.exec_sync(command, **kwargs)


def which(executable: str) -> str | None:
    return _default.which(executable)


def command_exists(command: str) -> bool:
    return _default.command_exists(command)
