"""
``s`` — recursive, case-insensitive text search from the current directory.

Uses ``grep`` piped to ``less`` when available (``ggrep`` on macOS if
installed) and a pure-Python walker otherwise.  Both skip the usual
dependency and build directories.
"""

from __future__ import annotations

import os
import re
import shlex
from collections.abc import Iterator
from pathlib import Path

from devutils.core.services.scripts.base import Script, ScriptUsageError

EXCLUDE_DIRS = (
    ".git",
    "node_modules",
    ".next",
    "dist",
    "build",
    ".cache",
    "coverage",
    "__pycache__",
    ".pytest_cache",
    "vendor",
    "target",
)

USAGE = """\
Usage: s <search-pattern>

Recursively searches for text matching the pattern
in the current directory, excluding .git and node_modules.

Examples:
  s "my_variable"
  s "TODO"
  s "function.*async\""""


def compile_pattern(pattern: str) -> re.Pattern:
    """Case-insensitive regex; an invalid regex is searched literally."""
    try:
        return re.compile(pattern, re.IGNORECASE)
    except re.error:
        return re.compile(re.escape(pattern), re.IGNORECASE)


def search_tree(root: Path, regex: re.Pattern) -> Iterator[tuple[str, int, str]]:
    """Yield ``(relative_path, line_number, line)`` for every matching line.

    Files that cannot be read or contain NUL bytes (binaries) are skipped.
    """
    for current, dirs, files in os.walk(root):
        dirs[:] = sorted(d for d in dirs if d not in EXCLUDE_DIRS)
        for filename in sorted(files):
            path = Path(current) / filename
            try:
                content = path.read_text(encoding="utf-8", errors="replace")
            except OSError:
                continue
            if "\0" in content:
                continue
            relative = os.path.relpath(path, root)
            for number, line in enumerate(content.splitlines(), start=1):
                if regex.search(line):
                    yield relative, number, line


class SearchScript(Script):
    name = "s"
    description = "Search file contents recursively (case-insensitive)"
    usage = USAGE

    def _pattern(self, words: tuple[str, ...]) -> str:
        pattern = " ".join(words).strip()
        if not pattern:
            raise ScriptUsageError()
        return pattern

    def grep_command(self, grep: str, pattern: str, devnull: str = "/dev/null") -> str:
        excludes = " ".join(f'--exclude-dir="{d}"' for d in EXCLUDE_DIRS)
        command = (
            f"{grep} --color=always {shlex.quote(pattern)} {excludes} "
            f"--ignore-case --recursive . 2>{devnull}"
        )
        if self.shell.command_exists("less"):
            command += " | less --no-init --raw-control-chars"
        return command

    def _run_grep(self, command: str) -> int:
        code = self.shell.run_interactive(command, cwd=str(self.cwd))
        # grep exits 1 for "no matches"
        if code > 1:
            self.error("Error: Search failed.")
            return 1
        return 0

    def run_portable(self, *words: str) -> int:
        regex = compile_pattern(self._pattern(words))
        found = False
        for relative, number, line in search_tree(self.cwd, regex):
            found = True
            self.echo(f"{relative}:{number}:{line}")
        if not found:
            self.echo("No matches found.")
        return 0

    def run_ubuntu(self, *words: str) -> int:
        pattern = self._pattern(words)
        if not self.shell.command_exists("grep"):
            return self.run_portable(*words)
        return self._run_grep(self.grep_command("grep", pattern))

    def run_macos(self, *words: str) -> int:
        pattern = self._pattern(words)
        grep = "ggrep" if self.shell.command_exists("ggrep") else "grep"
        return self._run_grep(self.grep_command(grep, pattern))

    def run_gitbash(self, *words: str) -> int:
        return self.run_ubuntu(*words)

    def run_windows(self, *words: str) -> int:
        pattern = self._pattern(words)
        if self.shell.command_exists("grep"):
            return self._run_grep(self.grep_command("grep", pattern, devnull="nul"))
        self.echo("Note: Using built-in search (install Git for Windows for faster grep-based search)")
        return self.run_portable(*words)
