"""
``ll`` — long directory listing.

Native ``ls -l`` where available (GNU ``--color=auto`` on Linux and Git
Bash, plain BSD ``ls -l`` on macOS).  Windows gets a pure-Python
listing in the same shape: a ``total N`` header (1K blocks) followed by
one line per entry.
"""

from __future__ import annotations

import os
import shlex
import stat
import time
from pathlib import Path

from devutils.core.services.scripts.base import Script

SIX_MONTHS = 6 * 30 * 24 * 60 * 60


def format_mode(mode: int) -> str:
    """``drwxr-xr-x`` style permission string."""
    return stat.filemode(mode)


def format_mtime(mtime: float, now: float | None = None) -> str:
    """``Jan 15 09:30`` for recent files, ``Jan 15  2023`` for older ones."""
    now = time.time() if now is None else now
    moment = time.localtime(mtime)
    day = f"{time.strftime('%b', moment)} {moment.tm_mday:>2}"
    if now - mtime < SIX_MONTHS:
        return f"{day} {time.strftime('%H:%M', moment)}"
    return f"{day} {moment.tm_year:>5}"


def _owner(st: os.stat_result) -> tuple[str, str]:
    try:
        import grp
        import pwd
    except ImportError:
        return "owner", "group"
    try:
        user = pwd.getpwuid(st.st_uid).pw_name
    except KeyError:
        user = str(st.st_uid)
    try:
        group = grp.getgrgid(st.st_gid).gr_name
    except KeyError:
        group = str(st.st_gid)
    return user, group


def long_listing(path: Path, now: float | None = None) -> list[str]:
    """Lines of a long listing for ``path`` (a directory or a single file).

    Raises:
        OSError: If ``path`` cannot be read.
    """
    single = not path.is_dir()
    if single:
        entries = [(path.name, path)]
    else:
        entries = sorted(((p.name, p) for p in path.iterdir()), key=lambda e: e[0].lower())

    rows = []
    blocks = 0
    for name, entry in entries:
        try:
            st = entry.lstat()
        except OSError:
            continue
        blocks += getattr(st, "st_blocks", None) or -(-st.st_size // 512)
        if stat.S_ISLNK(st.st_mode):
            try:
                name = f"{name} -> {os.readlink(entry)}"
            except OSError:
                pass
        user, group = _owner(st)
        rows.append((format_mode(st.st_mode), str(st.st_nlink), user, group,
                     str(st.st_size), format_mtime(st.st_mtime, now), name))

    if not rows:
        return [] if single else ["total 0"]

    links_w = max(len(r[1]) for r in rows)
    user_w = max(len(r[2]) for r in rows)
    group_w = max(len(r[3]) for r in rows)
    size_w = max(len(r[4]) for r in rows)
    lines = [] if single else [f"total {blocks // 2}"]
    for mode, links, user, group, size, mtime, name in rows:
        lines.append(
            f"{mode} {links:>{links_w}} {user:<{user_w}} {group:<{group_w}} "
            f"{size:>{size_w}} {mtime} {name}"
        )
    return lines


class LongListScript(Script):
    name = "ll"
    description = "Long directory listing"
    usage = "Usage: ll [path]"

    def _ls(self, flags: list[str], args: tuple[str, ...]) -> int:
        if not self.shell.command_exists("ls"):
            return self.run_portable(*args)
        command = " ".join(["ls", *flags, *(shlex.quote(a) for a in args)])
        return self.shell.run_interactive(command, cwd=str(self.cwd))

    def run_portable(self, *args: str) -> int:
        paths = [a for a in args if not a.startswith("-")]
        target_arg = paths[0] if paths else "."
        target = self.resolve(target_arg)
        if not target.exists() and not target.is_symlink():
            self.error(f"ls: cannot access '{target_arg}': No such file or directory")
            return 1
        try:
            lines = long_listing(target)
        except OSError as e:
            self.error(f"ls: cannot open directory '{target_arg}': {e}")
            return 1
        for line in lines:
            self.echo(line)
        return 0

    def run_macos(self, *args: str) -> int:
        return self._ls(["-l"], args)

    def run_ubuntu(self, *args: str) -> int:
        return self._ls(["-l", "--color=auto"], args)

    def run_gitbash(self, *args: str) -> int:
        return self.run_ubuntu(*args)
