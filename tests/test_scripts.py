"""
Tests for the shell-replacement scripts.

Scripts run against a fake platform context and a mock shell; file
operations use a real temp directory.
"""

import os
import time
from pathlib import Path

import pytest

from devutils.adapters.mock import MockShell
from devutils.core.models.platform import PlatformContext
from devutils.core.services.scripts import get_script, list_scripts
from devutils.core.services.scripts.base import Script
from devutils.core.services.scripts.git_backup import latest_backup, repo_name_from_url
from devutils.core.services.scripts.ll import SIX_MONTHS, format_mtime, long_listing
from devutils.core.services.scripts.search import compile_pattern, search_tree

UBUNTU_FILES = {"/etc/debian_version": "12", "/etc/os-release": "ID=ubuntu\n"}


class _Run:
    """Run a script and collect what it prints."""

    def __init__(self, name: str, ctx: PlatformContext, shell: MockShell | None = None, cwd=None,
                 confirm=None):
        self.out: list[str] = []
        self.err: list[str] = []
        self.shell = shell or MockShell()
        self.script = get_script(
            name,
            shell=self.shell,
            ctx=ctx,
            on_output=self.out.append,
            on_error=self.err.append,
            confirm=confirm,
            cwd=cwd,
        )

    def __call__(self, *args, **kwargs) -> int:
        return self.script.run(*args, **kwargs)


@pytest.fixture
def ubuntu_ctx(tmp_path: Path) -> PlatformContext:
    return PlatformContext.fake("linux", env={"HOME": str(tmp_path / "home")}, files=UBUNTU_FILES)


def test_registry():
    assert list_scripts() == [
        "delete-files", "docker-clean", "empty-trash", "git-backup", "hide-hidden-files",
        "ll", "ncu-update-all", "o", "org-by-date", "path", "s", "show-hidden-files",
    ]
    assert get_script("nope") is None


def test_script_must_define_portable_implementation():
    class Incomplete(Script):
        name = "incomplete"

    with pytest.raises(TypeError):
        Incomplete(MockShell())


# ── org-by-date ─────────────────────────────────────────────────


class TestOrgByDate:
    def test_moves_dated_files(self, tmp_path: Path, ubuntu_ctx):
        (tmp_path / "2024-01-15-notes.txt").write_text("a")
        (tmp_path / "report-2023-12-31.pdf").write_text("b")
        (tmp_path / "readme.md").write_text("c")

        run = _Run("org-by-date", ubuntu_ctx, cwd=tmp_path)
        assert run() == 0

        assert (tmp_path / "2024" / "01" / "15" / "2024-01-15-notes.txt").is_file()
        assert (tmp_path / "2023" / "12" / "31" / "report-2023-12-31.pdf").is_file()
        assert (tmp_path / "readme.md").is_file()
        assert "Organized 2 file(s), skipped 0." in run.out

    def test_never_overwrites(self, tmp_path: Path, ubuntu_ctx):
        target = tmp_path / "2024" / "01" / "15"
        target.mkdir(parents=True)
        (target / "2024-01-15.log").write_text("old")
        (tmp_path / "2024-01-15.log").write_text("new")

        run = _Run("org-by-date", ubuntu_ctx)
        assert run(str(tmp_path)) == 0
        assert (target / "2024-01-15.log").read_text() == "old"
        assert (tmp_path / "2024-01-15.log").is_file()

    def test_invalid_date_is_ignored(self, tmp_path: Path, ubuntu_ctx):
        (tmp_path / "2024-13-40-bad.txt").write_text("x")
        run = _Run("org-by-date", ubuntu_ctx, cwd=tmp_path)
        assert run() == 0
        assert (tmp_path / "2024-13-40-bad.txt").is_file()

    def test_not_a_directory(self, tmp_path: Path, ubuntu_ctx):
        run = _Run("org-by-date", ubuntu_ctx)
        assert run(str(tmp_path / "missing")) == 1
        assert "Usage: org-by-date [directory]" in run.err


# ── delete-files ────────────────────────────────────────────────


class TestDeleteFiles:
    def test_default_pattern_is_recursive(self, tmp_path: Path, ubuntu_ctx):
        (tmp_path / "a").mkdir()
        (tmp_path / "a" / "b").mkdir()
        (tmp_path / ".DS_Store").write_text("")
        (tmp_path / "a" / "b" / ".DS_Store").write_text("")
        (tmp_path / "keep.txt").write_text("")

        run = _Run("delete-files", ubuntu_ctx, cwd=tmp_path)
        assert run() == 0
        assert not (tmp_path / ".DS_Store").exists()
        assert not (tmp_path / "a" / "b" / ".DS_Store").exists()
        assert (tmp_path / "keep.txt").exists()
        assert "Deleted 2 file(s)." in run.out

    def test_custom_pattern(self, tmp_path: Path, ubuntu_ctx):
        (tmp_path / "x.log").write_text("")
        (tmp_path / "x.txt").write_text("")
        run = _Run("delete-files", ubuntu_ctx)
        assert run("*.log", str(tmp_path)) == 0
        assert not (tmp_path / "x.log").exists()
        assert (tmp_path / "x.txt").exists()

    def test_nothing_found(self, tmp_path: Path, ubuntu_ctx):
        run = _Run("delete-files", ubuntu_ctx, cwd=tmp_path)
        assert run() == 0
        assert "No files matching '*.DS_Store' found." in run.out


# ── path ────────────────────────────────────────────────────────


class TestPath:
    def test_one_entry_per_line(self):
        ctx = PlatformContext.fake("linux", env={"PATH": os.pathsep.join(["/usr/bin", "", "/bin"])})
        run = _Run("path", ctx)
        assert run() == 0
        assert run.out == ["/usr/bin", "/bin"]

    def test_empty_path(self):
        run = _Run("path", PlatformContext.fake("win32"))
        assert run() == 0
        assert run.out == ["PATH environment variable is not set or empty."]


# ── ll ──────────────────────────────────────────────────────────


class TestLongListing:
    def test_directory_listing(self, tmp_path: Path):
        (tmp_path / "b.txt").write_text("hello")
        (tmp_path / "a").mkdir()

        lines = long_listing(tmp_path)
        assert lines[0].startswith("total ")
        assert lines[1].startswith("d") and lines[1].endswith(" a")
        assert lines[2].startswith("-") and lines[2].endswith(" b.txt")
        assert " 5 " in lines[2]

    def test_single_file_has_no_total(self, tmp_path: Path):
        path = tmp_path / "one.txt"
        path.write_text("x")
        lines = long_listing(path)
        assert len(lines) == 1
        assert lines[0].endswith(" one.txt")

    def test_empty_directory(self, tmp_path: Path):
        assert long_listing(tmp_path) == ["total 0"]

    def test_mtime_format(self):
        mtime = time.mktime((2020, 6, 15, 12, 0, 0, 0, 0, -1))
        assert format_mtime(mtime, now=mtime + 60) == "Jun 15 12:00"
        assert format_mtime(mtime, now=mtime + SIX_MONTHS + 1) == "Jun 15  2020"

    def test_windows_uses_portable_listing(self, tmp_path: Path):
        (tmp_path / "file.txt").write_text("x")
        run = _Run("ll", PlatformContext.fake("win32"), cwd=tmp_path)
        assert run("-la") == 0
        assert run.out[0].startswith("total ")
        assert run.out[1].endswith(" file.txt")
        assert run.shell.call_count == 0

    def test_linux_runs_native_ls(self, tmp_path: Path, ubuntu_ctx):
        shell = MockShell(present={"ls"})
        run = _Run("ll", ubuntu_ctx, shell=shell, cwd=tmp_path)
        assert run("-a") == 0
        assert shell.call_log == ["ls -l --color=auto -a"]

    def test_missing_path(self, tmp_path: Path):
        run = _Run("ll", PlatformContext.fake("win32"), cwd=tmp_path)
        assert run("nope") == 1
        assert "No such file or directory" in run.err[0]


# ── s ───────────────────────────────────────────────────────────


class TestSearch:
    def _tree(self, root: Path) -> None:
        (root / "src").mkdir()
        (root / "node_modules").mkdir()
        (root / "src" / "app.py").write_text("import os\nMY_VARIABLE = 1\n")
        (root / "node_modules" / "lib.js").write_text("my_variable\n")
        (root / "blob.bin").write_bytes(b"my_variable\0\x01")

    def test_search_tree_skips_excluded_and_binary(self, tmp_path: Path):
        self._tree(tmp_path)
        hits = list(search_tree(tmp_path, compile_pattern("my_variable")))
        assert hits == [(os.path.join("src", "app.py"), 2, "MY_VARIABLE = 1")]

    def test_invalid_regex_is_literal(self):
        assert compile_pattern("a(b").search("xa(by")

    def test_portable_output(self, tmp_path: Path):
        self._tree(tmp_path)
        run = _Run("s", PlatformContext.fake("win32"), cwd=tmp_path)
        assert run("my_variable") == 0
        assert run.out[-1] == f"{os.path.join('src', 'app.py')}:2:MY_VARIABLE = 1"

    def test_no_matches(self, tmp_path: Path):
        run = _Run("s", PlatformContext.fake("win32"), cwd=tmp_path)
        assert run("nothing-here") == 0
        assert run.out[-1] == "No matches found."

    def test_empty_pattern_prints_usage(self, tmp_path: Path, ubuntu_ctx):
        run = _Run("s", ubuntu_ctx, cwd=tmp_path)
        assert run() == 1
        assert run.err[0] == "Usage: s <search-pattern>"

    def test_grep_piped_to_less(self, tmp_path: Path, ubuntu_ctx):
        shell = MockShell(present={"grep", "less"})
        run = _Run("s", ubuntu_ctx, shell=shell, cwd=tmp_path)
        assert run("TODO") == 0
        command = shell.call_log[0]
        assert command.startswith("grep --color=always TODO")
        assert '--exclude-dir="node_modules"' in command
        assert command.endswith("| less --no-init --raw-control-chars")

    def test_grep_failure(self, tmp_path: Path, ubuntu_ctx):
        shell = MockShell(present={"grep"})
        shell.set_response("grep", code=2)
        run = _Run("s", ubuntu_ctx, shell=shell, cwd=tmp_path)
        assert run("x") == 1


# ── docker-clean ────────────────────────────────────────────────


class TestDockerClean:
    def test_requires_docker(self, ubuntu_ctx):
        run = _Run("docker-clean", ubuntu_ctx)
        assert run(force=True) == 1

    def test_declined_confirmation(self, ubuntu_ctx):
        shell = MockShell(present={"docker"})
        run = _Run("docker-clean", ubuntu_ctx, shell=shell, confirm=lambda _p: False)
        assert run() == 0
        assert "Aborted." in run.out
        assert shell.ran("docker rm") == 0

    def test_force_removes_everything(self, ubuntu_ctx):
        shell = MockShell(present={"docker"})
        shell.set_response("docker ps -aq", stdout="c1\nc2\n")
        shell.set_response("docker images -aq", stdout="i1\ni1\ni2\n")
        run = _Run("docker-clean", ubuntu_ctx, shell=shell)
        assert run(force=True) == 0
        assert shell.ran("docker rm -f c1 c2") == 1
        assert shell.ran("docker rmi -f i1 i2") == 1
        assert "No volumes to remove." in run.out


# ── hidden files ────────────────────────────────────────────────


class TestHiddenFiles:
    def test_macos_finder(self):
        shell = MockShell()
        run = _Run("show-hidden-files", PlatformContext.fake("darwin"), shell=shell)
        assert run() == 0
        assert shell.call_log == [
            "defaults write com.apple.finder AppleShowAllFiles -bool true",
            "killall Finder",
        ]

    def test_windows_registry(self):
        shell = MockShell()
        run = _Run("hide-hidden-files", PlatformContext.fake("win32"), shell=shell)
        assert run() == 0
        assert "/v Hidden /t REG_DWORD /d 2 /f" in shell.call_log[0]

    def test_linux_without_gsettings(self, ubuntu_ctx):
        run = _Run("show-hidden-files", ubuntu_ctx)
        assert run() == 1


# ── empty-trash ─────────────────────────────────────────────────


class TestEmptyTrash:
    def test_freedesktop_trash(self, tmp_path: Path, ubuntu_ctx):
        files = tmp_path / "home" / ".local" / "share" / "Trash" / "files"
        files.mkdir(parents=True)
        (files / "old.txt").write_text("x")
        (files / "folder").mkdir()

        run = _Run("empty-trash", ubuntu_ctx)
        assert run() == 0
        assert list(files.iterdir()) == []
        assert "Trash emptied. Removed 2 item(s)." in run.out

    def test_already_empty(self, ubuntu_ctx):
        run = _Run("empty-trash", ubuntu_ctx)
        assert run() == 0
        assert run.out == ["Trash is already empty."]

    def test_windows_falls_back_to_com(self):
        shell = MockShell()
        shell.set_failure("Clear-RecycleBin")
        run = _Run("empty-trash", PlatformContext.fake("win32"), shell=shell)
        assert run() == 0
        assert shell.ran("ComObject Shell.Application") == 1


# ── git-backup ──────────────────────────────────────────────────


class TestGitBackup:
    URL = "git@github.com:me/tool.git"

    def test_repo_name(self):
        assert repo_name_from_url(self.URL) == "tool"
        assert repo_name_from_url("https://github.com/me/tool/") == "tool"

    def test_latest_backup(self, tmp_path: Path):
        for stamp in ("20240101-000000", "20240301-120000", "20231231-235959"):
            (tmp_path / f"tool_{stamp}.zip").write_text("")
        (tmp_path / "tool-extra_20250101-000000.zip").write_text("")
        assert latest_backup(tmp_path, "tool").name == "tool_20240301-120000.zip"

    def test_missing_target_prints_usage(self, ubuntu_ctx):
        run = _Run("git-backup", ubuntu_ctx, shell=MockShell(present={"git", "zip"}))
        assert run() == 1
        assert "Usage: git-backup <target-folder> [ssh-repo]" in run.err

    def test_unchanged_head_is_skipped(self, tmp_path: Path, ubuntu_ctx):
        (tmp_path / "tool_20240101-000000.zip").write_text("")
        shell = MockShell(present={"git", "zip"})
        shell.set_response("rev-parse HEAD", stdout="abc123def4567890\n")

        run = _Run("git-backup", ubuntu_ctx, shell=shell)
        assert run(str(tmp_path), self.URL) == 0
        assert shell.ran("git clone --mirror") == 1
        assert shell.ran("unzip -q") == 1
        assert shell.ran("zip -qr") == 0
        assert any(line.startswith("No changes since tool_20240101-000000.zip") for line in run.out)

    def test_new_backup(self, tmp_path: Path, ubuntu_ctx):
        shell = MockShell(present={"git", "zip"})
        run = _Run("git-backup", ubuntu_ctx, shell=shell)
        assert run(str(tmp_path / "backups"), self.URL) == 0
        assert shell.ran("zip -qr") == 1
        assert run.out[-1].startswith("Backup saved to ")
        assert (tmp_path / "backups").is_dir()


# ── o / ncu-update-all ──────────────────────────────────────────


class TestOpen:
    def test_macos_open(self, tmp_path: Path):
        shell = MockShell()
        run = _Run("o", PlatformContext.fake("darwin"), shell=shell, cwd=tmp_path)
        assert run() == 0
        assert shell.call_log == [f"open {tmp_path}"]

    def test_missing_path(self, tmp_path: Path):
        run = _Run("o", PlatformContext.fake("darwin"), cwd=tmp_path)
        assert run("nope") == 1


class TestNcuUpdateAll:
    def test_requires_ncu(self, tmp_path: Path, ubuntu_ctx):
        assert _Run("ncu-update-all", ubuntu_ctx, cwd=tmp_path)() == 1

    def test_updates_each_manifest(self, tmp_path: Path, ubuntu_ctx):
        (tmp_path / "app").mkdir()
        (tmp_path / "app" / "package.json").write_text("{}")
        (tmp_path / "node_modules" / "dep").mkdir(parents=True)
        (tmp_path / "node_modules" / "dep" / "package.json").write_text("{}")
        (tmp_path / "bower.json").write_text("{}")

        shell = MockShell(present={"ncu"})
        run = _Run("ncu-update-all", ubuntu_ctx, shell=shell, cwd=tmp_path)
        assert run() == 0
        assert shell.ran("ncu -a -u") == 2
        assert shell.ran("-m bower") == 1
