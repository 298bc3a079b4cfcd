"""``delete-files`` — recursively delete files matching a glob pattern."""

from __future__ import annotations

from devutils.core.services.scripts.base import Script, ScriptUsageError

DEFAULT_PATTERN = "*.DS_Store"


class DeleteFilesScript(Script):
    name = "delete-files"
    description = "Recursively delete files matching a pattern (default: *.DS_Store)"
    usage = "Usage: delete-files [pattern] [directory]"

    def run_portable(self, pattern: str | None = None, directory: str | None = None) -> int:
        pattern = pattern or DEFAULT_PATTERN
        root = self.resolve(directory)
        if not root.is_dir():
            raise ScriptUsageError(f"Error: '{root}' is not a directory.")

        deleted = failed = 0
        for path in sorted(root.rglob(pattern)):
            if not path.is_file() and not path.is_symlink():
                continue
            try:
                path.unlink()
            except OSError as e:
                self.error(f"Could not delete {path}: {e}")
                failed += 1
                continue
            self.echo(f"Deleted: {path.relative_to(root)}")
            deleted += 1

        if deleted == 0 and failed == 0:
            self.echo(f"No files matching '{pattern}' found.")
            return 0
        self.echo(f"Deleted {deleted} file(s).")
        return 1 if failed else 0
