"""
Script base — shared dispatch for the shell-replacement scripts.

Same routing as the installers: ``run()`` detects the platform and
calls ``run_<platform>``.  By default every platform handler falls back
to ``run_portable``, a pure-Python implementation, so a script only
overrides the platforms where a native tool does the job better.

Scripts return an exit code.  Output goes through ``on_output`` /
``on_error`` callbacks (the CLI passes ``click.echo``).
"""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from pathlib import Path

from devutils.adapters.shell.command import Shell, get_shell
from devutils.core.context import get_platform_context
from devutils.core.models.platform import PlatformContext, PlatformDescriptor, PlatformType
from devutils.core.services.platform_detect import detect

logger = logging.getLogger(__name__)

OutputCallback = Callable[[str], None]
ConfirmCallback = Callable[[str], bool]

DEFAULT_HANDLERS: dict[PlatformType, str] = {
    PlatformType.MACOS: "run_macos",
    PlatformType.UBUNTU: "run_ubuntu",
    PlatformType.DEBIAN: "run_ubuntu",
    PlatformType.FEDORA: "run_ubuntu",
    PlatformType.LINUX: "run_ubuntu",
    PlatformType.WSL: "run_ubuntu",
    PlatformType.RASPBIAN: "run_raspbian",
    PlatformType.AMAZON_LINUX: "run_amazon_linux",
    PlatformType.RHEL: "run_amazon_linux",
    PlatformType.WINDOWS: "run_windows",
    PlatformType.GITBASH: "run_gitbash",
}


class ScriptUsageError(Exception):
    """Bad or missing arguments; the message is printed before the usage text."""


class Script(ABC):
    """Base class for shell-replacement scripts."""

    name: str = ""
    description: str = ""
    usage: str = ""
    handlers: dict[PlatformType, str] = DEFAULT_HANDLERS
    # Unmapped platforms run the portable implementation instead of failing.
    portable_fallback: bool = True

    def __init__(
        self,
        shell: Shell | None = None,
        ctx: PlatformContext | None = None,
        on_output: OutputCallback | None = None,
        on_error: OutputCallback | None = None,
        confirm: ConfirmCallback | None = None,
        cwd: str | Path | None = None,
    ):
        self.shell = shell or get_shell()
        self.ctx = ctx
        self.on_output = on_output or logger.info
        self.on_error = on_error or logger.error
        self.confirm = confirm or (lambda _prompt: False)
        self.cwd = Path(cwd) if cwd else Path.cwd()
        self._platform: PlatformDescriptor | None = None

    # ── Helpers ─────────────────────────────────────────────────

    @property
    def platform(self) -> PlatformDescriptor:
        if self._platform is None:
            self._platform = detect(self.ctx)
        return self._platform

    @property
    def env(self) -> Mapping[str, str]:
        return (self.ctx or get_platform_context()).env

    @property
    def home(self) -> Path:
        home = self.env.get("HOME") or self.env.get("USERPROFILE")
        return Path(home) if home else Path.home()

    def echo(self, message: str = "") -> None:
        for line in message.split("\n"):
            self.on_output(line)

    def error(self, message: str) -> None:
        for line in message.split("\n"):
            self.on_error(line)

    def resolve(self, path: str | None) -> Path:
        """Resolve a user path against the script's working directory."""
        target = Path(os.path.expanduser(path or "."))
        return target if target.is_absolute() else (self.cwd / target)

    # ── Dispatch ────────────────────────────────────────────────

    def run(self, *args, **kwargs) -> int:
        """Dispatch to the handler for the detected platform; return an exit code."""
        self._platform = detect(self.ctx)
        kind = self.platform.type
        handler_name = self.handlers.get(kind)
        if handler_name is None:
            if not self.portable_fallback:
                self.error(f"Platform '{kind.value}' is not supported for this command.")
                return 1
            logger.debug("%s: no handler for %s, using portable implementation", self.name, kind.value)
            handler_name = "run_portable"

        logger.debug("%s: dispatching to %s", self.name, handler_name)
        try:
            return getattr(self, handler_name)(*args, **kwargs)
        except ScriptUsageError as e:
            if str(e):
                self.error(str(e))
            if self.usage:
                self.error(self.usage)
            return 1

    # ── Platform handlers ───────────────────────────────────────

    @abstractmethod
    def run_portable(self, *args, **kwargs) -> int:
        """Pure-Python implementation used wherever no native tool is wired up."""

    def run_macos(self, *args, **kwargs) -> int:
        return self.run_portable(*args, **kwargs)

    def run_ubuntu(self, *args, **kwargs) -> int:
        return self.run_portable(*args, **kwargs)

    def run_raspbian(self, *args, **kwargs) -> int:
        return self.run_ubuntu(*args, **kwargs)

    def run_amazon_linux(self, *args, **kwargs) -> int:
        return self.run_ubuntu(*args, **kwargs)

    def run_windows(self, *args, **kwargs) -> int:
        return self.run_portable(*args, **kwargs)

    def run_gitbash(self, *args, **kwargs) -> int:
        return self.run_windows(*args, **kwargs)
