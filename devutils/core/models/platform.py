"""
Platform models — what kind of machine are we running on.

The descriptor is recomputed on every ``detect()`` call and never
persisted.  ``PlatformContext`` is the only window detection has onto
the host, which lets tests describe any machine without patching globals.
"""

from __future__ import annotations

import os
import platform as _platform
import sys
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from pydantic import BaseModel


class PlatformType(str, Enum):
    """Closed set of platforms the installers know how to handle."""

    MACOS = "macos"
    UBUNTU = "ubuntu"
    DEBIAN = "debian"
    RASPBIAN = "raspbian"
    AMAZON_LINUX = "amazon_linux"
    RHEL = "rhel"
    FEDORA = "fedora"
    WSL = "wsl"
    WINDOWS = "windows"
    GITBASH = "gitbash"
    LINUX = "linux"
    UNKNOWN = "unknown"


DEBIAN_FAMILY = frozenset({PlatformType.UBUNTU, PlatformType.DEBIAN, PlatformType.RASPBIAN})
RHEL_FAMILY = frozenset({PlatformType.AMAZON_LINUX, PlatformType.RHEL, PlatformType.FEDORA})
LINUX_FAMILY = DEBIAN_FAMILY | RHEL_FAMILY | {PlatformType.LINUX}
WINDOWS_FAMILY = frozenset({PlatformType.WINDOWS, PlatformType.GITBASH})
ALL_PLATFORMS = frozenset(PlatformType) - {PlatformType.LINUX, PlatformType.UNKNOWN}


class PlatformDescriptor(BaseModel):
    """Result of platform detection."""

    type: PlatformType = PlatformType.UNKNOWN
    package_manager: str | None = None   # brew | apt | dnf | yum | choco | winget
    distro: str | None = None

    def to_dict(self) -> dict:
        return {
            "type": self.type.value,
            "packageManager": self.package_manager,
            "distro": self.distro,
        }


def _read_text(path: str) -> str | None:
    try:
        return Path(path).read_text(encoding="utf-8", errors="replace")
    except OSError:
        return None


@dataclass
class PlatformContext:
    """Everything platform detection is allowed to look at.

    Attributes:
        system: ``sys.platform`` style identifier (darwin, win32, linux, ...).
        env: Environment variable mapping.
        machine: CPU architecture (x86_64, arm64, armv6l, ...).
        exists: Predicate for marker-file presence.
        read_text: Reader for marker-file contents (None when unreadable).
    """

    system: str
    env: Mapping[str, str] = field(default_factory=dict)
    machine: str = ""
    exists: Callable[[str], bool] = os.path.exists
    read_text: Callable[[str], str | None] = _read_text

    @classmethod
    def current(cls) -> PlatformContext:
        """Snapshot the real host."""
        return cls(
            system=sys.platform,
            env=dict(os.environ),
            machine=_platform.machine(),
        )

    @classmethod
    def fake(
        cls,
        system: str,
        env: Mapping[str, str] | None = None,
        files: Mapping[str, str] | None = None,
        machine: str = "x86_64",
    ) -> PlatformContext:
        """Build a context backed by an in-memory file table.

        ``files`` maps absolute paths to their contents; a path is
        considered present when it is a key in the table.
        """
        table = dict(files or {})
        return cls(
            system=system,
            env=dict(env or {}),
            machine=machine,
            exists=lambda p: p in table,
            read_text=table.get,
        )
