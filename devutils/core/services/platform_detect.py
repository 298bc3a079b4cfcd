"""
Platform detection — map the host to a ``PlatformDescriptor``.

Ordering matters:
    1. macOS is decided by ``sys.platform`` alone.
    2. ``WSL_DISTRO_NAME`` wins over both native Windows and any Linux
       marker file.
    3. Debian family is keyed on ``/etc/debian_version``.
    4. RHEL family is keyed on ``/etc/redhat-release`` OR
       ``/etc/system-release`` (Amazon Linux 2023 ships only the latter).

Detection never raises; anything unrecognised degrades to ``unknown``.
"""

from __future__ import annotations

import logging
import re

from devutils.core.context import get_platform_context
from devutils.core.models.platform import (
    LINUX_FAMILY,
    PlatformContext,
    PlatformDescriptor,
    PlatformType,
)

logger = logging.getLogger(__name__)

OS_RELEASE = "/etc/os-release"
LSB_RELEASE = "/etc/lsb-release"
DEBIAN_VERSION = "/etc/debian_version"
REDHAT_RELEASE = "/etc/redhat-release"
SYSTEM_RELEASE = "/etc/system-release"
DNF_BINARY = "/usr/bin/dnf"
WSLG_MOUNT = "/mnt/wslg"

_OS_RELEASE_ID = re.compile(r"""^ID=["']?([^"'\n]+)["']?""", re.MULTILINE)
_LSB_RELEASE_ID = re.compile(r"""^DISTRIB_ID=["']?([^"'\n]+)["']?""", re.MULTILINE)


def _ctx(ctx: PlatformContext | None) -> PlatformContext:
    return ctx if ctx is not None else get_platform_context()


# ── Distro resolution ───────────────────────────────────────────


def get_distro(ctx: PlatformContext | None = None) -> str | None:
    """Lower-cased distro id from os-release, falling back to lsb-release."""
    ctx = _ctx(ctx)
    for path, pattern in ((OS_RELEASE, _OS_RELEASE_ID), (LSB_RELEASE, _LSB_RELEASE_ID)):
        if not ctx.exists(path):
            continue
        content = ctx.read_text(path)
        if not content:
            continue
        match = pattern.search(content)
        if match:
            return match.group(1).strip().lower()
    return None


def _wsl(ctx: PlatformContext) -> PlatformDescriptor | None:
    name = ctx.env.get("WSL_DISTRO_NAME")
    if not name:
        return None
    return PlatformDescriptor(type=PlatformType.WSL, package_manager="apt", distro=name.lower())


def _detect_linux(ctx: PlatformContext) -> PlatformDescriptor:
    distro = get_distro(ctx)

    if ctx.exists(DEBIAN_VERSION):
        if distro in ("raspbian", "raspberry"):
            kind = PlatformType.RASPBIAN
        elif distro == "ubuntu":
            kind = PlatformType.UBUNTU
        else:
            kind = PlatformType.DEBIAN
        return PlatformDescriptor(type=kind, package_manager="apt", distro=distro)

    if ctx.exists(REDHAT_RELEASE) or ctx.exists(SYSTEM_RELEASE):
        if distro in ("amzn", "amazon"):
            kind = PlatformType.AMAZON_LINUX
        elif distro == "fedora":
            kind = PlatformType.FEDORA
        else:
            kind = PlatformType.RHEL
        manager = "dnf" if ctx.exists(DNF_BINARY) else "yum"
        return PlatformDescriptor(type=kind, package_manager=manager, distro=distro)

    return PlatformDescriptor(type=PlatformType.LINUX, package_manager=None, distro=distro)


# ── Public API ──────────────────────────────────────────────────


def detect(ctx: PlatformContext | None = None) -> PlatformDescriptor:
    """Describe the host platform.

    Args:
        ctx: Platform context to inspect (default: the active context).

    Returns:
        PlatformDescriptor with type, package manager and distro.
    """
    ctx = _ctx(ctx)
    system = ctx.system

    if system == "darwin":
        result = PlatformDescriptor(type=PlatformType.MACOS, package_manager="brew", distro="macos")
    elif system == "win32":
        result = _wsl(ctx)
        if result is None:
            if ctx.env.get("MSYSTEM"):
                result = PlatformDescriptor(
                    type=PlatformType.GITBASH, package_manager="winget", distro="gitbash",
                )
            else:
                result = PlatformDescriptor(
                    type=PlatformType.WINDOWS, package_manager="winget", distro="windows",
                )
    elif system.startswith("linux"):
        result = _wsl(ctx) or _detect_linux(ctx)
    else:
        result = PlatformDescriptor()

    logger.debug("Detected platform: %s", result.to_dict())
    return result


def get_arch(ctx: PlatformContext | None = None) -> str:
    return _ctx(ctx).machine


def is_macos(ctx: PlatformContext | None = None) -> bool:
    return _ctx(ctx).system == "darwin"


def is_windows(ctx: PlatformContext | None = None) -> bool:
    """Native Windows; a WSL distro does not count."""
    ctx = _ctx(ctx)
    return ctx.system == "win32" and not is_wsl(ctx)


def is_linux(ctx: PlatformContext | None = None) -> bool:
    return _ctx(ctx).system.startswith("linux")


def is_wsl(ctx: PlatformContext | None = None) -> bool:
    return bool(_ctx(ctx).env.get("WSL_DISTRO_NAME"))


def is_desktop_available(
    ctx: PlatformContext | None = None,
    descriptor: PlatformDescriptor | None = None,
) -> bool:
    """Whether GUI applications can be installed and launched.

    macOS, Windows and Git Bash always have a desktop.  Linux and WSL
    need a display server or desktop session in the environment (WSL
    also counts WSLg's ``/mnt/wslg`` mount).
    """
    ctx = _ctx(ctx)
    descriptor = descriptor or detect(ctx)
    kind = descriptor.type

    if kind in (PlatformType.MACOS, PlatformType.WINDOWS, PlatformType.GITBASH):
        return True
    if kind not in LINUX_FAMILY and kind is not PlatformType.WSL:
        return False

    env = ctx.env
    if env.get("WAYLAND_DISPLAY") or env.get("DISPLAY"):
        return True
    if env.get("XDG_SESSION_TYPE", "").lower() in ("x11", "wayland"):
        return True
    if env.get("XDG_CURRENT_DESKTOP") or env.get("DESKTOP_SESSION"):
        return True
    if kind is PlatformType.WSL and ctx.exists(WSLG_MOUNT):
        return True
    return False

