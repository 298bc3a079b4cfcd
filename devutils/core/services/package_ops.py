"""
Package management operations — channel-independent service.

Picks the package manager(s) for the detected platform and routes
install / uninstall / update through the matching adapter.  Every
function returns a ``PackageResult``; nothing raises.
"""

from __future__ import annotations

import logging

from devutils.adapters.registry import PackageManagerRegistry
from devutils.adapters.shell.command import Shell
from devutils.core.models.platform import (
    DEBIAN_FAMILY,
    RHEL_FAMILY,
    WINDOWS_FAMILY,
    PlatformContext,
    PlatformType,
)
from devutils.core.models.result import PackageResult
from devutils.core.services.platform_detect import detect

logger = logging.getLogger(__name__)


# ── Platform → candidate managers ───────────────────────────────

_PLATFORM_MANAGERS: dict[PlatformType, tuple[str, ...]] = {
    PlatformType.MACOS: ("brew",),
    PlatformType.WSL: ("apt", "snap"),
    PlatformType.WINDOWS: ("winget", "choco"),
    PlatformType.GITBASH: ("winget", "choco"),
}
for _kind in DEBIAN_FAMILY:
    _PLATFORM_MANAGERS[_kind] = ("apt", "snap")
for _kind in RHEL_FAMILY:
    _PLATFORM_MANAGERS[_kind] = ("dnf", "yum")

# Available wherever their binary is.
_UNIVERSAL_MANAGERS = ("npm", "pip")


def _registry(shell: Shell | None) -> PackageManagerRegistry:
    return PackageManagerRegistry(shell)


def get_available(
    ctx: PlatformContext | None = None,
    shell: Shell | None = None,
) -> list[str]:
    """Package managers whose binary is present, platform ones first."""
    registry = _registry(shell)
    platform = detect(ctx)

    found: list[str] = []
    for name in _PLATFORM_MANAGERS.get(platform.type, ()) + _UNIVERSAL_MANAGERS:
        manager = registry.get(name)
        if manager is not None and manager.is_available():
            found.append(name)
    logger.debug("Available package managers: %s", found)
    return found


def get_preferred(
    ctx: PlatformContext | None = None,
    shell: Shell | None = None,
) -> str | None:
    """Deterministic platform → preferred manager mapping."""
    platform = detect(ctx)
    kind = platform.type

    if kind is PlatformType.MACOS:
        return "brew"
    if kind in DEBIAN_FAMILY or kind is PlatformType.WSL:
        return "apt"
    if kind in RHEL_FAMILY:
        return platform.package_manager
    if kind in WINDOWS_FAMILY:
        winget = _registry(shell).get("winget")
        return "winget" if winget is not None and winget.is_available() else "choco"
    return None


def _resolve(
    manager: str | None,
    ctx: PlatformContext | None,
    shell: Shell | None,
):
    """Return ``(adapter, error_result)``; exactly one is None."""
    name = manager or get_preferred(ctx, shell)
    if not name:
        return None, PackageResult(success=False, output="No package manager available")
    adapter = _registry(shell).get(name)
    if adapter is None:
        return None, PackageResult(success=False, output=f"Unknown package manager: {name}")
    return adapter, None


# ── Operations ──────────────────────────────────────────────────


def install(
    package: str,
    manager: str | None = None,
    *,
    cask: bool = False,
    classic: bool = False,
    global_: bool = False,
    ctx: PlatformContext | None = None,
    shell: Shell | None = None,
) -> PackageResult:
    """Install ``package`` with ``manager`` (default: the preferred one).

    Args:
        package: Package / formula / id to install.
        manager: Explicit manager name (brew, apt, snap, dnf, yum, choco,
            winget, npm, pip, pip3).
        cask: brew only, install a cask.
        classic: snap only, classic confinement.
        global_: npm ``-g``; for pip, skip ``--user``.
    """
    adapter, error = _resolve(manager, ctx, shell)
    if error:
        return error
    return adapter.install(package, cask=cask, classic=classic, global_=global_)


def uninstall(
    package: str,
    manager: str | None = None,
    *,
    cask: bool = False,
    ctx: PlatformContext | None = None,
    shell: Shell | None = None,
) -> PackageResult:
    """Remove ``package`` with ``manager`` (default: the preferred one)."""
    adapter, error = _resolve(manager, ctx, shell)
    if error:
        return error
    return adapter.uninstall(package, cask=cask)


def update(
    manager: str | None = None,
    *,
    ctx: PlatformContext | None = None,
    shell: Shell | None = None,
) -> PackageResult:
    """Refresh package metadata.

    dnf / yum ``check-update`` exit 100 ("updates available") is success.
    """
    adapter, error = _resolve(manager, ctx, shell)
    if error:
        return error
    return adapter.update()
