"""
Version check — compare the running version with the latest release on PyPI.
"""

from __future__ import annotations

import json
import logging
import re
import sys
import urllib.error
import urllib.request

from devutils import PACKAGE_NAME, __version__
from devutils.adapters.shell.command import Shell, get_shell

logger = logging.getLogger(__name__)

PYPI_JSON_URL = "https://pypi.org/pypi/{package}/json"
CHECK_TIMEOUT = 5
UPGRADE_TIMEOUT = 300

_NUMERIC_PREFIX = re.compile(r"\d+")


def _parts(version: str) -> tuple[int, int, int]:
    """``"1.2.3rc1"`` → ``(1, 2, 3)``; missing parts count as 0."""
    numbers: list[int] = []
    for piece in version.strip().lstrip("v").split(".")[:3]:
        match = _NUMERIC_PREFIX.match(piece)
        numbers.append(int(match.group()) if match else 0)
    while len(numbers) < 3:
        numbers.append(0)
    return numbers[0], numbers[1], numbers[2]


def is_newer_version(current: str | None, latest: str | None) -> bool:
    """True when ``latest`` is strictly newer (major.minor.patch only)."""
    if not current or not latest:
        return False
    return _parts(latest) > _parts(current)


def get_current_version() -> str:
    return __version__


def get_latest_version(package: str = PACKAGE_NAME, timeout: float = CHECK_TIMEOUT) -> str | None:
    """Latest published version on PyPI, or None when unreachable."""
    url = PYPI_JSON_URL.format(package=package)
    req = urllib.request.Request(
        url, headers={"Accept": "application/json", "User-Agent": f"{PACKAGE_NAME}/{__version__}"},
    )
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            data = json.loads(resp.read().decode())
    except (urllib.error.URLError, OSError, ValueError) as e:
        logger.debug("Version check failed for %s: %s", url, e)
        return None

    version = (data.get("info") or {}).get("version")
    return version if isinstance(version, str) and version else None


def check_for_update() -> dict:
    """Current/latest pair plus whether an update is available."""
    current = get_current_version()
    latest = get_latest_version()
    return {
        "current": current,
        "latest": latest,
        "update_available": is_newer_version(current, latest),
    }


def upgrade_command(package: str = PACKAGE_NAME) -> str:
    """pip upgrade for the interpreter running devutils."""
    return f'"{sys.executable}" -m pip install --upgrade {package}'


def self_update(shell: Shell | None = None) -> dict:
    """Upgrade the installed package in place.

    Returns:
        ``{"ok": True, "command": ..., "output": ...}`` or
        ``{"error": ..., "command": ..., "output": ...}``.
    """
    shell = shell or get_shell()
    command = upgrade_command()
    logger.info("Upgrading %s: %s", PACKAGE_NAME, command)
    result = shell.exec(command, timeout=UPGRADE_TIMEOUT)
    if not result.ok:
        return {
            "error": f"pip exited with code {result.code}",
            "command": command,
            "output": result.output,
        }
    return {"ok": True, "command": command, "output": result.stdout}
