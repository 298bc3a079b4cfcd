"""
Config loader — reads and writes the developer profile in ``~/.devutils``.

The file is JSON validated by the ``DevutilsConfig`` Pydantic model.
Writes are atomic (temp file in the same directory, then rename) so an
interrupted ``dev configure`` never leaves a half-written profile.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from devutils.core.models.profile import DevutilsConfig, UserProfile, _now_iso

logger = logging.getLogger(__name__)

CONFIG_FILE = ".devutils"


class ConfigError(Exception):
    """Raised when the config file cannot be read or is invalid."""


def home_dir() -> Path:
    """``$HOME``, then ``%USERPROFILE%``, then whatever Python thinks."""
    home = os.environ.get("HOME") or os.environ.get("USERPROFILE")
    return Path(home) if home else Path.home()


def config_path() -> Path:
    return home_dir() / CONFIG_FILE


def load_config(path: Path | None = None, strict: bool = False) -> DevutilsConfig | None:
    """Load the developer profile.

    Args:
        path: Config file (default: ``~/.devutils``).
        strict: Raise ``ConfigError`` for an unreadable or invalid file
            instead of returning None.

    Returns:
        The validated config, or None when the file is missing (or
        corrupt and ``strict`` is False).
    """
    path = path or config_path()
    if not path.is_file():
        logger.debug("No config file at %s", path)
        return None

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        config = DevutilsConfig.model_validate(data)
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        if strict:
            raise ConfigError(f"Invalid config file {path}: {e}") from e
        logger.warning("Ignoring unreadable config file %s: %s", path, e)
        return None

    logger.debug("Loaded config for %s from %s", config.user.name, path)
    return config


def save_config(
    data: DevutilsConfig | UserProfile,
    path: Path | None = None,
) -> DevutilsConfig:
    """Save the developer profile (atomic write).

    Passing a bare ``UserProfile`` keeps the ``created`` timestamp of
    the file already on disk.  On the first save ``created`` and
    ``updated`` are the same instant.

    Raises:
        ConfigError: If the file cannot be written.
    """
    path = path or config_path()

    if isinstance(data, UserProfile):
        existing = load_config(path)
        now = _now_iso()
        config = DevutilsConfig(
            user=data,
            created=existing.created if existing else now,
            updated=now,
        )
    else:
        config = data
        config.touch()

    content = json.dumps(
        config.model_dump(mode="json", exclude_none=True), indent=2, ensure_ascii=False,
    ) + "\n"

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=".devutils_", suffix=".tmp")
        os.close(fd)
        tmp = Path(tmp_path)
        try:
            tmp.write_text(content, encoding="utf-8")
            tmp.replace(path)
        except OSError:
            tmp.unlink(missing_ok=True)
            raise
    except OSError as e:
        logger.error("Failed to save config to %s: %s", path, e)
        raise ConfigError(f"Cannot write {path}: {e}") from e

    logger.debug("Config saved to %s", path)
    return config
