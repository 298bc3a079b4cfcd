"""
Configure use case — create or update the developer profile.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import ValidationError

from devutils.core.config.loader import ConfigError, load_config, save_config
from devutils.core.models.profile import DevutilsConfig, UserProfile


def build_profile(name: str | None, email: str | None, url: str | None = None) -> UserProfile:
    """Validate the profile fields.

    Raises:
        ConfigError: ``"Name is required."`` / ``"Email is required."``
            for a missing or blank value.
    """
    if not (name or "").strip():
        raise ConfigError("Name is required.")
    if not (email or "").strip():
        raise ConfigError("Email is required.")
    try:
        return UserProfile(name=name, email=email, url=url)
    except ValidationError as e:
        raise ConfigError(f"Invalid profile: {e}") from e


def configure(
    name: str | None,
    email: str | None,
    url: str | None = None,
    path: Path | None = None,
) -> DevutilsConfig:
    """Validate and save the profile, keeping the original ``created``."""
    profile = build_profile(name, email, url)
    return save_config(profile, path)


def current_config(path: Path | None = None) -> DevutilsConfig | None:
    return load_config(path)
