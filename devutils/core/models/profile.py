"""
Developer profile — the contents of ``~/.devutils``.

    {"user": {"name": ..., "email": ..., "url": ...},
     "created": ISO-8601, "updated": ISO-8601}

``url`` is omitted from the file when unset.
"""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, Field, field_validator


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class UserProfile(BaseModel):
    """Who owns this machine."""

    name: str
    email: str
    url: str | None = None

    @field_validator("name", "email")
    @classmethod
    def _required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("url")
    @classmethod
    def _blank_url_is_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None


class DevutilsConfig(BaseModel):
    """Top-level config document."""

    user: UserProfile
    created: str = Field(default_factory=_now_iso)
    updated: str = Field(default_factory=_now_iso)

    def touch(self) -> None:
        """Refresh the updated timestamp."""
        self.updated = _now_iso()
