"""
Platform context — the single source of truth for "what machine are we on."

Every core service that inspects the host (env vars, marker files,
sys.platform) goes through the context registered here.  Nothing sets
it in normal runs, so services fall back to a fresh snapshot of the
real host:

    - CLI:    nothing to do, ``get_platform_context()`` snapshots the host
    - Tests:  ``set_platform_context(PlatformContext.fake(...))``

Design notes:
    - Module-level singleton (not a class).
    - ``reset_platform_context()`` restores live snapshots.
"""

from __future__ import annotations

from typing import Optional

from devutils.core.models.platform import PlatformContext

_override: Optional[PlatformContext] = None


def set_platform_context(ctx: PlatformContext) -> None:
    """Pin the context for the current process."""
    global _override
    _override = ctx


def reset_platform_context() -> None:
    """Go back to snapshotting the real host."""
    global _override
    _override = None


def get_platform_context() -> PlatformContext:
    """Return the pinned context, or a fresh snapshot of the host."""
    if _override is not None:
        return _override
    return PlatformContext.current()
