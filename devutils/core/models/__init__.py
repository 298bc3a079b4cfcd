"""
Domain models — Pydantic types for devutils.

    from devutils.core.models import PlatformDescriptor, ShellResult, InstallReport
"""

from devutils.core.models.install import InstallReport, InstallStatus
from devutils.core.models.platform import (
    PlatformContext,
    PlatformDescriptor,
    PlatformType,
)
from devutils.core.models.profile import DevutilsConfig, UserProfile
from devutils.core.models.result import ExecErrorKind, PackageResult, ShellResult

__all__ = [
    "DevutilsConfig",
    "ExecErrorKind",
    "InstallReport",
    "InstallStatus",
    "PackageResult",
    "PlatformContext",
    "PlatformDescriptor",
    "PlatformType",
    "ShellResult",
    "UserProfile",
]
