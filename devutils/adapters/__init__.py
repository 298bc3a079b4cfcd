"""Adapters — bindings for the shell and native package managers.

Public re-exports for convenient access.
"""

from devutils.adapters.base import PackageManager
from devutils.adapters.mock import MockShell
from devutils.adapters.registry import PackageManagerRegistry
from devutils.adapters.shell.command import Shell, get_shell

__all__ = [
    "MockShell",
    "PackageManager",
    "PackageManagerRegistry",
    "Shell",
    "get_shell",
]
