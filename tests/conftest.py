"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from devutils.adapters.mock import MockShell
from devutils.core.context import reset_platform_context, set_platform_context
from devutils.core.models.platform import PlatformContext

UBUNTU_FILES = {
    "/etc/debian_version": "bookworm/sid",
    "/etc/os-release": 'NAME="Ubuntu"\nID=ubuntu\nVERSION_ID="24.04"\n',
}

AMAZON_LINUX_FILES = {
    "/etc/system-release": "Amazon Linux release 2023",
    "/etc/os-release": 'NAME="Amazon Linux"\nID="amzn"\n',
    "/usr/bin/dnf": "",
}


@pytest.fixture(autouse=True)
def _reset_platform_context():
    """Every test starts (and ends) on the real host context."""
    reset_platform_context()
    yield
    reset_platform_context()


@pytest.fixture
def shell() -> MockShell:
    return MockShell()


@pytest.fixture
def ubuntu() -> PlatformContext:
    ctx = PlatformContext.fake("linux", files=UBUNTU_FILES)
    set_platform_context(ctx)
    return ctx


@pytest.fixture
def ubuntu_desktop() -> PlatformContext:
    ctx = PlatformContext.fake("linux", env={"DISPLAY": ":0"}, files=UBUNTU_FILES)
    set_platform_context(ctx)
    return ctx


@pytest.fixture
def macos() -> PlatformContext:
    ctx = PlatformContext.fake("darwin", machine="arm64")
    set_platform_context(ctx)
    return ctx


@pytest.fixture
def windows() -> PlatformContext:
    ctx = PlatformContext.fake("win32")
    set_platform_context(ctx)
    return ctx


@pytest.fixture
def amazon_linux() -> PlatformContext:
    ctx = PlatformContext.fake("linux", files=AMAZON_LINUX_FILES)
    set_platform_context(ctx)
    return ctx


@pytest.fixture
def home(tmp_path: Path, monkeypatch) -> Path:
    """Point HOME at a temp dir so nothing touches the real profile."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    monkeypatch.delenv("USERPROFILE", raising=False)
    return home_dir
