"""
Tests for platform detection — every branch of the decision order.
"""

from devutils.core.models.platform import PlatformContext, PlatformType
from devutils.core.services.platform_detect import (
    detect,
    get_arch,
    get_distro,
    is_desktop_available,
    is_linux,
    is_macos,
    is_windows,
    is_wsl,
)

UBUNTU_FILES = {
    "/etc/debian_version": "bookworm/sid",
    "/etc/os-release": "ID=ubuntu\n",
}
AMAZON_LINUX_FILES = {
    "/etc/system-release": "Amazon Linux release 2023",
    "/etc/os-release": 'ID="amzn"\n',
    "/usr/bin/dnf": "",
}


def _linux(files: dict, env: dict | None = None) -> PlatformContext:
    return PlatformContext.fake("linux", env=env, files=files)


class TestDetect:
    def test_macos(self):
        result = detect(PlatformContext.fake("darwin"))
        assert result.type is PlatformType.MACOS
        assert result.package_manager == "brew"

    def test_windows(self):
        result = detect(PlatformContext.fake("win32"))
        assert result.type is PlatformType.WINDOWS
        assert result.package_manager == "winget"

    def test_gitbash(self):
        result = detect(PlatformContext.fake("win32", env={"MSYSTEM": "MINGW64"}))
        assert result.type is PlatformType.GITBASH

    def test_ubuntu(self):
        result = detect(_linux(UBUNTU_FILES))
        assert result.type is PlatformType.UBUNTU
        assert result.package_manager == "apt"
        assert result.distro == "ubuntu"

    def test_raspbian(self):
        result = detect(_linux({
            "/etc/debian_version": "12",
            "/etc/os-release": "ID=raspbian\n",
        }))
        assert result.type is PlatformType.RASPBIAN

    def test_plain_debian(self):
        result = detect(_linux({"/etc/debian_version": "12", "/etc/os-release": "ID=debian\n"}))
        assert result.type is PlatformType.DEBIAN

    def test_wsl_wins_over_debian_marker(self):
        ctx = _linux(UBUNTU_FILES, env={"WSL_DISTRO_NAME": "Ubuntu-24.04"})
        result = detect(ctx)
        assert result.type is PlatformType.WSL
        assert result.package_manager == "apt"

    def test_amazon_linux_2023_system_release_only(self):
        result = detect(_linux(AMAZON_LINUX_FILES))
        assert result.type is PlatformType.AMAZON_LINUX
        assert result.package_manager == "dnf"

    def test_rhel_without_dnf_uses_yum(self):
        result = detect(_linux({
            "/etc/redhat-release": "Red Hat Enterprise Linux 7",
            "/etc/os-release": 'ID="rhel"\n',
        }))
        assert result.type is PlatformType.RHEL
        assert result.package_manager == "yum"

    def test_fedora(self):
        result = detect(_linux({
            "/etc/redhat-release": "Fedora release 40",
            "/etc/os-release": "ID=fedora\n",
            "/usr/bin/dnf": "",
        }))
        assert result.type is PlatformType.FEDORA
        assert result.package_manager == "dnf"

    def test_unrecognised_linux(self):
        result = detect(_linux({}))
        assert result.type is PlatformType.LINUX
        assert result.package_manager is None

    def test_unknown_system(self):
        result = detect(PlatformContext.fake("freebsd13"))
        assert result.type is PlatformType.UNKNOWN

    def test_to_dict(self):
        assert detect(PlatformContext.fake("darwin")).to_dict() == {
            "type": "macos",
            "packageManager": "brew",
            "distro": "macos",
        }


class TestDistro:
    def test_lsb_release_fallback(self):
        ctx = _linux({"/etc/lsb-release": "DISTRIB_ID=Ubuntu\nDISTRIB_RELEASE=22.04\n"})
        assert get_distro(ctx) == "ubuntu"

    def test_missing_release_files(self):
        assert get_distro(_linux({})) is None


class TestPredicates:
    def test_system_predicates(self):
        mac = PlatformContext.fake("darwin", machine="arm64")
        assert is_macos(mac)
        assert not is_linux(mac)
        assert get_arch(mac) == "arm64"
        assert is_windows(PlatformContext.fake("win32"))
        assert is_wsl(_linux({}, env={"WSL_DISTRO_NAME": "Debian"}))

    def test_wsl_is_not_windows(self):
        wsl = PlatformContext.fake("win32", env={"WSL_DISTRO_NAME": "Ubuntu"})
        assert is_wsl(wsl)
        assert not is_windows(wsl)


class TestDesktop:
    def test_macos_always_has_desktop(self):
        assert is_desktop_available(PlatformContext.fake("darwin"))

    def test_headless_ubuntu(self):
        assert not is_desktop_available(_linux(UBUNTU_FILES))

    def test_ubuntu_with_display(self):
        assert is_desktop_available(_linux(UBUNTU_FILES, env={"DISPLAY": ":0"}))

    def test_wayland_session_type(self):
        assert is_desktop_available(_linux(UBUNTU_FILES, env={"XDG_SESSION_TYPE": "wayland"}))

    def test_wslg_mount(self):
        files = dict(UBUNTU_FILES, **{"/mnt/wslg": ""})
        assert is_desktop_available(_linux(files, env={"WSL_DISTRO_NAME": "Ubuntu"}))

    def test_unknown_platform(self):
        assert not is_desktop_available(PlatformContext.fake("freebsd13", env={"DISPLAY": ":0"}))
