"""
Tests for package-manager adapters and the package_ops service.
"""

from devutils.adapters.mock import MockShell
from devutils.adapters.packages.apt import Apt
from devutils.adapters.packages.brew import Brew
from devutils.adapters.packages.choco import CHOCO_EXE, Choco
from devutils.adapters.packages.language import Npm, Pip
from devutils.adapters.packages.rpm import Rpm
from devutils.adapters.packages.snap import Snap
from devutils.adapters.packages.winget import Winget
from devutils.adapters.registry import PackageManagerRegistry
from devutils.core.models.platform import PlatformContext
from devutils.core.models.result import ShellResult
from devutils.core.services import package_ops


class TestCommandLines:
    def test_brew(self):
        brew = Brew(MockShell())
        assert brew.install_command("jq") == "brew install jq"
        assert brew.install_command("brave-browser", cask=True) == "brew install --cask brave-browser"

    def test_apt(self):
        apt = Apt(MockShell())
        assert apt.install_command("git") == "sudo apt-get install -y git"
        assert apt.uninstall_command("git", purge=True) == "sudo apt-get purge -y git"

    def test_rpm_uses_binary_name(self):
        assert Rpm("yum", MockShell()).install_command("tmux") == "sudo yum install -y tmux"

    def test_snap_classic(self):
        assert Snap(MockShell()).install_command("code", classic=True) == "sudo snap install code --classic"

    def test_npm_global(self):
        assert Npm(MockShell()).install_command("npm-check-updates", global_=True) == (
            "npm install -g npm-check-updates"
        )

    def test_pip_prefers_pip3_and_user(self):
        pip = Pip(MockShell(present={"pip3"}))
        assert pip.install_command("httpie") == "pip3 install --user httpie"


class TestAdapters:
    def test_install_without_binary_fails(self):
        shell = MockShell()
        result = Brew(shell).install("jq")
        assert not result.success
        assert result.output == "Homebrew is not installed"
        assert shell.call_count == 0

    def test_check_update_100_is_success(self):
        shell = MockShell(present={"dnf"})
        shell.set_response("check-update", code=100)
        assert Rpm("dnf", shell).update().success

    def test_apt_installed_check(self):
        shell = MockShell(present={"apt-get"})
        shell.set_failure("dpkg -l")
        assert not Apt(shell).is_package_installed("jq")

    def test_registry_pip3_alias(self):
        registry = PackageManagerRegistry(MockShell())
        assert registry.get("pip3") is registry.get("pip")
        assert registry.get("pacman") is None


class TestPackageOps:
    def test_preferred_by_platform(self):
        shell = MockShell()
        assert package_ops.get_preferred(PlatformContext.fake("darwin"), shell) == "brew"
        ubuntu = PlatformContext.fake("linux", files={"/etc/debian_version": "12"})
        assert package_ops.get_preferred(ubuntu, shell) == "apt"

    def test_windows_falls_back_to_choco(self):
        ctx = PlatformContext.fake("win32")
        assert package_ops.get_preferred(ctx, MockShell()) == "choco"
        assert package_ops.get_preferred(ctx, MockShell(present={"winget"})) == "winget"

    def test_available_lists_platform_first(self):
        ctx = PlatformContext.fake("linux", files={"/etc/debian_version": "12"})
        shell = MockShell(present={"apt-get", "npm"})
        assert package_ops.get_available(ctx, shell) == ["apt", "npm"]

    def test_install_routes_to_preferred(self):
        ctx = PlatformContext.fake("darwin")
        shell = MockShell(present={"brew"})
        result = package_ops.install("jq", ctx=ctx, shell=shell)
        assert result.success
        assert shell.call_log == ["brew install jq"]

    def test_no_package_manager(self):
        result = package_ops.install("jq", ctx=PlatformContext.fake("freebsd13"), shell=MockShell())
        assert not result.success
        assert result.output == "No package manager available"

    def test_unknown_manager(self):
        result = package_ops.install("jq", manager="pacman", shell=MockShell())
        assert not result.success
        assert result.output == "Unknown package manager: pacman"

    def test_update_yum_check_update(self):
        ctx = PlatformContext.fake("linux", files={"/etc/redhat-release": "CentOS 7"})
        shell = MockShell(present={"yum"})
        shell.set_response("yum check-update", code=100)
        assert package_ops.update(ctx=ctx, shell=shell).success


class TestBrewHelpers:
    def test_search_sections(self):
        shell = MockShell(present={"brew"})
        shell.set_response(
            "brew search",
            stdout="==> Formulae\njq  jqp\n\n==> Casks\njqbx\n",
        )
        assert Brew(shell).search("jq") == {"formulas": ["jq", "jqp"], "casks": ["jqbx"]}

    def test_version(self):
        shell = MockShell(present={"brew"})
        shell.set_response("brew --version", stdout="Homebrew 4.4.5\n")
        assert Brew(shell).get_version() == "4.4.5"

    def test_cask_install_and_uninstall(self):
        shell = MockShell(present={"brew"})
        brew = Brew(shell)
        assert brew.install_cask("iterm2").success
        assert brew.uninstall_cask("iterm2").success
        assert shell.call_log == ["brew install --cask iterm2", "brew uninstall --cask iterm2"]

    def test_upgrade_and_tap(self):
        shell = MockShell(present={"brew"})
        brew = Brew(shell)
        brew.upgrade()
        brew.upgrade("jq")
        brew.tap("hashicorp/tap")
        assert shell.call_log == ["brew upgrade", "brew upgrade jq", "brew tap hashicorp/tap"]

    def test_listings(self):
        shell = MockShell(present={"brew"})
        shell.set_response("brew list --formula", stdout="git\njq\n")
        shell.set_response("brew list --cask", stdout="iterm2\n")
        brew = Brew(shell)
        assert brew.list_formulas() == ["git", "jq"]
        assert brew.list_casks() == ["iterm2"]

    def test_missing_brew(self):
        brew = Brew(MockShell())
        assert brew.tap("hashicorp/tap").output == "Homebrew is not installed"
        assert brew.upgrade().output == "Homebrew is not installed"
        assert brew.list_casks() == []


class TestAptHelpers:
    def test_add_key_variants(self):
        shell = MockShell()
        apt = Apt(shell)
        apt.add_key("https://example.com/key.asc", "/usr/share/keyrings/example.gpg")
        apt.add_key("https://example.com/key.gpg", "/usr/share/keyrings/example.gpg", dearmor=False)
        apt.add_key("https://example.com/key.asc")
        assert shell.call_log == [
            'curl -fsSL "https://example.com/key.asc" | sudo gpg --dearmor -o "/usr/share/keyrings/example.gpg"',
            'sudo curl -fsSLo "/usr/share/keyrings/example.gpg" "https://example.com/key.gpg"',
            'curl -fsSL "https://example.com/key.asc" | sudo apt-key add -',
        ]

    def test_add_source_file(self):
        shell = MockShell()
        shell.set_failure("example.sources", "404 Not Found")
        result = Apt(shell).add_source_file(
            "https://example.com/example.sources", "/etc/apt/sources.list.d/example.sources",
        )
        assert not result.success
        assert result.output == "404 Not Found"

    def test_add_repository_installs_prerequisite(self):
        shell = MockShell()
        shell.set_response("software-properties-common", provides=["add-apt-repository"])
        assert Apt(shell).add_repository("ppa:git-core/ppa").success
        assert shell.call_log == [
            "sudo apt-get install -y software-properties-common",
            'sudo add-apt-repository -y "ppa:git-core/ppa"',
        ]

    def test_add_repository_prerequisite_failure(self):
        shell = MockShell()
        shell.set_failure("software-properties-common", "E: Unable to locate package")
        result = Apt(shell).add_repository("ppa:git-core/ppa")
        assert not result.success
        assert "software-properties-common" in result.output
        assert shell.ran("add-apt-repository") == 0

    def test_remove_upgrade_clean(self):
        shell = MockShell(present={"apt-get"})
        apt = Apt(shell)
        apt.remove("jq")
        apt.remove("jq", purge=True)
        apt.upgrade()
        apt.upgrade("git")
        apt.clean()
        assert shell.call_log == [
            "sudo apt-get remove -y jq",
            "sudo apt-get purge -y jq",
            "sudo apt-get upgrade -y",
            "sudo apt-get install --only-upgrade -y git",
            "sudo apt-get clean && sudo apt-get autoremove -y",
        ]

    def test_list_installed(self):
        shell = MockShell()
        shell.set_response("dpkg --get-selections", stdout="git\t\t\tinstall\njq\t\t\tinstall\n")
        assert Apt(shell).list_installed() == ["git", "jq"]


class TestChoco:
    def test_known_install_location(self):
        shell = MockShell(files={CHOCO_EXE})
        choco = Choco(shell)
        assert choco.is_available()
        assert choco.install_command("jq") == f'"{CHOCO_EXE}" install jq -y'

    def test_outdated_parsing(self):
        shell = MockShell(present={"choco"})
        shell.set_response("outdated", stdout="Chocolatey v2.4.1\ngit|2.43.0|2.47.1|false\n")
        assert Choco(shell).list_outdated() == [
            {"name": "git", "current": "2.43.0", "available": "2.47.1"},
        ]

    def test_package_version(self):
        shell = MockShell(present={"choco"})
        shell.set_response("list --local-only --exact jq", stdout="jq 1.7.1\n1 packages installed.\n")
        assert Choco(shell).get_package_version("jq") == "1.7.1"

    def test_pin_and_unpin(self):
        shell = MockShell(present={"choco"})
        choco = Choco(shell)
        assert choco.pin("git").success
        assert choco.unpin("git").success
        assert shell.call_log == ['"choco" pin add -n="git"', '"choco" pin remove -n="git"']
        assert Choco(MockShell()).pin("git").output == "Chocolatey is not installed"


class TestWinget:
    def test_install_options(self):
        command = Winget(MockShell()).install_command("Git.Git", version="2.47.1", source="winget")
        assert command.startswith('winget install "Git.Git" --accept-package-agreements')
        assert '--version "2.47.1"' in command
        assert command.endswith("--source winget")

    def test_version_strips_v(self):
        shell = MockShell(present={"winget"})
        shell.set_response("winget --version", stdout="v1.9.25200\n")
        assert Winget(shell).get_version() == "1.9.25200"


class TestToolVersion:
    def test_samples_parse(self):
        from devutils.core.services.tool_version import PARSERS

        for tool, parser in PARSERS.items():
            assert parser.parse(parser.sample), tool

    def test_ssh_reads_stderr(self):
        from devutils.core.services.tool_version import get_tool_version

        shell = MockShell(present={"ssh"})
        shell.set_response("ssh -V", ShellResult(stderr="OpenSSH_9.6p1 Ubuntu-3ubuntu13\n"))
        assert get_tool_version("ssh", shell) == "9.6p1"

    def test_unknown_tool(self):
        from devutils.core.services.tool_version import get_tool_version, parse_version

        assert parse_version("nope", "1.0.0") is None
        assert get_tool_version("nope", MockShell()) is None
