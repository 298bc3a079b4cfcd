"""
Tests for the setup use case — essential tool checks and installs.
"""

from devutils.adapters.mock import MockShell
from devutils.core.use_cases.setup import (
    ESSENTIAL_TOOLS,
    install_missing,
    missing_tools,
    tool_statuses,
)


class TestStatuses:
    def test_essential_tool_list(self):
        assert [t.name for t in ESSENTIAL_TOOLS] == ["git", "ssh-keygen", "gpg", "curl"]

    def test_missing_tools(self):
        shell = MockShell(present={"git", "curl"})
        assert [t.name for t in missing_tools(shell)] == ["ssh-keygen", "gpg"]

    def test_to_dict(self):
        status = tool_statuses(MockShell(present={"git"}))[0]
        assert status.to_dict() == {
            "name": "git",
            "command": "git",
            "description": "Version control system",
            "installed": True,
        }


class TestInstallMissing:
    def test_installs_each_missing_tool(self, ubuntu):
        shell = MockShell(present={"apt-get", "git", "curl"})
        shell.set_response("apt-get install -y openssh-client", provides=["ssh-keygen"])
        shell.set_response("apt-get install -y gnupg", provides=["gpg"])

        lines: list[str] = []
        result = install_missing(missing_tools(shell), shell=shell, on_progress=lines.append)

        assert [r.tool for r in result.reports] == ["openssh", "gpg"]
        assert result.summary == "Setup complete: 2 installed, 0 failed."
        assert missing_tools(shell) == []
        assert lines

    def test_failure_is_counted(self, ubuntu):
        shell = MockShell(present={"apt-get", "git", "curl", "ssh-keygen"})
        shell.set_failure("apt-get install -y gnupg")

        result = install_missing(missing_tools(shell), shell=shell)
        assert result.failed == 1
        assert result.summary == "Setup complete: 0 installed, 1 failed."
