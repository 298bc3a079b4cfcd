"""
Tool version parsing — every ``--version`` regex lives here.

Output formats of third-party CLIs drift, so each entry documents a
sample of what it expects.  Some tools (``ssh -V``) print to stderr;
both streams are searched.
"""

from __future__ import annotations

import re

from devutils.adapters.shell.command import Shell, get_shell

# tool → (command, pattern, sample output)
VERSION_COMMANDS: dict[str, tuple[str, str, str]] = {
    "git":      ("git --version",      r"git version\s+(\d+\.\d+\.\d+)",   "git version 2.43.0"),
    "curl":     ("curl --version",     r"curl\s+(\d+\.\d+\.\d+)",          "curl 8.5.0 (x86_64-pc-linux-gnu)"),
    "gpg":      ("gpg --version",      r"gpg \(GnuPG\)\s+(\d+\.\d+\.\d+)", "gpg (GnuPG) 2.4.4"),
    "ssh":      ("ssh -V",             r"OpenSSH_([\d.]+p?\d*)",           "OpenSSH_9.6p1 Ubuntu-3ubuntu13"),
    "tmux":     ("tmux -V",            r"tmux\s+(\d+\.\d+[a-z]?)",         "tmux 3.4"),
    "jq":       ("jq --version",       r"jq-(\d+\.\d+(?:\.\d+)?)",         "jq-1.7.1"),
    "zsh":      ("zsh --version",      r"zsh ([\d.]+)",                    "zsh 5.9 (x86_64-apple-darwin23.0)"),
    "bash":     ("bash --version",     r"version\s+(\d+\.\d+\.\d+)",       "GNU bash, version 5.2.21(1)-release"),
    "node":     ("node --version",     r"v(\d+\.\d+\.\d+)",                "v22.11.0"),
    "npm":      ("npm --version",      r"(\d+\.\d+\.\d+)",                 "10.9.0"),
    "brave":    ("brave-browser --version", r"Brave(?: Browser)?\s+([\d.]+)", "Brave Browser 131.1.73.89"),
    "brew":     ("brew --version",     r"Homebrew\s+(\d+\.\d+\.?\d*)",     "Homebrew 4.4.5"),
    "choco":    ("choco --version",    r"(\d+\.\d+\.\d+)",                 "2.4.1"),
    "winget":   ("winget --version",   r"v?(\d+\.\d+\.\d+)",               "v1.9.25200"),
    "docker":   ("docker --version",   r"Docker version\s+(\d+\.\d+\.\d+)", "Docker version 27.3.1, build ce12230"),
    "code":     ("code --version",     r"^(\d+\.\d+\.\d+)",                "1.95.3"),
    "prlctl":   ("prlctl --version",   r"prlctl version\s+([\d.]+)",       "prlctl version 20.1.2 (55742)"),
    "python":   ("python3 --version",  r"Python\s+(\d+\.\d+\.\d+)",        "Python 3.12.7"),
    "clang":    ("clang --version",    r"clang version\s+(\d+\.\d+\.\d+)", "Apple clang version 16.0.0"),
}


class VersionParser:
    """Version extraction for one tool."""

    def __init__(self, tool: str, command: str, pattern: str, sample: str = ""):
        self.tool = tool
        self.command = command
        self.pattern = re.compile(pattern, re.MULTILINE)
        self.sample = sample

    def parse(self, text: str) -> str | None:
        match = self.pattern.search(text or "")
        return match.group(1) if match else None

    def probe(self, shell: Shell | None = None) -> str | None:
        """Run the version command; None when absent or unparseable."""
        shell = shell or get_shell()
        binary = self.command.split()[0]
        if not shell.command_exists(binary):
            return None
        result = shell.exec(self.command, timeout=10)
        return self.parse(result.stdout + "\n" + result.stderr)


PARSERS: dict[str, VersionParser] = {
    tool: VersionParser(tool, *entry) for tool, entry in VERSION_COMMANDS.items()
}


def parse_version(tool: str, text: str) -> str | None:
    """Parse ``text`` with the tool's registered pattern."""
    parser = PARSERS.get(tool)
    return parser.parse(text) if parser else None


def get_tool_version(tool: str, shell: Shell | None = None) -> str | None:
    """Get the installed version of a tool.

    Returns:
        Version string (e.g. ``"2.43.0"``) or ``None`` if the tool is
        not installed, unknown, or its output can't be parsed.
    """
    parser = PARSERS.get(tool)
    if parser is None:
        return None
    return parser.probe(shell)
