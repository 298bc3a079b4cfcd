"""
Shell tab completion — rc-file snippets and the ``COMP_LINE`` handler.

Installing appends a small block to the user's shell rc file.  The
block calls ``dev`` with ``COMP_LINE`` / ``COMP_POINT`` set; ``dev``
notices those variables and prints candidates instead of running a
command (see ``complete``).

Results follow the service convention: ``{"ok": True, ...}`` or
``{"error": "..."}``.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

logger = logging.getLogger(__name__)

COMPLETION_MARKER = "# @fredlackey/devutils completion"
SUPPORTED_SHELLS = ("zsh", "bash", "fish")

TOP_LEVEL = [
    "configure", "setup", "status", "install", "version", "update", "completion", "scripts",
]

COMMANDS: dict[str, list[str]] = {
    "": TOP_LEVEL,
    "dev": TOP_LEVEL,
    "completion": ["install", "uninstall"],
}

DESCRIPTIONS: dict[str, str] = {
    "configure": "Interactive configuration wizard",
    "setup": "Install essential development tools",
    "status": "Display current configuration",
    "install": "Install development tools",
    "version": "Show version and check for updates",
    "update": "Update devutils to the latest version",
    "completion": "Manage shell completion",
    "scripts": "Run a shell-replacement script",
    "uninstall": "Remove shell completion",
}

_BASH_SCRIPT = f"""
{COMPLETION_MARKER}
_dev_completions() {{
  local IFS=$'\\n'
  COMPREPLY=($(COMP_LINE="$COMP_LINE" COMP_POINT="$COMP_POINT" dev | cut -d: -f1))
}}
complete -F _dev_completions dev
"""

_ZSH_SCRIPT = f"""
{COMPLETION_MARKER}
autoload -U +X bashcompinit && bashcompinit
_dev_completions() {{
  local IFS=$'\\n'
  COMPREPLY=($(COMP_LINE="$COMP_LINE" COMP_POINT="$COMP_POINT" dev | cut -d: -f1))
}}
complete -F _dev_completions dev
"""

_FISH_SCRIPT = f"""
{COMPLETION_MARKER}
complete -c dev -f -a "(COMP_LINE=(commandline) COMP_POINT=(commandline -C) dev | string replace -r ':' '\\t')"
"""

_SCRIPTS = {"zsh": _ZSH_SCRIPT, "bash": _BASH_SCRIPT, "fish": _FISH_SCRIPT}


# ── Shell detection ─────────────────────────────────────────────


def detect_shell(env: Mapping[str, str] | None = None) -> str | None:
    """zsh / bash / fish from ``$SHELL`` (substring match), else None."""
    env = os.environ if env is None else env
    value = env.get("SHELL", "")
    for name in SUPPORTED_SHELLS:
        if name in value:
            return name
    return None


def rc_file_for(shell: str, home: Path) -> Path:
    if shell == "zsh":
        return home / ".zshrc"
    if shell == "bash":
        return home / ".bashrc"
    if shell == "fish":
        return home / ".config" / "fish" / "config.fish"
    raise ValueError(f"Unsupported shell: {shell}")


def completion_script(shell: str) -> str:
    return _SCRIPTS[shell]


def _home(env: Mapping[str, str]) -> Path:
    home = env.get("HOME") or env.get("USERPROFILE")
    return Path(home) if home else Path.home()


def _target(env: Mapping[str, str] | None) -> tuple[str | None, Path | None]:
    env = os.environ if env is None else env
    shell = detect_shell(env)
    if shell is None:
        return None, None
    return shell, rc_file_for(shell, _home(env))


_UNSUPPORTED = "Unsupported shell. Supported shells: bash, zsh, fish"


# ── Install / uninstall ─────────────────────────────────────────


def install_completion(env: Mapping[str, str] | None = None) -> dict:
    """Append the completion block to the rc file unless already there."""
    shell, rc_file = _target(env)
    if shell is None:
        return {"error": _UNSUPPORTED}

    try:
        if rc_file.is_file() and COMPLETION_MARKER in rc_file.read_text(encoding="utf-8"):
            return {
                "ok": True,
                "changed": False,
                "rc_file": str(rc_file),
                "message": "Tab completion is already installed.",
            }
        rc_file.parent.mkdir(parents=True, exist_ok=True)
        with rc_file.open("a", encoding="utf-8") as fh:
            fh.write("\n" + completion_script(shell))
    except OSError as e:
        return {"error": f"Failed to install completion: {e}"}

    logger.info("Completion installed for %s in %s", shell, rc_file)
    return {
        "ok": True,
        "changed": True,
        "rc_file": str(rc_file),
        "message": f"Tab completion installed in {rc_file}",
    }


def strip_completion_block(content: str) -> str:
    """Remove the marker block: everything from the marker line through
    the closing ``complete`` line at brace depth zero."""
    kept: list[str] = []
    in_block = False
    depth = 0
    for line in content.split("\n"):
        if COMPLETION_MARKER in line:
            in_block = True
            depth = 0
            continue
        if in_block:
            depth += line.count("{") - line.count("}")
            if depth <= 0 and line.lstrip().startswith("complete "):
                in_block = False
            elif depth <= 0 and not line.strip():
                in_block = False
            continue
        kept.append(line)

    text = "\n".join(kept).rstrip("\n")
    return text + "\n" if text else ""


def uninstall_completion(env: Mapping[str, str] | None = None) -> dict:
    shell, rc_file = _target(env)
    if shell is None:
        return {"error": _UNSUPPORTED}

    if not rc_file.is_file():
        return {
            "ok": True,
            "changed": False,
            "rc_file": str(rc_file),
            "message": "Shell configuration file not found.",
        }

    try:
        content = rc_file.read_text(encoding="utf-8")
        if COMPLETION_MARKER not in content:
            return {
                "ok": True,
                "changed": False,
                "rc_file": str(rc_file),
                "message": "Tab completion is not installed.",
            }
        rc_file.write_text(strip_completion_block(content), encoding="utf-8")
    except OSError as e:
        return {"error": f"Failed to uninstall completion: {e}"}

    logger.info("Completion removed from %s", rc_file)
    return {
        "ok": True,
        "changed": True,
        "rc_file": str(rc_file),
        "message": f"Tab completion removed from {rc_file}",
    }


# ── COMP_LINE handling ──────────────────────────────────────────


def parse_comp_env(env: Mapping[str, str]) -> dict:
    """Split ``COMP_LINE`` up to ``COMP_POINT`` into words.

    Returns a dict with ``line``, ``words``, ``prev`` (the word before
    the one being completed) and ``partial`` (the word being completed,
    ``""`` after a trailing space).
    """
    line = env.get("COMP_LINE", "")
    try:
        point = int(env.get("COMP_POINT", len(line)))
    except ValueError:
        point = len(line)
    head = line[:point]
    words = head.split()
    trailing_space = head.endswith(" ")
    partial = "" if trailing_space else (words[-1] if words else "")
    if trailing_space:
        prev = words[-1] if words else ""
    else:
        prev = words[-2] if len(words) > 1 else ""
    return {"line": line, "words": words, "prev": prev, "partial": partial}


def candidates_for(prev: str, word_count: int) -> list[str]:
    if prev == "install":
        from devutils.core.services.installs import list_installers

        return list_installers()
    if prev == "scripts":
        from devutils.core.services.scripts import list_scripts

        return list_scripts()
    if prev in COMMANDS:
        return COMMANDS[prev]
    if word_count <= 2:
        return COMMANDS["dev"]
    return []


def complete(env: Mapping[str, str] | None = None) -> list[str]:
    """Completion lines (``name:description``) for the current ``COMP_LINE``."""
    env = os.environ if env is None else env
    parsed = parse_comp_env(env)
    names = candidates_for(parsed["prev"], len(parsed["words"]))

    partial = parsed["partial"].lower()
    if partial:
        names = [n for n in names if n.lower().startswith(partial)]
    return [f"{name}:{DESCRIPTIONS.get(name, '')}" for name in names]
