"""
Tests for shell completion — rc-file install/uninstall and COMP_LINE handling.
"""

from pathlib import Path

from devutils.core.services.completion import (
    COMPLETION_MARKER,
    complete,
    detect_shell,
    install_completion,
    parse_comp_env,
    strip_completion_block,
    uninstall_completion,
)


def _env(home: Path, shell: str) -> dict:
    return {"HOME": str(home), "SHELL": f"/bin/{shell}"}


class TestDetectShell:
    def test_known_shells(self):
        assert detect_shell({"SHELL": "/usr/local/bin/zsh"}) == "zsh"
        assert detect_shell({"SHELL": "/bin/bash"}) == "bash"
        assert detect_shell({"SHELL": "/usr/bin/fish"}) == "fish"

    def test_unknown_shell(self):
        assert detect_shell({"SHELL": "/bin/tcsh"}) is None
        assert detect_shell({}) is None


class TestInstall:
    def test_zsh_install_is_idempotent(self, tmp_path: Path):
        env = _env(tmp_path, "zsh")
        rc = tmp_path / ".zshrc"
        rc.write_text("export EDITOR=vim\n")

        first = install_completion(env)
        assert first["changed"] is True
        assert first["rc_file"] == str(rc)
        content = rc.read_text()
        assert content.startswith("export EDITOR=vim\n")
        assert content.count(COMPLETION_MARKER) == 1
        assert "bashcompinit" in content

        second = install_completion(env)
        assert second["changed"] is False
        assert second["message"] == "Tab completion is already installed."
        assert rc.read_text().count(COMPLETION_MARKER) == 1

    def test_fish_creates_config_dir(self, tmp_path: Path):
        result = install_completion(_env(tmp_path, "fish"))
        rc = tmp_path / ".config" / "fish" / "config.fish"
        assert result["rc_file"] == str(rc)
        assert "complete -c dev" in rc.read_text()

    def test_unsupported_shell(self, tmp_path: Path):
        assert "error" in install_completion(_env(tmp_path, "tcsh"))


class TestUninstall:
    def test_round_trip_restores_user_content(self, tmp_path: Path):
        env = _env(tmp_path, "bash")
        rc = tmp_path / ".bashrc"
        rc.write_text("alias ll='ls -l'\n")

        install_completion(env)
        result = uninstall_completion(env)

        assert result["changed"] is True
        assert rc.read_text() == "alias ll='ls -l'\n"

    def test_not_installed(self, tmp_path: Path):
        env = _env(tmp_path, "bash")
        (tmp_path / ".bashrc").write_text("export A=1\n")
        assert uninstall_completion(env)["message"] == "Tab completion is not installed."

    def test_missing_rc_file(self, tmp_path: Path):
        result = uninstall_completion(_env(tmp_path, "zsh"))
        assert result["message"] == "Shell configuration file not found."

    def test_strip_keeps_lines_after_block(self):
        content = (
            "before\n\n"
            f"{COMPLETION_MARKER}\n"
            'complete -c dev -f -a "(dev)"\n'
            "after\n"
        )
        assert strip_completion_block(content) == "before\n\nafter\n"


class TestComplete:
    def test_parse_trailing_space(self):
        parsed = parse_comp_env({"COMP_LINE": "dev install ", "COMP_POINT": "12"})
        assert parsed["prev"] == "install"
        assert parsed["partial"] == ""

    def test_parse_partial_word(self):
        parsed = parse_comp_env({"COMP_LINE": "dev ins"})
        assert parsed["prev"] == "dev"
        assert parsed["partial"] == "ins"

    def test_top_level(self):
        lines = complete({"COMP_LINE": "dev ", "COMP_POINT": "4"})
        assert "configure:Interactive configuration wizard" in lines
        assert len(lines) == 8
        assert "update:Update devutils to the latest version" in lines

    def test_prefix_filter(self):
        assert complete({"COMP_LINE": "dev ins"}) == ["install:Install development tools"]

    def test_installer_names(self):
        lines = complete({"COMP_LINE": "dev install j"})
        assert [line.split(":")[0] for line in lines] == ["jq"]

    def test_completion_subcommands(self):
        names = [line.split(":")[0] for line in complete({"COMP_LINE": "dev completion "})]
        assert names == ["install", "uninstall"]

    def test_script_names(self):
        names = [line.split(":")[0] for line in complete({"COMP_LINE": "dev scripts o"})]
        assert names == ["o", "org-by-date"]

    def test_nothing_after_leaf(self):
        assert complete({"COMP_LINE": "dev status --json "}) == []
