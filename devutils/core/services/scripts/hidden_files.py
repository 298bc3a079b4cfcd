"""
``show-hidden-files`` / ``hide-hidden-files`` — toggle hidden-file
visibility in the desktop file manager.
"""

from __future__ import annotations

from devutils.core.services.scripts.base import Script

EXPLORER_ADVANCED_KEY = r"HKCU\Software\Microsoft\Windows\CurrentVersion\Explorer\Advanced"
GTK_FILE_CHOOSER_SCHEMA = "org.gtk.Settings.FileChooser"

# Explorer "Hidden" value: 1 shows hidden files, 2 hides them
EXPLORER_SHOW = 1
EXPLORER_HIDE = 2


class _HiddenFilesScript(Script):
    show: bool = True

    @property
    def verb(self) -> str:
        return "shown" if self.show else "hidden"

    def run_macos(self) -> int:
        flag = "true" if self.show else "false"
        result = self.shell.exec(f"defaults write com.apple.finder AppleShowAllFiles -bool {flag}")
        if not result.ok:
            self.error(f"Failed to update Finder settings:\n{result.output.strip()}")
            return 1
        self.shell.exec("killall Finder")
        self.echo(f"Hidden files are now {self.verb} in Finder.")
        return 0

    def run_portable(self) -> int:
        if not self.shell.command_exists("gsettings"):
            self.error(
                "This command requires a GNOME-based desktop (gsettings not found).\n"
                "Toggle hidden files in your file manager with Ctrl+H."
            )
            return 1
        flag = "true" if self.show else "false"
        result = self.shell.exec(f"gsettings set {GTK_FILE_CHOOSER_SCHEMA} show-hidden {flag}")
        if not result.ok:
            self.error(f"Failed to update GNOME settings:\n{result.output.strip()}")
            return 1
        self.echo(f"Hidden files are now {self.verb} in GNOME file dialogs.")
        return 0

    def run_windows(self) -> int:
        value = EXPLORER_SHOW if self.show else EXPLORER_HIDE
        result = self.shell.exec(
            f'reg add "{EXPLORER_ADVANCED_KEY}" /v Hidden /t REG_DWORD /d {value} /f',
            # keep Git Bash from rewriting /v, /t, ... into paths
            env={"MSYS_NO_PATHCONV": "1"},
        )
        if not result.ok:
            self.error(f"Failed to update Explorer settings:\n{result.output.strip()}")
            return 1
        self.echo(f"Hidden files are now {self.verb} in Explorer.")
        self.echo("Press F5 in open Explorer windows to refresh.")
        return 0


class ShowHiddenFilesScript(_HiddenFilesScript):
    name = "show-hidden-files"
    description = "Show hidden files in Finder / Explorer / GNOME"
    show = True


class HideHiddenFilesScript(_HiddenFilesScript):
    name = "hide-hidden-files"
    description = "Hide hidden files in Finder / Explorer / GNOME"
    show = False
