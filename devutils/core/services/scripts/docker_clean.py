"""
``docker-clean`` — remove every Docker container, image and volume.

Asks for confirmation unless ``--force`` is given.
"""

from __future__ import annotations

from devutils.core.services.scripts.base import Script

STEPS = (
    ("containers", "docker ps -aq", "docker rm -f"),
    ("images", "docker images -aq", "docker rmi -f"),
    ("volumes", "docker volume ls -q", "docker volume rm -f"),
)


class DockerCleanScript(Script):
    name = "docker-clean"
    description = "Remove all Docker containers, images and volumes"
    usage = "Usage: docker-clean [--force|-f]"

    def run_portable(self, force: bool = False) -> int:
        if not self.shell.command_exists("docker"):
            self.error("Error: docker is not installed or not on PATH.")
            return 1
        if not self.shell.exec("docker info").ok:
            self.error("Error: Cannot connect to the Docker daemon. Is it running?")
            return 1

        if not force and not self.confirm(
            "This will remove ALL Docker containers, images and volumes. Continue?"
        ):
            self.echo("Aborted.")
            return 0

        failures = 0
        for label, list_command, remove_command in STEPS:
            # dict.fromkeys drops duplicate image ids, keeps order
            ids = list(dict.fromkeys(self.shell.exec(list_command).stdout.split()))
            if not ids:
                self.echo(f"No {label} to remove.")
                continue
            self.echo(f"Removing {len(ids)} {label}...")
            result = self.shell.exec(f"{remove_command} {' '.join(ids)}")
            if not result.ok:
                failures += 1
                self.error(f"Some {label} could not be removed:\n{result.output.strip()}")

        self.echo("Docker cleanup complete." if not failures else "Docker cleanup finished with errors.")
        return 1 if failures else 0
