"""
Tests for the install use case — dependency resolution and plan execution.
"""

import pytest

from devutils.adapters.mock import MockShell
from devutils.core.models.install import InstallStatus
from devutils.core.services.installs import INSTALLERS, Dependency, Installer
from devutils.core.use_cases.install import plan_install, resolve_dependencies, run_plan


class _CycleA(Installer):
    name = "cycle-a"
    title = "Cycle A"
    command = "cycle-a"
    description = "test"
    apt_packages = ("cycle-a",)
    depends_on = (Dependency("cycle-b"),)


class _CycleB(Installer):
    name = "cycle-b"
    title = "Cycle B"
    command = "cycle-b"
    description = "test"
    apt_packages = ("cycle-b",)
    depends_on = (Dependency("cycle-a"),)


@pytest.fixture
def cyclic_installers(monkeypatch):
    monkeypatch.setitem(INSTALLERS, "cycle-a", _CycleA)
    monkeypatch.setitem(INSTALLERS, "cycle-b", _CycleB)


class TestPlan:
    def test_unknown_package(self, ubuntu):
        plan = plan_install("not-a-tool", shell=MockShell())
        assert not plan.known
        assert not plan.runnable

    def test_already_installed(self, ubuntu):
        plan = plan_install("jq", shell=MockShell(present={"jq"}))
        assert plan.already_installed
        assert plan.steps == []

    def test_not_eligible(self, windows):
        plan = plan_install("tmux", shell=MockShell())
        assert not plan.eligible

    def test_dependency_first(self, ubuntu_desktop):
        plan = plan_install("brave-browser", shell=MockShell())
        assert [s.name for s in plan.steps] == ["curl", "brave-browser"]
        assert plan.runnable

    def test_installed_dependency_is_skipped(self, ubuntu_desktop):
        plan = plan_install("brave-browser", shell=MockShell(present={"curl"}))
        assert [s.name for s in plan.steps] == ["brave-browser"]
        assert "Dependency already installed: curl" in plan.notes

    def test_platform_scoped_dependency(self, macos):
        plan = plan_install("node", shell=MockShell())
        assert [s.name for s in plan.steps] == ["node"]
        assert any("not needed on macos" in n for n in plan.notes)

    def test_homebrew_needs_clt_on_macos(self, macos):
        shell = MockShell()
        shell.set_failure("xcode-select -p")
        plan = plan_install("homebrew", shell=shell)
        assert [s.name for s in plan.steps] == ["xcode-clt", "homebrew"]

    def test_cycle_is_broken(self, ubuntu, cyclic_installers):
        notes: list[str] = []
        steps = resolve_dependencies("cycle-a", shell=MockShell(), notes=notes)
        assert [s.name for s in steps] == ["cycle-b"]
        assert "Skipping circular dependency: cycle-a" in notes

    def test_to_dict(self, ubuntu_desktop):
        data = plan_install("brave-browser", shell=MockShell()).to_dict()
        assert data["target"] == "brave-browser"
        assert data["steps"][0] == {"name": "curl", "title": "curl"}


class TestRunPlan:
    def _failing_curl(self) -> MockShell:
        shell = MockShell(present={"apt-get"})
        shell.set_failure("apt-get install -y curl")
        return shell

    def test_stops_after_failure_by_default(self, ubuntu_desktop):
        shell = self._failing_curl()
        plan = plan_install("brave-browser", shell=shell)
        reports = run_plan(plan, shell=shell)
        assert len(reports) == 1
        assert reports[0].status is InstallStatus.INSTALL_FAILED

    def test_continue_when_allowed(self, ubuntu_desktop):
        shell = self._failing_curl()
        plan = plan_install("brave-browser", shell=shell)
        asked = []
        reports = run_plan(
            plan, shell=shell,
            should_continue=lambda step, report: asked.append(step.name) or True,
        )
        assert asked == ["curl"]
        assert [r.tool for r in reports] == ["curl", "brave-browser"]

    def test_progress_and_step_callbacks(self, ubuntu):
        shell = MockShell(present={"apt-get"})
        shell.set_response("apt-get install -y jq", provides=["jq"])
        plan = plan_install("jq", shell=shell)

        steps, lines = [], []
        reports = run_plan(plan, shell=shell, on_progress=lines.append, on_step=steps.append)
        assert [s.name for s in steps] == ["jq"]
        assert reports[0].status is InstallStatus.INSTALLED
        assert "Installing jq via APT..." in lines
