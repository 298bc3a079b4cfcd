"""
Install use case — resolve dependencies and run installers in order.

Dependencies come from each installer's ``depends_on``: sorted by
priority, filtered to the current platform, skipped when ineligible or
already present.  A dependency cycle is broken by skipping the edge
that closes it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from devutils.adapters.shell.command import Shell
from devutils.core.models.install import InstallReport
from devutils.core.models.platform import PlatformContext
from devutils.core.services.installs import INSTALLERS, ProgressCallback, get_installer
from devutils.core.services.platform_detect import detect

logger = logging.getLogger(__name__)


@dataclass
class PlanStep:
    name: str
    title: str

    def to_dict(self) -> dict:
        return {"name": self.name, "title": self.title}


@dataclass
class InstallPlan:
    """What ``dev install <name>`` is going to do."""

    target: str
    title: str = ""
    known: bool = True
    already_installed: bool = False
    eligible: bool = True
    steps: list[PlanStep] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)

    @property
    def runnable(self) -> bool:
        return self.known and self.eligible and not self.already_installed

    def to_dict(self) -> dict:
        return {
            "target": self.target,
            "known": self.known,
            "already_installed": self.already_installed,
            "eligible": self.eligible,
            "steps": [s.to_dict() for s in self.steps],
            "notes": self.notes,
        }


def resolve_dependencies(
    name: str,
    shell: Shell | None = None,
    ctx: PlatformContext | None = None,
    notes: list[str] | None = None,
) -> list[PlanStep]:
    """Installers that must run before ``name``, dependencies first."""
    kind = detect(ctx).type
    notes = notes if notes is not None else []
    ordered: list[PlanStep] = []
    visited: set[str] = set()

    def visit(current: str, stack: set[str]) -> None:
        cls = INSTALLERS.get(current)
        if cls is None:
            return
        stack = stack | {current}
        for dep in sorted(cls.depends_on, key=lambda d: d.priority):
            if dep.name in stack:
                notes.append(f"Skipping circular dependency: {dep.name}")
                continue
            if dep.name in visited:
                continue
            if not dep.applies_to(kind):
                notes.append(f"Skipping {dep.name}: not needed on {kind.value}")
                continue
            installer = get_installer(dep.name, shell=shell, ctx=ctx)
            if installer is None:
                notes.append(f"Skipping unknown dependency: {dep.name}")
                continue
            if not installer.is_eligible():
                notes.append(f"Skipping ineligible dependency: {dep.name}")
                continue
            visited.add(dep.name)
            if installer.is_installed():
                notes.append(f"Dependency already installed: {dep.name}")
                continue
            visit(dep.name, stack)
            ordered.append(PlanStep(dep.name, installer.title))

    visit(name, set())
    return ordered


def plan_install(
    name: str,
    shell: Shell | None = None,
    ctx: PlatformContext | None = None,
) -> InstallPlan:
    """Check the target and work out the ordered install steps."""
    installer = get_installer(name, shell=shell, ctx=ctx)
    if installer is None:
        return InstallPlan(target=name, known=False)

    plan = InstallPlan(target=installer.name, title=installer.title)
    if installer.is_installed():
        plan.already_installed = True
        return plan
    if not installer.is_eligible():
        plan.eligible = False
        return plan

    plan.steps = resolve_dependencies(installer.name, shell, ctx, plan.notes)
    plan.steps.append(PlanStep(installer.name, installer.title))
    logger.debug("Install plan for %s: %s", name, [s.name for s in plan.steps])
    return plan


def run_plan(
    plan: InstallPlan,
    shell: Shell | None = None,
    ctx: PlatformContext | None = None,
    on_progress: ProgressCallback | None = None,
    on_step: Callable[[PlanStep], None] | None = None,
    should_continue: Callable[[PlanStep, InstallReport], bool] | None = None,
) -> list[InstallReport]:
    """Run every step; after a failure ask ``should_continue`` (default: stop)."""
    reports: list[InstallReport] = []
    for index, step in enumerate(plan.steps):
        if on_step:
            on_step(step)
        installer = get_installer(step.name, shell=shell, ctx=ctx, on_progress=on_progress)
        report = installer.install()
        reports.append(report)
        last = index == len(plan.steps) - 1
        if not report.succeeded and not last:
            if should_continue is None or not should_continue(step, report):
                break
    return reports
