"""
Provision use case — compose sub-plans into a workflow and run it.

One call is one full cycle: build a fresh plan, execute it, write the
audit report, and hand the outcome back. Nothing survives between
cycles, so a second workflow never sees the first one's operations or
records.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from boardprep.adapters.registry import AdapterRegistry
from boardprep.core.engine.executor import ExecutionReport, execute_plan
from boardprep.core.engine.planner import (
    Prompter,
    add_editor_set,
    add_package_set,
    add_shared_folder_set,
    add_verification_set,
)
from boardprep.core.models.config import ProvisionConfig
from boardprep.core.models.plan import Plan
from boardprep.core.persistence.audit import AuditLog
from boardprep.core.services import prechecks
from boardprep.core.services.identity import Invoker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Workflow:
    """A named composition of sub-plans."""

    key: str
    title: str
    steps: tuple[str, ...]


WORKFLOWS: dict[str, Workflow] = {
    "full": Workflow("full", "Full setup", ("packages", "editor", "share")),
    "packages": Workflow("packages", "System packages", ("packages",)),
    "editor": Workflow("editor", "Editor", ("editor",)),
    "share": Workflow("share", "Shared folder", ("share",)),
    "verify": Workflow("verify", "Verify installation", ("verify",)),
}


@dataclass
class WorkflowResult:
    """Outcome of one workflow cycle."""

    workflow: Workflow
    report: ExecutionReport
    audit_path: Path | None = None
    audit_error: str | None = None

    @property
    def ok(self) -> bool:
        return self.report.ok

    def to_dict(self) -> dict:
        return {
            "workflow": self.workflow.key,
            "audit_path": str(self.audit_path) if self.audit_path else None,
            "audit_error": self.audit_error,
            "report": self.report.to_dict(),
        }


def build_workflow_plan(
    workflow: Workflow,
    config: ProvisionConfig,
    invoker: Invoker,
    prompter: Prompter,
) -> Plan:
    """Build a fresh plan for *workflow* from current system state."""
    plan = Plan(workflow.title)

    for step in workflow.steps:
        if step == "packages":
            added = add_package_set(plan, config, invoker.user)
        elif step == "editor":
            added = add_editor_set(plan, config, invoker.user)
        elif step == "share":
            added = add_shared_folder_set(plan, config, invoker.user, prompter)
        elif step == "verify":
            added = add_verification_set(plan, config)
        else:
            raise ValueError(f"Unknown workflow step: {step}")
        logger.debug("Sub-plan %s added %d operation(s)", step, added)

    logger.info("Plan '%s' has %d operation(s)", plan.title, len(plan))
    return plan


def run_workflow(
    workflow: Workflow,
    config: ProvisionConfig,
    invoker: Invoker,
    prompter: Prompter,
    registry: AdapterRegistry | None = None,
) -> WorkflowResult:
    """Plan, execute and audit one workflow.

    The plan and audit log are created here and discarded here. The
    caller only gets the report and the audit file location.
    """
    if registry is None:
        registry = AdapterRegistry.default()

    plan = build_workflow_plan(workflow, config, invoker, prompter)
    audit = AuditLog(
        user=invoker.user,
        working_dir=invoker.working_dir,
        workflow=workflow.title,
    )

    report = execute_plan(plan, registry, audit=audit, working_dir=invoker.working_dir)
    result = WorkflowResult(workflow=workflow, report=report)

    audit_dir = Path(invoker.working_dir) / config.audit.directory
    try:
        result.audit_path = audit.write(audit_dir)
    except OSError as e:
        logger.error("Failed to write audit log to %s: %s", audit_dir, e)
        result.audit_error = str(e)

    plan.clear()
    audit.clear()
    return result


def tool_report(config: ProvisionConfig) -> list[tuple[str, bool]]:
    """Whether each reported tool resolves on PATH right now."""
    return [(name, prechecks.command_resolvable(name)) for name in config.verify.report_tools]
