"""
Executor — run a plan front to back, stop at the first failure.

Installation steps depend on each other, so there is no "continue on
error": the first operation that exits non-zero ends the run. The
executor does NOT exit the process. It returns an ExecutionReport and
the caller decides what to do with a failure.

Flow:
    plan → adapter registry → receipts → (audit log) → report
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from boardprep.adapters.registry import AdapterRegistry
from boardprep.core.models.operation import Receipt
from boardprep.core.models.plan import Plan
from boardprep.core.persistence.audit import AuditLog

logger = logging.getLogger(__name__)


@dataclass
class ExecutionReport:
    """Result of executing a plan.

    Holds every receipt produced, which is all successes plus at
    most one trailing failure.
    """

    title: str = ""
    planned: int = 0
    receipts: list[Receipt] = field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.receipts if r.ok)

    @property
    def failure(self) -> Receipt | None:
        """The operation that stopped the run, if any."""
        for r in self.receipts:
            if r.failed:
                return r
        return None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @property
    def not_run(self) -> int:
        """Planned operations that were never attempted."""
        return self.planned - len(self.receipts)

    @property
    def status(self) -> str:
        if not self.ok:
            return "failed"
        if self.planned == 0:
            return "empty"
        return "ok"

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "status": self.status,
            "planned": self.planned,
            "succeeded": self.succeeded,
            "not_run": self.not_run,
            "receipts": [r.model_dump(mode="json") for r in self.receipts],
        }


def execute_plan(
    plan: Plan,
    registry: AdapterRegistry,
    audit: AuditLog | None = None,
    working_dir: str = ".",
) -> ExecutionReport:
    """Execute every operation in *plan*, in order, until one fails.

    Args:
        plan: The operations to run.
        registry: Adapter registry for dispatch.
        audit: If given, each receipt is recorded into it as produced.
        working_dir: Working directory for shell operations.

    Returns:
        ExecutionReport. ``report.failure`` is set when the run stopped
        early; operations after it were never executed.
    """
    report = ExecutionReport(title=plan.title, planned=len(plan))

    for operation in plan:
        logger.info("→ [%s] %s", operation.id, operation.command)
        receipt = registry.execute_operation(operation, working_dir=working_dir)
        report.receipts.append(receipt)

        if audit is not None:
            audit.record(receipt)

        if receipt.failed:
            logger.error(
                "✗ [%s] %s → %s",
                operation.id,
                operation.command,
                receipt.error,
            )
            break

        logger.info("✓ [%s] %s (%dms)", operation.id, operation.command, receipt.duration_ms)

    if report.not_run:
        logger.info("Stopped early: %d operation(s) not run", report.not_run)

    return report
