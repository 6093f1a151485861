"""
Tests for the executor — ordering, fail-fast, and audit recording.
"""

from pathlib import Path

import pytest

from boardprep.adapters.registry import AdapterRegistry
from boardprep.core.engine.executor import ExecutionReport, execute_plan
from boardprep.core.models.operation import Operation, Receipt
from boardprep.core.models.plan import Plan
from boardprep.core.persistence.audit import AuditLog


def _plan(n: int) -> Plan:
    plan = Plan("test")
    for i in range(1, n + 1):
        plan.add(Operation.shell(f"step {i}"))
    return plan


class TestExecutionReport:
    def test_empty(self):
        report = ExecutionReport(planned=0)
        assert report.ok
        assert report.status == "empty"
        assert report.failure is None

    def test_failed(self):
        report = ExecutionReport(planned=3)
        report.receipts.append(Receipt.success(adapter="shell", operation_id="op-01"))
        report.receipts.append(Receipt.failure(adapter="shell", operation_id="op-02", error="x"))
        assert not report.ok
        assert report.status == "failed"
        assert report.succeeded == 1
        assert report.not_run == 1
        assert report.failure.operation_id == "op-02"

    def test_to_dict(self):
        report = ExecutionReport(title="t", planned=1)
        report.receipts.append(Receipt.success(adapter="shell", operation_id="op-01"))
        d = report.to_dict()
        assert d["status"] == "ok"
        assert d["succeeded"] == 1
        assert len(d["receipts"]) == 1


class TestExecutePlan:
    @pytest.mark.parametrize("n", [0, 1, 5])
    def test_all_succeed(self, mock_registry: AdapterRegistry, n: int):
        plan = _plan(n)
        audit = AuditLog()
        report = execute_plan(plan, mock_registry, audit=audit)
        assert report.ok
        assert report.succeeded == n
        assert len(audit.successes) == n
        assert audit.failure is None

    def test_runs_in_insertion_order(self, mock_registry: AdapterRegistry):
        execute_plan(_plan(4), mock_registry)
        assert mock_registry.get("shell").commands == ["step 1", "step 2", "step 3", "step 4"]

    @pytest.mark.parametrize("k", [1, 3, 5])
    def test_stops_at_first_failure(self, mock_registry: AdapterRegistry, k: int):
        shell = mock_registry.get("shell")
        shell.set_failure(f"op-{k:02d}", error="E: Unable to locate package")
        audit = AuditLog()

        report = execute_plan(_plan(5), mock_registry, audit=audit)

        assert not report.ok
        assert report.succeeded == k - 1
        assert report.failure.command == f"step {k}"
        assert report.not_run == 5 - k
        assert shell.call_count == k  # nothing after k ran
        assert len(audit.successes) == k - 1
        assert audit.failure.command == f"step {k}"

    def test_mixed_adapters(self, mock_registry: AdapterRegistry):
        plan = Plan()
        plan.add(Operation.shell("apt-get update"))
        plan.add(Operation.mkdir("/mnt/hgfs/"))
        plan.add(Operation.shell("apt-get install -y code"))
        report = execute_plan(plan, mock_registry)
        assert report.succeeded == 3
        assert mock_registry.get("filesystem").commands == ["mkdir -p /mnt/hgfs/"]

    def test_later_operations_never_touch_the_system(self, tmp_path: Path):
        plan = Plan()
        plan.add(Operation.shell("touch first"))
        plan.add(Operation.shell("false"))
        plan.add(Operation.shell("touch third"))

        report = execute_plan(plan, AdapterRegistry.default(), working_dir=str(tmp_path))

        assert report.failure.command == "false"
        assert report.failure.return_code == 1
        assert (tmp_path / "first").exists()
        assert not (tmp_path / "third").exists()
