"""
Audit log — human-readable record of one provisioning cycle.

Collects the receipts of one executor run (successes, then at most one
failure) together with who ran it, from where and when, and writes
them to a dated text file. The file name only carries the date, so a
second run on the same day replaces the earlier report.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, Field

from boardprep.core.models.operation import Receipt

logger = logging.getLogger(__name__)

AUDIT_FILE_PATTERN = "boardprep-{date}.log"

_RULE = "=" * 50


def audit_filename(when: datetime | None = None) -> str:
    """File name for the report of a run on *when*'s calendar day."""
    return AUDIT_FILE_PATTERN.format(date=(when or datetime.now()).strftime("%Y-%m-%d"))


class AuditLog(BaseModel):
    """Outcome records of one cycle plus run metadata."""

    user: str = ""
    working_dir: str = ""
    workflow: str = ""
    started_at: datetime = Field(default_factory=datetime.now)

    successes: list[Receipt] = Field(default_factory=list)
    failure: Receipt | None = None

    def record(self, receipt: Receipt) -> None:
        """Add a receipt. A run can only ever fail once."""
        if receipt.ok:
            self.successes.append(receipt)
            return
        if self.failure is not None:
            raise ValueError(
                f"Audit log already holds a failure ({self.failure.command}); "
                "execution should have stopped"
            )
        self.failure = receipt

    def clear(self) -> None:
        """Forget all recorded outcomes (metadata is kept)."""
        self.successes.clear()
        self.failure = None

    def render(self) -> str:
        """The report as plain text."""
        lines = [
            _RULE,
            " boardprep provisioning report",
            _RULE,
            f"Date:              {self.started_at:%Y-%m-%d %H:%M:%S}",
            f"User:              {self.user}",
            f"Working directory: {self.working_dir}",
        ]
        if self.workflow:
            lines.append(f"Workflow:          {self.workflow}")

        lines.append("")
        lines.append(f"Successful operations ({len(self.successes)}):")
        if not self.successes:
            lines.append("  none")
        for receipt in self.successes:
            lines.append(f"  [{receipt.finished:%H:%M:%S}] {receipt.command}")

        lines.append("")
        lines.append("Failures:")
        if self.failure is None:
            lines.append("  none")
        else:
            lines.append(f"  [{self.failure.finished:%H:%M:%S}] {self.failure.command}")
            if self.failure.error:
                lines.append(f"    error: {self.failure.error}")

        return "\n".join(lines) + "\n"

    def write(self, directory: Path | None = None) -> Path:
        """Write the report to the dated file in *directory* (default: cwd).

        Returns:
            Path of the written file.

        Raises:
            OSError: If the file cannot be written.
        """
        target_dir = directory or Path.cwd()
        path = target_dir / audit_filename(self.started_at)
        path.write_text(self.render(), encoding="utf-8")
        logger.debug(
            "Audit log written: %s (%d ok, failure=%s)",
            path,
            len(self.successes),
            self.failure is not None,
        )
        return path
