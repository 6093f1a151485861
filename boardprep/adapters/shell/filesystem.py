"""
Filesystem adapter — the built-in steps that need no shell.

Directory creation, symlinks, appending a line to a config file and
removing a stale file are done in-process, so the only shell commands
left in a plan are the package-manager ones.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from boardprep.adapters.base import Adapter, ExecutionContext
from boardprep.core.models.operation import Receipt

logger = logging.getLogger(__name__)

_VALID_OPS = {"mkdir", "symlink", "append_line", "remove"}


class FilesystemAdapter(Adapter):
    """File and directory operations with receipts.

    Operation params:
        operation (str): One of 'mkdir', 'symlink', 'append_line', 'remove'.
        path (str): Target path (the link path for 'symlink').
        target (str): What the link points to (for 'symlink').
        content (str): Line to append (for 'append_line').
    """

    @property
    def name(self) -> str:
        return "filesystem"

    def is_available(self) -> bool:
        return True

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        operation = context.params.get("operation", "")
        if not operation:
            return False, "Missing required param: 'operation'"

        if operation not in _VALID_OPS:
            return False, f"Unknown operation '{operation}'. Valid: {', '.join(sorted(_VALID_OPS))}"

        if not context.params.get("path"):
            return False, "Missing required param: 'path'"

        if operation == "symlink" and not context.params.get("target"):
            return False, "Missing required param: 'target' for symlink operation"

        if operation == "append_line" and "content" not in context.params:
            return False, "Missing required param: 'content' for append_line operation"

        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        operation = context.params["operation"]
        target = Path(context.params["path"])
        if not target.is_absolute():
            target = Path(context.working_dir) / target

        try:
            if operation == "mkdir":
                output = self._mkdir(target)
            elif operation == "symlink":
                output = self._symlink(target, context.params["target"])
            elif operation == "append_line":
                output = self._append_line(target, context.params["content"])
            else:
                output = self._remove(target)
        except OSError as e:
            return Receipt.failure(
                adapter=self.name,
                operation_id=context.operation.id,
                command=context.operation.command,
                error=f"Filesystem error: {e}",
                return_code=1,
                metadata={"operation": operation, "path": str(target)},
            )

        return Receipt.success(
            adapter=self.name,
            operation_id=context.operation.id,
            command=context.operation.command,
            output=output,
            return_code=0,
            metadata={"operation": operation, "path": str(target)},
        )

    def _mkdir(self, target: Path) -> str:
        target.mkdir(parents=True, exist_ok=True)
        return f"Directory created: {target}"

    def _symlink(self, link: Path, points_to: str) -> str:
        # Fails with FileExistsError if something is already there
        os.symlink(points_to, link)
        return f"Linked {link} -> {points_to}"

    def _append_line(self, target: Path, line: str) -> str:
        prefix = ""
        if target.is_file():
            existing = target.read_text(encoding="utf-8")
            if existing and not existing.endswith("\n"):
                prefix = "\n"
        with target.open("a", encoding="utf-8") as f:
            f.write(f"{prefix}{line}\n")
        return f"Appended 1 line to {target}"

    def _remove(self, target: Path) -> str:
        target.unlink(missing_ok=True)
        return f"Removed {target}"
