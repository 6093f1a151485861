"""
Shell command adapter — hand a command string to /bin/sh.

Package-manager and editor install steps are opaque to us: the only
thing we rely on is the exit status (0 = success, anything else =
failure).
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import time
from pathlib import Path

from boardprep.adapters.base import Adapter, ExecutionContext
from boardprep.core.models.operation import Receipt

logger = logging.getLogger(__name__)


class ShellCommandAdapter(Adapter):
    """Execute shell commands and report their exit status.

    Operation params:
        command (str): The command to execute.

    Output streams straight to the terminal so package-manager progress
    stays visible. No timeout is applied. A hung package manager blocks
    until it returns.
    """

    @property
    def name(self) -> str:
        return "shell"

    def is_available(self) -> bool:
        return shutil.which("sh") is not None

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        command = context.params.get("command", "")
        if not command:
            return False, "Missing required param: 'command'"

        if not Path(context.working_dir).is_dir():
            return False, f"Working directory does not exist: {context.working_dir}"

        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        command = context.params.get("command", "")
        op_id = context.operation.id

        logger.debug("Executing: %s (cwd=%s)", command, context.working_dir)
        start = time.monotonic()

        try:
            result = subprocess.run(command, shell=True, cwd=context.working_dir)
        except OSError as e:
            return Receipt.failure(
                adapter=self.name,
                operation_id=op_id,
                command=command,
                error=f"Command execution error: {e}",
            )

        elapsed_ms = int((time.monotonic() - start) * 1000)

        if result.returncode == 0:
            return Receipt.success(
                adapter=self.name,
                operation_id=op_id,
                command=command,
                duration_ms=elapsed_ms,
                return_code=0,
            )

        logger.debug("Command exited %d: %s", result.returncode, command)
        return Receipt.failure(
            adapter=self.name,
            operation_id=op_id,
            command=command,
            error=f"Command exited with code {result.returncode}",
            duration_ms=elapsed_ms,
            return_code=result.returncode,
        )
