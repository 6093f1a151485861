"""
Adapter registry — central dispatch for operation execution.

The executor never talks to adapters directly — always through
the registry.
"""

from __future__ import annotations

import logging
import time
from typing import Any

from boardprep.adapters.base import Adapter, ExecutionContext
from boardprep.core.models.operation import Operation, Receipt

logger = logging.getLogger(__name__)


class AdapterRegistry:
    """Central registry and dispatcher for adapters."""

    def __init__(self) -> None:
        self._adapters: dict[str, Adapter] = {}

    @classmethod
    def default(cls) -> AdapterRegistry:
        """Registry wired with the real shell and filesystem adapters."""
        from boardprep.adapters.shell.command import ShellCommandAdapter
        from boardprep.adapters.shell.filesystem import FilesystemAdapter

        registry = cls()
        registry.register(ShellCommandAdapter())
        registry.register(FilesystemAdapter())
        return registry

    def register(self, adapter: Adapter) -> None:
        """Register an adapter under its name."""
        name = adapter.name
        if name in self._adapters:
            logger.warning("Overwriting existing adapter: %s", name)
        self._adapters[name] = adapter
        logger.debug("Registered adapter: %s", name)

    def get(self, name: str) -> Adapter | None:
        """Look up an adapter by name."""
        return self._adapters.get(name)

    def adapter_status(self) -> dict[str, dict[str, Any]]:
        """Get availability status of all registered adapters."""
        status = {}
        for name, adapter in self._adapters.items():
            try:
                available = adapter.is_available()
            except Exception as e:
                logger.debug("Availability check for %s raised: %s", name, e)
                available = False
            status[name] = {
                "name": name,
                "available": available,
                "type": adapter.__class__.__name__,
            }
        return status

    def execute_operation(self, operation: Operation, working_dir: str = ".") -> Receipt:
        """Execute an operation through the appropriate adapter.

        Resolves the adapter, validates, executes, and returns a
        Receipt. Never raises.
        """
        start_time = time.monotonic()

        context = ExecutionContext(
            operation=operation,
            working_dir=working_dir,
            params=operation.params,
        )

        adapter = self.get(operation.adapter)
        if adapter is None:
            return Receipt.failure(
                adapter=operation.adapter,
                operation_id=operation.id,
                command=operation.command,
                error=f"No adapter registered for '{operation.adapter}'",
            )

        try:
            is_valid, error_msg = adapter.validate(context)
            if not is_valid:
                return Receipt.failure(
                    adapter=operation.adapter,
                    operation_id=operation.id,
                    command=operation.command,
                    error=f"Validation failed: {error_msg}",
                )
        except Exception as e:
            return Receipt.failure(
                adapter=operation.adapter,
                operation_id=operation.id,
                command=operation.command,
                error=f"Validation error: {e}",
            )

        try:
            receipt = adapter.execute(context)
        except Exception as e:
            logger.error("Adapter %s raised during execution: %s", operation.adapter, e)
            receipt = Receipt.failure(
                adapter=operation.adapter,
                operation_id=operation.id,
                command=operation.command,
                error=f"Unexpected error: {e}",
            )

        if not receipt.command:
            receipt.command = operation.command
        receipt.duration_ms = int((time.monotonic() - start_time) * 1000)

        return receipt
