"""
Mock adapter — test double for the shell and filesystem adapters.

Records every operation it receives and returns success unless told
otherwise per operation id.
"""

from __future__ import annotations

from boardprep.adapters.base import Adapter, ExecutionContext
from boardprep.core.models.operation import Receipt


class MockAdapter(Adapter):
    """Universal mock adapter for testing.

    By default, returns success for everything. Can be configured
    with custom responses per operation ID.
    """

    def __init__(
        self,
        adapter_name: str = "mock",
        available: bool = True,
        default_output: str = "[mock] executed",
    ):
        self._name = adapter_name
        self._available = available
        self._default_output = default_output
        self._responses: dict[str, Receipt] = {}
        self._call_log: list[ExecutionContext] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_log(self) -> list[ExecutionContext]:
        """All execution contexts this mock has received."""
        return self._call_log

    @property
    def call_count(self) -> int:
        """Number of times execute has been called."""
        return len(self._call_log)

    @property
    def commands(self) -> list[str]:
        """Commands of every executed operation, in call order."""
        return [ctx.operation.command for ctx in self._call_log]

    def is_available(self) -> bool:
        return self._available

    def set_response(self, operation_id: str, receipt: Receipt) -> None:
        """Set a custom response for a specific operation ID."""
        self._responses[operation_id] = receipt

    def set_failure(
        self,
        operation_id: str,
        error: str = "Mock failure",
        return_code: int = 1,
    ) -> None:
        """Configure a specific operation to fail."""
        self._responses[operation_id] = Receipt.failure(
            adapter=self._name,
            operation_id=operation_id,
            error=error,
            return_code=return_code,
        )

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        self._call_log.append(context)

        if context.operation.id in self._responses:
            return self._responses[context.operation.id].model_copy()

        return Receipt.success(
            adapter=self._name,
            operation_id=context.operation.id,
            command=context.operation.command,
            output=self._default_output,
            return_code=0,
            metadata={"mock": True},
        )

    def reset(self) -> None:
        """Clear call log and custom responses."""
        self._call_log.clear()
        self._responses.clear()
