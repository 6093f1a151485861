"""
Plan — the ordered list of operations for one workflow cycle.

A plan is owned by whoever runs the cycle. Builders append to it,
the executor walks it front to back, and the owner clears it when
the cycle ends.
"""

from __future__ import annotations

from collections.abc import Iterator

from boardprep.core.models.operation import Operation


class Plan:
    """Ordered, mutable sequence of operations.

    Insertion order is execution order. Operations are never reordered.
    """

    def __init__(self, title: str = "") -> None:
        self.title = title
        self._operations: list[Operation] = []

    def add(self, operation: Operation) -> Operation:
        """Append an operation and assign its ordinal id."""
        operation.id = f"op-{len(self._operations) + 1:02d}"
        self._operations.append(operation)
        return operation

    def clear(self) -> None:
        self._operations.clear()

    @property
    def operations(self) -> list[Operation]:
        return list(self._operations)

    @property
    def commands(self) -> list[str]:
        return [op.command for op in self._operations]

    def __len__(self) -> int:
        return len(self._operations)

    def __iter__(self) -> Iterator[Operation]:
        return iter(list(self._operations))

    def __repr__(self) -> str:
        return f"<Plan title={self.title!r} operations={len(self)}>"
