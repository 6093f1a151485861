"""
Operation and Receipt models — the execution contract.

Operations represent queued steps. Receipts represent results.
The executor sends Operations to adapters and gets Receipts back.
Never exceptions.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field


def _now_iso() -> str:
    """Current local time as ISO string (the audit log is read by humans)."""
    return datetime.now().astimezone().isoformat(timespec="seconds")


class Operation(BaseModel):
    """One step queued in a plan.

    ``command`` is what a human reads in the audit log. For ``shell``
    operations it is also what gets executed; ``filesystem`` operations
    are driven by ``params`` and ``command`` is only a shell-equivalent
    rendering.
    """

    id: str = ""                    # ordinal id, assigned by Plan.add()
    name: str = ""                  # human-readable label
    adapter: Literal["shell", "filesystem"] = "shell"
    command: str
    params: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def shell(cls, command: str, name: str = "") -> Operation:
        """An opaque command handed to the shell."""
        return cls(
            name=name or command,
            adapter="shell",
            command=command,
            params={"command": command},
        )

    @classmethod
    def mkdir(cls, path: str, name: str = "") -> Operation:
        return cls(
            name=name or f"Create {path}",
            adapter="filesystem",
            command=f"mkdir -p {path}",
            params={"operation": "mkdir", "path": path},
        )

    @classmethod
    def symlink(cls, target: str, link: str, name: str = "") -> Operation:
        return cls(
            name=name or f"Link {link}",
            adapter="filesystem",
            command=f"ln -s {target} {link}",
            params={"operation": "symlink", "path": link, "target": target},
        )

    @classmethod
    def append_line(cls, path: str, line: str, name: str = "") -> Operation:
        return cls(
            name=name or f"Append to {path}",
            adapter="filesystem",
            command=f"echo '{line}' >> {path}",
            params={"operation": "append_line", "path": path, "content": line},
        )

    @classmethod
    def remove(cls, path: str, name: str = "") -> Operation:
        return cls(
            name=name or f"Remove {path}",
            adapter="filesystem",
            command=f"rm -f {path}",
            params={"operation": "remove", "path": path},
        )


class Receipt(BaseModel):
    """Result of executing one operation.

    Adapters NEVER raise — failures are captured here with
    status='failed'.
    """

    adapter: str
    operation_id: str
    command: str = ""
    status: Literal["ok", "failed"] = "ok"

    started_at: str = Field(default_factory=_now_iso)
    ended_at: str = Field(default_factory=_now_iso)
    duration_ms: int = 0

    output: str = ""
    error: str | None = None
    return_code: int | None = None

    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """Whether the operation succeeded."""
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        """Whether the operation failed."""
        return self.status == "failed"

    @property
    def finished(self) -> datetime:
        """Completion time as a datetime."""
        return datetime.fromisoformat(self.ended_at)

    @classmethod
    def success(
        cls,
        adapter: str,
        operation_id: str,
        output: str = "",
        **kwargs: Any,
    ) -> Receipt:
        """Create a success receipt."""
        return cls(
            adapter=adapter,
            operation_id=operation_id,
            status="ok",
            output=output,
            **kwargs,
        )

    @classmethod
    def failure(
        cls,
        adapter: str,
        operation_id: str,
        error: str,
        **kwargs: Any,
    ) -> Receipt:
        """Create a failure receipt."""
        return cls(
            adapter=adapter,
            operation_id=operation_id,
            status="failed",
            error=error,
            **kwargs,
        )
