"""Adapters — the shell and filesystem bindings the executor drives.

Public re-exports for convenient access.
"""

from boardprep.adapters.base import Adapter, ExecutionContext
from boardprep.adapters.mock import MockAdapter
from boardprep.adapters.registry import AdapterRegistry

__all__ = [
    "Adapter",
    "AdapterRegistry",
    "ExecutionContext",
    "MockAdapter",
]
