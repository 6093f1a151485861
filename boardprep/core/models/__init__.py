"""
Domain models — Pydantic types for provisioning.

All models are re-exported here for convenient access:

    from boardprep.core.models import Operation, Plan, Receipt, ProvisionConfig
"""

from boardprep.core.models.config import (
    AuditSettings,
    EditorSettings,
    PackageSettings,
    ProvisionConfig,
    RequiredTool,
    SharedFolderSettings,
    SupportSettings,
    ToolLink,
    VerifySettings,
)
from boardprep.core.models.operation import Operation, Receipt
from boardprep.core.models.plan import Plan

__all__ = [
    "AuditSettings",
    "EditorSettings",
    # operation.py
    "Operation",
    "PackageSettings",
    # plan.py
    "Plan",
    # config.py
    "ProvisionConfig",
    "Receipt",
    "RequiredTool",
    "SharedFolderSettings",
    "SupportSettings",
    "ToolLink",
    "VerifySettings",
]
