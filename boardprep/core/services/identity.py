"""
Invoker identity — who is running us, and with what privilege.

The tool runs under sudo, but per-user steps (group membership,
desktop links, editor extensions) target the account that invoked
sudo. That account comes from --user or the SUDO_USER variable.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

ROOT_UID = 0


@dataclass
class Invoker:
    """The account provisioning is performed for."""

    user: str
    working_dir: str


def is_privileged() -> bool:
    """Check the effective uid against root."""
    return os.geteuid() == ROOT_UID


def require_root() -> str | None:
    """Return an error message when not running as root, else None."""
    if is_privileged():
        return None
    return "This tool must be run with administrative privileges. Re-run it as: sudo boardprep"


def resolve_invoker(user_override: str | None = None) -> tuple[Invoker | None, str | None]:
    """Work out the invoking (non-root) user.

    Precedence: explicit override, then SUDO_USER. Running as plain
    root with neither set is rejected, because every per-user path
    would end up pointing at root's home.

    Returns:
        (invoker, error). Exactly one of them is None.
    """
    user = (user_override or os.environ.get("SUDO_USER") or "").strip()
    if not user:
        return None, (
            "Cannot tell which user to set up: SUDO_USER is not set. "
            "Run through sudo from your normal account, or pass --user NAME."
        )
    if user == "root":
        return None, (
            "Refusing to provision the root account. "
            "Run through sudo from your normal account, or pass --user NAME."
        )

    logger.debug("Provisioning for user %s", user)
    return Invoker(user=user, working_dir=os.getcwd()), None
