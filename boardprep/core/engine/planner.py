"""
Plan builder — named sub-plans appended onto a shared Plan.

Each ``add_*`` function appends to the plan it is given instead of
returning a new one, so a workflow can stack several sub-plans into a
single executable unit:

    plan = Plan("Full setup")
    add_package_set(plan, config, user)
    add_editor_set(plan, config, user)
    add_shared_folder_set(plan, config, user, prompter)

Conditional steps consult ``prechecks`` at build time, every time.
Each function returns the number of operations it appended.
"""

from __future__ import annotations

import logging
import posixpath
import re
from collections.abc import Callable
from dataclasses import dataclass

from boardprep.core.models.config import ProvisionConfig
from boardprep.core.models.operation import Operation
from boardprep.core.models.plan import Plan
from boardprep.core.services import prechecks

logger = logging.getLogger(__name__)

_YES = {"y", "yes"}
_NO = {"n", "no"}
_PLACEHOLDER = re.compile(r"\{(\w+)\}")


def fill(template: str, **values: str) -> str:
    """Substitute ``{user}``-style placeholders in a configured command.

    Only the names passed in are replaced. Any other brace text, such as
    ``find -exec rm {} +`` or ``awk '{print}'``, is left as written.
    """
    return _PLACEHOLDER.sub(
        lambda m: values.get(m.group(1), m.group(0)),
        template,
    )


@dataclass
class Prompter:
    """How the interactive sub-plans talk to the person at the keyboard."""

    ask: Callable[[str], str]
    say: Callable[[str], None]


# ── Package set ─────────────────────────────────────────────────


def add_package_set(plan: Plan, config: ProvisionConfig, user: str) -> int:
    """Fixed package-manager steps plus the group-membership change."""
    before = len(plan)
    for command in config.packages.commands:
        plan.add(Operation.shell(fill(command, user=user)))
    if config.packages.group_command:
        plan.add(Operation.shell(
            fill(config.packages.group_command, user=user),
            name=f"Add {user} to device groups",
        ))
    return len(plan) - before


# ── Editor set ──────────────────────────────────────────────────


def add_editor_set(plan: Plan, config: ProvisionConfig, user: str) -> int:
    """Drop stale editor files if present, then the editor install steps."""
    before = len(plan)
    for legacy in config.editor.legacy_files:
        path = fill(legacy, user=user)
        present = prechecks.path_exists(path) or prechecks.symlink_exists(path)
        logger.debug(prechecks.describe("legacy_file_absent", path, not present))
        if present:
            plan.add(Operation.remove(path, name=f"Remove legacy editor file {path}"))
    for command in config.editor.commands:
        plan.add(Operation.shell(fill(command, user=user)))
    return len(plan) - before


# ── Shared-folder set ───────────────────────────────────────────


def ask_yes_no(question: str, prompter: Prompter) -> bool:
    """Ask until the answer is yes or no (any case)."""
    while True:
        answer = prompter.ask(question).strip().lower()
        if answer in _YES:
            return True
        if answer in _NO:
            return False
        prompter.say("Please answer 'y' or 'n'.")


def ask_folder_name(prompter: Prompter) -> str:
    """Ask for the shared folder name until a usable one is given."""
    while True:
        name = prompter.ask("Name of the shared folder (as configured on the host)").strip()
        if name and "/" not in name and name not in (".", ".."):
            return name
        prompter.say("Folder name must be non-empty and must not contain '/'.")


def add_shared_folder_set(
    plan: Plan,
    config: ProvisionConfig,
    user: str,
    prompter: Prompter,
) -> int:
    """Mount root, desktop link and persistent mount entry for a host share.

    Appends nothing when the user declines.
    """
    if not ask_yes_no("Set up a host shared folder? [y/n]", prompter):
        logger.info("Shared folder setup declined")
        return 0

    folder = ask_folder_name(prompter)
    settings = config.shared_folder
    before = len(plan)

    mount_root = settings.mount_root
    mount_dir = mount_root.rstrip("/") or "/"

    exists = prechecks.dir_exists(mount_root)
    logger.debug(prechecks.describe("dir_exists", mount_root, exists))
    if not exists:
        plan.add(Operation.mkdir(mount_root, name="Create shared folder mount root"))

    desktop = fill(settings.desktop_dir, user=user)
    link = posixpath.join(desktop, folder)
    linked = prechecks.symlink_exists(link)
    logger.debug(prechecks.describe("symlink_exists", link, linked))
    if not linked:
        plan.add(Operation.symlink(
            posixpath.join(mount_dir, folder),
            link,
            name=f"Link shared folder '{folder}' on the desktop",
        ))

    line = fill(settings.fstab_line, mount_root=mount_dir, folder=folder, user=user)
    present = prechecks.line_in_file(settings.fstab_path, line)
    logger.debug(prechecks.describe("line_in_file", settings.fstab_path, present))
    if not present:
        plan.add(Operation.append_line(
            settings.fstab_path,
            line,
            name="Mount shared folders at boot",
        ))

    return len(plan) - before


# ── Verification set ────────────────────────────────────────────


def add_verification_set(plan: Plan, config: ProvisionConfig) -> int:
    """Bridge toolchain binary names and reinstall tools missing from PATH."""
    before = len(plan)

    for tool_link in config.verify.tool_links:
        present = prechecks.symlink_exists(tool_link.link) or prechecks.path_exists(tool_link.link)
        logger.debug(prechecks.describe("symlink_exists", tool_link.link, present))
        if not present:
            plan.add(Operation.symlink(
                tool_link.target,
                tool_link.link,
                name=f"Link {posixpath.basename(tool_link.link)} to {posixpath.basename(tool_link.target)}",
            ))

    for tool in config.verify.required_tools:
        found = prechecks.command_resolvable(tool.name)
        logger.debug(prechecks.describe("command_resolvable", tool.name, found))
        if not found:
            plan.add(Operation.shell(tool.reinstall, name=f"Reinstall {tool.name}"))

    return len(plan) - before
