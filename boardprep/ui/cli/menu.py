"""
Interactive menu — the top-level provisioning loop.

    MenuDisplay ──1..5──▶ run workflow ──ok──▶ MenuDisplay
         │                     │
         6                  failure
         ▼                     ▼
       Exit (0)             Exit (1)

Each workflow is one full cycle (plan, execute, audit) started from a
fresh plan. Invalid choices print an error and show the menu again.
"""

from __future__ import annotations

import logging

import click

from boardprep.adapters.registry import AdapterRegistry
from boardprep.core.engine.planner import Prompter
from boardprep.core.models.config import ProvisionConfig
from boardprep.core.services.identity import Invoker
from boardprep.core.use_cases.provision import (
    WORKFLOWS,
    WorkflowResult,
    run_workflow,
    tool_report,
)

logger = logging.getLogger(__name__)

EXIT_CHOICE = "6"

MENU_OPTIONS: dict[str, tuple[str, str | None]] = {
    "1": ("Full setup (packages, editor, shared folder)", "full"),
    "2": ("Install system packages only", "packages"),
    "3": ("Install editor only", "editor"),
    "4": ("Set up shared folder only", "share"),
    "5": ("Verify installation", "verify"),
    EXIT_CHOICE: ("Exit", None),
}


def click_prompter() -> Prompter:
    """Prompter backed by the terminal."""
    return Prompter(
        ask=lambda text: click.prompt(text, default="", show_default=False),
        say=lambda text: click.secho(text, fg="yellow"),
    )


def render_result(result: WorkflowResult, config: ProvisionConfig) -> None:
    """Print the outcome of one workflow cycle."""
    report = result.report
    failure = report.failure
    click.echo()

    if failure is None:
        if report.planned == 0:
            click.secho(
                f"✅ {result.workflow.title}: nothing to do, already set up",
                fg="green",
                bold=True,
            )
        else:
            click.secho(
                f"✅ {result.workflow.title} complete "
                f"({report.succeeded}/{report.planned} operations)",
                fg="green",
                bold=True,
            )
        if result.workflow.key == "verify":
            _render_tool_report(config)
    else:
        click.secho(f"❌ Operation failed: {failure.command}", fg="red", bold=True)
        if failure.error:
            for line in failure.error.split("\n")[:5]:
                click.secho(f"   │ {line}", fg="red")
        click.echo(f"   Completed {report.succeeded} operation(s) before the failure.")
        if report.not_run:
            click.echo(f"   {report.not_run} remaining operation(s) were not run.")
        click.echo()
        click.secho(
            f"   Please contact {config.support.contact} and include the audit log below.",
            fg="yellow",
        )

    if result.audit_path:
        click.echo(f"   📄 Audit log: {result.audit_path}")
    elif result.audit_error:
        click.secho(f"   ⚠️  Audit log could not be written: {result.audit_error}", fg="yellow")
    click.echo()


def _render_tool_report(config: ProvisionConfig) -> None:
    entries = tool_report(config)
    if not entries:
        return
    click.echo()
    click.secho("   Toolchain:", fg="white", bold=True)
    for name, found in entries:
        if found:
            click.secho(f"     ✓ {name}", fg="green")
        else:
            click.secho(f"     ✗ {name} (not on PATH)", fg="red")


class MenuController:
    """Menu loop over the provisioning workflows.

    ``run()`` returns the process exit status: 0 when the user picks
    Exit, 1 as soon as any operation fails.
    """

    def __init__(
        self,
        config: ProvisionConfig,
        invoker: Invoker,
        registry: AdapterRegistry | None = None,
        prompter: Prompter | None = None,
    ):
        self.config = config
        self.invoker = invoker
        self.registry = registry or AdapterRegistry.default()
        self.prompter = prompter or click_prompter()

    def show_menu(self) -> None:
        click.echo()
        click.secho("🔧 Board development setup", fg="cyan", bold=True)
        click.echo(f"   User: {self.invoker.user}")
        click.echo()
        for key, (label, _workflow) in MENU_OPTIONS.items():
            click.echo(f"   {key}) {label}")
        click.echo()

    def run(self) -> int:
        while True:
            self.show_menu()
            choice = self.prompter.ask(f"Select an option [1-{EXIT_CHOICE}]").strip()

            if choice not in MENU_OPTIONS:
                click.secho(
                    f"Invalid choice '{choice}'. Enter a number from 1 to {EXIT_CHOICE}.",
                    fg="red",
                )
                continue

            _label, key = MENU_OPTIONS[choice]
            if key is None:
                click.echo("Goodbye.")
                return 0

            if not self.run_workflow(key):
                return 1

    def run_workflow(self, key: str) -> bool:
        """Run one workflow cycle and report it. True if it succeeded."""
        workflow = WORKFLOWS[key]
        click.secho(f"\n⚡ {workflow.title}", fg="cyan", bold=True)

        result = run_workflow(
            workflow,
            self.config,
            self.invoker,
            self.prompter,
            registry=self.registry,
        )
        render_result(result, self.config)
        return result.ok
