"""
boardprep — CLI entrypoint.

Usage:
    sudo boardprep                 # interactive menu
    sudo boardprep run verify      # one workflow, no menu
    boardprep config check
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from boardprep import __version__
from boardprep.core.observability.logging_config import attach_log_file, setup_logging


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="boardprep")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    envvar="BOARDPREP_CONFIG",
    help="Path to boardprep.yml (default: auto-detect).",
)
@click.option(
    "--user",
    "-u",
    "user",
    default=None,
    help="Account to set up (default: the user who invoked sudo).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
    user: str | None,
) -> None:
    """boardprep — set up a host for embedded board development."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = Path(config_path) if config_path else None
    ctx.obj["user"] = user

    # ── Logging setup (once, at process start) ──────────────────
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("BOARDPREP_LOG_LEVEL", "WARNING")

    setup_logging(level=level)

    if ctx.invoked_subcommand is None:
        ctx.invoke(menu)


def _prepare(ctx: click.Context):
    """Check preconditions and load config, or exit 1 with guidance.

    Runs before anything touches the system.
    """
    from boardprep.core.config.loader import ConfigError, load_config
    from boardprep.core.services.identity import require_root, resolve_invoker

    error = require_root()
    if error:
        click.secho(f"❌ {error}", fg="red")
        sys.exit(1)

    log_file = os.environ.get("BOARDPREP_LOG_FILE")
    if log_file:
        attach_log_file(log_file, os.environ.get("BOARDPREP_LOG_FILE_LEVEL"))

    invoker, error = resolve_invoker(ctx.obj.get("user"))
    if error:
        click.secho(f"❌ {error}", fg="red")
        sys.exit(1)

    try:
        cfg = load_config(ctx.obj.get("config_path"))
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    return cfg, invoker


@cli.command()
@click.pass_context
def menu(ctx: click.Context) -> None:
    """Interactive provisioning menu (the default)."""
    from boardprep.ui.cli.menu import MenuController

    cfg, invoker = _prepare(ctx)
    controller = MenuController(cfg, invoker)
    sys.exit(controller.run())


@cli.command()
@click.argument("workflow", type=click.Choice(["full", "packages", "editor", "share", "verify"]))
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def run(ctx: click.Context, workflow: str, as_json: bool) -> None:
    """Run a single workflow without the menu.

    Examples:

        sudo boardprep run packages

        sudo boardprep run verify --json
    """
    from boardprep.core.use_cases.provision import WORKFLOWS, run_workflow
    from boardprep.ui.cli.menu import click_prompter, render_result

    cfg, invoker = _prepare(ctx)
    result = run_workflow(WORKFLOWS[workflow], cfg, invoker, click_prompter())

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        render_result(result, cfg)

    sys.exit(0 if result.ok else 1)


@cli.group()
def config() -> None:
    """Configuration commands."""


@config.command("check")
@click.pass_context
def config_check(ctx: click.Context) -> None:
    """Validate boardprep.yml and summarise what it provisions."""
    from boardprep.adapters.registry import AdapterRegistry
    from boardprep.core.config.loader import ConfigError, find_config_file, load_config

    path = ctx.obj.get("config_path") or find_config_file()
    try:
        cfg = load_config(path)
    except ConfigError as e:
        click.secho("❌ Configuration error:", fg="red", bold=True)
        click.echo(f"   • {e}")
        sys.exit(1)

    click.secho("✅ Configuration is valid", fg="green", bold=True)
    click.echo(f"   Source: {path if path else 'built-in defaults'}")
    click.echo(f"   Package steps: {len(cfg.packages.commands)}")
    click.echo(f"   Editor steps: {len(cfg.editor.commands)}")
    click.echo(f"   Tool links: {len(cfg.verify.tool_links)}")
    click.echo(f"   Required tools: {', '.join(t.name for t in cfg.verify.required_tools) or '-'}")
    click.echo(f"   Support contact: {cfg.support.contact}")

    click.echo()
    click.secho("Adapters:", bold=True)
    for name, info in AdapterRegistry.default().adapter_status().items():
        if info["available"]:
            click.secho(f"   ✓ {name}", fg="green")
        else:
            click.secho(f"   ✗ {name} (not available)", fg="red")
    click.echo()


if __name__ == "__main__":
    cli()
