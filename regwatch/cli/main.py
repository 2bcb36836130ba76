"""Click commands for regwatch."""

from __future__ import annotations

import asyncio
from dataclasses import replace

import click

from regwatch import __version__
from regwatch.app import EXIT_USAGE, main
from regwatch.config import WATCH_SOURCES, ConfigurationError, load_config
from regwatch.ledger.store import JsonStateStore, StateFileError
from regwatch.models.config import RegwatchConfig
from regwatch.observability.logging import setup_logging


def _load() -> RegwatchConfig:
    try:
        return load_config()
    except (ConfigurationError, ValueError) as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(EXIT_USAGE) from exc


@click.group()
@click.version_option(__version__, prog_name="regwatch")
def cli() -> None:
    """Watch registry entities and report what changed since the last run."""


@cli.command()
@click.option("--source", type=click.Choice(WATCH_SOURCES), help="Watch list source kind.")
@click.option("--location", help="Path, URL or company name for the watch list source.")
@click.option("--state", "state_path", type=click.Path(dir_okay=False), help="State file path.")
@click.option("--no-notify", is_flag=True, help="Only print the report; skip email and webhook sinks.")
@click.pass_context
def run(
    ctx: click.Context,
    source: str | None,
    location: str | None,
    state_path: str | None,
    no_notify: bool,
) -> None:
    """Run one pass over the watch list and send the report."""
    config = _load()
    if source:
        config.watch = replace(config.watch, source=source)
    if location:
        config.watch = replace(config.watch, location=location)
    if state_path:
        config.state = replace(config.state, path=state_path)
    if no_notify:
        config.notifications = replace(
            config.notifications, email_secret_ref="", webhook_secret_ref="", console=True
        )
    ctx.exit(asyncio.run(main(config)))


@cli.command()
@click.argument("name")
@click.option("--state", "state_path", type=click.Path(dir_okay=False), help="State file path.")
@click.pass_context
def check(ctx: click.Context, name: str, state_path: str | None) -> None:
    """Look up one company by NAME and compare it with the stored state."""
    config = _load()
    config.watch = replace(config.watch, source="query", location=name)
    if state_path:
        config.state = replace(config.state, path=state_path)
    config.notifications = replace(config.notifications, email_secret_ref="", webhook_secret_ref="", console=True)
    ctx.exit(asyncio.run(main(config)))


@cli.command("show-state")
@click.option("--state", "state_path", type=click.Path(dir_okay=False), help="State file path.")
def show_state(state_path: str | None) -> None:
    """List the entities held in the state file."""
    config = _load()
    setup_logging(config.log.level, config.log.format)
    store = JsonStateStore(state_path or config.state.path)
    try:
        state = store.load()
    except StateFileError as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(1) from exc

    if not state:
        click.echo("No entities tracked yet.")
        return
    for key in sorted(state):
        record = state[key]
        click.echo(f"{key}  {record.fingerprint[:12]}  {record.updated_at}  {record.display_name or ''}".rstrip())
