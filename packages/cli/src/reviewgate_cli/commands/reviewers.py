"""reviewers command — show the authorized reviewer list."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

console = Console()


@click.command("reviewers")
@click.option("--reviewers-file", default=None, help="Path to a reviewers JSON file. Overrides config file.")
@click.pass_context
def reviewers_cmd(ctx, reviewers_file: str | None):
    """Show the logins whose approval satisfies the check.

    Resolves the same source `reviewgate check` would use, so this is a
    quick way to validate .reviewgate.yml and the reviewers JSON file.
    """
    from reviewgate_core.config import GateConfig, load_authorized_reviewers, load_config
    from reviewgate_core.errors import ConfigError

    config_path = (ctx.obj or {}).get("config_path", ".reviewgate.yml")
    try:
        config = load_config(config_path, cli_overrides={"reviewers_file": reviewers_file})
        source = GateConfig.from_dict(config).reviewers
        authorized = load_authorized_reviewers(source)
    except ConfigError as e:
        raise click.UsageError(str(e))

    if not authorized:
        console.print("[yellow]The authorized reviewer list is empty; every check will fail.[/yellow]")
        return

    origin = source.path or "inline list"
    table = Table(title=f"Authorized reviewers — {origin}", show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right", width=4)
    table.add_column("Login", style="bold")

    for i, login in enumerate(sorted(authorized, key=str.lower), 1):
        table.add_row(str(i), login)

    console.print(table)
