"""CLI entry point for reviewgate.

Commands:
  check      — fail unless an authorized reviewer approved the PR's head commit
  reviewers  — show the authorized reviewer list the check would use
  init       — write config, reviewers file and a GitHub Actions workflow
"""

from __future__ import annotations

import importlib.metadata
import logging

import click
from rich.logging import RichHandler

from reviewgate_cli.commands.check import check_cmd
from reviewgate_cli.commands.init import init_cmd
from reviewgate_cli.commands.reviewers import reviewers_cmd


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(
    version=importlib.metadata.version("reviewgate"),
    prog_name="reviewgate",
)
@click.option(
    "--config",
    "config_path",
    default=".reviewgate.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="REVIEWGATE_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Log debug output, including every fetched review.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """Mandatory-review gate for GitHub pull requests."""
    _configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


main.add_command(check_cmd)
main.add_command(reviewers_cmd)
main.add_command(init_cmd)
