"""check command — the mandatory-review gate."""

from __future__ import annotations

import logging
import os
from typing import NoReturn

import click
from rich.console import Console
from rich.markup import escape

from reviewgate_core.errors import ConfigError, UpstreamError
from reviewgate_core.gh.event import load_event, pull_request_from_event, repository_from_event
from reviewgate_core.runner import run_gate
from reviewgate_core.result import Err

console = Console()
logger = logging.getLogger(__name__)

FAILED_MESSAGE = "Mandatory review check failed"


def _fail(ctx: click.Context, message: str) -> NoReturn:
    """Report a failed run the way a GitHub Action does and exit non-zero."""
    console.print(f"[red]❌ {escape(message)}[/red]", soft_wrap=True)
    if os.environ.get("GITHUB_ACTIONS") == "true":
        # Workflow command: surfaces the message as an annotation on the run.
        click.echo(f"::error::{message}")
    ctx.exit(1)


@click.command("check")
@click.option(
    "--token",
    default=None,
    envvar="INPUT_GITHUB_TOKEN",
    help="GitHub token. Falls back to GITHUB_TOKEN, then `gh auth token`.",
)
@click.option(
    "--reviewers-file",
    default=None,
    envvar="INPUT_REVIEWERS_JSON_FILE_PATH",
    help="Path to a JSON array of authorized reviewer logins. Overrides config file.",
)
@click.option(
    "--reviewer",
    "reviewers",
    multiple=True,
    help="Authorized reviewer login. Repeatable; used when no reviewers file is set.",
)
@click.option("--repo", default=None, envvar="GITHUB_REPOSITORY", help="GitHub repository in owner/name format.")
@click.option("--pr", "pr_number", type=int, default=None, help="Pull request number. Defaults to the event's PR.")
@click.option(
    "--event-path",
    default=None,
    envvar="GITHUB_EVENT_PATH",
    help="Path to the GitHub Actions event payload.",
)
@click.pass_context
def check_cmd(
    ctx,
    token: str | None,
    reviewers_file: str | None,
    reviewers: tuple[str, ...],
    repo: str | None,
    pr_number: int | None,
    event_path: str | None,
):
    """Fail unless an authorized reviewer approved the PR's latest commit.

    Only approvals submitted against the current head commit count; pushing
    a new commit invalidates earlier approvals.

    \b
    In GitHub Actions the event payload, repository and inputs are read
    from the environment:
      GITHUB_EVENT_PATH                 pull_request event payload
      GITHUB_REPOSITORY                 owner/name
      INPUT_GITHUB_TOKEN / GITHUB_TOKEN token with pull-requests: read
      INPUT_REVIEWERS_JSON_FILE_PATH    reviewers JSON file
    """
    from reviewgate_core.config import GateConfig, load_config
    from reviewgate_cli.auth import resolve_github_token

    config_path = (ctx.obj or {}).get("config_path", ".reviewgate.yml")

    # Outermost boundary: every failure becomes a single failure signal.
    try:
        config = load_config(
            config_path,
            cli_overrides={"reviewers_file": reviewers_file, "reviewers": list(reviewers) or None},
        )
        if reviewers and not reviewers_file and config.get("reviewers_file"):
            # --reviewer on the command line beats a reviewers_file from the config file.
            logger.warning("Ignoring reviewers_file %s from %s; using --reviewer.", config["reviewers_file"], config_path)
            config["reviewers_file"] = None
        config["github_token"] = resolve_github_token(token)
        gate_config = GateConfig.from_dict(config)

        pull_request = None
        if pr_number is None:
            payload = load_event(event_path)
            pull_request = pull_request_from_event(payload)
            repo = repository_from_event(payload, default=repo)

        result = run_gate(gate_config, repo, pull_request=pull_request, pr_number=pr_number)
    except ConfigError as e:
        _fail(ctx, str(e))
    except Exception as e:
        logger.debug("Unhandled error during check", exc_info=True)
        _fail(ctx, f"Caught an error: {e}")

    if isinstance(result, Err):
        if isinstance(result.error, UpstreamError):
            _fail(ctx, f"Caught an error: {result.error}")
        else:
            _fail(ctx, str(result.error))

    decision = result.value
    if decision is None:
        console.print("[yellow]No pull request in event; nothing to check.[/yellow]")
        return
    if not decision.passed:
        _fail(ctx, FAILED_MESSAGE)

    match = decision.match
    console.print(f"[green]✅ Approved by {escape(match.author_login)} at {(match.commit_sha or '')[:7]}.[/green]")
