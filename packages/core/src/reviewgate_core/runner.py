"""Gate run orchestration."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict

from github import GithubException
from rich.console import Console

from reviewgate_core.config import GateConfig, load_authorized_reviewers
from reviewgate_core.errors import ConfigError, UpstreamError
from reviewgate_core.gate import evaluate
from reviewgate_core.gh.pull_request import get_pull, get_repo, list_reviews, pull_request_ref
from reviewgate_core.models import Decision, PullRequestRef
from reviewgate_core.result import Err, Ok, Result

console = Console()
logger = logging.getLogger(__name__)


def _upstream_message(e: Exception) -> str:
    if isinstance(e, GithubException):
        message = e.data.get("message") if isinstance(e.data, dict) else None
        return f"GitHub API returned {e.status}: {message or e}"
    return str(e)


def run_gate(
    config: GateConfig,
    repo_name: str | None,
    pull_request: PullRequestRef | None = None,
    pr_number: int | None = None,
    repo_obj=None,
) -> Result[Decision | None]:
    """Run the mandatory-review check for one pull request.

    Returns Ok(None) when there is no pull request to check, Ok(Decision)
    once the gate has been evaluated, and Err for configuration or GitHub
    failures. Never raises for those conditions; the CLI decides how to
    report each outcome.

    ``pr_number`` is used when no event payload is available: the head SHA
    is then read from the API.
    """
    if not config.credential:
        return Err(ConfigError("Missing GitHub token"))
    if not config.reviewers.is_configured:
        return Err(ConfigError("Missing reviewers JSON"))

    if pull_request is None and pr_number is None:
        logger.debug("No pull request supplied; gate not applicable.")
        return Ok(None)

    if not repo_name and repo_obj is None:
        return Err(ConfigError("Missing repository. Pass --repo or set GITHUB_REPOSITORY."))

    try:
        authorized = load_authorized_reviewers(config.reviewers)
    except ConfigError as e:
        return Err(e)
    console.print(f"Authorized reviewers: {', '.join(sorted(authorized)) or '(none)'}")

    number = pull_request.number if pull_request is not None else pr_number
    try:
        this_repo = repo_obj if repo_obj is not None else get_repo(repo_name, token=config.credential)
        this_pr = get_pull(this_repo, number)
        if pull_request is None:
            pull_request = pull_request_ref(this_pr)
        reviews = list_reviews(this_pr)
    except (GithubException, OSError) as e:
        return Err(UpstreamError(_upstream_message(e)))

    console.print(
        f"Found pull request #{pull_request.number}, head sha: {pull_request.latest_commit_sha}, "
        f"merge sha: {pull_request.merge_commit_sha}"
    )
    console.print(f"Number of reviews: {len(reviews)}")
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Reviews: %s", json.dumps([asdict(r) for r in reviews], default=str))

    decision = evaluate(pull_request, reviews, authorized)
    if decision.match is not None:
        console.print(f"Match found: approved by [bold]{decision.match.author_login}[/bold]")
    else:
        console.print("Match found: none")
    return Ok(decision)
