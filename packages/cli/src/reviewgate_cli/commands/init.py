"""init command — set up reviewgate for a repository.

Writes the reviewers JSON file, .reviewgate.yml pointing at it, and
optionally a GitHub Actions workflow that runs the check on every
pull request and review event.
"""

from __future__ import annotations

import json
import subprocess
from pathlib import Path

import click
import yaml
from rich.console import Console

console = Console()

_WORKFLOW_TEMPLATE = """\
name: Mandatory review

on:
  pull_request:
    types: [opened, synchronize, reopened]
  pull_request_review:
    types: [submitted, dismissed]

jobs:
  mandatory-review:
    runs-on: ubuntu-latest
    permissions:
      contents: read
      pull-requests: read

    steps:
      - uses: actions/checkout@v4

      - name: Set up Python
        uses: actions/setup-python@v5
        with:
          python-version: "3.12"

      - name: Install reviewgate
        run: pip install "reviewgate=={version}"

      - name: Check mandatory review
        env:
          GITHUB_TOKEN: ${{{{ secrets.GITHUB_TOKEN }}}}
          INPUT_REVIEWERS_JSON_FILE_PATH: {reviewers_file}
        run: reviewgate check
"""


@click.command("init")
@click.option("--repo", default=None, help="GitHub repository (owner/name). Auto-detected from git remote.")
@click.pass_context
def init_cmd(ctx, repo: str | None):
    """Set up the mandatory-review check for your repository.

    Creates a reviewers JSON file, .reviewgate.yml, and optionally a
    GitHub Actions workflow.
    """
    console.print("\n[bold cyan]reviewgate init[/bold cyan] — setup wizard\n")

    if repo is None:
        repo = _detect_repo_from_git()
        if repo:
            console.print(f"[dim]Detected repository: {repo}[/dim]")
        else:
            repo = click.prompt("GitHub repository (owner/name)")

    raw = click.prompt("Authorized reviewer logins (comma-separated)")
    logins = _parse_logins(raw)
    if not logins:
        raise click.UsageError("At least one reviewer login is required.")

    reviewers_file = click.prompt("Reviewers JSON file", default=".github/reviewers.json")
    _write_reviewers(reviewers_file, logins)
    console.print(f"[green]Created {reviewers_file} with {len(logins)} reviewer(s)[/green]")

    config_path = (ctx.obj or {}).get("config_path", ".reviewgate.yml")
    _write_config(config_path, {"reviewers_file": reviewers_file})
    console.print(f"[green]Created {config_path}[/green]")

    setup_ci = click.confirm("\nGenerate .github/workflows/reviewgate.yml for GitHub Actions?", default=True)
    if setup_ci:
        _write_workflow(reviewers_file)
        console.print("[green]Created .github/workflows/reviewgate.yml[/green]")
        console.print(
            "\n[yellow]Mark the [bold]mandatory-review[/bold] job as a required status check "
            "in the branch protection rules (Settings → Branches).[/yellow]"
        )

    console.print("\n[bold green]Setup complete![/bold green]")
    console.print(f"Run the check with: [bold]reviewgate check --repo {repo} --pr <number>[/bold]")


def _parse_logins(raw: str) -> list[str]:
    """Split a comma/space separated string into unique logins, keeping order."""
    seen: list[str] = []
    for part in raw.replace(",", " ").split():
        login = part.lstrip("@")
        if login and login not in seen:
            seen.append(login)
    return seen


def _detect_repo_from_git() -> str | None:
    """Try to detect the GitHub repo slug from the git remote URL."""
    try:
        result = subprocess.run(
            ["git", "remote", "get-url", "origin"],
            capture_output=True,
            text=True,
            timeout=5,
        )
        if result.returncode != 0:
            return None
        url = result.stdout.strip()
        # https://github.com/owner/repo.git  →  owner/repo
        # git@github.com:owner/repo.git      →  owner/repo
        if "github.com" not in url:
            return None
        slug = url.split("github.com")[-1].lstrip("/:").removesuffix(".git")
        return slug if "/" in slug else None
    except (FileNotFoundError, subprocess.TimeoutExpired):
        return None


def _write_reviewers(path: str, logins: list[str]) -> None:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(logins, indent=2) + "\n", encoding="utf-8")


def _write_config(path: str, config: dict) -> None:
    """Write or update the config file, preserving any existing keys."""
    target = Path(path)
    existing: dict = {}
    if target.exists():
        existing = yaml.safe_load(target.read_text()) or {}
    existing.update(config)
    target.write_text(yaml.dump(existing, default_flow_style=False, sort_keys=False))


def _get_version() -> str:
    """Read the current reviewgate version from the installed package metadata."""
    from importlib.metadata import PackageNotFoundError, version

    try:
        return version("reviewgate")
    except PackageNotFoundError:
        return "0.1.0"


def _write_workflow(reviewers_file: str) -> None:
    workflow_dir = Path(".github/workflows")
    workflow_dir.mkdir(parents=True, exist_ok=True)
    workflow_path = workflow_dir / "reviewgate.yml"
    workflow_path.write_text(_WORKFLOW_TEMPLATE.format(version=_get_version(), reviewers_file=reviewers_file))
