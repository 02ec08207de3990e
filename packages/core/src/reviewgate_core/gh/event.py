"""GitHub Actions event payload helpers.

Actions writes the triggering webhook payload to the file named by
GITHUB_EVENT_PATH. Only pull_request-style events carry a ``pull_request``
key; for anything else (push, schedule, workflow_dispatch) the gate is
not applicable.
"""

from __future__ import annotations

import json
from pathlib import Path

from reviewgate_core.errors import ConfigError
from reviewgate_core.models import PullRequestRef


def load_event(path: str | None) -> dict:
    """Read the event payload. Returns {} when no path is given."""
    if not path:
        return {}
    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Could not read event payload {path}: {e.strerror or e}") from e
    except UnicodeDecodeError as e:
        raise ConfigError(f"Could not read event payload {path}: not UTF-8 ({e.reason})") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Event payload {path} is not valid JSON: {e}") from e
    return payload if isinstance(payload, dict) else {}


def pull_request_from_event(payload: dict) -> PullRequestRef | None:
    pr = payload.get("pull_request")
    if not pr:
        return None
    head_sha = (pr.get("head") or {}).get("sha")
    if not head_sha:
        raise ConfigError("Pull request in event payload has no head SHA.")
    return PullRequestRef(
        number=int(pr["number"]),
        latest_commit_sha=head_sha,
        merge_commit_sha=pr.get("merge_commit_sha"),
    )


def repository_from_event(payload: dict, default: str | None = None) -> str | None:
    repo = payload.get("repository") or {}
    return repo.get("full_name") or default
