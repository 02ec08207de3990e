"""Pull request and review data models.

Decoupled from PyGithub so the gate can be exercised with plain values.
The gh layer maps PyGithub objects onto these before anything is evaluated.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

APPROVED = "APPROVED"
CHANGES_REQUESTED = "CHANGES_REQUESTED"
COMMENTED = "COMMENTED"
DISMISSED = "DISMISSED"
PENDING = "PENDING"


@dataclass(frozen=True)
class PullRequestRef:
    """The pull request under evaluation."""

    number: int
    latest_commit_sha: str
    merge_commit_sha: str | None = None  # diagnostic only


@dataclass(frozen=True)
class Review:
    """A single review submission recorded against a pull request.

    ``author_login`` is None when GitHub no longer knows the author
    (deleted account). ``state`` is kept as the raw GitHub string; only
    APPROVED has meaning to the gate.
    """

    author_login: str | None
    state: str
    commit_sha: str | None
    review_id: int | None = None
    submitted_at: datetime | None = None


@dataclass(frozen=True)
class Decision:
    """Outcome of the gate. ``match`` is the approving review, if any."""

    passed: bool
    match: Review | None = None
