"""Mandatory-review gate decision."""

from __future__ import annotations

from collections.abc import Iterable, Set

from reviewgate_core.models import APPROVED, Decision, PullRequestRef, Review


def is_candidate(review: Review, latest_commit_sha: str, authorized: Set[str]) -> bool:
    """Return True if the review is an authorized approval of the latest commit.

    A review with no author never matches, even against an authorized set
    that happens to contain an empty or placeholder login.
    """
    if review.author_login is None:
        return False
    return (
        review.state == APPROVED
        and review.commit_sha == latest_commit_sha
        and review.author_login in authorized
    )


def evaluate(pull_request: PullRequestRef, reviews: Iterable[Review], authorized: Set[str]) -> Decision:
    """Decide whether the pull request has a mandatory approval.

    Reviews are scanned in the order given and the first candidate wins.
    No grouping by author and no recency ordering is applied: an APPROVED
    review followed by a CHANGES_REQUESTED from the same author on the
    same commit still passes.
    """
    for review in reviews:
        if is_candidate(review, pull_request.latest_commit_sha, authorized):
            return Decision(passed=True, match=review)
    return Decision(passed=False)
