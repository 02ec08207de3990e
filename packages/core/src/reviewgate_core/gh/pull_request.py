from __future__ import annotations

from github import Github

from reviewgate_core.models import PullRequestRef, Review


def get_repo(repo_name: str, token: str):
    return Github(token).get_repo(repo_name)


def get_pull(repo, pr_number: int):
    return repo.get_pull(pr_number)


def pull_request_ref(pr) -> PullRequestRef:
    """Build a PullRequestRef from a PyGithub PullRequest."""
    return PullRequestRef(
        number=pr.number,
        latest_commit_sha=pr.head.sha,
        merge_commit_sha=pr.merge_commit_sha,
    )


def list_reviews(pr) -> list[Review]:
    """Return every review on the PR in the order GitHub lists them.

    PyGithub pages through the listing transparently, so this is the full
    history, not just the first page.
    """
    return [
        Review(
            author_login=review.user.login if review.user is not None else None,
            state=review.state,
            commit_sha=review.commit_id,
            review_id=review.id,
            submitted_at=review.submitted_at,
        )
        for review in pr.get_reviews()
    ]
