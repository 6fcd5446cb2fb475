"""Plain-text rendering of PRs for the CLI."""

from datetime import datetime

from models.data_models import PullRequestRecord, UserRef

GITHUB_WEB_URL = "https://github.com"


def format_date(value: datetime) -> str:
    """Format like "Jan 5, 2025"."""
    return f"{value:%b} {value.day}, {value.year}"


def profile_url(login: str) -> str:
    return f"{GITHUB_WEB_URL}/{login}"


def _logins(users: list[UserRef]) -> str:
    return ", ".join(user.login for user in users)


def format_pr_lines(pr: PullRequestRecord) -> list[str]:
    """Render one PR as a short block of lines.

    Assignee and reviewer lines are only included when the PR has any.
    """
    lines = [
        f"#{pr.number} {pr.title}",
        f"    {format_date(pr.created_at)} by {pr.author_login} ({profile_url(pr.author_login)})",
    ]
    if pr.assignees:
        lines.append(f"    → assigned: {_logins(pr.assignees)}")
    if pr.requested_reviewers:
        lines.append(f"    👁 reviewers: {_logins(pr.requested_reviewers)}")
    if pr.labels:
        lines.append(f"    labels: {', '.join(label.name for label in pr.labels)}")
    lines.append(f"    {pr.html_url}")
    return lines


def format_header(repo_full_name: str, shown: int, total: int) -> str:
    return f"{repo_full_name} external PRs ({shown} of {total})"
