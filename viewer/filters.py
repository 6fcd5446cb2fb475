"""Author-based filtering of fetched pull requests."""

from typing import Iterable

from models.data_models import PullRequestRecord


def filter_by_author(
    records: Iterable[PullRequestRecord],
    excluded: Iterable[str]
) -> list[PullRequestRecord]:
    """Drop PRs whose author login is in `excluded`.

    Matching is exact and case-sensitive. Relative order of the kept
    records is preserved, so applying the filter twice with the same
    exclusions returns the same list.
    """
    excluded_logins = set(excluded)
    return [pr for pr in records if pr.author_login not in excluded_logins]
