"""Ordered, in-memory set of GitHub logins whose PRs are hidden."""

from typing import Iterable, Iterator


class ExcludedAuthorSet:
    """Unique logins kept in insertion order for display.

    Edits live only in process memory; a restart falls back to the
    configured defaults.
    """

    def __init__(self, authors: Iterable[str] = ()):
        self._authors: list[str] = []
        for login in authors:
            self.add(login)

    def add(self, login: str) -> bool:
        """Append `login` after trimming whitespace.

        Returns:
            True if the set changed, False for blank or already-present logins
        """
        login = login.strip()
        if not login or login in self._authors:
            return False
        self._authors.append(login)
        return True

    def remove(self, login: str) -> bool:
        """Remove the exact matching login. Returns True if it was present."""
        if login not in self._authors:
            return False
        self._authors.remove(login)
        return True

    def as_list(self) -> list[str]:
        return list(self._authors)

    def __contains__(self, login: object) -> bool:
        return login in self._authors

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._authors))

    def __len__(self) -> int:
        return len(self._authors)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ExcludedAuthorSet):
            return NotImplemented
        return self._authors == other._authors

    def __repr__(self) -> str:
        return f"ExcludedAuthorSet({self._authors!r})"
