"""In-memory store tying the fetcher, the excluded-author set and the filter together.

The store owns the only mutable state in the application: the accumulated
PRs from the current fetch and the excluded-author set. The filtered view is
recomputed from both after every mutation, never patched incrementally.

Each load() starts a new generation. A load that has been superseded by a
newer one stops requesting pages at the next page boundary and its results
are dropped, so a manual retry while a fetch is in flight can't interleave
pages from two fetches.
"""

import logging
import threading
from datetime import datetime, timezone
from typing import Iterable, Optional

from fetchers.errors import FetchError
from fetchers.github import GitHubFetcher
from models.config_models import Config, RepositoryConfig
from models.data_models import FetchState, PullRequestRecord
from viewer.excluded_authors import ExcludedAuthorSet
from viewer.filters import filter_by_author

logger = logging.getLogger(__name__)


class PullRequestStore:
    """Fetch state plus the excluded-author set, with a derived filtered view."""

    def __init__(
        self,
        fetcher: GitHubFetcher,
        repository: RepositoryConfig,
        excluded_authors: Iterable[str] = (),
        per_page: int = 100,
        max_pages: int = 5
    ):
        self.fetcher = fetcher
        self.repository = repository
        self.per_page = per_page
        self.max_pages = max_pages
        self._excluded = ExcludedAuthorSet(excluded_authors)
        self._state = FetchState()
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: Config) -> "PullRequestStore":
        """Build a store (and its fetcher) from validated configuration."""
        fetcher = GitHubFetcher(
            token=config.credentials.github_token,
            base_url=config.fetch.api_url,
            timeout=config.fetch.request_timeout,
        )
        return cls(
            fetcher,
            config.repository,
            excluded_authors=config.excluded_authors,
            per_page=config.fetch.per_page,
            max_pages=config.fetch.max_pages,
        )

    # ========================================================================
    # Derived view
    # ========================================================================

    def _recompute(self) -> None:
        # Caller must hold self._lock
        self._state.filtered = filter_by_author(self._state.accumulated, self._excluded)
        self._state.last_updated = datetime.now(timezone.utc)

    def snapshot(self) -> FetchState:
        """Return a copy of the current state that later updates won't touch."""
        with self._lock:
            return self._state.model_copy(update={
                "accumulated": list(self._state.accumulated),
                "filtered": list(self._state.filtered),
            })

    @property
    def filtered(self) -> list[PullRequestRecord]:
        with self._lock:
            return list(self._state.filtered)

    @property
    def accumulated(self) -> list[PullRequestRecord]:
        with self._lock:
            return list(self._state.accumulated)

    # ========================================================================
    # Excluded authors
    # ========================================================================

    @property
    def excluded_authors(self) -> list[str]:
        with self._lock:
            return self._excluded.as_list()

    def add_excluded_author(self, login: str) -> bool:
        """Hide PRs by `login` (trimmed). Returns True if the set changed."""
        with self._lock:
            added = self._excluded.add(login)
            self._recompute()
        if added:
            logger.info(f"Excluding author '{login.strip()}'")
        return added

    def remove_excluded_author(self, login: str) -> bool:
        """Show PRs by `login` again. Returns True if it was excluded."""
        with self._lock:
            removed = self._excluded.remove(login)
            self._recompute()
        if removed:
            logger.info(f"No longer excluding author '{login}'")
        return removed

    # ========================================================================
    # Fetching
    # ========================================================================

    def is_current(self, generation: int) -> bool:
        with self._lock:
            return generation == self._state.generation

    def begin_load(self) -> int:
        """Start a new fetch generation and reset accumulated results.

        Any fetch still running under an older generation becomes stale.

        Returns:
            The new generation number, to be passed to load()
        """
        with self._lock:
            self._state.generation += 1
            self._state.status = "loading"
            self._state.error = None
            self._state.accumulated = []
            self._state.pages_fetched = 0
            self._recompute()
            generation = self._state.generation
        logger.debug(f"Started fetch generation {generation}")
        return generation

    def load(self, generation: Optional[int] = None) -> FetchState:
        """Fetch all open PRs from page 1, replacing previous results.

        Errors never propagate: they move the state to "error" with the
        message, leaving pages fetched before the failure in `accumulated`.

        Args:
            generation: Generation from begin_load(). A fresh one is started
                when omitted.

        Returns:
            Snapshot of the state after the fetch finished or was superseded
        """
        if generation is None:
            generation = self.begin_load()
        elif not self.is_current(generation):
            logger.info(f"Skipping fetch generation {generation}, already superseded")
            return self.snapshot()

        def on_page(prs: list[PullRequestRecord], page: int) -> bool:
            with self._lock:
                if generation != self._state.generation:
                    return False
                self._state.accumulated = prs
                self._state.pages_fetched = page
                self._recompute()
            return True

        try:
            prs = self.fetcher.fetch_open_prs(
                self.repository.owner,
                self.repository.name,
                per_page=self.per_page,
                max_pages=self.max_pages,
                on_page=on_page,
            )
        except FetchError as e:
            self._fail(generation, str(e))
        except Exception as e:
            logger.exception(f"Unexpected error fetching PRs for {self.repository.full_name}")
            self._fail(generation, str(e) or "An error occurred")
        else:
            with self._lock:
                if generation == self._state.generation:
                    self._state.accumulated = prs
                    self._state.status = "idle"
                    self._recompute()
                    logger.info(
                        f"Loaded {len(prs)} open PRs, "
                        f"{len(self._state.filtered)} after excluding authors"
                    )
                else:
                    logger.info(f"Discarding results of superseded fetch generation {generation}")

        return self.snapshot()

    def _fail(self, generation: int, message: str) -> None:
        with self._lock:
            if generation != self._state.generation:
                logger.info(f"Ignoring error from superseded fetch generation {generation}: {message}")
                return
            self._state.status = "error"
            self._state.error = message
        logger.warning(f"Fetch failed: {message}")
