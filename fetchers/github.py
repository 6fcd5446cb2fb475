"""GitHub API client for fetching open pull requests.

Pages through the pulls list endpoint one request at a time, starting at
page 1, and stops on the first empty page or at the configured page cap.
Accumulated records are handed to an optional callback after every page so
callers can show first-page results before the whole fetch completes.
"""

import logging
from typing import Any, Callable, Optional

import requests
from pydantic import ValidationError

from fetchers.errors import MalformedResponseError, TransportError, UpstreamStatusError
from models.data_models import PullRequestRecord

logger = logging.getLogger(__name__)

# Called with (accumulated_so_far, page). Returning False stops pagination.
PageCallback = Callable[[list[PullRequestRecord], int], Optional[bool]]

MAX_PER_PAGE = 100


class GitHubFetcher:
    """Fetch open pull requests from the GitHub REST API."""

    def __init__(
        self,
        token: Optional[str] = None,
        base_url: str = "https://api.github.com",
        timeout: float = 30.0
    ):
        """Initialize GitHub API client.

        Args:
            token: Optional GitHub personal access token. Anonymous requests
                work but hit the rate limit much sooner.
            base_url: REST API root (override for GitHub Enterprise)
            timeout: Seconds to wait for each request before giving up
        """
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28"
        }
        if token:
            self.headers["Authorization"] = f"Bearer {token}"

    def _make_github_request(self, url: str, params: Optional[dict] = None) -> requests.Response:
        """Issue a single GET request.

        Raises:
            TransportError: If the request could not complete
        """
        try:
            response = requests.get(url, headers=self.headers, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise TransportError(f"Network error contacting GitHub: {e}") from e

        remaining = response.headers.get("X-RateLimit-Remaining")
        limit = response.headers.get("X-RateLimit-Limit")
        if remaining and limit:
            logger.debug(f"Rate limit: {remaining}/{limit} remaining")

        return response

    def _parse_page(self, response: requests.Response, page: int) -> list[PullRequestRecord]:
        """Decode one page body into records.

        Raises:
            MalformedResponseError: If the body is not a JSON array of PR objects
        """
        try:
            payload: Any = response.json()
        except ValueError as e:
            raise MalformedResponseError(f"Page {page}: response body is not valid JSON") from e

        if not isinstance(payload, list):
            raise MalformedResponseError(
                f"Page {page}: expected a JSON array, got {type(payload).__name__}"
            )

        try:
            return [PullRequestRecord.model_validate(item) for item in payload]
        except ValidationError as e:
            raise MalformedResponseError(f"Page {page}: unexpected pull request shape: {e}") from e

    def fetch_open_prs(
        self,
        owner: str,
        repo: str,
        per_page: int = MAX_PER_PAGE,
        max_pages: int = 5,
        on_page: Optional[PageCallback] = None
    ) -> list[PullRequestRecord]:
        """Fetch open pull requests page by page.

        Args:
            owner: Repository owner (e.g., "expo")
            repo: Repository name (e.g., "expo")
            per_page: PRs per request (1-100)
            max_pages: Maximum number of pages to request
            on_page: Optional callback invoked after each non-empty page with
                a copy of everything accumulated so far. Returning False
                stops pagination without error.

        Returns:
            All fetched PRs in API order.

        Raises:
            ValueError: If per_page or max_pages is out of range
            TransportError: On network failure
            UpstreamStatusError: On any non-2xx response
            MalformedResponseError: If a page body can't be parsed
        """
        if not 1 <= per_page <= MAX_PER_PAGE:
            raise ValueError(f"per_page must be between 1 and {MAX_PER_PAGE}, got {per_page}")
        if max_pages < 1:
            raise ValueError(f"max_pages must be at least 1, got {max_pages}")

        logger.info(
            f"Fetching open PRs from {owner}/{repo} "
            f"(max {max_pages} pages of {per_page})"
        )

        url = f"{self.base_url}/repos/{owner}/{repo}/pulls"
        all_prs: list[PullRequestRecord] = []

        for page in range(1, max_pages + 1):
            params = {
                "state": "open",
                "per_page": per_page,
                "page": page
            }

            try:
                response = self._make_github_request(url, params=params)

                if not response.ok:
                    logger.error(
                        f"GitHub returned {response.status_code} for page {page}: "
                        f"{response.text[:200]}"
                    )
                    raise UpstreamStatusError(response.status_code, response.reason, page=page)

                prs = self._parse_page(response, page)

            except (TransportError, MalformedResponseError) as e:
                logger.error(f"Error fetching page {page}: {e}")
                raise

            if not prs:
                logger.info(f"No more PRs found at page {page}, stopping pagination")
                break

            all_prs.extend(prs)
            logger.debug(f"Page {page}: {len(prs)} open PRs (total: {len(all_prs)})")

            if on_page is not None and on_page(list(all_prs), page) is False:
                logger.info(f"Pagination stopped by caller after page {page}")
                break

        logger.info(f"Fetched {len(all_prs)} open PRs from {owner}/{repo}")

        return all_prs
