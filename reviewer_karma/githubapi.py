"""Minimal GitHub REST client for pull requests, reviews and review comments."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import requests

DEFAULT_API_URL = "https://api.github.com"
PER_PAGE = 100


class GitHubAPIError(Exception):
    """Raised when a GitHub API request fails or returns unexpected data."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class GitHubClient:
    """Fetches repository data from the GitHub REST API, following pagination."""

    def __init__(
        self,
        token: str | None = None,
        base_url: str = DEFAULT_API_URL,
        session: requests.Session | None = None,
        timeout: float = 30.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()
        self.session.headers["Accept"] = "application/vnd.github+json"
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Release the underlying HTTP session."""
        self.session.close()

    def _repo_path(self, owner: str, repo: str) -> str:
        return f"/repos/{quote(owner, safe='')}/{quote(repo, safe='')}"

    def _paginate(self, path: str, params: dict[str, Any] | None = None) -> list[dict]:
        url: str | None = f"{self.base_url}{path}"
        query: dict[str, Any] | None = {**(params or {}), "per_page": PER_PAGE}
        items: list[dict] = []
        while url:
            try:
                response = self.session.get(url, params=query, timeout=self.timeout)
            except requests.RequestException as exc:
                raise GitHubAPIError(f"GET {url}: {exc}") from exc
            if not response.ok:
                raise GitHubAPIError(
                    f"GET {response.url}: {response.status_code} {response.reason}",
                    status=response.status_code,
                )
            try:
                page = response.json()
            except ValueError as exc:
                raise GitHubAPIError(f"GET {response.url}: invalid JSON: {exc}") from exc
            if not isinstance(page, list):
                raise GitHubAPIError(f"GET {response.url}: expected a JSON array")
            items.extend(page)
            url = response.links.get("next", {}).get("url")
            query = None
        return items

    def fetch_all_pull_requests(self, owner: str, repo: str) -> list[dict]:
        """Return every pull request of the repository, open and closed."""
        return self._paginate(f"{self._repo_path(owner, repo)}/pulls", {"state": "all"})

    def fetch_pull_request_reviews(
        self, owner: str, repo: str, pr_number: int
    ) -> list[dict]:
        """Return every review of one pull request."""
        return self._paginate(f"{self._repo_path(owner, repo)}/pulls/{pr_number}/reviews")

    def fetch_pull_request_comments(
        self, owner: str, repo: str, pr_number: int
    ) -> list[dict]:
        """Return every review comment of one pull request."""
        return self._paginate(f"{self._repo_path(owner, repo)}/pulls/{pr_number}/comments")