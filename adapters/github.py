"""
GitHub adapter — public repositories for the projects section.

One call: GET /users/{username}/repos. Returns slim dicts with just the
fields the site renders. Forks and archived repositories are dropped.
"""

from typing import Any

import httpx

from logging_config import log_backend_call, log_backend_result
from models import ErrorKind, SiteError

__all__ = [
    "GitHubProjects",
    "slim_repository",
]

GITHUB_API = "https://api.github.com"

# Default timeout for HTTP requests (seconds)
HTTP_TIMEOUT = 30

USER_AGENT = "site-control/1.0 (+https://github.com/endlessblink/Site-Control-MCP)"


def slim_repository(repo: dict[str, Any]) -> dict[str, Any]:
    """Keep the fields the projects page shows."""
    return {
        "name": repo.get("name", ""),
        "description": repo.get("description") or "",
        "url": repo.get("html_url", ""),
        "homepage": repo.get("homepage") or None,
        "language": repo.get("language"),
        "stars": repo.get("stargazers_count", 0),
        "topics": repo.get("topics", []),
        "updated_at": repo.get("pushed_at") or repo.get("updated_at"),
    }


class GitHubProjects:
    """ProjectSource backed by the GitHub REST API."""

    def __init__(self, token: str | None = None, base_url: str = GITHUB_API):
        self.token = token
        self.base_url = base_url.rstrip("/")

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": USER_AGENT,
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def list_repositories(self, username: str) -> list[dict[str, Any]]:
        """
        Fetch a user's public, non-fork, non-archived repositories.

        Most recently pushed first, at most 100.

        Raises:
            SiteError: NOT_FOUND for an unknown user, BACKEND_ERROR otherwise
        """
        url = f"{self.base_url}/users/{username}/repos"
        params = {"sort": "pushed", "per_page": 100, "type": "owner"}
        log_backend_call("github", "repos", username=username)

        try:
            with httpx.Client(
                headers=self._headers(),
                timeout=httpx.Timeout(HTTP_TIMEOUT),
                follow_redirects=True,
            ) as client:
                response = client.get(url, params=params)
                response.raise_for_status()
                repos = response.json()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            if status == 404:
                raise SiteError(
                    ErrorKind.NOT_FOUND, f"GitHub user not found: {username}"
                ) from e
            raise SiteError(
                ErrorKind.BACKEND_ERROR,
                f"GitHub API error ({status}): {e.response.text[:200]}",
                details={"status": status},
            ) from e
        except httpx.RequestError as e:
            raise SiteError(ErrorKind.BACKEND_ERROR, f"GitHub API request failed: {e}") from e

        projects = [
            slim_repository(repo)
            for repo in repos
            if not repo.get("fork") and not repo.get("archived")
        ]
        log_backend_result("github", "repos", len(projects))
        return projects
