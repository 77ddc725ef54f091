"""Thin client for the GitHub REST API.

Docs: https://docs.github.com/en/rest
"""

from __future__ import annotations

from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from composer_updater.core.errors import PublishError
from composer_updater.output import MessageType, VerbosityLevel, message

API_URL = "https://api.github.com"


def _retrying_session(retries: int) -> requests.Session:
    """Session that retries rate-limited and transient server responses."""
    retry = Retry(
        total=retries,
        backoff_factor=1.0,
        status_forcelist=(429, 502, 503, 504),
        allowed_methods=None,
        respect_retry_after_header=True,
        raise_on_status=False,
    )
    session = requests.Session()
    session.mount("https://", HTTPAdapter(max_retries=retry))
    return session


class GitHubApi:
    """GitHub API calls for one repository, authenticated with one token."""

    def __init__(
        self,
        token: str,
        owner: str,
        repo: str,
        base_url: str = API_URL,
        timeout: float = 30.0,
        retries: int = 3,
        session: requests.Session | None = None,
    ):
        self.owner = owner
        self.repo = repo
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or _retrying_session(retries)
        self.session.headers.update({
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
        })

    def _request(self, action: str, method: str, path: str, **kwargs) -> requests.Response:
        url = f"{self.base_url}/repos/{self.owner}/{self.repo}{path}"
        message(f"{method} {url}", MessageType.DEBUG, VerbosityLevel.DEBUG)
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise PublishError(action, str(e)) from e
        if not response.ok:
            raise PublishError(action, response.text, status=response.status_code)
        return response

    # ------------------------------------------------------------------
    # Pull requests
    # ------------------------------------------------------------------
    def create_pr(self, title: str, head: str, base: str) -> int:
        """Open a pull request and return its number."""
        response = self._request(
            "create pull request", "POST", "/pulls",
            json={"title": title, "head": head, "base": base},
        )
        number = response.json()["number"]
        message(f"Submitted PR number: {number}", MessageType.INFO, VerbosityLevel.ALWAYS)
        return number

    def approve_pr(self, pull_number: int) -> None:
        self._request(
            "approve pull request", "POST", f"/pulls/{pull_number}/reviews",
            json={"event": "APPROVE"},
        )

    def merge_pr(self, pull_number: int, commit_title: str) -> None:
        """Squash-merge a pull request."""
        self._request(
            "merge pull request", "PUT", f"/pulls/{pull_number}/merge",
            json={"commit_title": commit_title, "merge_method": "squash"},
        )

    def delete_ref(self, ref: str) -> None:
        """Delete a git ref such as ``heads/my-branch``."""
        self._request("delete ref", "DELETE", f"/git/refs/{ref}")

    # ------------------------------------------------------------------
    # Issues
    # ------------------------------------------------------------------
    def get_issues(self) -> list[dict[str, Any]]:
        """Return all open issues (and pull requests) of the repository."""
        issues: list[dict[str, Any]] = []
        page = 1
        while True:
            response = self._request(
                "list issues", "GET", "/issues",
                params={"state": "open", "per_page": 100, "page": page},
            )
            batch = response.json()
            issues.extend(batch)
            if len(batch) < 100:
                return issues
            page += 1

    def create_issue(self, title: str, body: str, labels: list[str]) -> None:
        self._request(
            "create issue", "POST", "/issues",
            json={"title": title, "body": body, "labels": labels},
        )
