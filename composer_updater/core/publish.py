"""Publishing a changed working tree as a pull request.

The pipeline is a fixed sequence of steps::

    push_branch -> open_pr [-> approve -> merge -> delete_branch]

The bracketed steps only run when an approval client (a second token) is
available. A failing step raises :class:`PublishError` and the remaining
steps are skipped; nothing already done is rolled back.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field

from composer_updater.output import MessageType, VerbosityLevel, message
from composer_updater.plugins.hosting.github_api import GitHubApi
from composer_updater.plugins.repos.abstract_repo import AbstractRepo


@dataclass
class DelayPolicy:
    """Seconds to wait before each auto-merge step.

    GitHub does not always see a fresh pull request or review straight
    away, so each step waits a little before calling the API.
    """

    approve: float = 5.0
    merge: float = 1.0
    delete: float = 1.0

    @classmethod
    def from_dict(cls, data: dict | None) -> DelayPolicy:
        data = data or {}
        return cls(**{k: float(v) for k, v in data.items() if k in ("approve", "merge", "delete")})


@dataclass
class PublishRequest:
    """Everything needed to publish one change."""

    branch: str
    base: str
    commit_message: str
    author_name: str
    author_email: str


@dataclass
class PublishResult:
    pr_number: int | None = None
    steps: list[str] = field(default_factory=list)

    @property
    def merged(self) -> bool:
        return "merge" in self.steps


class PublishPipeline:
    """Runs the publish steps against a working copy and the hosting API."""

    def __init__(
        self,
        repo: AbstractRepo,
        api: GitHubApi,
        approval_api: GitHubApi | None = None,
        delays: DelayPolicy | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.repo = repo
        self.api = api
        self.approval_api = approval_api
        self.delays = delays or DelayPolicy()
        self.sleep = sleep

    def _wait(self, seconds: float) -> None:
        if seconds > 0:
            self.sleep(seconds)

    def run(self, request: PublishRequest) -> PublishResult:
        """Publish the working tree changes described by *request*."""
        result = PublishResult()

        message(f"Creating branch {request.branch}", MessageType.INFO, VerbosityLevel.ALWAYS)
        self.repo.create_branch(request.branch)

        message(f"Pushing to {request.branch}.", MessageType.INFO, VerbosityLevel.ALWAYS)
        self.repo.push(request.branch, request.commit_message, request.author_name, request.author_email)
        result.steps.append("push_branch")

        message("Creating Pull request", MessageType.INFO, VerbosityLevel.ALWAYS)
        result.pr_number = self.api.create_pr(request.commit_message, request.branch, request.base)
        result.steps.append("open_pr")

        if self.approval_api is None:
            return result

        message("Approve Pull request", MessageType.INFO, VerbosityLevel.ALWAYS)
        self._wait(self.delays.approve)
        self.approval_api.approve_pr(result.pr_number)
        result.steps.append("approve")

        message("Merge Pull request", MessageType.INFO, VerbosityLevel.ALWAYS)
        self._wait(self.delays.merge)
        self.api.merge_pr(result.pr_number, request.commit_message)
        result.steps.append("merge")

        message(f"Delete branch: {request.branch}.", MessageType.INFO, VerbosityLevel.ALWAYS)
        self._wait(self.delays.delete)
        self.api.delete_ref(f"heads/{request.branch}")
        result.steps.append("delete_branch")

        return result
