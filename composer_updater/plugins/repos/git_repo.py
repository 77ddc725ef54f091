"""Git repository implementation."""

from pathlib import Path

import git

from composer_updater.core.errors import PublishError
from composer_updater.output import MessageType, VerbosityLevel, message
from composer_updater.plugins.repos.abstract_repo import AbstractRepo


class GitRepo(AbstractRepo):
    """Manages a GitHub repository checked out over HTTPS."""

    REPO_TYPE = "git"

    def __init__(self, owner: str, name: str, local_path: Path, token: str, host: str = "github.com"):
        """Initialize a git working copy.

        Args:
            owner: Repository owner
            name: Repository name
            local_path: Directory to clone into
            token: Token used for HTTPS authentication
            host: Git host

        Note: Does not clone the repository. Call clone() first.
        """
        super().__init__(owner, name, local_path)
        self.token = token
        self.host = host
        self._repo: git.Repo | None = None

    @property
    def remote_url(self) -> str:
        """HTTPS remote with the token embedded."""
        return f"https://x-access-token:{self.token}@{self.host}/{self.owner}/{self.name}.git"

    @property
    def repo(self) -> git.Repo:
        if self._repo is None:
            try:
                self._repo = git.Repo(self.local_path)
            except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as e:
                raise PublishError("open repository", f"{self.local_path} is not a git repository") from e
        return self._repo

    def _redact(self, text: str) -> str:
        return text.replace(self.token, "***") if self.token else text

    def clone(self) -> None:
        message(f"Cloning {self.owner}/{self.name}...", MessageType.INFO, VerbosityLevel.EXTRA_VERBOSE)
        try:
            self._repo = git.Repo.clone_from(self.remote_url, self.local_path)
        except git.exc.GitCommandError as e:
            raise PublishError("clone", self._redact(str(e))) from e
        message(f"Successfully cloned {self.owner}/{self.name}", MessageType.SUCCESS, VerbosityLevel.VERBOSE)

    def are_files_changed(self) -> bool:
        changed = self.repo.is_dirty(untracked_files=True)
        message(f"Working tree changed: {changed}", MessageType.DEBUG, VerbosityLevel.DEBUG)
        return changed

    def create_branch(self, branch: str) -> None:
        try:
            self.repo.git.checkout("-b", branch)
        except git.exc.GitCommandError as e:
            raise PublishError("create branch", str(e)) from e

    def push(self, branch: str, commit_message: str, author_name: str, author_email: str) -> None:
        repo = self.repo
        try:
            with repo.config_writer() as writer:
                writer.set_value("user", "name", author_name)
                writer.set_value("user", "email", author_email)

            repo.git.add(A=True)
            repo.index.commit(
                commit_message,
                author=git.Actor(author_name, author_email),
                committer=git.Actor(author_name, author_email),
            )

            message(f"Pushing '{branch}'...", MessageType.DEBUG, VerbosityLevel.DEBUG)
            repo.git.push(self.remote_url, f"{branch}:{branch}")
        except git.exc.GitCommandError as e:
            raise PublishError("push", self._redact(str(e))) from e
