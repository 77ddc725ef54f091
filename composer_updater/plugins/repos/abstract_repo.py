"""Abstract base class for version control working copies."""

from abc import ABC, abstractmethod
from pathlib import Path


class AbstractRepo(ABC):
    """Abstract base class for a local working copy of the target repository."""

    # Subclasses must define this to identify their type
    REPO_TYPE: str = "unknown"

    def __init__(self, owner: str, name: str, local_path: Path):
        """Initialize a working copy.

        Args:
            owner: Repository owner (user or organisation)
            name: Repository name
            local_path: Directory the repository is checked out to
        """
        self.owner = owner
        self.name = name
        self.local_path = local_path

    @abstractmethod
    def clone(self) -> None:
        """Check out the repository into :attr:`local_path`."""
        pass

    @abstractmethod
    def are_files_changed(self) -> bool:
        """Check for modified or untracked files.

        Returns:
            True if the working tree differs from HEAD
        """
        pass

    @abstractmethod
    def create_branch(self, branch: str) -> None:
        """Create *branch* from the current HEAD and switch to it."""
        pass

    @abstractmethod
    def push(self, branch: str, commit_message: str, author_name: str, author_email: str) -> None:
        """Commit every change and push *branch* to the remote.

        Args:
            branch: Branch to push
            commit_message: Commit message
            author_name: Committer name
            author_email: Committer email
        """
        pass

    def get_path(self) -> Path:
        """Get the local path to the repository."""
        return self.local_path

    def exists(self) -> bool:
        """Check if the repository exists locally."""
        return self.local_path.exists()

    def __str__(self) -> str:
        """String representation of the repository."""
        return f"Repo({self.owner}/{self.name}, type={self.REPO_TYPE}, path={self.local_path})"

    def __repr__(self) -> str:
        """Developer representation of the repository."""
        return (
            f"{self.__class__.__name__}(owner='{self.owner}', "
            f"name='{self.name}', local_path={self.local_path})"
        )
