"""Source-control hosting API clients."""

from .github_api import GitHubApi

__all__ = ["GitHubApi"]
