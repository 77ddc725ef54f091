"""Version control working copies."""

from .abstract_repo import AbstractRepo
from .git_repo import GitRepo

__all__ = ["AbstractRepo", "GitRepo"]
