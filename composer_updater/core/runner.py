"""End-to-end run: clone, build composer.json, file issues, publish.

Collaborators (working copy, API clients, registry probe) can be passed in;
anything left out is built from the configuration.
"""

from __future__ import annotations

import time
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from composer_updater.config import Config, ConfigData
from composer_updater.core import composer, persistence
from composer_updater.core.classifier import Classifier, GitHubWordPressProbe, RegistryProbe
from composer_updater.core.composer import BuildResult
from composer_updater.core.inventory import list_plugins, verify_project_layout
from composer_updater.core.issues import file_failure_issues
from composer_updater.core.publish import DelayPolicy, PublishPipeline, PublishRequest
from composer_updater.output import MessageType, VerbosityLevel, group, message
from composer_updater.plugins.hosting.github_api import GitHubApi
from composer_updater.plugins.repos.abstract_repo import AbstractRepo
from composer_updater.plugins.repos.git_repo import GitRepo

COMMIT_MESSAGE = "[skip-deploy] Chore: Updated Composer File"
BRANCH_PREFIX = "composer/"


@dataclass
class RunResult:
    """Summary of a run."""

    changed: bool
    failed: list[str] = field(default_factory=list)
    issues_created: list[str] = field(default_factory=list)
    pr_number: int | None = None
    merged: bool = False


def build_composer(
    directory: Path,
    name: str,
    classifier: Classifier,
    organization: str,
) -> BuildResult:
    """Update ``composer.json`` in *directory*, or generate it if missing.

    The result is not written; see :func:`persistence.store`.
    """
    plugins = list_plugins(directory)
    if persistence.composer_exists(directory):
        message("Updating existing Composer file", MessageType.INFO, VerbosityLevel.VERBOSE)
        return composer.update(persistence.load(directory), plugins, classifier, organization)

    message("No Composer file found, generating a new one", MessageType.INFO, VerbosityLevel.VERBOSE)
    return composer.generate(name, plugins, classifier, organization)


def new_branch_name() -> str:
    return f"{BRANCH_PREFIX}{uuid.uuid4()}"


def run(
    config: ConfigData,
    *,
    repo: AbstractRepo | None = None,
    api: GitHubApi | None = None,
    approval_api: GitHubApi | None = None,
    probe: RegistryProbe | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> RunResult:
    """Run the whole update for the configured repository.

    Args:
        config: Validated configuration
        repo: Working copy; cloned here when not given
        api: Hosting API client for the main token
        approval_api: Client for the approval token; built from config when
            an approval token is set
        probe: Registry probe used for classification
        sleep: Delay function used between auto-merge steps

    Returns:
        Summary of what happened

    Raises:
        ComposerUpdaterError: On any fatal failure
    """
    owner, repo_name = Config.owner_and_repo(config)
    token = config["github_token"]
    timeout = float(config.get("timeout", 30.0))
    organization = config.get("organization", composer.DEFAULT_ORGANIZATION)

    if api is None:
        api = GitHubApi(token, owner, repo_name, timeout=timeout)
    if approval_api is None and config.get("approval_github_token"):
        approval_api = GitHubApi(config["approval_github_token"], owner, repo_name, timeout=timeout)
    if probe is None:
        probe = GitHubWordPressProbe(token, organization=organization, timeout=timeout)

    if repo is None:
        work_dir = Path(config.get("work_dir", "clones")).resolve() / repo_name
        work_dir.mkdir(parents=True, exist_ok=True)
        repo = GitRepo(owner, repo_name, work_dir, token)
        with group("Clone repo"):
            repo.clone()

    directory = repo.get_path()

    with group("Checking if is WordPress repo"):
        verify_project_layout(directory)

    classifier = Classifier(probe)
    with group("Generate composer file"):
        built = build_composer(directory, f"{owner}/{repo_name}", classifier, organization)

    result = RunResult(changed=False, failed=list(built.failed))

    with group("Creating issues for missing plugins"):
        result.issues_created = file_failure_issues(api, built.failed, classifier.probe_errors)

    with group("Writing new Composer file to repo"):
        persistence.store(directory, built.manifest)

    if not repo.are_files_changed():
        message("No changes found. Finishing up.", MessageType.INFO, VerbosityLevel.ALWAYS)
        return result

    result.changed = True
    pipeline = PublishPipeline(
        repo,
        api,
        approval_api=approval_api,
        delays=DelayPolicy.from_dict(config.get("delays")),
        sleep=sleep,
    )
    request = PublishRequest(
        branch=new_branch_name(),
        base=Config.branch(config),
        commit_message=COMMIT_MESSAGE,
        author_name=config.get("committer_username", "web-flow"),
        author_email=config.get("committer_email", "noreply@github.com"),
    )
    with group("Publishing changes"):
        published = pipeline.run(request)

    result.pr_number = published.pr_number
    result.merged = published.merged
    message("Finished updating Composer file.", MessageType.SUCCESS, VerbosityLevel.ALWAYS)
    return result
