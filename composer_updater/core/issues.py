"""Issue filing for plugins that could not be added to Composer."""

from __future__ import annotations

from composer_updater.output import MessageType, VerbosityLevel, message
from composer_updater.plugins.hosting.github_api import GitHubApi

ISSUE_LABELS = ["plugins"]


def issue_title(plugin: str) -> str:
    return f"Failed getting plugin for Composer: {plugin}"


def issue_body(plugin: str, probe_error: str | None = None) -> str:
    """Build the issue text for *plugin*.

    When the plugin failed because a registry could not be reached, the
    error is included so the issue is not mistaken for a missing plugin.
    """
    body = f"Failed getting plugin for Composer: **{plugin}**.\n\n"
    if probe_error:
        body += (
            f"The plugin registry could not be reached while checking this plugin "
            f"(`{probe_error}`). The next run will try again.\n\n"
        )
    body += (
        "If you wish to ignore this plugin, add it in the `extra.ignore` array, "
        "in the composer.json file."
    )
    return body


def file_failure_issues(
    api: GitHubApi,
    failed: list[str],
    probe_errors: dict[str, str] | None = None,
) -> list[str]:
    """Open one issue per failed plugin unless an open one already exists.

    Args:
        api: Hosting API client
        failed: Plugins that could not be classified
        probe_errors: Probe error text per plugin, where one occurred

    Returns:
        Titles of the issues that were created
    """
    if not failed:
        return []

    probe_errors = probe_errors or {}
    existing = {issue.get("title") for issue in api.get_issues()}
    created: list[str] = []

    for plugin in failed:
        title = issue_title(plugin)
        if title in existing:
            message(f"Issue already exists: {title}", MessageType.DEBUG, VerbosityLevel.VERBOSE)
            continue
        api.create_issue(title, issue_body(plugin, probe_errors.get(plugin)), list(ISSUE_LABELS))
        existing.add(title)
        created.append(title)
        message(f"Created issue: {title}", MessageType.INFO, VerbosityLevel.ALWAYS)

    return created
