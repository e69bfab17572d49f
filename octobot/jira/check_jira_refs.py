"""Rules for the pull-request check that requires JIRA references."""

from __future__ import annotations

import re
from typing import Optional, Sequence

JIRA_REF_CONTEXT = "jira"

ALLOWED_SKIP_TYPES = ("build", "chore", "docs", "refactor", "style", "test")

MISSING_REFERENCE_TITLE = "Missing JIRA reference"
SKIPPED_CHECK_TITLE = "Skipped JIRA check"

_CONVENTIONAL_HEADER = re.compile(
    r"(?P<type>[A-Za-z]+)(?:\((?P<scope>[^()\r\n]*)\))?(?P<breaking>!)?: (?P<description>[^\r\n]+)"
)


def conventional_commit_jira_skip_type(title: str) -> Optional[str]:
    """Return the commit type if the title is a conventional commit that may skip JIRA."""
    match = _CONVENTIONAL_HEADER.fullmatch(title)
    if match is None:
        return None
    commit_type = match.group("type")
    return commit_type if commit_type in ALLOWED_SKIP_TYPES else None


def missing_reference_message(projects: Sequence[str]) -> str:
    """Explain which projects a commit message should reference."""
    if len(projects) == 1:
        return f"Expected a JIRA reference in a commit message for the project {projects[0]}"
    return (
        "Expected a JIRA reference in a commit message for at least one of the "
        f"following projects: {', '.join(projects)}"
    )


def skipped_check_message(commit_type: str) -> str:
    """Explain why the check was skipped."""
    return f"Skipped JIRA check for commit type: {commit_type}"


def latest_commit_hash(head_sha: str, commit_shas: Sequence[str]) -> str:
    """The hash of the last commit, or the pull request head if there are none."""
    return commit_shas[-1] if commit_shas else head_sha