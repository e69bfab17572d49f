"""JIRA workflow automation driven by commit messages."""

from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass
from typing import Iterable, Optional, Protocol, Sequence

from octobot.jira.api import JiraVersionPosition, Session
from octobot.jira.models import Resolution, Status, Transition
from octobot.jira.models import Version as JiraVersion
from octobot.version import Version

log = logging.getLogger(__name__)

_KEY_RE = re.compile(r"\b([A-Z0-9]+-[0-9]+)\b")
_REF_LIST = r":?\s*((\[?([A-Z0-9]+-[0-9]+)(?:\]|\b)[\s,]*)+)"
# Fix [ABC-123][OTHER-567], [YEAH-999]
_FIXED_RE = re.compile(r"(?i:Fix(?:es|ed)?)" + _REF_LIST)
# See [ABC-123][OTHER-567], [YEAH-999]
_MENTIONED_RE = re.compile(r"(?i:See)" + _REF_LIST)
_PROJECT_RE = re.compile(r"([A-Za-z0-9]+)(-[0-9]+)?")

_SHORT_HASH_LEN = 7


class CommitLike(Protocol):
    """Anything carrying a commit message."""

    message: str


@dataclass(frozen=True)
class PushedCommit:
    """A commit with the details needed to describe it in a JIRA comment."""

    message: str
    sha: str = ""
    html_url: str = ""

    @property
    def short_hash(self) -> str:
        return self.sha[:_SHORT_HASH_LEN]

    @property
    def title(self) -> str:
        return self.message.split("\n", 1)[0].rstrip("\r")


@dataclass(frozen=True)
class ReviewRequest:
    """The parts of a pull request that review comments mention."""

    base_branch: str
    html_url: str


@dataclass(frozen=True)
class WorkflowStates:
    """Names of the JIRA states and resolutions the workflow moves issues into."""

    progress_states: Sequence[str] = ()
    review_states: Sequence[str] = ()
    resolved_states: Sequence[str] = ()
    fixed_resolutions: Sequence[str] = ()


class DryRunMode(enum.Enum):
    DRY_RUN = "dry-run"
    FOR_REAL = "for-real"


def get_jira_project(jira_key: str) -> str:
    """The project part of a key such as ``SERVER-123``; other text is returned as is."""
    match = _PROJECT_RE.fullmatch(jira_key)
    return match.group(1) if match else jira_key


def get_jira_keys(strings: Iterable[str], projects: Sequence[str]) -> list[str]:
    """All distinct keys of the given projects found in the strings, sorted."""
    keys = {
        m.group(1)
        for s in strings
        for m in _KEY_RE.finditer(s)
        if get_jira_project(m.group(1)) in projects
    }
    return sorted(keys)


def _marked_keys(
    pattern: re.Pattern[str], commits: Iterable[CommitLike], projects: Sequence[str]
) -> list[str]:
    refs = [m.group(1) for c in commits for m in pattern.finditer(c.message)]
    return get_jira_keys(refs, projects)


def get_fixed_jira_keys(commits: Iterable[CommitLike], projects: Sequence[str]) -> list[str]:
    """Keys that follow a "Fix", "Fixes" or "Fixed" marker."""
    return _marked_keys(_FIXED_RE, commits, projects)


def get_mentioned_jira_keys(commits: Iterable[CommitLike], projects: Sequence[str]) -> list[str]:
    """Keys that follow a "See" marker."""
    return _marked_keys(_MENTIONED_RE, commits, projects)


def get_all_jira_keys(commits: Iterable[CommitLike], projects: Sequence[str]) -> list[str]:
    """Every key of the given projects referenced anywhere in the commits."""
    return get_jira_keys((c.message for c in commits), projects)


def get_referenced_jira_keys(commits: Sequence[CommitLike], projects: Sequence[str]) -> list[str]:
    """Keys referenced but not marked as fixed."""
    fixed = set(get_fixed_jira_keys(commits, projects))
    return [k for k in get_all_jira_keys(commits, projects) if k not in fixed]


def references_jira(commits: Sequence[CommitLike], project: str) -> bool:
    """Whether any commit references an issue of the project."""
    return bool(get_all_jira_keys(commits, [project]))


def needs_transition(state: Optional[Status], target: Sequence[str]) -> bool:
    """Whether an issue in ``state`` is not yet in one of the target states."""
    return state is None or state.name not in target


def pick_transition(to: Sequence[str], choices: Iterable[Transition]) -> Optional[Transition]:
    """The first transition whose name or destination is one of ``to``."""
    for t in choices:
        if any(t.name == name or t.to.name == name for name in to):
            return t
    return None


def _parse_jira_versions(versions: Iterable[JiraVersion]) -> list[Version]:
    parsed = (Version.parse(v.name) for v in versions)
    return [v for v in parsed if v is not None]


def find_relevant_versions(
    target_version: Version,
    pending_versions: Iterable[Version],
    real_versions: Iterable[JiraVersion],
) -> list[Version]:
    """Pending versions of the target's major.minor line since the last real release."""

    def same_line(v: Version) -> bool:
        return v.major() == target_version.major() and v.minor() == target_version.minor()

    prior = [v for v in _parse_jira_versions(real_versions) if same_line(v) and v < target_version]
    latest_prior = max(prior) if prior else Version.parse("0.0.0.0")

    return [
        v
        for v in pending_versions
        if same_line(v) and v <= target_version and v > latest_prior
    ]


async def _try_get_issue_state(key: str, jira: Session) -> Optional[Status]:
    try:
        issue = await jira.get_issue(key)
    except Exception as e:
        log.error("Error getting JIRA [%s] %s", key, e)
        return None
    return issue.status


async def _find_transition(key: str, to: Sequence[str], jira: Session) -> Optional[Transition]:
    return pick_transition(to, await jira.get_transitions(key))


async def _try_transition(key: str, to: Sequence[str], jira: Session) -> None:
    try:
        transition = await _find_transition(key, to, jira)
    except Exception as e:
        log.error("%s", e)
        return
    if transition is None:
        log.info("JIRA [%s] cannot be transitioned to any of %s", key, list(to))
        return
    try:
        await jira.transition_issue(key, transition.new_request())
    except Exception as e:
        log.error("Error transitioning JIRA issue [%s] to one of %s: %s", key, list(to), e)
    else:
        log.info("Transitioned [%s] to one of %s", key, list(to))


async def _try_comment(jira: Session, key: str, comment: str) -> bool:
    try:
        await jira.comment_issue(key, comment)
    except Exception as e:
        log.error("Error commenting on key [%s]: %s", key, e)
        return False
    return True


async def submit_for_review(
    pr: ReviewRequest,
    commits: Sequence[CommitLike],
    projects: Sequence[str],
    jira: Session,
    states: WorkflowStates,
) -> None:
    """Comment on referenced issues and move them towards review."""
    review_states = states.review_states
    progress_states = states.progress_states

    for key in get_fixed_jira_keys(commits, projects):
        comment = f"Review submitted for branch {pr.base_branch}: {pr.html_url}"
        if not await _try_comment(jira, key, comment):
            continue

        issue_state = await _try_get_issue_state(key, jira)
        if not needs_transition(issue_state, review_states):
            continue
        if needs_transition(issue_state, progress_states):
            await _try_transition(key, progress_states, jira)
        await _try_transition(key, review_states, jira)

    mentioned = set(get_mentioned_jira_keys(commits, projects))
    for key in get_referenced_jira_keys(commits, projects):
        comment = f"Referenced by review submitted for branch {pr.base_branch}: {pr.html_url}"
        if not await _try_comment(jira, key, comment):
            continue
        if key in mentioned:
            continue

        issue_state = await _try_get_issue_state(key, jira)
        if not needs_transition(issue_state, progress_states):
            continue
        await _try_transition(key, progress_states, jira)


def _fixed_resolution(transition: Transition, fixed: Sequence[str]) -> Optional[Resolution]:
    fields = transition.fields
    if fields is None or fields.resolution is None:
        return None
    return next((r for r in fields.resolution.allowed_values if r.name in fixed), None)


async def _resolve_key(key: str, jira: Session, states: WorkflowStates) -> None:
    resolved_states = states.resolved_states
    try:
        transition = await _find_transition(key, resolved_states, jira)
    except Exception as e:
        log.error("%s", e)
        return
    if transition is None:
        log.info("JIRA [%s] cannot be transitioned to any of %s", key, list(resolved_states))
        return

    req = transition.new_request()
    if transition.fields is not None and transition.fields.resolution is not None:
        resolution = _fixed_resolution(transition, states.fixed_resolutions)
        if resolution is None:
            log.error(
                "Could not find fixed resolution in allowed values: %s",
                transition.fields.resolution.allowed_values,
            )
        else:
            req.set_resolution(resolution)

    try:
        await jira.transition_issue(key, req)
    except Exception as e:
        log.error(
            "Error transitioning JIRA issue [%s] to one of %s: %s", key, list(resolved_states), e
        )
    else:
        log.info("Transitioned [%s] to one of %s", key, list(resolved_states))


async def resolve_issue(
    branch: str,
    version: Optional[str],
    commits: Sequence[PushedCommit],
    projects: Sequence[str],
    jira: Session,
    states: WorkflowStates,
) -> None:
    """Comment on issues referenced by merged commits and resolve the fixed ones."""
    for commit in commits:
        desc = f"[{commit.short_hash}|{commit.html_url}]\n{{quote}}{commit.title}{{quote}}"
        version_desc = "" if version is None else f"\nIncluded in version {version}"
        fix_msg = f"Merged into branch {branch}: {desc}{version_desc}"
        ref_msg = f"Referenced by commit merged into branch {branch}: {desc}{version_desc}"

        for key in get_fixed_jira_keys([commit], projects):
            await _try_comment(jira, key, fix_msg)
            issue_state = await _try_get_issue_state(key, jira)
            if not needs_transition(issue_state, states.resolved_states):
                continue
            await _resolve_key(key, jira, states)

        for key in get_referenced_jira_keys([commit], projects):
            await _try_comment(jira, key, ref_msg)


async def add_pending_version(
    version: Optional[str],
    commits: Sequence[CommitLike],
    projects: Sequence[str],
    jira: Session,
) -> None:
    """Record ``version`` as pending on every referenced issue not merely mentioned."""
    if version is None:
        return
    mentioned = set(get_mentioned_jira_keys(commits, projects))
    for key in get_all_jira_keys(commits, projects):
        if key in mentioned:
            continue
        try:
            await jira.add_pending_version(key, version)
        except Exception as e:
            log.error("Error adding pending version %s to key %s: %s", version, key, e)


async def merge_pending_versions(
    version: str,
    project: str,
    jira: Session,
    mode: DryRunMode,
) -> dict[str, list[Version]]:
    """Fold relevant pending versions of a project's issues into a real version.

    Returns the pending versions that were (or, in a dry run, would be) merged,
    by issue key.
    """
    target_version = Version.parse(version)
    if target_version is None:
        raise ValueError(f"Invalid target version: {version}")

    real_versions = await jira.get_versions(project)
    all_pending_versions = await jira.find_pending_versions(project)

    relevant_by_key: dict[str, list[Version]] = {}
    for key, pending in all_pending_versions.items():
        relevant = find_relevant_versions(target_version, pending, real_versions)
        if relevant:
            relevant_by_key[key] = relevant

    if mode is DryRunMode.DRY_RUN:
        return relevant_by_key

    if not relevant_by_key:
        raise ValueError(f"No relevant pending versions for version {version}")

    if any(v.name == version for v in real_versions):
        log.info("JIRA version %s already exists for project %s", version, project)
    else:
        log.info("Creating new JIRA version %s for project %s", version, project)
        await jira.add_version(project, version)

    for key in sorted(relevant_by_key):
        relevant = relevant_by_key[key]
        log.info("Assigning JIRA version key %s: %s", key, version)
        try:
            await jira.assign_fix_version(key, version)
        except Exception as e:
            log.error("Error assigning version %s to key %s: %s", version, key, e)
            continue

        log.info("Removing pending versions key %s: %s", key, relevant)
        try:
            await jira.remove_pending_versions(key, relevant)
        except Exception as e:
            log.error("Error clearing pending version %s from key %s: %s", version, key, e)

    return relevant_by_key


def _version_sort_key(v: JiraVersion) -> tuple:
    parsed = Version.parse(v.name)
    return (1, v.name) if parsed is None else (0, parsed)


async def sort_versions(project: str, jira: Session) -> None:
    """Reorder a project's versions: numeric ones ascending, then the rest by name."""
    versions = sorted(await jira.get_versions(project), key=_version_sort_key)
    previous: Optional[JiraVersion] = None
    for v in versions:
        position = (
            JiraVersionPosition.first() if previous is None else JiraVersionPosition.after(previous)
        )
        await jira.reorder_version(v, position)
        previous = v