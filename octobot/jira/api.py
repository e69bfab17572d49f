"""The JIRA session interface and helpers for building and reading requests."""

from __future__ import annotations

import abc
import re
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Sequence

from octobot.jira.models import Field, Issue, Transition, TransitionRequest, Version
from octobot.version import Version as VersionNumber

_LIST_SEPARATOR = re.compile(r"\s*,\s*")


class Session(abc.ABC):
    """Operations on a JIRA server."""

    @abc.abstractmethod
    async def get_issue(self, key: str) -> Issue: ...

    @abc.abstractmethod
    async def get_transitions(self, key: str) -> list[Transition]: ...

    @abc.abstractmethod
    async def transition_issue(self, key: str, transition: TransitionRequest) -> None: ...

    @abc.abstractmethod
    async def comment_issue(self, key: str, comment: str) -> None: ...

    @abc.abstractmethod
    async def add_version(self, project: str, version: str) -> None: ...

    @abc.abstractmethod
    async def get_versions(self, project: str) -> list[Version]: ...

    @abc.abstractmethod
    async def assign_fix_version(self, key: str, version: str) -> None: ...

    @abc.abstractmethod
    async def reorder_version(
        self, version: Version, position: "JiraVersionPosition"
    ) -> None: ...

    @abc.abstractmethod
    async def add_pending_version(self, key: str, version: str) -> None: ...

    @abc.abstractmethod
    async def remove_pending_versions(
        self, key: str, versions: Sequence[VersionNumber]
    ) -> None: ...

    @abc.abstractmethod
    async def find_pending_versions(
        self, project: str
    ) -> dict[str, list[VersionNumber]]: ...


@dataclass(frozen=True)
class JiraVersionPosition:
    """Where to move a version: first, or after another version."""

    after_version: Optional[Version] = None

    @classmethod
    def first(cls) -> "JiraVersionPosition":
        return cls(None)

    @classmethod
    def after(cls, version: Version) -> "JiraVersionPosition":
        return cls(version)

    def to_request(self) -> dict[str, Any]:
        if self.after_version is None:
            return {"position": "First"}
        return {"after": self.after_version.uri}


def lookup_field(field: str, fields: Iterable[Field]) -> str:
    """Return the id of the field whose id or name is ``field``."""
    for f in fields:
        if field == f.id or field == f.name:
            return f.id
    raise ValueError(f"Error: Invalid JIRA field: {field}")


def _member(value: Any, key: str) -> Any:
    return value.get(key) if isinstance(value, dict) else None


def parse_pending_version_field(value: Any) -> list[VersionNumber]:
    """Parse a comma-separated list of versions; unparsable entries are dropped."""
    text = value if isinstance(value, str) else ""
    parsed = (VersionNumber.parse(p) for p in _LIST_SEPARATOR.split(text.strip()))
    return [v for v in parsed if v is not None]


def parse_pending_versions(search: Any, field_id: str) -> dict[str, list[VersionNumber]]:
    """Map issue keys in a search result to their pending versions."""
    issues = _member(search, "issues")
    if not isinstance(issues, list):
        return {}
    result = {}
    for issue in issues:
        key = _member(issue, "key")
        key = key if isinstance(key, str) else ""
        versions = parse_pending_version_field(_member(_member(issue, "fields"), field_id))
        if key and versions:
            result[key] = versions
    return result


def add_pending_version_value(current: Any, version: str) -> str:
    """Return the field value with ``version`` added, sorted and de-duplicated."""
    parsed = VersionNumber.parse(version)
    if parsed is None:
        raise ValueError(f"Unable to parse version: {version}")
    merged: list[VersionNumber] = []
    for v in sorted([*parse_pending_version_field(current), parsed]):
        if not merged or merged[-1] != v:
            merged.append(v)
    return ", ".join(str(v) for v in merged)


def remove_pending_versions_value(current: Any, versions: Sequence[VersionNumber]) -> str:
    """Return the field value with every one of ``versions`` removed."""
    kept = (v for v in parse_pending_version_field(current) if v not in versions)
    return ", ".join(str(v) for v in kept)


def fix_version_update(field: str, version: str) -> dict[str, Any]:
    """Build the issue update that adds a fix version."""
    return {"update": {field: [{"add": {"name": version}}]}}


def pending_versions_update(field: str, value: str) -> dict[str, Any]:
    """Build the issue update that sets the pending versions field."""
    return {"update": {field: [{"set": value}]}}