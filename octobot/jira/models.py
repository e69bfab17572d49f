"""Data models for the JIRA REST API."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")

_DEFAULT_VERSION_URI = "http://something/version/some-id"
_DEFAULT_VERSION_ID = "some-id"


@dataclass(frozen=True)
class Status:
    name: str


@dataclass(frozen=True)
class Issue:
    key: str
    status: Optional[Status] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Issue":
        status = data.get("status")
        return cls(
            key=data["key"],
            status=Status(name=status["name"]) if isinstance(status, dict) else None,
        )


@dataclass(frozen=True)
class Comment:
    body: str


@dataclass(frozen=True)
class TransitionTo:
    id: str
    name: str


@dataclass(frozen=True)
class Resolution:
    id: str
    name: str


@dataclass(frozen=True)
class TransitionField(Generic[T]):
    allowed_values: list[T] = field(default_factory=list)


@dataclass(frozen=True)
class TransitionFields:
    resolution: Optional[TransitionField[Resolution]] = None


@dataclass
class IDOrName:
    id: Optional[str] = None
    name: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name}


@dataclass
class TransitionFieldsRequest:
    resolution: Optional[IDOrName] = None


@dataclass
class TransitionRequest:
    transition: IDOrName
    fields: Optional[TransitionFieldsRequest] = None

    def set_resolution(self, res: Resolution) -> None:
        """Request that the transition sets the given resolution, by name."""
        if self.fields is None:
            self.fields = TransitionFieldsRequest()
        self.fields.resolution = IDOrName(id=None, name=res.name)

    def to_dict(self) -> dict[str, Any]:
        fields = None
        if self.fields is not None:
            resolution = self.fields.resolution
            fields = {"resolution": resolution.to_dict() if resolution else None}
        return {"transition": self.transition.to_dict(), "fields": fields}


@dataclass(frozen=True)
class Transition:
    id: str
    name: str
    to: TransitionTo
    fields: Optional[TransitionFields] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Transition":
        to = data["to"]
        return cls(
            id=data["id"],
            name=data["name"],
            to=TransitionTo(id=to["id"], name=to["name"]),
            fields=_transition_fields(data.get("fields")),
        )

    def new_request(self) -> TransitionRequest:
        """Build a request that performs this transition."""
        return TransitionRequest(transition=IDOrName(id=self.id, name=None))


def _transition_fields(data: Any) -> Optional[TransitionFields]:
    if not isinstance(data, dict):
        return None
    resolution = data.get("resolution")
    if not isinstance(resolution, dict):
        return TransitionFields(resolution=None)
    allowed = [
        Resolution(id=r["id"], name=r["name"])
        for r in resolution.get("allowedValues") or []
    ]
    return TransitionFields(resolution=TransitionField(allowed_values=allowed))


@dataclass(frozen=True)
class Field:
    id: str
    name: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Field":
        return cls(id=data["id"], name=data["name"])


@dataclass(frozen=True)
class Version:
    """A version as it exists in a JIRA project."""

    name: str
    uri: str = _DEFAULT_VERSION_URI
    id: str = _DEFAULT_VERSION_ID

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Version":
        return cls(name=data["name"], uri=data["self"], id=data["id"])

    def to_dict(self) -> dict[str, Any]:
        return {"self": self.uri, "id": self.id, "name": self.name}