"""Slack message recipients."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SlackRecipient:
    """A channel or a user, identified by id and name."""

    id: str
    name: str

    @classmethod
    def by_name(cls, name: str) -> "SlackRecipient":
        return cls(id=name, name=name)

    @classmethod
    def user_mention(cls, name: str) -> "SlackRecipient":
        return cls(id=f"@{name}", name=name)