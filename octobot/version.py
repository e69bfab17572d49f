"""Dotted numeric version numbers with zero-padded comparison."""

from __future__ import annotations

import functools
import re
from typing import Optional

_PART_RE = re.compile(r"\+?[0-9]+")
_MAX_PART = 2**32 - 1


@functools.total_ordering
class Version:
    """A version such as ``1.2.3.4``, always holding at least three parts.

    Versions compare part by part; missing trailing parts count as zero,
    so ``1.0`` equals ``1.0.0.0``.
    """

    __slots__ = ("_parts",)

    def __init__(self, parts: tuple[int, ...]) -> None:
        parts = tuple(parts)
        if len(parts) < 3:
            parts = parts + (0,) * (3 - len(parts))
        self._parts = parts

    @classmethod
    def parse(cls, version_str: str) -> Optional["Version"]:
        """Parse a dotted version string, or return None if it is not one."""
        parts = []
        for piece in version_str.split("."):
            if not _PART_RE.fullmatch(piece):
                return None
            value = int(piece)
            if value > _MAX_PART:
                return None
            parts.append(value)
        return cls(tuple(parts))

    @property
    def parts(self) -> tuple[int, ...]:
        return self._parts

    def major(self) -> int:
        return self._parts[0]

    def minor(self) -> int:
        return self._parts[1]

    def _padded(self, other: "Version") -> tuple[tuple[int, ...], tuple[int, ...]]:
        width = max(len(self._parts), len(other._parts))
        mine = self._parts + (0,) * (width - len(self._parts))
        theirs = other._parts + (0,) * (width - len(other._parts))
        return mine, theirs

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        mine, theirs = self._padded(other)
        return mine == theirs

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        mine, theirs = self._padded(other)
        return mine < theirs

    def __hash__(self) -> int:
        parts = list(self._parts)
        while parts and parts[-1] == 0:
            parts.pop()
        return hash(tuple(parts))

    def __str__(self) -> str:
        return ".".join(str(p) for p in self._parts)

    def __repr__(self) -> str:
        return f"Version({str(self)!r})"