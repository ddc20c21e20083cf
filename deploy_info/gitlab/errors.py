"""Failure types for the GitLab calls and the manifest parser.

Each failure class is a small frozen dataclass; together they form the
``DiffError`` union that every leaf operation returns inside ``Err``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

__all__ = [
    "TransportError",
    "DecodeError",
    "NotFoundError",
    "DiffError",
]


@dataclass(frozen=True, slots=True)
class TransportError:
    """Network failure or non-success HTTP status.

    Attributes:
        url: The URL that failed (never carries the token)
        status: HTTP status code (0 for network errors)
        message: Human-readable error message
    """

    url: str
    status: int
    message: str

    def __str__(self) -> str:
        if self.status:
            return f"HTTP {self.status}: {self.message} ({self.url})"
        return f"{self.message} ({self.url})"


@dataclass(frozen=True, slots=True)
class DecodeError:
    """Body could not be parsed into the expected structure."""

    source: str
    message: str

    def __str__(self) -> str:
        return f"cannot decode {self.source}: {self.message}"


@dataclass(frozen=True, slots=True)
class NotFoundError:
    """A search-style lookup had no usable match."""

    kind: Literal["project", "tag"]
    query: str
    project_id: int | None = None

    def __str__(self) -> str:
        if self.project_id is not None:
            return f"no {self.kind} matching '{self.query}' in project {self.project_id}"
        return f"no {self.kind} named '{self.query}'"


DiffError = TransportError | DecodeError | NotFoundError
