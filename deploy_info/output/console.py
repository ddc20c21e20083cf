"""Console output abstraction.

Services and the CLI write through ConsoleProtocol so the report, debug
trace and diagnostics can be captured in tests. Report lines go to stdout
verbatim; everything diagnostic goes to stderr so stdout can be piped
straight into a ticket.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

__all__ = [
    "Style",
    "ConsoleProtocol",
    "RichConsole",
    "MockConsole",
    "OutputRecord",
]


class Style(Enum):
    """Text styles for console output."""

    DEFAULT = auto()
    ERROR = auto()  # Red, diagnostic
    WARNING = auto()  # Yellow, diagnostic
    DIM = auto()  # Muted diagnostic (debug trace, hints)

    def __str__(self) -> str:
        return self.name.lower()


class ConsoleProtocol(Protocol):
    """Protocol for console output."""

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        """Print a report line to stdout, without markup interpretation."""
        ...

    def error(self, message: str) -> None:
        """Print an error line to stderr."""
        ...

    def warning(self, message: str) -> None:
        """Print a warning line to stderr."""
        ...

    def hint(self, message: str) -> None:
        """Print a follow-up hint to stderr."""
        ...

    def debug(self, message: str) -> None:
        """Print a debug trace line to stderr."""
        ...


class RichConsole:
    """Console implementation using Rich library."""

    def __init__(self) -> None:
        # Import Rich lazily to avoid import-time dependency
        from rich.console import Console

        self._out = Console(highlight=False, soft_wrap=True, emoji=False)
        self._err = Console(stderr=True, highlight=False, soft_wrap=True, emoji=False)
        self._style_map = {
            Style.DEFAULT: "",
            Style.ERROR: "red bold",
            Style.WARNING: "yellow",
            Style.DIM: "dim",
        }

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        # Commit titles may contain [brackets] or :codes:; print them untouched.
        rich_style = self._style_map.get(style, "")
        self._out.print(message, style=rich_style or None, markup=False)

    def error(self, message: str) -> None:
        from rich.markup import escape

        self._err.print(f"[red bold]error:[/red bold] {escape(message)}")

    def warning(self, message: str) -> None:
        from rich.markup import escape

        self._err.print(f"[yellow]warning:[/yellow] {escape(message)}")

    def hint(self, message: str) -> None:
        self._err.print(f"hint: {message}", style="dim", markup=False)

    def debug(self, message: str) -> None:
        self._err.print(message, style="dim", markup=False)


@dataclass
class OutputRecord:
    """A single output record for MockConsole."""

    message: str
    style: Style
    stderr: bool = False


def _empty_outputs() -> list[OutputRecord]:
    """Factory for empty outputs list (helps type inference)."""
    return []


@dataclass
class MockConsole:
    """Console implementation that captures output for testing."""

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def error(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"error: {message}", Style.ERROR, stderr=True))

    def warning(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"warning: {message}", Style.WARNING, stderr=True))

    def hint(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"hint: {message}", Style.DIM, stderr=True))

    def debug(self, message: str) -> None:
        self.outputs.append(OutputRecord(message, Style.DIM, stderr=True))

    # Test helper methods

    @property
    def stdout(self) -> list[str]:
        """Lines that would have gone to stdout."""
        return [o.message for o in self.outputs if not o.stderr]

    @property
    def stderr(self) -> list[str]:
        """Lines that would have gone to stderr."""
        return [o.message for o in self.outputs if o.stderr]

    @property
    def text(self) -> str:
        """All stdout output as a single newline-separated string."""
        return "\n".join(self.stdout)

    def has_error(self) -> bool:
        return any(o.style == Style.ERROR for o in self.outputs)

    def has_warning(self) -> bool:
        return any(o.style == Style.WARNING for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        """Find all outputs containing a substring."""
        return [o for o in self.outputs if substring in o.message]
