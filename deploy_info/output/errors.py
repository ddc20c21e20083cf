"""Error presentation utilities.

Centralized diagnostic formatting and exit code mapping for pipeline
failures.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from deploy_info.core.errors import ErrorCode
from deploy_info.gitlab.errors import DecodeError, NotFoundError, TransportError

if TYPE_CHECKING:
    from deploy_info.diff.resolver import DiffFailure
    from deploy_info.output.console import ConsoleProtocol

__all__ = ["print_diff_failure", "diff_failure_exit_code"]


def print_diff_failure(failure: DiffFailure, console: ConsoleProtocol) -> None:
    """Print one diagnostic line naming the failing step and its cause."""
    console.error(failure.message)


def diff_failure_exit_code(failure: DiffFailure) -> int:
    """Get exit code for a pipeline failure."""
    match failure.cause:
        case TransportError():
            return int(ErrorCode.NETWORK_ERROR)
        case DecodeError():
            return int(ErrorCode.DECODE_ERROR)
        case NotFoundError():
            return int(ErrorCode.NOT_FOUND)
    # Fallback for exhaustiveness
    return int(ErrorCode.USER_ERROR)
