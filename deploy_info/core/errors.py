"""Error codes for CLI exit status.

These map one-to-one onto the failure classes of a deploy-info run and are
used as process exit codes, so the numeric values should remain stable:
- 0: Success
- 1: User error (bad arguments, missing token, invalid config)
- 2: Environment error (config file unreadable)
- 3: Not found (project or deployment tag lookup had no match)
- 4: Network error (transport failure or non-2xx status)
- 5: Decode error (response body or manifest could not be parsed)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for the deploy-info command."""

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    NOT_FOUND = 3
    NETWORK_ERROR = 4
    DECODE_ERROR = 5

    def __str__(self) -> str:
        """Return human-readable name."""
        return self.name.lower().replace("_", " ")
