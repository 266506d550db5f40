"""Process exit codes.

The build either completes (including the early exit for untagged builds) or
fails at exactly one step. Every failure maps to the same exit status.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for the gxbuild command.

    These values are used as process exit codes and should remain stable.
    """

    OK = 0
    FAILED = 1

    def __str__(self) -> str:
        """Return human-readable name."""
        return self.name.lower()

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK

    @property
    def is_error(self) -> bool:
        return self != ErrorCode.OK
