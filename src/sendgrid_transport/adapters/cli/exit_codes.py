"""Exit codes used by the CLI error paths.

Each failure class of a send maps to one code so scripts can tell a
misconfiguration from a rejected request or a network timeout.
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    """sysexits.h/errno-style exit codes.

    Example:
        >>> int(ExitCode.DELIVERY_FAILURE)
        69
        >>> ExitCode.CONFIG_ERROR
        <ExitCode.CONFIG_ERROR: 78>
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    FILE_NOT_FOUND = 2
    PERMISSION_DENIED = 13
    INVALID_ARGUMENT = 22
    DELIVERY_FAILURE = 69
    CONFIG_ERROR = 78
    TIMEOUT = 110


__all__ = ["ExitCode"]
