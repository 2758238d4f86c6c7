"""Error codes for CLI exit status.

Every command maps its failure onto one of these codes, except ``test``,
which exits with the test runner's own status so CI sees it unchanged.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    These values are used as process exit codes and should remain stable:
    - 0: Success
    - 1: User error (bad config, invalid arguments)
    - 2: Environment error (missing cargo/git, no Cargo.toml)
    - 3: Build error (compilation failed)
    - 4: Release error (a fatal release step failed)
    - 5: I/O error (artifact missing, install failed)
    - 6: Operation reserved but not implemented
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    BUILD_ERROR = 3
    RELEASE_ERROR = 4
    IO_ERROR = 5
    NOT_IMPLEMENTED = 6

    def __str__(self) -> str:
        """Return human-readable name."""
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK

    @property
    def is_error(self) -> bool:
        return self != ErrorCode.OK
