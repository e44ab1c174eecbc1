"""Exit codes for the pubseq CLI.

Scripting callers rely on these to tell apart why a release stopped, so the
numeric values must remain stable.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Process exit codes.

    - 0: Every package published (or would publish, in dry-run)
    - 1: User error (bad flags, invalid config, invalid publish plan)
    - 2: Toolchain error (too old, missing, unparseable version)
    - 3: Staging error (vendored source could not be copied or is incomplete)
    - 4: Publish error (a package was rejected; later ones were skipped)
    """

    OK = 0
    USER_ERROR = 1
    TOOLCHAIN_ERROR = 2
    STAGE_ERROR = 3
    PUBLISH_ERROR = 4

