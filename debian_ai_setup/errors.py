from __future__ import annotations

import shlex
from typing import Sequence


class SetupError(RuntimeError):
    """Base for every abort path; carries the process exit code."""

    exit_code = 1


class ConfirmationDeclined(SetupError):
    exit_code = 1


class InvalidUsernameError(SetupError):
    exit_code = 64


class UnknownUserError(SetupError):
    exit_code = 67


class CommandError(SetupError):
    exit_code = 70

    def __init__(self, argv: Sequence[str], returncode: int, stderr: str = "") -> None:
        self.argv = list(argv)
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(f"Command failed ({returncode}): {shlex.join(self.argv)}\n{stderr}".rstrip())


class PrivilegeError(SetupError):
    exit_code = 77


class ConfigError(SetupError):
    exit_code = 78
