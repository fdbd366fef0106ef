"""Project-specific exception types."""

from __future__ import annotations


class UmbrelDevError(RuntimeError):
    """Base error for domain-level umbrel-dev failures."""


class MissingDependencyError(UmbrelDevError):
    """Raised when a required host tool is not on PATH."""

    def __init__(self, missing: list[str], guidance: str = ''):
        self.missing = list(missing)
        self.guidance = guidance
        msg = f'Missing required commands: {", ".join(self.missing)}'
        if guidance:
            msg = f'{msg}\n{guidance}'
        super().__init__(msg)


class NotInitializedError(UmbrelDevError):
    """Raised when no initialized development environment encloses the cwd."""


class MissingArgumentError(UmbrelDevError):
    """Raised when a command is missing a required positional argument."""


class DirectoryNotEmptyError(UmbrelDevError):
    """Raised when init targets a directory that already has content."""
