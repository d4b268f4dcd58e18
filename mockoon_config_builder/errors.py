"""Error taxonomy raised while building a Mockoon environment."""

from __future__ import annotations

from pathlib import Path


class ConfigBuildError(RuntimeError):
    """Base class for every terminal failure of a generation run."""


class CompilationFailed(ConfigBuildError):
    """Raised when definition modules cannot be compiled."""

    def __init__(self, message: str, diagnostics: list[str] | None = None) -> None:
        self.diagnostics = list(diagnostics or [])
        if self.diagnostics:
            message = message + "\n" + "\n".join(self.diagnostics)
        super().__init__(message)


class MissingRequiredFile(ConfigBuildError):
    """Raised when a mandatory definition file (the global settings) is absent."""


class MissingIdentifier(ConfigBuildError):
    """Raised when a record that must carry a uuid does not."""


class InvalidIdentifierFormat(ConfigBuildError):
    """Raised when a uuid is present but not in 8-4-4-4-12 hex form."""

    def __init__(self, value: object, path: str) -> None:
        self.value = value
        self.path = path
        super().__init__(f"Invalid UUID format in {path}: {value}")


class DuplicateIdentifier(ConfigBuildError):
    """Raised when two records of one environment share a uuid."""

    def __init__(self, value: str, first: str, second: str) -> None:
        self.value = value
        super().__init__(f"Duplicate UUID {value} in {second} (already used by {first})")


class LoaderFailure(ConfigBuildError):
    """Raised when a definition file cannot be evaluated into a record."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Error loading definition file {path}: {reason}")


class IOFailure(ConfigBuildError):
    """Raised when a filesystem operation of the pipeline fails."""

    def __init__(self, operation: str, path: Path, reason: str) -> None:
        self.operation = operation
        self.path = path
        super().__init__(f"Failed to {operation} {path}: {reason}")
