"""Custom exception hierarchy for plan loading and report delivery."""

from __future__ import annotations


class TfsError(Exception):
    """Base exception for tfs errors.

    Attributes:
        message: Human-readable error message, printed as a single diagnostic
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class PlanSourceError(TfsError):
    """The plan file is missing or its JSON could not be obtained."""

    pass


class PlanFormatError(TfsError):
    """The change-set JSON does not have the expected shape.

    Attributes:
        path: Location of the offending element (e.g. "resource_changes[3].change")
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(f"{path}: {message}" if path else message)
        self.path = path


class UploadError(TfsError):
    """Uploading the report or signing its access link failed.

    Attributes:
        provider: Object store that failed ("azure", "s3" or "gcs")
    """

    def __init__(self, message: str, provider: str) -> None:
        super().__init__(f"{provider}: {message}")
        self.provider = provider

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, provider={self.provider!r})"
