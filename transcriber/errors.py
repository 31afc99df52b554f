"""Typed failures raised by the transcription pipeline.

Each stage raises its own error and callers branch on the class and ``kind``.
Surfaces turn any of them into the outbound ``{error, details?}`` mapping.
"""
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Optional

from transcriber.constants import MSG_ERR_INVALID_REQUEST


@dataclass(frozen=True)
class FieldIssue:
    field: str
    message: str


class AcquisitionErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    FETCH_FAILED = "fetch_failed"


class ProviderErrorKind(str, Enum):
    MISCONFIGURED = "misconfigured"
    UPSTREAM_REJECTED = "upstream_rejected"
    UNPARSEABLE = "unparseable"
    UNREACHABLE = "unreachable"


class TranscriptionFailure(Exception):
    """Base class for every failure surfaced to a caller."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.message}


class ValidationError(TranscriptionFailure):
    """Malformed caller input. Lists every violated field, not just the first."""

    def __init__(self, issues: list[FieldIssue]) -> None:
        self.issues = list(issues)
        super().__init__(MSG_ERR_INVALID_REQUEST)

    @property
    def fields(self) -> list[str]:
        return [issue.field for issue in self.issues]

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.message, "details": [asdict(i) for i in self.issues]}


class AcquisitionError(TranscriptionFailure):
    """The source media could not be obtained."""

    def __init__(self, kind: AcquisitionErrorKind, message: str) -> None:
        self.kind = kind
        super().__init__(message)


class ProviderError(TranscriptionFailure):
    """The speech-to-text provider could not produce a transcript."""

    def __init__(
        self,
        kind: ProviderErrorKind,
        message: str,
        detail: Optional[str] = None,
    ) -> None:
        self.kind = kind
        self.detail = detail
        super().__init__(message)
