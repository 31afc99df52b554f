from dataclasses import dataclass
from typing import Optional, Union

from transcriber.constants import DEFAULT_MIME_TYPE


@dataclass(frozen=True)
class UrlSource:
    url: str
    prompt: Optional[str] = None


@dataclass(frozen=True)
class FileSource:
    """Local media. ``content`` holds already-uploaded bytes; no disk read then."""

    path: Optional[str] = None
    prompt: Optional[str] = None
    content: Optional[bytes] = None
    filename: Optional[str] = None


TranscriptionRequest = Union[UrlSource, FileSource]


@dataclass(frozen=True)
class MediaPayload:
    data: bytes
    filename: str
    mime_type: str = DEFAULT_MIME_TYPE


@dataclass(frozen=True)
class TranscriptionResult:
    transcript: str

    def to_dict(self) -> dict[str, str]:
        return {"transcript": self.transcript}
