"""HttpMediaAcquirer — remote URLs via httpx, local files via the filesystem."""
import asyncio
import logging
import mimetypes
from pathlib import Path, PurePosixPath
from typing import Optional
from urllib.parse import unquote, urlsplit

import httpx

from transcriber.acquisition.client import MediaAcquirer
from transcriber.constants import (
    DEFAULT_FETCH_TIMEOUT,
    DEFAULT_FILENAME,
    DEFAULT_MIME_TYPE,
    MSG_ACQUIRED,
    MSG_ERR_FETCH_STATUS,
    MSG_ERR_FETCH_TRANSPORT,
    MSG_ERR_NOT_FOUND,
    MSG_ERR_NOT_READABLE,
    MSG_FETCHING,
    MSG_READING,
)
from transcriber.errors import AcquisitionError, AcquisitionErrorKind
from transcriber.models import FileSource, MediaPayload, TranscriptionRequest, UrlSource

logger = logging.getLogger(__name__)


# ── pure helpers (module-level so tests can import them directly) ──────────────


def filename_from_url(url: str) -> str:
    name = PurePosixPath(unquote(urlsplit(url).path)).name
    return name or DEFAULT_FILENAME


def guess_mime_type(filename: str) -> str:
    mime, _ = mimetypes.guess_type(filename)
    return mime or DEFAULT_MIME_TYPE


def mime_from_header(header: Optional[str], filename: str) -> str:
    """Content-Type without parameters; falls back to the filename extension."""
    match (header or "").split(";", 1)[0].strip().lower():
        case "":
            return guess_mime_type(filename)
        case mime:
            return mime


# ── acquirer ──────────────────────────────────────────────────────────────────


class HttpMediaAcquirer(MediaAcquirer):
    """Single-attempt acquisition: one GET for URLs, one read for files. No retries."""

    def __init__(
        self,
        timeout: float = DEFAULT_FETCH_TIMEOUT,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._timeout = timeout
        self._http_client = http_client

    async def acquire(self, source: TranscriptionRequest) -> MediaPayload:
        match source:
            case UrlSource(url=url):
                payload = await self._fetch(url)
            case FileSource(content=bytes() as content, path=path, filename=filename):
                name = filename or (Path(path).name if path else DEFAULT_FILENAME)
                payload = MediaPayload(
                    data=content, filename=name, mime_type=guess_mime_type(name)
                )
            case FileSource(path=str() as path):
                payload = await self._read(path)
            case _:
                raise TypeError(f"Unsupported source: {source!r}")
        logger.info(MSG_ACQUIRED, len(payload.data), payload.filename, payload.mime_type)
        return payload

    async def _fetch(self, url: str) -> MediaPayload:
        logger.info(MSG_FETCHING, url)
        try:
            match self._http_client:
                case None:
                    async with httpx.AsyncClient(
                        timeout=self._timeout, follow_redirects=True
                    ) as client:
                        response = await client.get(url)
                case client:
                    response = await client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise AcquisitionError(
                AcquisitionErrorKind.FETCH_FAILED,
                MSG_ERR_FETCH_TRANSPORT % (str(exc) or type(exc).__name__),
            ) from exc

        match response.is_success:
            case False:
                raise AcquisitionError(
                    AcquisitionErrorKind.FETCH_FAILED,
                    MSG_ERR_FETCH_STATUS % (response.status_code, response.reason_phrase),
                )
            case True:
                pass

        filename = filename_from_url(str(response.url))
        return MediaPayload(
            data=response.content,
            filename=filename,
            mime_type=mime_from_header(response.headers.get("content-type"), filename),
        )

    async def _read(self, path: str) -> MediaPayload:
        logger.info(MSG_READING, path)
        file_path = Path(path).expanduser()
        match file_path.is_file():
            case False:
                raise AcquisitionError(
                    AcquisitionErrorKind.NOT_FOUND, MSG_ERR_NOT_FOUND % path
                )
            case True:
                pass
        try:
            data = await asyncio.to_thread(file_path.read_bytes)
        except OSError as exc:
            raise AcquisitionError(
                AcquisitionErrorKind.NOT_FOUND, MSG_ERR_NOT_READABLE % exc
            ) from exc
        return MediaPayload(
            data=data,
            filename=file_path.name,
            mime_type=guess_mime_type(file_path.name),
        )
