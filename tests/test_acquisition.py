"""HttpMediaAcquirer: URL fetches through httpx, local reads through the filesystem."""
import httpx
import pytest

from transcriber.acquisition.client import MediaAcquirer
from transcriber.acquisition.media import (
    HttpMediaAcquirer,
    filename_from_url,
    guess_mime_type,
    mime_from_header,
)
from transcriber.errors import AcquisitionError, AcquisitionErrorKind
from transcriber.models import FileSource, UrlSource


def make_acquirer(handler) -> tuple[HttpMediaAcquirer, list[httpx.Request]]:
    seen: list[httpx.Request] = []

    def _record(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    client = httpx.AsyncClient(transport=httpx.MockTransport(_record))
    return HttpMediaAcquirer(http_client=client), seen


def test_http_acquirer_implements_abc():
    assert issubclass(HttpMediaAcquirer, MediaAcquirer)


# ── pure helpers ──────────────────────────────────────────────────────────────


def test_filename_from_url_uses_last_path_segment():
    assert filename_from_url("https://example.com/videos/clip.mp4?x=1") == "clip.mp4"


def test_filename_from_url_decodes_escapes():
    assert filename_from_url("https://example.com/my%20talk.mp3") == "my talk.mp3"


def test_filename_from_url_defaults_when_no_path():
    assert filename_from_url("https://example.com/") == "media"


def test_mime_from_header_strips_parameters():
    assert mime_from_header("Audio/MPEG; charset=binary", "x") == "audio/mpeg"


def test_mime_from_header_falls_back_to_extension():
    assert mime_from_header(None, "clip.mp4") == "video/mp4"


def test_guess_mime_type_unknown_is_generic():
    assert guess_mime_type("blob") == "application/octet-stream"


# ── url variant ───────────────────────────────────────────────────────────────


async def test_url_fetch_returns_payload():
    acquirer, seen = make_acquirer(
        lambda r: httpx.Response(200, content=b"video-bytes", headers={"content-type": "video/mp4"})
    )

    payload = await acquirer.acquire(UrlSource(url="https://example.com/clip.mp4"))

    assert payload.data == b"video-bytes"
    assert payload.filename == "clip.mp4"
    assert payload.mime_type == "video/mp4"
    assert len(seen) == 1
    assert seen[0].method == "GET"


async def test_url_fetch_without_content_type_guesses_from_name():
    acquirer, _ = make_acquirer(lambda r: httpx.Response(200, content=b"x"))

    payload = await acquirer.acquire(UrlSource(url="https://example.com/talk.mp3"))

    assert payload.mime_type == "audio/mpeg"


async def test_url_fetch_non_success_status_fails():
    acquirer, seen = make_acquirer(lambda r: httpx.Response(404))

    with pytest.raises(AcquisitionError) as exc_info:
        await acquirer.acquire(UrlSource(url="https://example.com/gone.mp4"))

    assert exc_info.value.kind is AcquisitionErrorKind.FETCH_FAILED
    assert "404" in exc_info.value.message
    assert len(seen) == 1


async def test_url_fetch_transport_error_fails():
    def _boom(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    acquirer, _ = make_acquirer(_boom)

    with pytest.raises(AcquisitionError) as exc_info:
        await acquirer.acquire(UrlSource(url="https://example.com/clip.mp4"))

    assert exc_info.value.kind is AcquisitionErrorKind.FETCH_FAILED
    assert "connection refused" in exc_info.value.message


async def test_url_fetch_timeout_fails():
    def _slow(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    acquirer, _ = make_acquirer(_slow)

    with pytest.raises(AcquisitionError) as exc_info:
        await acquirer.acquire(UrlSource(url="https://example.com/clip.mp4"))

    assert exc_info.value.kind is AcquisitionErrorKind.FETCH_FAILED


# ── file variant ──────────────────────────────────────────────────────────────


async def test_file_read_returns_payload(tmp_path):
    media = tmp_path / "lecture.mp4"
    media.write_bytes(b"\x00\x01\x02")

    payload = await HttpMediaAcquirer().acquire(FileSource(path=str(media)))

    assert payload.data == b"\x00\x01\x02"
    assert payload.filename == "lecture.mp4"
    assert payload.mime_type == "video/mp4"


async def test_file_unknown_extension_is_generic(tmp_path):
    media = tmp_path / "recording.zzz"
    media.write_bytes(b"x")

    payload = await HttpMediaAcquirer().acquire(FileSource(path=str(media)))

    assert payload.mime_type == "application/octet-stream"


async def test_missing_file_fails_not_found():
    with pytest.raises(AcquisitionError) as exc_info:
        await HttpMediaAcquirer().acquire(FileSource(path="/missing.mp4"))

    assert exc_info.value.kind is AcquisitionErrorKind.NOT_FOUND
    assert "/missing.mp4" in exc_info.value.message


async def test_directory_path_fails_not_found(tmp_path):
    with pytest.raises(AcquisitionError) as exc_info:
        await HttpMediaAcquirer().acquire(FileSource(path=str(tmp_path)))

    assert exc_info.value.kind is AcquisitionErrorKind.NOT_FOUND


async def test_uploaded_content_skips_filesystem():
    source = FileSource(content=b"uploaded", filename="note.m4a")

    payload = await HttpMediaAcquirer().acquire(source)

    assert payload.data == b"uploaded"
    assert payload.filename == "note.m4a"


async def test_url_with_malformed_port_fails_fetch():
    acquirer, seen = make_acquirer(lambda r: httpx.Response(200, content=b"x"))

    with pytest.raises(AcquisitionError) as exc_info:
        await acquirer.acquire(UrlSource(url="http://example.com:abc/clip.mp4"))

    assert exc_info.value.kind is AcquisitionErrorKind.FETCH_FAILED
    assert seen == []
