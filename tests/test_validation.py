"""Request validation: every violated field is reported, no I/O involved."""
import pytest

from transcriber.errors import ValidationError
from transcriber.models import FileSource, UrlSource
from transcriber.validation import is_absolute_url, parse_request


def test_url_request_parses_to_url_source():
    source = parse_request({"sourceType": "url", "url": "https://example.com/clip.mp4"})

    assert source == UrlSource(url="https://example.com/clip.mp4", prompt=None)


def test_file_request_parses_to_file_source():
    source = parse_request({"sourceType": "file", "path": "/tmp/a.mp4", "prompt": "Kubernetes"})

    assert isinstance(source, FileSource)
    assert source.path == "/tmp/a.mp4"
    assert source.prompt == "Kubernetes"
    assert source.content is None


def test_empty_prompt_becomes_none():
    source = parse_request({"sourceType": "url", "url": "https://example.com/a", "prompt": ""})

    assert source.prompt is None


def test_url_type_without_url_lists_url():
    with pytest.raises(ValidationError) as exc_info:
        parse_request({"sourceType": "url"})

    assert exc_info.value.fields == ["url"]


def test_file_type_without_path_lists_path():
    with pytest.raises(ValidationError) as exc_info:
        parse_request({"sourceType": "file"})

    assert exc_info.value.fields == ["path"]


def test_mismatched_source_type_lists_companion():
    with pytest.raises(ValidationError) as exc_info:
        parse_request({"sourceType": "url", "path": "/tmp/a.mp4"})

    assert exc_info.value.fields == ["url", "path"]


def test_url_request_with_path_reports_conflict():
    with pytest.raises(ValidationError) as exc_info:
        parse_request(
            {"sourceType": "url", "url": "https://example.com/a.mp4", "path": "/tmp/a.mp4"}
        )

    assert exc_info.value.fields == ["path"]


def test_file_request_with_url_reports_conflict():
    with pytest.raises(ValidationError) as exc_info:
        parse_request(
            {"sourceType": "file", "path": "/tmp/a.mp4", "url": "https://example.com/a.mp4"}
        )

    assert exc_info.value.fields == ["url"]


def test_empty_companion_is_not_a_conflict():
    source = parse_request({"sourceType": "url", "url": "https://example.com/a.mp4", "path": ""})

    assert source == UrlSource(url="https://example.com/a.mp4")


def test_blank_url_is_missing():
    with pytest.raises(ValidationError) as exc_info:
        parse_request({"sourceType": "url", "url": "   "})

    assert exc_info.value.fields == ["url"]


@pytest.mark.parametrize(
    "url",
    [
        "not a url",
        "/relative/path.mp4",
        "example.com/clip.mp4",
        "http://example.com:abc/clip.mp4",
        "http://example.com:99999/clip.mp4",
    ],
)
def test_non_absolute_url_rejected(url):
    with pytest.raises(ValidationError) as exc_info:
        parse_request({"sourceType": "url", "url": url})

    assert exc_info.value.fields == ["url"]


def test_unknown_source_type_rejected():
    with pytest.raises(ValidationError) as exc_info:
        parse_request({"sourceType": "ftp", "url": "https://example.com/a"})

    assert exc_info.value.fields == ["sourceType"]


def test_all_violations_reported_together():
    with pytest.raises(ValidationError) as exc_info:
        parse_request({"sourceType": "url", "prompt": 42})

    assert exc_info.value.fields == ["url", "prompt"]


def test_non_mapping_body_rejected():
    with pytest.raises(ValidationError) as exc_info:
        parse_request(["sourceType", "url"])

    assert exc_info.value.fields == ["body"]


def test_uploaded_content_satisfies_file_variant():
    source = parse_request({"sourceType": "file", "content": b"bytes", "filename": "a.webm"})

    assert source == FileSource(path=None, prompt=None, content=b"bytes", filename="a.webm")


def test_validation_error_serializes_details():
    with pytest.raises(ValidationError) as exc_info:
        parse_request({"sourceType": "url"})

    body = exc_info.value.to_dict()
    assert body["error"] == "Invalid request data"
    assert body["details"][0]["field"] == "url"
    assert body["details"][0]["message"]


def test_is_absolute_url():
    assert is_absolute_url("https://example.com/clip.mp4")
    assert is_absolute_url("http://localhost:8000/a")
    assert not is_absolute_url("clip.mp4")
    assert not is_absolute_url("https://exa mple.com/a")
