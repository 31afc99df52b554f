"""Turns a raw inbound mapping into a typed TranscriptionRequest — or a ValidationError."""
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlsplit

from transcriber.constants import (
    FIELD_BODY,
    FIELD_CONTENT,
    FIELD_FILENAME,
    FIELD_PATH,
    FIELD_PROMPT,
    FIELD_SOURCE_TYPE,
    FIELD_URL,
    MSG_ERR_BODY_NOT_OBJECT,
    MSG_ERR_PATH_CONFLICT,
    MSG_ERR_PATH_REQUIRED,
    MSG_ERR_PROMPT_TYPE,
    MSG_ERR_SOURCE_TYPE,
    MSG_ERR_URL_CONFLICT,
    MSG_ERR_URL_INVALID,
    MSG_ERR_URL_REQUIRED,
    SOURCE_FILE,
    SOURCE_URL,
)
from transcriber.errors import FieldIssue, ValidationError
from transcriber.models import FileSource, TranscriptionRequest, UrlSource


def is_absolute_url(value: str) -> bool:
    try:
        parts = urlsplit(value)
        parts.port  # raises on a non-numeric or out-of-range port
    except ValueError:
        return False
    return bool(parts.scheme and parts.netloc) and " " not in value


def _present(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


def _url_issues(value: Any) -> list[FieldIssue]:
    match value:
        case v if not _present(v):
            return [FieldIssue(FIELD_URL, MSG_ERR_URL_REQUIRED)]
        case v if not is_absolute_url(v.strip()):
            return [FieldIssue(FIELD_URL, MSG_ERR_URL_INVALID)]
        case _:
            return []


def _path_issues(value: Any, has_content: bool) -> list[FieldIssue]:
    match (_present(value), has_content):
        case (False, False):
            return [FieldIssue(FIELD_PATH, MSG_ERR_PATH_REQUIRED)]
        case _:
            return []


def _conflict_issues(raw: Mapping, field: str, message: str) -> list[FieldIssue]:
    match raw.get(field):
        case None | "":
            return []
        case _:
            return [FieldIssue(field, message)]


def _prompt_issues(value: Any) -> list[FieldIssue]:
    match value:
        case None | str():
            return []
        case _:
            return [FieldIssue(FIELD_PROMPT, MSG_ERR_PROMPT_TYPE)]


def parse_request(raw: Any) -> TranscriptionRequest:
    """Validate ``raw`` and build the matching source variant.

    Every violated field is collected before raising, so a caller sees all
    problems at once. Uploaded bytes may be passed under ``content`` (with an
    optional ``filename``) for the file variant in place of ``path``.
    """
    if not isinstance(raw, Mapping):
        raise ValidationError([FieldIssue(FIELD_BODY, MSG_ERR_BODY_NOT_OBJECT)])

    source_type = raw.get(FIELD_SOURCE_TYPE)
    prompt = raw.get(FIELD_PROMPT)
    content = raw.get(FIELD_CONTENT)
    has_content = isinstance(content, (bytes, bytearray))

    match source_type:
        case str() as s if s == SOURCE_URL:
            issues = _url_issues(raw.get(FIELD_URL))
            issues += _conflict_issues(raw, FIELD_PATH, MSG_ERR_PATH_CONFLICT)
        case str() as s if s == SOURCE_FILE:
            issues = _path_issues(raw.get(FIELD_PATH), has_content)
            issues += _conflict_issues(raw, FIELD_URL, MSG_ERR_URL_CONFLICT)
        case _:
            issues = [FieldIssue(FIELD_SOURCE_TYPE, MSG_ERR_SOURCE_TYPE)]
    issues += _prompt_issues(prompt)

    match issues:
        case []:
            pass
        case _:
            raise ValidationError(issues)

    prompt = prompt or None
    match source_type:
        case str() as s if s == SOURCE_URL:
            return UrlSource(url=raw[FIELD_URL].strip(), prompt=prompt)
        case _:
            path = raw.get(FIELD_PATH)
            return FileSource(
                path=path.strip() if _present(path) else None,
                prompt=prompt,
                content=bytes(content) if has_content else None,
                filename=raw.get(FIELD_FILENAME) or None,
            )
