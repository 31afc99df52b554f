"""TranscriptionService — validate → acquire → transcribe, transport-agnostic."""
import logging
from enum import Enum
from typing import Any

from transcriber.acquisition.client import MediaAcquirer
from transcriber.constants import (
    MSG_ERR_MISCONFIGURED,
    MSG_REQUEST_FAILED,
    MSG_REQUEST_REJECTED,
    MSG_STAGE,
)
from transcriber.errors import (
    AcquisitionError,
    ProviderError,
    ProviderErrorKind,
    TranscriptionFailure,
    ValidationError,
)
from transcriber.models import TranscriptionResult
from transcriber.transcription.client import TranscriptionClient
from transcriber.validation import parse_request

logger = logging.getLogger(__name__)


class RequestStage(str, Enum):
    RECEIVED = "received"
    VALIDATED = "validated"
    ACQUIRED = "acquired"
    TRANSCRIBED = "transcribed"
    COMPLETED = "completed"
    FAILED = "failed"


class TranscriptionService:
    """Runs one request through the pipeline.

    A transcriber without credentials fails the request right after
    validation, before any media is fetched. Stages are strictly sequential
    and the first failure ends the request: the error propagates untouched
    so callers can branch on its class and kind. Nothing is shared between
    concurrent calls.
    """

    def __init__(self, acquirer: MediaAcquirer, transcriber: TranscriptionClient) -> None:
        self._acquirer = acquirer
        self._transcriber = transcriber

    async def run(self, raw: Any) -> TranscriptionResult:
        stage = RequestStage.RECEIVED
        try:
            source = parse_request(raw)
            stage = _advance(stage, RequestStage.VALIDATED)
            match self._transcriber.is_configured:
                case False:
                    raise ProviderError(ProviderErrorKind.MISCONFIGURED, MSG_ERR_MISCONFIGURED)
                case _:
                    pass

            payload = await self._acquirer.acquire(source)
            stage = _advance(stage, RequestStage.ACQUIRED)

            text = await self._transcriber.transcribe(payload, source.prompt)
            stage = _advance(stage, RequestStage.TRANSCRIBED)
        except ValidationError as exc:
            _advance(stage, RequestStage.FAILED)
            logger.warning(MSG_REQUEST_REJECTED, ", ".join(exc.fields))
            raise
        except TranscriptionFailure as exc:
            _advance(stage, RequestStage.FAILED)
            logger.error(MSG_REQUEST_FAILED, _failure_kind(exc), exc.message)
            raise

        result = TranscriptionResult(transcript=text)
        _advance(stage, RequestStage.COMPLETED)
        return result

    async def aclose(self) -> None:
        await self._transcriber.aclose()


def _advance(current: RequestStage, nxt: RequestStage) -> RequestStage:
    logger.debug(MSG_STAGE, current.value, nxt.value)
    return nxt


def _failure_kind(exc: TranscriptionFailure) -> str:
    match exc:
        case AcquisitionError(kind=kind) | ProviderError(kind=kind):
            return kind.value
        case _:
            return type(exc).__name__
