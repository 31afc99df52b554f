"""WhisperTranscriptionClient — OpenAI Whisper speech-to-text backend."""
import logging
import time
from typing import Any, Optional

import httpx
import openai
from openai import AsyncOpenAI

from transcriber.constants import (
    DEFAULT_PROVIDER_TIMEOUT,
    MSG_ERR_MISCONFIGURED,
    MSG_ERR_UNPARSEABLE,
    MSG_ERR_UNREACHABLE,
    MSG_ERR_UPSTREAM,
    MSG_TRANSCRIBED,
    MSG_UPLOADING,
    OPENAI_BASE_URL,
    RESPONSE_FORMAT,
    WHISPER_MODEL,
)
from transcriber.errors import ProviderError, ProviderErrorKind
from transcriber.models import MediaPayload
from transcriber.transcription.client import TranscriptionClient

logger = logging.getLogger(__name__)


def extract_text(response: Any) -> str:
    """Trimmed ``text`` from a provider response; blank or missing is unparseable."""
    match getattr(response, "text", None):
        case str() as text if text.strip():
            return text.strip()
        case _:
            raise ProviderError(ProviderErrorKind.UNPARSEABLE, MSG_ERR_UNPARSEABLE)


class WhisperTranscriptionClient(TranscriptionClient):
    """One multipart POST per call: no retries, no caching, bounded by ``timeout``."""

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = OPENAI_BASE_URL,
        timeout: float = DEFAULT_PROVIDER_TIMEOUT,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url
        self._timeout = timeout
        self._http_client = http_client
        self._client: Optional[AsyncOpenAI] = None

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    def _get_client(self) -> AsyncOpenAI:
        match (self._api_key, self._client):
            case (None | "", _):
                raise ProviderError(ProviderErrorKind.MISCONFIGURED, MSG_ERR_MISCONFIGURED)
            case (key, None):
                self._client = AsyncOpenAI(
                    api_key=key,
                    base_url=self._base_url,
                    timeout=self._timeout,
                    max_retries=0,
                    http_client=self._http_client,
                )
                return self._client
            case (_, client):
                return client

    async def transcribe(self, payload: MediaPayload, prompt: Optional[str] = None) -> str:
        client = self._get_client()
        params: dict[str, Any] = {
            "model": WHISPER_MODEL,
            "file": (payload.filename, payload.data, payload.mime_type),
            "response_format": RESPONSE_FORMAT,
        }
        match prompt:
            case str() as p if p:
                params["prompt"] = p
            case _:
                pass

        logger.info(MSG_UPLOADING, len(payload.data))
        start = time.time()
        try:
            response = await client.audio.transcriptions.create(**params)
        except openai.APIStatusError as exc:
            detail = exc.response.text or exc.response.reason_phrase
            raise ProviderError(
                ProviderErrorKind.UPSTREAM_REJECTED, MSG_ERR_UPSTREAM % detail, detail=detail
            ) from exc
        except openai.APIConnectionError as exc:
            raise ProviderError(
                ProviderErrorKind.UNREACHABLE, MSG_ERR_UNREACHABLE % exc, detail=str(exc)
            ) from exc
        except (openai.APIResponseValidationError, ValueError) as exc:
            raise ProviderError(ProviderErrorKind.UNPARSEABLE, MSG_ERR_UNPARSEABLE) from exc

        text = extract_text(response)
        logger.info(MSG_TRANSCRIBED, len(text), time.time() - start)
        return text

    async def aclose(self) -> None:
        match self._client:
            case None:
                pass
            case client:
                await client.close()
                self._client = None
