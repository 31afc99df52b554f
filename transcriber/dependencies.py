"""Wiring: Config → acquirer + Whisper client → TranscriptionService."""
import logging

from fastapi import Request

from transcriber.acquisition.media import HttpMediaAcquirer
from transcriber.config import Config
from transcriber.constants import MSG_KEY_MISSING
from transcriber.orchestrator import TranscriptionService
from transcriber.transcription.whisper import WhisperTranscriptionClient

logger = logging.getLogger(__name__)


def build_service(config: Config) -> TranscriptionService:
    """Build the pipeline. A missing API key is reported here, once."""
    match config.has_credentials:
        case False:
            logger.warning(MSG_KEY_MISSING)
        case True:
            pass
    acquirer = HttpMediaAcquirer(timeout=config.fetch_timeout)
    transcriber = WhisperTranscriptionClient(
        config.openai_api_key,
        base_url=config.openai_base_url,
        timeout=config.provider_timeout,
    )
    return TranscriptionService(acquirer, transcriber)


def get_service(request: Request) -> TranscriptionService:
    """Returns the service attached to the running app."""
    return request.app.state.service
