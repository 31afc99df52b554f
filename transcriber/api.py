"""FastAPI surface: serializes requests into TranscriptionService and failures into JSON."""
import json
import logging
from contextlib import asynccontextmanager
from typing import Annotated, Any, Optional

from fastapi import Depends, FastAPI, Form, Request, UploadFile
from fastapi.responses import JSONResponse

from transcriber.config import Config
from transcriber.constants import (
    FIELD_BODY,
    FIELD_CONTENT,
    FIELD_FILENAME,
    FIELD_PROMPT,
    FIELD_SOURCE_TYPE,
    MSG_ERR_BODY_NOT_OBJECT,
    MSG_ERR_INTERNAL,
    MSG_UNHANDLED,
    SERVICE_NAME,
    SOURCE_FILE,
)
from transcriber.dependencies import build_service, get_service
from transcriber.errors import (
    AcquisitionError,
    AcquisitionErrorKind,
    FieldIssue,
    ProviderError,
    ProviderErrorKind,
    TranscriptionFailure,
    ValidationError,
)
from transcriber.orchestrator import TranscriptionService

logger = logging.getLogger(__name__)

ServiceDep = Annotated[TranscriptionService, Depends(get_service)]


def status_for(exc: TranscriptionFailure) -> int:
    """HTTP status for a pipeline failure."""
    match exc:
        case ValidationError():
            return 400
        case AcquisitionError(kind=AcquisitionErrorKind.NOT_FOUND):
            return 404
        case ProviderError(kind=ProviderErrorKind.MISCONFIGURED):
            return 500
        case ProviderError(kind=ProviderErrorKind.UNREACHABLE):
            return 504
        case AcquisitionError() | ProviderError():
            return 502
        case _:
            return 500


def create_app(
    config: Optional[Config] = None,
    service: Optional[TranscriptionService] = None,
) -> FastAPI:
    config = config or Config.from_env()
    service = service or build_service(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await app.state.service.aclose()

    app = FastAPI(title="Video Transcriber", lifespan=lifespan)
    app.state.config = config
    app.state.service = service

    @app.exception_handler(TranscriptionFailure)
    async def _failure_handler(request: Request, exc: TranscriptionFailure) -> JSONResponse:
        return JSONResponse(status_code=status_for(exc), content=exc.to_dict())

    @app.exception_handler(Exception)
    async def _unhandled_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(MSG_UNHANDLED, exc_info=exc)
        return JSONResponse(status_code=500, content={"error": str(exc) or MSG_ERR_INTERNAL})

    @app.get("/health")
    async def health_check() -> dict[str, Any]:
        """Basic health check; reports whether the provider key is configured."""
        return {
            "status": "healthy",
            "service": SERVICE_NAME,
            "provider_configured": app.state.config.has_credentials,
        }

    @app.post("/api/transcribe")
    async def transcribe(request: Request, service: ServiceDep) -> dict[str, str]:
        """Transcribe a remote URL or a server-local path given as JSON."""
        try:
            body = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            raise ValidationError([FieldIssue(FIELD_BODY, MSG_ERR_BODY_NOT_OBJECT)]) from None
        result = await service.run(body)
        return result.to_dict()

    @app.post("/api/transcribe/upload")
    async def transcribe_upload(
        file: UploadFile,
        service: ServiceDep,
        prompt: Annotated[Optional[str], Form()] = None,
    ) -> dict[str, str]:
        """Transcribe an uploaded media file (multipart form)."""
        content = await file.read()
        result = await service.run({
            FIELD_SOURCE_TYPE: SOURCE_FILE,
            FIELD_CONTENT: content,
            FIELD_FILENAME: file.filename,
            FIELD_PROMPT: prompt,
        })
        return result.to_dict()

    return app
