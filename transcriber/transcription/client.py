"""TranscriptionClient — abstract base for speech-to-text backends."""
from abc import ABC, abstractmethod
from typing import Optional

from transcriber.models import MediaPayload


class TranscriptionClient(ABC):
    @abstractmethod
    async def transcribe(self, payload: MediaPayload, prompt: Optional[str] = None) -> str:
        """Convert a media payload to trimmed, non-empty text. Raises ProviderError on failure."""
        ...

    async def aclose(self) -> None:
        """Release any pooled connections. Default: nothing to release."""
        return None

    @property
    def is_configured(self) -> bool:
        """False when the backend lacks what it needs to make any request."""
        return True
