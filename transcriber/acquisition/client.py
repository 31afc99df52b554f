"""MediaAcquirer — abstract base for turning a source descriptor into bytes."""
from abc import ABC, abstractmethod

from transcriber.models import MediaPayload, TranscriptionRequest


class MediaAcquirer(ABC):
    @abstractmethod
    async def acquire(self, source: TranscriptionRequest) -> MediaPayload:
        """Fetch or read the media for ``source``. Raises AcquisitionError on failure."""
        ...
