"""Declarative step/workflow adapters around TranscriptionService."""
import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from transcriber.constants import (
    FIELD_INPUT,
    MSG_ERR_INPUT_REQUIRED,
    MSG_WORKFLOW_STEP,
    STEP_TRANSCRIBE_DESCRIPTION,
    STEP_TRANSCRIBE_ID,
    WORKFLOW_ID,
)
from transcriber.errors import FieldIssue, ValidationError
from transcriber.orchestrator import TranscriptionService

logger = logging.getLogger(__name__)


class WorkflowStep(ABC):
    id: str
    description: str = ""

    @abstractmethod
    async def execute(self, input_data: Any) -> Any:
        """Run the step on ``input_data`` and return its output. Raises on failure."""
        ...


class TranscribeVideoStep(WorkflowStep):
    """Request mapping in, ``{"transcript": ...}`` out. No logic beyond delegation."""

    id = STEP_TRANSCRIBE_ID
    description = STEP_TRANSCRIBE_DESCRIPTION

    def __init__(self, service: TranscriptionService) -> None:
        self._service = service

    async def execute(self, input_data: Any) -> dict[str, str]:
        match input_data:
            case None:
                raise ValidationError([FieldIssue(FIELD_INPUT, MSG_ERR_INPUT_REQUIRED)])
            case _:
                result = await self._service.run(input_data)
                return result.to_dict()


class Workflow:
    """Runs its steps in order, each step's output feeding the next step."""

    def __init__(self, workflow_id: str) -> None:
        self.id = workflow_id
        self._steps: list[WorkflowStep] = []

    @property
    def steps(self) -> tuple[WorkflowStep, ...]:
        return tuple(self._steps)

    def then(self, step: WorkflowStep) -> "Workflow":
        self._steps.append(step)
        return self

    async def run(self, input_data: Any) -> Any:
        data = input_data
        for step in self._steps:
            logger.info(MSG_WORKFLOW_STEP, self.id, step.id)
            data = await step.execute(data)
        return data


def build_transcription_workflow(
    service: TranscriptionService, workflow_id: Optional[str] = None
) -> Workflow:
    return Workflow(workflow_id or WORKFLOW_ID).then(TranscribeVideoStep(service))
