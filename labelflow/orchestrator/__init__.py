from labelflow.orchestrator.base import BaseLabelService
from labelflow.orchestrator.exceptions import (
    InvalidInputError,
    OrchestratorError,
    ProcessingUnavailableError,
)
from labelflow.orchestrator.orchestrator import LabelOrchestrator

__all__ = [
    "BaseLabelService",
    "InvalidInputError",
    "LabelOrchestrator",
    "OrchestratorError",
    "ProcessingUnavailableError",
]
