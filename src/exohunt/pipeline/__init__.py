"""
Upload pipeline: status log, stage machine and console reporting.
"""

from exohunt.pipeline.orchestrator import SubmissionResult, UploadOrchestrator
from exohunt.pipeline.reporter import SubmissionReporter
from exohunt.pipeline.result import PipelineStage, StageResult
from exohunt.pipeline.status import StatusEntry, StatusLog

__all__ = [
    "PipelineStage",
    "StageResult",
    "StatusEntry",
    "StatusLog",
    "SubmissionReporter",
    "SubmissionResult",
    "UploadOrchestrator",
]
