"""Remote training API client and metrics models."""

from exohunt.training.client import TrainingApiClient, TrainingResponse
from exohunt.training.metrics import (
    MetricsReport,
    ModelReport,
    headline_lines,
    save_metrics_json,
)

__all__ = [
    "MetricsReport",
    "ModelReport",
    "TrainingApiClient",
    "TrainingResponse",
    "headline_lines",
    "save_metrics_json",
]
