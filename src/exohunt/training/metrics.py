"""
Typed model of the metrics returned by the training API.

The API returns a flat ``metrics`` dict for the headline numbers and an
optional ``metrics_json`` document describing every trained model.
"""

import json
from pathlib import Path
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from exohunt.utils.logging import get_logger

log = get_logger(__name__)

HEADLINE_METRICS: tuple[tuple[str, str], ...] = (
    ("Accuracy", "accuracy"),
    ("F1 Score", "f1_macro"),
    ("Precision", "precision_macro"),
    ("Recall", "recall_macro"),
)


class ModelMetrics(BaseModel):
    """Aggregate classification metrics of one model."""

    model_config = ConfigDict(extra="allow")

    accuracy: float
    precision_macro: float
    recall_macro: float
    f1_macro: float
    roc_auc_ovr: float | None = None
    roc_auc_ovo: float | None = None


class ClassReport(BaseModel):
    """Per-class precision/recall breakdown."""

    model_config = ConfigDict(extra="allow")

    precision: float
    recall: float
    f1_score: float = Field(validation_alias=AliasChoices("f1_score", "f1-score"))
    support: float = 0.0


class ModelReport(BaseModel):
    """Full report for one trained model."""

    model_config = ConfigDict(
        populate_by_name=True, extra="allow", protected_namespaces=()
    )

    model_name: str = Field(alias="modelName")
    version: str = ""
    training_date: str = Field(default="", alias="trainingDate")
    is_active: bool = Field(default=False, alias="isActive")
    notes: str = ""
    metrics: ModelMetrics
    labels: list[str] = Field(default_factory=list)
    confusion_matrix: list[list[float]] = Field(
        default_factory=list, alias="confusionMatrix"
    )
    # Per-class entries; sklearn-style reports also carry a bare "accuracy"
    report: dict[str, ClassReport | float] = Field(default_factory=dict)

    @field_validator("version", "training_date", mode="before")
    @classmethod
    def stringify(cls, v: Any) -> str:
        """Accept numeric versions and timestamps as text."""
        return "" if v is None else str(v)

    @field_validator("labels", mode="before")
    @classmethod
    def stringify_labels(cls, v: Any) -> Any:
        """Class labels may be encoded as integers."""
        if isinstance(v, list):
            return [str(label) for label in v]
        return v


class MetricsReport(BaseModel):
    """The ``metrics_json`` document."""

    model_config = ConfigDict(extra="allow")

    models: list[ModelReport] = Field(default_factory=list)

    @property
    def latest(self) -> ModelReport | None:
        """The first (most recent) model, if any."""
        return self.models[0] if self.models else None


def format_percent(value: float, digits: int = 2) -> str:
    """Format a 0-1 fraction as a percentage string."""
    return f"{value * 100:.{digits}f}%"


def headline_lines(metrics: dict[str, Any]) -> list[str]:
    """
    Render the headline metrics as ``Name: 12.34%`` lines.

    Metrics absent from the payload or not numeric are skipped.
    """
    lines = []
    for label, key in HEADLINE_METRICS:
        value = metrics.get(key)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            lines.append(f"{label}: {format_percent(value)}")
    return lines


def save_metrics_json(report: MetricsReport, path: Path) -> Path:
    """
    Write the report in the API's original JSON shape.

    Args:
        report: Parsed metrics report.
        path: Destination file; parent directories are created.

    Returns:
        The written path.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = report.model_dump(by_alias=True, mode="json")
    with path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)
    log.info("Saved metrics report", path=str(path), models=len(report.models))
    return path
