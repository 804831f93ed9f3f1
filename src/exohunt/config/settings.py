"""
Typed configuration models using Pydantic.

All configuration is defined here with explicit typing and validation.
Endpoints, table names and required columns never live in processing code.
"""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from exohunt.normalization.columns import CANONICAL_FIELDS


class StoreConfig(BaseModel):
    """Remote table store (PostgREST / Supabase REST) configuration."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(
        default="http://localhost:54321",
        description="Base URL of the project; '/rest/v1' is appended",
    )
    api_key: str = Field(default="", description="Anon or service key")
    table: str = Field(
        default="scientist_datasets", description="Table receiving uploaded rows"
    )
    timeout: float = Field(default=30.0, gt=0, description="Request timeout (s)")

    @field_validator("url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the base URL so paths can be appended."""
        return v.rstrip("/")


class TrainingApiConfig(BaseModel):
    """Remote training endpoint configuration."""

    model_config = ConfigDict(frozen=True)

    base_url: str = Field(default="http://localhost:5000")
    path: str = Field(default="/api/train")
    timeout: float = Field(
        default=600.0, gt=0, description="Training runs synchronously server-side"
    )

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the base URL so the path can be appended."""
        return v.rstrip("/")

    @property
    def endpoint(self) -> str:
        """Full URL of the training endpoint."""
        return f"{self.base_url}{self.path}"


class PreflightConfig(BaseModel):
    """Header coverage requirements checked before any upload."""

    model_config = ConfigDict(frozen=True)

    required_fields: tuple[str, ...] = Field(
        default=("equilibrium_temp_K",),
        description="Canonical fields that must be present in the CSV header",
    )
    default_source: str | None = Field(
        default="uploaded_csv",
        description="Value injected into 'source' when the CSV has no source column",
    )

    @field_validator("required_fields")
    @classmethod
    def validate_known_fields(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Ensure every required field is a canonical field."""
        unknown = [name for name in v if name not in CANONICAL_FIELDS]
        if unknown:
            msg = f"Unknown canonical field(s) in required_fields: {unknown}"
            raise ValueError(msg)
        return v


class StatusConfig(BaseModel):
    """Status log display configuration."""

    model_config = ConfigDict(frozen=True)

    suppressed_messages: tuple[str, ...] = Field(
        default=("Failed to fetch",),
        description="Substrings of transient messages hidden from the visible log",
    )


class TrainingConfig(BaseModel):
    """
    Hyperparameters sent with a training request.

    One instance is an immutable snapshot of a single submission.
    """

    model_config = ConfigDict(frozen=True)

    train_test_split: float = Field(
        default=0.8, ge=0.5, le=0.9, description="Fraction of rows used for training"
    )
    cv_folds: int = Field(default=5, ge=3, le=10)
    rf_estimators: int = Field(default=100, ge=1, le=500)
    xgb_estimators: int = Field(default=100, ge=1, le=500)
    lgbm_estimators: int = Field(default=100, ge=1, le=500)
    xgb_max_depth: int = Field(default=15, ge=1, le=500)
    lgbm_max_depth: int = Field(default=7, ge=1, le=500)
    learning_rate: float = Field(default=0.05, ge=0.0, le=0.5)

    @classmethod
    def from_percent_split(cls, train_percent: int, **kwargs: Any) -> "TrainingConfig":
        """Build a config from a whole-number train percentage (e.g. 80)."""
        return cls(train_test_split=train_percent / 100, **kwargs)

    def to_form_fields(self) -> dict[str, str]:
        """Render the hyperparameters as multipart form fields."""
        return {name: str(value) for name, value in self.model_dump().items()}


class QuizConfig(BaseModel):
    """Trivia game configuration."""

    model_config = ConfigDict(frozen=True)

    questions_path: Path | None = Field(
        default=None, description="Optional CSV question bank (built-in bank if unset)"
    )
    correct_points: int = Field(default=100)
    wrong_points: int = Field(default=-50)
    leaderboard_size: int = Field(default=3, ge=1, le=100)
    scores_table: str = Field(default="scores")
    users_table: str = Field(default="users")


class LoggingConfig(BaseModel):
    """structlog output configuration."""

    model_config = ConfigDict(frozen=True)

    level: str = Field(default="WARNING")
    json_output: bool = Field(default=False)


class AppConfig(BaseModel):
    """Complete application configuration."""

    model_config = ConfigDict(frozen=True)

    store: StoreConfig = Field(default_factory=StoreConfig)
    training_api: TrainingApiConfig = Field(default_factory=TrainingApiConfig)
    preflight: PreflightConfig = Field(default_factory=PreflightConfig)
    status: StatusConfig = Field(default_factory=StatusConfig)
    training: TrainingConfig = Field(default_factory=TrainingConfig)
    quiz: QuizConfig = Field(default_factory=QuizConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
