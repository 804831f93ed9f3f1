"""
Upload orchestration.

Sequences one submission through parsing, validation, the bulk insert into
the dataset table and the training request, writing one or more status
entries per stage. The first failing stage ends the submission; nothing is
retried and nothing is rolled back.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from exohunt.config.settings import AppConfig, TrainingConfig
from exohunt.ingestion.csv_reader import ParsedCSV, parse_csv_text
from exohunt.normalization.rows import transform_rows
from exohunt.pipeline.result import PipelineStage, StageResult
from exohunt.pipeline.status import StatusLog
from exohunt.schemas.dataset import check_records
from exohunt.store.base import RowStore
from exohunt.training.client import TrainingApiClient, TrainingResponse
from exohunt.training.metrics import MetricsReport, headline_lines
from exohunt.utils.logging import get_logger, log_context
from exohunt.validation.preflight import run_preflight

log = get_logger(__name__)

CSV_SUFFIX = ".csv"


@dataclass
class SubmissionResult:
    """
    Outcome of one submission.

    Attributes:
        stage: Final stage (COMPLETE or FAILED).
        failed_stage: Stage that failed, if any.
        error: Diagnostic of the failing stage.
        rows_inserted: Rows accepted by the dataset table.
        metrics: Headline metrics returned by the training API.
        metrics_report: Parsed detailed metrics, if returned.
    """

    stage: PipelineStage
    failed_stage: PipelineStage | None = None
    error: str | None = None
    rows_inserted: int = 0
    metrics: dict[str, Any] | None = None
    metrics_report: MetricsReport | None = None

    @property
    def ok(self) -> bool:
        """Whether the submission completed."""
        return self.stage == PipelineStage.COMPLETE


@dataclass(frozen=True)
class _ParsedUpload:
    content: bytes
    parsed: ParsedCSV


class UploadOrchestrator:
    """
    Runs dataset submissions one at a time.

    Holds the per-session state: the selected file, the status log of the
    latest submission and its metrics. Both are replaced when a new
    submission starts.
    """

    def __init__(
        self,
        store: RowStore,
        training_client: TrainingApiClient,
        config: AppConfig | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """
        Initialize the orchestrator.

        Args:
            store: Table store receiving the canonical rows.
            training_client: Client for the training endpoint.
            config: Application configuration (defaults if omitted).
            clock: Timestamp source for status entries.
        """
        self.store = store
        self.training_client = training_client
        self.config = config or AppConfig()
        self._clock = clock

        self.stage = PipelineStage.IDLE
        self.is_training = False
        self.selected_file: Path | None = None
        self.status_log = self._new_status_log()
        self.metrics: dict[str, Any] | None = None
        self.metrics_report: MetricsReport | None = None

    def _new_status_log(self) -> StatusLog:
        return StatusLog(
            suppressed_messages=self.config.status.suppressed_messages,
            clock=self._clock,
        )

    def _status(self, message: str) -> None:
        self.status_log.append(message)

    def _enter(self, stage: PipelineStage) -> None:
        log.debug("Entering stage", stage=stage.value)
        self.stage = stage

    def select_file(self, path: Path) -> bool:
        """
        Select the dataset for the next submission.

        Args:
            path: CSV file path.

        Returns:
            True if the file was accepted.
        """
        if path.suffix.lower() != CSV_SUFFIX:
            self._status("Error: Please upload a .csv file")
            return False
        self.selected_file = path
        self._status(f"File selected: {path.name}")
        return True

    def submit(self, training: TrainingConfig | None = None) -> SubmissionResult:
        """
        Run one submission end to end.

        Never raises for pipeline failures: each one is written to the
        status log and returned in the SubmissionResult.

        Args:
            training: Hyperparameters; the configured defaults if omitted.

        Returns:
            SubmissionResult describing where the submission ended.
        """
        if self.selected_file is None:
            self._status("Error: Please select a file first")
            return SubmissionResult(
                stage=PipelineStage.FAILED, error="No file selected"
            )

        if self.is_training:
            self._status("Error: A training run is already in progress")
            return SubmissionResult(
                stage=PipelineStage.FAILED, error="Submission already in progress"
            )

        snapshot = training or self.config.training
        path = self.selected_file

        self.is_training = True
        self.status_log = self._new_status_log()
        self.metrics = None
        self.metrics_report = None

        try:
            with log_context(file=path.name):
                return self._run(path, snapshot)
        finally:
            self.is_training = False

    def _run(self, path: Path, training: TrainingConfig) -> SubmissionResult:
        self._status("Starting training process...")

        self._enter(PipelineStage.PARSING)
        self._status("Parsing CSV file (auto-detecting delimiter)...")
        parsed = self._parse(path)
        if not parsed.ok:
            return self._fail(f"CSV parse error: {parsed.error}")
        upload = parsed.unwrap()

        self._enter(PipelineStage.VALIDATING)
        validated = self._validate(upload.parsed)
        if not validated.ok:
            return self._fail(str(validated.error))
        records = validated.unwrap()

        self._enter(PipelineStage.BULK_INSERTING)
        table = self.config.store.table
        self._status(f"Parsed {len(records)} rows. Uploading to table '{table}'...")
        inserted = self._bulk_insert(records)
        if not inserted.ok:
            return self._fail(f"Table insert error: {inserted.error}")
        self._status(f"✅ Data uploaded to table '{table}'.")
        n_inserted = inserted.unwrap()

        self._enter(PipelineStage.SUBMITTING)
        self._status("Uploading file and starting model training...")
        trained = self._submit_training(path.name, upload.content, training)
        if not trained.ok:
            return self._fail(f"Error: {trained.error}", rows_inserted=n_inserted)
        response = trained.unwrap()

        self._record_metrics(response)

        self._enter(PipelineStage.COMPLETE)
        log.info("Submission complete", rows=n_inserted)
        return SubmissionResult(
            stage=PipelineStage.COMPLETE,
            rows_inserted=n_inserted,
            metrics=self.metrics,
            metrics_report=self.metrics_report,
        )

    def _fail(self, message: str, rows_inserted: int = 0) -> SubmissionResult:
        failed_stage = self.stage
        self._status(f"❌ {message}")
        log.warning("Submission failed", stage=failed_stage.value, error=message)
        self._enter(PipelineStage.FAILED)
        return SubmissionResult(
            stage=PipelineStage.FAILED,
            failed_stage=failed_stage,
            error=message,
            rows_inserted=rows_inserted,
        )

    def _parse(self, path: Path) -> StageResult[_ParsedUpload]:
        """Read the file once; the same bytes go to the training API."""
        try:
            content = path.read_bytes()
        except OSError as e:
            return StageResult.failure(f"Could not read {path.name}: {e}")

        try:
            text = content.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            return StageResult.failure(f"{path.name} is not UTF-8 text ({e.reason})")

        parsed = parse_csv_text(text)
        if not parsed.ok:
            return StageResult.failure(parsed.errors[0])
        return StageResult.success(_ParsedUpload(content=content, parsed=parsed))

    def _validate(self, parsed: ParsedCSV) -> StageResult[list[dict[str, Any]]]:
        """Preflight the headers, transform the rows, report unparseable numbers."""
        preflight = run_preflight(
            parsed.headers, self.config.preflight.required_fields
        )
        if not preflight.passed:
            return StageResult.failure(f"Preflight failed: {preflight.summary()}")
        self._status(f"Column check passed: {preflight.summary()}")

        if not parsed.rows:
            return StageResult.failure("CSV contains a header row but no data rows")

        records = transform_rows(
            parsed.rows, default_source=self.config.preflight.default_source
        )

        # Values go out unchanged; the table decides what it accepts
        problems = check_records(records)
        if problems:
            self._status(f"⚠ Non-numeric values sent as-is: {'; '.join(problems)}")
        return StageResult.success(records)

    def _bulk_insert(self, records: list[dict[str, Any]]) -> StageResult[int]:
        result = self.store.insert(self.config.store.table, records)
        if not result.ok:
            return StageResult.failure(str(result.error))
        return StageResult.success(len(records))

    def _submit_training(
        self,
        file_name: str,
        content: bytes,
        training: TrainingConfig,
    ) -> StageResult[TrainingResponse]:
        response = self.training_client.submit(file_name, content, training)
        if not response.ok:
            return StageResult.failure(str(response.error))
        return StageResult.success(response)

    def _record_metrics(self, response: TrainingResponse) -> None:
        """Keep the returned metrics for this session and summarize them."""
        if response.metrics is not None:
            self.metrics = response.metrics
            self._status("✅ Training complete! New model saved successfully.")
            for line in headline_lines(response.metrics):
                self._status(line)

        if response.metrics_json is not None:
            try:
                self.metrics_report = MetricsReport.model_validate(
                    response.metrics_json
                )
            except ValidationError as e:
                log.warning("Unreadable metrics_json", errors=e.error_count())
                self._status(
                    f"⚠ Detailed metrics could not be read ({e.error_count()} errors)"
                )
            else:
                self._status("📊 Detailed metrics received in JSON format")

        if response.metrics is None and response.metrics_json is None:
            self._status("✅ Training request accepted (no metrics returned).")
