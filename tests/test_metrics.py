"""Tests for the training metrics models."""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from exohunt.training import MetricsReport, save_metrics_json
from exohunt.training.metrics import ClassReport, format_percent, headline_lines


class TestMetricsReport:
    """Tests for parsing metrics_json."""

    def test_parses_api_document(self, metrics_json: dict) -> None:
        """Test the camelCase document shape."""
        report = MetricsReport.model_validate(metrics_json)

        latest = report.latest
        assert latest is not None
        assert latest.model_name == "StackingClassifier"
        assert latest.is_active
        assert latest.metrics.accuracy == pytest.approx(0.9123)
        assert latest.labels == ["CANDIDATE", "CONFIRMED", "FALSE POSITIVE"]
        assert latest.confusion_matrix[1][1] == 60

        confirmed = latest.report["CONFIRMED"]
        assert isinstance(confirmed, ClassReport)
        assert confirmed.f1_score == pytest.approx(0.905)
        assert latest.report["accuracy"] == pytest.approx(0.9123)

    def test_numeric_version_and_labels(self, metrics_json: dict) -> None:
        """Test that numbers are accepted where text is expected."""
        metrics_json["models"][0]["version"] = 3
        metrics_json["models"][0]["labels"] = [0, 1, 2]
        latest = MetricsReport.model_validate(metrics_json).latest
        assert latest.version == "3"
        assert latest.labels == ["0", "1", "2"]

    def test_sklearn_f1_spelling(self) -> None:
        """Test the 'f1-score' key from classification_report()."""
        entry = ClassReport.model_validate(
            {"precision": 0.5, "recall": 0.5, "f1-score": 0.5, "support": 10}
        )
        assert entry.f1_score == 0.5

    def test_no_models(self) -> None:
        """Test an empty document."""
        assert MetricsReport.model_validate({}).latest is None

    def test_missing_metrics_is_invalid(self) -> None:
        """Test that a model without metrics is rejected."""
        with pytest.raises(ValidationError):
            MetricsReport.model_validate({"models": [{"modelName": "rf"}]})


class TestHeadlineLines:
    """Tests for headline metric formatting."""

    def test_format_percent(self) -> None:
        """Test percentage formatting."""
        assert format_percent(0.9123) == "91.23%"
        assert format_percent(1) == "100.00%"

    def test_all_headline_metrics(self) -> None:
        """Test order and labels."""
        lines = headline_lines(
            {
                "accuracy": 0.9123,
                "f1_macro": 0.87,
                "precision_macro": 0.88,
                "recall_macro": 0.86,
            }
        )
        assert lines == [
            "Accuracy: 91.23%",
            "F1 Score: 87.00%",
            "Precision: 88.00%",
            "Recall: 86.00%",
        ]

    def test_missing_and_non_numeric_skipped(self) -> None:
        """Test partial payloads."""
        assert headline_lines({"accuracy": 0.5, "f1_macro": "n/a"}) == [
            "Accuracy: 50.00%"
        ]


class TestSaveMetricsJson:
    """Tests for save_metrics_json()."""

    def test_writes_api_shape(self, tmp_path: Path, metrics_json: dict) -> None:
        """Test that the saved file uses the API's field names."""
        report = MetricsReport.model_validate(metrics_json)
        path = save_metrics_json(report, tmp_path / "out" / "metrics.json")

        saved = json.loads(path.read_text(encoding="utf-8"))
        model = saved["models"][0]
        assert model["modelName"] == "StackingClassifier"
        assert model["confusionMatrix"][0] == [50, 5, 3]
        assert model["metrics"]["f1_macro"] == pytest.approx(0.87)
