"""Pytest configuration and shared fixtures."""

import json
import sys
from collections.abc import Callable, Iterator
from datetime import datetime
from pathlib import Path
from typing import Any

import httpx
import pytest
import structlog

from exohunt.config import AppConfig, StoreConfig, TrainingApiConfig
from exohunt.store import PostgrestRowStore
from exohunt.training import TrainingApiClient


class RecordingTransport:
    """
    httpx handler that records requests and replays canned responses.

    Responses are keyed by (method, path); unknown routes return 404.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.routes: dict[tuple[str, str], httpx.Response | Exception] = {}

    def add(
        self,
        method: str,
        path: str,
        status_code: int = 200,
        json_body: Any = None,
        text: str | None = None,
        raises: Exception | None = None,
    ) -> None:
        if raises is not None:
            self.routes[(method, path)] = raises
        elif text is not None:
            self.routes[(method, path)] = httpx.Response(status_code, text=text)
        else:
            self.routes[(method, path)] = httpx.Response(status_code, json=json_body)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": "no route"})
        if isinstance(route, Exception):
            raise route
        return route

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [
            r for r in self.requests if r.method == method and r.url.path == path
        ]

    def json_body(self, request: httpx.Request) -> Any:
        return json.loads(request.content)


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    """Undo global structlog configuration so captured streams don't leak between tests."""
    yield
    structlog.reset_defaults()
    # Module-level lazy loggers cache their bound logger on first use.
    for module in list(sys.modules.values()):
        if not getattr(module, "__name__", "").startswith("exohunt"):
            continue
        for value in vars(module).values():
            if isinstance(value, structlog._config.BoundLoggerLazyProxy):
                value.__dict__.pop("bind", None)


@pytest.fixture
def transport() -> RecordingTransport:
    """Fresh recording transport."""
    return RecordingTransport()


@pytest.fixture
def http_client(transport: RecordingTransport) -> Iterator[httpx.Client]:
    """httpx client routed through the recording transport."""
    client = httpx.Client(transport=httpx.MockTransport(transport))
    yield client
    client.close()


@pytest.fixture
def app_config() -> AppConfig:
    """Configuration pointing at fake hosts."""
    return AppConfig(
        store=StoreConfig(url="http://store.test", api_key="anon-key"),
        training_api=TrainingApiConfig(base_url="http://api.test"),
    )


@pytest.fixture
def store(app_config: AppConfig, http_client: httpx.Client) -> PostgrestRowStore:
    """Row store using the mock transport."""
    return PostgrestRowStore(app_config.store, client=http_client)


@pytest.fixture
def training_client(
    app_config: AppConfig, http_client: httpx.Client
) -> TrainingApiClient:
    """Training client using the mock transport."""
    return TrainingApiClient(app_config.training_api, client=http_client)


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    """Clock always returning 2024-10-05 12:34:56."""
    return lambda: datetime(2024, 10, 5, 12, 34, 56)


@pytest.fixture
def koi_csv_text() -> str:
    """Small Kepler KOI export with a commented preamble."""
    return (
        "# This file was produced by the NASA Exoplanet Archive\n"
        "# COLUMN koi_teq: Equilibrium Temperature [K]\n"
        "kepoi_name,koi_disposition,koi_period,koi_prad,koi_teq,koi_score\n"
        "K00752.01,CONFIRMED,9.488,2.26,793,1.0\n"
        "K00752.02,CONFIRMED,54.418,2.83,443,0.969\n"
        "K00753.01,FALSE POSITIVE,19.899,14.6,,0.0\n"
    )


@pytest.fixture
def write_csv(tmp_path: Path) -> Callable[[str, str], Path]:
    """Factory writing CSV text to a temporary file."""

    def _write(text: str, name: str = "dataset.csv") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def metrics_json() -> dict[str, Any]:
    """Detailed metrics document as returned by the training API."""
    return {
        "models": [
            {
                "modelName": "StackingClassifier",
                "version": "3",
                "trainingDate": "2024-10-05T12:00:00Z",
                "isActive": True,
                "notes": "rf+xgb+lgbm",
                "metrics": {
                    "accuracy": 0.9123,
                    "precision_macro": 0.88,
                    "recall_macro": 0.86,
                    "f1_macro": 0.87,
                    "roc_auc_ovr": 0.97,
                    "roc_auc_ovo": 0.96,
                },
                "labels": ["CANDIDATE", "CONFIRMED", "FALSE POSITIVE"],
                "confusionMatrix": [[50, 5, 3], [4, 60, 2], [1, 2, 70]],
                "report": {
                    "CONFIRMED": {
                        "precision": 0.9,
                        "recall": 0.91,
                        "f1_score": 0.905,
                        "support": 66,
                    },
                    "accuracy": 0.9123,
                },
            }
        ]
    }
