"""
Client for the remote training API.

Sends the raw CSV and hyperparameters as a multipart form to
``POST /api/train`` and returns the decoded JSON response.
"""

from dataclasses import dataclass, field
from typing import Any

import httpx

from exohunt.config.settings import TrainingApiConfig, TrainingConfig
from exohunt.utils.logging import get_logger

log = get_logger(__name__)


@dataclass
class TrainingResponse:
    """
    Outcome of a training request.

    Attributes:
        payload: Decoded JSON body (empty if none could be decoded).
        status_code: HTTP status, None if the request never completed.
        error: Error message, None on success.
    """

    payload: dict[str, Any] = field(default_factory=dict)
    status_code: int | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        """Whether training succeeded."""
        return self.error is None

    @property
    def metrics(self) -> dict[str, Any] | None:
        """Headline metrics, if the API returned them."""
        value = self.payload.get("metrics")
        return value if isinstance(value, dict) and value else None

    @property
    def metrics_json(self) -> dict[str, Any] | None:
        """Detailed metrics document, if the API returned one."""
        value = self.payload.get("metrics_json")
        return value if isinstance(value, dict) and value else None


class TrainingApiClient:
    """
    Synchronous client for the training endpoint.

    No retries: a failed request is reported once and left to the caller.
    """

    def __init__(
        self,
        config: TrainingApiConfig,
        client: httpx.Client | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            config: Endpoint configuration.
            client: Optional preconfigured httpx client (used in tests).
        """
        self.config = config
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=config.timeout)

    def __enter__(self) -> "TrainingApiClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying client if this object created it."""
        if self._owns_client:
            self._client.close()

    def submit(
        self,
        file_name: str,
        content: bytes,
        training: TrainingConfig,
    ) -> TrainingResponse:
        """
        Upload a dataset and start training.

        Args:
            file_name: Name reported for the uploaded file.
            content: Raw CSV bytes, sent unmodified.
            training: Hyperparameter snapshot.

        Returns:
            TrainingResponse; non-2xx statuses and transport failures set
            ``error``.
        """
        url = self.config.endpoint
        log.info("Submitting training request", url=url, file=file_name)

        try:
            response = self._client.post(
                url,
                data=training.to_form_fields(),
                files={"file": (file_name, content, "text/csv")},
            )
        except httpx.HTTPError as e:
            log.error("Training request failed", url=url, error=str(e))
            return TrainingResponse(error=str(e) or type(e).__name__)

        try:
            body = response.json()
        except ValueError:
            body = None
        payload = body if isinstance(body, dict) else {}

        if not response.is_success:
            message = payload.get("error") or f"HTTP {response.status_code}"
            log.error(
                "Training rejected", status=response.status_code, error=str(message)
            )
            return TrainingResponse(
                payload=payload, status_code=response.status_code, error=str(message)
            )

        if body is None:
            return TrainingResponse(
                status_code=response.status_code,
                error="Training API returned an invalid JSON response",
            )

        log.info("Training finished", status=response.status_code)
        return TrainingResponse(payload=payload, status_code=response.status_code)
