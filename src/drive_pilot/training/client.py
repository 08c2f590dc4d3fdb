"""HTTP client for the local training server.

``POST /api/train`` with an empty body starts a training run and returns the
loss/accuracy histories plus a base64 confusion-matrix PNG.  Failures are
reported, never retried.
"""

from __future__ import annotations

import base64
import binascii
import io
import threading

import requests
from loguru import logger
from PIL import Image
from pydantic import ValidationError

from drive_pilot.config import ChartConfig, TrainingClientConfig
from drive_pilot.errors import NetworkFailure
from drive_pilot.schemas.chart import ChartLayout
from drive_pilot.schemas.training import TrainingResponse
from drive_pilot.visualization.metrics import BLUE, GREEN, RED, YELLOW, map_metrics

BUSY_STATUS = "Training already in progress"


def decode_confusion_matrix(data: str) -> Image.Image | None:
    """Decode a base64 PNG; ``None`` for an empty string."""
    if not data:
        return None
    try:
        raw = base64.b64decode(data, validate=True)
        with Image.open(io.BytesIO(raw)) as img:
            return img.convert("RGB")
    except (binascii.Error, OSError) as e:
        raise ValueError(f"Invalid confusion matrix image: {e}") from e


class TrainingClient:
    """Send training requests to the server.

    Args:
        config: Endpoint URL and request timeout.
        session: Optional ``requests.Session`` to reuse connections.
    """

    def __init__(
        self,
        config: TrainingClientConfig | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.config = config or TrainingClientConfig()
        self.http = session or requests.Session()

    def trigger(self) -> TrainingResponse:
        """Start one training run and wait for its result.

        Raises:
            NetworkFailure: Connection error, timeout, non-2xx status or an
                invalid response body.
        """
        logger.info(f"POST {self.config.api_url}")
        try:
            response = self.http.post(
                self.config.api_url, data="", timeout=self.config.timeout
            )
            response.raise_for_status()
        except requests.RequestException as e:
            raise NetworkFailure(str(e)) from e

        try:
            return TrainingResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise NetworkFailure(f"Invalid training response: {e}") from e


class TrainingSession:
    """Run training requests one at a time and keep the latest results.

    ``start`` returns a user-facing status string in every case.  While a
    request is in flight, further calls return immediately without sending
    anything.

    Args:
        client: Client used to reach the server.
        chart_config: Layout for the loss and accuracy charts.
    """

    def __init__(
        self,
        client: TrainingClient | None = None,
        chart_config: ChartConfig | None = None,
    ) -> None:
        self.client = client or TrainingClient()
        self.chart_config = chart_config or ChartConfig()
        self.status = ""
        self.response: TrainingResponse | None = None
        self.loss_chart: ChartLayout | None = None
        self.accuracy_chart: ChartLayout | None = None
        self.confusion_matrix: Image.Image | None = None
        self._in_flight = threading.Lock()

    @property
    def busy(self) -> bool:
        return self._in_flight.locked()

    def start(self) -> str:
        if not self._in_flight.acquire(blocking=False):
            logger.warning(BUSY_STATUS)
            return BUSY_STATUS
        try:
            self.status = self._run()
        finally:
            self._in_flight.release()
        return self.status

    def _run(self) -> str:
        try:
            response = self.client.trigger()
        except NetworkFailure as e:
            logger.error(f"Training request failed: {e}")
            return f"Error: {e}"

        self.response = response
        self.loss_chart = self._chart(
            response.train_loss_history, response.val_loss_history, "Loss", GREEN, RED
        )
        self.accuracy_chart = self._chart(
            response.train_acc_history,
            response.val_acc_history,
            "Accuracy",
            BLUE,
            YELLOW,
        )
        try:
            self.confusion_matrix = decode_confusion_matrix(
                response.confusion_matrix_plot
            )
        except ValueError as e:
            logger.error(f"Could not decode confusion matrix: {e}")
            self.confusion_matrix = None

        logger.info(f"Training finished: {response.status}")
        return response.status

    def _chart(
        self,
        train: list[float],
        val: list[float],
        name: str,
        train_color: tuple[float, float, float],
        val_color: tuple[float, float, float],
    ) -> ChartLayout | None:
        if not train and not val:
            logger.warning(f"No {name.lower()} history in training response")
            return None
        return map_metrics(
            train,
            val,
            name,
            self.chart_config,
            train_color=train_color,
            val_color=val_color,
        )
