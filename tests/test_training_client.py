"""Tests for TrainingClient and TrainingSession."""

from __future__ import annotations

import base64
import io
from unittest.mock import MagicMock

import pytest
import requests
from PIL import Image

from drive_pilot.errors import NetworkFailure
from drive_pilot.training import (
    TrainingClient,
    TrainingSession,
    decode_confusion_matrix,
)
from drive_pilot.training.client import BUSY_STATUS


def _png_b64() -> str:
    buf = io.BytesIO()
    Image.new("RGB", (8, 6), color=(200, 10, 10)).save(buf, format="PNG")
    return base64.b64encode(buf.getvalue()).decode("ascii")


def _payload(**overrides: object) -> dict[str, object]:
    payload: dict[str, object] = {
        "status": "Training completed",
        "train_loss_history": [0.9, 0.6, 0.4],
        "val_loss_history": [1.0, 0.7, 0.5],
        "train_acc_history": [0.5, 0.7, 0.8],
        "val_acc_history": [0.4, 0.6, 0.75],
        "confusion_matrix_plot": _png_b64(),
    }
    payload.update(overrides)
    return payload


def _http(payload: object = None, error: Exception | None = None) -> MagicMock:
    http = MagicMock()
    if error is not None:
        http.post.side_effect = error
    else:
        http.post.return_value.json.return_value = payload
    return http


class TestDecodeConfusionMatrix:
    def test_decodes_png(self) -> None:
        img = decode_confusion_matrix(_png_b64())
        assert img is not None
        assert img.size == (8, 6)

    def test_empty_is_none(self) -> None:
        assert decode_confusion_matrix("") is None

    def test_invalid_raises(self) -> None:
        with pytest.raises(ValueError, match="confusion matrix"):
            decode_confusion_matrix("not base64!!")


class TestTrainingClient:
    def test_trigger_posts_empty_body(self) -> None:
        http = _http(_payload())
        client = TrainingClient(session=http)

        response = client.trigger()

        assert response.status == "Training completed"
        assert response.train_loss_history == [0.9, 0.6, 0.4]
        http.post.assert_called_once_with(
            "http://127.0.0.1:8000/api/train", data="", timeout=600.0
        )

    def test_connection_error(self) -> None:
        http = _http(error=requests.ConnectionError("refused"))
        client = TrainingClient(session=http)
        with pytest.raises(NetworkFailure, match="refused"):
            client.trigger()

    def test_http_error_status(self) -> None:
        http = _http(_payload())
        http.post.return_value.raise_for_status.side_effect = requests.HTTPError(
            "500 Server Error"
        )
        with pytest.raises(NetworkFailure, match="500"):
            TrainingClient(session=http).trigger()

    def test_invalid_json(self) -> None:
        http = _http()
        http.post.return_value.json.side_effect = ValueError("Expecting value")
        with pytest.raises(NetworkFailure, match="Invalid training response"):
            TrainingClient(session=http).trigger()

    def test_missing_status(self) -> None:
        with pytest.raises(NetworkFailure):
            TrainingClient(session=_http({"train_loss_history": [1.0]})).trigger()


class TestTrainingSession:
    def test_success_builds_charts(self) -> None:
        session = TrainingSession(TrainingClient(session=_http(_payload())))

        status = session.start()

        assert status == "Training completed"
        assert session.status == status
        assert session.loss_chart is not None
        assert session.loss_chart.name == "Loss"
        assert session.accuracy_chart is not None
        assert session.accuracy_chart.y_max == pytest.approx(0.8)
        assert session.confusion_matrix is not None
        assert session.busy is False

    def test_failure_reports_status(self) -> None:
        http = _http(error=requests.Timeout("timed out"))
        session = TrainingSession(TrainingClient(session=http))

        status = session.start()

        assert status == "Error: timed out"
        assert session.response is None
        assert http.post.call_count == 1

    def test_no_retry_after_failure(self) -> None:
        http = _http(error=requests.ConnectionError("refused"))
        TrainingSession(TrainingClient(session=http)).start()
        assert http.post.call_count == 1

    def test_busy_session_sends_nothing(self) -> None:
        http = _http(_payload())
        session = TrainingSession(TrainingClient(session=http))
        session._in_flight.acquire()
        try:
            assert session.start() == BUSY_STATUS
        finally:
            session._in_flight.release()
        http.post.assert_not_called()

    def test_empty_histories_skip_charts(self) -> None:
        payload = _payload(
            train_loss_history=[],
            val_loss_history=[],
            confusion_matrix_plot="",
        )
        session = TrainingSession(TrainingClient(session=_http(payload)))
        session.start()
        assert session.loss_chart is None
        assert session.accuracy_chart is not None
        assert session.confusion_matrix is None

    def test_bad_confusion_matrix_is_not_fatal(self) -> None:
        payload = _payload(confusion_matrix_plot="@@@")
        session = TrainingSession(TrainingClient(session=_http(payload)))
        assert session.start() == "Training completed"
        assert session.confusion_matrix is None
