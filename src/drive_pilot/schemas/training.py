"""Training server response schema."""

from __future__ import annotations

from pydantic import BaseModel


class TrainingResponse(BaseModel):
    """Body returned by ``POST /api/train``.

    ``confusion_matrix_plot`` is a base64-encoded PNG.
    """

    status: str
    train_loss_history: list[float] = []
    val_loss_history: list[float] = []
    train_acc_history: list[float] = []
    val_acc_history: list[float] = []
    confusion_matrix_plot: str = ""
