"""Scores for network predictions against target vectors."""

from __future__ import annotations

from typing import Dict, Sequence

import numpy as np


def _stack(vectors: Sequence[Sequence[float]]) -> np.ndarray:
    return np.array([np.asarray(v, dtype=float) for v in vectors], dtype=float)


def mean_squared_error(
    predictions: Sequence[Sequence[float]],
    targets: Sequence[Sequence[float]],
) -> Dict[str, float]:
    """Mean of the squared error over every output value of every example."""
    if len(predictions) == 0:
        return {"name": "mse", "metric": 0.0, "count": 0}
    diff = _stack(predictions) - _stack(targets)
    count = int(diff.size)
    mse = float((diff * diff).sum()) / count if count > 0 else 0.0
    return {"name": "mse", "metric": mse, "count": count}


def binary_accuracy(
    predictions: Sequence[Sequence[float]],
    targets: Sequence[Sequence[float]],
    threshold: float = 0.5,
) -> Dict[str, float]:
    """Percentage of output values on the same side of `threshold` as the target."""
    if len(predictions) == 0:
        return {"name": "acc", "metric": 0.0, "correct": 0, "total": 0}
    preds = (_stack(predictions) > threshold).astype(int)
    refs = (_stack(targets) > threshold).astype(int)
    total = int(refs.size)
    correct = int((preds == refs).sum())
    acc = (100.0 * correct / total) if total > 0 else 0.0
    return {"name": "acc", "metric": acc, "correct": correct, "total": total}
