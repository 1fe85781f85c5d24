"""Fully-connected layer of ReLU nodes."""

from __future__ import annotations

import sys
from typing import Optional, Sequence, TextIO, Union

import numpy as np

from relunet.utils.formatting import SEPARATOR, format_values


class ShapeMismatchError(ValueError):
    """Raised when a vector or neighbouring layer does not match a layer's size."""


def relu(x: np.ndarray) -> np.ndarray:
    return np.where(x > 0.0, x, 0.0)


def relu_deriv(y: np.ndarray) -> np.ndarray:
    # Evaluated on the activated output: y > 0 exactly when the sum was > 0.
    return (y > 0.0).astype(float)


class DenseLayer:
    """
    Dense layer where every node sees every input.

    State (float64 arrays):
        output:  (N,)   node outputs from the last forward pass
        error:   (N,)   node errors from the last backward pass
        bias:    (N,)
        weights: (N, M) one row of M input weights per node
    """

    def __init__(
        self,
        num_nodes: int = 0,
        num_weights: int = 0,
        rng: Optional[np.random.Generator] = None,
    ):
        self.rng = rng if rng is not None else np.random.default_rng()
        self.clear()
        if num_nodes:
            self.resize(num_nodes, num_weights)

    def num_nodes(self) -> int:
        return len(self.output)

    def num_weights(self) -> int:
        return self.weights.shape[1] if self.weights.shape[0] else 0

    def clear(self) -> None:
        self.output = np.zeros(0)
        self.error = np.zeros(0)
        self.bias = np.zeros(0)
        self.weights = np.zeros((0, 0))

    def resize(self, num_nodes: int, num_weights: int) -> None:
        """Re-size the layer and draw fresh parameters uniformly from [0, 1)."""
        self.clear()
        self.output = np.zeros(num_nodes)
        self.error = np.zeros(num_nodes)
        self.bias = self.rng.random(num_nodes)
        self.weights = self.rng.random((num_nodes, num_weights))

    def feedforward(self, x: Sequence[float]) -> None:
        """
        output = relu(bias + W x), summing only over the inputs both sides have.

        Args:
            x: (M,) new input signals; a shorter vector drops the missing terms
        """
        x = np.asarray(x, dtype=float)
        k = min(self.num_weights(), len(x))
        self.output[:] = relu(self.bias + self.weights[:, :k] @ x[:k])

    def backpropagate_output(self, reference: Sequence[float]) -> None:
        """Output-layer errors from reference (target) values."""
        ref = np.asarray(reference, dtype=float)
        if len(ref) < self.num_nodes():
            raise ShapeMismatchError(
                f"reference has {len(ref)} values, layer has {self.num_nodes()} nodes")
        self.error[:] = (ref[:self.num_nodes()] - self.output) * relu_deriv(self.output)

    def backpropagate_hidden(self, next_layer: "DenseLayer") -> None:
        """Hidden-layer errors from the errors of the layer that consumes this one."""
        if next_layer.num_weights() != self.num_nodes():
            raise ShapeMismatchError(
                f"next layer expects {next_layer.num_weights()} inputs, "
                f"this layer has {self.num_nodes()} nodes")
        self.error[:] = (next_layer.weights.T @ next_layer.error) * relu_deriv(self.output)

    def backpropagate(self, reference: Union[Sequence[float], "DenseLayer"]) -> None:
        if isinstance(reference, DenseLayer):
            self.backpropagate_hidden(reference)
        else:
            self.backpropagate_output(reference)

    def optimize(self, x: Sequence[float], learning_rate: float) -> None:
        """
        One SGD step on bias and weights.

        Args:
            x: the vector this layer was fed on the forward pass
            learning_rate: step size
        """
        x = np.asarray(x, dtype=float)
        k = min(self.num_weights(), len(x))
        step = self.error * learning_rate
        self.bias += step
        self.weights[:, :k] += np.outer(step, x[:k])

    def render(self, stream: Optional[TextIO] = None, decimals: int = 1,
               threshold: float = 0.001) -> None:
        stream = stream if stream is not None else sys.stdout
        fmt = dict(decimals=decimals, threshold=threshold)

        stream.write(SEPARATOR + "\n")
        stream.write(f"Number of nodes: {self.num_nodes()}\n")
        stream.write(f"Number of weights per node: {self.num_weights()}\n\n")
        stream.write(f"Output: {format_values(self.output, **fmt)}\n")
        stream.write(f"Error: {format_values(self.error, **fmt)}\n")
        stream.write(f"Bias: {format_values(self.bias, **fmt)}\n")
        stream.write("\nWeights:\n")
        for i, row in enumerate(self.weights, start=1):
            stream.write(f"Node {i}: {format_values(row, **fmt)}\n")
        stream.write(SEPARATOR + "\n\n")
