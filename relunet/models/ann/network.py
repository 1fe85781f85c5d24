"""Two-layer ReLU network trained with per-example SGD."""

from __future__ import annotations

import enum
import sys
from typing import Dict, List, Optional, Sequence, TextIO, Tuple

import numpy as np

from relunet.models.ann.dense_layer import DenseLayer, ShapeMismatchError
from relunet.utils.formatting import SEPARATOR, format_values
from relunet.utils.metrics import binary_accuracy, mean_squared_error


class NetworkState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    CONFIGURED = "configured"
    DATA_LOADED = "data_loaded"
    TRAINED = "trained"


class Network:
    """
    Input -> hidden (ReLU) -> output (ReLU).

    hidden_layer: num_hidden_nodes nodes with num_inputs weights each
    output_layer: num_outputs nodes with num_hidden_nodes weights each

    Training data is held as parallel lists of input/target vectors and is
    visited in a freshly shuffled order every epoch. All randomness (weight
    init and shuffling) is drawn from self.rng, so passing `seed` makes a run
    reproducible.
    """

    def __init__(
        self,
        num_inputs: int = 0,
        num_hidden_nodes: int = 0,
        num_outputs: int = 0,
        seed: Optional[int] = None,
    ):
        self.rng = np.random.default_rng(seed)
        self.hidden_layer = DenseLayer(rng=self.rng)
        self.output_layer = DenseLayer(rng=self.rng)
        self.training_inputs: List[np.ndarray] = []
        self.training_targets: List[np.ndarray] = []
        self.training_order: List[int] = []
        self.epochs_trained = 0
        self.init(num_inputs, num_hidden_nodes, num_outputs)

    # -------- sizes / state --------

    def num_inputs(self) -> int:
        return self.hidden_layer.num_weights()

    def num_hidden_nodes(self) -> int:
        return self.hidden_layer.num_nodes()

    def num_outputs(self) -> int:
        return self.output_layer.num_nodes()

    def num_training_sets(self) -> int:
        return len(self.training_order)

    def output(self) -> np.ndarray:
        """Read-only view of the output layer's current output."""
        view = self.output_layer.output.view()
        view.flags.writeable = False
        return view

    @property
    def state(self) -> NetworkState:
        if self.num_hidden_nodes() == 0 and self.num_outputs() == 0:
            return NetworkState.UNINITIALIZED
        if self.num_training_sets() == 0:
            return NetworkState.CONFIGURED
        if self.epochs_trained == 0:
            return NetworkState.DATA_LOADED
        return NetworkState.TRAINED

    def init(self, num_inputs: int, num_hidden_nodes: int, num_outputs: int) -> None:
        self.clear()
        self.hidden_layer.resize(num_hidden_nodes, num_inputs)
        self.output_layer.resize(num_outputs, num_hidden_nodes)
        self._check_layer_coupling()

    def clear(self) -> None:
        self.hidden_layer.clear()
        self.output_layer.clear()
        self.training_inputs = []
        self.training_targets = []
        self.training_order = []
        self.epochs_trained = 0

    def _check_layer_coupling(self) -> None:
        # An output layer without nodes has no rows, hence reports 0 weights.
        if self.num_outputs() and self.output_layer.num_weights() != self.num_hidden_nodes():
            raise ShapeMismatchError(
                f"output layer expects {self.output_layer.num_weights()} inputs, "
                f"hidden layer has {self.num_hidden_nodes()} nodes")

    # -------- training data --------

    def set_training_data(
        self,
        inputs: Sequence[Sequence[float]],
        targets: Sequence[Sequence[float]],
    ) -> None:
        """Replace the training data; the longer of the two lists is truncated."""
        count = min(len(inputs), len(targets))
        self.training_inputs = [np.array(x, dtype=float) for x in inputs[:count]]
        self.training_targets = [np.array(y, dtype=float) for y in targets[:count]]
        self.training_order = list(range(count))
        self.epochs_trained = 0

    def _shuffle_training_order(self) -> None:
        n = len(self.training_order)
        order = self.training_order
        for i in range(n):
            r = int(self.rng.integers(n))
            order[i], order[r] = order[r], order[i]

    # -------- core passes --------

    def feedforward(self, x: Sequence[float]) -> None:
        self.hidden_layer.feedforward(x)
        self.output_layer.feedforward(self.hidden_layer.output)

    def backpropagate(self, reference: Sequence[float]) -> None:
        # Output errors must exist before the hidden layer reads them.
        self.output_layer.backpropagate(reference)
        self.hidden_layer.backpropagate(self.output_layer)

    def optimize(self, x: Sequence[float], learning_rate: float) -> None:
        self.hidden_layer.optimize(x, learning_rate)
        self.output_layer.optimize(self.hidden_layer.output, learning_rate)

    def train(self, num_epochs: int, learning_rate: float) -> None:
        """
        Run num_epochs full passes of per-example SGD over the training data.

        Args:
            num_epochs: Number of epochs, all of which are run
            learning_rate: SGD step size
        """
        for _ in range(num_epochs):
            self._shuffle_training_order()
            for i in self.training_order:
                x = self.training_inputs[i]
                self.feedforward(x)
                self.backpropagate(self.training_targets[i])
                self.optimize(x, learning_rate)
            self.epochs_trained += 1

    def predict(self, x: Sequence[float]) -> np.ndarray:
        """Run a forward pass and return a read-only view of the output layer."""
        self.feedforward(x)
        return self.output()

    # -------- reporting --------

    def evaluate(
        self,
        inputs: Optional[Sequence[Sequence[float]]] = None,
        targets: Optional[Sequence[Sequence[float]]] = None,
    ) -> Tuple[Dict[str, float], Dict[str, float]]:
        """
        Score predictions against targets (defaults to the training data).

        Targets are read the way backpropagate reads them: only the first
        num_outputs values of each count, and a shorter target is an error.

        Args:
            inputs: Input vectors (default: the stored training inputs)
            targets: Target vectors, required whenever inputs are given

        Returns:
            (mse_scores, acc_scores): dictionaries from relunet.utils.metrics
        """
        if inputs is None:
            inputs, targets = self.training_inputs, self.training_targets
        elif targets is None:
            raise ValueError("evaluate() needs targets when inputs are given")

        n = self.num_outputs()
        count = min(len(inputs), len(targets))
        predictions = []
        references = []
        for x, y in zip(inputs[:count], targets[:count]):
            y = np.asarray(y, dtype=float)
            if len(y) < n:
                raise ShapeMismatchError(f"target has {len(y)} values, network has {n} outputs")
            predictions.append(self.predict(x).copy())
            references.append(y[:n])
        return mean_squared_error(predictions, references), binary_accuracy(predictions, references)

    def render(
        self,
        inputs: Optional[Sequence[Sequence[float]]] = None,
        decimals: int = 1,
        stream: Optional[TextIO] = None,
        threshold: float = 0.001,
    ) -> None:
        """
        Predict every input and print one line per example.

        Args:
            inputs: Input vectors (default: the stored training inputs)
            decimals: Digits after the decimal point
            stream: Text sink (default: sys.stdout)
            threshold: Values strictly inside (-threshold, threshold) print as 0
        """
        if inputs is None:
            inputs = self.training_inputs
        if len(inputs) == 0:
            return
        stream = stream if stream is not None else sys.stdout

        stream.write(SEPARATOR + "\n")
        for x in inputs:
            prediction = self.predict(x)
            stream.write(f"Input: {format_values(x, decimals, threshold)}  "
                         f"Output: {format_values(prediction, decimals, threshold)}\n")
        stream.write(SEPARATOR + "\n\n")
