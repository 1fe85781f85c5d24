#!/usr/bin/env python
"""
Test DenseLayer.

This script tests:
- Sizing and parameter initialization
- ReLU forward pass (including the zero boundary and short inputs)
- Output-layer and hidden-layer error computation
- SGD parameter update

Usage:
    python tests/test_dense_layer.py
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

import io

import numpy as np
import pytest

from relunet.models.ann.dense_layer import DenseLayer, ShapeMismatchError, relu, relu_deriv


def _layer(weights, bias):
    layer = DenseLayer(rng=np.random.default_rng(0))
    weights = np.array(weights, dtype=float)
    layer.resize(*weights.shape)
    layer.weights[:] = weights
    layer.bias[:] = bias
    return layer


# ============================================================================
# SIZING
# ============================================================================

def test_resize_shapes_and_ranges():
    """Test that resize allocates zeroed state and draws parameters in [0, 1)."""
    print("\n" + "=" * 60)
    print("Test 1: Resize")
    print("=" * 60)

    layer = DenseLayer(3, 4, rng=np.random.default_rng(1))

    assert layer.num_nodes() == 3
    assert layer.num_weights() == 4
    assert layer.output.shape == (3,)
    assert layer.error.shape == (3,)
    assert layer.bias.shape == (3,)
    assert layer.weights.shape == (3, 4)
    assert np.all(layer.output == 0.0)
    assert np.all(layer.error == 0.0)
    assert np.all((layer.bias >= 0.0) & (layer.bias < 1.0))
    assert np.all((layer.weights >= 0.0) & (layer.weights < 1.0))
    print("✓ Shapes and initial values correct")

    layer.resize(2, 1)
    assert layer.num_nodes() == 2
    assert layer.num_weights() == 1
    print("✓ Re-sizing replaces the old state")


def test_empty_layer():
    """Test that a layer without nodes reports zero weights."""
    layer = DenseLayer(rng=np.random.default_rng(0))
    assert layer.num_nodes() == 0
    assert layer.num_weights() == 0

    layer.resize(0, 5)
    assert layer.num_nodes() == 0
    assert layer.num_weights() == 0

    layer.resize(2, 2)
    layer.clear()
    assert layer.num_nodes() == 0
    assert layer.num_weights() == 0
    print("✓ Empty layer sizes correct")


# ============================================================================
# FORWARD PASS
# ============================================================================

def test_relu():
    x = np.array([-2.0, 0.0, 3.5])
    assert np.array_equal(relu(x), [0.0, 0.0, 3.5])
    assert np.array_equal(relu_deriv(relu(x)), [0.0, 0.0, 1.0])


def test_feedforward():
    """Test output = relu(bias + W x)."""
    layer = _layer([[1.0, -1.0], [0.5, 0.5]], [0.0, -1.0])
    layer.feedforward([2.0, 1.0])
    assert np.allclose(layer.output, [1.0, 0.5])

    layer.feedforward([0.0, 3.0])
    assert np.allclose(layer.output, [0.0, 0.5])
    print("✓ Weighted sums and ReLU correct")


def test_feedforward_zero_sum_is_inactive():
    """Test that a node whose sum is exactly 0 outputs 0 and passes no gradient."""
    layer = _layer([[1.0, -1.0]], [0.0])
    layer.feedforward([1.0, 1.0])
    assert layer.output[0] == 0.0

    layer.backpropagate([1.0])
    assert layer.error[0] == 0.0
    print("✓ ReLU boundary: sum 0 -> output 0, error 0")


def test_feedforward_short_input():
    """Test that missing inputs are dropped from the sum."""
    layer = _layer([[1.0, 2.0, 3.0]], [0.0])
    layer.feedforward([1.0, 1.0])
    assert np.isclose(layer.output[0], 3.0)

    # Extra inputs beyond the weight count are ignored
    layer.feedforward([1.0, 1.0, 1.0, 100.0])
    assert np.isclose(layer.output[0], 6.0)


def test_feedforward_deterministic():
    layer = DenseLayer(4, 3, rng=np.random.default_rng(7))
    x = [0.3, -0.2, 0.9]
    layer.feedforward(x)
    first = layer.output.copy()
    for _ in range(3):
        layer.feedforward(x)
        assert np.array_equal(layer.output, first)
    print("✓ Repeated forward passes identical")


# ============================================================================
# BACKWARD PASS
# ============================================================================

def test_backpropagate_output():
    """Test error = (r - y) * relu'(y)."""
    layer = _layer([[1.0], [1.0]], [0.0, 0.0])
    layer.output[:] = [0.7, 0.0]
    layer.backpropagate([1.0, 1.0])
    assert np.allclose(layer.error, [0.3, 0.0])

    layer.output[:] = [1.5, 2.0]
    layer.backpropagate_output([1.0, 2.5])
    assert np.allclose(layer.error, [-0.5, 0.5])
    print("✓ Output errors correct")


def test_backpropagate_output_short_reference():
    layer = _layer([[1.0], [1.0]], [0.0, 0.0])
    with pytest.raises(ShapeMismatchError):
        layer.backpropagate([1.0])

    # Trailing reference values are ignored
    layer.output[:] = [1.0, 1.0]
    layer.backpropagate([2.0, 2.0, 9.0])
    assert np.allclose(layer.error, [1.0, 1.0])


def test_backpropagate_hidden():
    """Test error[i] = sum_j next.error[j] * next.weights[j][i] * relu'(output[i])."""
    hidden = _layer([[1.0], [1.0]], [0.0, 0.0])
    hidden.output[:] = [1.0, 0.0]

    output = _layer([[2.0, 3.0]], [0.0])
    output.error[:] = [0.5]

    hidden.backpropagate(output)
    assert np.allclose(hidden.error, [1.0, 0.0])

    hidden.output[:] = [0.4, 2.0]
    output.weights[:] = [[-1.0, 4.0]]
    output.error[:] = [0.25]
    hidden.backpropagate_hidden(output)
    assert np.allclose(hidden.error, [-0.25, 1.0])
    print("✓ Hidden errors correct")


def test_backpropagate_hidden_size_mismatch():
    hidden = DenseLayer(2, 2, rng=np.random.default_rng(0))
    output = DenseLayer(1, 3, rng=np.random.default_rng(0))
    with pytest.raises(ShapeMismatchError):
        hidden.backpropagate(output)


# ============================================================================
# OPTIMIZATION
# ============================================================================

def test_optimize():
    """Test bias += e * lr and w += e * lr * x."""
    layer = _layer([[0.0, 0.0]], [0.0])
    layer.error[:] = [0.5]
    layer.optimize([1.0, 2.0], 0.1)
    assert np.allclose(layer.bias, [0.05])
    assert np.allclose(layer.weights, [[0.05, 0.1]])
    print("✓ Bias and weight updates correct")


def test_optimize_short_input():
    layer = _layer([[1.0, 1.0, 1.0], [0.0, 0.0, 0.0]], [0.0, 0.0])
    layer.error[:] = [1.0, -2.0]
    layer.optimize([1.0], 0.5)
    assert np.allclose(layer.bias, [0.5, -1.0])
    assert np.allclose(layer.weights, [[1.5, 1.0, 1.0], [-1.0, 0.0, 0.0]])


def test_zero_error_leaves_parameters():
    layer = DenseLayer(3, 2, rng=np.random.default_rng(3))
    weights, bias = layer.weights.copy(), layer.bias.copy()
    layer.optimize([1.0, 1.0], 10.0)
    assert np.array_equal(layer.weights, weights)
    assert np.array_equal(layer.bias, bias)


# ============================================================================
# RENDER
# ============================================================================

def test_render():
    layer = _layer([[0.3, -0.5], [1.0, 0.0004]], [0.1, 0.2])
    layer.output[:] = [1.0, 0.0]

    stream = io.StringIO()
    layer.render(stream)
    lines = stream.getvalue().split("\n")

    assert lines[0] == "-" * 80
    assert lines[1] == "Number of nodes: 2"
    assert lines[2] == "Number of weights per node: 2"
    assert lines[4] == "Output: 1.0 0.0"
    assert lines[5] == "Error: 0.0 0.0"
    assert lines[6] == "Bias: 0.1 0.2"
    assert lines[8] == "Weights:"
    assert lines[9] == "Node 1: 0.3 -0.5"
    assert lines[10] == "Node 2: 1.0 0.0"
    assert lines[11] == "-" * 80

    stream = io.StringIO()
    layer.render(stream, decimals=3)
    assert "Node 2: 1.000 0.000" in stream.getvalue()
    print("✓ Layer rendering correct")


def run_all_tests():
    print("\n" + "=" * 70)
    print(" " * 20 + "DENSE LAYER TEST SUITE")
    print("=" * 70)

    try:
        test_resize_shapes_and_ranges()
        test_empty_layer()
        test_relu()
        test_feedforward()
        test_feedforward_zero_sum_is_inactive()
        test_feedforward_short_input()
        test_feedforward_deterministic()
        test_backpropagate_output()
        test_backpropagate_output_short_reference()
        test_backpropagate_hidden()
        test_backpropagate_hidden_size_mismatch()
        test_optimize()
        test_optimize_short_input()
        test_zero_error_leaves_parameters()
        test_render()

        print("\n" + "=" * 70)
        print(" " * 20 + "🎉 ALL TESTS PASSED! 🎉")
        print("=" * 70)

    except AssertionError as e:
        print("\n" + "=" * 70)
        print(" " * 25 + "❌ TEST FAILED")
        print("=" * 70)
        print(f"\nError: {e}")
        import traceback
        traceback.print_exc()


if __name__ == "__main__":
    run_all_tests()
