#!/usr/bin/env python
"""
Smallest end-to-end run: a 2-2-1 network learns XOR.

    X1 X2 | Y
    0  0  | 0
    0  1  | 1
    1  0  | 1
    1  1  | 0

Trains for 1000 epochs at a learning rate of 0.02, then prints the
prediction for every training input.

Usage:
    python examples/xor_minimal.py
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from relunet.models.ann.network import Network


def main():
    train_in = [[0, 0], [0, 1], [1, 0], [1, 1]]
    train_out = [[0], [1], [1], [0]]

    network = Network(2, 2, 1)
    network.set_training_data(train_in, train_out)
    network.train(1000, 0.02)
    network.render()


if __name__ == "__main__":
    main()
