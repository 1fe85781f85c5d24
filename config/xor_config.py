"""Configuration for the two-input XOR network."""

from .base_config import BaseConfig


class XorConfig(BaseConfig):
    """2-2-1 network learning the XOR truth table."""

    # Data
    dataset = "xor"

    # Network architecture
    num_inputs = 2
    num_hidden_nodes = 2
    num_outputs = 1

    # Training
    num_epochs = 1000
    learning_rate = 0.02   # 2 %
