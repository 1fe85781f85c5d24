"""
Truth tables for two-input logic gates.

Every dataset is returned as (inputs, targets): parallel lists of float
vectors, ready for Network.set_training_data.
"""

GATE_INPUTS = [[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0]]

GATE_OUTPUTS = {
    "and":  [0.0, 0.0, 0.0, 1.0],
    "or":   [0.0, 1.0, 1.0, 1.0],
    "nand": [1.0, 1.0, 1.0, 0.0],
    "xor":  [0.0, 1.0, 1.0, 0.0],
}


def logic_gate_dataset(name):
    """
    Build the truth table of a two-input gate.

    Args:
        name: One of 'and', 'or', 'nand', 'xor' (case-insensitive)

    Returns:
        inputs: 4 vectors of 2 values
        targets: 4 vectors of 1 value
    """
    key = name.lower()
    if key not in GATE_OUTPUTS:
        raise ValueError(f"Unknown dataset: {name} (choose from {', '.join(GATE_OUTPUTS)})")
    inputs = [list(x) for x in GATE_INPUTS]
    targets = [[y] for y in GATE_OUTPUTS[key]]
    return inputs, targets


def xor_dataset():
    return logic_gate_dataset("xor")
