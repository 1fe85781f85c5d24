"""Fixed-point text formatting for vectors printed by layers and networks."""

SEPARATOR = "-" * 80


def snap_to_zero(value, threshold=0.001):
    """Return 0.0 for values strictly inside (-threshold, threshold)."""
    return 0.0 if -threshold < value < threshold else float(value)


def format_values(values, decimals=1, threshold=0.001):
    """
    Format a vector on one line.

    Args:
        values: Iterable of numbers
        decimals: Digits after the decimal point
        threshold: Snap window around zero

    Returns:
        Space-separated fixed-point numbers
    """
    return " ".join(f"{snap_to_zero(v, threshold):.{decimals}f}" for v in values)
