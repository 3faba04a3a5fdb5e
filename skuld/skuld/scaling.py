"""Proportional rescaling of a frequency table to a display width."""

import numpy as np


def fit_to_width(table: np.ndarray, width: int) -> np.ndarray:
    """Return a copy of ``table`` rescaled so its largest bucket equals ``width``.

    Each bucket becomes ``floor(count * width / max)``, multiplied before the
    division. The products are Python ints, so large counts never wrap. An
    all-zero table maps to an all-zero table.
    """
    if width < 0:
        raise ValueError(f"width must be non-negative, got {width}")

    widest = int(table.max()) if len(table) else 0
    if widest == 0:
        return np.zeros_like(table)

    return np.array([count * width // widest for count in table.tolist()], dtype=table.dtype)
