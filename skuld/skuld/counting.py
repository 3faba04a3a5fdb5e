"""Byte frequency counting into a fixed 256-bucket table."""

import numpy as np

TABLE_SIZE = 256
TABLE_DTYPE = np.uint64

# Upper bound on the scratch array np.bincount allocates per block.
COUNT_BLOCK = 4096


def new_table() -> np.ndarray:
    return np.zeros(TABLE_SIZE, dtype=TABLE_DTYPE)


def count_bytes(data, table: np.ndarray) -> None:
    """Add the byte values found in ``data`` to ``table`` in place.

    ``data`` may be any bytes-like object or ``None``. Only the bytes of the
    object actually passed are counted, so callers holding a partially filled
    buffer hand over ``view[:n]``. Counts wrap modulo 2**64 instead of raising.
    """
    if data is None or len(data) == 0:
        return
    values = np.frombuffer(data, dtype=np.uint8)
    for start in range(0, len(values), COUNT_BLOCK):
        block = values[start:start + COUNT_BLOCK]
        table += np.bincount(block, minlength=TABLE_SIZE).astype(TABLE_DTYPE)
