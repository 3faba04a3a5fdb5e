"""Text bar chart of a frequency table, one line per non-zero bucket."""

import sys

import numpy as np

# Width of the "255: " label in front of each bar.
LABEL_WIDTH = 5


def render(table: np.ndarray, file=None, marker: str = "#") -> None:
    """Print one bar per non-zero bucket, in ascending byte order."""
    out = sys.stdout if file is None else file
    for byte_value, count in enumerate(table):
        if count > 0:
            print(f"{byte_value:>3}: {marker * int(count)}", file=out)
