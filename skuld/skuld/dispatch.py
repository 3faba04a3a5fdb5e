"""Run one acquisition request and render its histogram."""

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path

import numpy as np

from skuld.config import settings
from skuld.counting import new_table
from skuld.rendering import LABEL_WIDTH, render
from skuld.scaling import fit_to_width
from skuld.strategies import DEFAULT_CHUNK_SIZE, AcquisitionStats, StrategyName, get_strategy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AcquisitionRequest:
    strategy: StrategyName
    path: Path
    repeat_count: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "strategy", StrategyName(self.strategy))
        object.__setattr__(self, "path", Path(self.path))
        if self.repeat_count < 0:
            raise ValueError(f"repeat_count must be non-negative, got {self.repeat_count}")


@dataclass
class DispatchResult:
    counts: np.ndarray
    scaled: np.ndarray
    stats: AcquisitionStats


def terminal_width(fallback: int | None = None) -> int:
    if fallback is None:
        fallback = settings.default_columns
    return shutil.get_terminal_size((fallback, 24)).columns


def dispatch(request: AcquisitionRequest,
             columns: int | None = None,
             file=None,
             marker: str = "#",
             chunk_size: int = DEFAULT_CHUNK_SIZE,
             label_margin: int = LABEL_WIDTH) -> DispatchResult:
    """Count ``request.path`` with the requested strategy and print the histogram.

    Any ``AcquisitionError`` from the strategy propagates before anything is
    printed. The bars are scaled to the terminal width minus the label
    margin, but never to less than one column.
    """
    strategy = get_strategy(request.strategy, chunk_size=chunk_size)
    table = new_table()
    strategy.run(request.path, request.repeat_count, table)

    if columns is None:
        columns = terminal_width()
    width = max(columns - label_margin, 1)
    logger.debug("scaling histogram to %d columns", width)

    scaled = fit_to_width(table, width)
    render(scaled, file=file, marker=marker)
    return DispatchResult(counts=table, scaled=scaled, stats=strategy.stats)
