"""skuld - Byte histograms computed with different memory and I/O trade-offs."""

import logging

from skuld.counting import count_bytes, new_table
from skuld.dispatch import AcquisitionRequest, DispatchResult, dispatch, terminal_width
from skuld.errors import AcquisitionError
from skuld.rendering import LABEL_WIDTH, render
from skuld.scaling import fit_to_width
from skuld.strategies import (
    STRATEGIES,
    AcquisitionStats,
    FullLoad,
    FullLoadOnce,
    Strategy,
    StrategyName,
    StreamScan,
    WastefulLoad,
    get_strategy,
)

__version__ = '0.1.0'

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'AcquisitionError',
    'AcquisitionRequest',
    'AcquisitionStats',
    'DispatchResult',
    'FullLoad',
    'FullLoadOnce',
    'LABEL_WIDTH',
    'STRATEGIES',
    'Strategy',
    'StrategyName',
    'StreamScan',
    'WastefulLoad',
    'count_bytes',
    'dispatch',
    'fit_to_width',
    'get_strategy',
    'new_table',
    'render',
    'terminal_width',
]
