"""Acquisition strategies.

Every strategy reads the same file and feeds its bytes to the same counter;
they differ only in how much they read and how much they keep in memory
while doing so:

    scan       reusable chunk buffer   memory O(chunk)     I/O O(size * n)
    load       whole file per pass     memory O(size)      I/O O(size * n)
    load-once  whole file, read once   memory O(size)      I/O O(size)
    waste      every pass retained     memory O(size * n)  I/O O(size * n)
"""

import logging
import os
import stat
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import humanize
import numpy as np

from skuld.counting import count_bytes
from skuld.errors import AcquisitionError

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 512


class StrategyName(str, Enum):
    SCAN = "scan"
    LOAD = "load"
    LOAD_ONCE = "load-once"
    WASTE = "waste"


@dataclass
class AcquisitionStats:
    passes: int = 0
    bytes_read: int = 0
    read_calls: int = 0
    peak_buffered: int = 0

    def hold(self, nbytes: int) -> None:
        self.peak_buffered = max(self.peak_buffered, nbytes)

    def summary(self) -> str:
        return (
            f"{self.passes} passes, "
            f"{humanize.naturalsize(self.bytes_read, binary=True)} read in {self.read_calls} calls, "
            f"peak buffered {humanize.naturalsize(self.peak_buffered, binary=True)}"
        )


def _reason(error: OSError) -> str:
    return error.strerror or str(error)


def _open_regular(path: Path, buffering: int = -1):
    """Open ``path`` for binary reading, refusing anything but a regular file."""
    try:
        mode = os.stat(path).st_mode
    except OSError as e:
        raise AcquisitionError(path, "open", _reason(e)) from e
    if not stat.S_ISREG(mode):
        raise AcquisitionError(path, "open", "not a regular file")

    try:
        return open(path, "rb", buffering=buffering)
    except OSError as e:
        raise AcquisitionError(path, "open", _reason(e)) from e


class Strategy(ABC):
    name: StrategyName

    def __init__(self) -> None:
        self.stats = AcquisitionStats()

    def run(self, path: str | Path, repeat_count: int, table: np.ndarray) -> None:
        """Count the bytes of ``path`` into ``table`` over ``repeat_count`` full passes.

        Raises:
            AcquisitionError: If the file cannot be opened or read. The table
                contents are undefined afterwards.
        """
        if repeat_count < 0:
            raise ValueError(f"repeat_count must be non-negative, got {repeat_count}")

        path = Path(path)
        self.stats = AcquisitionStats()
        self._run(path, repeat_count, table)
        logger.info("%s %s: %s", self.name.value, path, self.stats.summary())

    @abstractmethod
    def _run(self, path: Path, repeat_count: int, table: np.ndarray) -> None:
        ...

    def _read_whole(self, path: Path) -> bytes:
        with _open_regular(path) as f:
            try:
                data = f.read()
            except OSError as e:
                raise AcquisitionError(path, "read", _reason(e)) from e
        self.stats.read_calls += 1
        self.stats.bytes_read += len(data)
        return data


class StreamScan(Strategy):
    name = StrategyName.SCAN

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        super().__init__()
        self.chunk_size = chunk_size

    def _run(self, path: Path, repeat_count: int, table: np.ndarray) -> None:
        buffer = bytearray(self.chunk_size)
        view = memoryview(buffer)
        self.stats.hold(len(buffer))

        for pass_no in range(repeat_count):
            with _open_regular(path, buffering=0) as f:
                while True:
                    try:
                        n = f.readinto(view)
                    except OSError as e:
                        raise AcquisitionError(path, "read", _reason(e)) from e
                    self.stats.read_calls += 1
                    if not n:
                        break
                    self.stats.bytes_read += n
                    count_bytes(view[:n], table)
                    if n < len(view):
                        break
            self.stats.passes += 1
            logger.debug("scan pass %d of %d done", pass_no + 1, repeat_count)


class FullLoad(Strategy):
    name = StrategyName.LOAD

    def _run(self, path: Path, repeat_count: int, table: np.ndarray) -> None:
        for pass_no in range(repeat_count):
            data = self._read_whole(path)
            self.stats.hold(len(data))
            count_bytes(data, table)
            # Drop the buffer before the next read allocates another one.
            del data
            self.stats.passes += 1
            logger.debug("load pass %d of %d done", pass_no + 1, repeat_count)


class FullLoadOnce(Strategy):
    name = StrategyName.LOAD_ONCE

    def _run(self, path: Path, repeat_count: int, table: np.ndarray) -> None:
        if repeat_count == 0:
            return
        data = self._read_whole(path)
        self.stats.hold(len(data))
        for pass_no in range(repeat_count):
            count_bytes(data, table)
            self.stats.passes += 1
            logger.debug("load-once pass %d of %d done", pass_no + 1, repeat_count)


class WastefulLoad(Strategy):
    """Full load that keeps every pass's buffer alive until the run ends.

    Memory grows with ``repeat_count * file size``. That growth is the point
    of this strategy.
    """

    name = StrategyName.WASTE

    def _run(self, path: Path, repeat_count: int, table: np.ndarray) -> None:
        buffers: list[bytes] = []
        retained = 0
        for _ in range(repeat_count):
            buffers.append(self._read_whole(path))
            retained += len(buffers[-1])
            self.stats.hold(retained)
        logger.debug("waste holding %d buffers, %s",
                     len(buffers), humanize.naturalsize(self.stats.peak_buffered, binary=True))

        for pass_no, data in enumerate(buffers):
            count_bytes(data, table)
            self.stats.passes += 1
            logger.debug("waste pass %d of %d done", pass_no + 1, repeat_count)


STRATEGIES: dict[StrategyName, type[Strategy]] = {
    StrategyName.SCAN: StreamScan,
    StrategyName.LOAD: FullLoad,
    StrategyName.LOAD_ONCE: FullLoadOnce,
    StrategyName.WASTE: WastefulLoad,
}


def get_strategy(name: str | StrategyName, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Strategy:
    cls = STRATEGIES[StrategyName(name)]
    if cls is StreamScan:
        return StreamScan(chunk_size)
    return cls()
