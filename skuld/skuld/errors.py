"""Errors raised by skuld."""

from pathlib import Path


class AcquisitionError(OSError):
    """Raised when a strategy fails to open or read its input file."""

    def __init__(self, path: str | Path, operation: str, reason: str) -> None:
        self.path = Path(path)
        self.operation = operation
        self.reason = reason
        super().__init__(f"could not {operation} file `{self.path}`: {reason}")

    def __str__(self) -> str:
        return self.args[0]
