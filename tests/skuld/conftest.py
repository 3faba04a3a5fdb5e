from pathlib import Path

import numpy as np
from pytest import fixture


@fixture
def random_payload(payload_size: int) -> np.ndarray:
    rng = np.random.default_rng(0xC0FFEE + payload_size)
    return rng.integers(0, 256, payload_size, dtype=np.uint8)


@fixture
def payload_file(tmp_path: Path, random_payload: np.ndarray) -> Path:
    path = tmp_path / "payload.bin"
    random_payload.tofile(path)
    return path


@fixture
def text_file(tmp_path: Path) -> Path:
    path = tmp_path / "foobar.txt"
    path.write_bytes(b"foobar")
    return path


@fixture
def empty_file(tmp_path: Path) -> Path:
    path = tmp_path / "empty.txt"
    path.write_bytes(b"")
    return path
