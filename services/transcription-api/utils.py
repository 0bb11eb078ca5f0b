import random
import time
from pathlib import Path


def unique_path(directory: Path, prefix: str, suffix: str = "") -> Path:
    """
    Builds a collision-safe file path inside directory.

    Names combine a millisecond timestamp and a random number, so concurrent
    requests sharing one upload directory never pick the same file.

    Returns:
        Path: ``<directory>/<prefix>-<millis>-<random><suffix>``.
    """
    stamp = int(time.time() * 1000)
    nonce = random.randint(0, 999_999_999)
    return directory / f"{prefix}-{stamp}-{nonce}{suffix}"
