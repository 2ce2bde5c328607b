"""Scanline partitioning shared by the pixel and convolution drivers.

Each task receives a half-open row range [lo, hi), reads only the driver's
immutable input and writes only its own rows of the output buffer. numpy
releases the GIL during elementwise work, so thread workers run
concurrently.
"""

import logging
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor

from photon_kit.core.env import Settings

logger = logging.getLogger(__name__)


def scanline_bands(height: int, workers: int, min_rows: int) -> list[tuple[int, int]]:
    """Split [0, height) into at most `workers` bands of at least `min_rows` rows."""
    count = max(1, min(workers, height // max(min_rows, 1)))
    chunk = (height + count - 1) // count
    return [(lo, min(lo + chunk, height)) for lo in range(0, height, chunk)]


def run_bands(height: int, work: Callable[[int, int], None], settings: Settings | None = None) -> None:
    """Run work(lo, hi) over every band, on a thread pool when more than one band exists."""
    settings = settings or Settings.from_env()
    bands = scanline_bands(height, settings.workers, settings.min_rows)
    if len(bands) == 1:
        work(0, height)
        return

    logger.debug('splitting %d rows into %d bands', height, len(bands))
    with ThreadPoolExecutor(max_workers=len(bands)) as pool:
        futures: list[Future[None]] = [pool.submit(work, lo, hi) for lo, hi in bands]
        for fut in futures:
            fut.result()
