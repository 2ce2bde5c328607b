"""Tests for photon_kit.core.parallel: scanline bands."""

import pytest
from photon_kit.core.env import Settings
from photon_kit.core.parallel import run_bands, scanline_bands


class TestScanlineBands:
    def test_single_worker(self):
        assert scanline_bands(100, 1, 64) == [(0, 100)]

    def test_small_image_not_split(self):
        assert scanline_bands(50, 8, 64) == [(0, 50)]

    def test_bands_cover_every_row_once(self):
        bands = scanline_bands(37, 4, 1)
        assert len(bands) == 4
        rows = [y for lo, hi in bands for y in range(lo, hi)]
        assert rows == list(range(37))

    def test_min_rows_limits_band_count(self):
        assert len(scanline_bands(200, 16, 64)) == 3


class TestRunBands:
    def test_every_row_visited(self):
        seen: list[int] = []

        def work(lo: int, hi: int) -> None:
            seen.extend(range(lo, hi))

        run_bands(23, work, Settings(workers=3, min_rows=1))
        assert sorted(seen) == list(range(23))

    def test_worker_errors_propagate(self):
        def work(lo: int, hi: int) -> None:
            raise RuntimeError('boom')

        with pytest.raises(RuntimeError, match='boom'):
            run_bands(10, work, Settings(workers=2, min_rows=1))
