"""Tests for photon_kit.core.geometry: crop, flips and resize."""

import numpy as np
import pytest
from photon_kit.core import geometry
from photon_kit.core.errors import InvalidArgument, OutOfBounds
from photon_kit.core.image import PhotonImage
from photon_kit.core.types import Rgba


def _numbered(width: int = 4, height: int = 3) -> PhotonImage:
    """Each pixel's red channel holds its row-major index."""
    arr = np.zeros((height, width, 4), dtype=np.uint8)
    arr[..., 0] = np.arange(width * height).reshape(height, width)
    arr[..., 3] = 255
    return PhotonImage(width, height, arr)


class TestCrop:
    def test_crop_returns_new_image(self):
        img = _numbered()
        out = geometry.crop(img, 1, 1, 3, 3)
        assert out.size == (2, 2)
        assert out.pixels[..., 0].tolist() == [[5, 6], [9, 10]]
        assert img.size == (4, 3)

    def test_full_crop_is_copy(self):
        img = _numbered()
        out = geometry.crop(img, 0, 0, 4, 3)
        assert out == img
        assert out is not img

    def test_empty_rectangle(self):
        with pytest.raises(InvalidArgument):
            geometry.crop(_numbered(), 2, 0, 2, 3)

    def test_outside_image(self):
        with pytest.raises(OutOfBounds):
            geometry.crop(_numbered(), 0, 0, 5, 3)


class TestFlip:
    def test_fliph(self):
        img = _numbered()
        geometry.fliph(img)
        assert img.pixels[0, :, 0].tolist() == [3, 2, 1, 0]

    def test_flipv(self):
        img = _numbered()
        geometry.flipv(img)
        assert img.pixels[:, 0, 0].tolist() == [8, 4, 0]

    def test_double_flip_is_identity(self):
        img = _numbered()
        before = img.copy()
        geometry.fliph(img)
        geometry.fliph(img)
        geometry.flipv(img)
        geometry.flipv(img)
        assert img == before


class TestResize:
    @pytest.mark.parametrize('sampling', list(geometry.SAMPLING))
    def test_resize_dimensions(self, sampling: str) -> None:
        out = geometry.resize(_numbered(), 8, 5, sampling)
        assert out.size == (8, 5)
        assert len(out.bytes()) == 4 * 8 * 5

    def test_uniform_stays_uniform(self):
        img = PhotonImage.filled(5, 5, Rgba(30, 60, 90, 255))
        out = geometry.resize(img, 2, 3, 'bilinear')
        assert out == PhotonImage.filled(2, 3, Rgba(30, 60, 90, 255))

    def test_nearest_doubling(self):
        img = PhotonImage.new(2, 1, bytes([10, 0, 0, 255, 20, 0, 0, 255]))
        out = geometry.resize(img, 4, 1, 'nearest')
        assert out.pixels[0, :, 0].tolist() == [10, 10, 20, 20]

    def test_unknown_sampling(self):
        with pytest.raises(InvalidArgument):
            geometry.resize(_numbered(), 2, 2, 'cubic-ish')

    def test_bad_target_size(self):
        with pytest.raises(InvalidArgument):
            geometry.resize(_numbered(), 0, 2)
