"""Tests for photon_kit.codec: file, bytes and base64 adapters."""

from pathlib import Path

import numpy as np
import pytest
from photon_kit import codec
from photon_kit.core.errors import InvalidArgument
from photon_kit.core.image import PhotonImage
from photon_kit.core.types import Rgba
from PIL import Image


def _sample() -> PhotonImage:
    arr = np.zeros((3, 4, 4), dtype=np.uint8)
    arr[..., 0] = 200
    arr[..., 1] = np.arange(4) * 60
    arr[..., 3] = np.array([255, 128, 0])[:, np.newaxis]
    return PhotonImage(4, 3, arr)


class TestPng:
    def test_png_is_lossless(self):
        img = _sample()
        assert codec.from_encoded(codec.to_encoded(img, 'PNG')) == img

    def test_save_and_open(self, tmp_path: Path) -> None:
        path = tmp_path / 'out.png'
        codec.save_image(_sample(), str(path))
        assert codec.open_image(str(path)) == _sample()

    def test_open_converts_to_rgba(self, tmp_path: Path) -> None:
        path = tmp_path / 'grey.png'
        Image.new('L', (2, 2), 77).save(path)
        img = codec.open_image(str(path))
        assert img.get_pixel(1, 1) == Rgba(77, 77, 77, 255)


class TestJpeg:
    def test_jpeg_drops_alpha(self, tmp_path: Path) -> None:
        path = tmp_path / 'out.jpg'
        codec.save_image(PhotonImage.filled(8, 8, Rgba(120, 120, 120, 10)), str(path))
        img = codec.open_image(str(path))
        assert img.size == (8, 8)
        assert (img.pixels[..., 3] == 255).all()
        assert abs(int(img.pixels[4, 4, 0]) - 120) <= 3


class TestBase64:
    def test_round_trip(self):
        img = _sample()
        assert codec.from_base64(codec.to_base64(img)) == img

    def test_data_url(self):
        img = _sample()
        url = 'data:image/png;base64,' + codec.to_base64(img)
        assert codec.from_base64(url) == img

    def test_malformed(self):
        with pytest.raises(InvalidArgument):
            codec.from_base64('not base64!!')


class TestErrors:
    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(InvalidArgument):
            codec.open_image(str(tmp_path / 'nope.png'))

    def test_garbage_bytes(self):
        with pytest.raises(InvalidArgument):
            codec.from_encoded(b'definitely not an image')

    def test_pil_round_trip(self):
        img = _sample()
        assert codec.from_pil(codec.to_pil(img)) == img
