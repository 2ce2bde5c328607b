"""Tests for photon_kit.core.image: construction, accessors and bounds."""

import numpy as np
import pytest
from photon_kit.core.errors import InvalidArgument, OutOfBounds
from photon_kit.core.image import PhotonImage
from photon_kit.core.types import Rgba


class TestConstruction:
    def test_new_from_bytes(self):
        img = PhotonImage.new(2, 1, bytes([10, 20, 30, 255, 200, 100, 50, 128]))
        assert img.size == (2, 1)
        assert img.get_pixel(1, 0) == Rgba(200, 100, 50, 128)

    def test_new_accepts_bytearray(self):
        img = PhotonImage.new(1, 1, bytearray([1, 2, 3, 4]))
        assert img.to_bytes() == bytes([1, 2, 3, 4])

    def test_wrong_byte_count(self):
        with pytest.raises(InvalidArgument):
            PhotonImage.new(2, 2, bytes(15))

    def test_zero_dimension(self):
        with pytest.raises(InvalidArgument):
            PhotonImage.new(0, 1, b'')
        with pytest.raises(InvalidArgument):
            PhotonImage.blank(3, 0)

    def test_non_integer_dimension(self):
        with pytest.raises(InvalidArgument):
            PhotonImage.blank(2.5, 2)  # type: ignore[arg-type]

    def test_blank_is_opaque_black(self):
        img = PhotonImage.blank(3, 2)
        assert img.to_bytes() == bytes([0, 0, 0, 255] * 6)

    def test_filled(self):
        img = PhotonImage.filled(2, 2, Rgba(1, 2, 3, 4))
        assert img.to_bytes() == bytes([1, 2, 3, 4] * 4)

    def test_array_shape_checked(self):
        with pytest.raises(InvalidArgument):
            PhotonImage(2, 2, np.zeros((2, 2, 3), dtype=np.uint8))

    def test_array_dtype_checked(self):
        with pytest.raises(InvalidArgument):
            PhotonImage(1, 1, np.zeros((1, 1, 4), dtype=np.int32))

    def test_new_rejects_non_uint8_array(self):
        with pytest.raises(InvalidArgument):
            PhotonImage.new(1, 1, np.array([300.7, 0, 0, 255]))

    def test_new_accepts_uint8_array(self):
        img = PhotonImage.new(1, 1, np.array([9, 8, 7, 6], dtype=np.uint8))
        assert img.to_bytes() == bytes([9, 8, 7, 6])

    def test_error_is_value_error(self):
        """InvalidArgument is also a ValueError for callers that catch the builtin."""
        with pytest.raises(ValueError):
            PhotonImage.new(1, 1, b'')


class TestAccessors:
    def test_bytes_length(self):
        img = PhotonImage.blank(5, 3)
        assert len(img.bytes()) == 4 * 5 * 3

    def test_bytes_is_read_only(self):
        img = PhotonImage.blank(1, 1)
        view = img.bytes()
        assert view.readonly
        with pytest.raises(TypeError):
            view[0] = 1

    def test_pixels_is_read_only(self):
        img = PhotonImage.blank(2, 2)
        with pytest.raises(ValueError):
            img.pixels[0, 0, 0] = 9

    def test_row_major_layout(self):
        img = PhotonImage.blank(3, 2)
        img.set_pixel(2, 1, Rgba(9, 8, 7, 6))
        offset = 4 * (1 * 3 + 2)
        assert img.to_bytes()[offset : offset + 4] == bytes([9, 8, 7, 6])

    def test_copy_is_independent(self):
        img = PhotonImage.blank(2, 2)
        dup = img.copy()
        dup.set_pixel(0, 0, Rgba(255, 255, 255))
        assert img.get_pixel(0, 0) == Rgba(0, 0, 0)
        assert img != dup

    def test_equality(self):
        assert PhotonImage.blank(2, 2) == PhotonImage.blank(2, 2)
        assert PhotonImage.blank(2, 2) != PhotonImage.blank(2, 1)


class TestBounds:
    @pytest.mark.parametrize('x,y', [(-1, 0), (0, -1), (3, 0), (0, 2)])
    def test_get_out_of_bounds(self, x: int, y: int) -> None:
        img = PhotonImage.blank(3, 2)
        with pytest.raises(OutOfBounds):
            img.get_pixel(x, y)

    def test_set_out_of_bounds_leaves_image(self):
        img = PhotonImage.blank(3, 2)
        before = img.to_bytes()
        with pytest.raises(OutOfBounds):
            img.set_pixel(3, 2, Rgba(1, 1, 1))
        assert img.to_bytes() == before

    def test_out_of_bounds_is_index_error(self):
        with pytest.raises(IndexError):
            PhotonImage.blank(1, 1).get_pixel(1, 1)
