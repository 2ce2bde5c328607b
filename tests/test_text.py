"""Tests for photon_kit.text: glyph rasterising and text overlays."""

import pytest
from photon_kit import text
from photon_kit.core.errors import InvalidArgument
from photon_kit.core.image import PhotonImage
from photon_kit.core.types import Rgb


class TestRasterise:
    def test_mask_has_ink_and_transparency(self):
        mask = text.rasterise('Hi', size=20, fill=Rgb(255, 0, 0))
        alpha = mask.pixels[..., 3]
        assert mask.width > 0 and mask.height > 0
        assert alpha.max() == 255
        assert alpha.min() == 0

    def test_ink_uses_fill_colour(self):
        mask = text.rasterise('I', size=30, fill=Rgb(0, 0, 255))
        solid = mask.pixels[mask.pixels[..., 3] == 255]
        assert (solid[:, 2] == 255).all()
        assert (solid[:, 0] == 0).all()

    def test_border_grows_mask(self):
        plain = text.rasterise('A', size=24)
        bordered = text.rasterise('A', size=24, border=Rgb(0, 0, 0), border_width=3)
        assert bordered.width > plain.width
        assert bordered.height > plain.height

    def test_empty_text(self):
        with pytest.raises(InvalidArgument):
            text.rasterise('')

    def test_bad_size(self):
        with pytest.raises(InvalidArgument):
            text.rasterise('x', size=0)

    def test_missing_font(self, tmp_path) -> None:
        with pytest.raises(InvalidArgument):
            text.rasterise('x', font_path=str(tmp_path / 'missing.ttf'))


class TestDrawText:
    def test_draws_onto_image(self):
        img = PhotonImage.blank(60, 40)
        text.draw_text(img, 'Hi', 5, 5, size=20)
        assert img.pixels[..., :3].max() == 255
        assert (img.pixels[..., 3] == 255).all()

    def test_outside_image_is_noop(self):
        img = PhotonImage.blank(20, 20)
        before = img.copy()
        text.draw_text(img, 'Hi', 50, 50)
        assert img == before
