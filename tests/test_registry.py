"""Tests for effect discovery, parameter binding and the effect catalogue."""

import pytest
from photon_kit.core.errors import InvalidArgument
from photon_kit.core.image import PhotonImage
from photon_kit.core.types import BlendMode, Channel, ColourSpace, Effect, Param, Rgb, Rgba
from photon_kit.effects.convolutions import parse_kernel
from photon_kit.effects.presets import PRESETS
from photon_kit.registry import all_effects, discover, get

EXPECTED = [
    'alpha_composite',
    'blend',
    'box_blur',
    'convolve',
    'crop',
    'darken',
    'desaturate',
    'draw_text',
    'duotone',
    'edge_detection',
    'emboss',
    'filter',
    'fliph',
    'flipv',
    'gaussian_blur',
    'grayscale',
    'grayscale_human_corrected',
    'hue_rotate',
    'invert',
    'lighten',
    'mix_with_colour',
    'monochrome',
    'oceanic',
    'posterize',
    'remove_red_channel',
    'replace_background',
    'resize',
    'saturate',
    'saturate_lch',
    'sepia',
    'sharpen',
    'sobel_global',
    'solarize',
    'swap_channels',
    'threshold',
    'watermark',
]


def _image() -> PhotonImage:
    return PhotonImage.new(2, 2, bytes([10, 20, 30, 255, 40, 50, 60, 255, 70, 80, 90, 128, 100, 110, 120, 0]))


class TestDiscovery:
    def test_expected_effects_present(self):
        reg = discover()
        for name in EXPECTED:
            assert name in reg, name

    def test_names_match_keys(self):
        for name, effect in all_effects().items():
            assert effect.name == name

    def test_every_effect_has_run_function_and_help(self):
        for name, effect in all_effects().items():
            assert effect.module is not None, name
            assert effect.module.startswith('photon_kit.effects.'), name
            assert effect.help, name

    def test_get_unknown(self):
        with pytest.raises(KeyError):
            get('nonexistent')

    def test_presets_are_effects(self):
        reg = all_effects()
        for name in PRESETS:
            assert reg[name] is PRESETS[name]


class TestParam:
    @pytest.mark.parametrize(
        'kind,text,expected',
        [
            ('int', '42', 42),
            ('float', '0.25', 0.25),
            ('channel', 'blue', Channel.B),
            ('colour', '#ff8000', Rgb(255, 128, 0)),
            ('colour', '1,2,3', Rgb(1, 2, 3)),
            ('space', 'LCh', ColourSpace.LCH),
            ('mode', 'soft-light', BlendMode.SOFT_LIGHT),
        ],
    )
    def test_parse(self, kind: str, text: str, expected) -> None:
        assert Param('p', kind).parse(text) == expected

    @pytest.mark.parametrize(
        'kind,text',
        [('int', 'x'), ('channel', 'purple'), ('colour', '#12'), ('colour', '1,2'), ('mode', 'hue')],
    )
    def test_parse_errors(self, kind: str, text: str) -> None:
        with pytest.raises(InvalidArgument):
            Param('p', kind).parse(text)

    def test_image_kind_not_parsed_from_text(self):
        with pytest.raises(InvalidArgument):
            Param('overlay', 'image').parse('x.png')


class TestEffectBinding:
    def _effect(self) -> Effect:
        effect = Effect('demo', params=[Param('a', 'int'), Param('b', 'int', default=7)])
        effect.run(lambda image, a, b: None)
        return effect

    def test_defaults_filled(self):
        assert self._effect().bind(1) == [1, 7]

    def test_missing_required(self):
        with pytest.raises(InvalidArgument):
            self._effect().bind()

    def test_too_many(self):
        with pytest.raises(InvalidArgument):
            self._effect().bind(1, 2, 3)

    def test_without_run_function(self):
        with pytest.raises(RuntimeError):
            Effect('empty').apply(_image())


class TestCatalogue:
    def test_invert_in_place(self):
        img = _image()
        out = get('invert').apply(img)
        assert out is img
        assert img.get_pixel(0, 0) == Rgba(245, 235, 225, 255)

    def test_crop_returns_new_image(self):
        img = _image()
        out = get('crop').apply(img, 0, 0, 1, 2)
        assert out is not img
        assert out.size == (1, 2)

    def test_alter_red_channel(self):
        img = _image()
        get('alter_red_channel').apply(img, 250)
        assert img.get_pixel(0, 0) == Rgba(255, 20, 30, 255)

    def test_remove_blue_channel_default(self):
        img = _image()
        get('remove_blue_channel').apply(img)
        assert img.pixels[..., 2].max() == 0

    def test_dec_brightness_rejects_negative(self):
        img = _image()
        before = img.copy()
        with pytest.raises(InvalidArgument):
            get('dec_brightness').apply(img, -5)
        assert img == before

    def test_alter_two_channels_validates_both_first(self):
        img = _image()
        before = img.copy()
        with pytest.raises(InvalidArgument):
            get('alter_two_channels').apply(img, Channel.R, 10, Channel.G, 999)
        assert img == before

    def test_fixed_space_aliases(self):
        a, b = _image(), _image()
        get('saturate_lch').apply(a, 0.3)
        get('saturate').apply(b, 0.3, ColourSpace.LCH)
        assert a == b

    def test_filter_by_name(self):
        a, b = _image(), _image()
        get('filter').apply(a, 'vintage')
        get('vintage').apply(b)
        assert a == b

    def test_filter_unknown(self):
        with pytest.raises(InvalidArgument):
            get('filter').apply(_image(), 'nope')

    @pytest.mark.parametrize('name', sorted(PRESETS))
    def test_presets_keep_alpha(self, name: str) -> None:
        img = _image()
        PRESETS[name].apply(img)
        assert img.pixels[..., 3].tolist() == [[255, 255], [128, 0]]

    def test_custom_convolve(self):
        img = PhotonImage.filled(3, 3, Rgba(50, 50, 50))
        get('convolve').apply(img, '0,0,0;0,2,0;0,0,0', 1.0)
        assert img.get_pixel(1, 1) == Rgba(100, 100, 100)

    def test_watermark_effect(self):
        base = PhotonImage.blank(4, 4)
        get('watermark').apply(base, PhotonImage.filled(2, 2, Rgba(255, 255, 255)), 2, 2)
        assert base.get_pixel(3, 3) == Rgba(255, 255, 255)
        assert base.get_pixel(0, 0) == Rgba(0, 0, 0)


class TestParseKernel:
    def test_rows_and_columns(self):
        assert parse_kernel('1,2,3; 4,5,6 ;7,8,9') == [[1, 2, 3], [4, 5, 6], [7, 8, 9]]

    def test_malformed(self):
        with pytest.raises(InvalidArgument):
            parse_kernel('1,2;a,b')
