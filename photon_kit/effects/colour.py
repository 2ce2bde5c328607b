"""Colour-space adjustments: hue rotation, saturation, lightness and tints.

Adjustments take a colour space argument (hsl, hsv or lch). The
space-suffixed names (saturate_lch, darken_hsv, ...) are fixed-space
aliases of the same operations.

Example:
    photon-kit hue_rotate in.png out.png 120
    photon-kit saturate in.png out.png 0.2 lch
    photon-kit lighten_hsv in.png out.png 0.1
"""

from collections.abc import Callable

from photon_kit import ops
from photon_kit.core.errors import InvalidArgument
from photon_kit.core.image import PhotonImage
from photon_kit.core.pixel import PixelOp, map_pixels
from photon_kit.core.types import ColourSpace, Effect, Param, Rgb

hue_rotate = Effect(
    name='hue_rotate',
    help='Rotate hue (HSL) by degrees.',
    params=[Param('degrees', 'float')],
)


@hue_rotate.run
def _hue_rotate(image: PhotonImage, degrees: float) -> None:
    map_pixels(image, ops.hue_rotate(degrees))


saturate = Effect(
    name='saturate',
    help='Change saturation by amount in [-1, 1] in the given colour space.',
    params=[Param('amount', 'float'), Param('space', 'space', default=ColourSpace.HSL)],
)


@saturate.run
def _saturate(image: PhotonImage, amount: float, space: ColourSpace) -> None:
    map_pixels(image, ops.saturate(amount, space))


desaturate_by = Effect(
    name='desaturate_by',
    help='Reduce saturation by amount in [0, 1] in the given colour space.',
    params=[Param('amount', 'float'), Param('space', 'space', default=ColourSpace.HSL)],
)


@desaturate_by.run
def _desaturate_by(image: PhotonImage, amount: float, space: ColourSpace) -> None:
    if amount < 0:
        raise InvalidArgument(f'amount must be >= 0, got {amount}')
    map_pixels(image, ops.saturate(-amount, space))


lighten = Effect(
    name='lighten',
    help='Raise lightness by amount in [0, 1] in the given colour space.',
    params=[Param('amount', 'float'), Param('space', 'space', default=ColourSpace.HSL)],
)


@lighten.run
def _lighten(image: PhotonImage, amount: float, space: ColourSpace) -> None:
    map_pixels(image, ops.lighten(amount, space))


darken = Effect(
    name='darken',
    help='Lower lightness by amount in [0, 1] in the given colour space.',
    params=[Param('amount', 'float'), Param('space', 'space', default=ColourSpace.HSL)],
)


@darken.run
def _darken(image: PhotonImage, amount: float, space: ColourSpace) -> None:
    map_pixels(image, ops.darken(amount, space))


def _fixed_space(name: str, factory: Callable[[float, ColourSpace], PixelOp], space: ColourSpace) -> Effect:
    effect = Effect(
        name=f'{name}_{space.value}',
        help=f'{name.capitalize()} by amount in {space.value.upper()}.',
        params=[Param('amount', 'float')],
    )
    effect.run(lambda image, amount: map_pixels(image, factory(amount, space)))
    return effect


saturate_hsl = _fixed_space('saturate', ops.saturate, ColourSpace.HSL)
saturate_hsv = _fixed_space('saturate', ops.saturate, ColourSpace.HSV)
saturate_lch = _fixed_space('saturate', ops.saturate, ColourSpace.LCH)
lighten_hsl = _fixed_space('lighten', ops.lighten, ColourSpace.HSL)
lighten_hsv = _fixed_space('lighten', ops.lighten, ColourSpace.HSV)
lighten_lch = _fixed_space('lighten', ops.lighten, ColourSpace.LCH)
darken_hsl = _fixed_space('darken', ops.darken, ColourSpace.HSL)
darken_hsv = _fixed_space('darken', ops.darken, ColourSpace.HSV)
darken_lch = _fixed_space('darken', ops.darken, ColourSpace.LCH)


mix_with_colour = Effect(
    name='mix_with_colour',
    help='Mix every pixel towards a colour by opacity in [0, 1].',
    params=[Param('colour', 'colour'), Param('opacity', 'float')],
)


@mix_with_colour.run
def _mix(image: PhotonImage, colour: Rgb, opacity: float) -> None:
    map_pixels(image, ops.mix_with_colour(colour, opacity))
