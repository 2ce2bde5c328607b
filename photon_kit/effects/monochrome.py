"""Monochrome effects: greyscale variants, threshold, sepia, duotone,
solarize and posterize.

Luma-based effects (grayscale_human_corrected, threshold, duotone) use
Rec.709 weights on linear light, re-companded to sRGB.

Example:
    photon-kit threshold in.png out.png 128
    photon-kit duotone in.png out.png '#1d1145' '#f2c14e'
"""

from photon_kit import ops
from photon_kit.core.image import PhotonImage
from photon_kit.core.pixel import PixelOp, map_pixels
from photon_kit.core.types import Channel, Effect, Param, Rgb


def _simple(name: str, help: str, op: PixelOp) -> Effect:
    effect = Effect(name=name, help=help)
    effect.run(lambda image: map_pixels(image, op))
    return effect


grayscale = _simple('grayscale', 'Average of R, G and B.', ops.average_grey())
grayscale_human_corrected = _simple('grayscale_human_corrected', 'Rec.709 luma greyscale.', ops.luminance_grey())
desaturate = _simple('desaturate', 'Greyscale through HSL with zero saturation.', ops.desaturate())
sepia = _simple('sepia', 'Sepia tone.', ops.sepia())
decompose_max = _simple('decompose_max', 'Greyscale from the largest of R, G, B.', ops.decompose(maximum=True))
decompose_min = _simple('decompose_min', 'Greyscale from the smallest of R, G, B.', ops.decompose(maximum=False))
r_grayscale = _simple('r_grayscale', 'Greyscale from the red channel.', ops.single_channel_grey(Channel.R))
g_grayscale = _simple('g_grayscale', 'Greyscale from the green channel.', ops.single_channel_grey(Channel.G))
b_grayscale = _simple('b_grayscale', 'Greyscale from the blue channel.', ops.single_channel_grey(Channel.B))


single_channel_grayscale = Effect(
    name='single_channel_grayscale',
    help='Greyscale from one channel.',
    params=[Param('channel', 'channel')],
)


@single_channel_grayscale.run
def _single_channel(image: PhotonImage, channel: Channel) -> None:
    map_pixels(image, ops.single_channel_grey(channel))


grayscale_shades = Effect(
    name='grayscale_shades',
    help='Average greyscale limited to a number of shades.',
    params=[Param('shades', 'int')],
)


@grayscale_shades.run
def _shades(image: PhotonImage, shades: int) -> None:
    map_pixels(image, ops.grey_shades(shades))


threshold = Effect(
    name='threshold',
    help='Black or white by luma against a threshold in [0, 255].',
    params=[Param('threshold', 'int')],
)


@threshold.run
def _threshold(image: PhotonImage, t: int) -> None:
    map_pixels(image, ops.threshold(t))


monochrome = Effect(
    name='monochrome',
    help='Average greyscale tinted by per-channel offsets.',
    params=[Param('r_offset', 'int'), Param('g_offset', 'int'), Param('b_offset', 'int')],
)


@monochrome.run
def _monochrome(image: PhotonImage, r_offset: int, g_offset: int, b_offset: int) -> None:
    map_pixels(image, ops.monochrome(r_offset, g_offset, b_offset))


duotone = Effect(
    name='duotone',
    help='Map luma onto a gradient between two colours.',
    params=[Param('primary', 'colour'), Param('secondary', 'colour')],
)


@duotone.run
def _duotone(image: PhotonImage, primary: Rgb, secondary: Rgb) -> None:
    map_pixels(image, ops.duotone(primary, secondary))


solarize = Effect(
    name='solarize',
    help='Invert channel values at or above a threshold.',
    params=[Param('threshold', 'int', default=128)],
)


@solarize.run
def _solarize(image: PhotonImage, t: int) -> None:
    map_pixels(image, ops.solarize(t))


posterize = Effect(
    name='posterize',
    help='Quantise each channel to a number of levels.',
    params=[Param('levels', 'int')],
)


@posterize.run
def _posterize(image: PhotonImage, levels: int) -> None:
    map_pixels(image, ops.posterize(levels))
