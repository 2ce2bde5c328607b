"""Point operations for the per-pixel driver.

Each factory validates its parameters up front (raising InvalidArgument
before any pixel is touched) and returns a PixelOp for map_pixels().
All integer channel arithmetic saturates into [0, 255].

    map_pixels(image, ops.hue_rotate(90))
    map_pixels(image, ops.saturate(0.2, ColourSpace.LCH))
    map_pixels(image, ops.threshold(128))
"""

from collections.abc import Callable

import numpy as np

from photon_kit.core import colour
from photon_kit.core.errors import InvalidArgument
from photon_kit.core.pixel import PixelOp, saturate_u8
from photon_kit.core.types import Channel, ColourSpace, Rgb, Rgba

SEPIA = np.array(
    [
        [0.393, 0.769, 0.189],
        [0.349, 0.686, 0.168],
        [0.272, 0.534, 0.131],
    ]
)


def _check_range(name: str, value: float, lo: float, hi: float) -> None:
    if isinstance(value, bool) or not isinstance(value, int | float | np.number):
        raise InvalidArgument(f'{name} must be a number, got {value!r}')
    if not lo <= value <= hi:
        raise InvalidArgument(f'{name} must be in [{lo}, {hi}], got {value}')


def _check_channel(c: Channel, allow_alpha: bool = True) -> Channel:
    if not isinstance(c, Channel):
        raise InvalidArgument(f'Not a channel: {c!r}')
    if c is Channel.A and not allow_alpha:
        raise InvalidArgument('This operation is defined on R, G and B only')
    return c


def _space(space: ColourSpace | str) -> ColourSpace:
    if isinstance(space, ColourSpace):
        return space
    if isinstance(space, str):
        return ColourSpace.parse(space)
    raise InvalidArgument(f'Not a colour space: {space!r}')


def _rgb(block: np.ndarray) -> np.ndarray:
    return block[..., :3]


def _grey(values: np.ndarray) -> np.ndarray:
    """Broadcast a (rows, width) uint8 plane to three identical channels."""
    return np.repeat(values[..., np.newaxis], 3, axis=-1)


def _in_space(space: ColourSpace, adjust: Callable[[np.ndarray], None]) -> Callable[[np.ndarray], np.ndarray]:
    def fn(block: np.ndarray) -> np.ndarray:
        values = colour.to_space(colour.decode(_rgb(block)), space)
        adjust(values)
        return colour.encode(colour.from_space(values, space))

    return fn


# -- colour-space adjustments ------------------------------------------------


def hue_rotate(degrees: float) -> PixelOp:
    """Rotate hue in HSL by `degrees`, modulo 360."""
    _check_range('degrees', degrees, -1e9, 1e9)

    def adjust(hsl: np.ndarray) -> None:
        hsl[..., 0] = (hsl[..., 0] + degrees) % 360.0

    return PixelOp(f'hue_rotate({degrees})', _in_space(ColourSpace.HSL, adjust))


def saturate(delta: float, space: ColourSpace = ColourSpace.HSL) -> PixelOp:
    """Add delta (in [-1, 1] of the full saturation range) to S (HSL/HSV) or C* (LCh)."""
    _check_range('delta', delta, -1.0, 1.0)
    space = _space(space)

    def adjust(values: np.ndarray) -> None:
        if space is ColourSpace.LCH:
            values[..., 1] = np.clip(values[..., 1] + delta * colour.MAX_LCH_CHROMA, 0.0, colour.MAX_LCH_CHROMA)
        else:
            values[..., 1] = np.clip(values[..., 1] + delta, 0.0, 1.0)

    return PixelOp(f'saturate({delta}, {space.value})', _in_space(space, adjust))


def _shift_lightness(delta: float, space: ColourSpace) -> Callable[[np.ndarray], np.ndarray]:
    def adjust(values: np.ndarray) -> None:
        if space is ColourSpace.LCH:
            values[..., 0] = np.clip(values[..., 0] + delta * 100.0, 0.0, 100.0)
        else:
            values[..., 2] = np.clip(values[..., 2] + delta, 0.0, 1.0)

    return _in_space(space, adjust)


def lighten(delta: float, space: ColourSpace = ColourSpace.HSL) -> PixelOp:
    """Raise L (HSL), V (HSV) or L* (LCh) by delta in [0, 1] of its range."""
    _check_range('delta', delta, 0.0, 1.0)
    space = _space(space)
    return PixelOp(f'lighten({delta}, {space.value})', _shift_lightness(delta, space))


def darken(delta: float, space: ColourSpace = ColourSpace.HSL) -> PixelOp:
    """Lower L (HSL), V (HSV) or L* (LCh) by delta in [0, 1] of its range."""
    _check_range('delta', delta, 0.0, 1.0)
    space = _space(space)
    return PixelOp(f'darken({delta}, {space.value})', _shift_lightness(-delta, space))


# -- monochrome --------------------------------------------------------------


def threshold(t: int) -> PixelOp:
    """Black or white by Rec.709 luma: luma >= t gives white."""
    _check_range('threshold', t, 0, 255)

    def fn(block: np.ndarray) -> np.ndarray:
        y = colour.encode(colour.luma(colour.decode(_rgb(block))))
        return _grey(np.where(y >= t, 255, 0).astype(np.uint8))

    return PixelOp(f'threshold({t})', fn)


def average_grey() -> PixelOp:
    def fn(block: np.ndarray) -> np.ndarray:
        total = _rgb(block).astype(np.int32).sum(axis=-1)
        return _grey(saturate_u8(np.rint(total / 3)))

    return PixelOp('average_grey', fn)


def luminance_grey() -> PixelOp:
    """Greyscale by Rec.709 luma, computed on linear light."""

    def fn(block: np.ndarray) -> np.ndarray:
        return _grey(colour.encode(colour.luma(colour.decode(_rgb(block)))))

    return PixelOp('luminance_grey', fn)


def desaturate() -> PixelOp:
    """Greyscale through HSL with S = 0."""

    def adjust(hsl: np.ndarray) -> None:
        hsl[..., 1] = 0.0

    return PixelOp('desaturate', _in_space(ColourSpace.HSL, adjust))


def sepia() -> PixelOp:
    def fn(block: np.ndarray) -> np.ndarray:
        return saturate_u8(_rgb(block).astype(np.float64) @ SEPIA.T)

    return PixelOp('sepia', fn)


def grey_shades(shades: int) -> PixelOp:
    """Average greyscale quantised to `shades` evenly spaced levels."""
    _check_range('shades', shades, 2, 256)
    step = 255 / (shades - 1)

    def fn(block: np.ndarray) -> np.ndarray:
        grey = _rgb(block).astype(np.int32).sum(axis=-1) / 3
        return _grey(saturate_u8(np.rint(np.rint(grey / step) * step)))

    return PixelOp(f'grey_shades({shades})', fn)


def single_channel_grey(channel: Channel) -> PixelOp:
    """Greyscale using the values of one channel."""
    _check_channel(channel, allow_alpha=False)

    def fn(block: np.ndarray) -> np.ndarray:
        return _grey(block[..., int(channel)])

    return PixelOp(f'single_channel_grey({channel.name})', fn)


def decompose(maximum: bool = True) -> PixelOp:
    """Greyscale using the largest (or smallest) of R, G, B."""

    def fn(block: np.ndarray) -> np.ndarray:
        rgb = _rgb(block)
        return _grey(rgb.max(axis=-1) if maximum else rgb.min(axis=-1))

    return PixelOp('decompose_max' if maximum else 'decompose_min', fn)


def monochrome(r_offset: int, g_offset: int, b_offset: int) -> PixelOp:
    """Average greyscale tinted by per-channel offsets."""
    for name, value in (('r_offset', r_offset), ('g_offset', g_offset), ('b_offset', b_offset)):
        _check_range(name, value, -255, 255)
    offsets = np.array([r_offset, g_offset, b_offset], dtype=np.int32)

    def fn(block: np.ndarray) -> np.ndarray:
        grey = np.rint(_rgb(block).astype(np.int32).sum(axis=-1) / 3).astype(np.int32)
        return saturate_u8(grey[..., np.newaxis] + offsets)

    return PixelOp(f'monochrome({r_offset}, {g_offset}, {b_offset})', fn)


def duotone(primary: Rgb, secondary: Rgb) -> PixelOp:
    """Map luma onto a gradient from primary (shadows) to secondary (highlights)."""
    lo = np.array(primary.as_tuple(), dtype=np.float64)
    hi = np.array(secondary.as_tuple(), dtype=np.float64)

    def fn(block: np.ndarray) -> np.ndarray:
        t = np.clip(colour.luma(colour.decode(_rgb(block))), 0.0, 1.0)[..., np.newaxis]
        return saturate_u8(lo + (hi - lo) * t)

    return PixelOp(f'duotone({primary.to_hex()}, {secondary.to_hex()})', fn)


# -- channel arithmetic ------------------------------------------------------


def invert() -> PixelOp:
    def fn(block: np.ndarray) -> np.ndarray:
        return 255 - _rgb(block)

    return PixelOp('invert', fn)


def channel_add(channel: Channel, delta: int) -> PixelOp:
    """Saturating add of delta (may be negative) to one channel."""
    _check_channel(channel)
    _check_range('delta', delta, -255, 255)
    idx = int(channel)

    def fn(block: np.ndarray) -> np.ndarray:
        out = block.astype(np.int16)
        out[..., idx] += int(delta)
        return saturate_u8(out)

    return PixelOp(f'channel_add({channel.name}, {delta})', fn, targets_alpha=channel is Channel.A)


def channel_subtract(channel: Channel, delta: int) -> PixelOp:
    """Saturating subtraction of delta in [0, 255] from one channel."""
    _check_range('delta', delta, 0, 255)
    return channel_add(channel, -delta)


def channel_remove(channel: Channel, min_filter: int | None = None) -> PixelOp:
    """Zero one colour channel.

    With min_filter, only values strictly below it are zeroed.
    """
    _check_channel(channel, allow_alpha=False)
    if min_filter is not None:
        _check_range('min_filter', min_filter, 0, 255)
    idx = int(channel)

    def fn(block: np.ndarray) -> np.ndarray:
        out = _rgb(block).copy()
        if min_filter is None:
            out[..., idx] = 0
        else:
            plane = out[..., idx]
            plane[plane < min_filter] = 0
        return out

    return PixelOp(f'channel_remove({channel.name})', fn)


def channel_swap(first: Channel, second: Channel) -> PixelOp:
    _check_channel(first)
    _check_channel(second)
    order = list(range(4))
    order[int(first)], order[int(second)] = order[int(second)], order[int(first)]

    def fn(block: np.ndarray) -> np.ndarray:
        return block[..., order]

    touches_alpha = Channel.A in (first, second)
    return PixelOp(f'channel_swap({first.name}, {second.name})', fn, targets_alpha=touches_alpha)


def brightness(delta: int) -> PixelOp:
    """Saturating add of delta (may be negative) to R, G and B."""
    _check_range('delta', delta, -255, 255)

    def fn(block: np.ndarray) -> np.ndarray:
        return saturate_u8(_rgb(block).astype(np.int16) + int(delta))

    return PixelOp(f'brightness({delta})', fn)


def gamma(red: float, green: float, blue: float) -> PixelOp:
    """Per-channel gamma correction: out = 255 * (in / 255) ** (1 / gamma)."""
    for name, value in (('red', red), ('green', green), ('blue', blue)):
        _check_range(name, value, 1e-3, 100.0)
    exponents = 1.0 / np.array([red, green, blue], dtype=np.float64)

    def fn(block: np.ndarray) -> np.ndarray:
        return saturate_u8(255.0 * np.power(colour.decode(_rgb(block)), exponents))

    return PixelOp(f'gamma({red}, {green}, {blue})', fn)


def solarize(threshold: int = 128) -> PixelOp:
    """Invert every channel value at or above threshold."""
    _check_range('threshold', threshold, 0, 255)

    def fn(block: np.ndarray) -> np.ndarray:
        rgb = _rgb(block)
        return np.where(rgb >= threshold, 255 - rgb, rgb).astype(np.uint8)

    return PixelOp(f'solarize({threshold})', fn)


def posterize(levels: int) -> PixelOp:
    """Quantise each channel to `levels` evenly spaced values."""
    _check_range('levels', levels, 2, 256)
    step = 255 / (levels - 1)

    def fn(block: np.ndarray) -> np.ndarray:
        return saturate_u8(np.rint(np.rint(_rgb(block) / step) * step))

    return PixelOp(f'posterize({levels})', fn)


def mix_with_colour(tint: Rgb, opacity: float) -> PixelOp:
    """Linear mix of every pixel towards tint by opacity in [0, 1]."""
    _check_range('opacity', opacity, 0.0, 1.0)
    target = np.array(tint.as_tuple(), dtype=np.float64)

    def fn(block: np.ndarray) -> np.ndarray:
        return saturate_u8(_rgb(block) * (1.0 - opacity) + target * opacity)

    return PixelOp(f'mix_with_colour({tint.to_hex()}, {opacity})', fn)


def pointwise(fn: Callable[[Rgba], Rgba], name: str = 'pointwise', targets_alpha: bool = False) -> PixelOp:
    """Lift a plain Rgba -> Rgba function into a PixelOp.

    The function is evaluated once per distinct colour in each block.
    """

    def apply(block: np.ndarray) -> np.ndarray:
        flat = block.reshape(-1, 4)
        unique, inverse = np.unique(flat, axis=0, return_inverse=True)
        mapped = np.array(
            [fn(Rgba(*(int(v) for v in px))).as_tuple() for px in unique],
            dtype=np.uint8,
        )
        return mapped[inverse.reshape(-1)].reshape(block.shape)

    return PixelOp(name, apply, targets_alpha=targets_alpha)


__all__ = [
    'average_grey',
    'brightness',
    'channel_add',
    'channel_remove',
    'channel_subtract',
    'channel_swap',
    'darken',
    'decompose',
    'desaturate',
    'duotone',
    'gamma',
    'grey_shades',
    'hue_rotate',
    'invert',
    'lighten',
    'luminance_grey',
    'mix_with_colour',
    'monochrome',
    'pointwise',
    'posterize',
    'saturate',
    'sepia',
    'single_channel_grey',
    'solarize',
    'threshold',
]
