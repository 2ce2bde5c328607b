"""Compositing driver: alpha composition, blend modes, watermarks, background replacement.

The base image is modified in place; the overlay is only read.

Blend modes follow the W3C Compositing and Blending formulae on normalised
values. The blended colour is mixed with the overlay colour according to
the base alpha, then composed over the base with Porter-Duff source-over.
Source-over works on premultiplied values and returns straight alpha.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

import numpy as np

from photon_kit.core import colour
from photon_kit.core.errors import InvalidArgument, SizeMismatch
from photon_kit.core.image import PhotonImage
from photon_kit.core.types import BlendMode, Rgb

logger = logging.getLogger(__name__)

MAX_RGB_DISTANCE = 441.0


def _check_same_size(base: PhotonImage, overlay: PhotonImage) -> None:
    if base.size != overlay.size:
        raise SizeMismatch(
            f'Images differ in size: {base.width}x{base.height} vs {overlay.width}x{overlay.height}'
        )


def _source_over(base: np.ndarray, src_rgb: np.ndarray, src_alpha: np.ndarray) -> np.ndarray:
    """Compose float source (rgb, alpha) over a uint8 RGBA block; returns uint8 RGBA."""
    cb = colour.decode(base[..., :3])
    ab = colour.decode(base[..., 3])[..., np.newaxis]
    a_s = src_alpha[..., np.newaxis]

    out_a = a_s + ab * (1 - a_s)
    premultiplied = src_rgb * a_s + cb * ab * (1 - a_s)
    rgb = np.divide(premultiplied, out_a, out=np.zeros_like(premultiplied), where=out_a > 0)

    out = np.empty_like(base)
    out[..., :3] = colour.encode(rgb)
    out[..., 3] = colour.encode(out_a[..., 0])
    return out


def _hard_light(cb: np.ndarray, cs: np.ndarray) -> np.ndarray:
    return np.where(cs <= 0.5, cb * 2 * cs, _screen(cb, 2 * cs - 1))


def _screen(cb: np.ndarray, cs: np.ndarray) -> np.ndarray:
    return cb + cs - cb * cs


def _dodge(cb: np.ndarray, cs: np.ndarray) -> np.ndarray:
    room = 1 - cs
    ratio = np.divide(cb, room, out=np.ones_like(cb), where=room > 0)
    return np.where(cb == 0, 0.0, np.where(cs >= 1, 1.0, np.minimum(1.0, ratio)))


def _burn(cb: np.ndarray, cs: np.ndarray) -> np.ndarray:
    ratio = np.divide(1 - cb, cs, out=np.ones_like(cb), where=cs > 0)
    return np.where(cb >= 1, 1.0, np.where(cs <= 0, 0.0, 1 - np.minimum(1.0, ratio)))


def _soft_light(cb: np.ndarray, cs: np.ndarray) -> np.ndarray:
    d = np.where(cb <= 0.25, ((16 * cb - 12) * cb + 4) * cb, np.sqrt(cb))
    return np.where(cs <= 0.5, cb - (1 - 2 * cs) * cb * (1 - cb), cb + (2 * cs - 1) * (d - cb))


BLEND_FUNCTIONS: dict[BlendMode, Callable[[np.ndarray, np.ndarray], np.ndarray]] = {
    BlendMode.MULTIPLY: lambda cb, cs: cb * cs,
    BlendMode.SCREEN: _screen,
    BlendMode.OVERLAY: lambda cb, cs: _hard_light(cs, cb),
    BlendMode.DARKEN: np.minimum,
    BlendMode.LIGHTEN: np.maximum,
    BlendMode.DODGE: _dodge,
    BlendMode.BURN: _burn,
    BlendMode.DIFFERENCE: lambda cb, cs: np.abs(cb - cs),
    BlendMode.EXCLUSION: lambda cb, cs: cb + cs - 2 * cb * cs,
    BlendMode.SOFT_LIGHT: _soft_light,
}


def alpha_composite(base: PhotonImage, overlay: PhotonImage) -> PhotonImage:
    """Porter-Duff source-over: overlay on top of base."""
    _check_same_size(base, overlay)
    src = overlay.pixels
    out = _source_over(base.pixels, colour.decode(src[..., :3]), colour.decode(src[..., 3]))
    base._replace(out)
    return base


def blend(base: PhotonImage, overlay: PhotonImage, mode: BlendMode | str) -> PhotonImage:
    """Blend overlay onto base with the given mode.

    The identities screen(I, black) = I, multiply(I, white) = I and
    difference(I, I) = zero RGB hold when the base is opaque. A translucent
    base lets the overlay colour show through before source-over, so for
    I = (200, 100, 50, 128) difference(I, I) gives (133, 66, 33, 192).
    """
    if isinstance(mode, str):
        mode = BlendMode.parse(mode)
    if not isinstance(mode, BlendMode):
        raise InvalidArgument(f'Not a blend mode: {mode!r}')
    _check_same_size(base, overlay)

    dst = base.pixels
    src = overlay.pixels
    cb = colour.decode(dst[..., :3])
    cs = colour.decode(src[..., :3])
    ab = colour.decode(dst[..., 3])[..., np.newaxis]

    blended = BLEND_FUNCTIONS[mode](cb, cs)
    mixed = (1 - ab) * cs + ab * blended
    logger.debug('blend %s %dx%d', mode.value, base.width, base.height)
    base._replace(_source_over(dst, mixed, colour.decode(src[..., 3])))
    return base


def watermark(base: PhotonImage, overlay: PhotonImage, ox: int, oy: int) -> PhotonImage:
    """Compose overlay over base with its top-left corner at (ox, oy), clipped to base.

    Negative offsets, or offsets that put the overlay wholly outside the base,
    leave base unchanged.
    """
    for name, value in (('ox', ox), ('oy', oy)):
        if isinstance(value, bool) or not isinstance(value, int | np.integer):
            raise InvalidArgument(f'{name} must be an integer, got {value!r}')
    if ox < 0 or oy < 0 or ox >= base.width or oy >= base.height:
        logger.debug('watermark at (%d, %d) outside %dx%d, skipped', ox, oy, base.width, base.height)
        return base
    w = min(overlay.width, base.width - ox)
    h = min(overlay.height, base.height - oy)

    out = base.pixels.copy()
    region = out[oy : oy + h, ox : ox + w]
    src = overlay.pixels[:h, :w]
    out[oy : oy + h, ox : ox + w] = _source_over(region, colour.decode(src[..., :3]), colour.decode(src[..., 3]))
    base._replace(out)
    return base


def replace_background(
    base: PhotonImage,
    src_colour: Rgb,
    replacement: Rgb | PhotonImage,
    tolerance: float,
) -> PhotonImage:
    """Replace pixels within `tolerance` (Euclidean RGB8 distance) of src_colour.

    An Rgb replacement keeps each pixel's alpha; a PhotonImage replacement
    (same size as base) supplies the whole RGBA pixel at the same position.
    """
    if isinstance(tolerance, bool) or not isinstance(tolerance, int | float) or not 0 <= tolerance <= MAX_RGB_DISTANCE:
        raise InvalidArgument(f'tolerance must be in [0, {MAX_RGB_DISTANCE:g}], got {tolerance!r}')
    if isinstance(replacement, PhotonImage):
        _check_same_size(base, replacement)
    elif not isinstance(replacement, Rgb):
        raise InvalidArgument(f'replacement must be an Rgb or a PhotonImage, got {type(replacement).__name__}')

    out = base.pixels.copy()
    diff = out[..., :3].astype(np.int32) - np.array(src_colour.as_tuple(), dtype=np.int32)
    match = np.sqrt((diff * diff).sum(axis=-1)) <= tolerance

    if isinstance(replacement, Rgb):
        out[match, :3] = replacement.as_tuple()
    else:
        out[match] = replacement.pixels[match]
    logger.debug('replace_background matched %d of %d pixels', int(match.sum()), match.size)
    base._replace(out)
    return base
