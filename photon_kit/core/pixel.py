"""Per-pixel transform driver.

A PixelOp wraps a pure, vectorised function from a block of scanlines
(rows, width, 4) uint8 to a block of the same shape (or (rows, width, 3)
when it only produces colour). map_pixels() applies it over the whole
image, keeps alpha and any channel outside the mask verbatim, and swaps the
result in only after every band has been computed.

Ops must not depend on where a block starts: the driver is free to split
scanlines across workers and the result must not change.

Example:
    from photon_kit import ops
    from photon_kit.core.pixel import map_pixels
    map_pixels(image, ops.invert())
    map_pixels(image, ops.channel_add(Channel.R, 40), channels=[Channel.R])
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

import numpy as np

from photon_kit.core.env import Settings
from photon_kit.core.errors import InvalidArgument
from photon_kit.core.image import PhotonImage
from photon_kit.core.parallel import run_bands
from photon_kit.core.types import RGB_CHANNELS, Channel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PixelOp:
    """A named point operation."""

    name: str
    fn: Callable[[np.ndarray], np.ndarray]
    targets_alpha: bool = False


def saturate_u8(values: np.ndarray) -> np.ndarray:
    """Clip wide integer or float values into [0, 255] and cast to uint8."""
    arr = np.asarray(values)
    if arr.dtype.kind == 'f':
        arr = np.rint(arr)
    return np.clip(arr, 0, 255).astype(np.uint8)


def _mask(channels: Iterable[Channel] | None, op: PixelOp) -> list[int]:
    if channels is None:
        selected = set(RGB_CHANNELS)
        if op.targets_alpha:
            selected.add(Channel.A)
    else:
        selected = set()
        for c in channels:
            if not isinstance(c, Channel):
                raise InvalidArgument(f'Not a channel: {c!r}')
            selected.add(c)
        if not selected:
            raise InvalidArgument('Channel mask must select at least one channel')
    return sorted(int(c) for c in selected)


def map_pixels(
    image: PhotonImage,
    op: PixelOp,
    channels: Iterable[Channel] | None = None,
    settings: Settings | None = None,
) -> PhotonImage:
    """Apply op to every pixel of image in place and return image.

    `channels` restricts which channels take the op's output; the default is
    R, G, B (plus A when the op targets alpha).
    """
    mask = _mask(channels, op)
    src = image.pixels
    out = np.empty_like(src)

    def work(lo: int, hi: int) -> None:
        block = src[lo:hi]
        result = np.asarray(op.fn(block))
        if result.shape[:2] != block.shape[:2] or result.shape[-1] not in (3, 4):
            raise RuntimeError(f'{op.name} returned shape {result.shape} for block {block.shape}')
        if result.dtype != np.uint8:
            raise RuntimeError(f'{op.name} returned {result.dtype}, expected uint8')
        out[lo:hi] = block
        selected = [c for c in mask if c < result.shape[-1]]
        out[lo:hi, :, selected] = result[..., selected]

    logger.debug('map %s over %dx%d channels=%s', op.name, image.width, image.height, mask)
    run_bands(image.height, work, settings)
    image._replace(out)
    return image
