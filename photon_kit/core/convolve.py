"""Neighbourhood / convolution driver.

    out_c(x, y) = clamp(bias + (1 / gain) * sum K[j, i] * in_c(x + i - r, y + j - r), 0, 255)

for c in R, G, B with r = k // 2; alpha is copied from the input. The only
edge policy is clamp-to-edge: out-of-range samples repeat the nearest
in-bounds pixel.

Every output band reads its own rows plus an r-row margin from the
untouched input and writes into a fresh buffer, which replaces the image's
buffer once all bands are done. A pixel never sees another pixel's output.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np

from photon_kit.core.env import Settings
from photon_kit.core.errors import InvalidArgument
from photon_kit.core.image import PhotonImage
from photon_kit.core.kernels import Kernel, sobel_x, sobel_y
from photon_kit.core.parallel import run_bands
from photon_kit.core.pixel import saturate_u8

logger = logging.getLogger(__name__)


def _as_kernel(kernel: Kernel | Sequence[Sequence[float]] | np.ndarray) -> Kernel:
    if isinstance(kernel, Kernel):
        return kernel
    return Kernel.of(kernel)


def _band(src: np.ndarray, lo: int, hi: int, radius: int) -> np.ndarray:
    """RGB rows [lo - radius, hi + radius) with clamp-to-edge padding on both axes, as float64."""
    height, width = src.shape[:2]
    rows = np.clip(np.arange(lo - radius, hi + radius), 0, height - 1)
    cols = np.clip(np.arange(-radius, width + radius), 0, width - 1)
    return src[rows][:, cols, :3].astype(np.float64)


def _correlate(padded: np.ndarray, weights: np.ndarray, rows: int, width: int) -> np.ndarray:
    acc = np.zeros((rows, width, 3), dtype=np.float64)
    k = weights.shape[0]
    for j in range(k):
        for i in range(k):
            w = weights[j, i]
            if w != 0:
                acc += w * padded[j : j + rows, i : i + width]
    return acc


def convolve(
    image: PhotonImage,
    kernel: Kernel | Sequence[Sequence[float]] | np.ndarray,
    gain: float | None = None,
    bias: float | None = None,
    settings: Settings | None = None,
) -> PhotonImage:
    """Convolve image in place with kernel; gain/bias override the kernel's own."""
    k = _as_kernel(kernel).with_gain(gain, bias)
    src = image.pixels
    out = np.empty_like(src)
    radius = k.radius

    def work(lo: int, hi: int) -> None:
        padded = _band(src, lo, hi, radius)
        acc = _correlate(padded, k.weights, hi - lo, image.width)
        out[lo:hi, :, :3] = saturate_u8(k.bias + acc / k.gain)
        out[lo:hi, :, 3] = src[lo:hi, :, 3]

    logger.debug('convolve %dx%d with %dx%d kernel gain=%s bias=%s', image.width, image.height, k.size, k.size, k.gain, k.bias)
    run_bands(image.height, work, settings)
    image._replace(out)
    return image


def edge_magnitude(
    image: PhotonImage,
    kx: Kernel | None = None,
    ky: Kernel | None = None,
    settings: Settings | None = None,
) -> PhotonImage:
    """Gradient magnitude sqrt(Gx^2 + Gy^2) per channel, from two unclamped correlations.

    Defaults to the Sobel pair.
    """
    kx = kx or sobel_x()
    ky = ky or sobel_y()
    if kx.size != ky.size:
        raise InvalidArgument(f'Gradient kernels differ in size: {kx.size} vs {ky.size}')
    src = image.pixels
    out = np.empty_like(src)
    radius = kx.radius

    def work(lo: int, hi: int) -> None:
        padded = _band(src, lo, hi, radius)
        gx = kx.bias + _correlate(padded, kx.weights, hi - lo, image.width) / kx.gain
        gy = ky.bias + _correlate(padded, ky.weights, hi - lo, image.width) / ky.gain
        out[lo:hi, :, :3] = saturate_u8(np.hypot(gx, gy))
        out[lo:hi, :, 3] = src[lo:hi, :, 3]

    run_bands(image.height, work, settings)
    image._replace(out)
    return image
