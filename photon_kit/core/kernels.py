"""Convolution kernels and the built-in kernel factories.

A Kernel is a square, odd-sized matrix plus a gain (divisor) and a bias.
Rows index vertical offsets and columns horizontal offsets; the kernel is
correlated with the image as written (no flipping).
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from photon_kit.core.errors import InvalidArgument


@dataclass(frozen=True, eq=False)
class Kernel:
    weights: np.ndarray
    gain: float = 1.0
    bias: float = 0.0

    def __post_init__(self) -> None:
        w = self.weights
        if w.ndim != 2 or w.shape[0] != w.shape[1]:
            raise InvalidArgument(f'Kernel must be square, got shape {w.shape}')
        if w.shape[0] % 2 == 0:
            raise InvalidArgument(f'Kernel size must be odd, got {w.shape[0]}')
        if not np.isfinite(w).all():
            raise InvalidArgument('Kernel weights must be finite')
        if not math.isfinite(self.gain) or self.gain == 0:
            raise InvalidArgument(f'Kernel gain must be a non-zero number, got {self.gain}')
        if not math.isfinite(self.bias):
            raise InvalidArgument(f'Kernel bias must be finite, got {self.bias}')

    @classmethod
    def of(cls, matrix: Sequence[Sequence[float]] | np.ndarray, gain: float | None = None, bias: float = 0.0) -> Kernel:
        """Build a kernel; gain defaults to the sum of the weights (1 when they sum to 0)."""
        try:
            weights = np.array(matrix, dtype=np.float64)
        except (TypeError, ValueError) as e:
            raise InvalidArgument(f'Kernel must be a numeric matrix: {e}') from e
        if gain is None:
            total = float(weights.sum()) if weights.ndim == 2 else 0.0
            gain = total if total != 0 else 1.0
        weights.flags.writeable = False
        return cls(weights=weights, gain=_as_float('gain', gain), bias=_as_float('bias', bias))

    @property
    def size(self) -> int:
        return self.weights.shape[0]

    @property
    def radius(self) -> int:
        return self.size // 2

    def with_gain(self, gain: float | None = None, bias: float | None = None) -> Kernel:
        return Kernel(
            weights=self.weights,
            gain=self.gain if gain is None else _as_float('gain', gain),
            bias=self.bias if bias is None else _as_float('bias', bias),
        )


def _as_float(name: str, value: object) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise InvalidArgument(f'Kernel {name} must be a number, got {value!r}') from e


def _check_size(k: int) -> None:
    if isinstance(k, bool) or not isinstance(k, int) or k < 1 or k % 2 == 0:
        raise InvalidArgument(f'Kernel size must be a positive odd integer, got {k!r}')


def identity(k: int = 3) -> Kernel:
    _check_size(k)
    weights = np.zeros((k, k))
    weights[k // 2, k // 2] = 1.0
    return Kernel.of(weights)


def box_blur(k: int = 3) -> Kernel:
    _check_size(k)
    return Kernel.of(np.ones((k, k)))


def gaussian(k: int = 3, sigma: float | None = None) -> Kernel:
    """Sampled Gaussian; sigma defaults to (k - 1) / 4."""
    _check_size(k)
    if sigma is None:
        sigma = (k - 1) / 4 if k > 1 else 1.0
    if sigma <= 0:
        raise InvalidArgument(f'sigma must be positive, got {sigma}')
    offsets = np.arange(k) - k // 2
    g = np.exp(-(offsets**2) / (2 * sigma * sigma))
    return Kernel.of(np.outer(g, g))


def sobel_x() -> Kernel:
    return Kernel.of([[-1, 0, 1], [-2, 0, 2], [-1, 0, 1]])


def sobel_y() -> Kernel:
    return Kernel.of([[-1, -2, -1], [0, 0, 0], [1, 2, 1]])


def prewitt_x() -> Kernel:
    return Kernel.of([[-1, 0, 1], [-1, 0, 1], [-1, 0, 1]])


def prewitt_y() -> Kernel:
    return Kernel.of([[-1, -1, -1], [0, 0, 0], [1, 1, 1]])


def laplacian() -> Kernel:
    return Kernel.of([[0, -1, 0], [-1, 4, -1], [0, -1, 0]])


def sharpen(amount: float = 1.0) -> Kernel:
    """Identity plus `amount` times the Laplacian."""
    if amount < 0:
        raise InvalidArgument(f'sharpen amount must be >= 0, got {amount}')
    return Kernel.of(identity().weights + amount * laplacian().weights)


def emboss() -> Kernel:
    return Kernel.of([[-2, -1, 0], [-1, 1, 1], [0, 1, 2]])


def edge_detection() -> Kernel:
    return Kernel.of([[-1, -1, -1], [-1, 8, -1], [-1, -1, -1]])


def edge_one() -> Kernel:
    """Directional edge emphasis; weights sum to 0.2 but are applied unnormalised."""
    return Kernel.of([[0, -2.2, -0.6], [-0.4, 2.8, -0.3], [-0.8, -1, 2.7]], gain=1.0)


def noise_reduction() -> Kernel:
    return Kernel.of([[0, -1, 7], [-1, 5, 9], [0, 7, 9]])


FACTORIES = {
    'identity': identity,
    'box_blur': box_blur,
    'gaussian': gaussian,
    'sobel_x': sobel_x,
    'sobel_y': sobel_y,
    'prewitt_x': prewitt_x,
    'prewitt_y': prewitt_y,
    'laplacian': laplacian,
    'sharpen': sharpen,
    'emboss': emboss,
    'edge_detection': edge_detection,
    'edge_one': edge_one,
    'noise_reduction': noise_reduction,
}
