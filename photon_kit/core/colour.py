"""Colour-space kernels: RGB <-> HSL, HSV, linear sRGB, CIE XYZ (D65), L*a*b* and LCh.

Every function accepts an array-like whose last axis holds the three
components (a single triple or a whole (H, W, 3) plane) and returns a
float64 numpy array of the same shape. RGB values are normalised floats in
[0, 1]; use decode/encode to move between RGB8 bytes and floats.

Working ranges:
  HSL / HSV   H in [0, 360), S, L, V in [0, 1]
  LCh         L* in [0, 100], C* in [0, ~132], h in [0, 360)
  linear      [0, 1]

Hue is undefined when chroma is zero; it is reported as 0 and the inverse
conversions reproduce an achromatic colour.

Example:
    from photon_kit.core import colour
    h, s, l = colour.rgb_to_hsl(colour.decode((255, 0, 0)))
"""

import numpy as np

from photon_kit.core.types import ColourSpace, Rgb

SRGB_TO_XYZ = np.array(
    [
        [0.4124564, 0.3575761, 0.1804375],
        [0.2126729, 0.7151522, 0.0721750],
        [0.0193339, 0.1191920, 0.9503041],
    ]
)
XYZ_TO_SRGB = np.linalg.inv(SRGB_TO_XYZ)

D65_WHITE = np.array([0.95047, 1.0, 1.08883])

# Rec.709 luma weights, applied to linear light
REC709 = np.array([0.2126, 0.7152, 0.0722])

MAX_LCH_CHROMA = 132.0

_LAB_EPSILON = (6 / 29) ** 3
_ACHROMATIC = 1e-8


def _split(values) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    arr = np.asarray(values, dtype=np.float64)
    return arr[..., 0], arr[..., 1], arr[..., 2]


def decode(rgb8) -> np.ndarray:
    """RGB8 bytes -> floats in [0, 1]."""
    return np.asarray(rgb8, dtype=np.float64) / 255.0


def encode(rgb) -> np.ndarray:
    """Floats -> RGB8: clamp to [0, 1], scale by 255, round half-to-even."""
    arr = np.asarray(rgb, dtype=np.float64)
    if np.isnan(arr).any():
        raise RuntimeError('colour conversion produced NaN')
    return np.rint(np.clip(arr, 0.0, 1.0) * 255.0).astype(np.uint8)


# -- sRGB companding ---------------------------------------------------------


def srgb_to_linear(rgb) -> np.ndarray:
    c = np.asarray(rgb, dtype=np.float64)
    return np.where(c <= 0.04045, c / 12.92, np.power((np.maximum(c, 0.04045) + 0.055) / 1.055, 2.4))


def linear_to_srgb(rgb) -> np.ndarray:
    c = np.asarray(rgb, dtype=np.float64)
    return np.where(c <= 0.0031308, c * 12.92, 1.055 * np.power(np.maximum(c, 0.0031308), 1 / 2.4) - 0.055)


def luma(rgb) -> np.ndarray:
    """Rec.709 luma computed on linear light and companded back. Shape (...,)."""
    linear = srgb_to_linear(rgb)
    return linear_to_srgb(linear @ REC709)


# -- hexcone models ----------------------------------------------------------


def _hue(r: np.ndarray, g: np.ndarray, b: np.ndarray, mx: np.ndarray, chroma: np.ndarray) -> np.ndarray:
    safe = np.where(chroma == 0, 1.0, chroma)
    h = np.where(
        mx == r,
        ((g - b) / safe) % 6,
        np.where(mx == g, (b - r) / safe + 2, (r - g) / safe + 4),
    )
    return np.where(chroma == 0, 0.0, (h * 60.0) % 360.0)


def _from_hexcone(h: np.ndarray, chroma: np.ndarray, m: np.ndarray) -> np.ndarray:
    hp = (np.asarray(h) % 360.0) / 60.0
    x = chroma * (1 - np.abs(hp % 2 - 1))
    zero = np.zeros_like(chroma)
    sector = np.floor(hp).astype(int) % 6
    conds = [sector == i for i in range(6)]
    r = np.select(conds, [chroma, x, zero, zero, x, chroma])
    g = np.select(conds, [x, chroma, chroma, x, zero, zero])
    b = np.select(conds, [zero, zero, x, chroma, chroma, x])
    return np.stack([r + m, g + m, b + m], axis=-1)


def rgb_to_hsl(rgb) -> np.ndarray:
    r, g, b = _split(rgb)
    mx = np.maximum(np.maximum(r, g), b)
    mn = np.minimum(np.minimum(r, g), b)
    chroma = mx - mn
    lightness = (mx + mn) / 2
    denom = 1 - np.abs(2 * lightness - 1)
    s = np.where(chroma == 0, 0.0, chroma / np.where(denom == 0, 1.0, denom))
    return np.stack([_hue(r, g, b, mx, chroma), s, lightness], axis=-1)


def hsl_to_rgb(hsl) -> np.ndarray:
    h, s, lightness = _split(hsl)
    chroma = (1 - np.abs(2 * lightness - 1)) * s
    return _from_hexcone(h, chroma, lightness - chroma / 2)


def rgb_to_hsv(rgb) -> np.ndarray:
    r, g, b = _split(rgb)
    mx = np.maximum(np.maximum(r, g), b)
    mn = np.minimum(np.minimum(r, g), b)
    chroma = mx - mn
    s = np.where(mx == 0, 0.0, chroma / np.where(mx == 0, 1.0, mx))
    return np.stack([_hue(r, g, b, mx, chroma), s, mx], axis=-1)


def hsv_to_rgb(hsv) -> np.ndarray:
    h, s, v = _split(hsv)
    chroma = v * s
    return _from_hexcone(h, chroma, v - chroma)


# -- CIE ---------------------------------------------------------------------


def linear_to_xyz(linear) -> np.ndarray:
    return np.asarray(linear, dtype=np.float64) @ SRGB_TO_XYZ.T


def xyz_to_linear(xyz) -> np.ndarray:
    return np.asarray(xyz, dtype=np.float64) @ XYZ_TO_SRGB.T


def _lab_f(t: np.ndarray) -> np.ndarray:
    return np.where(t > _LAB_EPSILON, np.cbrt(t), t * (29 / 6) ** 2 / 3 + 4 / 29)


def _lab_f_inv(t: np.ndarray) -> np.ndarray:
    return np.where(t > 6 / 29, t**3, 3 * (6 / 29) ** 2 * (t - 4 / 29))


def xyz_to_lab(xyz) -> np.ndarray:
    scaled = np.asarray(xyz, dtype=np.float64) / D65_WHITE
    fx, fy, fz = _lab_f(scaled[..., 0]), _lab_f(scaled[..., 1]), _lab_f(scaled[..., 2])
    return np.stack([116 * fy - 16, 500 * (fx - fy), 200 * (fy - fz)], axis=-1)


def lab_to_xyz(lab) -> np.ndarray:
    lightness, a, b = _split(lab)
    fy = (lightness + 16) / 116
    fx = fy + a / 500
    fz = fy - b / 200
    return np.stack([_lab_f_inv(fx), _lab_f_inv(fy), _lab_f_inv(fz)], axis=-1) * D65_WHITE


def lab_to_lch(lab) -> np.ndarray:
    lightness, a, b = _split(lab)
    chroma = np.hypot(a, b)
    hue = np.where(chroma < _ACHROMATIC, 0.0, np.degrees(np.arctan2(b, a)) % 360.0)
    return np.stack([lightness, chroma, hue], axis=-1)


def lch_to_lab(lch) -> np.ndarray:
    lightness, chroma, hue = _split(lch)
    rad = np.radians(hue)
    return np.stack([lightness, chroma * np.cos(rad), chroma * np.sin(rad)], axis=-1)


def rgb_to_lch(rgb) -> np.ndarray:
    return lab_to_lch(xyz_to_lab(linear_to_xyz(srgb_to_linear(rgb))))


def lch_to_rgb(lch) -> np.ndarray:
    """LCh -> sRGB floats. Out-of-gamut results fall outside [0, 1]; encode() clamps them."""
    return linear_to_srgb(xyz_to_linear(lab_to_xyz(lch_to_lab(lch))))


_FORWARD = {
    ColourSpace.HSL: rgb_to_hsl,
    ColourSpace.HSV: rgb_to_hsv,
    ColourSpace.LCH: rgb_to_lch,
}
_INVERSE = {
    ColourSpace.HSL: hsl_to_rgb,
    ColourSpace.HSV: hsv_to_rgb,
    ColourSpace.LCH: lch_to_rgb,
}


def to_space(rgb, space: ColourSpace) -> np.ndarray:
    """RGB floats -> the given working space."""
    return _FORWARD[space](rgb)


def from_space(values, space: ColourSpace) -> np.ndarray:
    """Working space -> RGB floats (unclamped)."""
    return _INVERSE[space](values)


def convert(colour: Rgb, space: ColourSpace) -> tuple[float, float, float]:
    """Convert a single Rgb colour into a working-space triple."""
    out = to_space(decode(colour.as_tuple()), space)
    return (float(out[0]), float(out[1]), float(out[2]))


def to_rgb(values: tuple[float, float, float], space: ColourSpace) -> Rgb:
    """Convert a working-space triple back into an Rgb colour."""
    out = encode(from_space(values, space))
    return Rgb(int(out[0]), int(out[1]), int(out[2]))
