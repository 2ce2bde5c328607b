"""Geometric transforms: crop, flips and resampling.

Flips keep the dimensions and work in place. Crop and resize change the
dimensions and therefore return a new PhotonImage.
"""

import numpy as np
from PIL import Image

from photon_kit.core.errors import InvalidArgument, OutOfBounds
from photon_kit.core.image import PhotonImage, _check_dims

SAMPLING = {
    'nearest': Image.Resampling.NEAREST,
    'bilinear': Image.Resampling.BILINEAR,
    'bicubic': Image.Resampling.BICUBIC,
    'lanczos': Image.Resampling.LANCZOS,
}


def crop(image: PhotonImage, x1: int, y1: int, x2: int, y2: int) -> PhotonImage:
    """New image holding the half-open rectangle [x1, x2) x [y1, y2)."""
    if x2 <= x1 or y2 <= y1:
        raise InvalidArgument(f'Empty crop rectangle ({x1}, {y1}, {x2}, {y2})')
    if x1 < 0 or y1 < 0 or x2 > image.width or y2 > image.height:
        raise OutOfBounds(f'Crop ({x1}, {y1}, {x2}, {y2}) outside {image.width}x{image.height} image')
    return PhotonImage(x2 - x1, y2 - y1, image.pixels[y1:y2, x1:x2].copy())


def fliph(image: PhotonImage) -> PhotonImage:
    """Mirror left-right in place."""
    image._replace(image.pixels[:, ::-1].copy())
    return image


def flipv(image: PhotonImage) -> PhotonImage:
    """Mirror top-bottom in place."""
    image._replace(image.pixels[::-1].copy())
    return image


def resize(image: PhotonImage, width: int, height: int, sampling: str = 'lanczos') -> PhotonImage:
    """New image resampled to width x height."""
    _check_dims(width, height)
    if sampling not in SAMPLING:
        raise InvalidArgument(f'Unknown sampling {sampling!r}. Available: {", ".join(SAMPLING)}')
    pil = Image.fromarray(np.ascontiguousarray(image.pixels))
    resized = pil.resize((width, height), SAMPLING[sampling])
    return PhotonImage(width, height, np.asarray(resized, dtype=np.uint8).copy())
