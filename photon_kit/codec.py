"""Codec and host-buffer adapter: moves pixels between files, encoded bytes,
base64 strings, PIL images and PhotonImage.

Decoding always converts to RGBA so the core only ever sees validated
(width, height, RGBA bytes) triples.
"""

import base64
import binascii
import io
import os

import numpy as np
from PIL import Image, UnidentifiedImageError

from photon_kit.core.errors import InvalidArgument
from photon_kit.core.image import PhotonImage


def from_pil(pil: Image.Image) -> PhotonImage:
    rgba = pil.convert('RGBA')
    arr = np.asarray(rgba, dtype=np.uint8).copy()
    return PhotonImage(rgba.width, rgba.height, arr)


def to_pil(image: PhotonImage) -> Image.Image:
    return Image.fromarray(image.pixels.copy())


def from_encoded(data: bytes) -> PhotonImage:
    """Decode PNG/JPEG/... bytes."""
    try:
        with Image.open(io.BytesIO(data)) as pil:
            return from_pil(pil)
    except (UnidentifiedImageError, OSError) as e:
        raise InvalidArgument(f'Cannot decode image data: {e}') from e


def to_encoded(image: PhotonImage, fmt: str = 'PNG') -> bytes:
    """Encode to an image file format; formats without alpha get RGB."""
    pil = to_pil(image)
    if fmt.upper() in ('JPEG', 'JPG', 'BMP'):
        pil = pil.convert('RGB')
    buf = io.BytesIO()
    pil.save(buf, format='JPEG' if fmt.upper() == 'JPG' else fmt.upper())
    return buf.getvalue()


def from_base64(text: str) -> PhotonImage:
    """Decode a base64 string (optionally a data: URL) holding an encoded image."""
    if text.startswith('data:'):
        _, _, text = text.partition(',')
    try:
        data = base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidArgument(f'Malformed base64 image: {e}') from e
    return from_encoded(data)


def to_base64(image: PhotonImage, fmt: str = 'PNG') -> str:
    return base64.b64encode(to_encoded(image, fmt)).decode('ascii')


def open_image(path: str) -> PhotonImage:
    if not os.path.isfile(path):
        raise InvalidArgument(f'image not found: {path}')
    with open(path, 'rb') as f:
        return from_encoded(f.read())


def save_image(image: PhotonImage, path: str) -> None:
    """Save, choosing the format from the file extension."""
    ext = os.path.splitext(path)[1].lstrip('.').upper() or 'PNG'
    data = to_encoded(image, ext)
    with open(path, 'wb') as f:
        f.write(data)
