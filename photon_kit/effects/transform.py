"""Geometric effects. crop and resize produce a new image of different size;
the flips work in place.

Example:
    photon-kit crop in.png out.png 0 0 64 64
    photon-kit resize in.png out.png 320 200 bicubic
"""

from photon_kit.core import geometry
from photon_kit.core.image import PhotonImage
from photon_kit.core.types import Effect, Param

crop = Effect(
    name='crop',
    help='Keep the rectangle [x1, x2) x [y1, y2).',
    params=[Param('x1', 'int'), Param('y1', 'int'), Param('x2', 'int'), Param('y2', 'int')],
)


@crop.run
def _crop(image: PhotonImage, x1: int, y1: int, x2: int, y2: int) -> PhotonImage:
    return geometry.crop(image, x1, y1, x2, y2)


fliph = Effect(name='fliph', help='Mirror left-right.')


@fliph.run
def _fliph(image: PhotonImage) -> None:
    geometry.fliph(image)


flipv = Effect(name='flipv', help='Mirror top-bottom.')


@flipv.run
def _flipv(image: PhotonImage) -> None:
    geometry.flipv(image)


resize = Effect(
    name='resize',
    help='Resample to width x height (nearest, bilinear, bicubic or lanczos).',
    params=[Param('width', 'int'), Param('height', 'int'), Param('sampling', 'str', default='lanczos')],
)


@resize.run
def _resize(image: PhotonImage, width: int, height: int, sampling: str) -> PhotonImage:
    return geometry.resize(image, width, height, sampling)
