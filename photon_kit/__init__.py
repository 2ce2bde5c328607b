"""photon-kit: RGBA image processing with numpy and Pillow."""

from photon_kit import ops
from photon_kit.core import kernels
from photon_kit.core.composite import alpha_composite, blend, replace_background, watermark
from photon_kit.core.convolve import convolve, edge_magnitude
from photon_kit.core.env import Settings
from photon_kit.core.errors import InvalidArgument, OutOfBounds, PhotonError, SizeMismatch
from photon_kit.core.image import PhotonImage
from photon_kit.core.pixel import PixelOp, map_pixels
from photon_kit.core.types import BlendMode, Channel, ColourSpace, Rgb, Rgba

__version__ = '0.1.0'

__all__ = [
    'BlendMode',
    'Channel',
    'ColourSpace',
    'InvalidArgument',
    'OutOfBounds',
    'PhotonError',
    'PhotonImage',
    'PixelOp',
    'Rgb',
    'Rgba',
    'Settings',
    'SizeMismatch',
    'alpha_composite',
    'blend',
    'convolve',
    'edge_magnitude',
    'kernels',
    'map_pixels',
    'ops',
    'replace_background',
    'watermark',
]
