"""Error taxonomy raised at the photon_kit boundary.

Every public operation validates its arguments before touching pixel data,
so a raised error always leaves the image byte-for-byte unchanged.
"""


class PhotonError(Exception):
    """Base class for all errors raised by photon_kit."""


class InvalidArgument(PhotonError, ValueError):
    """Malformed construction input or a parameter outside its declared range."""


class OutOfBounds(PhotonError, IndexError):
    """Pixel coordinates outside [0, width) x [0, height)."""


class SizeMismatch(PhotonError, ValueError):
    """Two-image operation on images of differing dimensions."""
