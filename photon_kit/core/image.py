"""PhotonImage: fixed-size RGBA8 image buffer.

Row-major, top-left origin, four interleaved channels per pixel in the order
R, G, B, A. Stored as a numpy uint8 array of shape (height, width, 4).
Width and height never change after construction; operations that resize
return a new PhotonImage.
"""

from __future__ import annotations

import numpy as np

from photon_kit.core.errors import InvalidArgument, OutOfBounds
from photon_kit.core.types import Rgba

MAX_DIMENSION = 2**31 - 1


def _check_dims(width: int, height: int) -> None:
    for name, value in (('width', width), ('height', height)):
        if isinstance(value, bool) or not isinstance(value, int | np.integer):
            raise InvalidArgument(f'{name} must be an integer, got {value!r}')
        if not 1 <= value <= MAX_DIMENSION:
            raise InvalidArgument(f'{name} must be in [1, {MAX_DIMENSION}], got {value}')


class PhotonImage:
    """An exclusively-owned RGBA8 image.

    Transforms mutate the buffer in place through _replace(); two-image
    operations only read the other image.
    """

    __slots__ = ('_width', '_height', '_data')

    def __init__(self, width: int, height: int, data: np.ndarray):
        _check_dims(width, height)
        if data.dtype != np.uint8 or data.shape != (height, width, 4):
            raise InvalidArgument(f'Expected uint8 array of shape {(height, width, 4)}, got {data.dtype} {data.shape}')
        self._width = int(width)
        self._height = int(height)
        self._data = np.ascontiguousarray(data)

    @classmethod
    def new(cls, width: int, height: int, data: bytes | bytearray | memoryview | np.ndarray) -> PhotonImage:
        """Construct from raw RGBA bytes; len(data) must equal 4 * width * height."""
        _check_dims(width, height)
        if isinstance(data, np.ndarray) and data.dtype != np.uint8:
            raise InvalidArgument(f'Expected uint8 pixel data, got {data.dtype}')
        flat = np.frombuffer(bytes(data), dtype=np.uint8) if not isinstance(data, np.ndarray) else data
        expected = 4 * width * height
        if flat.size != expected:
            raise InvalidArgument(f'Expected {expected} bytes for {width}x{height} RGBA, got {flat.size}')
        arr = np.array(flat, dtype=np.uint8).reshape(height, width, 4)
        return cls(width, height, arr)

    @classmethod
    def blank(cls, width: int, height: int) -> PhotonImage:
        """An opaque black image."""
        _check_dims(width, height)
        arr = np.zeros((height, width, 4), dtype=np.uint8)
        arr[..., 3] = 255
        return cls(width, height, arr)

    @classmethod
    def filled(cls, width: int, height: int, pixel: Rgba) -> PhotonImage:
        """An image where every pixel equals `pixel`."""
        _check_dims(width, height)
        arr = np.empty((height, width, 4), dtype=np.uint8)
        arr[...] = pixel.as_tuple()
        return cls(width, height, arr)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def size(self) -> tuple[int, int]:
        return (self._width, self._height)

    @property
    def pixels(self) -> np.ndarray:
        """Read-only (height, width, 4) view of the buffer."""
        view = self._data.view()
        view.flags.writeable = False
        return view

    def bytes(self) -> memoryview:
        """Read-only flat view of the RGBA bytes (length 4 * width * height)."""
        return memoryview(self.pixels.reshape(-1))

    def to_bytes(self) -> bytes:
        return self._data.tobytes()

    def copy(self) -> PhotonImage:
        return PhotonImage(self._width, self._height, self._data.copy())

    def _check_xy(self, x: int, y: int) -> None:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise OutOfBounds(f'({x}, {y}) outside {self._width}x{self._height} image')

    def get_pixel(self, x: int, y: int) -> Rgba:
        self._check_xy(x, y)
        r, g, b, a = (int(v) for v in self._data[y, x])
        return Rgba(r, g, b, a)

    def set_pixel(self, x: int, y: int, pixel: Rgba) -> None:
        self._check_xy(x, y)
        self._data[y, x] = pixel.as_tuple()

    def _replace(self, data: np.ndarray) -> None:
        """Swap in a freshly computed buffer of identical shape."""
        if data.shape != self._data.shape:
            raise RuntimeError(f'buffer shape changed: {self._data.shape} -> {data.shape}')
        self._data = np.ascontiguousarray(data, dtype=np.uint8)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PhotonImage):
            return NotImplemented
        return self.size == other.size and np.array_equal(self._data, other._data)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f'PhotonImage({self._width}x{self._height})'
