"""Convolution effects: blurs, sharpening, embossing and edge detection.

All use clamp-to-edge sampling and leave alpha untouched. `convolve`
takes a custom kernel written as rows separated by ';' and values by ',':

Example:
    photon-kit gaussian_blur in.png out.png 5
    photon-kit sobel_global in.png out.png
    photon-kit convolve in.png out.png '0,-1,0;-1,5,-1;0,-1,0'
"""

from photon_kit.core import kernels
from photon_kit.core.convolve import convolve as _convolve
from photon_kit.core.convolve import edge_magnitude
from photon_kit.core.errors import InvalidArgument
from photon_kit.core.image import PhotonImage
from photon_kit.core.kernels import Kernel
from photon_kit.core.types import Effect, Param


def parse_kernel(text: str) -> list[list[float]]:
    """Parse 'a,b,c;d,e,f;g,h,i' into a matrix."""
    try:
        return [[float(v) for v in row.split(',')] for row in text.strip().split(';') if row.strip()]
    except ValueError as e:
        raise InvalidArgument(f'Malformed kernel {text!r}: {e}') from e


def _fixed(name: str, help: str, kernel: Kernel) -> Effect:
    effect = Effect(name=name, help=help)
    effect.run(lambda image: _convolve(image, kernel))
    return effect


identity = _fixed('identity', 'Identity kernel (no change).', kernels.identity())
emboss = _fixed('emboss', 'Emboss.', kernels.emboss())
laplace = _fixed('laplace', 'Laplacian edge enhancement.', kernels.laplacian())
edge_detection = _fixed('edge_detection', 'Eight-neighbour edge detection.', kernels.edge_detection())
edge_one = _fixed('edge_one', 'Directional edge emphasis.', kernels.edge_one())
sobel_horizontal = _fixed('sobel_horizontal', 'Sobel gradient along x.', kernels.sobel_x())
sobel_vertical = _fixed('sobel_vertical', 'Sobel gradient along y.', kernels.sobel_y())
prewitt_horizontal = _fixed('prewitt_horizontal', 'Prewitt gradient along x.', kernels.prewitt_x())
prewitt_vertical = _fixed('prewitt_vertical', 'Prewitt gradient along y.', kernels.prewitt_y())
noise_reduction = _fixed('noise_reduction', 'Weighted smoothing.', kernels.noise_reduction())


box_blur = Effect(
    name='box_blur',
    help='Mean of the k x k neighbourhood.',
    params=[Param('size', 'int', default=3)],
)


@box_blur.run
def _box_blur(image: PhotonImage, size: int) -> None:
    _convolve(image, kernels.box_blur(size))


gaussian_blur = Effect(
    name='gaussian_blur',
    help='Gaussian blur; sigma defaults to (size - 1) / 4.',
    params=[Param('size', 'int', default=3), Param('sigma', 'float', default=None)],
)


@gaussian_blur.run
def _gaussian(image: PhotonImage, size: int, sigma: float | None) -> None:
    _convolve(image, kernels.gaussian(size, sigma))


sharpen = Effect(
    name='sharpen',
    help='Identity plus amount times the Laplacian.',
    params=[Param('amount', 'float', default=1.0)],
)


@sharpen.run
def _sharpen(image: PhotonImage, amount: float) -> None:
    _convolve(image, kernels.sharpen(amount))


sobel_global = Effect(name='sobel_global', help='Sobel gradient magnitude sqrt(Gx^2 + Gy^2).')


@sobel_global.run
def _sobel_global(image: PhotonImage) -> None:
    edge_magnitude(image)


prewitt_global = Effect(name='prewitt_global', help='Prewitt gradient magnitude sqrt(Gx^2 + Gy^2).')


@prewitt_global.run
def _prewitt_global(image: PhotonImage) -> None:
    edge_magnitude(image, kernels.prewitt_x(), kernels.prewitt_y())


convolve = Effect(
    name='convolve',
    help="Custom kernel 'a,b,c;d,e,f;g,h,i' with optional gain and bias.",
    params=[Param('kernel', 'str'), Param('gain', 'float', default=None), Param('bias', 'float', default=0.0)],
)


@convolve.run
def _custom(image: PhotonImage, kernel: str, gain: float | None, bias: float) -> None:
    _convolve(image, Kernel.of(parse_kernel(kernel), gain=gain, bias=bias))
