"""Two-image effects: blend modes, alpha composition, watermarks and
background replacement.

Overlay arguments are image paths on the command line. Blend modes and
alpha composition need images of equal size; watermark clips the overlay
to the base.

Example:
    photon-kit blend base.png out.png overlay.png multiply
    photon-kit watermark base.png out.png logo.png 10 10
    photon-kit replace_background in.png out.png '#00ff00' '#ffffff' 60
"""

from photon_kit.core import composite
from photon_kit.core.image import PhotonImage
from photon_kit.core.types import BlendMode, Effect, Param, Rgb

blend = Effect(
    name='blend',
    help='Blend an overlay image onto the base with a blend mode.',
    params=[Param('overlay', 'image'), Param('mode', 'mode')],
)


@blend.run
def _blend(image: PhotonImage, overlay: PhotonImage, mode: BlendMode) -> None:
    composite.blend(image, overlay, mode)


alpha_composite = Effect(
    name='alpha_composite',
    help='Source-over composition of an overlay image onto the base.',
    params=[Param('overlay', 'image')],
)


@alpha_composite.run
def _alpha_composite(image: PhotonImage, overlay: PhotonImage) -> None:
    composite.alpha_composite(image, overlay)


watermark = Effect(
    name='watermark',
    help='Place an overlay image at (x, y), clipped to the base.',
    params=[Param('overlay', 'image'), Param('x', 'int'), Param('y', 'int')],
)


@watermark.run
def _watermark(image: PhotonImage, overlay: PhotonImage, x: int, y: int) -> None:
    composite.watermark(image, overlay, x, y)


replace_background = Effect(
    name='replace_background',
    help='Replace pixels near a colour (Euclidean RGB distance <= tolerance) with another colour.',
    params=[Param('background', 'colour'), Param('replacement', 'colour'), Param('tolerance', 'float')],
)


@replace_background.run
def _replace_background(image: PhotonImage, background: Rgb, replacement: Rgb, tolerance: float) -> None:
    composite.replace_background(image, background, replacement, tolerance)


replace_background_image = Effect(
    name='replace_background_image',
    help='Replace pixels near a colour with the pixels of a same-sized image.',
    params=[Param('background', 'colour'), Param('replacement', 'image'), Param('tolerance', 'float')],
)


@replace_background_image.run
def _replace_background_image(image: PhotonImage, background: Rgb, replacement: PhotonImage, tolerance: float) -> None:
    composite.replace_background(image, background, replacement, tolerance)
