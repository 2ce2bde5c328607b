"""Text overlays, rasterised by Pillow and composed like a watermark.

Example:
    photon-kit draw_text in.png out.png 'Hello' 10 10 32 '#ffcc00'
    photon-kit draw_text_with_border in.png out.png 'Hello' 10 10 32 '#ffffff' '#000000' 2
"""

from photon_kit import text as _text
from photon_kit.core.image import PhotonImage
from photon_kit.core.types import Effect, Param, Rgb

_WHITE = Rgb(255, 255, 255)

draw_text = Effect(
    name='draw_text',
    help='Draw text with its top-left corner at (x, y).',
    params=[
        Param('text', 'str'),
        Param('x', 'int'),
        Param('y', 'int'),
        Param('size', 'int', default=_text.DEFAULT_SIZE),
        Param('colour', 'colour', default=_WHITE),
    ],
)


@draw_text.run
def _draw_text(image: PhotonImage, text: str, x: int, y: int, size: int, colour: Rgb) -> None:
    _text.draw_text(image, text, x, y, size=size, fill=colour)


draw_text_with_border = Effect(
    name='draw_text_with_border',
    help='Draw outlined text with its top-left corner at (x, y).',
    params=[
        Param('text', 'str'),
        Param('x', 'int'),
        Param('y', 'int'),
        Param('size', 'int', default=_text.DEFAULT_SIZE),
        Param('colour', 'colour', default=_WHITE),
        Param('border', 'colour', default=Rgb(0, 0, 0)),
        Param('border_width', 'int', default=2),
    ],
)


@draw_text_with_border.run
def _draw_bordered(
    image: PhotonImage, text: str, x: int, y: int, size: int, colour: Rgb, border: Rgb, border_width: int
) -> None:
    _text.draw_text(image, text, x, y, size=size, fill=colour, border=border, border_width=border_width)
