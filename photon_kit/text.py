"""Text overlays.

Glyphs are rasterised by Pillow into an RGBA mask sized to the text's
bounding box, then composed onto the image with watermark(). No font
shaping or loading logic lives in the core.
"""

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from photon_kit.core.composite import watermark
from photon_kit.core.errors import InvalidArgument
from photon_kit.core.image import PhotonImage
from photon_kit.core.types import Rgb

DEFAULT_SIZE = 24


def _font(size: int, font_path: str | None) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    if font_path:
        try:
            return ImageFont.truetype(font_path, size)
        except OSError as e:
            raise InvalidArgument(f'Cannot load font {font_path}: {e}') from e
    return ImageFont.load_default(size=size)


def rasterise(
    text: str,
    size: int = DEFAULT_SIZE,
    fill: Rgb | None = None,
    font_path: str | None = None,
    border: Rgb | None = None,
    border_width: int = 0,
) -> PhotonImage:
    """Render text into a transparent RGBA mask just large enough to hold it."""
    if not text:
        raise InvalidArgument('text must not be empty')
    if size < 1:
        raise InvalidArgument(f'font size must be >= 1, got {size}')
    if border_width < 0:
        raise InvalidArgument(f'border width must be >= 0, got {border_width}')
    fill = fill or Rgb(255, 255, 255)
    font = _font(size, font_path)

    stroke = border_width if border is not None else 0
    left, top, right, bottom = ImageDraw.Draw(Image.new('RGBA', (1, 1))).textbbox(
        (0, 0), text, font=font, stroke_width=stroke
    )
    width, height = max(1, right - left), max(1, bottom - top)

    canvas = Image.new('RGBA', (width, height), (0, 0, 0, 0))
    ImageDraw.Draw(canvas).text(
        (-left, -top),
        text,
        font=font,
        fill=(*fill.as_tuple(), 255),
        stroke_width=stroke,
        stroke_fill=(*border.as_tuple(), 255) if border is not None else None,
    )
    return PhotonImage(width, height, np.asarray(canvas, dtype=np.uint8).copy())


def draw_text(
    image: PhotonImage,
    text: str,
    x: int,
    y: int,
    size: int = DEFAULT_SIZE,
    fill: Rgb | None = None,
    font_path: str | None = None,
    border: Rgb | None = None,
    border_width: int = 0,
) -> PhotonImage:
    """Draw text with its top-left corner at (x, y); clipped like a watermark."""
    mask = rasterise(text, size, fill, font_path, border, border_width)
    return watermark(image, mask, x, y)
