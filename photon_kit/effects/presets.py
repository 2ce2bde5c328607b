"""Named preset filters, each a fixed chain of point operations.

Every preset is also reachable through `filter <name>`, matching the
single-entry-point form used by browser hosts.

Example:
    photon-kit oceanic in.png out.png
    photon-kit filter in.png out.png vintage
"""

from photon_kit import ops
from photon_kit.core.errors import InvalidArgument
from photon_kit.core.image import PhotonImage
from photon_kit.core.pixel import PixelOp, map_pixels
from photon_kit.core.types import ColourSpace, Effect, Param, Rgb

PRESETS: dict[str, Effect] = {}


def _preset(name: str, help: str, *steps: PixelOp) -> Effect:
    effect = Effect(name=name, help=help)

    @effect.run
    def _apply(image: PhotonImage) -> None:
        for step in steps:
            map_pixels(image, step)

    PRESETS[name] = effect
    return effect


oceanic = _preset('oceanic', 'Aquamarine tint.', ops.mix_with_colour(Rgb(0, 89, 173), 0.2))
islands = _preset('islands', 'Deep aquamarine tint.', ops.mix_with_colour(Rgb(0, 24, 95), 0.2))
marine = _preset('marine', 'Green-blue tint.', ops.mix_with_colour(Rgb(0, 14, 119), 0.2))
seagreen = _preset('seagreen', 'Dark green tint.', ops.mix_with_colour(Rgb(0, 68, 62), 0.2))
flagblue = _preset('flagblue', 'Royal blue tint.', ops.mix_with_colour(Rgb(0, 0, 131), 0.2))
liquid = _preset('liquid', 'Blue-inspired tint.', ops.mix_with_colour(Rgb(0, 10, 75), 0.2))
diamante = _preset('diamante', 'Light blue-green tint.', ops.mix_with_colour(Rgb(30, 82, 87), 0.1))
radio = _preset('radio', 'Fallout-style green monochrome.', ops.monochrome(5, 40, 20))
twenties = _preset('twenties', 'Slight-blue monochrome.', ops.monochrome(18, 12, 20))
rosetint = _preset('rosetint', 'Rose-coloured tint.', ops.mix_with_colour(Rgb(255, 105, 180), 0.15))
mauve = _preset('mauve', 'Purple-infused tint.', ops.mix_with_colour(Rgb(90, 40, 120), 0.15))
bluechrome = _preset('bluechrome', 'Greyscale with a blue cast.', ops.monochrome(20, 30, 60))
vintage = _preset(
    'vintage',
    'Sepia with a warm wash.',
    ops.sepia(),
    ops.mix_with_colour(Rgb(230, 200, 150), 0.1),
)
perfume = _preset('perfume', 'Increased blue with a purple wash.', ops.mix_with_colour(Rgb(80, 40, 120), 0.15))
serenity = _preset('serenity', 'Calming blue tint.', ops.mix_with_colour(Rgb(10, 40, 90), 0.2))
golden = _preset(
    'golden',
    'Golden tint with a slight lift.',
    ops.mix_with_colour(Rgb(255, 215, 0), 0.15),
    ops.lighten(0.03),
)
pastel_pink = _preset('pastel_pink', 'Pastel pink overtone.', ops.mix_with_colour(Rgb(220, 112, 170), 0.1))
cali = _preset('cali', 'Warm Californian tint.', ops.mix_with_colour(Rgb(255, 180, 120), 0.12))
dramatic = _preset(
    'dramatic',
    'High-contrast greyscale.',
    ops.luminance_grey(),
    ops.gamma(0.8, 0.8, 0.8),
)
firenze = _preset(
    'firenze',
    'Saturated orange warmth.',
    ops.mix_with_colour(Rgb(255, 140, 0), 0.1),
    ops.saturate(0.1, ColourSpace.HSL),
)
obsidian = _preset(
    'obsidian',
    'Dark, cool greyscale.',
    ops.luminance_grey(),
    ops.mix_with_colour(Rgb(25, 25, 35), 0.25),
)
lofi = _preset(
    'lofi',
    'Saturated, slightly crushed colours.',
    ops.saturate(0.25, ColourSpace.HSL),
    ops.gamma(0.9, 0.9, 0.9),
)


filter_ = Effect(
    name='filter',
    help='Apply a preset filter by name.',
    params=[Param('name', 'str')],
)


@filter_.run
def _filter(image: PhotonImage, name: str) -> None:
    if name not in PRESETS:
        raise InvalidArgument(f'Unknown filter: {name}. Available: {", ".join(sorted(PRESETS))}')
    PRESETS[name].apply(image)
