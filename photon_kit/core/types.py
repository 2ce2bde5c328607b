"""Shared types for photon_kit: Rgb, Rgba, Channel, ColourSpace, BlendMode, Param, Effect, Report."""

from __future__ import annotations

import enum
import math
import numbers
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from photon_kit.core.errors import InvalidArgument

if TYPE_CHECKING:
    from photon_kit.core.image import PhotonImage


def _check_byte(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Real) or int(value) != value:
        raise InvalidArgument(f'{name} must be an integer, got {value!r}')
    if not 0 <= value <= 255:
        raise InvalidArgument(f'{name} must be in [0, 255], got {value}')
    return int(value)


@dataclass
class Rgb:
    """An 8-bit RGB colour, used as a parameter (background, duotone endpoints, tints)."""

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        self.r = _check_byte('r', self.r)
        self.g = _check_byte('g', self.g)
        self.b = _check_byte('b', self.b)

    @classmethod
    def from_sequence(cls, values: Sequence[int]) -> Rgb:
        """Build from exactly three components."""
        if len(values) != 3:
            raise InvalidArgument(f'Rgb needs exactly 3 components, got {len(values)}')
        return cls(values[0], values[1], values[2])

    @classmethod
    def from_hex(cls, value: str) -> Rgb:
        """Parse '#rrggbb' or '#rgb' (leading '#' optional)."""
        h = value.strip().lstrip('#')
        if len(h) == 3:
            h = ''.join(c * 2 for c in h)
        if not re.fullmatch(r'[0-9a-fA-F]{6}', h):
            raise InvalidArgument(f'Not a hex colour: {value!r}')
        return cls(int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16))

    @classmethod
    def parse(cls, text: str) -> Rgb:
        """Parse a hex colour or a comma-separated 'r,g,b' triple."""
        if ',' in text:
            try:
                parts = [int(p) for p in text.split(',')]
            except ValueError as e:
                raise InvalidArgument(f'Not an r,g,b colour: {text!r}') from e
            return cls.from_sequence(parts)
        return cls.from_hex(text)

    def to_hex(self) -> str:
        return f'#{self.r:02x}{self.g:02x}{self.b:02x}'

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def distance(self, other: Rgb) -> float:
        """Euclidean distance in RGB8 space (0 .. ~441.7)."""
        return math.sqrt((self.r - other.r) ** 2 + (self.g - other.g) ** 2 + (self.b - other.b) ** 2)


@dataclass
class Rgba:
    """A single RGBA8 pixel."""

    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self) -> None:
        self.r = _check_byte('r', self.r)
        self.g = _check_byte('g', self.g)
        self.b = _check_byte('b', self.b)
        self.a = _check_byte('a', self.a)

    @property
    def rgb(self) -> Rgb:
        return Rgb(self.r, self.g, self.b)

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (self.r, self.g, self.b, self.a)


class Channel(enum.IntEnum):
    """Channel index within an RGBA pixel."""

    R = 0
    G = 1
    B = 2
    A = 3

    @classmethod
    def parse(cls, text: str) -> Channel:
        key = text.strip().lower()
        aliases = {'r': cls.R, 'red': cls.R, 'g': cls.G, 'green': cls.G, 'b': cls.B, 'blue': cls.B}
        aliases.update({'a': cls.A, 'alpha': cls.A})
        if key in aliases:
            return aliases[key]
        if key.isdigit() and int(key) in range(4):
            return cls(int(key))
        raise InvalidArgument(f'Unknown channel: {text!r}')


RGB_CHANNELS = (Channel.R, Channel.G, Channel.B)


class ColourSpace(enum.Enum):
    """Working space for saturation and lightness adjustments."""

    HSL = 'hsl'
    HSV = 'hsv'
    LCH = 'lch'

    @classmethod
    def parse(cls, text: str) -> ColourSpace:
        try:
            return cls(text.strip().lower())
        except ValueError as e:
            raise InvalidArgument(f'Unknown colour space: {text!r}') from e


class BlendMode(enum.Enum):
    OVERLAY = 'overlay'
    MULTIPLY = 'multiply'
    SCREEN = 'screen'
    DARKEN = 'darken'
    LIGHTEN = 'lighten'
    DODGE = 'dodge'
    BURN = 'burn'
    DIFFERENCE = 'difference'
    EXCLUSION = 'exclusion'
    SOFT_LIGHT = 'soft_light'

    @classmethod
    def parse(cls, text: str) -> BlendMode:
        try:
            return cls(text.strip().lower().replace('-', '_'))
        except ValueError as e:
            raise InvalidArgument(f'Unknown blend mode: {text!r}') from e


_REQUIRED = object()

# kind -> parser for command line text; 'image' is resolved by the CLI
_PARSERS: dict[str, Callable[[str], Any]] = {
    'int': int,
    'float': float,
    'str': str,
    'channel': Channel.parse,
    'colour': Rgb.parse,
    'space': ColourSpace.parse,
    'mode': BlendMode.parse,
}


@dataclass
class Param:
    """One positional parameter of an Effect, in declaration order."""

    name: str
    kind: str = 'int'
    default: Any = _REQUIRED
    help: str = ''

    @property
    def required(self) -> bool:
        return self.default is _REQUIRED

    def parse(self, text: str) -> Any:
        """Convert command line text into the parameter's value."""
        parser = _PARSERS.get(self.kind)
        if parser is None:
            raise InvalidArgument(f'Parameter {self.name} of kind {self.kind!r} cannot be parsed from text')
        try:
            return parser(text)
        except ValueError as e:
            if isinstance(e, InvalidArgument):
                raise
            raise InvalidArgument(f'Bad value for {self.name}: {text!r}') from e


class Effect:
    """A named, self-registering catalogue entry.

    Usage in an effect module:

        invert = Effect(name='invert', help='Invert RGB channels')

        @invert.run
        def _invert(image):
            ...
    """

    def __init__(self, name: str, help: str = '', params: Sequence[Param] = ()):
        self.name = name
        self.help = help
        self.params = list(params)
        self._run_fn: Callable | None = None

    def run(self, fn: Callable) -> Callable:
        """Decorator to register the function applying this effect."""
        self._run_fn = fn
        return fn

    @property
    def module(self) -> str | None:
        """Dotted name of the module that declares the run function."""
        return self._run_fn.__module__ if self._run_fn is not None else None

    def bind(self, *args: Any) -> list[Any]:
        """Fill defaults for missing trailing arguments, in declaration order."""
        if len(args) > len(self.params):
            raise InvalidArgument(f'{self.name} takes at most {len(self.params)} parameters, got {len(args)}')
        bound = list(args)
        for p in self.params[len(args) :]:
            if p.required:
                raise InvalidArgument(f'{self.name}: missing required parameter {p.name!r}')
            bound.append(p.default)
        return bound

    def apply(self, image: PhotonImage, *args: Any) -> PhotonImage:
        """Apply the effect to image and return the resulting image.

        In-place effects return the same object; resizing effects return a new one.
        """
        if self._run_fn is None:
            raise RuntimeError(f'Effect {self.name} has no run function')
        result = self._run_fn(image, *self.bind(*args))
        return image if result is None else result

    def __repr__(self) -> str:
        return f'Effect({self.name!r})'


@dataclass
class Report:
    """Accumulates what a command line run did, for text/JSON output."""

    input_path: str = ''
    output_path: str = ''
    input_size: tuple[int, int] = (0, 0)
    output_size: tuple[int, int] = (0, 0)
    steps: list[dict[str, Any]] = field(default_factory=list)

    def add_step(self, effect: str, params: dict[str, Any], elapsed_ms: float) -> None:
        """Record one applied effect with its bound parameters."""
        self.steps.append({'effect': effect, 'params': params, 'elapsed_ms': round(elapsed_ms, 2)})

    @property
    def total_ms(self) -> float:
        return round(sum(s['elapsed_ms'] for s in self.steps), 2)
