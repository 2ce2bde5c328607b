"""Channel manipulation: invert, per-channel add/subtract, removal, swaps,
brightness and gamma.

All additions saturate into [0, 255]; alpha is never touched.

Example:
    photon-kit alter_channel in.png out.png red 40
    photon-kit swap_channels in.png out.png r b
"""

from photon_kit import ops
from photon_kit.core.errors import InvalidArgument
from photon_kit.core.image import PhotonImage
from photon_kit.core.pixel import map_pixels
from photon_kit.core.types import Channel, Effect, Param

invert = Effect(name='invert', help='Invert the R, G and B channels.')


@invert.run
def _invert(image: PhotonImage) -> None:
    map_pixels(image, ops.invert())


alter_channel = Effect(
    name='alter_channel',
    help='Add a (possibly negative) amount to one channel, saturating.',
    params=[Param('channel', 'channel'), Param('amount', 'int')],
)


@alter_channel.run
def _alter_channel(image: PhotonImage, channel: Channel, amount: int) -> None:
    map_pixels(image, ops.channel_add(channel, amount))


def _alter_one(channel: Channel, colour_name: str) -> Effect:
    effect = Effect(
        name=f'alter_{colour_name}_channel',
        help=f'Add a (possibly negative) amount to the {colour_name} channel, saturating.',
        params=[Param('amount', 'int')],
    )
    effect.run(lambda image, amount: map_pixels(image, ops.channel_add(channel, amount)))
    return effect


alter_red_channel = _alter_one(Channel.R, 'red')
alter_green_channel = _alter_one(Channel.G, 'green')
alter_blue_channel = _alter_one(Channel.B, 'blue')


alter_two_channels = Effect(
    name='alter_two_channels',
    help='Add amounts to two channels at once, saturating.',
    params=[Param('channel1', 'channel'), Param('amount1', 'int'), Param('channel2', 'channel'), Param('amount2', 'int')],
)


@alter_two_channels.run
def _alter_two(image: PhotonImage, channel1: Channel, amount1: int, channel2: Channel, amount2: int) -> None:
    first = ops.channel_add(channel1, amount1)
    second = ops.channel_add(channel2, amount2)
    map_pixels(image, first)
    map_pixels(image, second)


alter_channels = Effect(
    name='alter_channels',
    help='Add amounts to R, G and B, saturating.',
    params=[Param('r_amount', 'int'), Param('g_amount', 'int'), Param('b_amount', 'int')],
)


@alter_channels.run
def _alter_channels(image: PhotonImage, r_amount: int, g_amount: int, b_amount: int) -> None:
    steps = [ops.channel_add(c, a) for c, a in zip((Channel.R, Channel.G, Channel.B), (r_amount, g_amount, b_amount))]
    for step in steps:
        map_pixels(image, step)


remove_channel = Effect(
    name='remove_channel',
    help='Zero a colour channel; with min_filter only values below it are zeroed.',
    params=[Param('channel', 'channel'), Param('min_filter', 'int', default=None)],
)


@remove_channel.run
def _remove_channel(image: PhotonImage, channel: Channel, min_filter: int | None) -> None:
    map_pixels(image, ops.channel_remove(channel, min_filter))


def _remove_one(channel: Channel, colour_name: str) -> Effect:
    effect = Effect(
        name=f'remove_{colour_name}_channel',
        help=f'Zero the {colour_name} channel where it is below min_filter (all values by default).',
        params=[Param('min_filter', 'int', default=None)],
    )
    effect.run(lambda image, min_filter: map_pixels(image, ops.channel_remove(channel, min_filter)))
    return effect


remove_red_channel = _remove_one(Channel.R, 'red')
remove_green_channel = _remove_one(Channel.G, 'green')
remove_blue_channel = _remove_one(Channel.B, 'blue')


swap_channels = Effect(
    name='swap_channels',
    help='Swap two channels.',
    params=[Param('channel1', 'channel'), Param('channel2', 'channel')],
)


@swap_channels.run
def _swap(image: PhotonImage, channel1: Channel, channel2: Channel) -> None:
    map_pixels(image, ops.channel_swap(channel1, channel2))


inc_brightness = Effect(
    name='inc_brightness',
    help='Add amount to R, G and B, saturating at 255.',
    params=[Param('amount', 'int')],
)


@inc_brightness.run
def _inc_brightness(image: PhotonImage, amount: int) -> None:
    map_pixels(image, ops.brightness(amount))


dec_brightness = Effect(
    name='dec_brightness',
    help='Subtract amount from R, G and B, saturating at 0.',
    params=[Param('amount', 'int')],
)


@dec_brightness.run
def _dec_brightness(image: PhotonImage, amount: int) -> None:
    if amount < 0:
        raise InvalidArgument(f'amount must be >= 0, got {amount}')
    map_pixels(image, ops.brightness(-amount))


gamma_correction = Effect(
    name='gamma_correction',
    help='Per-channel gamma correction.',
    params=[Param('red', 'float'), Param('green', 'float'), Param('blue', 'float')],
)


@gamma_correction.run
def _gamma(image: PhotonImage, red: float, green: float, blue: float) -> None:
    map_pixels(image, ops.gamma(red, green, blue))
