"""photon-kit: apply image effects from the command line.

Usage: photon-kit <effect> <input> <output> [params...] [options]

Effects are auto-discovered from photon_kit/effects/.
Each effect's parameters become positional arguments, in order.
Run `photon-kit list` for the catalogue and `photon-kit help <effect>` for
an effect's parameters and module docs.

Environment variables / .env loading:
  OS environment variables are always used first.
  If a variable is not set, photon-kit looks for a .env file starting from
  the current directory and walking up, stopping at the nearest .git boundary.
  Use --env-file to override the .env location explicitly.
"""

import argparse
import importlib
import logging
import sys
import time
from typing import Any

from photon_kit import codec, registry
from photon_kit.core.env import Settings, load_env
from photon_kit.core.errors import PhotonError
from photon_kit.core.report import format_catalogue, format_json, format_text
from photon_kit.core.types import Effect, Report

logger = logging.getLogger('photon_kit')


def _effect_module(effect: Effect) -> object:
    """Load the module that declares an effect (for docstring access)."""
    return importlib.import_module(effect.module) if effect.module else None


def _build_parser() -> argparse.ArgumentParser:
    effects = registry.all_effects()

    epilog = (
        'Examples:\n'
        '  photon-kit invert in.png out.png\n'
        '  photon-kit hue_rotate in.png out.png 90\n'
        '  photon-kit saturate in.png out.png 0.3 lch\n'
        '  photon-kit gaussian_blur in.png out.png 5\n'
        '  photon-kit blend base.png out.png overlay.png screen\n'
        '  photon-kit watermark base.png out.png logo.png 20 20 --json\n'
        '  photon-kit filter in.png out.png oceanic\n'
        '  photon-kit help threshold\n'
        '\n'
        'Settings (set in .env or environment):\n'
        '  PHOTON_WORKERS    worker threads for pixel and convolution drivers\n'
        '  PHOTON_MIN_ROWS   minimum scanlines per worker task\n'
        '  PHOTON_LOG_LEVEL  DEBUG, INFO, WARNING, ERROR\n'
    )
    parser = argparse.ArgumentParser(
        prog='photon-kit',
        description='Apply image effects to PNG/JPEG files.',
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    # Global options before subcommand
    parser.add_argument(
        '--env-file',
        metavar='PATH',
        default=None,
        help='Path to .env file (default: walk up from cwd to .git boundary)',
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging to stderr')
    sub = parser.add_subparsers(dest='effect', help='Effect to apply')

    for name, effect in sorted(effects.items()):
        p = sub.add_parser(name, help=effect.help)
        p.add_argument('input', help='Input image path')
        p.add_argument('output', help='Output image path (format from extension)')
        for param in effect.params:
            hint = param.help or param.kind
            if param.required:
                p.add_argument(param.name, help=hint)
            else:
                p.add_argument(param.name, nargs='?', default=None, help=f'{hint} (default: {param.default})')
        p.add_argument('-j', '--json', action='store_true', help='Output JSON report instead of text')

    # `help` subcommand prints parameters and module docs for an effect
    help_parser = sub.add_parser('help', help='Print full docs for an effect')
    help_parser.add_argument('command', nargs='?', help='Effect name')

    sub.add_parser('list', help='List every effect with its parameters')

    return parser


def _print_help(command: str | None) -> None:
    """Print signature and module docstring for an effect."""
    effects = registry.all_effects()

    if command is None:
        print('Available effects:\n')
        print(format_catalogue(effects))
        print('\nRun: photon-kit help <effect> for full docs.')
        return

    if command not in effects:
        print(f'Unknown effect: {command}', file=sys.stderr)
        print(f'Available: {", ".join(sorted(effects))}', file=sys.stderr)
        sys.exit(1)

    effect = effects[command]
    print(f'{effect.name}: {effect.help}\n')
    for param in effect.params:
        default = '' if param.required else f' (default: {param.default})'
        print(f'  {param.name:<14} {param.kind}{default}')
    mod = _effect_module(effect)
    doc = (getattr(mod, '__doc__', None) or '').strip()
    if doc:
        print(f'\n{doc}')


def _bind_params(effect: Effect, args: argparse.Namespace) -> dict[str, Any]:
    """Parse the positional parameter texts given on the command line, stopping at the first omitted one."""
    bound: dict[str, Any] = {}
    for param in effect.params:
        text = getattr(args, param.name, None)
        if text is None:
            break
        bound[param.name] = codec.open_image(text) if param.kind == 'image' else param.parse(text)
    return bound


def _configure_logging(verbose: bool) -> None:
    level = 'DEBUG' if verbose else Settings.from_env().log_level
    logging.basicConfig(level=level, format='%(levelname)s %(name)s: %(message)s', stream=sys.stderr)


def _run(args: argparse.Namespace) -> Report:
    effect = registry.get(args.effect)
    image = codec.open_image(args.input)
    report = Report(input_path=args.input, output_path=args.output, input_size=image.size)

    params = _bind_params(effect, args)
    start = time.perf_counter()
    result = effect.apply(image, *params.values())
    elapsed = (time.perf_counter() - start) * 1000.0

    shown = dict(zip((p.name for p in effect.params), effect.bind(*params.values())))
    report.add_step(effect.name, shown, elapsed)
    logger.info('%s applied in %.1f ms', effect.name, elapsed)

    codec.save_image(result, args.output)
    report.output_size = result.size
    return report


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # Load .env before anything else; OS env vars always win
    env_path = load_env(env_file=getattr(args, 'env_file', None))
    if env_path:
        print(f'photon-kit: loaded {env_path}', file=sys.stderr)

    try:
        _configure_logging(args.verbose)
    except PhotonError as e:
        print(f'Error: {e}', file=sys.stderr)
        sys.exit(1)

    if not args.effect:
        parser.print_help()
        sys.exit(1)

    if args.effect == 'help':
        _print_help(getattr(args, 'command', None))
        return

    if args.effect == 'list':
        print(format_catalogue(registry.all_effects()))
        return

    try:
        report = _run(args)
    except PhotonError as e:
        print(f'Error: {e}', file=sys.stderr)
        sys.exit(1)

    if args.json:
        print(format_json(report))
    else:
        print(format_text(report))


if __name__ == '__main__':
    main()
