"""Report builder: text and JSON output for photon-kit runs."""

import json
import os
from typing import Any

from photon_kit.core.types import Effect, Report, Rgb


def _show(value: Any) -> Any:
    """JSON-friendly rendering of a parameter value."""
    if isinstance(value, Rgb):
        return value.to_hex()
    if hasattr(value, 'name') and hasattr(value, 'value'):
        return value.name.lower()
    if isinstance(value, int | float | str | bool) or value is None:
        return value
    return repr(value)


def format_text(report: Report) -> str:
    """Format report as human-readable text."""
    lines = []
    w, h = report.input_size
    header = f'photon-kit: {report.input_path} ({w}×{h})'
    if report.output_path:
        ow, oh = report.output_size
        header += f' → {os.path.basename(report.output_path)} ({ow}×{oh})'
    lines.append(header)
    lines.append('')

    for step in report.steps:
        params = ', '.join(f'{k}={_show(v)}' for k, v in step['params'].items())
        lines.append(f'── {step["effect"]}({params})  {step["elapsed_ms"]} ms')

    if report.steps:
        lines.append('')
        lines.append(f'{len(report.steps)} effect(s) in {report.total_ms} ms')
    return '\n'.join(lines)


def format_json(report: Report) -> str:
    """Format report as JSON."""
    obj: dict[str, Any] = {
        'input': report.input_path,
        'dimensions': {'width': report.input_size[0], 'height': report.input_size[1]},
    }
    if report.output_path:
        obj['output'] = report.output_path
        obj['output_dimensions'] = {'width': report.output_size[0], 'height': report.output_size[1]}

    obj['steps'] = [
        {
            'effect': step['effect'],
            'params': {k: _show(v) for k, v in step['params'].items()},
            'elapsed_ms': step['elapsed_ms'],
        }
        for step in report.steps
    ]
    obj['total_ms'] = report.total_ms
    return json.dumps(obj, indent=2)


def format_catalogue(effects: dict[str, Effect]) -> str:
    """One line per effect: name, parameter signature and help."""
    lines = []
    for name, effect in sorted(effects.items()):
        sig = ' '.join(f'<{p.name}>' if p.required else f'[{p.name}]' for p in effect.params)
        lines.append(f'  {name:<22} {sig:<36} {effect.help}'.rstrip())
    return '\n'.join(lines)
