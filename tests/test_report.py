"""Tests for photon_kit.core.report: text, JSON and catalogue output."""

import json

from photon_kit.core.report import format_catalogue, format_json, format_text
from photon_kit.core.types import Channel, Effect, Param, Report, Rgb


def _report() -> Report:
    report = Report(input_path='in.png', output_path='/tmp/out/out.png', input_size=(4, 3), output_size=(2, 2))
    report.add_step('mix_with_colour', {'colour': Rgb(255, 0, 16), 'opacity': 0.5}, 1.234)
    report.add_step('swap_channels', {'channel1': Channel.R, 'channel2': Channel.B}, 0.5)
    return report


class TestFormatText:
    def test_header_and_steps(self):
        text = format_text(_report())
        assert 'in.png (4×3)' in text
        assert 'out.png (2×2)' in text
        assert 'mix_with_colour(colour=#ff0010, opacity=0.5)' in text
        assert 'swap_channels(channel1=r, channel2=b)' in text
        assert '2 effect(s)' in text

    def test_no_steps(self):
        text = format_text(Report(input_path='a.png', input_size=(1, 1)))
        assert 'effect(s)' not in text


class TestFormatJson:
    def test_structure(self):
        obj = json.loads(format_json(_report()))
        assert obj['input'] == 'in.png'
        assert obj['dimensions'] == {'width': 4, 'height': 3}
        assert obj['output_dimensions'] == {'width': 2, 'height': 2}
        assert obj['steps'][0]['params'] == {'colour': '#ff0010', 'opacity': 0.5}
        assert obj['steps'][0]['elapsed_ms'] == 1.23
        assert obj['total_ms'] == 1.73


class TestCatalogue:
    def test_signature(self):
        effect = Effect('demo', help='Demo effect.', params=[Param('a', 'int'), Param('b', 'int', default=1)])
        line = format_catalogue({'demo': effect})
        assert 'demo' in line
        assert '<a> [b]' in line
        assert line.endswith('Demo effect.')
