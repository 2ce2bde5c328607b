"""Tests for the photon-kit command line entry point."""

import json
import sys
from pathlib import Path

import pytest
from photon_kit import codec
from photon_kit.__main__ import main
from photon_kit.core.image import PhotonImage
from photon_kit.core.types import Rgba


@pytest.fixture
def sample_png(tmp_path: Path) -> Path:
    path = tmp_path / 'in.png'
    img = PhotonImage.new(2, 1, bytes([10, 20, 30, 255, 200, 100, 50, 128]))
    codec.save_image(img, str(path))
    return path


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's .env out of the run."""
    (tmp_path / '.git').mkdir()
    monkeypatch.chdir(tmp_path)
    for key in ('PHOTON_WORKERS', 'PHOTON_MIN_ROWS', 'PHOTON_LOG_LEVEL'):
        monkeypatch.delenv(key, raising=False)


def _run(monkeypatch: pytest.MonkeyPatch, *args: str) -> None:
    monkeypatch.setattr(sys, 'argv', ['photon-kit', *args])
    main()


class TestEffects:
    def test_invert(self, sample_png: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
        out = tmp_path / 'out.png'
        _run(monkeypatch, 'invert', str(sample_png), str(out))
        assert list(codec.open_image(str(out)).to_bytes()) == [245, 235, 225, 255, 55, 155, 205, 128]
        assert 'invert()' in capsys.readouterr().out

    def test_params_parsed(self, sample_png: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        out = tmp_path / 'out.png'
        _run(monkeypatch, 'swap_channels', str(sample_png), str(out), 'red', 'b')
        assert codec.open_image(str(out)).get_pixel(0, 0) == Rgba(30, 20, 10, 255)

    def test_optional_params_default(self, sample_png: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        out = tmp_path / 'out.png'
        _run(monkeypatch, 'solarize', str(sample_png), str(out))
        assert codec.open_image(str(out)).get_pixel(1, 0) == Rgba(55, 100, 50, 128)

    def test_json_report(self, sample_png: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
        out = tmp_path / 'out.png'
        _run(monkeypatch, 'saturate', str(sample_png), str(out), '0.2', 'lch', '--json')
        report = json.loads(capsys.readouterr().out)
        assert report['dimensions'] == {'width': 2, 'height': 1}
        assert report['steps'][0]['effect'] == 'saturate'
        assert report['steps'][0]['params'] == {'amount': 0.2, 'space': 'lch'}

    def test_image_parameter(self, sample_png: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        overlay = tmp_path / 'overlay.png'
        codec.save_image(PhotonImage.filled(2, 1, Rgba(0, 0, 0)), str(overlay))
        out = tmp_path / 'out.png'
        _run(monkeypatch, 'blend', str(sample_png), str(out), str(overlay), 'screen')
        assert codec.open_image(str(out)).get_pixel(0, 0) == Rgba(10, 20, 30, 255)

    def test_resize_changes_output_size(self, sample_png: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        out = tmp_path / 'out.png'
        _run(monkeypatch, 'resize', str(sample_png), str(out), '4', '3', 'nearest')
        assert codec.open_image(str(out)).size == (4, 3)


class TestErrors:
    def test_bad_parameter_exits(self, sample_png: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
        out = tmp_path / 'out.png'
        with pytest.raises(SystemExit) as exc:
            _run(monkeypatch, 'threshold', str(sample_png), str(out), '999')
        assert exc.value.code == 1
        assert 'Error:' in capsys.readouterr().err
        assert not out.exists()

    def test_missing_input(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
        with pytest.raises(SystemExit):
            _run(monkeypatch, 'invert', str(tmp_path / 'missing.png'), str(tmp_path / 'out.png'))
        assert 'image not found' in capsys.readouterr().err

    def test_bad_log_level(self, sample_png: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv('PHOTON_LOG_LEVEL', 'chatty')
        with pytest.raises(SystemExit):
            _run(monkeypatch, 'invert', str(sample_png), str(tmp_path / 'out.png'))

    def test_no_effect(self, monkeypatch: pytest.MonkeyPatch) -> None:
        with pytest.raises(SystemExit):
            _run(monkeypatch)


class TestHelp:
    def test_list(self, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
        _run(monkeypatch, 'list')
        out = capsys.readouterr().out
        assert 'gaussian_blur' in out
        assert '<degrees>' in out

    def test_help_effect(self, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
        _run(monkeypatch, 'help', 'threshold')
        out = capsys.readouterr().out
        assert out.startswith('threshold:')
        assert 'Rec.709' in out

    def test_help_unknown(self, monkeypatch: pytest.MonkeyPatch) -> None:
        with pytest.raises(SystemExit):
            _run(monkeypatch, 'help', 'nope')

    def test_env_file_option(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
        # set then delete so the value loaded from the file is undone afterwards
        monkeypatch.setenv('PHOTON_WORKERS', '1')
        monkeypatch.delenv('PHOTON_WORKERS')
        env = tmp_path / 'custom.env'
        env.write_text('PHOTON_WORKERS=2\n')
        _run(monkeypatch, '--env-file', str(env), 'list')
        assert 'loaded' in capsys.readouterr().err
