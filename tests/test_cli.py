"""Tests for the command line interface."""

import pytest

from conftest import SQUARE
from stl_mesh import __main__ as cli


@pytest.fixture(autouse=True)
def no_logging_setup(monkeypatch):
    monkeypatch.setattr(cli, "setup_logging", lambda *args, **kwargs: None)


def test_info(write_binary, caplog):
    caplog.set_level("INFO")
    assert cli.main(["info", str(write_binary(SQUARE))]) == 0
    assert "Triangles: 2" in caplog.text
    assert "Unique points: 4" in caplog.text


def test_info_forced_format(write_ascii):
    assert cli.main(["info", str(write_ascii(SQUARE)), "--format", "ascii"]) == 0


def test_info_with_config(write_binary, tmp_path):
    config = tmp_path / "loader.json"
    config.write_text('{"chunk_triangles": 1, "collect_on_release": true}')
    assert cli.main(["info", str(write_binary(SQUARE)), "--config", str(config)]) == 0


def test_info_failure(tmp_path, caplog):
    assert cli.main(["info", str(tmp_path / "missing.stl")]) == 1
    assert "Error" in caplog.text


def test_detect(write_ascii, write_binary, capsys):
    assert cli.main(["detect", str(write_ascii(SQUARE))]) == 0
    assert cli.main(["detect", str(write_binary(SQUARE))]) == 0
    assert capsys.readouterr().out.split() == ["ascii", "binary"]


def test_create_config(tmp_path):
    output = tmp_path / "cfg.json"
    assert cli.main(["create-config", "--output", str(output)]) == 0
    assert output.exists()


def test_no_command():
    assert cli.main([]) == 1


def test_detect_uses_configured_encoding(write_ascii, tmp_path, capsys):
    path = write_ascii(SQUARE)
    latin = tmp_path / "latin.json"
    latin.write_text('{"encoding": "latin-1"}')
    bogus = tmp_path / "bogus.json"
    bogus.write_text('{"encoding": "no-such-codec"}')

    assert cli.main(["detect", str(path), "--config", str(latin)]) == 0
    assert capsys.readouterr().out.strip() == "ascii"
    assert cli.main(["detect", str(path), "--config", str(bogus)]) == 1
