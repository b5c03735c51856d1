"""Tests for loader configuration."""

import json
import logging

import pytest

from stl_mesh.config import LoaderConfig, load_config, write_config_template
from stl_mesh.constants import DEFAULT_CHUNK_TRIANGLES
from stl_mesh.exceptions import ConfigurationError


def test_defaults():
    config = load_config(None)
    assert config.chunk_triangles == DEFAULT_CHUNK_TRIANGLES
    assert config.encoding == "utf-8"
    assert config.warn_on_trailing_bytes is True
    assert config.collect_on_release is False


def test_values_from_file(tmp_path):
    path = tmp_path / "loader.json"
    path.write_text(json.dumps({
        "chunk_triangles": 128,
        "encoding": "latin-1",
        "warn_on_trailing_bytes": "no",
        "collect_on_release": "yes",
    }))
    config = load_config(path)
    assert config.chunk_triangles == 128
    assert config.encoding == "latin-1"
    assert config.warn_on_trailing_bytes is False
    assert config.collect_on_release is True


def test_invalid_chunk_size(tmp_path):
    path = tmp_path / "loader.json"
    path.write_text(json.dumps({"chunk_triangles": -5}))
    with pytest.raises(ConfigurationError) as exc_info:
        load_config(path)
    assert exc_info.value.invalid_parameters == ["chunk_triangles"]
    assert exc_info.value.error_code == "CONFIGURATION_ERROR"


def test_invalid_encoding(tmp_path):
    path = tmp_path / "loader.json"
    path.write_text(json.dumps({"encoding": 5}))
    with pytest.raises(ConfigurationError):
        load_config(path)


@pytest.mark.parametrize("value", ["lots", "128", 2.5, 64.0, True, None, -5, 0])
def test_chunk_triangles_must_be_positive_int(tmp_path, value):
    path = tmp_path / "loader.json"
    path.write_text(json.dumps({"chunk_triangles": value}))
    with pytest.raises(ConfigurationError) as exc_info:
        load_config(path)
    assert exc_info.value.invalid_parameters == ["chunk_triangles"]


def test_invalid_flag(tmp_path):
    path = tmp_path / "loader.json"
    path.write_text(json.dumps({"collect_on_release": "maybe", "chunk_triangles": "x"}))
    with pytest.raises(ConfigurationError) as exc_info:
        load_config(path)
    assert exc_info.value.invalid_parameters == ["chunk_triangles", "collect_on_release"]


@pytest.mark.parametrize("value", [0, -1, "x", 2.5, False])
def test_dataclass_validates(value):
    with pytest.raises(ConfigurationError):
        LoaderConfig(chunk_triangles=value)


@pytest.mark.parametrize("content", ["{not json", "[1, 2, 3]"])
def test_bad_files(tmp_path, content):
    path = tmp_path / "loader.json"
    path.write_text(content)
    with pytest.raises(ConfigurationError):
        load_config(path)


def test_missing_file(tmp_path):
    with pytest.raises(ConfigurationError):
        load_config(tmp_path / "missing.json")


def test_unknown_keys_warn(tmp_path, caplog):
    path = tmp_path / "loader.json"
    path.write_text(json.dumps({"chunk_size": 10}))
    with caplog.at_level(logging.WARNING):
        config = load_config(path)
    assert config == LoaderConfig()
    assert "chunk_size" in caplog.text


def test_template_loads_as_defaults(tmp_path):
    path = write_config_template(tmp_path / "template.json")
    assert json.loads(path.read_text())["chunk_triangles"] == DEFAULT_CHUNK_TRIANGLES
    assert load_config(path) == LoaderConfig()
