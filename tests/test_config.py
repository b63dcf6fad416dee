import json
from pathlib import Path

import pytest
import yaml

from dhcpleases.config import ParserConfig, load_config, sample_config


def test_load_yaml_config(tmp_path: Path):
    path = tmp_path / "parser.yaml"
    path.write_text(yaml.safe_dump({"strict": False, "on_error": "skip"}))
    cfg = load_config(path)
    assert cfg.strict is False
    assert cfg.on_error == "skip"
    assert cfg.duplicates == "overwrite"


def test_load_json_config(tmp_path: Path):
    path = tmp_path / "parser.json"
    path.write_text(json.dumps({"duplicates": "error", "encoding": "latin-1"}))
    cfg = load_config(path)
    assert cfg.duplicates == "error"
    assert cfg.encoding == "latin-1"


def test_empty_yaml_uses_defaults(tmp_path: Path):
    path = tmp_path / "empty.yml"
    path.write_text("")
    assert load_config(path) == ParserConfig()


def test_invalid_values_rejected():
    with pytest.raises(ValueError):
        ParserConfig.from_mapping({"on_error": "ignore"})
    with pytest.raises(ValueError):
        ParserConfig(duplicates="merge")
    with pytest.raises(ValueError):
        ParserConfig.from_mapping({"verbose": True})


def test_sample_config_round_trips():
    assert ParserConfig.from_mapping(sample_config()) == ParserConfig()
