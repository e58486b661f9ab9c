import json
import pytest
from pydantic import ValidationError
from archive.config import ArchiveConfig, load_config

def test_defaults(config):
    assert config.player_speed == 160
    assert config.diagonal_factor == 0.707
    assert config.prompt_dwell_ms == 3000
    assert config.move_prompt == "Arrow keys or WASD to move"
    assert config.read_prompt == "Press E to read"
    assert config.default_text == "No text available."
    assert config.link_prefix == "Read more: "
    assert config.default_spawn == (400, 1000)
    assert config.overhead_layers == ["Top Level"]
    assert config.loading_text == "Loading Gregson Park..."
    assert config.theme == "archive"

def test_load_partial_override(tmp_path):
    path = tmp_path / "archive.json"
    path.write_text(json.dumps({"player_speed": 200, "welcome_title": "Leazes Park"}))

    config = load_config(path)

    assert config.player_speed == 200
    assert config.welcome_title == "Leazes Park"
    assert config.read_prompt == "Press E to read"

def test_missing_file_uses_defaults(tmp_path):
    assert load_config(tmp_path / "missing.json") == ArchiveConfig()
    assert load_config(None) == ArchiveConfig()

def test_unknown_key_rejected(tmp_path):
    path = tmp_path / "archive.json"
    path.write_text(json.dumps({"player_sped": 200}))

    with pytest.raises(ValidationError):
        load_config(path)

def test_invalid_values_rejected():
    with pytest.raises(ValidationError):
        ArchiveConfig(player_speed=0)
    with pytest.raises(ValidationError):
        ArchiveConfig(diagonal_factor=1.5)
