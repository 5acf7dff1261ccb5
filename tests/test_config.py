import json

import pytest

from wokkibot.config import Config, LavalinkConfig, WebConfig, load_config, save_config


def _sample():
    return Config(
        token="token",
        guild_id="123",
        trivia_token="token",
        admins=[1, 2],
        lavalink=LavalinkConfig(enabled=True, nodes=[{"name": "main", "address": "localhost:2333"}]),
        web=WebConfig(client_id="42", client_secret="secret", redirect_uri="http://localhost/callback"),
    )


def test_round_trip_through_file(tmp_path):
    path = tmp_path / "config.json"
    original = _sample()
    save_config(original, path)
    assert load_config(path) == original


def test_saved_file_uses_source_keys_and_single_space_indent(tmp_path):
    path = tmp_path / "config.json"
    save_config(_sample(), path)
    text = path.read_text(encoding="utf-8")
    assert text.startswith('{\n "token"')
    data = json.loads(text)
    assert data["guildid"] == "123"
    assert data["admins"] == ["1", "2"]


def test_from_dict_accepts_string_and_numeric_admins():
    config = Config.from_dict({"admins": ["10", 20], "guildid": "7"})
    assert config.admins == [10, 20]
    assert config.guild_id == "7"
    assert config.lavalink.enabled is False


def test_to_dict_from_dict_round_trip():
    original = _sample()
    assert Config.from_dict(original.to_dict()) == original


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "absent.json")


def test_invalid_json_raises(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(json.JSONDecodeError):
        load_config(path)