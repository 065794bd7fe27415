import json

import pytest

from snipecord.config import Config
from snipecord.exceptions import ConfigError


@pytest.fixture
def raw():
    return {
        "webhook": "https://discord.com/api/webhooks/1/token",
        "mention": "<@&42>",
        "year": "2024",
        "term": "9",
        "campus": "NB",
        "level": "U",
        "indexes": ["01234", "05678"],
    }


def write_config(tmp_path, data):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(data))
    return path


def test_load(tmp_path, raw):
    config = Config.load(write_config(tmp_path, raw))

    assert config.webhook == raw["webhook"]
    assert config.mention == "<@&42>"
    assert config.indexes == ["01234", "05678"]
    assert config.params == {"year": "2024", "term": "9", "campus": "NB", "level": "U"}


def test_repeat_timeout_defaults_to_60(raw):
    assert Config.from_dict(raw).repeat_timeout == 60


def test_mention_is_optional(raw):
    del raw["mention"]
    assert Config.from_dict(raw).mention is None


def test_empty_mention_is_kept(raw):
    raw["mention"] = ""
    assert Config.from_dict(raw).mention == ""


def test_numeric_year_and_term_are_accepted(raw):
    raw["year"] = 2024
    raw["term"] = 1
    config = Config.from_dict(raw)
    assert config.year == "2024"
    assert config.term == "1"


def test_duplicate_indexes_collapse(raw):
    raw["indexes"] = ["01234", " 01234 ", "05678"]
    assert Config.from_dict(raw).indexes == ["01234", "05678"]


@pytest.mark.parametrize("key", ["webhook", "year", "term", "campus", "level", "indexes"])
def test_missing_required_key(raw, key):
    del raw[key]
    with pytest.raises(ConfigError, match=key):
        Config.from_dict(raw)


@pytest.mark.parametrize("key,value", [
    ("term", "5"),
    ("campus", "XX"),
    ("level", "Q"),
    ("indexes", []),
    ("indexes", "01234"),
    ("repeat_timeout", -1),
    ("repeat_timeout", "60"),
    ("mention", 42),
])
def test_invalid_values(raw, key, value):
    raw[key] = value
    with pytest.raises(ConfigError):
        Config.from_dict(raw)


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        Config.load(tmp_path / "nope.json")


def test_unparsable_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json")
    with pytest.raises(ConfigError, match="parse"):
        Config.load(path)


def test_repr_hides_webhook(raw):
    assert "token" not in repr(Config.from_dict(raw))


def test_webhook_override(monkeypatch, raw):
    monkeypatch.setattr("snipecord.config.WEBHOOK_URL_OVERRIDE", "https://example.test/hook")
    assert Config.from_dict(raw).webhook == "https://example.test/hook"
