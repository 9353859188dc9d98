import pytest

from passrepeat import config
from passrepeat.errors import PassRepeatError, PasswordTooLongError


@pytest.fixture(autouse=True)
def config_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("PASSREPEAT_CONFIG_DIR", str(tmp_path))
    return tmp_path


def test_defaults_when_missing():
    assert config.load_config() == config.DEFAULTS


def test_save_and_merge(config_dir):
    config.save_config({"max_depth": 3})
    assert (config_dir / "config.json").exists()
    cfg = config.load_config()
    assert cfg["max_depth"] == 3
    assert cfg["max_password_length"] == config.DEFAULTS["max_password_length"]


def test_unreadable_file_falls_back_to_defaults(config_dir):
    (config_dir / "config.json").write_text("{not json", encoding="utf-8")
    assert config.load_config() == config.DEFAULTS


def test_length_budget():
    cfg = dict(config.DEFAULTS, max_password_length=4)
    config.check_length("abcd", cfg)
    with pytest.raises(PasswordTooLongError):
        config.check_length("abcde", cfg)
    with pytest.raises(PassRepeatError):
        config.check_length("abcd", dict(cfg, max_password_length=None))


def test_parse_setting():
    assert config.parse_setting("max_depth", "3") == 3
    assert config.parse_setting("wordlist_path", "none") is None
    assert config.parse_setting("wordlist_path", "/tmp/words.txt") == "/tmp/words.txt"
    with pytest.raises(PassRepeatError):
        config.parse_setting("max_depth", "none")
    with pytest.raises(PassRepeatError):
        config.parse_setting("max_depth", "deep")
    with pytest.raises(PassRepeatError):
        config.parse_setting("colour", "blue")


def test_int_setting_rejects_hand_edited_values():
    assert config.int_setting({"max_depth": "5"}, "max_depth") == 5
    with pytest.raises(PassRepeatError):
        config.int_setting({"max_depth": "deep"}, "max_depth")
    with pytest.raises(PassRepeatError):
        config.int_setting({"max_depth": None}, "max_depth")
