import json

import pytest

from botapp.config import load_bot_config
from infrastructure import constants
from infrastructure.settings import ConfigurationError, load_pitch_catalogue, load_settings

VALID_ENV = {
    "TELEGRAM_BOT_TOKEN": "123:abc",
    "INCOMING_WEBHOOK_URL": "https://hooks.example.com/services/T000/B000/XXX",
    "TICKER_INTERVAL": "5",
}


def test_load_settings_with_defaults():
    settings = load_settings(VALID_ENV)

    assert settings.bot_token == "123:abc"
    assert settings.ticker_interval_minutes == 5
    assert settings.timezone == constants.DEFAULT_TIMEZONE
    assert settings.sample_horizon_days == constants.DEFAULT_SAMPLE_HORIZON_DAYS
    assert len(settings.pitches) == len(constants.DEFAULT_PITCHES)
    assert settings.production_mode is False


@pytest.mark.parametrize("missing", sorted(VALID_ENV))
def test_missing_required_setting_is_fatal(missing):
    env = {key: value for key, value in VALID_ENV.items() if key != missing}
    with pytest.raises(ConfigurationError):
        load_settings(env)


@pytest.mark.parametrize("interval", ["0", "-3", "five", "1.5", " "])
def test_invalid_ticker_interval_is_fatal(interval):
    with pytest.raises(ConfigurationError):
        load_settings({**VALID_ENV, "TICKER_INTERVAL": interval})


def test_webhook_must_be_http_url():
    with pytest.raises(ConfigurationError):
        load_settings({**VALID_ENV, "INCOMING_WEBHOOK_URL": "not-a-url"})


def test_unknown_timezone_is_fatal():
    with pytest.raises(ConfigurationError):
        load_settings({**VALID_ENV, "BOT_TIMEZONE": "Mars/Olympus"})


def test_pitches_file_replaces_defaults(tmp_path):
    pitches_file = tmp_path / "pitches.json"
    pitches_file.write_text(json.dumps([{"id": "999", "name": "Hackney Marshes"}]), encoding="utf-8")

    settings = load_settings({**VALID_ENV, "PITCHES_FILE": str(pitches_file)})
    config = load_bot_config(settings)

    assert [pitch.id for pitch in config.pitches] == ["999"]
    assert config.pitches[0].name == "Hackney Marshes"
    assert config.ticker.interval_minutes == 5
    assert config.ticker.webhook_url == VALID_ENV["INCOMING_WEBHOOK_URL"]


def test_empty_pitches_file_is_fatal(tmp_path):
    pitches_file = tmp_path / "pitches.json"
    pitches_file.write_text("[]", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="at least one pitch"):
        load_pitch_catalogue(str(pitches_file))


def test_unreadable_pitches_file_is_fatal(tmp_path):
    with pytest.raises(ConfigurationError):
        load_pitch_catalogue(str(tmp_path / "missing.json"))
