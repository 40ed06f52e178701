import os
from unittest import mock
from lambda_panel import config


def test_settings_defaults():
    with mock.patch.dict(os.environ, {}, clear=True):
        settings = config._read_settings()
        assert settings.BOT_TOKEN is None
        assert settings.RATE_LIMIT_S == 1.0
        assert settings.AWS_PROFILE == "default"
        assert settings.AWS_REGION == "us-east-1"
        assert settings.CACHE_TTL_MIN == 10.0
        assert settings.MAX_PAGES == 200


def test_settings_custom():
    env = {
        "BOT_TOKEN": "123:ABC",
        "ALLOWED_CHAT_IDS": "123, 456",
        "RATE_LIMIT_S": "2.5",
        "AWS_PROFILE": "prod",
        "AWS_DEFAULT_REGION": "eu-west-1",
        "CACHE_TTL_MIN": "30",
        "MAX_PAGES": "5",
        "CACHE_FILE": "/tmp/cache.json",
    }
    with mock.patch.dict(os.environ, env, clear=True):
        settings = config._read_settings()
        assert settings.BOT_TOKEN == "123:ABC"
        assert settings.ALLOWED_CHAT_IDS == {123, 456}
        assert settings.RATE_LIMIT_S == 2.5
        assert settings.AWS_PROFILE == "prod"
        assert settings.AWS_REGION == "eu-west-1"
        assert settings.CACHE_TTL_MIN == 30.0
        assert settings.MAX_PAGES == 5
        assert settings.CACHE_FILE == "/tmp/cache.json"


def test_settings_invalid_numbers_fall_back():
    env = {"CACHE_TTL_MIN": "soon", "MAX_PAGES": "0", "RATE_LIMIT_S": "x"}
    with mock.patch.dict(os.environ, env, clear=True):
        settings = config._read_settings()
        assert settings.CACHE_TTL_MIN == 10.0
        assert settings.MAX_PAGES == 200
        assert settings.RATE_LIMIT_S == 1.0


def test_settings_non_finite_ttl_falls_back():
    for raw in ("nan", "inf", "-inf"):
        with mock.patch.dict(os.environ, {"CACHE_TTL_MIN": raw}, clear=True):
            settings = config._read_settings()
            assert settings.CACHE_TTL_MIN == 10.0
