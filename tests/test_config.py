from datetime import timedelta

import pytest

from corsware.config import Config, ConfigError, default_config


def test_config_add_allow():
    config = Config()
    config.add_allow_methods("POST")
    config.add_allow_methods("GET", "PUT")
    config.add_expose_headers()

    config.add_allow_headers("Some", " cool")
    config.add_allow_headers("header")
    config.add_expose_headers()

    config.add_expose_headers()
    config.add_expose_headers("exposed", "header")
    config.add_expose_headers("hey")

    assert config.allow_methods == ["POST", "GET", "PUT"]
    assert config.allow_headers == ["Some", " cool", "header"]
    assert config.expose_headers == ["exposed", "header", "hey"]


def test_instances_do_not_share_lists():
    first = Config()
    second = Config()
    first.add_allow_methods("GET")
    assert second.allow_methods == []


def test_bad_config_empty():
    with pytest.raises(ConfigError, match="all origins disabled"):
        Config().validate()


def test_bad_config_all_origins_with_list():
    config = Config(allow_all_origins=True, allow_origins=["http://google.com"])
    with pytest.raises(ConfigError, match="all origins are allowed"):
        config.validate()


def test_bad_config_all_origins_with_func():
    config = Config(allow_all_origins=True, allow_origin_func=lambda origin: False)
    with pytest.raises(ConfigError, match="all origins are allowed"):
        config.validate()


def test_bad_config_origin_without_schema():
    config = Config(allow_origins=["google.com"])
    with pytest.raises(ConfigError, match="bad origin: origins must contain '\\*' or include http://,https://"):
        config.validate()


def test_validate_accepts_wildcard_without_schema():
    config = Config(allow_origins=["*.example.org"])
    assert config.validate() is None
    assert config.allow_origins == ["*.example.org"]


def test_validate_extension_schema_requires_flag():
    config = Config(allow_origins=["chrome-extension://abc"])
    with pytest.raises(ConfigError):
        config.validate()
    config.allow_browser_extensions = True
    assert config.validate() is None


def test_allowed_schemas():
    assert Config().allowed_schemas() == ["http://", "https://"]
    config = Config(allow_browser_extensions=True, allow_web_sockets=True, allow_files=True)
    assert config.allowed_schemas() == [
        "http://",
        "https://",
        "chrome-extension://",
        "safari-extension://",
        "moz-extension://",
        "ms-browser-extension://",
        "ws://",
        "wss://",
        "file://",
    ]


def test_validate_allowed_schemas():
    config = Config(allow_web_sockets=True)
    assert config.validate_allowed_schemas("wss://socket")
    assert not config.validate_allowed_schemas("file://x.js")
    assert not Config().validate_allowed_schemas("wss://socket")


def test_parse_wildcard_rules_multiple_stars():
    config = default_config()
    config.allow_wildcard = True
    config.allow_origins = ["www.*.*"]
    with pytest.raises(ConfigError, match="only one"):
        config.parse_wildcard_rules()


def test_parse_wildcard_rules_disabled():
    config = Config(allow_origins=["https://*.github.com"])
    assert config.parse_wildcard_rules() == []


def test_parse_wildcard_rules():
    config = Config(
        allow_origins=[
            "https://*.github.com",
            "https://api.*",
            "https://facebook.com",
            "*.example.org",
        ],
        allow_wildcard=True,
    )
    assert config.parse_wildcard_rules() == [
        ("https://", ".github.com"),
        ("https://api", "*"),
        ("*", ".example.org"),
    ]


def test_default_config():
    config = default_config()
    assert config.allow_methods == ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]
    assert config.allow_headers == ["Origin", "Content-Length", "Content-Type"]
    assert config.allow_credentials is False
    assert config.max_age == timedelta(hours=12)
    assert config.allow_all_origins is False