from types import SimpleNamespace

import pytest

from eventdesk.core.environments import (
    DataSourceType,
    EnvironmentConfigError,
    EnvironmentName,
    detect_environment,
    load_environment,
)


def make_settings(**overrides):
    values = {"PUBLIC_HOSTNAME": None, "ENVIRONMENT": None, "API_BASE_URL": None}
    values.update(overrides)
    return SimpleNamespace(**values)


@pytest.mark.parametrize(
    "hostname, expected",
    [
        ("localhost", EnvironmentName.DEVELOPMENT),
        ("127.0.0.1", EnvironmentName.DEVELOPMENT),
        ("LOCALHOST", EnvironmentName.DEVELOPMENT),
        ("eventdesk-staging.example.com", EnvironmentName.STAGING),
        ("dev.eventdesk.example.com", EnvironmentName.STAGING),
        ("sandbox.eventdesk.example.com", EnvironmentName.SANDBOX),
        ("experimental.eventdesk.example.com", EnvironmentName.SANDBOX),
        ("eventdesk.example.com", EnvironmentName.PRODUCTION),
        ("", EnvironmentName.PRODUCTION),
        (None, EnvironmentName.PRODUCTION),
    ],
)
def test_detect_environment_from_hostname(hostname, expected):
    assert detect_environment(hostname) == expected


def test_staging_rule_wins_over_sandbox_rule():
    # "dev" is checked before "sandbox"
    assert detect_environment("sandbox-dev.example.com") == EnvironmentName.STAGING


def test_override_wins_and_bad_override_is_ignored():
    assert detect_environment("localhost", override="production") == EnvironmentName.PRODUCTION
    assert detect_environment("localhost", override=" Sandbox ") == EnvironmentName.SANDBOX
    assert detect_environment("localhost", override="moon") == EnvironmentName.DEVELOPMENT


def test_environment_table():
    development = load_environment(make_settings(ENVIRONMENT="development"))
    staging = load_environment(make_settings(ENVIRONMENT="staging"))
    production = load_environment(make_settings(ENVIRONMENT="production"))
    sandbox = load_environment(make_settings(ENVIRONMENT="sandbox"))

    assert development.data_source == DataSourceType.DATABASE
    assert sandbox.data_source == DataSourceType.DATABASE
    assert staging.data_source == DataSourceType.API
    assert production.data_source == DataSourceType.API
    assert staging.api_base_url and production.api_base_url

    assert staging.is_feature_enabled("data_sync_from_production")
    assert not production.is_feature_enabled("debug_mode")
    assert development.is_feature_enabled("experimental_features")
    assert all(env.is_feature_enabled("admin_controls") for env in (development, staging, production, sandbox))


def test_api_base_url_setting_overrides_table():
    config = load_environment(make_settings(ENVIRONMENT="production", API_BASE_URL="https://api.example.com/v1/"))
    assert config.api_base_url == "https://api.example.com/v1"


def test_config_is_immutable():
    config = load_environment(make_settings(ENVIRONMENT="development"))
    with pytest.raises(Exception):
        config.api_base_url = "https://elsewhere.example.com"


def test_unknown_feature_flag_is_an_error():
    config = load_environment(make_settings(ENVIRONMENT="development"))
    with pytest.raises(KeyError):
        config.is_feature_enabled("teleportation")


def test_api_environment_without_base_url_is_rejected(monkeypatch):
    from eventdesk.core import environments

    broken = dict(environments.ENVIRONMENTS)
    broken[EnvironmentName.STAGING] = environments.EnvironmentConfig(
        name=EnvironmentName.STAGING, data_source=DataSourceType.API
    )
    monkeypatch.setattr(environments, "ENVIRONMENTS", broken)

    with pytest.raises(EnvironmentConfigError):
        load_environment(make_settings(ENVIRONMENT="staging"))
