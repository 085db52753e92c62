"""Unit tests for core configuration module."""

import pytest
from pydantic import ValidationError

from storyblok_translate_slugs.core.config import (
    ConfigError,
    RunConfig,
    Settings,
    get_settings,
    resolve_run_config,
    split_list,
)


def _settings(**values: str) -> Settings:
    return Settings(_env_file=None, **values)  # type: ignore[call-arg]


def _resolve(settings: Settings | None = None, **flags: object) -> RunConfig:
    base: dict[str, object] = {"token": "tok", "space": "1", "deepl_api_key": "key"}
    base.update(flags)
    return resolve_run_config(settings or _settings(), **base)  # type: ignore[arg-type]


class TestSettings:
    """Tests for environment Settings."""

    def test_settings_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STORYBLOK_OAUTH_TOKEN", "env-token")
        monkeypatch.setenv("STORYBLOK_SPACE_ID", "999")
        monkeypatch.setenv("STORYBLOK_REGION", "us")
        monkeypatch.setenv("DEEPL_API_KEY", "env-key")
        settings = Settings()
        assert settings.storyblok_oauth_token == "env-token"
        assert settings.storyblok_space_id == "999"
        assert settings.storyblok_region == "us"
        assert settings.deepl_api_key == "env-key"

    def test_settings_defaults(self) -> None:
        settings = _settings()
        assert settings.storyblok_oauth_token is None
        assert settings.storyblok_region is None
        assert settings.log_level == "INFO"
        assert settings.log_dir is None

    def test_settings_from_dotenv(self, tmp_path) -> None:  # type: ignore[no-untyped-def]
        (tmp_path / ".env").write_text("STORYBLOK_OAUTH_TOKEN=dotenv-token\nDEEPL_API_KEY=dotenv-key\n")
        settings = Settings()
        assert settings.storyblok_oauth_token == "dotenv-token"
        assert settings.deepl_api_key == "dotenv-key"

    @pytest.mark.parametrize(("raw", "expected"), [("debug", "DEBUG"), (" Warning ", "WARNING"), ("TRACE", "TRACE")])
    def test_log_level_normalised(self, raw: str, expected: str) -> None:
        assert _settings(log_level=raw).log_level == expected

    def test_invalid_log_level_rejected(self) -> None:
        with pytest.raises(ValidationError, match="Invalid log_level"):
            _settings(log_level="verbose")

    def test_get_settings_wraps_invalid_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "loud")
        with pytest.raises(ConfigError, match="LOG_LEVEL"):
            get_settings()


class TestSplitList:
    def test_none_and_blank(self) -> None:
        assert split_list(None) == ()
        assert split_list("") == ()
        assert split_list("  ") == ()

    def test_trims_and_drops_empty(self) -> None:
        assert split_list("de, fr,,it ") == ("de", "fr", "it")


class TestResolveRunConfig:
    """Tests for merging CLI flags over environment settings."""

    def test_flags_win_over_env(self) -> None:
        settings = _settings(
            storyblok_oauth_token="env-token",
            storyblok_space_id="env-space",
            storyblok_region="us",
            deepl_api_key="env-key",
        )
        config = resolve_run_config(settings, token="flag-token", space="42", deepl_api_key="flag-key", region="ap")
        assert config.oauth_token == "flag-token"
        assert config.space_id == "42"
        assert config.deepl_api_key == "flag-key"
        assert config.region == "ap"

    def test_env_used_when_flag_absent(self) -> None:
        settings = _settings(
            storyblok_oauth_token="env-token",
            storyblok_space_id="77",
            storyblok_region="ca",
            deepl_api_key="env-key",
        )
        config = resolve_run_config(settings)
        assert config.oauth_token == "env-token"
        assert config.space_id == "77"
        assert config.region == "ca"
        assert config.deepl_api_key == "env-key"

    def test_defaults(self) -> None:
        config = _resolve()
        assert config.region == "eu"
        assert config.source_lang is None
        assert config.content_types == ("page",)
        assert config.locales == ()
        assert config.skip_stories == ()
        assert config.only_stories == ()
        assert not config.overwrite
        assert not config.publish
        assert not config.dry_run
        assert not config.verbose

    def test_lists_are_parsed(self) -> None:
        config = _resolve(
            content_types="page,news-article",
            locales="de,fr",
            skip_stories="home",
            only_stories="about-us,contact",
            source_lang="en",
        )
        assert config.content_types == ("page", "news-article")
        assert config.locales == ("de", "fr")
        assert config.skip_stories == ("home",)
        assert config.only_stories == ("about-us", "contact")
        assert config.source_lang == "en"

    @pytest.mark.parametrize(
        ("missing", "flag", "env_var"),
        [
            ("token", "--token", "STORYBLOK_OAUTH_TOKEN"),
            ("space", "--space", "STORYBLOK_SPACE_ID"),
            ("deepl_api_key", "--deepl-api-key", "DEEPL_API_KEY"),
        ],
    )
    def test_missing_required_field(self, missing: str, flag: str, env_var: str) -> None:
        with pytest.raises(ConfigError) as exc_info:
            _resolve(**{missing: None})
        assert flag in str(exc_info.value)
        assert env_var in str(exc_info.value)

    def test_invalid_region_flag(self) -> None:
        with pytest.raises(ConfigError, match="Invalid region"):
            _resolve(region="mars")

    def test_invalid_region_env(self) -> None:
        with pytest.raises(ConfigError, match="Invalid region"):
            _resolve(_settings(storyblok_region="xx"))

    @pytest.mark.parametrize("region", ["eu", "us", "ap", "ca", "cn"])
    def test_allowed_regions(self, region: str) -> None:
        assert _resolve(region=region).region == region


class TestRunConfig:
    def test_is_frozen(self) -> None:
        config = _resolve()
        with pytest.raises(AttributeError):
            config.verbose = True  # type: ignore[misc]

    def test_with_locales_returns_copy(self) -> None:
        config = _resolve()
        updated = config.with_locales(["de", "fr"])
        assert updated.locales == ("de", "fr")
        assert config.locales == ()
        assert updated.oauth_token == config.oauth_token
