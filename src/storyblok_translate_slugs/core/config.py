"""Run configuration via Pydantic Settings and CLI flags.

Credentials and the region fall back to environment variables (or a local
``.env`` file) when the matching CLI flag is not given.  The resolved
``RunConfig`` is built once at startup and never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

REGIONS = ("eu", "us", "ap", "ca", "cn")
DEFAULT_REGION = "eu"
DEFAULT_CONTENT_TYPES = ("page",)
LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class ConfigError(Exception):
    """Raised when the run configuration is missing or invalid."""


class Settings(BaseSettings):
    """Environment fallbacks for the CLI flags."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Storyblok
    storyblok_oauth_token: str | None = Field(
        default=None,
        description="Personal OAuth access token of a Storyblok user (not a space access token)",
    )
    storyblok_space_id: str | None = Field(
        default=None,
        description="ID of the Storyblok space to process",
    )
    storyblok_region: str | None = Field(
        default=None,
        description="Region of the Storyblok space (eu, us, ap, ca, cn)",
    )

    # DeepL
    deepl_api_key: str | None = Field(
        default=None,
        description="DeepL API authentication key",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_dir: str | None = Field(
        default=None,
        description="Directory for log files (enables file logging with 24h rotation when set)",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            msg = f"Invalid log_level {v!r}: must be one of {', '.join(LOG_LEVELS)}"
            raise ValueError(msg)
        return level


@dataclass(frozen=True)
class RunConfig:
    """Effective options for a single translation run."""

    oauth_token: str
    space_id: str
    deepl_api_key: str
    region: str = DEFAULT_REGION
    source_lang: str | None = None
    content_types: tuple[str, ...] = DEFAULT_CONTENT_TYPES
    locales: tuple[str, ...] = ()
    skip_stories: tuple[str, ...] = ()
    only_stories: tuple[str, ...] = ()
    overwrite: bool = False
    publish: bool = False
    dry_run: bool = False
    verbose: bool = False

    def with_locales(self, locales: list[str] | tuple[str, ...]) -> RunConfig:
        """Return a copy with the given target locales."""
        return replace(self, locales=tuple(locales))


def split_list(value: str | None) -> tuple[str, ...]:
    """Parse a comma-separated CLI value into a tuple of trimmed items."""
    if not value or not value.strip():
        return ()
    return tuple(item.strip() for item in value.split(",") if item.strip())


def _require(value: str | None, fallback: str | None, flag: str, env_var: str, label: str) -> str:
    resolved = value or fallback
    if not resolved:
        msg = (
            f"State your {label} via the {flag} argument or the environment variable {env_var}. "
            "Use --help to find out more."
        )
        raise ConfigError(msg)
    return resolved


def resolve_run_config(
    settings: Settings,
    *,
    token: str | None = None,
    space: str | None = None,
    deepl_api_key: str | None = None,
    region: str | None = None,
    source_lang: str | None = None,
    content_types: str | None = None,
    locales: str | None = None,
    skip_stories: str | None = None,
    only_stories: str | None = None,
    overwrite: bool = False,
    publish: bool = False,
    dry_run: bool = False,
    verbose: bool = False,
) -> RunConfig:
    """Merge CLI flags over environment settings into a ``RunConfig``.

    A flag value always wins over its environment counterpart.

    Raises:
        ConfigError: If a required credential is missing or the region is
            not one of ``REGIONS``.
    """
    oauth_token = _require(token, settings.storyblok_oauth_token, "--token", "STORYBLOK_OAUTH_TOKEN", "oauth token")
    space_id = _require(space, settings.storyblok_space_id, "--space", "STORYBLOK_SPACE_ID", "space id")

    resolved_region = region or settings.storyblok_region or DEFAULT_REGION
    if resolved_region not in REGIONS:
        msg = f"Invalid region parameter stated ({resolved_region!r}). Use --help to find out more."
        raise ConfigError(msg)

    api_key = _require(deepl_api_key, settings.deepl_api_key, "--deepl-api-key", "DEEPL_API_KEY", "DeepL API key")

    return RunConfig(
        oauth_token=oauth_token,
        space_id=str(space_id),
        deepl_api_key=api_key,
        region=resolved_region,
        source_lang=source_lang or None,
        content_types=split_list(content_types) or DEFAULT_CONTENT_TYPES,
        locales=split_list(locales),
        skip_stories=split_list(skip_stories),
        only_stories=split_list(only_stories),
        overwrite=overwrite,
        publish=publish,
        dry_run=dry_run,
        verbose=verbose,
    )


def get_settings() -> Settings:
    """Create and return environment settings.

    Raises:
        ConfigError: If an environment value is invalid.
    """
    try:
        return Settings()
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']).upper()}: {error['msg']}" for error in exc.errors()
        )
        msg = f"Invalid environment configuration ({problems})."
        raise ConfigError(msg) from exc
