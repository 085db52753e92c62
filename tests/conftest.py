"""Shared test fixtures for run configuration, environment isolation, and fake clients."""

from collections.abc import Callable
from typing import Any

import pytest

from storyblok_translate_slugs.core.config import RunConfig
from storyblok_translate_slugs.lib.translator import TranslationResult

_ENV_VARS = (
    "STORYBLOK_OAUTH_TOKEN",
    "STORYBLOK_SPACE_ID",
    "STORYBLOK_REGION",
    "DEEPL_API_KEY",
    "LOG_LEVEL",
    "LOG_DIR",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:  # type: ignore[no-untyped-def]
    """Clear credential env vars and run from an empty dir so no real .env is read."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def make_config() -> Callable[..., RunConfig]:
    """Factory for RunConfig with test credentials."""

    def _make(**overrides: Any) -> RunConfig:
        values: dict[str, Any] = {
            "oauth_token": "test-oauth-token",
            "space_id": "12345",
            "deepl_api_key": "test-deepl-key:fx",
            "locales": ("de", "fr"),
        }
        values.update(overrides)
        return RunConfig(**values)

    return _make


def story_record(
    story_id: int = 1,
    slug: str = "about-us",
    name: str = "About Us",
    *,
    full_slug: str | None = None,
    content_type: str = "page",
    localized_paths: list[dict[str, Any]] | None = None,
    **extra: Any,
) -> dict[str, Any]:
    """Build a raw story record as returned by the Management API detail endpoint."""
    record: dict[str, Any] = {
        "id": story_id,
        "name": name,
        "slug": slug,
        "full_slug": full_slug or slug,
        "content_type": content_type,
        "is_folder": False,
        "content": {"component": content_type, "_uid": f"uid-{story_id}"},
        **extra,
    }
    if localized_paths is not None:
        record["localized_paths"] = localized_paths
    return record


class FakeTranslator:
    """In-memory translator returning canned results and recording calls.

    Translations are looked up by ``(text, locale)``; unknown pairs return
    ``"<text> (<locale>)"``.  Each call bills ``len(text)`` characters.
    """

    def __init__(
        self,
        translations: dict[tuple[str, str], str] | None = None,
        detected: list[str] | None = None,
    ) -> None:
        self.translations = translations or {}
        self.detected = list(detected) if detected else []
        self.calls: list[tuple[str, str, str | None]] = []

    def translate_text(self, text: str, target_lang: str, source_lang: str | None = None) -> TranslationResult:
        self.calls.append((text, target_lang, source_lang))
        detected = self.detected.pop(0) if self.detected else "en"
        return TranslationResult(
            text=self.translations.get((text, target_lang), f"{text} ({target_lang})"),
            billed_characters=len(text),
            detected_source_lang=detected,
        )


@pytest.fixture
def make_story_record() -> Callable[..., dict[str, Any]]:
    """Factory for raw story records."""
    return story_record


@pytest.fixture
def make_translator() -> Callable[..., FakeTranslator]:
    """Factory for FakeTranslator instances."""
    return FakeTranslator
