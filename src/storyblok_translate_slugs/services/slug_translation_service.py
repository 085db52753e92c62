"""Slug translation service — per-story, per-locale translation of slugs and names.

Decides which locales of a story need (re)translation, translates the
story's slug and name with DeepL, re-slugifies the translated slug, and
writes the result back to Storyblok as ``translated_slugs_attributes``.
Billing and source-language detection are folded into an explicit
``RunTotals`` accumulator.
"""

from collections.abc import Callable
from dataclasses import dataclass

from loguru import logger

from storyblok_translate_slugs.core.config import RunConfig
from storyblok_translate_slugs.lib.storyblok import Story, StoryblokClient, TranslatedSlug
from storyblok_translate_slugs.lib.translator import DeepLTranslator, slugify

Echo = Callable[[str], None]


class SlugTranslationError(Exception):
    """Base class for fatal conditions detected while translating stories."""


class MissingLocalizedPathsError(SlugTranslationError):
    """Raised when a story record carries no ``localized_paths``."""

    def __init__(self, full_slug: str) -> None:
        self.full_slug = full_slug
        super().__init__(
            f'"localized_paths" key not found in story "{full_slug}". '
            'Do you have the "Translatable Slug" app installed?'
        )


class SourceLanguageMismatchError(SlugTranslationError):
    """Raised when DeepL auto-detects a different source language than before."""

    def __init__(self, detected: str | None, expected: str) -> None:
        self.detected = detected
        self.expected = expected
        super().__init__(
            f"Detected source language ({detected}) is different from previously detected languages "
            f"({expected}). You might want to state a fixed source language using the --source-lang parameter."
        )


@dataclass
class RunTotals:
    """Counters accumulated over a whole run."""

    billed_characters: int = 0
    detected_source_lang: str | None = None
    stories_processed: int = 0
    stories_updated: int = 0
    translations_added: int = 0


def resolve_locales(client: StoryblokClient, config: RunConfig) -> tuple[str, ...]:
    """Return the explicit locales, or every language configured for the space."""
    if config.locales:
        return config.locales
    return tuple(client.get_space_languages(config.space_id))


def story_matches(story: Story, config: RunConfig) -> bool:
    """Whether a story summary passes the folder, content-type, skip and only filters."""
    if story.is_folder:
        return False
    if story.content_type not in config.content_types:
        return False
    if story.full_slug in config.skip_stories:
        return False
    if config.only_stories and story.full_slug not in config.only_stories:
        return False
    return True


def select_stories(client: StoryblokClient, config: RunConfig) -> list[Story]:
    """Fetch the full record of every story in the space that passes the filters."""
    stories: list[Story] = []
    for summary in client.iter_stories(config.space_id):
        if not story_matches(summary, config):
            continue
        stories.append(client.get_story(config.space_id, summary.id))
    logger.debug("Selected {} stories for translation", len(stories))
    return stories


def translate(
    translator: DeepLTranslator,
    text: str,
    locale: str,
    config: RunConfig,
    totals: RunTotals,
) -> str:
    """Translate one text and fold the result into ``totals``.

    Billed characters are counted before the source-language check, so
    a call that triggers a mismatch is still accounted for.

    Raises:
        SourceLanguageMismatchError: If auto-detection reports a language
            different from the first one detected in this run.
    """
    result = translator.translate_text(text, locale, config.source_lang)
    totals.billed_characters += result.billed_characters

    if config.source_lang is None and result.detected_source_lang is not None:
        if totals.detected_source_lang is None:
            totals.detected_source_lang = result.detected_source_lang
        elif result.detected_source_lang != totals.detected_source_lang:
            raise SourceLanguageMismatchError(result.detected_source_lang, totals.detected_source_lang)

    return result.text


def translate_story(
    story: Story,
    config: RunConfig,
    translator: DeepLTranslator,
    totals: RunTotals,
    echo: Echo = logger.info,
) -> list[TranslatedSlug]:
    """Translate slug and name of one story into every configured locale.

    Locales with a published translation are skipped unless ``overwrite``
    is set.  New entries are appended to the story in place.

    Returns:
        The entries added to the story (empty when nothing was needed).

    Raises:
        MissingLocalizedPathsError: If the story has no ``localized_paths``.
        SourceLanguageMismatchError: See ``translate``.
    """
    added: list[TranslatedSlug] = []
    for locale in config.locales:
        if story.localized_paths is None:
            raise MissingLocalizedPathsError(story.full_slug)

        existing = story.localized_path(locale)
        if existing is not None and existing.published and not config.overwrite:
            if config.verbose:
                echo(
                    f'Skipped translation for locale "{locale}" due to published translations of '
                    "name/slug already present. Use --overwrite, if you want to overwrite existing translation."
                )
            continue

        translated_slug = slugify(translate(translator, story.slug, locale, config, totals))
        if not translated_slug:
            logger.warning(
                'Translated slug of "{}" for locale "{}" is empty after slugify; keeping "{}"',
                story.full_slug,
                locale,
                story.slug,
            )
            translated_slug = story.slug
        translated_name = translate(translator, story.name, locale, config, totals)

        entry = TranslatedSlug(lang=locale, slug=translated_slug, name=translated_name)
        story.add_translated_slug(entry)
        added.append(entry)

    return added


def process_stories(
    stories: list[Story],
    client: StoryblokClient,
    translator: DeepLTranslator,
    config: RunConfig,
    totals: RunTotals,
    echo: Echo = logger.info,
) -> RunTotals:
    """Translate and write back each story in order.

    In dry-run mode the would-be entries are reported but never written.
    """
    for story in stories:
        if config.verbose:
            echo("")
            echo(f"Default full slug: {story.full_slug}")
            echo(f"Default name: {story.name}")

        added = translate_story(story, config, translator, totals, echo)
        totals.stories_processed += 1

        if not added:
            if config.verbose:
                echo("No translations needed.")
            continue

        totals.translations_added += len(added)
        entries = ", ".join(
            f"{{lang: {e.lang!r}, slug: {e.slug!r}, name: {e.name!r}}}"
            for e in story.translated_slugs_attributes or []
        )
        if config.verbose:
            echo(f"Updated translated slugs: [{entries}]")

        if config.dry_run:
            if config.verbose:
                echo("Dry-run mode. No changes performed.")
            else:
                echo(f"Would update {story.full_slug}: [{entries}]")
            continue

        client.update_story(config.space_id, story, publish=config.publish)
        totals.stories_updated += 1
        logger.debug("Updated story {} ({})", story.id, story.full_slug)
        if config.verbose:
            echo("Update successful.")

    return totals
