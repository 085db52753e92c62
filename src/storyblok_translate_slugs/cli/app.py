"""Typer CLI application: translate story slugs and names of a Storyblok space."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Annotated

import typer
from loguru import logger

from storyblok_translate_slugs.core.config import ConfigError, get_settings, resolve_run_config
from storyblok_translate_slugs.core.logging import setup_logging
from storyblok_translate_slugs.lib.storyblok import StoryblokClient, StoryblokError
from storyblok_translate_slugs.lib.translator import DeepLTranslator, TranslatorError
from storyblok_translate_slugs.services import slug_translation_service
from storyblok_translate_slugs.services.slug_translation_service import RunTotals, SlugTranslationError

if TYPE_CHECKING:
    from storyblok_translate_slugs.core.config import RunConfig

_EPILOG = """\
Minimal example:

  storyblok-translate-slugs --token 1234567890abcdef --space 12345 --deepl-api-key 1234567890abcdef

Maximal example:

  storyblok-translate-slugs --token 1234567890abcdef --space 12345 --deepl-api-key 1234567890abcdef
  --region us --source-lang en --content-types "page,news-article" --skip-stories "home"
  --locales "de,fr" --overwrite --publish --dry-run
"""

app = typer.Typer(
    name="storyblok-translate-slugs",
    help="Translate the slugs and names of Storyblok stories into all (or selected) space languages via DeepL.",
    add_completion=False,
)


@app.command(epilog=_EPILOG)
def translate_slugs(
    token: Annotated[
        str | None,
        typer.Option(
            "--token",
            help="(required) Personal OAuth access token of a Storyblok user (NOT the access token of a space). "
            "Alternatively, set STORYBLOK_OAUTH_TOKEN.",
            show_default=False,
        ),
    ] = None,
    space: Annotated[
        str | None,
        typer.Option("--space", help="(required) ID of the space. Alternatively, set STORYBLOK_SPACE_ID."),
    ] = None,
    deepl_api_key: Annotated[
        str | None,
        typer.Option("--deepl-api-key", help="(required) DeepL API key. Alternatively, set DEEPL_API_KEY."),
    ] = None,
    region: Annotated[
        str | None,
        typer.Option(
            "--region",
            help="Region of the space: eu (default), us, ap, ca or cn. Alternatively, set STORYBLOK_REGION.",
        ),
    ] = None,
    source_lang: Annotated[
        str | None,
        typer.Option("--source-lang", help="Source locale to translate from. Defaults to DeepL auto-detection."),
    ] = None,
    content_types: Annotated[
        str | None,
        typer.Option("--content-types", help="Comma separated list of content types to process. Defaults to 'page'."),
    ] = None,
    skip_stories: Annotated[
        str | None,
        typer.Option("--skip-stories", help='Comma separated full slugs of stories to skip (e.g. "home,about-us").'),
    ] = None,
    only_stories: Annotated[
        str | None,
        typer.Option(
            "--only-stories",
            help='Comma separated full slugs of the only stories to process (e.g. "about-us").',
        ),
    ] = None,
    locales: Annotated[
        str | None,
        typer.Option("--locales", help='Comma separated locales to process (e.g. "de,fr"). Empty for all languages.'),
    ] = None,
    overwrite: Annotated[
        bool,
        typer.Option("--overwrite", help="Overwrite existing published translations."),
    ] = False,
    publish: Annotated[
        bool,
        typer.Option("--publish", help="Publish stories after updating. WARNING: may publish unpublished stories."),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Only display the changes instead of performing them."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Show detailed output for every processed story."),
    ] = False,
) -> None:
    """Translate story slugs and names of a Storyblok space with DeepL."""
    start = time.monotonic()

    try:
        settings = get_settings()
        setup_logging(settings.log_level, log_dir=settings.log_dir, verbose=verbose)
        config = resolve_run_config(
            settings,
            token=token,
            space=space,
            deepl_api_key=deepl_api_key,
            region=region,
            source_lang=source_lang,
            content_types=content_types,
            locales=locales,
            skip_stories=skip_stories,
            only_stories=only_stories,
            overwrite=overwrite,
            publish=publish,
            dry_run=dry_run,
            verbose=verbose,
        )
    except ConfigError as exc:
        typer.echo(f"Error: {exc}")
        raise typer.Exit(code=1) from exc

    try:
        with (
            StoryblokClient(config.oauth_token, region=config.region) as client,
            DeepLTranslator(config.deepl_api_key) as translator,
        ):
            totals = _run(config, client, translator)
    except (SlugTranslationError, StoryblokError, TranslatorError) as exc:
        logger.debug("Run aborted: {!r}", exc)
        typer.echo(f"Error: {exc}")
        raise typer.Exit(code=1) from exc

    elapsed = time.monotonic() - start
    typer.echo("")
    typer.echo(f"Process successfully finished in {round(elapsed)} seconds.")
    typer.echo(f"Total DeepL billed characters: {totals.billed_characters}")


def _run(config: RunConfig, client: StoryblokClient, translator: DeepLTranslator) -> RunTotals:
    """Resolve locales, select stories, and translate them."""
    totals = RunTotals()

    if not config.locales:
        typer.echo("No locales stated.")
        typer.echo("Fetching space locales...")
        config = config.with_locales(slug_translation_service.resolve_locales(client, config))

    _print_header(config)

    if not config.locales:
        logger.warning("Space {} has no languages configured; nothing to translate", config.space_id)
        return totals

    typer.echo("")
    typer.echo("Fetching stories...")
    stories = slug_translation_service.select_stories(client, config)

    typer.echo("")
    typer.echo("Processing stories...")
    slug_translation_service.process_stories(stories, client, translator, config, totals, echo=typer.echo)

    logger.info(
        "Processed {} stories, updated {}, added {} translations",
        totals.stories_processed,
        totals.stories_updated,
        totals.translations_added,
    )
    return totals


def _print_header(config: RunConfig) -> None:
    """Print the effective run options."""
    if config.dry_run:
        mode = "dry-run"
    else:
        mode = "live (publish)" if config.publish else "live (no-publish)"

    typer.echo("")
    typer.echo(f"Performing translation of story-slugs and -names for space {config.space_id}:")
    typer.echo(f"- mode: {mode}")
    typer.echo(f"- source locale: {config.source_lang or 'auto-detect'}")
    typer.echo(f"- target locales: {', '.join(config.locales)}")
    typer.echo(f"- content types: {', '.join(config.content_types)}")
    if config.skip_stories:
        typer.echo(f"- skipped stories: {', '.join(config.skip_stories)}")
    if config.only_stories:
        typer.echo(f"- only stories: {', '.join(config.only_stories)}")
