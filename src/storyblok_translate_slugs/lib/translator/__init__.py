"""Translator library — DeepL translation and slug generation.

Public API:
    - DeepLTranslator: Synchronous DeepL API client
    - TranslationResult: Translated text plus billing/detection metadata
    - TranslatorError: Transport/API error type
    - slugify: URL-safe slug generation
"""

from storyblok_translate_slugs.lib.translator.deepl import (
    DeepLTranslator,
    TranslationResult,
    TranslatorError,
    base_url_for_key,
)
from storyblok_translate_slugs.lib.translator.slugs import slugify

__all__ = [
    "DeepLTranslator",
    "TranslationResult",
    "TranslatorError",
    "base_url_for_key",
    "slugify",
]
