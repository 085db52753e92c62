"""Storyblok library — Management API access for spaces and stories.

Public API:
    - StoryblokClient: Synchronous Management API client
    - StoryblokError: Transport/API error type
    - Story, LocalizedPath, TranslatedSlug: Story record models
    - base_url_for_region: Region to Management API base URL
"""

from storyblok_translate_slugs.lib.storyblok.client import (
    REGION_HOSTS,
    StoryblokClient,
    StoryblokError,
    base_url_for_region,
)
from storyblok_translate_slugs.lib.storyblok.types import LocalizedPath, Story, TranslatedSlug

__all__ = [
    "REGION_HOSTS",
    "LocalizedPath",
    "Story",
    "StoryblokClient",
    "StoryblokError",
    "TranslatedSlug",
    "base_url_for_region",
]
