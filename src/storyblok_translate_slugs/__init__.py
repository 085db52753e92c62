"""Translate Storyblok story slugs and names with DeepL."""
