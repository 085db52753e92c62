"""URL-safe slug generation for translated text."""

import re

from slugify import slugify as _slugify

# Applied to lowercased text before transliteration
_REPLACEMENTS = [
    ("&", " and "),
    ("ä", "ae"),
    ("ö", "oe"),
    ("ü", "ue"),
    ("ß", "ss"),
]

_CAMEL_BOUNDARIES = (
    re.compile(r"([a-z0-9])([A-Z])"),
    re.compile(r"([A-Z]+)([A-Z][a-z0-9])"),
)


def slugify(text: str) -> str:
    """Convert text into a lowercase, hyphen-separated path segment.

    camelCase words are split, German umlauts are spelled out, every other
    script is transliterated to ASCII (``"О нас"`` becomes ``o-nas``), and
    every run of characters outside ``[a-z0-9]`` becomes a single hyphen.
    Applying it to its own output returns the same string.

    Args:
        text: Arbitrary text, typically a translated slug.

    Returns:
        Slug such as ``ueber-uns`` for ``"Über uns"``.  Empty when the text
        holds nothing that can be transliterated.
    """
    value = text.strip()
    for pattern in _CAMEL_BOUNDARIES:
        value = pattern.sub(r"\1 \2", value)
    return _slugify(value.lower(), replacements=_REPLACEMENTS)
