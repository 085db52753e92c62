"""Pydantic models for Storyblok Management API story records.

Only the fields this tool reads or writes are declared.  Every other key of
the record is kept as an extra field so the full story can be sent back
unchanged as a replacement payload.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LocalizedPath(BaseModel):
    """Per-locale slug/name override provided by the Translatable Slug app."""

    model_config = ConfigDict(extra="allow")

    lang: str
    path: str | None = None
    name: str | None = None
    published: bool = False

    @field_validator("published", mode="before")
    @classmethod
    def _coerce_published(cls, v: Any) -> Any:
        return bool(v)


class TranslatedSlug(BaseModel):
    """Entry of ``translated_slugs_attributes`` written back to a story."""

    model_config = ConfigDict(extra="allow")

    lang: str
    slug: str
    name: str


class Story(BaseModel):
    """A story as returned by the list (summary) or detail endpoint.

    ``localized_paths`` is ``None`` when the record has no such key, which
    means the space does not have translatable slugs enabled.
    ``translated_slugs_attributes`` is ``None`` until a translation is added.
    """

    model_config = ConfigDict(extra="allow")

    id: int
    name: str = ""
    slug: str = ""
    full_slug: str = ""
    content_type: str | None = None
    is_folder: bool = False
    localized_paths: list[LocalizedPath] | None = None
    translated_slugs_attributes: list[TranslatedSlug] | None = None

    @field_validator("is_folder", mode="before")
    @classmethod
    def _coerce_is_folder(cls, v: Any) -> Any:
        return bool(v)

    def localized_path(self, lang: str) -> LocalizedPath | None:
        """Return the existing localized path for ``lang``, if any."""
        for item in self.localized_paths or []:
            if item.lang == lang:
                return item
        return None

    def add_translated_slug(self, entry: TranslatedSlug) -> None:
        """Append a translated slug, creating the list when absent."""
        if self.translated_slugs_attributes is None:
            self.translated_slugs_attributes = []
        self.translated_slugs_attributes.append(entry)

    def to_payload(self) -> dict[str, Any]:
        """Render the full story record for a replacement ``PUT``."""
        return self.model_dump(mode="json", exclude_unset=True)
