"""Storyblok Management API client.

Synchronous httpx client for the handful of space and story endpoints the
slug translator needs.  No retries: any transport or HTTP error surfaces
as ``StoryblokError``.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

import httpx
from loguru import logger
from pydantic import ValidationError

from storyblok_translate_slugs.lib.storyblok.types import Story

if TYPE_CHECKING:
    from types import TracebackType

# Management API hosts per space region
REGION_HOSTS = {
    "eu": "mapi.storyblok.com",
    "us": "api-us.storyblok.com",
    "ap": "api-ap.storyblok.com",
    "ca": "api-ca.storyblok.com",
    "cn": "app.storyblokchina.cn",
}

_PER_PAGE = 100


class StoryblokError(Exception):
    """Raised when a Management API call fails.

    Args:
        message: Human-readable error description.
        status_code: Optional HTTP status code from the API.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def base_url_for_region(region: str) -> str:
    """Return the Management API base URL for a space region."""
    host = REGION_HOSTS.get(region)
    if host is None:
        msg = f"Unknown Storyblok region: {region!r}. Available: {list(REGION_HOSTS.keys())}"
        raise ValueError(msg)
    return f"https://{host}/v1"


class StoryblokClient:
    """Management API client scoped to OAuth token authentication.

    Args:
        oauth_token: Personal access token of a Storyblok user.
        region: Space region (``eu``, ``us``, ``ap``, ``ca`` or ``cn``).
        timeout: Per-request timeout in seconds.
    """

    def __init__(self, oauth_token: str, region: str = "eu", timeout: float = 30.0) -> None:
        self._client = httpx.Client(
            base_url=base_url_for_region(region),
            headers={"Authorization": oauth_token},
            timeout=timeout,
        )

    def __enter__(self) -> StoryblokClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    def get_space_languages(self, space_id: str) -> list[str]:
        """Return the language codes configured for a space (default language excluded)."""
        data, _ = self._request("GET", f"spaces/{space_id}/")
        space = data.get("space") or {}
        return [language["code"] for language in space.get("languages") or [] if language.get("code")]

    def iter_stories(self, space_id: str) -> Iterator[Story]:
        """Yield every story summary in the space, following pagination.

        Stops when the ``Total`` header says all stories were seen or, if the
        header is missing, when a page comes back short.
        """
        page = 1
        seen = 0
        while True:
            data, headers = self._request(
                "GET",
                f"spaces/{space_id}/stories",
                params={"page": page, "per_page": _PER_PAGE},
            )
            stories = data.get("stories") or []
            for raw in stories:
                yield _parse_story(raw)
            seen += len(stories)

            total = _parse_total(headers.get("total"))
            if not stories or (total is not None and seen >= total):
                break
            if total is None and len(stories) < _PER_PAGE:
                break
            page += 1

    def get_story(self, space_id: str, story_id: int) -> Story:
        """Fetch the full record of a single story."""
        data, _ = self._request("GET", f"spaces/{space_id}/stories/{story_id}")
        if "story" not in data:
            msg = f"Response for story {story_id} has no 'story' key"
            raise StoryblokError(msg)
        return _parse_story(data["story"])

    def update_story(self, space_id: str, story: Story, *, publish: bool = False) -> dict[str, Any]:
        """Replace a story with its in-memory record, optionally publishing it."""
        body: dict[str, Any] = {"story": story.to_payload()}
        if publish:
            body["publish"] = 1
        data, _ = self._request("PUT", f"spaces/{space_id}/stories/{story.id}", json=body)
        return data

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> tuple[dict[str, Any], httpx.Headers]:
        """Make an authenticated request and return (json body, headers)."""
        try:
            response = self._client.request(method, path, params=params, json=json)
            response.raise_for_status()
            result: dict[str, Any] = response.json()
            return result, response.headers
        except httpx.HTTPStatusError as exc:
            logger.error(
                "Storyblok API error: {} {} for {} {}",
                exc.response.status_code,
                exc.response.reason_phrase,
                method,
                path,
            )
            raise StoryblokError(
                f"HTTP {exc.response.status_code}: {exc.response.reason_phrase} ({method} {path})",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.RequestError as exc:
            logger.error("Storyblok request failed: {}", exc)
            raise StoryblokError(f"Request failed: {exc}") from exc
        except ValueError as exc:
            logger.error("Storyblok returned non-JSON response for {} {}", method, path)
            raise StoryblokError(f"Invalid JSON response for {method} {path}") from exc


def _parse_total(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _parse_story(raw: dict[str, Any]) -> Story:
    try:
        return Story.model_validate(raw)
    except ValidationError as exc:
        msg = f"Unexpected story record (id={raw.get('id')!r}): {exc}"
        raise StoryblokError(msg) from exc
