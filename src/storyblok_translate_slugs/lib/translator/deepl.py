"""DeepL API v2 client for single-text translations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import httpx
from loguru import logger

if TYPE_CHECKING:
    from types import TracebackType

_FREE_BASE_URL = "https://api-free.deepl.com"
_PRO_BASE_URL = "https://api.deepl.com"


class TranslatorError(Exception):
    """Raised when a DeepL call fails.

    Args:
        message: Human-readable error description.
        status_code: Optional HTTP status code from DeepL.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True)
class TranslationResult:
    """Outcome of a single translate call.

    Attributes:
        text: Translated text.
        billed_characters: Characters DeepL billed for the call.
        detected_source_lang: Lowercase source language DeepL detected
            (also reported when a source language was given).
    """

    text: str
    billed_characters: int
    detected_source_lang: str | None = None


def base_url_for_key(api_key: str) -> str:
    """DeepL Free keys end in ``:fx`` and use a separate host."""
    return _FREE_BASE_URL if api_key.endswith(":fx") else _PRO_BASE_URL


def target_lang_code(locale: str) -> str:
    """Map a Storyblok locale (``de``, ``pt-br``) to a DeepL target code."""
    return locale.strip().upper()


def source_lang_code(locale: str) -> str:
    """DeepL source languages carry no regional variant (``en-us`` -> ``EN``)."""
    return locale.strip().split("-")[0].upper()


class DeepLTranslator:
    """Translates text via the DeepL ``/v2/translate`` endpoint.

    Args:
        api_key: DeepL authentication key.
        timeout: Per-request timeout in seconds.
    """

    def __init__(self, api_key: str, timeout: float = 30.0) -> None:
        self._client = httpx.Client(
            base_url=base_url_for_key(api_key),
            headers={"Authorization": f"DeepL-Auth-Key {api_key}"},
            timeout=timeout,
        )

    def __enter__(self) -> DeepLTranslator:
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

    def translate_text(self, text: str, target_lang: str, source_lang: str | None = None) -> TranslationResult:
        """Translate one text.

        Args:
            text: Source text.
            target_lang: Target locale code.
            source_lang: Source locale code, or None for auto-detection.

        Returns:
            The translation with billing and detection metadata.
        """
        body: dict[str, Any] = {
            "text": [text],
            "target_lang": target_lang_code(target_lang),
            "show_billed_characters": True,
        }
        if source_lang:
            body["source_lang"] = source_lang_code(source_lang)

        data = self._post("/v2/translate", body)
        translations = data.get("translations") or []
        if not translations:
            msg = "DeepL response contains no translations"
            raise TranslatorError(msg)

        first = translations[0]
        detected = first.get("detected_source_language")
        return TranslationResult(
            text=first.get("text", ""),
            billed_characters=int(first.get("billed_characters") or 0),
            detected_source_lang=detected.lower() if detected else None,
        )

    def _post(self, path: str, body: dict[str, Any]) -> dict[str, Any]:
        try:
            response = self._client.post(path, json=body)
            response.raise_for_status()
            result: dict[str, Any] = response.json()
            return result
        except httpx.HTTPStatusError as exc:
            logger.error(
                "DeepL API error: {} {} for {}",
                exc.response.status_code,
                exc.response.reason_phrase,
                path,
            )
            raise TranslatorError(
                f"HTTP {exc.response.status_code}: {exc.response.reason_phrase}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.RequestError as exc:
            logger.error("DeepL request failed: {}", exc)
            raise TranslatorError(f"Request failed: {exc}") from exc
        except ValueError as exc:
            logger.error("DeepL returned non-JSON response for {}", path)
            raise TranslatorError(f"Invalid JSON response for {path}") from exc
