from __future__ import annotations

from collections.abc import Mapping
from typing import Any

DEFAULT_LOCALE = "en-US"

IMAGE_TITLE_FALLBACK = "image"
ENTRY_TITLE_FALLBACK = "entry"
HTTPS_SCHEME = "https:"
HR_PLAIN_TEXT = "---"


def resolve_localized(value: Any, locale: str = DEFAULT_LOCALE, fallback: str | None = None) -> str | None:
    """Pick the ``locale`` entry of a localized mapping, or take a plain string as is.

    Empty strings and missing entries fall through to ``fallback``.
    """
    if isinstance(value, Mapping):
        value = value.get(locale)
    if isinstance(value, str) and value:
        return value
    return fallback


def _fields(target: Any) -> Mapping:
    if isinstance(target, Mapping):
        fields = target.get("fields")
        if isinstance(fields, Mapping):
            return fields
    return {}


def normalize_url(url: str) -> str:
    if url.startswith("//"):
        return HTTPS_SCHEME + url
    return url


def resolve_file_url(target: Any, locale: str = DEFAULT_LOCALE) -> str | None:
    """File URL of a referenced asset; ``fields.file`` may be localized or plain."""
    file = _fields(target).get("file")
    if not isinstance(file, Mapping):
        return None
    localized = file.get(locale)
    if isinstance(localized, Mapping):
        file = localized
    url = file.get("url")
    if not isinstance(url, str) or not url:
        return None
    return normalize_url(url)


def resolve_entry_title(target: Any, locale: str = DEFAULT_LOCALE) -> str:
    """Entry title, then the entry id, then ``"entry"``."""
    title = resolve_localized(_fields(target).get("title"), locale)
    if title:
        return title
    sys = target.get("sys") if isinstance(target, Mapping) else None
    if isinstance(sys, Mapping):
        entry_id = sys.get("id")
        if isinstance(entry_id, str) and entry_id:
            return entry_id
    return ENTRY_TITLE_FALLBACK


def resolve_asset_title(target: Any, locale: str = DEFAULT_LOCALE) -> str:
    return resolve_localized(_fields(target).get("title"), locale, IMAGE_TITLE_FALLBACK)
