"""Value normalization and table-key derivation shared by all entity kinds."""

from __future__ import annotations

import re
import unicodedata
from urllib.parse import quote

KEY_CONNECTOR = "+"

_TRAILING_PUNCTUATION = re.compile(r"[.,;:]+$")
_TRAILING_SEPARATORS = re.compile(r"[+_.]+$")


def squish(value: str | None) -> str | None:
    """Collapse runs of whitespace; blank becomes ``None``."""

    if value is None:
        return None
    text = " ".join(value.split())
    return text or None


def normalize_value(value: str | None) -> str | None:
    """Clean a single free-text field from an export descriptor."""

    text = squish(value)
    if text is None:
        return None
    text = text.replace("\\u0026", "&")
    text = _TRAILING_PUNCTUATION.sub("", text).rstrip()
    return text or None


def _key_part(value: object) -> str | None:
    if value is None:
        return None
    text = unicodedata.normalize("NFKC", str(value)).casefold()
    text = "_".join(text.split())
    if not text:
        return None
    # "_" survives quoting so the connector can never appear inside a part.
    return quote(text, safe="_")


def key_from(*parts: object) -> str | None:
    """Join identity parts into a key usable as a directory name.

    Blank parts are dropped, the rest are case-folded, whitespace-squished and
    percent-escaped. Returns ``None`` when nothing identifying remains.
    """

    escaped = [part for part in map(_key_part, parts) if part]
    if not escaped:
        return None
    key = _TRAILING_SEPARATORS.sub("", KEY_CONNECTOR.join(escaped))
    return key or None
