"""Translate LibraOpen work values into DSpace Dublin Core values."""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Final

LANGUAGE: Final[dict[str, str]] = {
    "Chinese": "zh",
    "English": "en",
    "French": "fr",
    "German": "de",
    "Italian": "it",
    "Japanese": "ja",
    "Portuguese": "pt",
    "Russian": "ru",
    "Spanish": "es",
    "Turkish": "tr",
}

#: ``dc.rights`` by LibraOpen rights index.
RIGHTS: Final[tuple[str, ...]] = (
    "All rights reserved (no additional license for public reuse)",
    "CC0 1.0 Universal",
    "Attribution 2.0 Generic (CC BY)",
    "Attribution 4.0 International (CC BY)",
    "Attribution-NoDerivatives 4.0 International (CC BY-ND)",
    "Attribution-NonCommercial 4.0 International (CC BY-NC)",
    "Attribution-NonCommercial-NoDerivatives 4.0 International (CC BY-NC-ND)",
    "Attribution-NonCommercial-ShareAlike 4.0 International (CC BY-NC-SA)",
    "Attribution-ShareAlike 4.0 International (CC BY-SA)",
)

#: ``dc.rights.uri`` by LibraOpen rights index.
RIGHTS_URI: Final[tuple[str | None, ...]] = (
    None,
    "https://creativecommons.org/publicdomain/zero/1.0/",
    "https://creativecommons.org/licenses/by/2.0/",
    "https://creativecommons.org/licenses/by/4.0/",
    "https://creativecommons.org/licenses/by-nd/4.0/",
    "https://creativecommons.org/licenses/by-nc/4.0/",
    "https://creativecommons.org/licenses/by-nc-nd/4.0/",
    "https://creativecommons.org/licenses/by-nc-sa/4.0/",
    "https://creativecommons.org/licenses/by-sa/4.0/",
)

RESOURCE_TYPE: Final[dict[str, str]] = {
    "Part of Book": "Book chapter",
    "Educational Resource": "Learning Object",
    "Map or Cartographic Material": "Map",
    "Report": "Technical Report",
}

#: Keyword values that are not lists; ``None`` keeps the value whole.
SUBJECT_PHRASE: Final[dict[str, tuple[str, ...] | None]] = {
    "Artificial Intelligence (AI)": ("Artificial Intelligence", "AI"),
    "Artificial intelligence (AI)": ("Artificial Intelligence", "AI"),
    "Broadband, equity, digital": ("Broadband", "Digital Equity"),
    "Charlottesville, VA": None,
    "Charlottesville, Virginia": ("Charlottesville, VA",),
    "Computer, Math, and Physical Sciences": None,
    "Exploratory data analysis (EDA)": ("Exploratory Data Analysis", "EDA"),
    "Machine learning (ML)": ("Machine Learning", "ML"),
    "Natural Language Processing (NLP)": ("Natural Language Processing", "NLP"),
    "Open Educational Resources (OER)": ("Open Educational Resources", "OER"),
    "Social Justice, Equity and Inclusion": ("Social Justice", "Equity", "Inclusion"),
    "Social Justice, Equity, and Inclusion": ("Social Justice", "Equity", "Inclusion"),
    "Vietnamese Conflict, 1961-1975": None,
}

#: Keyword words that keep their case.
SUBJECT_WORD: Final[frozenset[str]] = frozenset(
    {
        "a",
        "an",
        "and",
        "bin",
        "cMYC",
        "de",
        "des",
        "fMRI",
        "for",
        "iTHRIV",
        "in",
        "lncRNA",
        "mHealth",
        "of",
        "on",
        "the",
    }
)

#: Keyword words that are misspelled or need a different form.
SUBJECT_FIX: Final[dict[str, str]] = {
    "19th-Century": "19th Century",
    "Catalogue": "Catalog",
    "Decision-making": "Decision-Making",
    "Evidence-based": "Evidence-Based",
    "First-generation": "First-Generation",
    "Humanites": "Humanities",
    "Ithriv": "iTHRIV",
    "Low-income": "Low-Income",
    "Nih": "NIH",
    "Nsf": "NSF",
    "Peer-reviewed": "Peer-Reviewed",
    "UVa": "UVA",
    "Well-being": "Well-Being",
}

_QUOTES = re.compile(r'"')
_TRAILING_PUNCT = re.compile(r"\s*[,.]+$")
_SUBJECT_SPLIT = re.compile(r"\s*[,;]\s*")
_DOI_SCHEME = re.compile(r"^doi:", re.IGNORECASE)
_DOI_HOST = re.compile(r"^https?://(\w+\.)*doi\.org", re.IGNORECASE)
_NOT_YET = re.compile(r"^(forthcoming|in.progress)\D*", re.IGNORECASE)
_FRACTION = re.compile(r"\.\d+(Z|\+\d\d?:\d\d)$")
_UTC_OFFSET = re.compile(r"\+00:00$")

_SEASONS: Final[dict[str, int]] = {"spring": 3, "summer": 6, "fall": 9, "winter": 12}
_DATE_FORMS: Final[tuple[tuple[re.Pattern[str], str], ...]] = (
    (re.compile(r"^(?P<y>\d{4})$"), "y"),
    (re.compile(r"^(?P<s>spring|summer|fall|winter) (?P<y>\d{4})$", re.IGNORECASE), "ys"),
    (re.compile(r"^(?P<y>\d{4})-(?P<m>\d{1,2})$"), "ym"),
    (re.compile(r"^(?P<y>\d{4})-(?P<m>\d{1,2})-(?P<d>\d{1,2})( *T.*)?$"), "ymd"),
    (re.compile(r"^(?P<m>\d{1,2})/(?P<d>\d{1,2})/(?P<y>\d{4})$"), "ymd"),
    (re.compile(r"^(?P<m>\d{1,2})/(?P<d>\d{1,2})/(?P<yy>[012]\d)$"), "20"),
    (re.compile(r"^(?P<m>\d{1,2})/(?P<d>\d{1,2})/(?P<yy>\d{2})$"), "19"),
)
_FALLBACK_FORMATS: Final[tuple[str, ...]] = ("%B %d, %Y", "%b %d, %Y", "%d %B %Y", "%B %Y")


def _text(value: str | None) -> str | None:
    if value is None:
        return None
    return " ".join(value.split()) or None


def _rights_index(value: str | None) -> int | None:
    text = (value or "").strip()
    return int(text) if text.isdigit() else None


def language_iso(value: str | None) -> str | None:
    text = _text(value)
    if text is None:
        return None
    return LANGUAGE.get(text, text)


def rights(value: str | None) -> str | None:
    """``dc.rights`` for a rights index; other text is passed through."""

    index = _rights_index(value)
    if index is None:
        return _text(value)
    return RIGHTS[index] if index < len(RIGHTS) else str(index)


def rights_uri(value: str | None) -> str | None:
    index = _rights_index(value)
    if index is None or index >= len(RIGHTS_URI):
        return None
    return RIGHTS_URI[index]


def _subject_word(word: str) -> str:
    if word in SUBJECT_WORD:
        return word
    word = word[:1].upper() + word[1:]
    return SUBJECT_FIX.get(word, word)


def subject(value: str | None) -> list[str]:
    """Split a keyword value into capitalized subject terms."""

    text = _text(value)
    if text is None:
        return []
    text = _TRAILING_PUNCT.sub("", _QUOTES.sub("", text))
    key = text[:1].upper() + text[1:]
    if key in SUBJECT_PHRASE:
        return list(SUBJECT_PHRASE[key] or (key,))
    return [
        " ".join(_subject_word(word) for word in phrase.split())
        for phrase in _SUBJECT_SPLIT.split(text)
        if phrase
    ]


def resource_type(value: str | None) -> str | None:
    text = _text(value)
    if text is None:
        return None
    return RESOURCE_TYPE.get(text, text)


def doi(value: str | None) -> str | None:
    """Bare DOI without ``doi:`` or resolver prefix."""

    text = (value or "").strip()
    text = _DOI_HOST.sub("", _DOI_SCHEME.sub("", text))
    return text.removeprefix("/") or None


def doi_uri(value: str | None) -> str | None:
    identifier = doi(value)
    return f"https://doi.org/{identifier}" if identifier else None


def _date_parts(match: re.Match[str], form: str) -> tuple[int, int, int]:
    groups = match.groupdict()
    if form == "y":
        return int(groups["y"]), 1, 1
    if form == "ys":
        return int(groups["y"]), _SEASONS[groups["s"].lower()], 1
    if form == "ym":
        return int(groups["y"]), int(groups["m"]), 1
    if form in {"20", "19"}:
        return int(form + groups["yy"]), int(groups["m"]), int(groups["d"])
    return int(groups["y"]), int(groups["m"]), int(groups["d"])


def issue_date(value: str | None) -> str | None:
    """``YYYY-MM-DD`` for the date forms LibraOpen depositors used.

    Values in no recognized form are returned unchanged.
    """

    text = _NOT_YET.sub("", _text(value) or "")
    if not text:
        return None
    for pattern, form in _DATE_FORMS:
        if match := pattern.match(text):
            return "%04d-%02d-%02d" % _date_parts(match, form)
    try:
        return date.fromisoformat(text).isoformat()
    except ValueError:
        pass
    for fmt in _FALLBACK_FORMATS:
        try:
            return datetime.strptime(text, fmt).date().isoformat()
        except ValueError:
            continue
    return text


def submit_date(value: str | None) -> str | None:
    text = (value or "").strip()
    if not text:
        return None
    text = _UTC_OFFSET.sub("Z", _FRACTION.sub(r"\1", text))
    return f"Original submission date: {text}"
