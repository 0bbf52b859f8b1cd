"""Load the packaged name-translation tables."""

from __future__ import annotations

from importlib.resources import files
from logging import getLogger
from typing import TYPE_CHECKING

from libra2dspace.domain.import_pipeline.context import TranslationTable, Translations

if TYPE_CHECKING:
    from pathlib import Path

log = getLogger(__name__)

TABLE_NAMES = ("institution", "school", "department")


def parse_table(text: str, *, source: str = "<table>") -> dict[str, str]:
    """Parse tab-separated ``name<TAB>replacement`` lines; ``#`` starts a comment."""

    entries: dict[str, str] = {}
    for number, line in enumerate(text.splitlines(), start=1):
        if not line.strip() or line.lstrip().startswith("#"):
            continue
        name, sep, replacement = line.partition("\t")
        if not sep or not name.strip() or not replacement.strip():
            log.warning("%s:%s: malformed entry %r", source, number, line)
            continue
        entries[name.strip()] = replacement.strip()
    return entries


def load_translations(directory: Path | None = None) -> Translations:
    """Read ``<name>.tsv`` for each table from ``directory`` or the package data."""

    tables: dict[str, TranslationTable] = {}
    for name in TABLE_NAMES:
        resource = (directory or files("libra2dspace") / "data") / f"{name}.tsv"
        text = resource.read_text(encoding="utf-8") if resource.is_file() else ""
        tables[name] = TranslationTable(parse_table(text, source=str(resource)))
    return Translations(**tables)
