from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from libra2dspace.domain.import_pipeline import ImportContext, TranslationTable, Translations

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def translations() -> Translations:
    return Translations(
        institution=TranslationTable(
            {
                "UVa": "University of Virginia",
                "VCU": "Virginia Commonwealth University",
            }
        ),
        school=TranslationTable(
            {
                "EN": "School of Engineering and Applied Science",
                "MD": "School of Medicine",
            }
        ),
        department=TranslationTable({"Comp Science": "Computer Science"}),
    )


@pytest.fixture
def context(translations: Translations) -> ImportContext:
    return ImportContext(translations=translations)


@pytest.fixture
def export_root(tmp_path: Path) -> Path:
    root = tmp_path / "libra-export"
    root.mkdir()
    return root


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for name in (
        "COMMON_ROOT",
        "EXPORT_DIR",
        "IMPORT_DIR",
        "DSPACE_API",
        "ORG_COLLECTION",
        "USR_COLLECTION",
        "PUB_COLLECTION",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("LIBRA2DSPACE_DATA_DIR", str(tmp_path / "data"))
