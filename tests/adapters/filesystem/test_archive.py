from __future__ import annotations

import subprocess
import zipfile
from typing import TYPE_CHECKING

import pytest

from libra2dspace.adapters.filesystem import ZipArchiver, archive_name

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def import_root(tmp_path: Path) -> Path:
    root = tmp_path / "import"
    for name in ("org-a", "org-b", "person-c"):
        (root / name).mkdir(parents=True)
        (root / name / "dublin_core.xml").write_text(f"<{name}/>", encoding="utf-8")
    (root / "person-c" / "relationships").write_text("relation.x y\n", encoding="utf-8")
    return root


def test_archive_name(tmp_path: Path) -> None:
    root = tmp_path / "import"

    assert archive_name(root) == tmp_path / "import.zip"
    assert archive_name(root, 3, 4) == tmp_path / "import-3.zip"
    assert archive_name(root, 3, 12) == tmp_path / "import-03.zip"


def test_single_archive(import_root: Path) -> None:
    (archive,) = ZipArchiver().archive(import_root, [["org-a", "org-b", "person-c"]])

    assert archive == import_root.with_name("import.zip")
    with zipfile.ZipFile(archive) as contents:
        assert sorted(contents.namelist()) == [
            "org-a/dublin_core.xml",
            "org-b/dublin_core.xml",
            "person-c/dublin_core.xml",
            "person-c/relationships",
        ]


def test_numbered_archives(import_root: Path) -> None:
    archives = ZipArchiver().archive(import_root, [["org-a"], ["org-b", "person-c"], []])

    assert [path.name for path in archives] == ["import-1.zip", "import-2.zip"]
    with zipfile.ZipFile(archives[1]) as contents:
        assert {name.split("/")[0] for name in contents.namelist()} == {"org-b", "person-c"}


def test_nothing_to_archive(import_root: Path) -> None:
    assert ZipArchiver().archive(import_root, []) == []


def test_verify_without_unzip(import_root: Path) -> None:
    archiver = ZipArchiver(unzip_command="no-such-unzip-command")

    assert archiver.verify([import_root.with_name("import.zip")])


def test_verify_reports_failures(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    good = tmp_path / "import-1.zip"
    bad = tmp_path / "import-2.zip"
    calls: list[list[str]] = []

    def fake_run(args: list[str], **kwargs: object) -> subprocess.CompletedProcess[str]:
        del kwargs
        calls.append(args)
        code = 0 if args[-1] == str(good) else 1
        return subprocess.CompletedProcess(args, code, stdout="", stderr="bad CRC")

    monkeypatch.setattr("libra2dspace.adapters.filesystem.archive.shutil.which", lambda _: "unzip")
    monkeypatch.setattr("libra2dspace.adapters.filesystem.archive.subprocess.run", fake_run)

    assert ZipArchiver().verify([good]) is True
    assert ZipArchiver().verify([good, bad]) is False
    assert calls[0] == ["unzip", "-tq", str(good)]
