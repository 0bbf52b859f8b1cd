from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from libra2dspace.app import ImportResult
from libra2dspace.config import ConfigurationError, PathsConfig
from libra2dspace.domain.import_pipeline import PendingCounts, PhaseOutcome
from libra2dspace.domain.model import BlockReason, EntityKind, OrgUnitImport, Phase
from libra2dspace.ui import cli

if TYPE_CHECKING:
    from pathlib import Path


def _result(
    tmp_path: Path,
    *,
    outcome: PhaseOutcome | None = None,
    verified: bool | None = True,
) -> ImportResult:
    return ImportResult(
        outcome=outcome or PhaseOutcome(phase=Phase.ALL, pending=PendingCounts(), written=("x",)),
        paths=PathsConfig(tmp_path, tmp_path / "export", tmp_path / "import"),
        archives=(tmp_path / "import.zip",),
        verified=verified,
    )


@pytest.fixture
def captured(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> dict[str, object]:
    calls: dict[str, object] = {}

    def fake_build_import(**kwargs: object) -> ImportResult:
        calls.update(kwargs)
        return _result(tmp_path)

    monkeypatch.setattr(cli, "build_import", fake_build_import)
    return calls


def test_main_cli_defaults(captured: dict[str, object]) -> None:
    cli.main([])

    assert captured["phase"] is Phase.ALL
    assert captured["select"] is None
    assert captured["reject"] is None
    assert captured["max_records"] is None
    assert captured["batch_count"] is None
    assert captured["batch_size"] is None
    assert captured["fast"] is False
    assert captured["verify"] is True


def test_main_cli_with_flags(captured: dict[str, object], tmp_path: Path) -> None:
    skip_file = tmp_path / "skip.txt"
    skip_file.write_text("export-x1 already imported\n\nX2\n", encoding="utf-8")

    cli.main(
        [
            "--phase",
            "3",
            "--record",
            "export-ABC, import-def.zip;ghi,ghi",
            "--skip",
            str(skip_file),
            "--max-records",
            "5",
            "--batch-size",
            "10",
            "--fast",
            "--force",
            "--no-verify",
            "--quiet",
        ]
    )

    assert captured["phase"] is Phase.PUBLICATION
    assert captured["select"] == ["abc", "def", "ghi"]
    assert captured["reject"] == ["x1", "x2"]
    assert captured["max_records"] == 5
    assert captured["batch_size"] == 10
    assert captured["fast"] is True
    assert captured["force"] is True
    assert captured["verify"] is False


@pytest.mark.parametrize(
    "argv",
    [
        ["--phase", "7"],
        ["--batch-size", "0"],
        ["--batch-size", "1001"],
        ["--batch-count", "0"],
        ["--max-records", "-1"],
        ["--batch-count", "2", "--batch-size", "5"],
    ],
)
def test_main_cli_invalid_options(captured: dict[str, object], argv: list[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(argv)

    assert excinfo.value.code == 2
    assert captured == {}


def test_blocked_run_prints_pending_entities(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    outcome = PhaseOutcome(
        phase=Phase.PUBLICATION,
        pending=PendingCounts(org_units=1, persons=1, publications=1),
        reason=BlockReason.ORG_UNITS_PENDING,
        message="1 org-units must be imported before PUBLICATION",
        blocked_kind=EntityKind.ORG_UNIT,
        blocked_table={"computer_science": OrgUnitImport(title_name="Computer Science")},
    )
    monkeypatch.setattr(cli, "build_import", lambda **_: _result(tmp_path, outcome=outcome))

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--phase", "3"])

    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert "1 org-units must be imported before PUBLICATION" in err
    assert "computer_science  Computer Science" in err


def test_failed_verification_exits_nonzero(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setattr(cli, "build_import", lambda **_: _result(tmp_path, verified=False))

    with pytest.raises(SystemExit) as excinfo:
        cli.main([])

    assert excinfo.value.code == 1


@pytest.mark.parametrize(
    ("error", "code"),
    [(ConfigurationError("Missing configuration for: DSPACE_API"), 2), (RuntimeError("boom"), 1)],
)
def test_build_errors_exit_with_status(
    monkeypatch: pytest.MonkeyPatch, error: Exception, code: int
) -> None:
    def fail(**kwargs: object) -> ImportResult:
        del kwargs
        raise error

    monkeypatch.setattr(cli, "build_import", fail)

    with pytest.raises(SystemExit) as excinfo:
        cli.main([])

    assert excinfo.value.code == code
