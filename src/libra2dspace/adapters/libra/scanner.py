"""Walk a LibraOpen export directory and build one ``ExportRecord`` per work."""

from __future__ import annotations

import re
from logging import getLogger
from typing import TYPE_CHECKING, Final

from pydantic import BaseModel, ValidationError

from libra2dspace.domain.import_pipeline.persons import normalize_cid, normalize_orcid
from libra2dspace.domain.model import EXPORT_PREFIX, ExportFileRole, ExportRecord

from .schema import (
    EmbargoPayload,
    FilesetPayload,
    PersonPayload,
    RightsPayload,
    VisibilityPayload,
    WorkPayload,
)
from .translator import translate_embargo, translate_fileset, translate_person, translate_work

if TYPE_CHECKING:
    from collections.abc import Collection, Iterator
    from pathlib import Path

log = getLogger(__name__)

SINGLE_FILES: Final[dict[str, ExportFileRole]] = {
    "work.json": ExportFileRole.METADATA,
    "rights.json": ExportFileRole.RIGHTS,
    "embargo.json": ExportFileRole.EMBARGO,
    "visibility.json": ExportFileRole.VISIBILITY,
}
PREFIXED_FILES: Final[dict[str, ExportFileRole]] = {
    "author-": ExportFileRole.AUTHOR,
    "contributor-": ExportFileRole.CONTRIBUTOR,
    "fileset-": ExportFileRole.FILESET,
}

_DIGITS = re.compile(r"(\d+)")


class ExportScanError(RuntimeError):
    """Raised when the export directory itself cannot be read."""


def classify(name: str) -> ExportFileRole:
    """Role of the file called ``name`` inside a record directory."""

    if role := SINGLE_FILES.get(name):
        return role
    for prefix, role in PREFIXED_FILES.items():
        if name.startswith(prefix):
            return role
    return ExportFileRole.CONTENT


def _natural_key(path: Path) -> tuple[object, ...]:
    return tuple(int(part) if part.isdecimal() else part for part in _DIGITS.split(path.name))


def _record_dirs(root: Path) -> Iterator[tuple[str, Path]]:
    try:
        entries = sorted(root.iterdir(), key=_natural_key)
    except OSError as exc:
        raise ExportScanError(f"Cannot read export directory {root}: {exc}") from exc
    for entry in entries:
        name = entry.name
        if name.startswith("."):
            continue
        external_id = name.removeprefix(EXPORT_PREFIX)
        if not entry.is_dir() or not name.startswith(EXPORT_PREFIX) or not external_id:
            log.warning("%s: ignored", entry)
            continue
        yield external_id, entry


def scan_exports(
    root: Path,
    *,
    select: Collection[str] | None = None,
    reject: Collection[str] | None = None,
    max_records: int | None = None,
) -> list[ExportRecord]:
    """Return the selected export records below ``root``.

    ``select`` and ``reject`` hold external ids; a record in both is rejected.
    ``max_records`` keeps the first N records in directory order.
    """

    found = dict(_record_dirs(root))
    ids = list(found)
    if select:
        wanted = set(select)
        missing = sorted(wanted.difference(found))
        if missing:
            log.warning("Not in %s: %s", root, ", ".join(missing))
        ids = [external_id for external_id in ids if external_id in wanted]
    if reject:
        unwanted = set(reject)
        kept = [external_id for external_id in ids if external_id not in unwanted]
        log.info("Skipping %s records", len(ids) - len(kept))
        ids = kept
    if max_records is not None and max_records >= 0:
        ids = ids[:max_records]
    log.info("Scanning %s export records in %s", len(ids), root)
    return [load_record(external_id, found[external_id]) for external_id in ids]


def _load[M: BaseModel](model: type[M], path: Path) -> M:
    try:
        return model.model_validate_json(path.read_bytes())
    except (OSError, ValidationError) as exc:
        log.error("%s: unreadable %s: %s", path, model.__name__, exc)
        return model()


def load_record(external_id: str, directory: Path) -> ExportRecord:
    files: dict[ExportFileRole, list[Path]] = {}
    for path in sorted(directory.iterdir(), key=_natural_key):
        if path.name.startswith("."):
            continue
        if not path.is_file():
            log.warning("%s: ignored", path)
            continue
        files.setdefault(classify(path.name), []).append(path)

    def single(role: ExportFileRole) -> Path | None:
        paths = files.get(role)
        return paths[0] if paths else None

    def people(role: ExportFileRole) -> list[PersonPayload]:
        payloads = [_load(PersonPayload, path) for path in files.get(role, [])]
        return sorted(payloads, key=lambda p: p.index if p.index is not None else len(payloads))

    record = ExportRecord(external_id=external_id, directory=directory, files=files)
    rights_path = single(ExportFileRole.RIGHTS)
    rights = _load(RightsPayload, rights_path) if rights_path else None
    if work_path := single(ExportFileRole.METADATA):
        record.work = translate_work(_load(WorkPayload, work_path), rights)
    else:
        log.error("%s: no work.json", directory)
    if visibility_path := single(ExportFileRole.VISIBILITY):
        record.visibility = _load(VisibilityPayload, visibility_path).visibility
    if embargo_path := single(ExportFileRole.EMBARGO):
        record.embargo = translate_embargo(_load(EmbargoPayload, embargo_path))
    record.authors = tuple(map(translate_person, people(ExportFileRole.AUTHOR)))
    record.contributors = tuple(map(translate_person, people(ExportFileRole.CONTRIBUTOR)))
    record.filesets = tuple(
        translate_fileset(_load(FilesetPayload, path), path)
        for path in files.get(ExportFileRole.FILESET, [])
    )

    depositor = normalize_cid(record.work.depositor)
    orcid = normalize_orcid(record.work.author_orcid_url)
    if depositor and orcid:
        record.orcid[depositor] = orcid
    return record
