"""Application orchestration entry points."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from libra2dspace.adapters.dspace import DSpaceLookup, DSpaceRenderer
from libra2dspace.adapters.filesystem import DirectoryWriter, ZipArchiver
from libra2dspace.adapters.libra import scan_exports
from libra2dspace.adapters.translations import load_translations
from libra2dspace.config import get_collection_names, get_paths_config
from libra2dspace.domain.batching import (
    DEFAULT_BATCH_LIMIT,
    check_batch_options,
    partition,
    plan_batches,
)
from libra2dspace.domain.import_pipeline import ImportContext, PhaseOrchestrator
from libra2dspace.domain.model import EntityKind, Phase

if TYPE_CHECKING:
    from collections.abc import Collection
    from datetime import date
    from pathlib import Path

    from libra2dspace.config import CollectionNames, PathsConfig
    from libra2dspace.domain.import_pipeline import PhaseOutcome, Translations
    from libra2dspace.domain.ports import (
        ImportArchiver,
        ImportItemWriter,
        ImportRenderer,
        RepositoryLookup,
    )

log = getLogger(__name__)


@dataclass(slots=True, frozen=True)
class ImportResult:
    """What one run wrote and packaged."""

    outcome: PhaseOutcome
    paths: PathsConfig
    archives: tuple[Path, ...] = ()
    verified: bool | None = None

    @property
    def success(self) -> bool:
        return self.outcome.success and self.verified is not False


def lookup_kinds(phase: Phase) -> tuple[EntityKind, ...]:
    """Destination tables a run at ``phase`` must consult."""

    if phase is Phase.ORG_UNIT:
        return (EntityKind.ORG_UNIT,)
    return (EntityKind.ORG_UNIT, EntityKind.PERSON)


def collection_handles(
    lookup: RepositoryLookup,
    names: CollectionNames,
) -> dict[EntityKind, str]:
    """Resolve the configured collection names to handles."""

    wanted = {
        EntityKind.ORG_UNIT: names.org_unit,
        EntityKind.PERSON: names.person,
        EntityKind.PUBLICATION: names.publication,
    }
    if not any(wanted.values()):
        log.warning("No destination collections configured")
        return {}
    collections = lookup.current_table(EntityKind.COLLECTION)
    handles: dict[EntityKind, str] = {}
    for kind, name in wanted.items():
        if not name:
            continue
        entry = collections.get(name)
        if entry is None or not entry.handle:
            log.warning("Collection %r for %s not found in DSpace", name, kind)
            continue
        handles[kind] = entry.handle
    return handles


def build_context(
    lookup: RepositoryLookup,
    phase: Phase,
    *,
    translations: Translations | None = None,
    collections: CollectionNames | None = None,
) -> ImportContext:
    current = {kind: lookup.current_table(kind) for kind in lookup_kinds(phase)}
    for kind, table in current.items():
        log.info("DSpace holds %s %s entities", len(table), kind)
    return ImportContext(
        translations=translations or load_translations(),
        current=current,
        collections=collection_handles(lookup, collections or get_collection_names()),
    )


def build_import(
    *,
    phase: Phase = Phase.ALL,
    select: Collection[str] | None = None,
    reject: Collection[str] | None = None,
    max_records: int | None = None,
    batch_count: int | None = None,
    batch_size: int | None = None,
    fast: bool = False,
    force: bool = False,
    export_dir: str | Path | None = None,
    import_dir: str | Path | None = None,
    verify: bool = True,
    lookup: RepositoryLookup | None = None,
    renderer: ImportRenderer | None = None,
    writer: ImportItemWriter | None = None,
    archiver: ImportArchiver | None = None,
    translations: Translations | None = None,
    today: date | None = None,
) -> ImportResult:
    """Build the import directory and archives for one phase."""

    check_batch_options(parts=batch_count, size=batch_size)
    paths = get_paths_config(export_dir=export_dir, import_dir=import_dir)
    log.info(
        "Starting import build: phase=%s, export=%s, import=%s, fast=%s, force=%s",
        phase.name,
        paths.export_dir,
        paths.import_dir,
        fast,
        force,
    )

    records = scan_exports(
        paths.export_dir,
        select=select,
        reject=reject,
        max_records=max_records,
    )
    context = build_context(
        lookup or DSpaceLookup(fast=fast),
        phase,
        translations=translations,
    )
    effective_writer = writer or DirectoryWriter(paths.import_dir)
    orchestrator = PhaseOrchestrator(
        context=context,
        renderer=renderer or DSpaceRenderer(today=today),
        writer=effective_writer,
        batch_limit=DEFAULT_BATCH_LIMIT,
        force=force,
        today=today,
    )
    outcome = orchestrator.run(records, phase)
    if not outcome.success:
        return ImportResult(outcome=outcome, paths=paths)

    sizes = plan_batches(len(outcome.written), parts=batch_count, size=batch_size)
    batches = partition(list(outcome.written), sizes)
    effective_archiver = archiver or ZipArchiver()
    archives = effective_archiver.archive(effective_writer.root, batches)
    verified = effective_archiver.verify(archives) if verify else None

    log.info(
        f"Finished import build: items={len(outcome.written)}, archives={len(archives)}, "
        f"verified={verified}"
    )
    return ImportResult(
        outcome=outcome,
        paths=paths,
        archives=tuple(archives),
        verified=verified,
    )
