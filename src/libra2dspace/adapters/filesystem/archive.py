"""Package import items into zip archives for the DSpace batch importer."""

from __future__ import annotations

import shutil
import subprocess
import zipfile
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from libra2dspace.domain.ports import ImportArchiver

log = getLogger(__name__)


class ArchiveError(RuntimeError):
    """Raised when an archive cannot be created."""

    def __init__(self, message: str, *, path: Path) -> None:
        super().__init__(message)
        self.path = path


def archive_name(root: Path, part: int | None = None, parts: int = 1) -> Path:
    """``<root>.zip`` for a single archive, else ``<root>-<part>.zip``.

    Part numbers are zero-padded to the width of ``parts``.
    """

    if part is None:
        return root.with_name(f"{root.name}.zip")
    width = len(str(parts))
    return root.with_name(f"{root.name}-{part:0{width}d}.zip")


@dataclass(slots=True)
class ZipArchiver:
    """Writes each batch of item directories into its own archive."""

    unzip_command: str = "unzip"

    def archive(self, root: Path, batches: Sequence[Sequence[str]]) -> list[Path]:
        batches = [batch for batch in batches if batch]
        if not batches:
            log.error("%s: nothing to archive", root)
            return []
        if len(batches) == 1:
            return [self._create(root, batches[0], archive_name(root))]
        return [
            self._create(root, batch, archive_name(root, number, len(batches)))
            for number, batch in enumerate(batches, start=1)
        ]

    def verify(self, archives: Sequence[Path]) -> bool:
        """Run ``unzip -tq`` on every archive; ``False`` if any fails.

        Without ``unzip`` on the path nothing is checked.
        """

        unzip = shutil.which(self.unzip_command)
        if unzip is None:
            log.warning("%s not found; archives were not verified", self.unzip_command)
            return True
        valid = True
        for archive in archives:
            result = subprocess.run(
                [unzip, "-tq", str(archive)],
                capture_output=True,
                text=True,
                check=False,
            )
            output = (result.stdout or result.stderr).strip()
            if result.returncode == 0:
                log.info("%s: %s", archive, output)
            else:
                log.error("%s: verification failed: %s", archive, output)
                valid = False
        return valid

    def _create(self, root: Path, names: Sequence[str], target: Path) -> Path:
        if target.exists():
            log.info("Replacing existing %s", target)
        log.info("Creating %s (%s items)", target, len(names))
        try:
            with zipfile.ZipFile(
                target, "w", compression=zipfile.ZIP_DEFLATED, allowZip64=True
            ) as archive:
                for name in names:
                    directory = root / name
                    for path in sorted(directory.rglob("*")):
                        if path.is_file():
                            archive.write(path, path.relative_to(root).as_posix())
        except (OSError, zipfile.BadZipFile) as exc:
            target.unlink(missing_ok=True)
            raise ArchiveError(f"Could not create {target}: {exc}", path=target) from exc
        return target


if TYPE_CHECKING:
    _archiver_check: ImportArchiver = ZipArchiver()
