"""Write import items as directories below the import root."""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from libra2dspace.domain.model import ImportItem
    from libra2dspace.domain.ports import ImportItemWriter

log = getLogger(__name__)


class ImportWriteError(RuntimeError):
    """Raised when the import root or an item directory cannot be written."""

    def __init__(self, message: str, *, path: Path) -> None:
        super().__init__(message)
        self.path = path


@dataclass(slots=True)
class DirectoryWriter:
    """One directory per import item, named after the item."""

    import_root: Path

    @property
    def root(self) -> Path:
        return self.import_root

    def prepare_root(self) -> Path:
        root = self.import_root
        try:
            if root.exists():
                log.info("Clearing import directory %s", root)
                shutil.rmtree(root)
            else:
                log.info("Creating import directory %s", root)
            root.mkdir(parents=True)
        except OSError as exc:
            msg = f"Could not create import directory {root}: {exc}"
            raise ImportWriteError(msg, path=root) from exc
        return root

    def write(self, item: ImportItem) -> Path:
        directory = self.import_root / item.name
        try:
            if directory.exists():
                log.warning("%s: removing existing %s", item.name, directory)
                shutil.rmtree(directory)
            directory.mkdir(parents=True)
            for name, text in item.files.items():
                if text:
                    (directory / name).write_text(text, encoding="utf-8")
            for name, source in item.content.items():
                shutil.copyfile(source, directory / name)
        except OSError as exc:
            msg = f"Could not write import item {item.name}: {exc}"
            raise ImportWriteError(msg, path=directory) from exc
        log.debug("Wrote %s (%s files)", directory, len(item.files) + len(item.content))
        return directory


if TYPE_CHECKING:
    _writer_check: ImportItemWriter = DirectoryWriter(Path("import"))
