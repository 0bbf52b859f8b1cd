"""Locations of the export tree and the import output."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import optional_env_var

DEFAULT_EXPORT_DIR: Final[str] = "libra-export"
DEFAULT_IMPORT_DIR: Final[str] = "dspace-import"


@dataclass(frozen=True, slots=True)
class PathsConfig:
    common_root: Path
    export_dir: Path
    import_dir: Path


def _under(root: Path, value: str | Path) -> Path:
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = root / path
    return path.resolve()


def get_paths_config(
    *,
    export_dir: str | Path | None = None,
    import_dir: str | Path | None = None,
) -> PathsConfig:
    """Resolve directories from arguments, then ``EXPORT_DIR``/``IMPORT_DIR``.

    Relative names are taken to be under ``COMMON_ROOT`` (``./tmp`` by default).
    """

    root_value = optional_env_var("COMMON_ROOT")
    common_root = Path(root_value).expanduser() if root_value else Path.cwd() / "tmp"
    common_root = common_root.resolve()
    export_value = export_dir or optional_env_var("EXPORT_DIR", DEFAULT_EXPORT_DIR)
    import_value = import_dir or optional_env_var("IMPORT_DIR", DEFAULT_IMPORT_DIR)
    return PathsConfig(
        common_root=common_root,
        export_dir=_under(common_root, export_value or DEFAULT_EXPORT_DIR),
        import_dir=_under(common_root, import_value or DEFAULT_IMPORT_DIR),
    )
