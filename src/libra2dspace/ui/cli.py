# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import re
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from libra2dspace.app import build_import
from libra2dspace.config import ConfigurationError, configure_logging
from libra2dspace.domain.batching import DEFAULT_BATCH_LIMIT, check_batch_options
from libra2dspace.domain.model import EXPORT_PREFIX, IMPORT_PREFIX, Phase

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from types import FrameType

    from libra2dspace.app import ImportResult

log = logging.getLogger(__name__)

_LIST_SEPARATORS = re.compile(r"[\s,;|]+")
_ID_PREFIXES = (EXPORT_PREFIX, IMPORT_PREFIX)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="libra2dspace",
        description="Build DSpace batch-import archives from a LibraOpen export",
    )
    parser.add_argument(
        "--phase",
        type=int,
        default=int(Phase.ALL),
        help=(
            "Entities to build: 0 all, 1 org-units, 2 persons, 3 publications "
            "(default: %(default)s)"
        ),
    )
    parser.add_argument(
        "--record",
        type=str,
        help="Only these export records (list or file with one id per line)",
    )
    parser.add_argument(
        "--skip",
        type=str,
        help="Never these export records (list or file with one id per line)",
    )
    parser.add_argument(
        "--max-records",
        type=int,
        help="Stop after this many export records",
    )
    batching = parser.add_mutually_exclusive_group()
    batching.add_argument(
        "--batch-count",
        type=int,
        help="Split the import into this many archives",
    )
    batching.add_argument(
        "--batch-size",
        type=int,
        help=f"Items per archive (at most {DEFAULT_BATCH_LIMIT})",
    )
    parser.add_argument(
        "--fast",
        action="store_true",
        help="Use saved DSpace tables instead of querying DSpace",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Build entities of this phase even if DSpace already has them",
    )
    parser.add_argument("--export-dir", type=str, help="LibraOpen export directory")
    parser.add_argument("--import-dir", type=str, help="Import directory to create")
    parser.add_argument(
        "--no-verify",
        dest="verify",
        action="store_false",
        help="Do not test the archives with unzip",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--debug", action="store_true", help="Log debug output")
    verbosity.add_argument("--quiet", action="store_true", help="Only log warnings and errors")
    return parser.parse_args(list(argv))


def _normalize_id(item: str) -> str | None:
    """External id from a list item, a file name or a map-file line."""

    text = item.strip().split(maxsplit=1)[0] if item.strip() else ""
    text = Path(text).name
    text = text.rsplit(".", 1)[0] if "." in text else text
    text = text.lower()
    for prefix in _ID_PREFIXES:
        text = text.removeprefix(prefix)
    return text or None


def _parse_id_list(value: str | None) -> list[str] | None:
    """Ids from a separated list, or from a file holding one id per line."""

    if value is None:
        return None
    path = Path(value).expanduser()
    if path.is_file():
        items = path.read_text(encoding="utf-8").splitlines()
    else:
        items = _LIST_SEPARATORS.split(value)
    ids = [item_id for item in items if (item_id := _normalize_id(item))]
    return list(dict.fromkeys(ids))


def _parse_phase(value: int) -> Phase:
    try:
        return Phase(value)
    except ValueError as exc:
        raise ValueError(f"Invalid phase: {value} (must be 0..{len(Phase) - 1})") from exc


def _validate(args: argparse.Namespace) -> None:
    check_batch_options(parts=args.batch_count, size=args.batch_size)
    if args.max_records is not None and args.max_records < 0:
        raise ValueError(f"Invalid max records: {args.max_records}")


def _log_level(args: argparse.Namespace) -> int:
    if args.debug:
        return logging.DEBUG
    if args.quiet:
        return logging.WARNING
    return logging.INFO


def _describe(entry: object) -> str:
    name = getattr(entry, "title_name", None)
    return str(name) if name else repr(entry)


def _print_pending(result: ImportResult) -> None:
    outcome = result.outcome
    pending = outcome.pending
    print(f"\n{outcome.message}", file=sys.stderr)
    print(
        f"Pending: org-units={pending.org_units} persons={pending.persons} "
        f"publications={pending.publications}",
        file=sys.stderr,
    )
    table: Mapping[str, object] = outcome.blocked_table
    if table:
        print(f"\nPending {outcome.blocked_kind}:", file=sys.stderr)
        width = max(len(key) for key in table)
        for key, entry in table.items():
            print(f"  {key:<{width}}  {_describe(entry)}", file=sys.stderr)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=_log_level(parsed_args), force=True)
    try:
        _validate(parsed_args)
        phase = _parse_phase(parsed_args.phase)
        select = _parse_id_list(parsed_args.record)
        reject = _parse_id_list(parsed_args.skip)
    except (ValueError, OSError):
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        result = build_import(
            phase=phase,
            select=select,
            reject=reject,
            max_records=parsed_args.max_records or None,
            batch_count=parsed_args.batch_count,
            batch_size=parsed_args.batch_size,
            fast=parsed_args.fast,
            force=parsed_args.force,
            export_dir=parsed_args.export_dir,
            import_dir=parsed_args.import_dir,
            verify=parsed_args.verify,
        )
    except ConfigurationError:
        log.exception("Configuration error")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during import build")
        sys.exit(1)

    if not result.outcome.success:
        _print_pending(result)
        sys.exit(1)
    if result.verified is False:
        log.error("Archive verification failed")
        sys.exit(1)
    for archive in result.archives:
        log.info("Created %s", archive)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
