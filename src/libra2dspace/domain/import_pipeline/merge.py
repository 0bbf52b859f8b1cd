"""Field-by-field conflict resolution for two observations of one entity.

When a later descriptor resolves to a table key that is already present, every
field is reconciled on its own:

- an empty side never wins over a non-empty one;
- equal values need no decision;
- otherwise the value with the larger ``len()`` is kept, the existing one on a
  tie (``Resolution.PRESERVE``), the new one if it is larger
  (``Resolution.REPLACE``).

The size comparison is a heuristic: it assumes the richer spelling of a name
is the better one. Fields may register their own policy instead (person
org-unit lists are merged, see ``Resolution.MERGE``).
"""

from __future__ import annotations

from collections.abc import Sized
from dataclasses import fields, replace
from logging import getLogger
from typing import TYPE_CHECKING, Any

from libra2dspace.domain.model import Resolution

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    type FieldPolicy = Callable[[Any, Any], Any]

log = getLogger(__name__)


def is_blank(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, Sized):
        return len(value) == 0
    return False


def resolve_value(old: object, new: object) -> tuple[Resolution | None, object]:
    """Return the surviving value and how it was chosen (``None``: no conflict)."""

    if is_blank(old):
        return None, new
    if is_blank(new) or old == new:
        return None, old
    if isinstance(old, Sized) and isinstance(new, Sized):
        if len(old) >= len(new):
            return Resolution.PRESERVE, old
        return Resolution.REPLACE, new
    log.warning("No size comparison possible between %r and %r; using the latter", old, new)
    return Resolution.REPLACE, new


def merge_fields[T](
    old: T,
    new: T,
    *,
    key: str,
    policies: Mapping[str, FieldPolicy] | None = None,
) -> T:
    """Reconcile two dataclass instances that share ``key``."""

    changes: dict[str, object] = {}
    for item in fields(old):  # type: ignore[arg-type]
        name = item.name
        old_value = getattr(old, name)
        new_value = getattr(new, name)
        policy = (policies or {}).get(name)
        if policy is not None:
            value = policy(old_value, new_value)
            if value != old_value:
                log.info("%s: %s: %s %r with %r", key, name, Resolution.MERGE, old_value, new_value)
                changes[name] = value
            continue
        resolution, value = resolve_value(old_value, new_value)
        if resolution is not None:
            other = new_value if value is old_value else old_value
            log.info("%s: %s: %s %r over %r", key, name, resolution, value, other)
        if value is not old_value:
            changes[name] = value
    return replace(old, **changes) if changes else old  # type: ignore[type-var]