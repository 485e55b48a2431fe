""".. Ignore pydocstyle D400.

=======================
Field Projection Engine
=======================

Fields are given as a string of whitespace separated dotted paths, where a
leading ``-`` excludes the path, or as a mapping of dotted paths to flags::

    project(value, "name contributor.username -contributor.id")
    project(value, {"name": 1, "password": 0})

Inclusions are applied first, exclusions then narrow the included value.
Lists are traversed element-wise, so ``"users.name"`` selects ``name`` of
every user in the ``users`` list.

"""
from collections.abc import Mapping, Sequence
from typing import Any, Dict, List, Optional, Tuple

from .exceptions import InvalidFieldSpec

FIELD_DEREFERENCE = "."
FIELD_EXCLUDE = "-"


def is_list(value: Any) -> bool:
    """Return ``True`` if value is a list-like container."""
    return isinstance(value, Sequence) and not isinstance(
        value, (str, bytes, bytearray)
    )


def is_container(value: Any) -> bool:
    """Return ``True`` if fields can be selected from the value."""
    return isinstance(value, Mapping) or is_list(value)


def clone(value: Any) -> Any:
    """Copy all mappings and lists of the value, keep other values as they are."""
    if isinstance(value, Mapping):
        return {key: clone(item) for key, item in value.items()}
    if is_list(value):
        return [clone(item) for item in value]
    return value


def normalize_fields(fields) -> Optional[Dict[str, Any]]:
    """Normalize fields to a mapping of dotted paths to flags.

    :param fields: string of whitespace separated paths or a mapping
    :return: mapping of paths to inclusion flags or ``None`` if no fields
        are given
    :raises InvalidFieldSpec: if fields are neither a string nor a mapping

    """
    if not fields and not is_list(fields):
        return None

    if isinstance(fields, Mapping):
        return fields

    if not isinstance(fields, str):
        raise InvalidFieldSpec(
            "Invalid select fields {!r}. Must be a string or a mapping.".format(fields)
        )

    normalized = {}
    for field in fields.split():
        include = not field.startswith(FIELD_EXCLUDE)
        path = field if include else field[1:]
        if not path.strip(FIELD_DEREFERENCE):
            continue
        normalized[path] = include

    return normalized or None


def apply_default_field(fields, default_field):
    """Make sure the default field is kept when fields are being included.

    Exclusion-only fields already keep the default field, so they are
    returned as they are. The given mapping is never modified.
    """
    if not fields or not default_field or default_field in fields:
        return fields

    if not any(fields.values()):
        return fields

    return {**fields, default_field: True}


def partition_fields(fields) -> Tuple[List[str], List[str]]:
    """Split normalized fields into inclusive and exclusive paths."""
    inclusive, exclusive = [], []
    for field, include in fields.items():
        (inclusive if include else exclusive).append(field)
    return inclusive, exclusive


def _split(path):
    """Return path segments."""
    if isinstance(path, str):
        return path.split(FIELD_DEREFERENCE)
    return list(path)


def _new_like(value):
    return {} if isinstance(value, Mapping) else []


def _copy_path(source, target, parts):
    """Copy the value under path ``parts`` from source into target.

    Return ``True`` if anything was written to target.
    """
    if is_list(source):
        # Slots are aligned by position among container items.
        items = [item for item in source if is_container(item)]
        for index, item in enumerate(items):
            if index == len(target):
                target.append(_new_like(item))
            _copy_path(item, target[index], parts)
        return True

    name, rest = parts[0], parts[1:]
    if name not in source:
        return False

    value = source[name]
    if not rest:
        target[name] = clone(value)
        return True

    if not is_container(value):
        return False

    if name in target:
        return _copy_path(value, target[name], rest)

    child = _new_like(value)
    if _copy_path(value, child, rest):
        target[name] = child
        return True
    return False


def _collapse(paths):
    """Drop duplicated paths and paths nested under another listed path."""
    split = [tuple(_split(path)) for path in paths]
    collapsed = []
    for parts in split:
        if parts in collapsed:
            continue
        if any(
            len(other) < len(parts) and parts[: len(other)] == other
            for other in split
        ):
            continue
        collapsed.append(parts)
    return collapsed


def only(value, paths):
    """Return a new value with only the given paths copied from value."""
    if not paths or not is_container(value):
        return value

    selected = _new_like(value)
    for parts in _collapse(paths):
        _copy_path(value, selected, parts)
    return selected


def _delete_path(target, parts):
    if is_list(target):
        for item in target:
            if is_container(item):
                _delete_path(item, parts)
        return

    name, rest = parts[0], parts[1:]
    if not rest:
        target.pop(name, None)
    elif name in target and is_container(target[name]):
        _delete_path(target[name], rest)


def exclude(value, paths):
    """Return a copy of value with the given paths removed.

    Removal only ever drops keys of mappings, items of lists are kept in
    place even when they are not containers.
    """
    if not paths or not is_container(value):
        return value

    value = clone(value)
    for path in paths:
        _delete_path(value, _split(path))
    return value


def pick(value, path):
    """Return the value under the dotted path.

    Segments applied to a list are applied to each of its items, so the
    result keeps the nesting of the lists along the path. Missing values
    are returned as ``None``.
    """
    parts = _split(path)
    if not parts:
        return value

    if is_list(value):
        return [pick(item, parts) for item in value]
    if isinstance(value, Mapping):
        return pick(value.get(parts[0]), parts[1:])
    return None


def project(value, fields):
    """Apply field projection to the value.

    The value itself is never modified. When no fields are given, the value
    is returned unchanged.
    """
    fields = normalize_fields(fields)
    if not fields:
        return value

    inclusive, exclusive = partition_fields(fields)
    if inclusive:
        value = only(value, inclusive)
    if exclusive:
        value = exclude(value, exclusive)
    return value
