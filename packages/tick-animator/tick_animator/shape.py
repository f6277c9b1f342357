"""Traversal of nested target shapes and host field access.

A target shape mirrors part of a host object: mappings and dataclass
instances are keyed by name, lists and tuples by index, and every leaf is a
number. Host containers are read by attribute (objects) or by item
(mappings, sequences). Tuples inside the host are immutable, so writing a
leaf below one rebuilds the tuple and stores it back on its parent.
"""
from __future__ import annotations

import dataclasses
from numbers import Real
from typing import Any, Iterator, Mapping, Sequence

from tick_animator.types import FieldKey, FieldPath, MissingFieldError, NonNumericLeafError


def as_path(field: FieldKey | FieldPath) -> FieldPath:
    if isinstance(field, tuple):
        return field
    return (field,)


def is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _children(shape: Any) -> Iterator[tuple[FieldKey, Any]] | None:
    if isinstance(shape, Mapping):
        return iter(shape.items())
    if isinstance(shape, (list, tuple)):
        return iter(enumerate(shape))
    if dataclasses.is_dataclass(shape) and not isinstance(shape, type):
        return ((f.name, getattr(shape, f.name)) for f in dataclasses.fields(shape))
    return None


def iter_leaves(shape: Any, prefix: FieldPath = ()) -> Iterator[tuple[FieldPath, Any]]:
    """Yield (path, leaf) for every non-container value of a nested shape."""
    children = _children(shape)
    if children is None:
        yield prefix, shape
        return
    for key, value in children:
        yield from iter_leaves(value, prefix + (key,))


def _read_key(container: Any, key: FieldKey, path: FieldPath) -> Any:
    try:
        if isinstance(key, int) or isinstance(container, Mapping):
            return container[key]
        return getattr(container, key)
    except (KeyError, IndexError, AttributeError, TypeError) as exc:
        raise MissingFieldError(path, f"Host has no field at {_fmt(path)}") from exc


def read_path(host: Any, path: FieldPath) -> Any:
    value = host
    for depth, key in enumerate(path):
        value = _read_key(value, key, path[: depth + 1])
    return value


def _assign(container: Any, key: FieldKey, value: Any) -> Any:
    """Store value under key; returns the container (rebuilt for tuples)."""
    if isinstance(container, tuple):
        items = list(container)
        items[key] = value  # type: ignore[index]
        if hasattr(container, "_fields"):
            return type(container)(*items)
        return tuple(items)
    if isinstance(key, int) or isinstance(container, (Mapping, Sequence)):
        container[key] = value
    else:
        setattr(container, key, value)
    return container


def write_path(host: Any, path: FieldPath, value: Any) -> None:
    """Write a leaf, rebuilding any tuples between the host and the leaf."""
    if not path:
        raise ValueError("Cannot write an empty field path")

    chain = [host]
    for depth, key in enumerate(path[:-1]):
        chain.append(_read_key(chain[-1], key, path[: depth + 1]))

    new_value = value
    for container, key in zip(reversed(chain), reversed(path)):
        rebuilt = _assign(container, key, new_value)
        if rebuilt is container:
            return
        new_value = rebuilt
    raise TypeError(f"Host object itself is immutable; cannot write {_fmt(path)}")


def resolve_leaves(host: Any, shape: Any) -> list[tuple[FieldPath, float]]:
    """Validate a target shape against its host and return its numeric leaves.

    Every leaf is checked before the caller mutates anything, so a bad shape
    fails at call time without partially applying.
    """
    leaves = []
    for path, target in iter_leaves(shape):
        if not path:
            raise NonNumericLeafError(
                path, "Target shape must be a mapping, sequence or dataclass"
            )
        if not is_number(target):
            raise NonNumericLeafError(
                path, f"Target at {_fmt(path)} is {type(target).__name__}, not a number"
            )
        current = read_path(host, path)
        if not is_number(current):
            raise NonNumericLeafError(
                path, f"Host value at {_fmt(path)} is {type(current).__name__}, not a number"
            )
        leaves.append((path, float(target)))
    return leaves


def _fmt(path: FieldPath) -> str:
    return ".".join(str(key) for key in path) or "<root>"
