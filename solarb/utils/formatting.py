"""Readable rendering of nested dataclasses."""

from dataclasses import fields, is_dataclass
from typing import Any

ABSENT = "None"


def _render(value: Any) -> str:
    if value is None:
        return ABSENT
    if is_dataclass(value) and not isinstance(value, type):
        return format_struct(value)
    if isinstance(value, list):
        return "[" + ", ".join(_render(item) for item in value) + "]"
    return repr(value)


def format_struct(obj: Any) -> str:
    """Render a dataclass instance as ``Name { field: value, ... }``.

    Nested dataclasses are rendered recursively and absent optional fields
    show as ``None``.

    Raises:
        TypeError: If ``obj`` is not a dataclass instance.
    """
    if not is_dataclass(obj) or isinstance(obj, type):
        raise TypeError(f"format_struct expects a dataclass instance, got {type(obj).__name__}")

    parts = [f"{f.name}: {_render(getattr(obj, f.name))}" for f in fields(obj)]
    if not parts:
        return f"{type(obj).__name__} {{}}"
    return f"{type(obj).__name__} {{ {', '.join(parts)} }}"
