"""Compact JSON writer for plain Python values."""

from __future__ import annotations

import io
from collections.abc import Callable, Mapping
from typing import Any, TextIO

__all__ = ["build", "to_json"]

Replacer = Callable[[Any], Any]

_ESCAPES = str.maketrans(
    {
        '"': '\\"',
        "\\": "\\\\",
        "\b": "\\b",
        "\f": "\\f",
        "\n": "\\n",
        "\r": "\\r",
        "\t": "\\t",
    }
)


def _emit(value: Any, write: Callable[[str], Any], replacer: Replacer | None) -> None:
    if replacer is not None:
        value = replacer(value)
    if value is None:
        write("null")
    elif isinstance(value, bool):
        write("true" if value else "false")
    elif isinstance(value, int):
        write(str(value))
    elif isinstance(value, float):
        write(f"{value:f}")
    elif isinstance(value, str):
        write('"' + value.translate(_ESCAPES) + '"')
    elif isinstance(value, (list, tuple)):
        write("[")
        for index, item in enumerate(value):
            if index:
                write(",")
            _emit(item, write, replacer)
        write("]")
    elif isinstance(value, Mapping):
        write("{")
        for index, (key, item) in enumerate(value.items()):
            if not isinstance(key, str):
                raise TypeError(f"map key must be str, not {type(key).__name__}")
            if index:
                write(",")
            write('"' + key + '":')
            _emit(item, write, replacer)
        write("}")
    else:
        raise TypeError(f"cannot encode {type(value).__name__} as JSON")


def build(value: Any, out: TextIO, replacer: Replacer | None = None) -> None:
    """Write ``value`` as compact JSON to the text stream ``out``.

    ``replacer`` is called on every value, the root included, before it is
    written; what it returns is written instead. Floats use six decimals and
    map keys are written as given.
    """
    _emit(value, out.write, replacer)


def to_json(value: Any, replacer: Replacer | None = None) -> str:
    """Return ``value`` as a compact JSON string."""
    out = io.StringIO()
    build(value, out, replacer)
    return out.getvalue()