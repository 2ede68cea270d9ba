"""Cursor-style JSON token writer.

WHY: Encoders mirror decoders call for call: enter the object, write a
field name, write a string. JsonWriter owns the punctuation (commas,
colons, indentation) so each codec only decides the token order.

HOW: Keeps a stack of open containers. Each frame counts the members
written so far and, for objects, whether a field name is waiting for its
value. Scalars are rendered with ``json.dumps(..., ensure_ascii=False)``.
OSError from the sink becomes IoFailure chained to the original.

RULES:
- Inside an object every value must be preceded by write_field_name()
- Inside an array write_field_name() is rejected
- Consecutive top-level values are separated by a newline, so the output
  can be read back with ``JsonReader(..., multiple_values=True)``
- indent=None writes compact JSON; an int pretty-prints like json.dumps
- Misuse raises StreamStateError; it never writes partial punctuation
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, TextIO, Union

from catalog_codec.config import INT32_MAX, INT32_MIN
from catalog_codec.core.errors import IoFailure, StreamStateError

_OBJECT = "object"
_ARRAY = "array"


@dataclass
class _Frame:
    kind: str
    count: int = 0
    pending_name: bool = False


class JsonWriter:
    """Nested cursor that writes JSON text to a text sink.

    Args:
        sink: Any object with a ``write(str)`` method.
        indent: Spaces per nesting level, or None for compact output.
        owns_sink: Close the sink in close() / on context-manager exit.
    """

    def __init__(self, sink: TextIO, indent: Optional[int] = None, owns_sink: bool = False):
        self._sink = sink
        self._indent = indent or None
        self._owns_sink = owns_sink
        self._stack: List[_Frame] = []
        self._values_written = 0

    @classmethod
    def to_path(cls, path: Union[str, Path], indent: Optional[int] = None) -> "JsonWriter":
        try:
            sink = open(path, "w", encoding="utf-8")
        except OSError as exc:
            raise IoFailure("cannot open {}: {}".format(path, exc)) from exc
        return cls(sink, indent=indent, owns_sink=True)

    def _close_sink(self) -> None:
        if not self._owns_sink:
            return
        try:
            self._sink.close()
        except OSError as exc:
            raise IoFailure("closing token stream failed: {}".format(exc)) from exc

    def close(self) -> None:
        if self._stack:
            raise StreamStateError("cannot close writer with {} open container(s)".format(len(self._stack)))
        self._close_sink()

    def __enter__(self) -> "JsonWriter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.close()
        else:
            self._close_sink()

    # ------------------------------------------------------------------
    # Punctuation
    # ------------------------------------------------------------------

    def _write(self, text: str) -> None:
        try:
            self._sink.write(text)
        except OSError as exc:
            raise IoFailure("writing token stream failed: {}".format(exc)) from exc

    def _newline(self, depth: int) -> None:
        if self._indent is not None:
            self._write("\n" + " " * (self._indent * depth))

    def _begin_member(self, frame: _Frame) -> None:
        if frame.count:
            self._write(",")
        self._newline(len(self._stack))
        frame.count += 1

    def _before_value(self) -> None:
        if not self._stack:
            if self._values_written:
                self._write("\n")
            self._values_written += 1
            return
        frame = self._stack[-1]
        if frame.kind == _OBJECT:
            if not frame.pending_name:
                raise StreamStateError("a field name must precede each value inside an object")
            frame.pending_name = False
        else:
            self._begin_member(frame)

    def _close(self, kind: str, token: str) -> None:
        if not self._stack or self._stack[-1].kind != kind:
            raise StreamStateError("no open {} to close".format(kind))
        frame = self._stack[-1]
        if frame.pending_name:
            raise StreamStateError("field name written without a value")
        self._stack.pop()
        if frame.count:
            self._newline(len(self._stack))
        self._write(token)

    # ------------------------------------------------------------------
    # Structural tokens
    # ------------------------------------------------------------------

    def enter_object(self) -> None:
        self._before_value()
        self._write("{")
        self._stack.append(_Frame(_OBJECT))

    def exit_object(self) -> None:
        self._close(_OBJECT, "}")

    def enter_array(self) -> None:
        self._before_value()
        self._write("[")
        self._stack.append(_Frame(_ARRAY))

    def exit_array(self) -> None:
        self._close(_ARRAY, "]")

    def write_field_name(self, name: str) -> None:
        if not self._stack or self._stack[-1].kind != _OBJECT:
            raise StreamStateError("field names are only allowed inside an object")
        frame = self._stack[-1]
        if frame.pending_name:
            raise StreamStateError("field {!r} written while another field awaits its value".format(name))
        self._begin_member(frame)
        separator = ": " if self._indent is not None else ":"
        self._write(json.dumps(name, ensure_ascii=False) + separator)
        frame.pending_name = True

    # ------------------------------------------------------------------
    # Scalars
    # ------------------------------------------------------------------

    def write_string(self, value: str) -> None:
        if not isinstance(value, str):
            raise StreamStateError("write_string() needs a str, got {}".format(type(value).__name__))
        self._before_value()
        self._write(json.dumps(value, ensure_ascii=False))

    def write_int(self, value: int) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            raise StreamStateError("write_int() needs an int, got {}".format(type(value).__name__))
        if not INT32_MIN <= value <= INT32_MAX:
            raise StreamStateError("integer {} is outside the 32-bit range".format(value))
        self._before_value()
        self._write(str(value))
