"""Cursor-style JSON token reader over ijson events.

WHY: Codecs want to say "enter the object, read the next field name, read
a string" and get a precise error the moment the input stops matching the
shape they expect. ijson tokenizes incrementally but hands out a flat
event stream; JsonReader turns that stream into a nested cursor.

HOW: Wraps ``ijson.basic_parse`` and keeps one event of lookahead so that
``has_more()`` and ``peek_kind()`` can inspect the next token without
consuming it. Tokenizer syntax errors become MalformedInput and OSError
from the source becomes IoFailure, both chained to the original.

RULES:
- Reads are strictly ordered; nothing is buffered beyond one event
- After the outermost container closes, no further event is pulled, so
  a following top-level value stays untouched for the next decode
- read_int() accepts integers only (no bool, no fractional number) and
  only within the signed 32-bit range
- skip_value() consumes exactly one complete value, nested or scalar
- Not thread-safe; one reader per decode call
"""

from __future__ import annotations

import enum
import io
from pathlib import Path
from typing import Any, BinaryIO, Iterable, Iterator, List, Optional, Tuple, Union

import ijson

from catalog_codec.config import INT32_MAX, INT32_MIN
from catalog_codec.core.errors import IoFailure, MalformedInput

Event = Tuple[str, Any]


class ValueKind(str, enum.Enum):
    """Kind of the next JSON value in the stream."""

    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"


_VALUE_KINDS = {
    "start_map": ValueKind.OBJECT,
    "start_array": ValueKind.ARRAY,
    "string": ValueKind.STRING,
    "number": ValueKind.NUMBER,
    "integer": ValueKind.NUMBER,
    "double": ValueKind.NUMBER,
    "boolean": ValueKind.BOOLEAN,
    "null": ValueKind.NULL,
}

_EVENT_NAMES = {
    "start_map": "start of object",
    "end_map": "end of object",
    "start_array": "start of array",
    "end_array": "end of array",
    "map_key": "field name",
    "string": "string",
    "number": "number",
    "integer": "number",
    "double": "number",
    "boolean": "boolean",
    "null": "null",
}

_CONTAINER_ENDS = ("end_map", "end_array")


def _describe(event: Event) -> str:
    name, value = event
    label = _EVENT_NAMES.get(name, name)
    if name in ("string", "map_key", "number", "integer", "double", "boolean"):
        return "{} {!r}".format(label, value)
    return label


class JsonReader:
    """Nested cursor over a JSON token stream.

    Args:
        events: An iterable of ``(event, value)`` pairs as produced by
                ``ijson.basic_parse``.
        source: Optional file object owned by this reader; closed by
                close() and on context-manager exit.
    """

    def __init__(self, events: Iterable[Event], source: Optional[BinaryIO] = None):
        self._events: Iterator[Event] = iter(events)
        self._source = source
        self._lookahead: List[Event] = []
        self._depth = 0
        self._position = 0

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @staticmethod
    def _events_from(source: BinaryIO, multiple_values: bool) -> Iterator[Event]:
        # ijson may read from the source as soon as the parser is built
        try:
            return ijson.basic_parse(source, multiple_values=multiple_values)
        except OSError as exc:
            raise IoFailure("reading token stream failed: {}".format(exc)) from exc

    @classmethod
    def from_file(cls, source: BinaryIO, multiple_values: bool = False) -> "JsonReader":
        """Read from an open binary file; the caller keeps ownership."""
        return cls(cls._events_from(source, multiple_values))

    @classmethod
    def from_path(cls, path: Union[str, Path], multiple_values: bool = False) -> "JsonReader":
        """Open ``path`` for reading; the reader closes it when done."""
        try:
            source = open(path, "rb")
        except OSError as exc:
            raise IoFailure("cannot open {}: {}".format(path, exc)) from exc
        try:
            events = cls._events_from(source, multiple_values)
        except IoFailure:
            source.close()
            raise
        return cls(events, source=source)

    @classmethod
    def from_string(cls, text: Union[str, bytes], multiple_values: bool = False) -> "JsonReader":
        data = text.encode("utf-8") if isinstance(text, str) else text
        return cls.from_file(io.BytesIO(data), multiple_values=multiple_values)

    def close(self) -> None:
        if self._source is not None:
            self._source.close()
            self._source = None

    def __enter__(self) -> "JsonReader":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Event plumbing
    # ------------------------------------------------------------------

    def _pull(self) -> Optional[Event]:
        """Pull the next event from ijson, or None at end of input."""
        try:
            return next(self._events)
        except StopIteration:
            return None
        except ijson.JSONError as exc:
            raise MalformedInput(
                "invalid JSON after token {}: {}".format(self._position, exc)
            ) from exc
        except OSError as exc:
            raise IoFailure("reading token stream failed: {}".format(exc)) from exc

    def _peek(self) -> Optional[Event]:
        if not self._lookahead:
            event = self._pull()
            if event is None:
                return None
            self._lookahead.append(event)
        return self._lookahead[-1]

    def _next(self) -> Event:
        event = self._lookahead.pop() if self._lookahead else self._pull()
        if event is None:
            raise MalformedInput("unexpected end of input after token {}".format(self._position))
        self._position += 1
        return event

    def _expect(self, *names: str) -> Event:
        event = self._next()
        if event[0] not in names:
            wanted = " or ".join(_EVENT_NAMES.get(n, n) for n in names)
            raise MalformedInput(
                "expected {} at token {}, found {}".format(wanted, self._position, _describe(event))
            )
        return event

    # ------------------------------------------------------------------
    # Structural tokens
    # ------------------------------------------------------------------

    def enter_object(self) -> None:
        self._expect("start_map")
        self._depth += 1

    def exit_object(self) -> None:
        self._expect("end_map")
        self._depth -= 1

    def enter_array(self) -> None:
        self._expect("start_array")
        self._depth += 1

    def exit_array(self) -> None:
        self._expect("end_array")
        self._depth -= 1

    def has_more(self) -> bool:
        """True if another element or field precedes the current container's end.

        At the top level (outside any container) this reports whether
        another top-level value follows, which is only possible when the
        reader was built with ``multiple_values=True``.
        """
        event = self._peek()
        if event is None:
            if self._depth:
                raise MalformedInput("unexpected end of input inside a container")
            return False
        return event[0] not in _CONTAINER_ENDS

    def peek_kind(self) -> Optional[ValueKind]:
        """Kind of the next value, or None if the next token is not a value."""
        event = self._peek()
        if event is None:
            return None
        return _VALUE_KINDS.get(event[0])

    # ------------------------------------------------------------------
    # Scalars
    # ------------------------------------------------------------------

    def next_field_name(self) -> str:
        return self._expect("map_key")[1]

    def read_string(self) -> str:
        return self._expect("string")[1]

    def read_int(self) -> int:
        """Read an integer that fits in a signed 32-bit range."""
        _, value = self._expect("number", "integer", "double")
        if isinstance(value, bool) or not isinstance(value, int):
            raise MalformedInput(
                "expected an integer at token {}, found number {}".format(self._position, value)
            )
        if not INT32_MIN <= value <= INT32_MAX:
            raise MalformedInput(
                "integer {} at token {} is outside the 32-bit range".format(value, self._position)
            )
        return value

    def skip_value(self) -> None:
        """Consume one complete value without interpreting it."""
        event = self._next()
        name = event[0]
        if name not in _VALUE_KINDS:
            raise MalformedInput(
                "expected a value at token {}, found {}".format(self._position, _describe(event))
            )
        if name not in ("start_map", "start_array"):
            return
        depth = 1
        while depth:
            name = self._next()[0]
            if name in ("start_map", "start_array"):
                depth += 1
            elif name in _CONTAINER_ENDS:
                depth -= 1
