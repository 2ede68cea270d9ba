"""Abstract base codec and shared token helpers.

WHY: Every wire shape maps the same Record to and from a token stream,
but the token order differs completely between shapes. This base class
enforces one interface so the CLI and callers can drive any codec
generically.

HOW: BaseCodec is an ABC with three requirements: a ``name`` property,
``decode(reader)`` and ``encode(writer, record)``. The concrete
``dumps``/``loads`` helpers wrap those two in an in-memory writer/reader
for callers that just want text.

RULES:
- decode() consumes exactly one complete value and returns a Record only
  after the value's closing token has been read
- encode() writes exactly one complete value; it raises nothing of its
  own, only IoFailure propagated from the writer
- Codecs hold no per-call state; instances are safe to share between
  threads as long as each call gets its own reader/writer

To add a new wire shape:
1. Create a new module in codecs/
2. Subclass BaseCodec
3. Implement name, decode() and encode()
4. Register in the CODECS dict in codecs/__init__.py
"""

from __future__ import annotations

import io
from abc import ABC, abstractmethod
from typing import List, Optional, Union

from catalog_codec.core.errors import MalformedInput
from catalog_codec.core.models import IdentifiedContributor, NamedContributor, Record
from catalog_codec.stream.reader import JsonReader
from catalog_codec.stream.writer import JsonWriter


def read_remaining_strings(reader: JsonReader) -> List[str]:
    """Read string elements until the current array has no more members."""
    values: List[str] = []
    while reader.has_more():
        values.append(reader.read_string())
    return values


def contributor_names(record: Record) -> List[str]:
    """Names of a record's contributors, in order, whatever their shape."""
    return [contributor.name for contributor in record.contributors]


def named_contributors(names: List[str]) -> List[NamedContributor]:
    return [NamedContributor(name) for name in names]


def require_identified(record: Record) -> None:
    """Raise TypeError if any contributor lacks an id.

    Called by id-carrying codecs before the first token is written, so a
    record that cannot be expressed never leaves partial output behind.
    """
    for index, contributor in enumerate(record.contributors):
        if not isinstance(contributor, IdentifiedContributor):
            raise TypeError(
                "contributor {} ({!r}) has no id; this shape needs IdentifiedContributor".format(
                    index, contributor.name
                )
            )


class BaseCodec(ABC):
    """Abstract base for all catalog record codecs."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable codec name, e.g. 'Nested author objects'."""

    @abstractmethod
    def decode(self, reader: JsonReader) -> Record:
        """Read one complete record value from ``reader``.

        Raises:
            MalformedInput: The tokens do not form a record in this shape.
            IoFailure: The underlying source failed.
        """

    @abstractmethod
    def encode(self, writer: JsonWriter, record: Record) -> None:
        """Write ``record`` to ``writer`` as one complete value.

        Raises:
            IoFailure: The underlying sink failed.
        """

    def dumps(self, record: Record, indent: Optional[int] = None) -> str:
        """Encode ``record`` to a JSON string."""
        buffer = io.StringIO()
        writer = JsonWriter(buffer, indent=indent)
        self.encode(writer, record)
        return buffer.getvalue()

    def loads(self, text: Union[str, bytes]) -> Record:
        """Decode exactly one record from a JSON string.

        Raises:
            MalformedInput: The text is not one record in this shape, or
                anything other than whitespace follows the record.
        """
        reader = JsonReader.from_string(text)
        record = self.decode(reader)
        if reader.has_more():
            raise MalformedInput("extra data after record")
        return record
