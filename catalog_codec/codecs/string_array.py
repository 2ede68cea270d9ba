"""Positional array of scalars: ``[isbn, title, name_1, ..., name_k]``.

Meaning comes from position alone. The contributor count is not written;
the decoder reads names until the array ends, so zero contributors is a
two-element array.
"""

from __future__ import annotations

from catalog_codec.codecs.base import (
    BaseCodec,
    contributor_names,
    named_contributors,
    read_remaining_strings,
)
from catalog_codec.core.models import Record
from catalog_codec.stream.reader import JsonReader
from catalog_codec.stream.writer import JsonWriter


class StringArrayCodec(BaseCodec):
    """Record as a flat array of strings."""

    @property
    def name(self) -> str:
        return "String array"

    def decode(self, reader: JsonReader) -> Record:
        reader.enter_array()
        isbn = reader.read_string()
        title = reader.read_string()
        names = read_remaining_strings(reader)
        reader.exit_array()
        return Record(isbn=isbn, title=title, contributors=named_contributors(names))

    def encode(self, writer: JsonWriter, record: Record) -> None:
        writer.enter_array()
        writer.write_string(record.isbn)
        writer.write_string(record.title)
        for name in contributor_names(record):
            writer.write_string(name)
        writer.exit_array()
