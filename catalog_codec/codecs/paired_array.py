"""Positional array with paired scalars per contributor.

WHY: A compact shape that still carries contributor ids:
``[isbn, title, id_1, name_1, id_2, name_2, ...]``. Pairs are flattened,
not grouped in sub-arrays.

HOW: After isbn and title, the decoder reads an int and then a string for
as long as the array has members. An id with nothing after it is an
unpaired trailing element and raises MalformedInput rather than producing
a half contributor.

RULES:
- Only IdentifiedContributor can be encoded; anything else raises
  TypeError before a single token is written
- Contributor order is array order
"""

from __future__ import annotations

from typing import List

from catalog_codec.codecs.base import BaseCodec, require_identified
from catalog_codec.core.errors import MalformedInput
from catalog_codec.core.models import IdentifiedContributor, Record
from catalog_codec.stream.reader import JsonReader
from catalog_codec.stream.writer import JsonWriter


class PairedArrayCodec(BaseCodec):
    """Record as a flat array with (id, name) pairs after isbn and title."""

    @property
    def name(self) -> str:
        return "Paired id/name array"

    def decode(self, reader: JsonReader) -> Record:
        reader.enter_array()
        isbn = reader.read_string()
        title = reader.read_string()
        contributors: List[IdentifiedContributor] = []
        while reader.has_more():
            contributor_id = reader.read_int()
            if not reader.has_more():
                raise MalformedInput(
                    "contributor id {} has no following name (unpaired trailing element)".format(
                        contributor_id
                    )
                )
            contributors.append(IdentifiedContributor(contributor_id, reader.read_string()))
        reader.exit_array()
        return Record(isbn=isbn, title=title, contributors=contributors)

    def encode(self, writer: JsonWriter, record: Record) -> None:
        require_identified(record)
        writer.enter_array()
        writer.write_string(record.isbn)
        writer.write_string(record.title)
        for contributor in record.contributors:
            writer.write_int(contributor.id)
            writer.write_string(contributor.name)
        writer.exit_array()
