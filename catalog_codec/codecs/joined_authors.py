"""Keyed object with contributors joined into one string field.

WHY: The simplest keyed shape a human can read and edit:
``{"isbn": "...", "title": "...", "authors": "Joshua Bloch;Neal Gafter"}``.
Contributor names are flattened into one delimited scalar.

HOW: Decoding loops over the object's fields and dispatches on a closed
enum of known names; anything else is skipped structurally. ``authors``
is split on AUTHOR_DELIMITER with plain ``str.split`` semantics.

RULES:
- Fields are written in the order isbn, title, authors
- Fields may arrive in any order; unknown fields (even nested ones) are
  skipped, never an error
- A missing field keeps its zero value ("" or no contributors)
- "" splits to one contributor named "", with no special case
- The delimiter is not escaped: a name containing ";" comes back as two
  contributors. This is a known limitation of the wire shape
- Zero contributors encode as "" and so decode as one contributor named
  "". The shape cannot round-trip an empty contributor list
- Only names travel; identified contributors lose their ids
"""

from __future__ import annotations

import enum
import logging
from typing import List

from catalog_codec.codecs.base import BaseCodec, contributor_names, named_contributors
from catalog_codec.config import AUTHOR_DELIMITER
from catalog_codec.core.models import NamedContributor, Record
from catalog_codec.stream.reader import JsonReader
from catalog_codec.stream.writer import JsonWriter

logger = logging.getLogger(__name__)


class _Field(str, enum.Enum):
    ISBN = "isbn"
    TITLE = "title"
    AUTHORS = "authors"


def _lookup_field(name: str) -> _Field | None:
    try:
        return _Field(name)
    except ValueError:
        return None


class JoinedAuthorsCodec(BaseCodec):
    """Record as an object whose ``authors`` field is one delimited string."""

    delimiter = AUTHOR_DELIMITER

    @property
    def name(self) -> str:
        return "Joined author names"

    def decode(self, reader: JsonReader) -> Record:
        isbn = ""
        title = ""
        contributors: List[NamedContributor] = []

        reader.enter_object()
        while reader.has_more():
            key = reader.next_field_name()
            field = _lookup_field(key)
            if field is _Field.ISBN:
                isbn = reader.read_string()
            elif field is _Field.TITLE:
                title = reader.read_string()
            elif field is _Field.AUTHORS:
                contributors = named_contributors(reader.read_string().split(self.delimiter))
            else:
                logger.debug("Skipping unknown field %r", key)
                reader.skip_value()
        reader.exit_object()

        return Record(isbn=isbn, title=title, contributors=contributors)

    def encode(self, writer: JsonWriter, record: Record) -> None:
        writer.enter_object()
        writer.write_field_name(_Field.ISBN.value)
        writer.write_string(record.isbn)
        writer.write_field_name(_Field.TITLE.value)
        writer.write_string(record.title)
        writer.write_field_name(_Field.AUTHORS.value)
        writer.write_string(self.delimiter.join(contributor_names(record)))
        writer.exit_object()
