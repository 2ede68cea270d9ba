"""Keyed object with contributors as a nested array of objects.

WHY: The richest shape, and the only one where every value is named:
``{"isbn": "...", "title": "...", "authors": [{"id": 1, "name": "..."}]}``.
It is the one most likely to gain extra fields over time, so both the
record object and each contributor object tolerate unknown fields.

HOW: Two levels of field dispatch, each over a closed enum with a default
arm that skips the value structurally. Contributor fields are collected in
locals and the IdentifiedContributor is built only after its object closes.

RULES:
- Written order: isbn, title, authors; inside each author: id, name
- Missing isbn/title/authors keep their zero values
- An author object without id or without name raises MalformedInput
- Only IdentifiedContributor can be encoded (TypeError otherwise)
"""

from __future__ import annotations

import enum
import logging
from typing import List, Optional

from catalog_codec.codecs.base import BaseCodec, require_identified
from catalog_codec.core.errors import MalformedInput
from catalog_codec.core.models import IdentifiedContributor, Record
from catalog_codec.stream.reader import JsonReader
from catalog_codec.stream.writer import JsonWriter

logger = logging.getLogger(__name__)


class _RecordField(str, enum.Enum):
    ISBN = "isbn"
    TITLE = "title"
    AUTHORS = "authors"


class _AuthorField(str, enum.Enum):
    ID = "id"
    NAME = "name"


def _lookup(fields: type, name: str):
    try:
        return fields(name)
    except ValueError:
        return None


class NestedObjectsCodec(BaseCodec):
    """Record as an object with an array of ``{id, name}`` author objects."""

    @property
    def name(self) -> str:
        return "Nested author objects"

    def decode(self, reader: JsonReader) -> Record:
        isbn = ""
        title = ""
        contributors: List[IdentifiedContributor] = []

        reader.enter_object()
        while reader.has_more():
            key = reader.next_field_name()
            field = _lookup(_RecordField, key)
            if field is _RecordField.ISBN:
                isbn = reader.read_string()
            elif field is _RecordField.TITLE:
                title = reader.read_string()
            elif field is _RecordField.AUTHORS:
                contributors = self._decode_authors(reader)
            else:
                logger.debug("Skipping unknown record field %r", key)
                reader.skip_value()
        reader.exit_object()

        return Record(isbn=isbn, title=title, contributors=contributors)

    def _decode_authors(self, reader: JsonReader) -> List[IdentifiedContributor]:
        authors: List[IdentifiedContributor] = []
        reader.enter_array()
        while reader.has_more():
            authors.append(self._decode_author(reader, len(authors)))
        reader.exit_array()
        return authors

    def _decode_author(self, reader: JsonReader, index: int) -> IdentifiedContributor:
        author_id: Optional[int] = None
        author_name: Optional[str] = None

        reader.enter_object()
        while reader.has_more():
            key = reader.next_field_name()
            field = _lookup(_AuthorField, key)
            if field is _AuthorField.ID:
                author_id = reader.read_int()
            elif field is _AuthorField.NAME:
                author_name = reader.read_string()
            else:
                logger.debug("Skipping unknown author field %r", key)
                reader.skip_value()
        reader.exit_object()

        if author_id is None or author_name is None:
            missing = "id" if author_id is None else "name"
            raise MalformedInput("author {} has no {!r} field".format(index, missing))
        return IdentifiedContributor(author_id, author_name)

    def encode(self, writer: JsonWriter, record: Record) -> None:
        require_identified(record)
        writer.enter_object()
        writer.write_field_name(_RecordField.ISBN.value)
        writer.write_string(record.isbn)
        writer.write_field_name(_RecordField.TITLE.value)
        writer.write_string(record.title)
        writer.write_field_name(_RecordField.AUTHORS.value)
        writer.enter_array()
        for contributor in record.contributors:
            writer.enter_object()
            writer.write_field_name(_AuthorField.ID.value)
            writer.write_int(contributor.id)
            writer.write_field_name(_AuthorField.NAME.value)
            writer.write_string(contributor.name)
            writer.exit_object()
        writer.exit_array()
        writer.exit_object()
