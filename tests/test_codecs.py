"""Unit tests for the four codec strategies and the registry.

WHY: Each codec is a separate mapping between Record and a wire shape.
A token written in the wrong order, or an unknown field that breaks
decoding, corrupts data silently for whoever consumes the JSON.

HOW: Tests cover, per codec:
  - The exact wire shape produced for the sample records
  - Decoding hand-written wire JSON, including edge cases
  - Malformed input rejection
Followed by round-trip and order checks across every registered codec.

RULES:
- Sample records come from conftest.py.
- Wire JSON is inspected with the standard json module, never with the
  codec under test.
"""

import io
import json

import pytest

from catalog_codec.codecs import CODECS, IDENTIFIED_SHAPES, get_codec
from catalog_codec.codecs.joined_authors import JoinedAuthorsCodec
from catalog_codec.codecs.nested_objects import NestedObjectsCodec
from catalog_codec.codecs.paired_array import PairedArrayCodec
from catalog_codec.codecs.string_array import StringArrayCodec
from catalog_codec.core.errors import IoFailure, MalformedInput
from catalog_codec.core.models import IdentifiedContributor, NamedContributor, Record
from catalog_codec.stream import JsonReader, JsonWriter



# =========================================================================
# Joined authors
# =========================================================================

class TestJoinedAuthorsCodec:
    """Object with authors flattened into one ';'-delimited string."""

    def test_authors_joined_with_semicolon(self, java_puzzlers_named):
        data = json.loads(JoinedAuthorsCodec().dumps(java_puzzlers_named))
        assert data == {
            "isbn": "978-0321336781",
            "title": "Java Puzzlers: Traps, Pitfalls, and Corner Cases",
            "authors": "Joshua Bloch;Neal Gafter",
        }

    def test_field_order_on_write(self, java_puzzlers_named):
        text = JoinedAuthorsCodec().dumps(java_puzzlers_named)
        assert list(json.loads(text).keys()) == ["isbn", "title", "authors"]

    def test_decode_splits_in_order(self):
        record = JoinedAuthorsCodec().loads(
            '{"isbn": "978-0321336781", "title": "T", "authors": "Joshua Bloch;Neal Gafter"}'
        )
        assert record.contributors == (NamedContributor("Joshua Bloch"), NamedContributor("Neal Gafter"))

    def test_fields_in_any_order(self):
        record = JoinedAuthorsCodec().loads('{"authors": "A", "title": "T", "isbn": "I"}')
        assert record == Record("I", "T", [NamedContributor("A")])

    def test_unknown_nested_field_is_skipped(self):
        record = JoinedAuthorsCodec().loads(
            '{"isbn": "I", "meta": {"tags": ["a", {"b": 1}]}, "title": "T", "authors": "A"}'
        )
        assert record == Record("I", "T", [NamedContributor("A")])

    def test_missing_fields_keep_zero_values(self):
        assert JoinedAuthorsCodec().loads("{}") == Record()
        assert JoinedAuthorsCodec().loads('{"isbn": "I"}') == Record(isbn="I")

    def test_empty_authors_string_is_one_empty_name(self):
        record = JoinedAuthorsCodec().loads('{"isbn": "I", "title": "T", "authors": ""}')
        assert record.contributors == (NamedContributor(""),)

    def test_delimiter_in_name_is_mis_split(self):
        codec = JoinedAuthorsCodec()
        original = Record("I", "T", [NamedContributor("Smith; John")])
        decoded = codec.loads(codec.dumps(original))
        assert decoded.contributors == (NamedContributor("Smith"), NamedContributor(" John"))

    def test_zero_authors_come_back_as_one_empty_name(self):
        codec = JoinedAuthorsCodec()
        decoded = codec.loads(codec.dumps(Record("I", "T", [])))
        assert decoded.contributors == (NamedContributor(""),)

    def test_ids_are_dropped(self, java_puzzlers_identified):
        data = json.loads(JoinedAuthorsCodec().dumps(java_puzzlers_identified))
        assert data["authors"] == "Joshua Bloch;Neal Gafter"

    def test_authors_must_be_string(self):
        with pytest.raises(MalformedInput):
            JoinedAuthorsCodec().loads('{"authors": ["Joshua Bloch"]}')

    def test_array_is_malformed(self):
        with pytest.raises(MalformedInput):
            JoinedAuthorsCodec().loads('["I", "T"]')


# =========================================================================
# String array
# =========================================================================

class TestStringArrayCodec:
    """Positional array: isbn, title, then one name per author."""

    def test_one_author_is_three_elements(self, effective_java_named):
        data = json.loads(StringArrayCodec().dumps(effective_java_named))
        assert data == ["978-0321356680", "Effective Java (2nd Edition)", "Joshua Bloch"]

    def test_two_element_array_has_no_authors(self):
        record = StringArrayCodec().loads('["978-0321356680", "Effective Java (2nd Edition)"]')
        assert record.contributors == ()
        assert record.title == "Effective Java (2nd Edition)"

    def test_zero_authors_encodes_two_elements(self, no_authors):
        assert json.loads(StringArrayCodec().dumps(no_authors)) == [
            "978-0321356680",
            "Effective Java (2nd Edition)",
        ]

    def test_missing_title_is_malformed(self):
        with pytest.raises(MalformedInput):
            StringArrayCodec().loads('["978-0321356680"]')

    def test_numeric_author_is_malformed(self):
        with pytest.raises(MalformedInput, match="expected string"):
            StringArrayCodec().loads('["I", "T", 1]')

    def test_object_is_malformed(self):
        with pytest.raises(MalformedInput):
            StringArrayCodec().loads('{"isbn": "I"}')


# =========================================================================
# Paired array
# =========================================================================

class TestPairedArrayCodec:
    """Positional array: isbn, title, then id/name pairs."""

    def test_pairs_are_flattened(self, java_puzzlers_identified):
        data = json.loads(PairedArrayCodec().dumps(java_puzzlers_identified))
        assert data == [
            "978-0321336781",
            "Java Puzzlers: Traps, Pitfalls, and Corner Cases",
            1, "Joshua Bloch",
            2, "Neal Gafter",
        ]

    def test_decode_pairs(self):
        record = PairedArrayCodec().loads('["I", "T", 7, "Zoë", -3, "Neg"]')
        assert record.contributors == (IdentifiedContributor(7, "Zoë"), IdentifiedContributor(-3, "Neg"))

    def test_unpaired_trailing_id_is_malformed(self):
        with pytest.raises(MalformedInput, match="unpaired"):
            PairedArrayCodec().loads(
                '["978-0321336781", "Java Puzzlers: Traps, Pitfalls, and Corner Cases", 1, "Joshua Bloch", 2]'
            )

    def test_name_where_id_expected_is_malformed(self):
        with pytest.raises(MalformedInput):
            PairedArrayCodec().loads('["I", "T", "Joshua Bloch", 1]')

    def test_out_of_range_id_is_malformed(self):
        with pytest.raises(MalformedInput, match="32-bit"):
            PairedArrayCodec().loads('["I", "T", 4294967296, "Big"]')

    def test_named_contributor_cannot_be_encoded(self, java_puzzlers_named):
        buffer = io.StringIO()
        with pytest.raises(TypeError):
            PairedArrayCodec().encode(JsonWriter(buffer), java_puzzlers_named)
        assert buffer.getvalue() == ""


# =========================================================================
# Nested objects
# =========================================================================

class TestNestedObjectsCodec:
    """Object with an array of {id, name} author objects."""

    def test_wire_shape(self, java_puzzlers_identified):
        data = json.loads(NestedObjectsCodec().dumps(java_puzzlers_identified))
        assert data == {
            "isbn": "978-0321336781",
            "title": "Java Puzzlers: Traps, Pitfalls, and Corner Cases",
            "authors": [
                {"id": 1, "name": "Joshua Bloch"},
                {"id": 2, "name": "Neal Gafter"},
            ],
        }

    def test_author_field_order_on_write(self, java_puzzlers_identified):
        data = json.loads(NestedObjectsCodec().dumps(java_puzzlers_identified))
        assert list(data["authors"][0].keys()) == ["id", "name"]

    def test_unknown_top_level_field_between_isbn_and_title(self, java_puzzlers_identified):
        text = (
            '{"isbn": "978-0321336781", "edition": "2nd",'
            ' "title": "Java Puzzlers: Traps, Pitfalls, and Corner Cases",'
            ' "authors": [{"id": 1, "name": "Joshua Bloch"}, {"id": 2, "name": "Neal Gafter"}]}'
        )
        assert NestedObjectsCodec().loads(text) == java_puzzlers_identified

    def test_unknown_author_fields_are_skipped(self):
        text = '{"authors": [{"email": {"work": ["x"]}, "name": "N", "id": 4, "born": 1961}]}'
        record = NestedObjectsCodec().loads(text)
        assert record.contributors == (IdentifiedContributor(4, "N"),)

    def test_empty_authors(self):
        record = NestedObjectsCodec().loads('{"isbn": "I", "title": "T", "authors": []}')
        assert record == Record("I", "T", [])

    def test_author_without_id_is_malformed(self):
        with pytest.raises(MalformedInput, match="'id'"):
            NestedObjectsCodec().loads('{"authors": [{"name": "N"}]}')

    def test_author_without_name_is_malformed(self):
        with pytest.raises(MalformedInput, match="'name'"):
            NestedObjectsCodec().loads('{"authors": [{"id": 1}]}')

    def test_string_id_is_malformed(self):
        with pytest.raises(MalformedInput):
            NestedObjectsCodec().loads('{"authors": [{"id": "1", "name": "N"}]}')

    def test_authors_object_instead_of_array_is_malformed(self):
        with pytest.raises(MalformedInput, match="expected start of array"):
            NestedObjectsCodec().loads('{"authors": {"id": 1, "name": "N"}}')

    def test_named_contributor_cannot_be_encoded(self, java_puzzlers_named):
        with pytest.raises(TypeError):
            NestedObjectsCodec().dumps(java_puzzlers_named)


# =========================================================================
# Cross-codec properties
# =========================================================================

ALL_CODECS = sorted(CODECS)

# An empty "authors" string decodes to one empty name, so the joined shape
# cannot round-trip zero contributors (pinned in TestJoinedAuthorsCodec).
ROUND_TRIP_CASES = [
    (key, count)
    for key in ALL_CODECS
    for count in (0, 1, 5)
    if (key, count) != ("joined_authors", 0)
]


class TestRoundTrip:

    @pytest.mark.parametrize("codec_key,author_count", ROUND_TRIP_CASES)
    def test_decode_of_encode_is_identity(self, make_record, codec_key, author_count):
        codec = get_codec(codec_key)
        record = make_record(codec_key, author_count)
        assert codec.loads(codec.dumps(record)) == record

    @pytest.mark.parametrize("codec_key", ALL_CODECS)
    def test_pretty_output_round_trips(self, make_record, codec_key):
        codec = get_codec(codec_key)
        record = make_record(codec_key, 2)
        assert codec.loads(codec.dumps(record, indent=4)) == record

    @pytest.mark.parametrize("codec_key", ALL_CODECS)
    def test_order_is_preserved(self, codec_key):
        codec = get_codec(codec_key)
        names = ["Zed", "Alpha", "Mid"]
        if codec_key in IDENTIFIED_SHAPES:
            contributors = [IdentifiedContributor(i, n) for i, n in zip([9, 1, 5], names)]
        else:
            contributors = [NamedContributor(n) for n in names]
        record = Record("978-0321336781", "Java Puzzlers: Traps, Pitfalls, and Corner Cases", contributors)
        assert codec.loads(codec.dumps(record)).contributors == tuple(contributors)

    @pytest.mark.parametrize("codec_key", ALL_CODECS)
    def test_empty_and_identical_strings(self, make_record, codec_key):
        codec = get_codec(codec_key)
        for isbn, title in (("", ""), ("same", "same")):
            record = make_record(codec_key, 1, isbn=isbn, title=title)
            assert codec.loads(codec.dumps(record)) == record

    @pytest.mark.parametrize("codec_key", ALL_CODECS)
    def test_decode_consumes_exactly_one_value(self, make_record, codec_key):
        codec = get_codec(codec_key)
        first = make_record(codec_key, 1, isbn="first")
        second = make_record(codec_key, 2, isbn="second")
        buffer = io.StringIO()
        writer = JsonWriter(buffer)
        codec.encode(writer, first)
        codec.encode(writer, second)

        reader = JsonReader.from_string(buffer.getvalue(), multiple_values=True)
        assert codec.decode(reader) == first
        assert codec.decode(reader) == second
        assert not reader.has_more()

    @pytest.mark.parametrize("codec_key", ALL_CODECS)
    def test_trailing_data_rejected_by_loads(self, make_record, codec_key):
        codec = get_codec(codec_key)
        text = codec.dumps(make_record(codec_key, 1)) + " 42"
        with pytest.raises(MalformedInput):
            codec.loads(text)

    @pytest.mark.parametrize("codec_key", ALL_CODECS)
    def test_scalar_root_is_malformed(self, codec_key):
        with pytest.raises(MalformedInput):
            get_codec(codec_key).loads('"just a string"')

    @pytest.mark.parametrize("codec_key", ALL_CODECS)
    def test_io_failure_propagates(self, make_record, codec_key):
        class BrokenSink:
            def write(self, text):
                raise OSError("disk full")

        codec = get_codec(codec_key)
        with pytest.raises(IoFailure):
            codec.encode(JsonWriter(BrokenSink()), make_record(codec_key, 1))


class TestRegistry:

    def test_all_shapes_registered(self):
        assert set(CODECS) == {"joined_authors", "string_array", "paired_array", "nested_objects"}

    def test_get_codec_returns_instance(self):
        assert isinstance(get_codec("string_array"), StringArrayCodec)

    def test_unknown_key_lists_available(self):
        with pytest.raises(KeyError, match="nested_objects"):
            get_codec("xml")

    @pytest.mark.parametrize("codec_key", ALL_CODECS)
    def test_every_codec_has_a_name(self, codec_key):
        assert get_codec(codec_key).name
