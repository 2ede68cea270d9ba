"""Shared test fixtures for the catalog_codec test suite.

WHY: Every codec is exercised against the same sample records, the
Effective Java and Java Puzzlers books with one and two authors.
Centralizing them here keeps all tests on the same data.

HOW: Pytest fixtures provide records in both contributor shapes, plus
an empty-contributor record. ``record_for`` picks the shape that a given
codec key can express.

RULES:
- Names-only records are used for joined_authors and string_array.
- Identified records are used for paired_array and nested_objects.
- Author ids follow the original sample: Joshua Bloch = 1, Neal Gafter = 2.
"""

import pytest

from catalog_codec.codecs import IDENTIFIED_SHAPES
from catalog_codec.core.models import IdentifiedContributor, NamedContributor, Record


EFFECTIVE_JAVA_ISBN = "978-0321356680"
EFFECTIVE_JAVA_TITLE = "Effective Java (2nd Edition)"
JAVA_PUZZLERS_ISBN = "978-0321336781"
JAVA_PUZZLERS_TITLE = "Java Puzzlers: Traps, Pitfalls, and Corner Cases"

AUTHORS = [(1, "Joshua Bloch"), (2, "Neal Gafter")]


def record_for(codec_key, author_count, isbn=JAVA_PUZZLERS_ISBN, title=JAVA_PUZZLERS_TITLE):
    """Build a record with ``author_count`` authors in the shape ``codec_key`` needs."""
    if author_count <= len(AUTHORS):
        authors = AUTHORS[:author_count]
    else:
        authors = [(i, "Author {}".format(i)) for i in range(1, author_count + 1)]
    if codec_key in IDENTIFIED_SHAPES:
        contributors = [IdentifiedContributor(i, name) for i, name in authors]
    else:
        contributors = [NamedContributor(name) for _, name in authors]
    return Record(isbn=isbn, title=title, contributors=contributors)


@pytest.fixture
def effective_java_named():
    """One author, names only."""
    return Record(
        isbn=EFFECTIVE_JAVA_ISBN,
        title=EFFECTIVE_JAVA_TITLE,
        contributors=[NamedContributor("Joshua Bloch")],
    )


@pytest.fixture
def java_puzzlers_named():
    """Two authors, names only."""
    return Record(
        isbn=JAVA_PUZZLERS_ISBN,
        title=JAVA_PUZZLERS_TITLE,
        contributors=[NamedContributor("Joshua Bloch"), NamedContributor("Neal Gafter")],
    )


@pytest.fixture
def java_puzzlers_identified():
    """Two authors with ids."""
    return Record(
        isbn=JAVA_PUZZLERS_ISBN,
        title=JAVA_PUZZLERS_TITLE,
        contributors=[IdentifiedContributor(1, "Joshua Bloch"), IdentifiedContributor(2, "Neal Gafter")],
    )


@pytest.fixture
def no_authors():
    return Record(isbn=EFFECTIVE_JAVA_ISBN, title=EFFECTIVE_JAVA_TITLE, contributors=[])


@pytest.fixture
def make_record():
    """Factory for records sized and shaped for a given codec key."""
    return record_for
