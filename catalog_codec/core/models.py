"""Catalog record dataclasses.

WHY: Every codec maps the same logical entity (a book-like record with
an opaque identifier, a title, and an ordered list of contributors) onto
a different JSON shape. A single well-typed model decouples the wire
shapes from each other and from callers.

HOW: Three frozen dataclasses:
  NamedContributor      — a contributor known only by name
  IdentifiedContributor — a contributor with a numeric id and a name
  Record                — identifier, title, and an ordered contributor tuple

RULES:
- The two contributor shapes are distinct types; there is no "maybe id"
- contributors is a tuple; order is significant and never normalised
- isbn and title are opaque strings; nothing here validates their format
- IdentifiedContributor.id must fit in a signed 32-bit integer
- Entities never reference a codec or stream
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple, Union

from catalog_codec.config import INT32_MAX, INT32_MIN


@dataclass(frozen=True)
class NamedContributor:
    """A contributor identified only by display name.

    Used by the joined-authors and string-array wire shapes, which carry
    no contributor id.
    """

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class IdentifiedContributor:
    """A contributor with a numeric id and a display name.

    WHY: The paired-array and nested-objects shapes carry an integer id
    next to each name. Modelling it as its own type means a decoded
    contributor can never be missing its id silently.

    RULES:
    - id: int (not bool) within [INT32_MIN, INT32_MAX]
    - Construction raises ValueError for anything else
    """

    id: int
    name: str

    def __post_init__(self) -> None:
        if isinstance(self.id, bool) or not isinstance(self.id, int):
            raise ValueError("contributor id must be an int, got {!r}".format(self.id))
        if not INT32_MIN <= self.id <= INT32_MAX:
            raise ValueError("contributor id {} is outside the 32-bit range".format(self.id))

    def __str__(self) -> str:
        return "[{}] {}".format(self.id, self.name)


Contributor = Union[NamedContributor, IdentifiedContributor]


@dataclass(frozen=True)
class Record:
    """A catalog record: identifier, title, and ordered contributors.

    WHY: This is the value every codec encodes and every decode returns.
    Freezing it means a record handed to a caller can't be half-built or
    mutated behind the codec's back.

    HOW: contributors accepts any iterable and is normalised to a tuple in
    __post_init__, so ``Record("x", "y", [a, b]) == Record("x", "y", (a, b))``.

    RULES:
    - Equality is structural (isbn, title, contributors in order)
    - A record may mix contributor shapes in memory, but each codec only
      encodes the shape its wire format can express
    """

    isbn: str = ""
    title: str = ""
    contributors: Tuple[Contributor, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not isinstance(self.contributors, tuple):
            object.__setattr__(self, "contributors", tuple(self.contributors))

    def __str__(self) -> str:
        lines = ["{} [{}]".format(self.title, self.isbn), "Written by:"]
        for contributor in self.contributors:
            lines.append("  >> {}".format(contributor))
        return "\n".join(lines)
