"""Codec registry — one strategy per wire shape.

WHY: The CLI and callers pick a wire shape by name. A central dict makes
adding a shape trivial: create the codec class, import it here, add one
line.

HOW: CODECS maps string keys to codec *classes* (not instances). Callers
instantiate as needed: ``codec = CODECS["nested_objects"]()``, or use
get_codec() for a friendlier error on unknown keys.

RULES:
- Keys are snake_case identifiers (used in CLI flags and config)
- Values are BaseCodec subclasses
- Every codec listed here must be importable without side effects
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from catalog_codec.codecs.joined_authors import JoinedAuthorsCodec
from catalog_codec.codecs.nested_objects import NestedObjectsCodec
from catalog_codec.codecs.paired_array import PairedArrayCodec
from catalog_codec.codecs.string_array import StringArrayCodec

if TYPE_CHECKING:
    from catalog_codec.codecs.base import BaseCodec

CODECS: dict[str, type[BaseCodec]] = {
    "joined_authors": JoinedAuthorsCodec,
    "string_array": StringArrayCodec,
    "paired_array": PairedArrayCodec,
    "nested_objects": NestedObjectsCodec,
}

# Shapes whose contributors carry ids (IdentifiedContributor)
IDENTIFIED_SHAPES = frozenset({"paired_array", "nested_objects"})


def get_codec(key: str) -> BaseCodec:
    """Instantiate the codec registered under ``key``.

    Raises:
        KeyError: ``key`` is not registered; the message lists valid keys.
    """
    try:
        codec_class = CODECS[key]
    except KeyError:
        raise KeyError(
            "unknown codec {!r}; available: {}".format(key, ", ".join(sorted(CODECS)))
        ) from None
    return codec_class()
