"""JSON Schemas for each codec's wire shape.

WHY: The codecs promise a fixed wire shape per strategy. A schema per
shape lets the CLI (``--validate``) and the tests check emitted JSON
independently of the decoder that would normally read it back.

HOW: One ``<codec key>.schema.json`` file per registered codec lives next
to this module. Schemas are loaded lazily and cached. validate_document()
parses the text with the standard json module and validates it with
jsonschema.

RULES:
- Schema file names match the CODECS registry keys
- validate_document() raises jsonschema.ValidationError on a mismatch
- The paired-array id/name alternation cannot be expressed in draft-07,
  so it is checked here after schema validation
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema

_SCHEMA_DIR = Path(__file__).resolve().parent

_CACHED_SCHEMAS: Dict[str, Dict[str, Any]] = {}


def load_schema(key: str) -> Dict[str, Any]:
    """Load the schema for codec ``key``, reading from disk only once.

    Raises:
        KeyError: No schema file exists for ``key``.
    """
    if key not in _CACHED_SCHEMAS:
        path = _SCHEMA_DIR / "{}.schema.json".format(key)
        if not path.is_file():
            raise KeyError("no schema for codec {!r}".format(key))
        with open(path, encoding="utf-8") as f:
            _CACHED_SCHEMAS[key] = json.load(f)
    return _CACHED_SCHEMAS[key]


def _check_pairs(document: list) -> None:
    tail = document[2:]
    if len(tail) % 2:
        raise jsonschema.ValidationError("unpaired trailing element in id/name pairs")
    for offset in range(0, len(tail), 2):
        contributor_id, name = tail[offset], tail[offset + 1]
        if isinstance(contributor_id, bool) or not isinstance(contributor_id, int):
            raise jsonschema.ValidationError(
                "item {} must be an integer id, got {!r}".format(offset + 2, contributor_id)
            )
        if not isinstance(name, str):
            raise jsonschema.ValidationError(
                "item {} must be a name string, got {!r}".format(offset + 3, name)
            )


def validate_document(key: str, text: str) -> Any:
    """Validate JSON ``text`` against the wire schema of codec ``key``.

    Returns:
        The parsed document, for callers that want to inspect it.

    Raises:
        json.JSONDecodeError: ``text`` is not JSON.
        jsonschema.ValidationError: The document does not match the shape.
    """
    document = json.loads(text)
    jsonschema.validate(instance=document, schema=load_schema(key))
    if key == "paired_array":
        _check_pairs(document)
    return document
