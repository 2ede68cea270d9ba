"""Core data model and error taxonomy.

WHY: Every codec produces and consumes the same Record type and raises the
same errors. Keeping those in one package makes them the contract that
codecs, the CLI, and callers share.

HOW: models.py defines the frozen dataclasses, errors.py the exception
hierarchy.

RULES:
- Model dataclasses are the contract; change with care
- No stream or codec logic here
"""

from catalog_codec.core.errors import CodecError, IoFailure, MalformedInput, StreamStateError
from catalog_codec.core.models import Contributor, IdentifiedContributor, NamedContributor, Record

__all__ = [
    "CodecError",
    "Contributor",
    "IdentifiedContributor",
    "IoFailure",
    "MalformedInput",
    "NamedContributor",
    "Record",
    "StreamStateError",
]
