"""Token stream layer — cursor reader and writer for JSON.

WHY: Codecs work against a small, strictly ordered vocabulary (enter/exit
object or array, field names, string and int scalars) rather than a parsed
tree. This package provides that vocabulary over real JSON text.

HOW: JsonReader wraps ijson's incremental event parser with one token of
lookahead. JsonWriter emits JSON text with comma, colon, and indent
handling.

RULES:
- One reader or writer per encode/decode call; neither is thread-safe
- Stream I/O errors surface as IoFailure, bad JSON as MalformedInput
"""

from catalog_codec.stream.reader import JsonReader, ValueKind
from catalog_codec.stream.writer import JsonWriter

__all__ = ["JsonReader", "JsonWriter", "ValueKind"]
