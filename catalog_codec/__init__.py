"""Catalog Codec — streaming JSON codecs for catalog records.

WHY: A catalog record (ISBN, title, ordered contributors) travels between
systems in several JSON shapes. Building a generic tree first and then
mapping it wastes memory and hides shape errors, so each codec reads and
writes the record directly against a token stream.

HOW: Three layers: stream (cursor reader/writer over JSON tokens), core
(Record and contributor dataclasses plus the error taxonomy), codecs
(one pluggable strategy per wire shape, looked up by name).

RULES:
- All codecs consume and produce the same Record dataclass
- Adding a new wire shape = one new codec module, no core changes
- The token stream vocabulary is the stable contract between layers
"""

__version__ = "0.1.0"
