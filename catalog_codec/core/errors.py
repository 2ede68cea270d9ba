"""Exception hierarchy shared by the stream layer and the codecs.

WHY: Callers need to tell "the input is not a record in this shape" apart
from "the file or socket failed" without inspecting messages.

RULES:
- MalformedInput: structural mismatch, wrong scalar kind, missing or
  unpaired element, tokenizer syntax error, premature end of input
- IoFailure: the underlying file object raised OSError; the original
  exception is chained as __cause__
- StreamStateError: a writer was driven out of order (a programming error)
- Codecs raise MalformedInput themselves but never catch or wrap IoFailure
"""


class CodecError(Exception):
    """Base class for all catalog_codec errors."""


class MalformedInput(CodecError, ValueError):
    """The token stream does not match the expected wire shape."""


class IoFailure(CodecError, OSError):
    """Reading from or writing to the underlying stream failed."""


class StreamStateError(CodecError, RuntimeError):
    """A token writer call was made in a position where it is not allowed."""
