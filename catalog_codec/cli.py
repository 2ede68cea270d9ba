"""Command-line interface for the catalog record codecs.

WHY: Developers need a quick way to see what each wire shape looks like,
to turn a record description into wire JSON, and to check that a file of
wire JSON decodes. The CLI wires the codec registry, the token stream
layer, and the optional schema check behind one command.

HOW: argparse subcommands:
  demo     — serialise the sample record, print it, deserialise and print
  encode   — build a record from flags and print (or save) its wire JSON
  decode   — read one or more wire values from a file or stdin and print
             each decoded record
  formats  — list registered codecs
Status and errors go to stderr; data goes to stdout.

RULES:
- --codec defaults to CATALOG_DEFAULT_CODEC (see config.py)
- --indent defaults to CATALOG_INDENT; 0 means compact output
- For id-carrying shapes, --author takes "ID:NAME"; otherwise just NAME
- Codec, value, and schema errors exit with status 1; Ctrl-C exits 130
- Python 3.9 compatible, no match/case
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import jsonschema

from catalog_codec.codecs import CODECS, IDENTIFIED_SHAPES, get_codec
from catalog_codec.codecs.base import BaseCodec
from catalog_codec.config import DEFAULT_CODEC, LOG_LEVEL, load_indent
from catalog_codec.core.errors import CodecError
from catalog_codec.core.models import Contributor, IdentifiedContributor, NamedContributor, Record
from catalog_codec.schemas import validate_document
from catalog_codec.stream.reader import JsonReader
from catalog_codec.stream.writer import JsonWriter

logger = logging.getLogger(__name__)

SAMPLE_ISBN = "978-0321336781"
SAMPLE_TITLE = "Java Puzzlers: Traps, Pitfalls, and Corner Cases"
SAMPLE_AUTHORS = [(1, "Joshua Bloch"), (2, "Neal Gafter")]


def _status(msg: str) -> None:
    """Print a status message to stderr so stdout stays pipeable."""
    print(msg, file=sys.stderr, flush=True)


def sample_record(codec_key: str) -> Record:
    """The Java Puzzlers record, with contributors in the codec's shape."""
    if codec_key in IDENTIFIED_SHAPES:
        contributors: List[Contributor] = [IdentifiedContributor(i, n) for i, n in SAMPLE_AUTHORS]
    else:
        contributors = [NamedContributor(n) for _, n in SAMPLE_AUTHORS]
    return Record(isbn=SAMPLE_ISBN, title=SAMPLE_TITLE, contributors=contributors)


def parse_author(value: str, identified: bool) -> Contributor:
    """Parse one --author value.

    RULES:
    - identified=False: the whole value is the name
    - identified=True: "ID:NAME", split on the first colon; ID must be an int
    """
    if not identified:
        return NamedContributor(value)
    raw_id, sep, name = value.partition(":")
    if not sep:
        raise ValueError("author {!r} must look like ID:NAME for this codec".format(value))
    try:
        contributor_id = int(raw_id.strip())
    except ValueError:
        raise ValueError("author id {!r} is not an integer".format(raw_id)) from None
    return IdentifiedContributor(contributor_id, name)


def _resolve_indent(args: argparse.Namespace) -> Optional[int]:
    if args.indent is None:
        return load_indent()
    if args.indent < 0:
        raise ValueError("--indent must not be negative")
    return args.indent or None


def _emit(codec: BaseCodec, codec_key: str, record: Record, args: argparse.Namespace) -> str:
    text = codec.dumps(record, indent=_resolve_indent(args))
    if args.validate:
        validate_document(codec_key, text)
        logger.info("Output matches the %s schema", codec_key)
    return text


# ---------------------------------------------------------------------------
# Subcommands
# ---------------------------------------------------------------------------

def _run_demo(args: argparse.Namespace) -> None:
    codec = get_codec(args.codec)
    record = sample_record(args.codec)
    text = _emit(codec, args.codec, record, args)
    print("Serialise")
    print(text)
    parsed = codec.loads(text)
    print("\nDeserialised")
    print(parsed)


def _run_encode(args: argparse.Namespace) -> None:
    codec = get_codec(args.codec)
    identified = args.codec in IDENTIFIED_SHAPES
    contributors = [parse_author(a, identified) for a in (args.author or [])]
    record = Record(isbn=args.isbn, title=args.title, contributors=contributors)
    if not args.output:
        print(_emit(codec, args.codec, record, args))
        return
    with JsonWriter.to_path(args.output, indent=_resolve_indent(args)) as writer:
        codec.encode(writer, record)
    if args.validate:
        validate_document(args.codec, Path(args.output).read_text(encoding="utf-8"))
    _status("Saved: {}".format(args.output))


def _run_decode(args: argparse.Namespace) -> None:
    codec = get_codec(args.codec)
    if args.input in (None, "-"):
        reader = JsonReader.from_file(sys.stdin.buffer, multiple_values=True)
    else:
        reader = JsonReader.from_path(args.input, multiple_values=True)
    count = 0
    with reader:
        while reader.has_more():
            record = codec.decode(reader)
            if count:
                print()
            print(record)
            count += 1
    _status("Decoded {} record(s) with {}".format(count, codec.name))


def _run_formats(args: argparse.Namespace) -> None:
    for key in sorted(CODECS):
        marker = "*" if key == args.codec else " "
        print("{} {:<16} {}".format(marker, key, CODECS[key]().name))


# ---------------------------------------------------------------------------
# Parser and entry point
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    Kept separate from main() so tests can inspect it without running a
    subcommand.
    """
    parser = argparse.ArgumentParser(
        prog="catalog_codec",
        description="Encode and decode catalog records in several JSON wire shapes.",
    )
    parser.add_argument(
        "--codec",
        default=DEFAULT_CODEC,
        choices=sorted(CODECS),
        help="Wire shape to use (default: %(default)s).",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=None,
        help="Pretty-print indent; 0 for compact (default: CATALOG_INDENT or 2).",
    )
    parser.add_argument(
        "--validate",
        action="store_true",
        help="Check encoded output against the codec's JSON schema.",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    demo = sub.add_parser("demo", help="Round-trip the sample record and print both sides.")
    demo.set_defaults(handler=_run_demo)

    encode = sub.add_parser("encode", help="Print the wire JSON for a record.")
    encode.add_argument("--isbn", required=True, help="Record identifier (opaque).")
    encode.add_argument("--title", required=True, help="Record title.")
    encode.add_argument(
        "--author",
        action="append",
        default=None,
        help="Contributor; repeat in order. Use ID:NAME for paired_array and nested_objects.",
    )
    encode.add_argument("--output", default=None, help="Write to this file instead of stdout.")
    encode.set_defaults(handler=_run_encode)

    decode = sub.add_parser("decode", help="Decode wire JSON values and print the records.")
    decode.add_argument("input", nargs="?", default=None, help="Input file (default: stdin).")
    decode.set_defaults(handler=_run_decode)

    formats = sub.add_parser("formats", help="List available codecs.")
    formats.set_defaults(handler=_run_formats)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for ``python -m catalog_codec``.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    logging.basicConfig(level=LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        args.handler(args)
    except KeyboardInterrupt:
        _status("\nCancelled by user.")
        sys.exit(130)
    except jsonschema.ValidationError as e:
        _status("Error: output does not match the {} schema: {}".format(args.codec, e.message))
        sys.exit(1)
    except (CodecError, ValueError, KeyError, TypeError) as e:
        _status("Error: {}".format(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
