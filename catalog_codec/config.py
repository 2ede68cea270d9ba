"""Configuration constants and .env loading.

WHY: The CLI and the codecs share a handful of tunables (default codec,
pretty-print indent, log level). Keeping them in one module makes them
easy to find and override without touching codec logic.

HOW: python-dotenv loads the .env file on import. Constants are defined
at module level and read from the environment with plain defaults.
load_indent() validates the indent setting with a clear error.

RULES:
- AUTHOR_DELIMITER is fixed; the joined-authors wire shape depends on it
- INT32_MIN / INT32_MAX bound every contributor id on the wire
- All other defaults can be overridden via environment variables
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Load .env from the working directory (where the CLI is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Wire constants
# ---------------------------------------------------------------------------

AUTHOR_DELIMITER = ";"
"""Separator between contributor names in the joined-authors shape. Never escaped."""

INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1

# ---------------------------------------------------------------------------
# Runtime defaults
# ---------------------------------------------------------------------------

DEFAULT_CODEC = os.getenv("CATALOG_DEFAULT_CODEC", "nested_objects")
LOG_LEVEL = os.getenv("CATALOG_LOG_LEVEL", "WARNING").upper()


def load_indent() -> int | None:
    """Load the pretty-print indent from CATALOG_INDENT.

    RULES:
    - Unset means 2 spaces
    - "0" means compact single-line output (returns None)
    - Raises ValueError on a non-integer or negative value
    """
    raw = os.getenv("CATALOG_INDENT", "2").strip()
    try:
        indent = int(raw)
    except ValueError:
        raise ValueError(
            "CATALOG_INDENT must be a whole number, got {!r}".format(raw)
        ) from None
    if indent < 0:
        raise ValueError("CATALOG_INDENT must not be negative, got {}".format(indent))
    return indent or None
