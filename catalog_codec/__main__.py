"""Package entry point for ``python -m catalog_codec``.

Delegates to the CLI's main() function.
"""

from catalog_codec.cli import main

if __name__ == "__main__":
    main()
