"""Module entrypoint for `python -m jet_schema_builder`.

Delegates to the CLI implementation.
"""

from .cli import main


if __name__ == "__main__":
    main()
