"""Module entrypoint for ``python -m dirindex``.

This keeps module-mode execution behavior identical to the CLI script.
All argument parsing and option resolution happen in ``dirindex.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
