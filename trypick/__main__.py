"""Module entrypoint for ``python -m trypick``.

This keeps module-mode execution behavior identical to the ``try`` script.
All argument parsing and dispatch happen in ``trypick.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
