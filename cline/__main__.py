"""Module entrypoint for ``python -m cline``.

All argument parsing and session setup happen in ``cline.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
