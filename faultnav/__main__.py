"""Module entrypoint for ``python -m faultnav``.

All argument parsing and session setup happen in ``faultnav.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
