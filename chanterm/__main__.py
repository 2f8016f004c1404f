"""Module entrypoint for ``python -m chanterm``."""

from .cli import main


if __name__ == "__main__":
    main()
