"""Module entrypoint for ``python -m dropkick``."""

from .cli import main


if __name__ == "__main__":
    main()
