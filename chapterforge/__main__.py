"""Module entrypoint for running chapterforge as ``python -m chapterforge``."""

from __future__ import annotations

from chapterforge.cli import main


if __name__ == "__main__":
    main()
