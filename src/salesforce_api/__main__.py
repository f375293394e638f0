"""``python -m salesforce_api`` runs the ``sfapi`` command line."""

from __future__ import annotations

from typing import Optional, Sequence

from .cli import cli


def main(argv: Optional[Sequence[str]] = None) -> None:
    cli.main(args=list(argv) if argv is not None else None, prog_name="sfapi")


if __name__ == "__main__":
    main()
