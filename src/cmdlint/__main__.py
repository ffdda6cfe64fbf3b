"""Allow ``python -m cmdlint``."""

from cmdlint.cli import cli

cli()
