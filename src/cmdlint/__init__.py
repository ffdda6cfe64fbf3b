"""cmdlint — convention checks for shell command metadata."""

__version__ = "0.3.0"
