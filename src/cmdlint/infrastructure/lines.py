"""Line-oriented name list loading."""

from __future__ import annotations

from importlib import resources
from pathlib import Path

DATA_PACKAGE = "cmdlint.data"
APPROVED_VERBS_FILE = "approved_verbs.txt"
STANDARD_NAMES_FILE = "standard_parameters.txt"


def load_lines(path: Path) -> list[str]:
    """Read *path* as UTF-8 and return its lines.

    Raises:
        OSError: If the file cannot be read.
        UnicodeDecodeError: If the file is not UTF-8 text.
    """
    return path.read_text(encoding="utf-8").splitlines()


def bundled_path(filename: str) -> Path:
    """Filesystem path of a name list shipped inside the package."""
    return Path(str(resources.files(DATA_PACKAGE).joinpath(filename)))
