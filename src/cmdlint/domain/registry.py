"""Read-only name registries (standard parameter names, approved verbs).

A registry is loaded once per run from a line-oriented source and never
changes afterwards. A registry that failed to load is still a valid
object: it is *unloaded*, remembers why, and rules that depend on it
skip themselves instead of failing the whole evaluation.
"""

from __future__ import annotations

import difflib
import logging
from collections.abc import Callable, Iterable
from pathlib import Path

logger = logging.getLogger(__name__)

FUZZY_CUTOFF = 0.8


def parse_lines(lines: Iterable[str]) -> list[str]:
    """Strip whitespace, drop blanks and ``#`` comments, keep order."""
    names: list[str] = []
    for raw in lines:
        line = raw.split("#", 1)[0].strip()
        if line:
            names.append(line)
    return names


class StandardNameRegistry:
    """Case-insensitive set of canonical names.

    Examples:
        >>> reg = StandardNameRegistry.load(["ComputerName", "Path"])
        >>> "computername" in reg
        True
        >>> reg.closest("ComputerNames")
        'ComputerName'
    """

    def __init__(
        self,
        names: Iterable[str] = (),
        *,
        source: str | None = None,
        error: str | None = None,
    ) -> None:
        self._names: tuple[str, ...] = tuple(dict.fromkeys(names))
        self._lookup = {n.lower(): n for n in self._names}
        self.source = source
        self.error = error

    @classmethod
    def load(cls, lines: Iterable[str], *, source: str | None = None) -> StandardNameRegistry:
        """Build a registry from one-name-per-line text."""
        return cls(parse_lines(lines), source=source)

    @classmethod
    def from_path(
        cls,
        path: Path | str,
        loader: Callable[[Path], list[str]],
    ) -> StandardNameRegistry:
        """Load from *path* via *loader*; unreadable files yield an unloaded registry."""
        source = str(path)
        try:
            lines = loader(Path(path))
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Could not load name list %s: %s", source, exc)
            return cls.unloaded(f"{source}: {exc}", source=source)
        registry = cls.load(lines, source=source)
        logger.debug("Loaded %d names from %s", len(registry), source)
        return registry

    @classmethod
    def unloaded(cls, error: str, *, source: str | None = None) -> StandardNameRegistry:
        return cls((), source=source, error=error)

    @property
    def loaded(self) -> bool:
        return self.error is None

    @property
    def names(self) -> tuple[str, ...]:
        return self._names

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._lookup

    def __len__(self) -> int:
        return len(self._names)

    def canonical(self, name: str) -> str | None:
        """Return the registered spelling of *name*, if registered."""
        return self._lookup.get(name.lower())

    def closest(self, name: str) -> str | None:
        """Nearest registered name that is *not* an exact match.

        Returns None when *name* is itself registered or nothing is
        similar enough.
        """
        if name in self:
            return None
        matches = difflib.get_close_matches(
            name.lower(), list(self._lookup), n=1, cutoff=FUZZY_CUTOFF
        )
        if not matches:
            return None
        return self._lookup[matches[0]]
