"""JSON descriptor catalogue file.

The file holds the descriptors a shell host exported::

    {"commands": [{"name": "Get-Widget", "parameters": [...]}, ...]}

A bare list of descriptor objects is accepted too. This module only reads
and indexes raw records; validation into domain models happens in the
service layer.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from cmdlint.errors import ConfigurationError


class JsonCatalog:
    """Raw descriptor records keyed by lower-cased command name."""

    def __init__(self, records: list[dict[str, Any]], *, source: str | None = None) -> None:
        self.source = source
        self._records: dict[str, dict[str, Any]] = {}
        for record in records:
            name = record.get("name")
            if not isinstance(name, str) or not name:
                msg = f"Descriptor without a name in {source or 'catalogue'}"
                raise ConfigurationError(msg)
            self._records[name.lower()] = record

    @classmethod
    def from_path(cls, path: Path) -> JsonCatalog:
        """Read a catalogue file.

        Raises:
            ConfigurationError: If the file is missing or not valid UTF-8 JSON.
        """
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except OSError as exc:
            msg = f"Cannot read command catalogue {path}: {exc}"
            raise ConfigurationError(msg) from exc
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            msg = f"Invalid JSON or encoding in {path}: {exc}"
            raise ConfigurationError(msg) from exc

        records = raw.get("commands", []) if isinstance(raw, dict) else raw
        if not isinstance(records, list):
            msg = f"Expected a list of commands in {path}"
            raise ConfigurationError(msg)
        return cls([r for r in records if isinstance(r, dict)], source=str(path))

    def get(self, name: str) -> dict[str, Any] | None:
        return self._records.get(name.lower())

    def names(self) -> list[str]:
        return [str(r["name"]) for r in self._records.values()]
