"""Descriptor providers — resolve a command name to a CommandDescriptor."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Protocol

from pydantic import ValidationError

from cmdlint.domain.descriptors import CommandDescriptor
from cmdlint.errors import ResolutionError

if TYPE_CHECKING:
    from cmdlint.infrastructure.catalog import JsonCatalog


class DescriptorProvider(Protocol):
    """Anything that can resolve a command name."""

    def resolve(self, name: str) -> CommandDescriptor:
        """Return the descriptor for *name* or raise :class:`ResolutionError`."""
        ...


class StaticDescriptorProvider:
    """Provider over descriptors already in memory."""

    def __init__(self, descriptors: Iterable[CommandDescriptor]) -> None:
        self._by_name = {d.name.lower(): d for d in descriptors}

    def resolve(self, name: str) -> CommandDescriptor:
        try:
            return self._by_name[name.lower()]
        except KeyError:
            raise ResolutionError(name) from None


class CatalogDescriptorProvider:
    """Provider over a :class:`JsonCatalog`; records are validated lazily."""

    def __init__(self, catalog: JsonCatalog) -> None:
        self._catalog = catalog

    def resolve(self, name: str) -> CommandDescriptor:
        record = self._catalog.get(name)
        if record is None:
            raise ResolutionError(name)
        try:
            return CommandDescriptor.model_validate(record)
        except ValidationError as exc:
            msg = f"Malformed descriptor for {name}: {exc.error_count()} validation error(s)"
            raise ResolutionError(name, msg) from exc
