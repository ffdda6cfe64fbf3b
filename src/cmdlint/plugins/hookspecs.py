"""Pluggy hook specifications for cmdlint.

A plugin contributes rules by implementing ``register_rules``::

    hookimpl = pluggy.HookimplMarker("cmdlint")

    class MyRules:
        @hookimpl
        def register_rules(self):
            return [Rule(id="my-rule", ...)]
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from cmdlint.rules.base import Rule

hookspec = pluggy.HookspecMarker("cmdlint")
hookimpl = pluggy.HookimplMarker("cmdlint")


class CmdlintHookSpec:
    """Hook specifications for the cmdlint plugin system."""

    @hookspec
    def register_rules(self) -> list[Rule] | None:
        """Return extra rules appended to the catalogue after the built-ins."""
