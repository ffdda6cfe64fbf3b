"""Plugin discovery and rule collection.

Discovery: entry points (pip-installed) via pluggy setuptools entrypoints
in the ``cmdlint.plugins`` group. Plugins may also be registered directly.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Iterable

import pluggy

from cmdlint.plugins.hookspecs import CmdlintHookSpec
from cmdlint.rules.base import Rule

PROJECT_NAME = "cmdlint"
ENTRY_POINT_GROUP = "cmdlint.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery, registration, and rule collection."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(CmdlintHookSpec)
        self._loaded: bool = False

    def discover_and_load(self, *, disabled: Iterable[str] = ()) -> list[str]:
        """Load entry-point plugins, skipping names listed in *disabled*.

        Returns a list of loaded plugin names.
        """
        for name in disabled:
            self._pm.set_blocked(name)
        try:
            self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        except Exception:
            logger.warning("Entry-point plugin discovery failed", exc_info=True)
        self._normalize_plugin_instances()
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    def unregister(self, plugin: object) -> None:
        self._pm.unregister(plugin)

    @property
    def is_loaded(self) -> bool:
        """Whether discover_and_load() has been called."""
        return self._loaded

    def list_plugin_names(self) -> list[str]:
        """Return names of all registered plugins."""
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    def collect_rules(self) -> list[Rule]:
        """Gather rules from every plugin's ``register_rules`` hook.

        A plugin that raises or returns something other than a list of
        :class:`Rule` is logged and ignored.
        """
        rules: list[Rule] = []
        for plugin in self._pm.get_plugins():
            plugin_name = self._pm.get_name(plugin) or plugin.__class__.__name__
            hook = getattr(plugin, "register_rules", None)
            if hook is None:
                continue
            try:
                contributed = hook()
            except Exception:
                logger.warning("Plugin %s failed to register rules", plugin_name, exc_info=True)
                continue
            if contributed is None:
                continue
            if not isinstance(contributed, list | tuple):
                logger.warning("Plugin %s returned non-list rule registrations", plugin_name)
                continue
            for candidate in contributed:
                if isinstance(candidate, Rule):
                    rules.append(candidate)
                else:
                    logger.warning(
                        "Skipping non-Rule registration %r from plugin %s",
                        candidate,
                        plugin_name,
                    )
        return rules

    def _normalize_plugin_instances(self) -> None:
        """Replace registered plugin classes with instantiated objects.

        Entry-point loading may register a plugin class directly; hooks on
        a class object would be called without ``self``.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin):
                continue
            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)
            try:
                instance = plugin()
            except Exception:
                logger.warning(
                    "Failed to instantiate entry-point plugin %s",
                    plugin_name,
                    exc_info=True,
                )
                continue
            self._pm.register(instance, name=plugin_name)
            logger.debug("Instantiated entry-point plugin: %s", plugin_name)
