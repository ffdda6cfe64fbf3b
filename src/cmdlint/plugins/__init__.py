"""Extension layer — extra rules via pluggy.

Discovery: entry points in the ``cmdlint.plugins`` group.
INVARIANT: Plugin failures are warnings, never errors.
"""

from cmdlint.plugins.manager import PluginManager

__all__ = ["PluginManager"]
