"""Extension layer — plugin system via pluggy.

Plugins contribute generator commands and resource domains.
"""

from stackscout.plugins.hookspecs import hookimpl
from stackscout.plugins.manager import PluginManager

__all__ = ["PluginManager", "hookimpl"]
