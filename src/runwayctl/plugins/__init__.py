"""Extension layer — plugin system via pluggy.

Discovery: entry_points (pip-installed) plus single-file plugins in
``.runwayctl/plugins/`` next to the config file.
INVARIANT: Plugin failures are warnings, never errors.
"""

from runwayctl.plugins.hookspecs import hookimpl
from runwayctl.plugins.manager import PluginManager

__all__ = ["PluginManager", "hookimpl"]
