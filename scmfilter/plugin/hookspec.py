"""Hook specifications for scmfilter plugins.

This module defines the pluggy hook specification that plugins implement.
Plugins use the @hookimpl decorator to register their implementations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from scmfilter.core.trait import TraitDescriptor

hookspec = pluggy.HookspecMarker("scmfilter")


class ScmFilterHookSpec:
    """Hook specification defining the plugin interface.

    The host calls these hooks through the pluggy PluginManager to learn
    which traits are available.
    """

    @hookspec
    def get_trait_descriptors(self) -> list["TraitDescriptor"]:
        """Get the trait descriptors provided by this plugin.

        Each descriptor is registered under its symbol. Symbols must be
        unique across all installed plugins.

        Returns:
            List of TraitDescriptor instances.
        """
