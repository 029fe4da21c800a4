"""Plugin system for scmfilter.

This module provides the plugin infrastructure using pluggy.
Plugins implement hooks defined in hookspec.py to contribute traits.

Usage:
    from scmfilter.plugin import ScmFilterPlugin, hookimpl

    class MyPlugin(ScmFilterPlugin):
        name = "my-plugin"

        @hookimpl
        def get_trait_descriptors(self):
            return [MyTraitDescriptor()]
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

from scmfilter.plugin.hookspec import ScmFilterHookSpec

if TYPE_CHECKING:
    from scmfilter.core.trait import TraitDescriptor

hookimpl = pluggy.HookimplMarker("scmfilter")

__all__ = ["ScmFilterPlugin", "hookimpl", "ScmFilterHookSpec"]


class ScmFilterPlugin:
    """Base class for scmfilter plugins.

    Subclasses must define:
        name: Unique identifier for the plugin (str)

    Optional attributes:
        version: Plugin version string (str)
        description: Human-readable description (str)
    """

    name: str = "base"
    version: str = "0.0.0"
    description: str = ""

    @hookimpl
    def get_trait_descriptors(self) -> list["TraitDescriptor"]:
        """Default implementation: provides no traits."""
        return []
