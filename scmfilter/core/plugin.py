"""Plugin management for scmfilter.

This module provides the PluginManager class that handles plugin discovery
via Python entry points, registration with pluggy, and lookup of the trait
descriptors plugins contribute.
"""

from __future__ import annotations

import logging
from importlib.metadata import entry_points
from typing import Iterable

import pluggy

from scmfilter.core.trait import SourceTrait, TraitDescriptor, UnknownTraitError
from scmfilter.models.trait_def import TraitConfig
from scmfilter.plugin import ScmFilterHookSpec, ScmFilterPlugin

logger = logging.getLogger(__name__)

# Entry point group name for scmfilter plugins
ENTRY_POINT_GROUP = "scmfilter.plugins"


class PluginError(Exception):
    """Base exception for plugin-related errors."""


class PluginConflictError(PluginError):
    """Raised when two plugins register traits under the same symbol."""


class PluginManager:
    """Manages plugin discovery, registration and trait lookup.

    Example:
        manager = PluginManager()
        manager.discover()

        descriptor = manager.get_descriptor("RegexSCMPROriginFilter")
        traits = manager.create_traits(config.traits)
    """

    def __init__(self) -> None:
        self.pm = pluggy.PluginManager("scmfilter")
        self.pm.add_hookspecs(ScmFilterHookSpec)
        self._plugins: dict[str, ScmFilterPlugin] = {}

    def register(self, plugin: ScmFilterPlugin) -> None:
        """Register a plugin instance.

        Raises:
            PluginConflictError: If a plugin with the same name is registered.
        """
        name = plugin.name
        if name in self._plugins:
            raise PluginConflictError(f"Plugin '{name}' is already registered")
        self._plugins[name] = plugin
        self.pm.register(plugin, name=name)

    def unregister(self, name: str) -> None:
        if name in self._plugins:
            plugin = self._plugins.pop(name)
            self.pm.unregister(plugin)

    def discover(self, include_builtin: bool = True) -> list[str]:
        """Discover and register plugins from entry points.

        Scans the 'scmfilter.plugins' entry point group. Plugins that fail to
        load are logged and skipped. When include_builtin is set, the
        built-in plugins are registered if no entry point provided them.

        Returns:
            List of discovered plugin names.
        """
        discovered = []

        for ep in entry_points(group=ENTRY_POINT_GROUP):
            try:
                plugin_class = ep.load()
                plugin_instance = plugin_class()
            except Exception as e:
                logger.warning("Skipping plugin entry point %r: %s", ep.name, e)
                continue
            if plugin_instance.name in self._plugins:
                continue
            self.register(plugin_instance)
            discovered.append(plugin_instance.name)

        if include_builtin:
            from scmfilter.plugins.origin import OriginFilterPlugin

            builtin = OriginFilterPlugin()
            if builtin.name not in self._plugins:
                self.register(builtin)
                discovered.append(builtin.name)

        return discovered

    def list_plugins(self) -> list[str]:
        return list(self._plugins.keys())

    def get_plugin(self, name: str) -> ScmFilterPlugin | None:
        return self._plugins.get(name)

    def get_plugin_info(self, name: str) -> dict[str, str] | None:
        """Get information about a plugin.

        Returns:
            Dictionary with plugin info (name, version, description),
            or None if not found.
        """
        plugin = self._plugins.get(name)
        if plugin is None:
            return None

        return {
            "name": plugin.name,
            "version": getattr(plugin, "version", "0.0.0"),
            "description": getattr(plugin, "description", ""),
        }

    def get_descriptors(self) -> dict[str, TraitDescriptor]:
        """Collect trait descriptors from all registered plugins.

        Returns:
            Dict mapping trait symbols to descriptors.

        Raises:
            PluginConflictError: If two descriptors share a symbol.
        """
        descriptors: dict[str, TraitDescriptor] = {}
        for result in self.pm.hook.get_trait_descriptors():
            for descriptor in result or []:
                if descriptor.symbol in descriptors:
                    raise PluginConflictError(
                        f"Trait symbol '{descriptor.symbol}' is registered "
                        f"more than once"
                    )
                descriptors[descriptor.symbol] = descriptor
        return descriptors

    def get_descriptor(self, symbol: str) -> TraitDescriptor:
        """Look up the descriptor registered under a symbol.

        Raises:
            UnknownTraitError: If no plugin provides the symbol.
        """
        descriptors = self.get_descriptors()
        try:
            return descriptors[symbol]
        except KeyError:
            available = ", ".join(sorted(descriptors)) or "none"
            raise UnknownTraitError(
                f"Unknown trait '{symbol}'. Available traits: {available}"
            ) from None

    def create_traits(self, configs: Iterable[TraitConfig]) -> list[SourceTrait]:
        """Build the enabled traits from their configurations.

        Raises:
            UnknownTraitError: If a configured symbol is not registered.
            TraitConfigError: If a trait's options are invalid.
        """
        traits = []
        for trait_config in configs:
            if not trait_config.enabled:
                logger.debug("Trait %r disabled, skipping", trait_config.symbol)
                continue
            descriptor = self.get_descriptor(trait_config.symbol)
            traits.append(descriptor.create(**trait_config.options))
        return traits
