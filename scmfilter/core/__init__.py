"""Core logic for scmfilter.

This module provides the core functionality:
- OriginRegexFilter: Change request origin branch filtering
- SourceContext: Prefilter collection applied to discovered heads
- PluginManager: Plugin discovery and trait lookup
- ConfigLoader: Configuration file loading
"""

from scmfilter.core.config import Config, ConfigError, ConfigLoader, GeneralConfig
from scmfilter.core.context import HeadPrefilter, SourceContext
from scmfilter.core.filter import (
    InvalidPatternError,
    OriginRegexFilter,
    OriginRegexFilterDescriptor,
    compile_regex,
)
from scmfilter.core.plugin import PluginConflictError, PluginError, PluginManager
from scmfilter.core.trait import (
    SourceTrait,
    TraitConfigError,
    TraitDescriptor,
    TraitError,
    UnknownTraitError,
)

__all__ = [
    "Config",
    "ConfigError",
    "ConfigLoader",
    "GeneralConfig",
    "HeadPrefilter",
    "InvalidPatternError",
    "OriginRegexFilter",
    "OriginRegexFilterDescriptor",
    "PluginConflictError",
    "PluginError",
    "PluginManager",
    "SourceContext",
    "SourceTrait",
    "TraitConfigError",
    "TraitDescriptor",
    "TraitError",
    "UnknownTraitError",
]
