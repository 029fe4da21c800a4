"""Built-in plugin providing the pull request origin branch filter."""

from __future__ import annotations

from scmfilter import __version__
from scmfilter.core.filter import OriginRegexFilterDescriptor
from scmfilter.core.trait import TraitDescriptor
from scmfilter.plugin import ScmFilterPlugin, hookimpl


class OriginFilterPlugin(ScmFilterPlugin):
    """Registers OriginRegexFilter under RegexSCMPROriginFilter."""

    name = "origin"
    version = __version__
    description = "Filter change requests by origin branch name"

    @hookimpl
    def get_trait_descriptors(self) -> list[TraitDescriptor]:
        return [OriginRegexFilterDescriptor()]
