"""Source context and head prefilters.

The SourceContext is the host-side object that traits decorate. Each trait
adds HeadPrefilter instances; the context then excludes any head that at
least one prefilter excludes, before the host does any expensive work such
as fetching the head.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from scmfilter.core.trait import SourceTrait
    from scmfilter.models.head import SCMHead, SCMSource

logger = logging.getLogger(__name__)


class HeadPrefilter(ABC):
    """Predicate evaluated before a head is fetched."""

    @abstractmethod
    def is_excluded(self, source: "SCMSource", head: "SCMHead") -> bool:
        """Return True if the head should be excluded from indexing."""


class SourceContext:
    """Collects prefilters contributed by traits.

    Example:
        context = SourceContext()
        context.apply([OriginRegexFilter("feature-.*")])
        kept = context.filter_heads(source, heads)
    """

    def __init__(self) -> None:
        self._prefilters: list[HeadPrefilter] = []

    @property
    def prefilters(self) -> tuple[HeadPrefilter, ...]:
        return tuple(self._prefilters)

    def with_prefilter(self, prefilter: HeadPrefilter) -> "SourceContext":
        """Add a prefilter. Returns the context for chaining."""
        self._prefilters.append(prefilter)
        return self

    def apply(self, traits: Iterable["SourceTrait"]) -> "SourceContext":
        """Let every trait decorate this context."""
        for trait in traits:
            trait.decorate_context(self)
        return self

    def is_excluded(self, source: "SCMSource", head: "SCMHead") -> bool:
        """Check whether any prefilter excludes the head."""
        for prefilter in self._prefilters:
            if prefilter.is_excluded(source, head):
                logger.debug(
                    "Head %r excluded by %s", head.name, type(prefilter).__name__
                )
                return True
        return False

    def filter_heads(
        self,
        source: "SCMSource",
        heads: Iterable["SCMHead"],
    ) -> list["SCMHead"]:
        """Return the heads that no prefilter excludes, in input order."""
        return [head for head in heads if not self.is_excluded(source, head)]
