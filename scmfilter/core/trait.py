"""Base classes for source traits and their descriptors.

A trait is a configurable piece of behaviour attached to an SCM source. It
contributes to indexing by decorating a SourceContext. Each trait class has
a descriptor that carries the metadata a host needs to offer the trait to
users: its symbol, display name, and how to build it from configuration.
"""

from __future__ import annotations

import inspect
from typing import Any, ClassVar, Optional

from pydantic import BaseModel, ValidationError

from scmfilter.core.context import SourceContext


class TraitError(Exception):
    """Base exception for trait-related errors."""


class UnknownTraitError(TraitError):
    """Raised when no descriptor is registered for a symbol."""


class TraitConfigError(TraitError):
    """Raised when a trait cannot be built from its configuration options."""


class SourceTrait:
    """Base class for traits that decorate a SourceContext.

    Subclasses override decorate_context() to add prefilters.
    """

    def decorate_context(self, context: SourceContext) -> None:
        """Decorate the context. The default does nothing."""


class TraitDescriptor:
    """Metadata and factory for a SourceTrait subclass.

    Subclasses must define:
        symbol: Unique identifier used in configuration files.
        display_name: Human-readable name.
        trait_class: The SourceTrait subclass this descriptor builds.

    Optional attributes:
        options_model: Pydantic model the configuration options are checked
            against. Without one, only the option names are checked.
    """

    symbol: ClassVar[str] = ""
    display_name: ClassVar[str] = ""
    trait_class: ClassVar[type[SourceTrait]] = SourceTrait
    options_model: ClassVar[Optional[type[BaseModel]]] = None

    def create(self, **options: Any) -> SourceTrait:
        """Build a trait from configuration options.

        Raises:
            TraitConfigError: If the options do not fit the trait constructor.
        """
        if self.options_model is not None:
            try:
                validated = self.options_model.model_validate(options)
            except ValidationError as e:
                raise TraitConfigError(f"Invalid options for '{self.symbol}': {e}") from e
            return self.trait_class(**validated.model_dump())

        signature = inspect.signature(self.trait_class)
        try:
            signature.bind(**options)
        except TypeError as e:
            raise TraitConfigError(f"Invalid options for '{self.symbol}': {e}") from e
        return self.trait_class(**options)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(symbol={self.symbol!r})"
