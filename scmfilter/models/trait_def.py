"""TraitConfig data model for scmfilter.

A TraitConfig is one entry of the ``[[traits]]`` array in a configuration
file: the symbol of the trait to apply plus its constructor options.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class TraitConfig(BaseModel):
    """A configured trait.

    Attributes:
        symbol: Symbol the trait descriptor is registered under
            (e.g. "RegexSCMPROriginFilter").
        enabled: Whether the trait is applied.
        options: Keyword options passed to the trait constructor.
    """

    model_config = ConfigDict(frozen=True)

    symbol: str
    enabled: bool = True
    options: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> "TraitConfig":
        """Create a TraitConfig from a TOML table.

        Keys other than ``symbol`` and ``enabled`` become options.
        """
        data = dict(data)
        symbol = data.pop("symbol", None)
        enabled = data.pop("enabled", True)
        return cls(symbol=symbol, enabled=enabled, options=data)
