"""Data models for scmfilter."""

from scmfilter.models.head import (
    AnyHead,
    BranchHead,
    ChangeRequestHead,
    HeadParseError,
    SCMHead,
    SCMSource,
    TagHead,
    parse_head,
    parse_heads,
)
from scmfilter.models.trait_def import TraitConfig
from scmfilter.models.validation import ValidationResult

__all__ = [
    "AnyHead",
    "BranchHead",
    "ChangeRequestHead",
    "HeadParseError",
    "SCMHead",
    "SCMSource",
    "TagHead",
    "TraitConfig",
    "ValidationResult",
    "parse_head",
    "parse_heads",
]
