"""Origin branch regex filter for change requests.

This module provides OriginRegexFilter, a trait that excludes change
requests whose origin branch name does not fully match a user supplied
regular expression. Heads that are not change requests are never excluded.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from pydantic import BaseModel, ConfigDict

from scmfilter.core.context import HeadPrefilter, SourceContext
from scmfilter.core.trait import SourceTrait, TraitDescriptor
from scmfilter.models.head import ChangeRequestHead, SCMHead, SCMSource
from scmfilter.models.validation import ValidationResult

logger = logging.getLogger(__name__)


class InvalidPatternError(ValueError):
    """Raised when a regular expression is not syntactically valid.

    Attributes:
        regex: The offending regular expression.
        reason: The error message reported by the regex engine.
    """

    def __init__(self, regex: str, reason: str):
        self.regex = regex
        self.reason = reason
        super().__init__(f"Invalid regex pattern {regex!r}: {reason}")


def compile_regex(regex: str) -> re.Pattern[str]:
    """Compile a regular expression.

    Raises:
        InvalidPatternError: If the regex is not valid.
    """
    try:
        return re.compile(regex)
    except re.error as e:
        raise InvalidPatternError(regex, str(e)) from e


class _OriginPrefilter(HeadPrefilter):
    """Prefilter handed to the host; delegates to its filter."""

    def __init__(self, origin_filter: "OriginRegexFilter"):
        self._filter = origin_filter

    def is_excluded(self, source: SCMSource, head: SCMHead) -> bool:
        return self._filter.is_excluded(head)


class OriginRegexFilter(SourceTrait):
    """Excludes change requests whose origin branch does not match a regex.

    Construction is permissive: a malformed regex is stored as is and only
    fails when the pattern is first needed. Use validate() to check a regex
    before committing it.

    The compiled pattern is cached on first use. The cache is a single
    attribute holding an immutable pattern, so concurrent first callers may
    compile more than once but always end up with an equivalent matcher.

    Example:
        origin_filter = OriginRegexFilter("feature-.*")
        origin_filter.is_excluded(head)
    """

    def __init__(self, pr_origin_regex: str):
        self._pr_origin_regex = pr_origin_regex
        self._pr_origin_pattern: Optional[re.Pattern[str]] = None

    def __repr__(self) -> str:
        return f"OriginRegexFilter({self._pr_origin_regex!r})"

    def get_pr_origin_regex(self) -> str:
        """Return the origin branch regular expression as configured."""
        return self._pr_origin_regex

    def get_pattern(self) -> re.Pattern[str]:
        """Return the compiled origin branch pattern, compiling it if needed.

        Raises:
            InvalidPatternError: If the configured regex is not valid.
        """
        pattern = self._pr_origin_pattern
        if pattern is None:
            pattern = compile_regex(self._pr_origin_regex)
            logger.debug("Compiled origin pattern %r", self._pr_origin_regex)
            self._pr_origin_pattern = pattern
        return pattern

    def is_excluded(self, head: SCMHead) -> bool:
        """Check whether a head is excluded by this filter.

        Only change requests are considered; the whole origin branch name
        must match the pattern for the change request to be kept.

        Raises:
            InvalidPatternError: If the configured regex is not valid.
        """
        if not isinstance(head, ChangeRequestHead):
            return False

        excluded = self.get_pattern().fullmatch(head.origin_name) is None
        if excluded:
            logger.debug(
                "Change request %r excluded: origin %r does not match %r",
                head.name,
                head.origin_name,
                self._pr_origin_regex,
            )
        return excluded

    def decorate_context(self, context: SourceContext) -> None:
        context.with_prefilter(_OriginPrefilter(self))

    @staticmethod
    def validate(candidate_regex: str) -> ValidationResult:
        """Validate a regex without affecting any filter instance."""
        try:
            compile_regex(candidate_regex)
        except InvalidPatternError as e:
            return ValidationResult.error(e.reason)
        return ValidationResult.ok()


class OriginRegexOptions(BaseModel):
    """Configuration options accepted by OriginRegexFilter."""

    model_config = ConfigDict(extra="forbid")

    pr_origin_regex: str


class OriginRegexFilterDescriptor(TraitDescriptor):
    """Descriptor registering OriginRegexFilter with the host."""

    symbol = "RegexSCMPROriginFilter"
    display_name = "Filter by pull request origin branch name (with regular expression)"
    trait_class = OriginRegexFilter
    options_model = OriginRegexOptions

    def check_regex(self, value: str) -> ValidationResult:
        """Form validation for the regular expression."""
        return OriginRegexFilter.validate(value)
