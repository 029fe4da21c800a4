"""SCM head and source data models for scmfilter.

These models stand in for the objects an SCM indexing host hands to
prefilters: the source being indexed and each head discovered in it.
Change requests are the only heads that carry an origin branch name.
"""

from __future__ import annotations

import json
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError


class HeadParseError(ValueError):
    """Raised when a head cannot be parsed from its serialized form.

    Attributes:
        line: Line number of the offending record (1-indexed), if known.
    """

    def __init__(self, message: str, line: Optional[int] = None):
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class SCMSource(BaseModel):
    """The source (repository) a head was discovered in."""

    model_config = ConfigDict(frozen=True)

    id: str = "default"
    remote: Optional[str] = None


class SCMHead(BaseModel):
    """A named reference point being considered for indexing.

    Attributes:
        name: Name of the head as shown by the host (e.g. "main", "PR-12").
    """

    model_config = ConfigDict(frozen=True)

    name: str


class BranchHead(SCMHead):
    """A plain branch."""

    kind: Literal["branch"] = "branch"


class TagHead(SCMHead):
    """A tag, optionally with its creation timestamp in milliseconds."""

    kind: Literal["tag"] = "tag"
    timestamp: Optional[int] = None


class ChangeRequestHead(SCMHead):
    """A change request (pull or merge request).

    Attributes:
        id: Identifier of the change request in the SCM (e.g. "12").
        target: Name of the branch the change request would merge into.
        origin_name: Name of the branch the changes originate from.
        origin_owner: Owner of the fork carrying the origin branch, if any.
    """

    kind: Literal["change_request"] = "change_request"
    id: str
    target: str
    origin_name: str
    origin_owner: Optional[str] = None

    @property
    def is_fork(self) -> bool:
        """Whether the origin branch lives in a fork."""
        return self.origin_owner is not None


AnyHead = Annotated[
    Union[BranchHead, TagHead, ChangeRequestHead],
    Field(discriminator="kind"),
]

_head_adapter: TypeAdapter[AnyHead] = TypeAdapter(AnyHead)


def parse_head(data: dict) -> SCMHead:
    """Build a head from a dictionary with a ``kind`` discriminator.

    Raises:
        HeadParseError: If the dictionary does not describe a known head.
    """
    try:
        return _head_adapter.validate_python(data)
    except ValidationError as e:
        raise HeadParseError(str(e)) from e


def parse_heads(text: str) -> list[SCMHead]:
    """Parse heads from JSON lines text.

    Blank lines and lines starting with ``#`` are ignored.

    Raises:
        HeadParseError: If a line is not valid JSON or not a known head.
    """
    heads: list[SCMHead] = []
    for line_num, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        try:
            data = json.loads(stripped)
        except json.JSONDecodeError as e:
            raise HeadParseError(f"invalid JSON: {e}", line=line_num) from e
        if not isinstance(data, dict):
            raise HeadParseError("expected a JSON object", line=line_num)
        try:
            heads.append(_head_adapter.validate_python(data))
        except ValidationError as e:
            raise HeadParseError(str(e), line=line_num) from e
    return heads
