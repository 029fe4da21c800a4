"""Form validation results returned to the host's configuration UI."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, model_validator


class ValidationResult(BaseModel):
    """Outcome of validating a user-supplied configuration value.

    Attributes:
        kind: "ok", "warning" or "error".
        message: Human-readable explanation. Always set for errors.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["ok", "warning", "error"]
    message: Optional[str] = None

    @model_validator(mode="after")
    def _error_has_message(self) -> "ValidationResult":
        if self.kind == "error" and not self.message:
            raise ValueError("error results require a message")
        return self

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(kind="ok")

    @classmethod
    def warning(cls, message: str) -> "ValidationResult":
        return cls(kind="warning", message=message)

    @classmethod
    def error(cls, message: str) -> "ValidationResult":
        return cls(kind="error", message=message)

    @property
    def is_ok(self) -> bool:
        return self.kind == "ok"
