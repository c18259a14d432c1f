"""Result schemas returned by palette actions and advisor calls."""

from datetime import datetime
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, Field


class BaseResult(BaseModel):
    """Base result for every operation that must not raise."""
    timestamp: datetime = Field(default_factory=datetime.now)
    error: Optional[str] = Field(None, description="Error message when the operation failed")


class ActionResult(BaseResult):
    """Outcome of one palette action."""
    status: Literal["success", "error"]
    action: str = Field(..., description="Palette verb or built-in that ran")
    message: Optional[str] = Field(None, description="Chat line sent for this outcome")
    details: Dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == "success"

    @classmethod
    def success(cls, action: str, message: Optional[str] = None, **details: Any) -> "ActionResult":
        return cls(status="success", action=action, message=message, details=details)

    @classmethod
    def failure(cls, action: str, error: str, message: Optional[str] = None, **details: Any) -> "ActionResult":
        return cls(status="error", action=action, error=error, message=message, details=details)


class AdvisorResult(BaseResult):
    """Outcome of one advisor call."""
    status: Literal["success", "error", "disabled"]
    line: Optional[str] = Field(None, description="First line of the advisor answer")

    @property
    def ok(self) -> bool:
        return self.status == "success" and bool(self.line)
