from typing import Any, Dict, Literal, Optional
from pydantic import BaseModel


ErrorType = Literal["validation", "duplicate_email", "not_found", "internal"]


class ActionResult(BaseModel):
    """Outcome of a server-side mutation."""
    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None
    errors: Optional[Dict[str, str]] = None
    error_type: Optional[ErrorType] = None

    @classmethod
    def ok(cls, data: Any = None) -> "ActionResult":
        return cls(success=True, data=data)

    @classmethod
    def fail(
        cls,
        error: str,
        *,
        error_type: ErrorType,
        errors: Optional[Dict[str, str]] = None,
    ) -> "ActionResult":
        return cls(success=False, error=error, error_type=error_type, errors=errors)
