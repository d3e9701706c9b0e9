"""Pydantic models for calculate requests and responses."""
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class CalculateRequest(BaseModel):
    """
    Represents a single calculate request sent to the server.

    Fields are kept as raw JSON values: operands are converted and the
    operation is checked by the calculator, in that order.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    operation: Any = Field(default=None, description="Operation name, 'add' or 'subtract'")
    left: Any = Field(default=None, description="Left operand, a number or numeric string")
    right: Any = Field(default=None, description="Right operand, a number or numeric string")


class CalculateResponse(BaseModel):
    """Represents the outcome of a calculate request: a result or an error."""

    result: Optional[Union[int, float]] = Field(default=None, description="Computed numeric result")
    error: Optional[str] = Field(default=None, description="Human-readable error message")

    def to_json(self) -> dict:
        """Return only the fields that were explicitly set."""
        return self.model_dump(exclude_unset=True)
