"""
Tool declaration DTO.

Validated description of a function the model may call. The payload builder
renders it in the OpenAI ``tools`` shape; duplicate names are rejected there.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class ToolSpec(BaseModel):
    """Provider-agnostic tool specification.

    Attributes:
        name: Function name (non-empty).
        description: Human-readable description shown to the model.
        parameters: JSON Schema for the arguments object. Defaults to an empty
            object schema.
    """

    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    parameters: Dict[str, Any] = Field(default_factory=lambda: {"type": "object", "properties": {}})

    def to_openai(self) -> Dict[str, Any]:
        """Render the OpenAI ``{"type": "function", "function": {...}}`` entry."""
        function: Dict[str, Any] = {"name": self.name}
        if self.description is not None:
            function["description"] = self.description
        function["parameters"] = self.parameters
        return {"type": "function", "function": function}


__all__ = ["ToolSpec"]
