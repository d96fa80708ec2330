"""Tool catalog and tool-call envelope models."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class ToolDefinition(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    description: str
    input_schema: dict[str, Any] = Field(alias="inputSchema")

    def required_arguments(self) -> list[str]:
        return list(self.input_schema.get("required", []))


class ToolContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ToolCallResponse(BaseModel):
    """Success envelope: text carries the JSON-serialized tool payload."""

    content: list[ToolContent]


class ToolListResponse(BaseModel):
    tools: list[ToolDefinition]
