"""Pydantic schemas for YAML graph files."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class EdgeSchema(BaseModel):
    """Schema for one activity.

    Values are kept loose on purpose: range checks (non-negative weight, no
    self-loop) belong to ``Graph.add_edge``.
    """

    model_config = ConfigDict(populate_by_name=True)

    from_node: str = Field(alias="from")
    to_node: str = Field(alias="to")
    weight: Any

    @field_validator("from_node", "to_node", mode="before")
    @classmethod
    def coerce_name(cls, v: Any) -> str:
        """Allow bare numbers as node names."""
        if v is None:
            return ""
        return str(v)


class GraphSchema(BaseModel):
    """Schema for the entire graph file."""

    nodes: list[str] = Field(default_factory=list)
    edges: list[EdgeSchema] = Field(default_factory=list)

    @field_validator("nodes", mode="before")
    @classmethod
    def ensure_list(cls, v: Any) -> list[str]:
        """Ensure value is a list of strings."""
        if v is None:
            return []
        if isinstance(v, list):
            return ["" if item is None else str(item) for item in v]  # type: ignore[misc]
        return [str(v)]
