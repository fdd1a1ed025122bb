"""Jira API response models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class IdOnly(BaseModel):
    id: str


class Status(BaseModel):
    id: str
    name: str


class IssueFields(BaseModel):
    summary: str = ""
    description: Any = None  # ADF document on API v3, plain string on older sites
    status: Status


class Issue(BaseModel):
    key: str
    fields: IssueFields


class SearchResponse(BaseModel):
    issues: list[Issue] = Field(default_factory=list)


class Transition(BaseModel):
    id: str
    to: Status


class TransitionsResponse(BaseModel):
    transitions: list[Transition] = Field(default_factory=list)


class BoardColumn(BaseModel):
    name: str
    statuses: list[IdOnly] = Field(default_factory=list)


class ColumnConfig(BaseModel):
    columns: list[BoardColumn] = Field(default_factory=list)


class BoardFilter(BaseModel):
    id: str


class BoardConfigResponse(BaseModel):
    """Response of /rest/agile/1.0/board/{id}/configuration."""

    model_config = {"populate_by_name": True}

    column_config: ColumnConfig = Field(alias="columnConfig")
    filter: BoardFilter


class BoardConfigMap(BaseModel):
    """Board columns in display order, with the status IDs each one holds."""

    order: list[str] = Field(default_factory=list)
    column_to_status: dict[str, list[str]] = Field(default_factory=dict)

    @classmethod
    def from_config(cls, cfg: BoardConfigResponse) -> BoardConfigMap:
        mapping = cls()
        for col in cfg.column_config.columns:
            if col.name not in mapping.order:
                mapping.order.append(col.name)
            status_ids = mapping.column_to_status.setdefault(col.name, [])
            for status in col.statuses:
                if status.id not in status_ids:
                    status_ids.append(status.id)
        return mapping

    @property
    def status_to_column(self) -> dict[str, str]:
        """Reverse mapping: status ID -> column name."""
        return {
            status_id: column
            for column, status_ids in self.column_to_status.items()
            for status_id in status_ids
        }
