from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ModuleCode(BaseModel):
    code: str


class ModuleEntry(BaseModel):
    module: ModuleCode


class TypingsResponse(BaseModel):
    """Success body of GET /api/typings."""

    model_config = ConfigDict(populate_by_name=True)

    status: Literal["ok"] = "ok"
    files: dict[str, ModuleEntry]
    dropped_file_count: int | None = Field(default=None, alias="droppedFileCount")


class ErrorResponse(BaseModel):
    """Error body of GET /api/typings, always sent with HTTP 422."""

    status: Literal["error"] = "error"
    files: dict[str, ModuleEntry] = Field(default_factory=dict)
    error: str
    stack: str | None = None


class HealthResponse(BaseModel):
    status: str = "ok"


class ReadinessResponse(BaseModel):
    status: str = "ok"
    installer: str = "up"
