"""Pydantic schemas for Design-to-Code API endpoints."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from designbridge.config import MAX_SCENE_OBJECTS


class SceneRequest(BaseModel):
    """Request for POST /api/v2/design-to-code/{analyze,generate}.

    ``objects`` is passed through untyped so malformed canvas objects still
    reach the tolerant scene reader instead of failing validation.
    """
    objects: List[Any] = Field(
        default_factory=list,
        description="Top-level canvas objects in render order (Fabric.js JSON or normalized nodes)",
    )
    canvas_width: Optional[float] = Field(
        None, gt=0, description="Canvas width in px; defaults to DEFAULT_CANVAS_WIDTH",
    )
    layout: Optional[Literal["none", "row", "column"]] = Field(
        None, description="Layout grouping mode; defaults to LAYOUT_GROUPING",
    )

    @field_validator("objects")
    @classmethod
    def validate_scene_size(cls, objects: List[Any]) -> List[Any]:
        if len(objects) > MAX_SCENE_OBJECTS:
            raise ValueError(
                f"Scene has {len(objects)} top-level objects; limit is {MAX_SCENE_OBJECTS}"
            )
        return objects


class ExportRequest(SceneRequest):
    """Request for POST /api/v2/design-to-code/export."""
    project_name: str = Field("designer-app", min_length=1, max_length=100)


class ComponentSummary(BaseModel):
    total: int = 0
    by_type: Dict[str, int] = Field(default_factory=dict)


class AnalyzeResponse(BaseModel):
    """Response for POST /api/v2/design-to-code/analyze."""
    components: List[Dict[str, Any]] = Field(default_factory=list)
    summary: ComponentSummary
    claims: Dict[str, str] = Field(
        default_factory=dict, description="Scene node id → owning component id",
    )


class GenerateResponse(BaseModel):
    """Response for POST /api/v2/design-to-code/generate."""
    code: str
    summary: ComponentSummary


class ProjectFileEntry(BaseModel):
    """Single file entry in the export response."""
    path: str = Field(..., description="Relative path inside the generated project")
    content: str = Field(..., description="File content as text")
    size: int = Field(..., description="File size in bytes")


class ExportResponse(BaseModel):
    """Response for POST /api/v2/design-to-code/export."""
    project_name: str
    files: List[ProjectFileEntry]
    summary: ComponentSummary


class PatternListResponse(BaseModel):
    """Response for GET /api/v2/design-to-code/patterns."""
    priority: List[str] = Field(..., description="Pattern strategies in evaluation order")
    fallback: List[str] = Field(..., description="Generic component types")
