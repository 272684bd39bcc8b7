"""Design-to-Code API endpoints.

Backs the "design to code" control panel: analyze a canvas scene into
recognized UI components, generate the page source, or export the
deployment skeleton. All endpoints are synchronous request/response;
analysis runs in batches on the event loop with a timeout.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, HTTPException

from designbridge.config import ANALYSIS_TIMEOUT
from designbridge.errors import AnalysisCancelled
from designbridge.export import build_project_files, to_package_name
from designbridge.inference import (
    AnalysisResult,
    ComponentType,
    analyze_async,
    render_application,
    summarize_components,
)
from designbridge.inference.classifiers import DEFAULT_STRATEGIES, strategy_names

from .design_schemas import (
    AnalyzeResponse,
    ComponentSummary,
    ExportRequest,
    ExportResponse,
    GenerateResponse,
    PatternListResponse,
    ProjectFileEntry,
    SceneRequest,
)

logger = logging.getLogger("api.design_to_code")

router = APIRouter(prefix="/api/v2/design-to-code", tags=["design-to-code"])


async def _run_analysis(payload: SceneRequest, timeout: Optional[float] = None) -> AnalysisResult:
    """Run batched analysis; timeouts and cancellation surface as 503."""
    try:
        return await asyncio.wait_for(
            analyze_async(
                payload.objects,
                canvas_width=payload.canvas_width,
                layout=payload.layout,
            ),
            timeout=timeout if timeout is not None else ANALYSIS_TIMEOUT,
        )
    except asyncio.TimeoutError:
        logger.warning("Analysis of %d objects timed out", len(payload.objects))
        raise HTTPException(status_code=503, detail="Design analysis timed out")
    except AnalysisCancelled as e:
        raise HTTPException(status_code=503, detail=str(e))


def _summary(result: AnalysisResult) -> ComponentSummary:
    return ComponentSummary(**summarize_components(result.components))


# --- Endpoints ---


@router.get("/patterns", response_model=PatternListResponse)
async def list_patterns():
    """Pattern strategies in the order they are tried."""
    generic = [ComponentType.TEXT, ComponentType.IMAGE, ComponentType.CONTAINER]
    return PatternListResponse(
        priority=strategy_names(DEFAULT_STRATEGIES),
        fallback=[t.value for t in generic],
    )


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze_scene(payload: SceneRequest):
    """Classify a canvas scene into UI components.

    Usage:
        POST /api/v2/design-to-code/analyze
        { "objects": [{"type": "rect", "left": 0, "top": 0, "width": 1200, "height": 64}],
          "canvas_width": 1200 }
    """
    result = await _run_analysis(payload)
    summary = _summary(result)
    logger.info("analyze: %d objects → %d components", len(payload.objects), summary.total)
    return AnalyzeResponse(
        components=[c.to_dict() for c in result.components],
        summary=summary,
        claims=result.claims,
    )


@router.post("/generate", response_model=GenerateResponse)
async def generate_code(payload: SceneRequest):
    """Generate the full page source for a canvas scene."""
    result = await _run_analysis(payload)
    code = render_application(c.code for c in result.components)
    return GenerateResponse(code=code, summary=_summary(result))


@router.post("/export", response_model=ExportResponse)
async def export_project(payload: ExportRequest):
    """Generate the page and wrap it in the deployable project skeleton.

    The deployment collaborator uploads these files; nothing is written here.
    """
    result = await _run_analysis(payload)
    code = render_application(c.code for c in result.components)
    files = build_project_files(code, project_name=payload.project_name)
    logger.info("export: %s (%d files)", payload.project_name, len(files))
    return ExportResponse(
        project_name=to_package_name(payload.project_name),
        files=[
            ProjectFileEntry(path=path, content=content, size=len(content.encode("utf-8")))
            for path, content in files.items()
        ],
        summary=_summary(result),
    )
