"""Website analysis endpoints."""

import structlog
from fastapi import APIRouter, Response

from api.deps import ExporterDep, PipelineDep, SettingsDep
from api.schemas.analysis import AnalysisReportResponse, AnalyzeRequest
from api.schemas.responses import DataResponse, ErrorResponse

router = APIRouter(prefix="/analyze", tags=["Analysis"])
logger = structlog.get_logger(__name__)

_ERROR_RESPONSES: dict[int | str, dict] = {
    422: {"model": ErrorResponse, "description": "Invalid address"},
    502: {"model": ErrorResponse, "description": "Relay could not retrieve the page"},
    504: {"model": ErrorResponse, "description": "Fetch deadline exceeded"},
}


@router.post(
    "",
    response_model=DataResponse[AnalysisReportResponse],
    responses=_ERROR_RESPONSES,
)
async def analyze_website(
    request: AnalyzeRequest,
    pipeline: PipelineDep,
    settings: SettingsDep,
) -> dict:
    """
    Analyse one website and return its report.

    Failures are raised as BenchmarkError subclasses and rendered by the
    application's error handler.
    """
    timeout = request.timeout_seconds or settings.analysis_timeout_seconds
    report = await pipeline.analyze(request.url, timeout=timeout)
    return {"data": report.to_dict()}


@router.post(
    "/export",
    response_class=Response,
    responses={
        200: {"content": {"text/html": {}}, "description": "Standalone HTML report"},
        **_ERROR_RESPONSES,
    },
)
async def export_website_report(
    request: AnalyzeRequest,
    pipeline: PipelineDep,
    exporter: ExporterDep,
    settings: SettingsDep,
) -> Response:
    """Analyse one website and download the report as a standalone HTML file."""
    timeout = request.timeout_seconds or settings.analysis_timeout_seconds
    report = await pipeline.analyze(request.url, timeout=timeout)
    document = exporter.export(report)

    logger.info("report_exported", url=report.url, filename=document.filename)

    return Response(
        content=document.content_bytes,
        media_type=f"{document.media_type}; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{document.filename}"'},
    )
