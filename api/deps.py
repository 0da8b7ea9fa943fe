"""FastAPI dependencies for dependency injection."""

from typing import Annotated

from fastapi import Depends

from api.config import Settings, get_settings
from worker.crawler.fetcher import Fetcher
from worker.pipeline import AnalysisPipeline
from worker.reports.exporter import ReportExporter

__all__ = ["SettingsDep", "PipelineDep", "ExporterDep"]


# Settings dependency
SettingsDep = Annotated[Settings, Depends(get_settings)]


def get_pipeline(settings: SettingsDep) -> AnalysisPipeline:
    """Build an analysis pipeline from the configured relays."""
    fetcher = Fetcher(
        relay_urls=settings.relay_urls,
        user_agent=settings.fetch_user_agent,
        request_timeout=settings.fetch_timeout_seconds,
    )
    return AnalysisPipeline(fetcher=fetcher)


PipelineDep = Annotated[AnalysisPipeline, Depends(get_pipeline)]


def get_exporter() -> ReportExporter:
    """Get the HTML report exporter."""
    return ReportExporter()


ExporterDep = Annotated[ReportExporter, Depends(get_exporter)]
