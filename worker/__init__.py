"""Website Benchmark - analysis engine package."""

# Lazy imports keep `import worker` cheap for the API process
# Use explicit imports when these are needed:
# from worker.pipeline import AnalysisPipeline, AnalysisRun, PipelineState, analyze_website

__all__ = [
    "AnalysisPipeline",
    "AnalysisRun",
    "PipelineState",
    "analyze_website",
]


from typing import Any


def __getattr__(name: str) -> Any:
    """Lazy import for the analysis pipeline."""
    if name in __all__:
        from worker import pipeline

        return getattr(pipeline, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
