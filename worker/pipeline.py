"""Analysis pipeline.

Runs one analysis end to end: fetch, parse, extract, score, assemble.
Only the fetch suspends; every later step is synchronous and pure. The
pipeline keeps no state between invocations. Each call gets its own
AnalysisRun, and a failed run never carries a partial report.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum

import structlog

from api.exceptions import BenchmarkError
from worker.crawler.fetcher import Fetcher
from worker.crawler.url import normalize_address
from worker.extraction.parser import parse
from worker.extraction.signals import extract_signals
from worker.fixes.recommendations import generate_recommendations
from worker.reports.assembler import ReportAssembler
from worker.reports.contract import AnalysisReport
from worker.scoring.calculator import calculate_scores

logger = structlog.get_logger(__name__)


class PipelineState(str, Enum):
    """States of a single analysis run."""

    IDLE = "idle"
    FETCHING = "fetching"
    PARSING = "parsing"
    EXTRACTING = "extracting"
    SCORING = "scoring"
    READY = "ready"
    FAILED = "failed"


# Forward path; FAILED is reachable from any non-terminal state
_NEXT_STATE = {
    PipelineState.IDLE: PipelineState.FETCHING,
    PipelineState.FETCHING: PipelineState.PARSING,
    PipelineState.PARSING: PipelineState.EXTRACTING,
    PipelineState.EXTRACTING: PipelineState.SCORING,
    PipelineState.SCORING: PipelineState.READY,
}

TERMINAL_STATES = frozenset([PipelineState.READY, PipelineState.FAILED])


class InvalidTransitionError(RuntimeError):
    """Raised when a run is moved along an edge the state machine lacks."""


@dataclass
class AnalysisRun:
    """One invocation of the pipeline and where it got to."""

    address: str
    state: PipelineState = PipelineState.IDLE
    report: AnalysisReport | None = None
    error: BenchmarkError | None = None
    history: list[PipelineState] = field(default_factory=lambda: [PipelineState.IDLE])
    started_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    finished_at: datetime | None = None

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_STATES

    @property
    def succeeded(self) -> bool:
        return self.state == PipelineState.READY

    @property
    def failure_message(self) -> str | None:
        return self.error.message if self.error else None

    @property
    def error_code(self) -> str | None:
        return self.error.code if self.error else None

    def advance(self, state: PipelineState) -> None:
        """Move to ``state``, enforcing the state machine."""
        if self.is_terminal:
            raise InvalidTransitionError(f"Run already finished in state {self.state.value}")
        if state != PipelineState.FAILED and _NEXT_STATE.get(self.state) != state:
            raise InvalidTransitionError(
                f"Cannot move from {self.state.value} to {state.value}"
            )

        logger.debug(
            "pipeline_state_changed",
            address=self.address,
            from_state=self.state.value,
            to_state=state.value,
        )
        self.state = state
        self.history.append(state)
        if self.is_terminal:
            self.finished_at = datetime.now(UTC)

    def complete(self, report: AnalysisReport) -> None:
        self.advance(PipelineState.READY)
        self.report = report

    def fail(self, error: BenchmarkError) -> None:
        self.advance(PipelineState.FAILED)
        self.error = error
        self.report = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "address": self.address,
            "state": self.state.value,
            "history": [s.value for s in self.history],
            "started_at": self.started_at.isoformat(),
            "finished_at": self.finished_at.isoformat() if self.finished_at else None,
            "error": (
                {"code": self.error.code, "message": self.error.message}
                if self.error
                else None
            ),
            "report": self.report.to_dict() if self.report else None,
        }


class AnalysisPipeline:
    """Turns an address into an AnalysisReport."""

    def __init__(
        self,
        fetcher: Fetcher | None = None,
        assembler: ReportAssembler | None = None,
    ):
        self.fetcher = fetcher or Fetcher()
        self.assembler = assembler or ReportAssembler()

    async def execute(self, address: str, timeout: float | None = None) -> AnalysisRun:
        """
        Run an analysis and return the finished run.

        Domain failures do not raise; they leave the run in FAILED with the
        originating error attached.

        Args:
            address: Target address as supplied by the caller
            timeout: Optional deadline in seconds for the fetch

        Returns:
            AnalysisRun in READY or FAILED state
        """
        run = AnalysisRun(address=address)

        try:
            url = normalize_address(address)
            run.address = url

            run.advance(PipelineState.FETCHING)
            markup = await self.fetcher.fetch(url, timeout=timeout)

            run.advance(PipelineState.PARSING)
            soup = parse(markup)

            run.advance(PipelineState.EXTRACTING)
            signals = extract_signals(soup, markup, url)

            run.advance(PipelineState.SCORING)
            scores = calculate_scores(signals)
            recommendations = generate_recommendations(scores, signals)
            report = self.assembler.assemble(url, signals, scores, recommendations)

        except BenchmarkError as e:
            run.fail(e)
            logger.warning(
                "analysis_failed",
                address=run.address,
                error_code=e.code,
                message=e.message,
            )
            return run

        run.complete(report)
        logger.info(
            "analysis_completed",
            address=run.address,
            seo=report.scores.seo,
            security=report.scores.security,
            accessibility=report.scores.accessibility,
            performance=report.scores.performance,
            recommendations=len(report.recommendations),
        )
        return run

    async def analyze(self, address: str, timeout: float | None = None) -> AnalysisReport:
        """
        Run an analysis and return its report.

        Raises:
            ValidationError: If the address is empty
            FetchError: If the markup could not be retrieved
            FetchTimeoutError: If the deadline passed
        """
        run = await self.execute(address, timeout=timeout)
        if run.error is not None:
            raise run.error
        if run.report is None:
            raise InvalidTransitionError(
                f"Run for {address!r} ended in {run.state.value} without a report"
            )
        return run.report


async def analyze_website(address: str, timeout: float | None = None) -> AnalysisReport:
    """
    Convenience function to analyse one address with default collaborators.

    Args:
        address: Target address
        timeout: Optional deadline in seconds

    Returns:
        AnalysisReport
    """
    return await AnalysisPipeline().analyze(address, timeout=timeout)
