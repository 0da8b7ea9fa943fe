"""Tests for the analysis pipeline state machine."""

import httpx
import pytest

from api.exceptions import FetchError, FetchTimeoutError, ValidationError
from tests.fixtures import RELAY_TEMPLATE, relay_returning, relay_transport, scenario_a_page
from worker.crawler.fetcher import Fetcher
from worker.pipeline import (
    AnalysisPipeline,
    AnalysisRun,
    InvalidTransitionError,
    PipelineState,
)

HAPPY_PATH = [
    PipelineState.IDLE,
    PipelineState.FETCHING,
    PipelineState.PARSING,
    PipelineState.EXTRACTING,
    PipelineState.SCORING,
    PipelineState.READY,
]


def make_pipeline(transport: httpx.AsyncBaseTransport) -> AnalysisPipeline:
    return AnalysisPipeline(fetcher=Fetcher(relay_urls=[RELAY_TEMPLATE], transport=transport))


class TestAnalysisRun:
    """Tests for AnalysisRun transitions."""

    def test_starts_idle(self) -> None:
        run = AnalysisRun(address="https://example.com")
        assert run.state == PipelineState.IDLE
        assert run.history == [PipelineState.IDLE]
        assert not run.is_terminal
        assert run.failure_message is None
        assert run.error_code is None

    def test_cannot_skip_states(self) -> None:
        run = AnalysisRun(address="https://example.com")
        with pytest.raises(InvalidTransitionError):
            run.advance(PipelineState.PARSING)

    def test_can_fail_from_any_active_state(self) -> None:
        run = AnalysisRun(address="https://example.com")
        run.advance(PipelineState.FETCHING)
        run.advance(PipelineState.PARSING)
        run.fail(FetchError("https://example.com", status=500))

        assert run.state == PipelineState.FAILED
        assert run.is_terminal
        assert run.finished_at is not None
        assert run.error_code == "fetch_error"

    def test_terminal_states_are_final(self) -> None:
        run = AnalysisRun(address="https://example.com")
        run.fail(ValidationError("Please enter a valid URL"))

        with pytest.raises(InvalidTransitionError):
            run.advance(PipelineState.FETCHING)
        with pytest.raises(InvalidTransitionError):
            run.fail(ValidationError("again"))


class TestExecute:
    """Tests for AnalysisPipeline.execute."""

    @pytest.mark.asyncio
    async def test_successful_run_walks_every_state(self) -> None:
        pipeline = make_pipeline(relay_returning(scenario_a_page()))

        run = await pipeline.execute("example.com")

        assert run.state == PipelineState.READY
        assert run.history == HAPPY_PATH
        assert run.succeeded
        assert run.error is None
        assert run.report is not None
        assert run.report.url == "https://example.com"
        assert run.report.scores.seo == 100

    @pytest.mark.asyncio
    async def test_relay_404_fails_without_report(self) -> None:
        pipeline = make_pipeline(relay_returning("Not found", status_code=404))

        run = await pipeline.execute("https://example.com/missing")

        assert run.state == PipelineState.FAILED
        assert run.history == [PipelineState.IDLE, PipelineState.FETCHING, PipelineState.FAILED]
        assert run.report is None
        assert isinstance(run.error, FetchError)
        assert run.error.status == 404
        assert "404" in run.failure_message

    @pytest.mark.asyncio
    async def test_empty_address_fails_before_fetching(self) -> None:
        requests: list[httpx.Request] = []
        pipeline = make_pipeline(relay_returning(requests=requests))

        run = await pipeline.execute("")

        assert run.history == [PipelineState.IDLE, PipelineState.FAILED]
        assert run.error_code == "validation_error"
        assert requests == []

    @pytest.mark.asyncio
    async def test_garbage_markup_still_produces_report(self) -> None:
        pipeline = make_pipeline(relay_returning("<<<not really html"))

        run = await pipeline.execute("example.com")

        assert run.state == PipelineState.READY
        assert run.report is not None
        assert run.report.title == "No title found"

    @pytest.mark.asyncio
    async def test_to_dict(self) -> None:
        run = await make_pipeline(relay_returning("", status_code=500)).execute("example.com")
        data = run.to_dict()

        assert data["state"] == "failed"
        assert data["history"] == ["idle", "fetching", "failed"]
        assert data["error"]["code"] == "fetch_error"
        assert data["report"] is None


class TestAnalyze:
    """Tests for AnalysisPipeline.analyze."""

    @pytest.mark.asyncio
    async def test_returns_report(self) -> None:
        report = await make_pipeline(relay_returning(scenario_a_page())).analyze("example.com")
        assert report.recommendations == ()

    @pytest.mark.asyncio
    async def test_raises_typed_failure(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        pipeline = make_pipeline(relay_transport(handler))

        with pytest.raises(FetchTimeoutError):
            await pipeline.analyze("example.com")

    @pytest.mark.asyncio
    async def test_run_without_report_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        pipeline = make_pipeline(relay_returning(scenario_a_page()))

        async def unfinished(address: str, timeout: float | None = None) -> AnalysisRun:
            return AnalysisRun(address=address)

        monkeypatch.setattr(pipeline, "execute", unfinished)

        with pytest.raises(InvalidTransitionError, match="without a report"):
            await pipeline.analyze("example.com")

    @pytest.mark.asyncio
    async def test_runs_are_independent(self) -> None:
        pipeline = make_pipeline(relay_returning(scenario_a_page()))

        first = await pipeline.execute("example.com")
        second = await pipeline.execute("example.org")

        assert first is not second
        assert first.report.url == "https://example.com"
        assert second.report.url == "https://example.org"
