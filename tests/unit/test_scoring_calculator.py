"""Tests for the category score calculator."""

from dataclasses import replace

import pytest

from tests.fixtures import build_page, image_tags, scenario_a_page
from worker.extraction.parser import parse
from worker.extraction.signals import ImageSignal, SignalSet, extract_signals
from worker.scoring.calculator import (
    ScoreSet,
    calculate_accessibility_score,
    calculate_performance_score,
    calculate_scores,
    calculate_security_score,
    calculate_seo_score,
    round_half_up,
)


def extract(markup: str, address: str = "https://example.com") -> SignalSet:
    return extract_signals(parse(markup), markup, address)


def make_signals(**overrides) -> SignalSet:
    """Create an empty SignalSet with selected fields overridden."""
    base = SignalSet(
        title=None,
        meta_description=None,
        meta_keywords=None,
        h1_count=0,
        h2_count=0,
        h3_count=0,
        images=(),
        link_count=0,
        external_link_count=0,
        form_count=0,
        structured_data_count=0,
        canonical_url=None,
        meta_robots=None,
        has_favicon=False,
        has_viewport=False,
        is_https=False,
        content_size=0,
        word_count=0,
    )
    return replace(base, **overrides)


class TestRoundHalfUp:
    """Tests for round_half_up."""

    def test_rounds_halves_up(self) -> None:
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3
        assert round_half_up(83.5) == 84

    def test_rounds_to_nearest(self) -> None:
        assert round_half_up(2.4) == 2
        assert round_half_up(2.6) == 3
        assert round_half_up(0) == 0


class TestWellFormedPage:
    """A complete page on https scores full marks."""

    def test_with_meta_robots(self) -> None:
        signals = extract(scenario_a_page())
        scores = calculate_scores(signals)

        assert scores == ScoreSet(seo=100, security=100, accessibility=100, performance=100)
        assert signals.alt_coverage_percent == 100.0

    def test_without_meta_robots(self) -> None:
        scores = calculate_scores(extract(scenario_a_page(robots=False)))

        assert scores.seo == 85
        assert scores.security == 70
        assert scores.accessibility == 100


class TestSeoScore:
    """Tests for calculate_seo_score."""

    def test_empty_page_scores_zero(self) -> None:
        assert calculate_seo_score(make_signals()) == 0

    @pytest.mark.parametrize(
        "overrides, expected",
        [
            ({"title": "T"}, 20),
            ({"meta_description": "D"}, 20),
            ({"h1_count": 2}, 15),
            ({"canonical_url": "https://example.com/"}, 15),
            ({"meta_robots": "index"}, 15),
            ({"structured_data_count": 1}, 15),
            ({"title": "T", "meta_description": "D"}, 40),
        ],
    )
    def test_signal_weights(self, overrides: dict, expected: int) -> None:
        assert calculate_seo_score(make_signals(**overrides)) == expected

    def test_h2_alone_does_not_count(self) -> None:
        assert calculate_seo_score(make_signals(h2_count=4)) == 0


class TestSecurityScore:
    """Tests for calculate_security_score."""

    def test_http_without_robots_scores_zero(self) -> None:
        signals = extract(build_page(h1=1), "http://example.com")
        assert calculate_security_score(signals) == 0

    def test_https_only(self) -> None:
        assert calculate_security_score(make_signals(is_https=True)) == 70

    def test_robots_only(self) -> None:
        assert calculate_security_score(make_signals(meta_robots="noindex")) == 30


class TestAccessibilityScore:
    """Tests for calculate_accessibility_score."""

    def test_alt_component_caps_at_fifty(self) -> None:
        images = tuple(ImageSignal(src=None, alt_present=True) for _ in range(3))
        assert calculate_accessibility_score(make_signals(images=images)) == 50

    def test_no_images_gives_full_alt_component(self) -> None:
        assert calculate_accessibility_score(make_signals()) == 50

    def test_no_alt_text_gives_zero_alt_component(self) -> None:
        images = tuple(ImageSignal(src=None, alt_present=False) for _ in range(5))
        signals = make_signals(images=images, has_viewport=True, h3_count=1)
        assert calculate_accessibility_score(signals) == 50

    def test_partial_coverage_rounds_half_up(self) -> None:
        # 1 of 3 images -> 33.33...% alt coverage
        images = (
            ImageSignal(src=None, alt_present=True),
            ImageSignal(src=None, alt_present=False),
            ImageSignal(src=None, alt_present=False),
        )
        assert calculate_accessibility_score(make_signals(images=images)) == 33

    def test_half_point_rounds_up(self) -> None:
        # 1 of 8 images -> 12.5%
        images = (ImageSignal(src=None, alt_present=True),) + tuple(
            ImageSignal(src=None, alt_present=False) for _ in range(7)
        )
        assert calculate_accessibility_score(make_signals(images=images)) == 13

    def test_any_heading_level_counts(self) -> None:
        assert calculate_accessibility_score(make_signals(h2_count=1)) == 75


class TestPerformanceScore:
    """Tests for calculate_performance_score."""

    def test_small_page(self) -> None:
        assert calculate_performance_score(make_signals(content_size=10_000)) == 100

    @pytest.mark.parametrize(
        "size, expected",
        [
            (512 * 1024, 100),
            (512 * 1024 + 1, 85),
            (1024 * 1024, 85),
            (1024 * 1024 + 1, 70),
        ],
    )
    def test_size_thresholds(self, size: int, expected: int) -> None:
        assert calculate_performance_score(make_signals(content_size=size)) == expected

    @pytest.mark.parametrize("count, expected", [(20, 100), (21, 90), (50, 90), (51, 80)])
    def test_image_thresholds(self, count: int, expected: int) -> None:
        images = tuple(ImageSignal(src=None, alt_present=False) for _ in range(count))
        assert calculate_performance_score(make_signals(images=images)) == expected

    def test_heavy_page_with_many_images(self) -> None:
        padding = "x" * (1024 * 1024 + 10)
        markup = build_page(images=image_tags(60), body_text=padding)
        signals = extract(markup)

        assert signals.content_size > 1024 * 1024
        assert calculate_performance_score(signals) == 50
        assert signals.alt_coverage_percent == 0.0


class TestScoreSet:
    """Tests for ScoreSet and calculate_scores."""

    def test_scores_stay_in_bounds(self) -> None:
        worst = make_signals(
            content_size=10 * 1024 * 1024,
            images=tuple(ImageSignal(src=None, alt_present=False) for _ in range(500)),
        )
        best = extract(scenario_a_page())

        for signals in (worst, best, make_signals()):
            scores = calculate_scores(signals)
            for value in (scores.seo, scores.security, scores.accessibility, scores.performance):
                assert 0 <= value <= 100

    def test_scoring_is_idempotent(self) -> None:
        signals = extract(build_page(description="d", images=image_tags(3, with_alt=2)))
        assert calculate_scores(signals) == calculate_scores(signals)

    def test_average_and_to_dict(self) -> None:
        scores = ScoreSet(seo=85, security=70, accessibility=100, performance=100)
        assert scores.average == 89  # 88.75
        assert scores.to_dict() == {
            "seo": 85,
            "security": 70,
            "accessibility": 100,
            "performance": 100,
            "average": 89,
        }
